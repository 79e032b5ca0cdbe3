"""
This module defines the specialized value-types that the tree-walker operates in terms of.
Basic primitive values play themselves, but closures need more help.
"""
from .. import syntax
from .types import LambValue, VALUE, ENV
from .evaluator import evaluate

class Closure(LambValue):
	"""
	The run-time manifestation of a lambda: a callable value tied to its natal environment.
	The environment is shared, not copied. Bindings that the natal scope acquires
	after the closure is made are therefore visible when the closure runs,
	which is how a named function gets to call itself.
	"""

	def __init__(self, param:str, body:syntax.Expr, static_link:ENV):
		self.param = param
		self.body = body
		self.static_link = static_link

	def __str__(self):
		return "lambda (%s)" % self.param

	def apply(self, arg: VALUE) -> VALUE:
		inner = self.static_link.child()
		inner.define(self.param, arg)
		return evaluate(self.body, inner)

def render_value(value:VALUE) -> str:
	if isinstance(value, bool): return "true" if value else "false"
	return str(value)

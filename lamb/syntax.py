"""
The set of parse-nodes in simple form.
A parser calls these constructors with subordinate semantic-values in a bottom-up tree transduction.
Operator glyphs are resolved to members of a closed enumeration right then, once,
so neither the type-checker nor the evaluator ever compares strings.

Each node renders itself in the surface syntax, so that whatever prints
a tree could be fed back through a conformant parser to get an equal tree.
"""
from enum import Enum
from typing import Optional, Sequence, Union
from .ontology import Expr
from .algebra import LambType, render_annotation

class BinaryOperator(Enum):
	PLUS = "+"
	MINUS = "-"
	TIMES = "*"
	DIVIDE = "/"
	EQ = "=="
	NE = "!="
	LT = "<"
	GT = ">"
	LE = "<="
	GE = ">="
	AND = "&&"
	OR = "||"
	def __str__(self): return self.value
	def is_arithmetic(self): return self in ARITHMETIC
	def is_comparison(self): return self in COMPARISON
	def is_logical(self): return self in LOGICAL

ARITHMETIC = frozenset([BinaryOperator.PLUS, BinaryOperator.MINUS, BinaryOperator.TIMES, BinaryOperator.DIVIDE])
COMPARISON = frozenset([
	BinaryOperator.EQ, BinaryOperator.NE,
	BinaryOperator.LT, BinaryOperator.GT, BinaryOperator.LE, BinaryOperator.GE,
])
LOGICAL = frozenset([BinaryOperator.AND, BinaryOperator.OR])

class UnaryOperator(Enum):
	NEGATE = "-"
	NOT = "!"
	def __str__(self): return self.value

###############################################################################

class Literal(Expr):
	__slots__ = ("value",)
	def __init__(self, value:Union[int, bool]):
		assert isinstance(value, int), type(value)  # bool is a kind of int, too.
		# The surface syntax spells a negative number as negation applied to a literal.
		if value < 0: raise ValueError("Negative literal; use unary minus", value)
		self.value = value
	def _key(self): return type(self.value), self.value
	def __str__(self):
		if isinstance(self.value, bool): return "true" if self.value else "false"
		return str(self.value)

class Lookup(Expr):
	__slots__ = ("name",)
	def __init__(self, name:str):
		assert isinstance(name, str), type(name)
		self.name = name
	def _key(self): return self.name,
	def __str__(self): return self.name

class Program(Expr):
	"""
	A sequence of bindings followed by the expression that gives the sequence its value.
	This is both the root of a whole script and the inside of every {block}.
	"""
	__slots__ = ("bindings", "result")
	def __init__(self, bindings:Sequence[Expr], result:Expr):
		self.bindings = tuple(bindings)
		self.result = result
	def _key(self): return self.bindings, self.result
	def __str__(self): return " ".join([*map(str, self.bindings), str(self.result)])

class BinExp(Expr):
	__slots__ = ("op", "lhs", "rhs")
	def __init__(self, op:BinaryOperator, lhs:Expr, rhs:Expr):
		assert isinstance(op, BinaryOperator), op
		self.op, self.lhs, self.rhs = op, lhs, rhs
	def _key(self): return self.op, self.lhs, self.rhs
	def __str__(self): return "(%s %s %s)" % (self.lhs, self.op, self.rhs)

class UnaryExp(Expr):
	__slots__ = ("op", "arg")
	def __init__(self, op:UnaryOperator, arg:Expr):
		assert isinstance(op, UnaryOperator), op
		self.op, self.arg = op, arg
	def _key(self): return self.op, self.arg
	def __str__(self): return "%s%s" % (self.op, _operand(self.arg))

class Cond(Expr):
	__slots__ = ("if_part", "then_part", "else_part")
	def __init__(self, if_part:Expr, then_part:Expr, else_part:Expr):
		self.if_part, self.then_part, self.else_part = if_part, then_part, else_part
	def _key(self): return self.if_part, self.then_part, self.else_part
	def __str__(self):
		return "if (%s) { %s } else { %s }" % (self.if_part, self.then_part, self.else_part)

class Binding(Expr):
	"""
	Gives a name to a value for the rest of the enclosing sequence.
	The declared type is optional; None means the programmer did not say.
	"""
	__slots__ = ("name", "declared", "expr")
	def __init__(self, name:str, declared:Optional[LambType], expr:Expr):
		self.name, self.declared, self.expr = name, declared, expr
	def _key(self): return self.name, self.declared, self.expr
	def __str__(self): return "let %s%s = %s;" % (self.name, _annotation(self.declared), self.expr)

class LambdaForm(Expr):
	__slots__ = ("param", "declared", "body")
	def __init__(self, param:str, declared:Optional[LambType], body:Expr):
		self.param, self.declared, self.body = param, declared, body
	def _key(self): return self.param, self.declared, self.body
	def __str__(self): return "lambda (%s%s) { %s }" % (self.param, _annotation(self.declared), self.body)

class Call(Expr):
	__slots__ = ("fn_exp", "arg")
	def __init__(self, fn_exp:Expr, arg:Expr):
		self.fn_exp, self.arg = fn_exp, arg
	def _key(self): return self.fn_exp, self.arg
	def __str__(self):
		callee = str(self.fn_exp)
		if not isinstance(self.fn_exp, (Lookup, Call)): callee = "(%s)"%callee
		return "%s(%s)" % (callee, self.arg)

def _annotation(declared:Optional[LambType]) -> str:
	return "" if declared is None else ": " + render_annotation(declared)

def _operand(arg:Expr) -> str:
	# Unary operators bind tighter than anything but application and primaries.
	if isinstance(arg, (Cond, LambdaForm, Program, Binding)): return "(%s)"%arg
	return str(arg)

VALUE_EXPRESSION = Union[Literal, Lookup, Program, BinExp, UnaryExp, Cond, Binding, LambdaForm, Call]

###############################################################################
#
# Conveniences for building trees by hand, about the way a parser would.
#

def program(*items:Expr) -> Program:
	""" The last item is the result; all the others are bindings. """
	assert items
	return Program(items[:-1], items[-1])

def let(name:str, expr:Expr, declared:Optional[LambType]=None) -> Binding:
	return Binding(name, declared, expr)

def lam(param:str, body:Expr, declared:Optional[LambType]=None) -> LambdaForm:
	return LambdaForm(param, declared, body)

def call(fn_exp:Expr, *args:Expr) -> Expr:
	""" Application is curried: f(a)(b) is call(f, a, b). """
	for a in args:
		fn_exp = Call(fn_exp, a)
	return fn_exp

def binary(glyph:str, lhs:Expr, rhs:Expr) -> BinExp:
	return BinExp(BinaryOperator(glyph), lhs, rhs)

def unary(glyph:str, arg:Expr) -> UnaryExp:
	return UnaryExp(UnaryOperator(glyph), arg)

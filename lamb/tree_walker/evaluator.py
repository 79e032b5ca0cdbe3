"""
The generic machinery that everything needs,
without the specific methods corresponding to particular syntax.
"""

from .. import syntax
from ..ontology import Mishap
from .types import VALUE, ENV


def evaluate(expr:syntax.VALUE_EXPRESSION, frame:ENV) -> VALUE:
	try: fn = EVALUATE[type(expr)]
	except KeyError: raise NotImplementedError(type(expr), expr)
	return fn(expr, frame)

EVALUATE = {}

def attach_evaluation_methods(python_scope):
	for _k, _v in list(python_scope.items()):
		if _k.startswith("_eval_"):
			_t = _v.__annotations__["expr"]
			assert isinstance(_t, type), (_k, _t)
			EVALUATE[_t] = _v

###############################################################################

class EvaluationFailure(Mishap):
	""" The evaluator checks only the shapes of values, never declared types. """

class UndefinedName(EvaluationFailure):
	kind = "undefined variable"
	gripe = "Nothing called '%s' is defined here."

class NotAnInteger(EvaluationFailure):
	kind = "non-int operand"
	gripe = "This needs integers, but got %s."

class NotAFlag(EvaluationFailure):
	kind = "non-bool operand"
	gripe = "This needs true or false, but got %s."

class NonBoolCondition(EvaluationFailure):
	kind = "non-bool condition"
	gripe = "A condition must come out true or false, not %s."

class NotAClosure(EvaluationFailure):
	kind = "non-function application"
	gripe = "Only a lambda can be applied, not %s."

class DivisionByZero(EvaluationFailure):
	kind = "division by zero"
	gripe = "Tried to divide %s by zero."

class StackExhausted(EvaluationFailure):
	kind = "stack exhausted"
	gripe = "Recursion went too deep; the host stack ran out."

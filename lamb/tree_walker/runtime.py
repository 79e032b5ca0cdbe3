import operator
from .. import syntax
from ..syntax import BinaryOperator, UnaryOperator
from ..scope import Absent
from .types import ENV, VALUE
from .evaluator import (
	evaluate, attach_evaluation_methods,
	UndefinedName, NotAnInteger, NotAFlag, NonBoolCondition, NotAClosure, DivisionByZero,
)
from .values import Closure, render_value

# Integers are Python's own, so nothing here wraps around at 64 bits; results just get bigger.

def _divide(a:int, b:int) -> int:
	# Truncates toward zero, as machine division does. Python's // floors instead.
	q = abs(a) // abs(b)
	return q if (a < 0) == (b < 0) else -q

PRIMITIVE_BINARY = {
	BinaryOperator.PLUS : operator.add,
	BinaryOperator.MINUS : operator.sub,
	BinaryOperator.TIMES : operator.mul,
	BinaryOperator.DIVIDE : _divide,
	BinaryOperator.EQ : operator.eq,
	BinaryOperator.NE : operator.ne,
	BinaryOperator.LT : operator.lt,
	BinaryOperator.GT : operator.gt,
	BinaryOperator.LE : operator.le,
	BinaryOperator.GE : operator.ge,
	BinaryOperator.AND : operator.and_,
	BinaryOperator.OR : operator.or_,
}
PRIMITIVE_UNARY = {
	UnaryOperator.NEGATE : operator.neg,
	UnaryOperator.NOT : operator.not_,
}

def _is_int(v:VALUE): return type(v) is int  # Not bool, which Python counts as an int.
def _is_flag(v:VALUE): return type(v) is bool

###############################################################################

def _eval_literal(expr:syntax.Literal, frame:ENV):
	return expr.value

def _eval_lookup(expr:syntax.Lookup, frame:ENV):
	try: return frame.lookup(expr.name)
	except Absent: raise UndefinedName(expr, expr.name) from None

def _eval_program(expr:syntax.Program, frame:ENV):
	for binding in expr.bindings:
		evaluate(binding, frame)
	return evaluate(expr.result, frame)

def _eval_binding(expr:syntax.Binding, frame:ENV):
	# Mutates the current scope in place. Closures already made here will see it.
	return frame.define(expr.name, evaluate(expr.expr, frame))

def _eval_bin_exp(expr:syntax.BinExp, frame:ENV):
	a = evaluate(expr.lhs, frame)
	b = evaluate(expr.rhs, frame)
	if expr.op.is_logical():
		for v in a, b:
			if not _is_flag(v): raise NotAFlag(expr, render_value(v))
	else:
		for v in a, b:
			if not _is_int(v): raise NotAnInteger(expr, render_value(v))
	try:
		return PRIMITIVE_BINARY[expr.op](a, b)
	except ZeroDivisionError:
		raise DivisionByZero(expr, render_value(a)) from None

def _eval_unary_exp(expr:syntax.UnaryExp, frame:ENV):
	arg = evaluate(expr.arg, frame)
	if expr.op is UnaryOperator.NOT:
		if not _is_flag(arg): raise NotAFlag(expr, render_value(arg))
	elif not _is_int(arg):
		raise NotAnInteger(expr, render_value(arg))
	return PRIMITIVE_UNARY[expr.op](arg)

def _eval_cond(expr:syntax.Cond, frame:ENV):
	if_part = evaluate(expr.if_part, frame)
	if not _is_flag(if_part): raise NonBoolCondition(expr.if_part, render_value(if_part))
	sequel = expr.then_part if if_part else expr.else_part
	return evaluate(sequel, frame)

def _eval_lambda_form(expr:syntax.LambdaForm, frame:ENV):
	return Closure(expr.param, expr.body, frame)

def _eval_call(expr:syntax.Call, frame:ENV):
	function = evaluate(expr.fn_exp, frame)
	if not isinstance(function, Closure): raise NotAClosure(expr, render_value(function))
	# The argument is evaluated where the call happens, but the body runs where the lambda was made.
	return function.apply(evaluate(expr.arg, frame))

attach_evaluation_methods(globals())

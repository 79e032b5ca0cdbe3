"""
The unification approach to type-inference.

Every binding gets exactly one monomorphic type; there is no generalization.
Visiting an expression yields its type, which may still mention variables.
Unification narrows those variables by entering resolutions in gamma.
"""
from collections import deque
from typing import Optional, Sequence
from boozetools.support.foundation import Visitor
from . import syntax
from .algebra import LambType, TypeVariable, Arrow, INT, BOOL, PullRabbit, Render
from .ontology import Mishap
from .scope import Scope, Absent
from .diagnostics import Report

PHASE = "Inferring Types"

TYPE_ENV = Scope[LambType]

def infer_types(program:syntax.Program, report:Report) -> Optional[LambType]:
	""" Best-effort, all-or-nothing: either the program's type, or else an issue in the report. """
	report.info(PHASE)
	try:
		typ = DeductionEngine().infer(program)
	except TypeCheckFailure as e:
		report.mishap(PHASE, e)
		return None
	report.info(PHASE, "found", typ)
	return typ

class DeductionEngine(Visitor):
	"""
	One of these is good for one inference run: The gamma table belongs to it.
	The scope parameter threads through the visit methods, the same way hypotheses
	thread through the rules of a type system.
	"""
	def __init__(self):
		self._gamma = {}
		self._bunny = PullRabbit(self._gamma)

	def infer(self, expr:syntax.VALUE_EXPRESSION, env:Optional[TYPE_ENV]=None) -> LambType:
		if env is None: env = Scope()
		return self.visit(expr, env).visit(self._bunny)

	def _unify(self, a:LambType, b:LambType, stem:syntax.Expr, mismatch=None):
		unify([a, b], self._gamma, stem, mismatch or Incompatible)

	def visit_Literal(self, expr: syntax.Literal, env:TYPE_ENV):
		if isinstance(expr.value, bool):
			return BOOL
		if isinstance(expr.value, int):
			return INT
		raise TypeError(expr.value)

	def visit_Lookup(self, expr: syntax.Lookup, env:TYPE_ENV):
		try: return env.lookup(expr.name)
		except Absent: raise UndefinedName(expr, expr.name) from None

	def visit_Program(self, expr: syntax.Program, env:TYPE_ENV):
		# Bindings land in the current scope, visible to their later siblings.
		for binding in expr.bindings:
			self.visit(binding, env)
		return self.visit(expr.result, env)

	def visit_Binding(self, expr: syntax.Binding, env:TYPE_ENV):
		if isinstance(expr.expr, syntax.LambdaForm):
			# A function may call itself by name, so the name needs a type
			# before the body does. Anything else sees the prior meaning of the name.
			placeholder = env.define(expr.name, TypeVariable())
			typ = self.visit(expr.expr, env)
			self._unify(placeholder, typ, expr)
		else:
			typ = self.visit(expr.expr, env)
		if expr.declared is not None:
			self._unify(expr.declared, typ, expr)
		return env.define(expr.name, typ)

	def visit_BinExp(self, expr: syntax.BinExp, env:TYPE_ENV):
		lhs = self.visit(expr.lhs, env)
		rhs = self.visit(expr.rhs, env)
		self._unify(lhs, rhs, expr)
		if expr.op.is_logical():
			self._unify(BOOL, lhs, expr, NonBoolOperand)
			return BOOL
		self._unify(INT, lhs, expr, NonIntOperand)
		return BOOL if expr.op.is_comparison() else INT

	def visit_UnaryExp(self, expr: syntax.UnaryExp, env:TYPE_ENV):
		arg = self.visit(expr.arg, env)
		if expr.op is syntax.UnaryOperator.NOT:
			self._unify(BOOL, arg, expr, NonBoolOperand)
			return BOOL
		self._unify(INT, arg, expr, NonIntOperand)
		return INT

	def visit_Cond(self, cond: syntax.Cond, env:TYPE_ENV):
		if_type = self.visit(cond.if_part, env)
		branches = [self.visit(x, env) for x in (cond.then_part, cond.else_part)]
		self._unify(BOOL, if_type, cond.if_part, NonBoolCondition)
		self._unify(*branches, cond)
		return branches[0]

	def visit_LambdaForm(self, expr: syntax.LambdaForm, env:TYPE_ENV):
		inner = env.child()
		param = expr.declared if expr.declared is not None else TypeVariable()
		inner.define(expr.param, param)
		res = self.visit(expr.body, inner)
		return Arrow(param, res)

	def visit_Call(self, expr: syntax.Call, env:TYPE_ENV):
		fn_type = self.visit(expr.fn_exp, env)
		arg_type = self.visit(expr.arg, env)
		fn_type = _proxy(fn_type, self._gamma)
		if isinstance(fn_type, TypeVariable):
			# Nothing known yet, but it had better be a function.
			guess = Arrow(TypeVariable(), TypeVariable())
			self._unify(fn_type, guess, expr.fn_exp)
			fn_type = guess
		if not isinstance(fn_type, Arrow):
			raise NotCallable(expr, fn_type.visit(self._bunny))
		self._unify(fn_type.arg, arg_type, expr)
		return fn_type.res

###############################################################################

class TypeCheckFailure(Mishap):
	""" Anything that stops inference. """

class UndefinedName(TypeCheckFailure):
	kind = "undefined variable"
	gripe = "I don't see what '%s' refers to."

class NotCallable(TypeCheckFailure):
	kind = "non-function application"
	gripe = "Dunno how to call %s as a function."

class UnificationFailed(TypeCheckFailure):
	def __init__(self, prior:LambType, term:LambType, at:syntax.Expr):
		super().__init__(at, prior, term)
		self.prior, self.term = prior, term
	def message(self) -> str:
		# One renderer for both, so that shared variables get the same name.
		delta = Render()
		return self.gripe % (self.prior.visit(delta), self.term.visit(delta))

class Incompatible(UnificationFailed):
	kind = "type mismatch"
	gripe = "This tries to be both %s and also %s, which cannot happen."

class NonBoolCondition(Incompatible):
	kind = "non-bool condition"
	gripe = "A condition must be %s, but this one is %s."

class NonIntOperand(Incompatible):
	kind = "non-int operand"
	gripe = "This operator works on %s, not %s."

class NonBoolOperand(Incompatible):
	kind = "non-bool operand"
	gripe = "This operator works on %s, not %s."

class RecursiveTypeError(UnificationFailed):
	kind = "infinite type"
	gripe = "This tries to equate %s with %s which contains it, but a type cannot be part of itself."

def _proxy(a: LambType, gamma: dict):
	if a in gamma:
		b = _proxy(gamma[a], gamma)
		gamma[a] = b
		return b
	else:
		return a

def unify(terms: Sequence[LambType], gamma: dict, stem:syntax.Expr, mismatch=Incompatible):
	"""
	Make all the terms stand for the same type, or raise the reason why not.
	The mismatch class is for a conflict between the terms as given;
	conflicts found deeper inside are plain Incompatible.
	"""
	def enq(a, b):
		queue.append((a, b, Incompatible))
	def settle(t):
		return t.visit(PullRabbit(gamma))
	def U(a, b, complaint):
		a, b = _proxy(a, gamma), _proxy(b, gamma)
		# Lemma 1: neither A nor B are in gamma.
		# Lemma 2: A and B each stand for themselves.
		if a is b:
			return
		elif type(a) is TypeVariable:
			# if A occurs in B, then reject. It would be ill-founded.
			if b.mentions(a, gamma): raise RecursiveTypeError(a, settle(b), stem)
			gamma[a] = b  # A is made to stand for B
		elif type(b) is TypeVariable:
			# if B occurs in A, then reject. It would be ill-founded.
			if a.mentions(b, gamma): raise RecursiveTypeError(b, settle(a), stem)
			gamma[b] = a  # B is made to stand for A
		elif a.phylum() == b.phylum():
			a.unify_with(b, enq)
		else:
			raise complaint(settle(a), settle(b), stem)

	queue = deque()
	t0 = terms[0]
	for t1 in terms[1:]:
		queue.append((t0, t1, mismatch))
		while queue:
			U(*queue.popleft())
	return

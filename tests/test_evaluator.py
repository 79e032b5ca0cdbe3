import sys
import unittest

from lamb import syntax as s
from lamb.algebra import INT, arrow
from lamb.diagnostics import Report
from lamb.scope import Scope
from lamb.tree_walker.executive import run_program, MAX_DEPTH
from lamb.tree_walker.evaluator import evaluate, EvaluationFailure
from lamb.tree_walker.values import Closure, render_value

def n(x): return s.Literal(x) if x >= 0 else s.unary("-", s.Literal(-x))
def v(name): return s.Lookup(name)

def fibonacci():
	return s.let("f", s.lam("n", s.Cond(
		s.binary("||", s.binary("==", v("n"), n(1)), s.binary("==", v("n"), n(2))),
		n(1),
		s.binary("+", s.call(v("f"), s.binary("-", v("n"), n(1))), s.call(v("f"), s.binary("-", v("n"), n(2)))),
	)))

def summation(depth):
	""" One nested call per step, so the depth of recursion is exactly the argument. """
	return s.program(
		s.let("sum", s.lam("k", s.Cond(
			s.binary("==", v("k"), n(0)),
			n(0),
			s.binary("+", v("k"), s.call(v("sum"), s.binary("-", v("k"), n(1)))),
		))),
		s.call(v("sum"), n(depth)),
	)

class EvaluationTests(unittest.TestCase):

	@staticmethod
	def run_clean(expr):
		return evaluate(expr, Scope())

	def test_bindings_in_sequence(self):
		p = s.program(s.let("a", n(2)), s.let("b", s.binary("+", v("a"), n(1))), s.binary("*", v("a"), v("b")))
		self.assertEqual(6, self.run_clean(p))

	def test_arithmetic_and_logic(self):
		cases = [
			("+", 3, 4, 7), ("-", 3, 4, -1), ("*", 3, 4, 12),
			("==", 3, 3, True), ("!=", 3, 3, False),
			("<", 3, 4, True), (">", 3, 4, False), ("<=", 4, 4, True), (">=", 3, 4, False),
			("&&", True, False, False), ("||", True, False, True), ("&&", True, True, True),
		]
		for glyph, a, b, expect in cases:
			with self.subTest(glyph=glyph, a=a, b=b):
				self.assertIs(type(expect), type(self.run_clean(s.binary(glyph, n(a), n(b)))))
				self.assertEqual(expect, self.run_clean(s.binary(glyph, n(a), n(b))))
		self.assertEqual(-5, self.run_clean(s.unary("-", n(5))))
		self.assertIs(False, self.run_clean(s.unary("!", n(True))))

	def test_division_truncates_toward_zero(self):
		for a, b, q in [(7, 2, 3), (-7, 2, -3), (7, -2, -3), (-7, -2, 3), (6, 3, 2), (0, 5, 0)]:
			with self.subTest(a=a, b=b):
				self.assertEqual(q, self.run_clean(s.binary("/", n(a), n(b))))

	def test_integers_do_not_wrap(self):
		big = s.binary("*", n(2 ** 62), n(4))
		self.assertEqual(2 ** 64, self.run_clean(big))
		self.assertEqual(-(2 ** 63) - 1, self.run_clean(s.binary("-", n(-(2 ** 63)), n(1))))

	def test_only_the_chosen_branch_runs(self):
		self.assertEqual(1, self.run_clean(s.Cond(n(True), n(1), s.call(n(1), n(1)))))
		self.assertEqual(2, self.run_clean(s.Cond(n(False), v("nowhere"), n(2))))

	def test_recursion_by_name(self):
		self.assertEqual(55, self.run_clean(s.program(fibonacci(), s.call(v("f"), n(10)))))

	def test_curried_declared_function(self):
		body = s.program(s.let("a", s.binary("*", v("w"), n(100)), INT), s.binary("+", v("a"), v("v")))
		f = s.let("f", s.lam("w", s.lam("v", body, INT), INT), arrow(INT, INT, INT))
		self.assertEqual(207, self.run_clean(s.program(f, s.call(v("f"), n(2), n(7)))))

	def test_closures_see_later_bindings_of_their_scope(self):
		p = s.program(
			s.let("f", s.lam("k", s.binary("+", v("k"), v("w")))),
			s.let("w", n(5)),
			s.call(v("f"), n(2)),
		)
		self.assertEqual(7, self.run_clean(p))
		p = s.program(
			s.let("w", n(1)),
			s.let("f", s.lam("k", s.binary("+", v("k"), v("w")))),
			s.let("w", n(5)),
			s.call(v("f"), n(2)),
		)
		self.assertEqual(7, self.run_clean(p))

	def test_scoping_is_lexical(self):
		p = s.program(
			s.let("x", n(1)),
			s.let("f", s.lam("y", s.binary("+", v("x"), v("y")))),
			s.let("g", s.lam("x", s.call(v("f"), v("x")))),
			s.call(v("g"), n(10)),
		)
		self.assertEqual(11, self.run_clean(p))

	def test_each_activation_is_separate(self):
		p = s.program(
			s.let("make", s.lam("x", s.lam("y", v("x")))),
			s.let("one", s.call(v("make"), n(1))),
			s.let("two", s.call(v("make"), n(2))),
			s.binary("+", s.call(v("one"), n(0)), s.call(v("two"), n(0))),
		)
		self.assertEqual(3, self.run_clean(p))

	def test_bindings_inside_a_body_stay_there(self):
		f = s.let("f", s.lam("k", s.program(s.let("inner", s.binary("*", v("k"), n(2))), v("inner"))))
		self.assertEqual(6, self.run_clean(s.program(f, s.call(v("f"), n(3)))))
		with self.assertRaises(EvaluationFailure) as cm:
			self.run_clean(s.program(f, s.let("r", s.call(v("f"), n(3))), v("inner")))
		self.assertEqual("undefined variable", cm.exception.kind)

	def test_declared_types_are_not_checked(self):
		p = s.program(s.let("f", s.lam("x", v("x"), INT)), s.call(v("f"), n(True)))
		self.assertIs(True, self.run_clean(p))

	def test_a_lambda_is_a_closure(self):
		env = Scope()
		value = evaluate(s.lam("x", v("x")), env)
		self.assertIsInstance(value, Closure)
		self.assertIs(env, value.static_link)
		self.assertEqual("lambda (x)", render_value(value))


class EvaluationFailureTests(unittest.TestCase):

	def test_each_kind(self):
		cases = [
			("undefined variable", v("nope")),
			("non-int operand", s.binary("+", n(1), n(True))),
			("non-int operand", s.binary("<", n(True), n(False))),
			("non-int operand", s.binary("*", s.lam("x", v("x")), n(1))),
			("non-int operand", s.unary("-", n(True))),
			("non-bool operand", s.binary("&&", n(1), n(True))),
			("non-bool operand", s.unary("!", n(0))),
			("non-bool condition", s.Cond(n(1), n(2), n(3))),
			("non-function application", s.call(n(3), n(4))),
			("division by zero", s.binary("/", n(7), n(0))),
		]
		for kind, expr in cases:
			with self.subTest(kind=kind, expr=str(expr)):
				with self.assertRaises(EvaluationFailure) as cm:
					evaluate(expr, Scope())
				self.assertEqual(kind, cm.exception.kind)

	def test_explanations(self):
		with self.assertRaises(EvaluationFailure) as cm:
			evaluate(s.binary("/", n(7), n(0)), Scope())
		self.assertEqual("Tried to divide 7 by zero.", cm.exception.message())
		with self.assertRaises(EvaluationFailure) as cm:
			evaluate(s.call(n(True), n(4)), Scope())
		self.assertEqual("Only a lambda can be applied, not true.", cm.exception.message())


class RunProgramTests(unittest.TestCase):

	def test_value_comes_back(self):
		report = Report()
		self.assertEqual(55, run_program(s.program(fibonacci(), s.call(v("f"), n(10))), report))
		self.assertTrue(report.ok())

	def test_host_may_supply_the_scope(self):
		env = Scope()
		env.define("x", 41)
		self.assertEqual(42, run_program(s.program(s.binary("+", v("x"), n(1))), Report(), env))

	def test_failure_is_reported(self):
		report = Report()
		self.assertIsNone(run_program(s.program(s.binary("/", n(1), n(0))), report))
		self.assertEqual("division by zero", report.issues[0].kind)
		self.assertEqual("Evaluating found a problem: division by zero", report.issues[0].description)

	def test_runaway_recursion(self):
		report = Report()
		p = s.program(s.let("loop", s.lam("k", s.call(v("loop"), v("k")))), s.call(v("loop"), n(1)))
		self.assertIsNone(run_program(p, report))
		self.assertEqual("stack exhausted", report.issues[0].kind)

	def test_deep_but_finite_recursion(self):
		for depth in [150, 1000, MAX_DEPTH // 2]:
			with self.subTest(depth=depth):
				report = Report()
				self.assertEqual(depth * (depth + 1) // 2, run_program(summation(depth), report))
				self.assertTrue(report.ok())

	def test_depth_is_a_setting(self):
		report = Report()
		self.assertIsNone(run_program(summation(3000), report, max_depth=100))
		self.assertEqual("stack exhausted", report.issues[0].kind)

	def test_recursion_limit_is_restored(self):
		prior = sys.getrecursionlimit()
		run_program(summation(1000), Report())
		self.assertEqual(prior, sys.getrecursionlimit())
		run_program(s.program(s.binary("/", n(1), n(0))), Report())
		self.assertEqual(prior, sys.getrecursionlimit())

	def test_render_value(self):
		for value, text in [(7, "7"), (-3, "-3"), (True, "true"), (False, "false")]:
			with self.subTest(value=value):
				self.assertEqual(text, render_value(value))


if __name__ == '__main__':
	unittest.main()

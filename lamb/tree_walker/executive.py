"""
The overall control for the run-time.
"""
import sys
from typing import Optional
from .. import syntax
from ..diagnostics import Report
from ..scope import Scope
from .types import VALUE, ENV
from .evaluator import evaluate, EvaluationFailure, StackExhausted
from .values import render_value
from . import runtime  # NOQA: installs the evaluation methods

PHASE = "Evaluating"

# Host frames per guest call, allowing for a few nested expressions between a lambda and its recursive call.
FRAMES_PER_CALL = 10
MAX_DEPTH = 5000

def run_program(program:syntax.Program, report:Report, env:Optional[ENV]=None, *, max_depth:int=MAX_DEPTH) -> Optional[VALUE]:
	"""
	Evaluate a whole program in a fresh root scope, unless given one.
	Either returns the value or files an issue and returns None.
	Nested calls up to about max_depth deep are fine; beyond that, the stack counts as exhausted.
	"""
	report.info(PHASE)
	if env is None: env = Scope()
	prior_limit = sys.getrecursionlimit()
	sys.setrecursionlimit(max(prior_limit, max_depth * FRAMES_PER_CALL))
	try:
		value = evaluate(program, env)
	except EvaluationFailure as e:
		report.mishap(PHASE, e)
		return None
	except RecursionError:
		report.mishap(PHASE, StackExhausted(program))
		return None
	finally:
		sys.setrecursionlimit(prior_limit)
	report.info(PHASE, "produced", render_value(value))
	return value

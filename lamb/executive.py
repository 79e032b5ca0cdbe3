"""
This is where a host hands over a program.

Type inference comes first unless the host opts out; some hosts evaluate
without checking. Either way the tree-walker gets its own scopes and runs
independently of whatever the checker concluded.
"""
from typing import Optional
from . import syntax
from .diagnostics import Report
from .type_inference import infer_types
from .tree_walker.executive import run_program, MAX_DEPTH
from .tree_walker.types import VALUE

def check_and_run(program:syntax.Program, report:Report, *, skip_inference=False, max_depth=MAX_DEPTH) -> Optional[VALUE]:
	if not skip_inference:
		infer_types(program, report)
		if report.sick():
			return None
	return run_program(program, report, max_depth=max_depth)

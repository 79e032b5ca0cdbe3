import sys, random
from typing import Any, Sequence
from .ontology import Expr, Mishap

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'ARGH', 'Blargh', 'Confound it', 'Crud', 'Curses', "Crikey",
		'Drat', 'Fiddlesticks', 'Good Grief', "Great Scott",
		"Heavens to Betsy", "Mercy", 'Nuts', 'Rats', 'Woe is me',
	]

	resignations = [
		'I am undone.',
		'I cannot continue.',
		'I have no idea what the right answer is.',
		'I need to ask for help.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	"""
	The core never prints or exits on its own account.
	Entry points file their troubles here, and the host decides what to show.
	"""
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	@property
	def issues(self) -> Sequence["Pic"]: return tuple(self._issues)

	def issue(self, it:"Pic"):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def mishap(self, phase:str, ex:Mishap):
		""" The usual way a failed phase gets recorded: kind, explanation, and the guilty expression. """
		intro = "%s found a problem: %s" % (phase, ex.kind)
		problem = [Annotation(ex.at, ex.message())]
		self.issue(Pic(intro, problem, kind=ex.kind))

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

def _abbreviate(text:str, width=70) -> str:
	return text if len(text) <= width else text[:width-3]+"..."

class Annotation:
	"""
	Points at an expression. Trees carry no source positions,
	so the rendered expression stands in for the usual squiggle.
	"""
	node: Expr
	caption: str
	def __init__(self, node:Expr, caption:str=""):
		self.node = node
		self.caption = caption
	def illustrate(self):
		lines = ["     | " + _abbreviate(str(self.node))]
		if self.caption:
			lines.append("     +-- " + self.caption)
		return '\n'.join(lines)

class Pic:
	def __init__(self, intro:str, anns:list[Annotation], footer=(), kind:Any=None):
		self._intro, self._anns, self._footer = intro, anns, footer
		self.kind = kind
	@property
	def description(self): return self._intro
	def captions(self): return [ann.caption for ann in self._anns]
	def as_text(self):
		lines = [self._intro, ""]
		lines.extend(ann.illustrate() for ann in self._anns)
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()

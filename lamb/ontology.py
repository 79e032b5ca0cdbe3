"""
These most-fundamental classes are separate from the rest
to avoid various circular-import scenarios. Both engines,
the diagnostics, and the syntax all lean on them.
"""

class Expr:
	"""
	Root of the value-expression node types.
	Nodes are immutable once built and compare structurally,
	so two trees built the same way are equal.
	"""
	__slots__ = ()
	def _key(self) -> tuple: raise NotImplementedError(type(self))
	def __eq__(self, other): return type(self) is type(other) and self._key() == other._key()
	def __hash__(self): return hash((type(self), self._key()))
	def __repr__(self): return "<%s %s>" % (type(self).__name__, self)


class Mishap(Exception):
	"""
	Root of every failure the core can report.
	Each one knows its kind, the expression at fault, and enough detail to explain itself.
	Nothing in the core recovers from these; they travel straight up to the entry point.
	"""
	kind: str
	gripe: str

	def __init__(self, at:Expr, *details):
		super().__init__(at, *details)
		self.at = at
		self.details = details

	def message(self) -> str:
		return self.gripe % self.details

	def __str__(self):
		return "%s: %s" % (self.kind, self.message())

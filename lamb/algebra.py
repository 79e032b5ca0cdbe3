"""
The algebra of types, with unification variables.

Design Note:
-------------
A type variable does not carry its own resolution.
Instead, each inference run keeps a table (called gamma, by tradition)
mapping variables to whatever they have been made to stand for.
Every holder of the variable sees the same resolution because they all
consult the same table. Resolutions are only ever added, never removed.
"""
from functools import reduce

#########################

class LambType:
	def visit(self, visitor:"LambTypeVisitor"): raise NotImplementedError(type(self))
	def phylum(self): raise NotImplementedError(type(self))
	def unify_with(self, other:"LambType", enq): raise NotImplementedError(type(self))
	def mentions(self, v:"TypeVariable", gamma:dict) -> bool: raise NotImplementedError(type(self))
	def __str__(self): return self.visit(Render())
	def __repr__(self): return "<%s>" % self

class TypeVariable(LambType):
	_counter = 0  # Each is distinct; there can be no capture.
	def __init__(self):
		self.nr = TypeVariable._counter
		TypeVariable._counter += 1
	def __repr__(self): return "<t%d>" % self.nr
	def visit(self, visitor): return visitor.on_variable(self)
	def phylum(self): return TypeVariable
	def mentions(self, v, gamma):
		# Resolutions already made count as part of the term.
		if v is self: return True
		return self in gamma and gamma[self].mentions(v, gamma)

def _name_variable(n):
	name = ""
	while n:
		n, remainder = divmod(n-1, 26)
		name = chr(97+remainder) + name
	return name

#########################

class Primitive(LambType):
	""" The built-in ground types. There is exactly one of each. """
	def __init__(self, name:str): self.name = name
	def visit(self, visitor): return visitor.on_primitive(self)
	def phylum(self): return self
	def unify_with(self, other, enq): pass
	def mentions(self, v, gamma): return False

INT = Primitive("int")
BOOL = Primitive("bool")

class Arrow(LambType):
	""" The type of a single-argument function. Curried functions nest these to the right. """
	def __init__(self, arg:LambType, res:LambType): self.arg, self.res = arg, res
	def visit(self, visitor): return visitor.on_arrow(self)
	def phylum(self): return Arrow
	def unify_with(self, other, enq):
		# Structural Equivalence
		enq(self.arg, other.arg)
		enq(self.res, other.res)
	def mentions(self, v, gamma):
		return self.arg.mentions(v, gamma) or self.res.mentions(v, gamma)
	def __eq__(self, other): return type(other) is Arrow and self.arg == other.arg and self.res == other.res
	def __hash__(self): return hash((Arrow, self.arg, self.res))

def arrow(*types:LambType) -> LambType:
	"""
	Read a chain like `int -> int -> bool` the curried way:
	the arrows associate to the right, so this is int -> (int -> bool).
	"""
	assert types
	return reduce(lambda res, arg: Arrow(arg, res), reversed(types[:-1]), types[-1])

#########################

class LambTypeVisitor:
	def on_variable(self, v:TypeVariable): pass
	def on_primitive(self, p:Primitive): pass
	def on_arrow(self, a:Arrow): pass

#########################

class Render(LambTypeVisitor):
	""" Return a string representation of the term. """
	def __init__(self):
		self.delta = {}
	def on_variable(self, v: TypeVariable):
		if v not in self.delta:
			self.delta[v] = "?%s"%_name_variable(len(self.delta)+1)
		return self.delta[v]
	def on_primitive(self, p: Primitive):
		return p.name
	def on_arrow(self, a: Arrow):
		return "(%s -> %s)" % (a.arg.visit(self), a.res.visit(self))

class RenderAnnotation(Render):
	"""
	The way a programmer would write the type in a declaration.
	Curried chains come out flat, since the arrow associates to the right.
	"""
	def on_arrow(self, a: Arrow):
		arg = a.arg.visit(self)
		if isinstance(a.arg, Arrow): arg = "(%s)" % arg
		return "%s -> %s" % (arg, a.res.visit(self))

def render_annotation(typ:LambType) -> str:
	return typ.visit(RenderAnnotation())

class PullRabbit(LambTypeVisitor):
	"""
	Pull the actual type out of the hat: Rewrite a term so that
	every variable with a resolution in gamma is replaced by that resolution.
	What remains are concrete types and genuinely-unknown variables.
	"""
	def __init__(self, gamma: dict):
		self.gamma = gamma
	def on_variable(self, v: TypeVariable):
		while v in self.gamma:
			v = self.gamma[v]
		if isinstance(v, TypeVariable):
			return v
		else:
			return v.visit(self)
	def on_primitive(self, p: Primitive):
		return p
	def on_arrow(self, a: Arrow):
		return Arrow(a.arg.visit(self), a.res.visit(self))

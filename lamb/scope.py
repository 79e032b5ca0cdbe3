"""
Lexical scopes, shared by the type-checker and the evaluator.

A scope is a dictionary with a static link to its parent. The link is shared,
not owned: every closure made in a scope, and every activation of such a
closure, points at the very same parent object. So a binding added to the
parent later on is visible through all of them.
Links only ever run from child to parent, so chains cannot form cycles.
"""

from typing import Generic, Optional, TypeVar

T = TypeVar('T')

class Absent(KeyError): pass

class Scope(Generic[T]):
	_bindings : dict[str, T]
	static_link : Optional["Scope[T]"]

	def __init__(self, static_link:Optional["Scope[T]"]=None):
		self._bindings = {}
		self.static_link = static_link

	def child(self) -> "Scope[T]":
		return Scope(self)

	def define(self, name:str, payload:T) -> T:
		""" Later definitions of the same name in the same scope shadow earlier ones. """
		self._bindings[name] = payload
		return payload

	def lookup(self, name:str) -> T:
		scope = self
		while scope is not None:
			try: return scope._bindings[name]
			except KeyError: scope = scope.static_link
		raise Absent(name)

	def __contains__(self, name:str) -> bool:
		try: self.lookup(name)
		except Absent: return False
		else: return True

	def __repr__(self):
		return "<Scope: %s>" % ", ".join(self._bindings)

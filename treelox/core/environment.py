"""Variable bindings. Scopes live in a ScopeArena and refer to their lexical parent by index rather than by reference;
an Environment is a handle on one scope of an arena. Lookups and assignments walk outward through parent indices
until the name is found or the chain runs out.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from treelox.lang.error import UndefinedVariable


@dataclass
class Scope:
    values: Dict[str, Any] = field(default_factory=dict)
    parent: Optional[int] = None


class ScopeArena:
    """Owns every scope created for one interpreter."""

    def __init__(self):
        self.scopes = []

    def new_scope(self, parent=None):
        """Returns the index of a fresh, empty scope enclosed by parent (an index, or None for a root scope)."""
        if parent is not None and not 0 <= parent < len(self.scopes):
            raise IndexError(f"no scope at index {parent}")

        self.scopes.append(Scope(parent=parent))
        return len(self.scopes) - 1

    def chain(self, index):
        """Yields scopes from index outward to the root."""
        while index is not None:
            scope = self.scopes[index]
            yield scope
            index = scope.parent

    def __len__(self):
        return len(self.scopes)


class Environment:
    """Handle on one scope. Environment() creates a new arena with a single global scope."""

    def __init__(self, arena=None, index=None):
        if arena is None:
            arena = ScopeArena()
        if index is None:
            index = arena.new_scope()

        self.arena = arena
        self.index = index

    @property
    def enclosing(self):
        """Environment of the parent scope, or None for a root scope."""
        parent = self.arena.scopes[self.index].parent
        return None if parent is None else Environment(self.arena, parent)

    @property
    def values(self):
        return self.arena.scopes[self.index].values

    def enclose(self):
        """Returns an Environment for a new scope nested in this one."""
        return Environment(self.arena, self.arena.new_scope(self.index))

    def ancestor(self, distance):
        """Environment distance scopes outward (0 is self)."""
        env = self
        for _ in range(distance):
            env = env.enclosing
            if env is None:
                raise IndexError(f"scope chain shorter than {distance}")
        return env

    def define(self, name, value):
        """Binds name in this scope, overwriting any binding it already has here. Never fails."""
        self.values[name] = value

    def get(self, name):
        """Value bound to token name in the nearest scope that has it."""
        for scope in self.arena.chain(self.index):
            if name.lexeme in scope.values:
                return scope.values[name.lexeme]
        raise UndefinedVariable(name)

    def assign(self, name, value):
        """Overwrites the nearest existing binding of token name. Does not define missing names."""
        for scope in self.arena.chain(self.index):
            if name.lexeme in scope.values:
                scope.values[name.lexeme] = value
                return
        raise UndefinedVariable(name)

    def __contains__(self, name):
        return any(name in scope.values for scope in self.arena.chain(self.index))

    def __repr__(self):
        return f"Environment(index={self.index}, values={self.values!r})"

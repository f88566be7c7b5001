"""Abstract syntax tree for treelox.

The node set is closed: the Expr variants below and the two Stmt variants are everything the parser builds and the
interpreter evaluates. Nodes are frozen dataclasses, built once by the parser and never mutated, and compare
structurally, so parsing the same source twice gives equal trees.

```
Expr ::= Literal(value) | Grouping(expression) | Unary(operator, right) | Binary(left, operator, right)
       | Logical(left, operator, right) | Variable(name) | Assign(name, value)
Stmt ::= Expression(expression) | Print(expression)
```
"""

from dataclasses import dataclass, fields
from typing import Any

from treelox.core.tokens import Token
from treelox.core.values import stringify


class Expr:
    """Superclass of every expression node."""


class Stmt:
    """Superclass of every statement node."""


@dataclass(frozen=True)
class Literal(Expr):
    value: Any


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Logical(Expr):
    left: Expr
    operator: Token  # AND or OR
    right: Expr


@dataclass(frozen=True)
class Variable(Expr):
    name: Token


@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr


@dataclass(frozen=True)
class Expression(Stmt):
    expression: Expr


@dataclass(frozen=True)
class Print(Stmt):
    expression: Expr


def first_token(node):
    """Leftmost Token anywhere under node, or None. Walks with an explicit stack so it works on trees too deep to
    recurse through.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Token):
            return current
        if isinstance(current, (Expr, Stmt)):
            stack.extend(reversed([getattr(current, f.name) for f in fields(current)]))
    return None


def display(node):
    """Renders node in parenthesized prefix form, e.g. `1 + 2 * x` -> `(+ 1 (* 2 x))`. Used for --ast dumps."""

    def parenthesize(name, *parts):
        return f"({name} {' '.join(display(part) for part in parts)})"

    if isinstance(node, Literal):
        if isinstance(node.value, str):
            return f"\"{node.value}\""
        return stringify(node.value)
    elif isinstance(node, Grouping):
        return parenthesize("group", node.expression)
    elif isinstance(node, Unary):
        return parenthesize(node.operator.lexeme, node.right)
    elif isinstance(node, (Binary, Logical)):
        return parenthesize(node.operator.lexeme, node.left, node.right)
    elif isinstance(node, Variable):
        return node.name.lexeme
    elif isinstance(node, Assign):
        return f"(= {node.name.lexeme} {display(node.value)})"
    elif isinstance(node, Expression):
        return parenthesize(";", node.expression)
    elif isinstance(node, Print):
        return parenthesize("print", node.expression)

    raise TypeError(f"not a syntax node: {node!r}")

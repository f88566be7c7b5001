"""Tree-walking evaluation. evaluate and execute each do a single exhaustive case analysis over the closed node set in
syntax.py; a node type they don't know about is an internal error, not a runtime error.
"""

from treelox.core.environment import Environment
from treelox.core.syntax import (
    Assign, Binary, Expression, Grouping, Literal, Logical, Print, Unary, Variable, first_token
)
from treelox.core.tokens import Token, TokenKind
from treelox.core.values import divide, is_equal, is_number, is_truthy, stringify
from treelox.lang.error import LoxError, LoxRuntimeError


class Interpreter:
    """Runs statements against one global Environment, which persists across interpret calls."""

    ARITHMETIC = {
        TokenKind.MINUS: lambda a, b: a - b,
        TokenKind.STAR: lambda a, b: a * b,
        TokenKind.SLASH: divide,
        TokenKind.GREATER: lambda a, b: a > b,
        TokenKind.GREATER_EQUAL: lambda a, b: a >= b,
        TokenKind.LESS: lambda a, b: a < b,
        TokenKind.LESS_EQUAL: lambda a, b: a <= b,
    }

    def __init__(self, reporter=None, output=print, environment=None):
        self.reporter = reporter
        self.output = output
        self.globals = environment if environment is not None else Environment()
        self.environment = self.globals

    def interpret(self, statements):
        """Executes statements in order. Stops at the first runtime error, which goes to the reporter whole.
        Returns whether every statement ran.
        """
        try:
            for statement in statements:
                try:
                    self.execute(statement)
                except RecursionError:
                    token = first_token(statement) or Token(TokenKind.EOF, "", None, 0)
                    raise LoxRuntimeError(token, "Expression nested too deeply.")
        except LoxRuntimeError as error:
            if self.reporter is not None:
                self.reporter.runtime_error(error)
            return False
        return True

    def execute(self, stmt):
        if isinstance(stmt, Expression):
            self.evaluate(stmt.expression)
        elif isinstance(stmt, Print):
            self.output(stringify(self.evaluate(stmt.expression)))
        else:
            raise LoxError(f"cannot execute '{type(stmt).__name__}'", internal=True)

    def evaluate(self, expr):
        if isinstance(expr, Literal):
            return expr.value

        elif isinstance(expr, Grouping):
            return self.evaluate(expr.expression)

        elif isinstance(expr, Variable):
            return self.environment.get(expr.name)

        elif isinstance(expr, Assign):
            value = self.evaluate(expr.value)
            self.environment.assign(expr.name, value)
            return value

        elif isinstance(expr, Logical):
            left = self.evaluate(expr.left)
            if expr.operator.kind is TokenKind.OR:
                if is_truthy(left):
                    return left
            elif not is_truthy(left):
                return left
            return self.evaluate(expr.right)

        elif isinstance(expr, Unary):
            return self.unary(expr.operator, self.evaluate(expr.right))

        elif isinstance(expr, Binary):
            left = self.evaluate(expr.left)
            right = self.evaluate(expr.right)
            return self.binary(expr.operator, left, right)

        raise LoxError(f"cannot evaluate '{type(expr).__name__}'", internal=True)

    @staticmethod
    def unary(operator, right):
        if operator.kind is TokenKind.MINUS:
            if not is_number(right):
                raise LoxRuntimeError(operator, "Operand must be a number.")
            return -right
        if operator.kind is TokenKind.BANG:
            return not is_truthy(right)

        raise LoxError(f"unknown unary operator '{operator.lexeme}'", operator.line, internal=True)

    @staticmethod
    def binary(operator, left, right):
        kind = operator.kind

        if kind is TokenKind.PLUS:
            if is_number(left) and is_number(right):
                return left + right
            # concatenation is lopsided: "a" + 1 is fine, 1 + "a" is not
            if isinstance(left, str) and (isinstance(right, str) or is_number(right)):
                return left + stringify(right)
            raise LoxRuntimeError(operator, "Operands must be two numbers or two strings.")

        if kind is TokenKind.EQUAL_EQUAL:
            return is_equal(left, right)
        if kind is TokenKind.BANG_EQUAL:
            return not is_equal(left, right)

        if kind in Interpreter.ARITHMETIC:
            if not (is_number(left) and is_number(right)):
                raise LoxRuntimeError(operator, "Operands must be numbers.")
            return Interpreter.ARITHMETIC[kind](left, right)

        raise LoxError(f"unknown binary operator '{operator.lexeme}'", operator.line, internal=True)

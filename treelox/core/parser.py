"""Recursive-descent parser for treelox, one method per grammar rule (the left-folding binary levels share one,
driven by a table). Precedence runs from assignment (loosest) down to primary (tightest); every binary level is
left-associative.

```
program     ::= statement* EOF
statement   ::= exprStmt | printStmt
exprStmt    ::= expression ";"
printStmt   ::= "print" expression ";"
expression  ::= assignment
assignment  ::= IDENTIFIER "=" assignment | logic_or
logic_or    ::= logic_and ( "or" logic_and )*
logic_and   ::= equality ( "and" equality )*
equality    ::= comparison ( ( "!=" | "==" ) comparison )*
comparison  ::= term ( ( ">" | ">=" | "<" | "<=" ) term )*
term        ::= factor ( ( "-" | "+" ) factor )*
factor      ::= unary ( ( "/" | "*" ) unary )*
unary       ::= ( "!" | "-" ) unary | primary
primary     ::= NUMBER | STRING | "true" | "false" | "nil" | "(" expression ")" | IDENTIFIER
```

On a syntax error the current statement is dropped and the parser skips ahead to the next statement boundary, so one
run can report several errors. Statements completed before (and after) an error are still returned.
"""

from treelox.core.syntax import Assign, Binary, Expression, Grouping, Literal, Logical, Print, Unary, Variable
from treelox.core.tokens import TokenKind
from treelox.lang.error import ParseError


class Parser:
    """Consumes a token list (as produced by Lexer.scan) once, left to right."""

    # levels of the ladder that fold left: rule name -> (operand rule, operator kinds, node type)
    BINARY_LEVELS = {
        "logic_or": ("logic_and", (TokenKind.OR,), Logical),
        "logic_and": ("equality", (TokenKind.AND,), Logical),
        "equality": ("comparison", (TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL), Binary),
        "comparison": ("term", (TokenKind.GREATER, TokenKind.GREATER_EQUAL,
                                TokenKind.LESS, TokenKind.LESS_EQUAL), Binary),
        "term": ("factor", (TokenKind.MINUS, TokenKind.PLUS), Binary),
        "factor": ("unary", (TokenKind.SLASH, TokenKind.STAR), Binary),
    }

    # a statement may start here, so synchronize stops before them
    STATEMENT_STARTS = {TokenKind.CLASS, TokenKind.FUN, TokenKind.VAR, TokenKind.FOR, TokenKind.IF,
                        TokenKind.WHILE, TokenKind.PRINT, TokenKind.RETURN}

    def __init__(self, tokens, reporter=None):
        self.tokens = tokens
        self.reporter = reporter
        self.errors = []
        self.current = 0

    def parse(self):
        statements = []
        while not self.at_end:
            try:
                statements.append(self.statement())
            except ParseError:
                self.synchronize()
            except RecursionError:
                self.error(self.peek(), "Expression nested too deeply.")
                self.synchronize()
        return statements

    # grammar rules

    def statement(self):
        if self.match(TokenKind.PRINT):
            value = self.expression()
            self.consume(TokenKind.SEMICOLON, "Expect ';' after value.")
            return Print(value)

        expr = self.expression()
        self.consume(TokenKind.SEMICOLON, "Expect ';' after expression.")
        return Expression(expr)

    def expression(self):
        return self.assignment()

    def assignment(self):
        expr = self.binary("logic_or")

        if self.match(TokenKind.EQUAL):
            equals = self.previous()
            value = self.assignment()

            if isinstance(expr, Variable):
                return Assign(expr.name, value)

            self.error(equals, "Invalid assignment target.")  # reported, but no need to resynchronize

        return expr

    def binary(self, rule):
        """Parses one left-associative level of the ladder."""
        operand_rule, operators, node = Parser.BINARY_LEVELS[rule]
        nested = operand_rule in Parser.BINARY_LEVELS  # recurse here directly, one frame per level

        expr = self.binary(operand_rule) if nested else self.unary()
        while self.match(*operators):
            operator = self.previous()
            right = self.binary(operand_rule) if nested else self.unary()
            expr = node(expr, operator, right)
        return expr

    def unary(self):
        if self.match(TokenKind.BANG, TokenKind.MINUS):
            operator = self.previous()
            return Unary(operator, self.unary())
        return self.primary()

    def primary(self):
        if self.match(TokenKind.FALSE):
            return Literal(False)
        if self.match(TokenKind.TRUE):
            return Literal(True)
        if self.match(TokenKind.NIL):
            return Literal(None)

        if self.match(TokenKind.NUMBER, TokenKind.STRING):
            return Literal(self.previous().literal)

        if self.match(TokenKind.IDENTIFIER):
            return Variable(self.previous())

        if self.match(TokenKind.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenKind.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)

        raise self.error(self.peek(), "Expect expression.")

    # token cursor

    @property
    def at_end(self):
        return self.peek().kind is TokenKind.EOF

    def peek(self):
        return self.tokens[self.current]

    def previous(self):
        return self.tokens[self.current - 1]

    def advance(self):
        if not self.at_end:
            self.current += 1
        return self.previous()

    def check(self, kind):
        return not self.at_end and self.peek().kind is kind

    def match(self, *kinds):
        for kind in kinds:
            if self.check(kind):
                self.advance()
                return True
        return False

    def consume(self, kind, msg):
        if self.check(kind):
            return self.advance()
        raise self.error(self.peek(), msg)

    def error(self, token, msg):
        """Records and reports a ParseError, returning it so callers that need to unwind can raise it."""
        error = ParseError(token, msg)
        self.errors.append(error)
        if self.reporter is not None:
            self.reporter.report(error)
        return error

    def synchronize(self):
        """Discards tokens until just past a ';' or just before a token that starts a statement."""
        self.advance()

        while not self.at_end:
            if self.previous().kind is TokenKind.SEMICOLON:
                return
            if self.peek().kind in Parser.STATEMENT_STARTS:
                return
            self.advance()

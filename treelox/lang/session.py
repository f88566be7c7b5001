"""Session control for treelox. Feeds source text through lexer -> parser -> interpreter, either once for a file or
line by line for the shell. Globals live as long as the Session does.
"""

from collections import namedtuple

from treelox.core.interpreter import Interpreter
from treelox.core.lexical import Lexer
from treelox.core.parser import Parser
from treelox.core.syntax import display
from treelox.core.tokens import TokenKind


RunResult = namedtuple("RunResult", ["syntax_ok", "runtime_ok"])
RunResult.__doc__ = """Outcome of Session.run. runtime_ok is False when interpretation was skipped."""


class Session:
    """Governs a treelox session: owns one Interpreter and hands every error to reporter."""

    def __init__(self, reporter, output=print, dump_tokens=False, dump_ast=False):
        self.reporter = reporter
        self.interpreter = Interpreter(reporter, output)

        self.dump_tokens = dump_tokens  # both need a reporter with a debug method (ErrorHandler)
        self.dump_ast = dump_ast

    def tokens(self, source):
        """Scans source. Returns (tokens, lexical errors)."""
        lexer = Lexer(source, self.reporter)
        return lexer.scan(), lexer.errors

    def statements(self, source):
        """Scans and parses source. Returns (statements, lexical and syntax errors)."""
        tokens, errors = self.tokens(source)
        if self.dump_tokens:
            self.reporter.debug("tokens", tokens)

        parser = Parser(tokens, self.reporter)
        statements = parser.parse()
        if self.dump_ast:
            self.reporter.debug("ast", [display(stmt) for stmt in statements])

        return statements, errors + parser.errors

    def run(self, source):
        """Runs source. Nothing is interpreted if the source had any lexical or syntax error."""
        statements, errors = self.statements(source)
        if errors:
            return RunResult(False, False)
        return RunResult(True, self.interpreter.interpret(statements))

    def define(self, name, value):
        """Seeds a global binding, overwriting any existing one."""
        self.interpreter.globals.define(name, value)

    @staticmethod
    def literal(text):
        """Reads text as a single treelox literal (number, true, false, nil); anything else is taken as a string.
        Used for -D NAME=VALUE.
        """
        tokens = Lexer(text).scan()
        kinds = [token.kind for token in tokens]
        if kinds == [TokenKind.MINUS, TokenKind.NUMBER, TokenKind.EOF]:
            return -tokens[1].literal
        if len(tokens) == 2:
            token = tokens[0]
            if token.kind in (TokenKind.NUMBER, TokenKind.STRING):
                return token.literal
            if token.kind in (TokenKind.TRUE, TokenKind.FALSE):
                return token.kind is TokenKind.TRUE
            if token.kind is TokenKind.NIL:
                return None
        return text

    @staticmethod
    def string_state(line, in_string=False):
        """Walks line the way the lexer reads strings. Returns (code up to any comment, whether a string is open)."""
        code, escaped = "", False
        for idx, char in enumerate(line):
            if escaped:
                escaped = False
            elif in_string and char == "\\":
                escaped = True
            elif char == "\"":
                in_string = not in_string
            elif not in_string and line.startswith("//", idx):
                break
            code += char
        return code, in_string

    @staticmethod
    def preprocess_line(line, pending=""):
        """Preprocesses a line from the shell. pending is code buffered from earlier lines that still needed a
        continuation. Returns the combined code with the line's comment removed, and whether a continuation is still
        needed (unbalanced parentheses/braces, or an open string).
        """
        __, in_string = Session.string_state(pending)
        code, in_string = Session.string_state(line, in_string)

        code = (f"{pending}\n{code}" if pending else code).rstrip()

        unbalanced = code.count("(") > code.count(")") or code.count("{") > code.count("}")
        return code, in_string or unbalanced

"""Error handling for treelox. Lexical, syntax and runtime errors are all LoxErrors and are delivered to a Reporter;
anything else that makes it all the way to ErrorHandler is assumed to be an internal issue.
"""

import sys
from abc import ABC, abstractmethod

from termcolor import colored

from treelox.core.tokens import TokenKind


class LoxError(Exception):
    """Base for every error the pipeline reports. line is the source line the error is attributed to."""

    def __init__(self, msg, line=0, internal=False):
        super().__init__(msg)
        self.msg = msg
        self.line = line
        self.internal = internal


class LexError(LoxError):
    """Unterminated string or unrecognized character. Scanning continues past it."""

    where = ""


class ParseError(LoxError):
    """Unexpected or missing token, or an invalid assignment target."""

    def __init__(self, token, msg):
        super().__init__(msg, token.line)
        self.token = token

    @property
    def where(self):
        if self.token.kind is TokenKind.EOF:
            return " at end"
        return f" at '{self.token.lexeme}'"


class LoxRuntimeError(LoxError):
    """Raised while evaluating; aborts the rest of the current interpret call."""

    def __init__(self, token, msg):
        super().__init__(msg, token.line)
        self.token = token


class UndefinedVariable(LoxRuntimeError):

    def __init__(self, token):
        super().__init__(token, f"Undefined variable '{token.lexeme}'.")


class Reporter(ABC):
    """Diagnostics collaborator handed to the lexer, parser and interpreter. The pipeline only reports: deciding
    what an error means for the process is up to whoever owns the Reporter.
    """

    @abstractmethod
    def error(self, line, where, message):
        """Called with lexical and syntax errors."""

    @abstractmethod
    def runtime_error(self, error):
        """Called with the LoxRuntimeError that stopped an interpret call. The error is passed whole rather than as a
        (token, message) pair: error.token is the offending token (its line goes into the "[line N]" trailer) and
        error.msg is the message.
        """

    def report(self, error):
        """Dispatches a LoxError to error or runtime_error."""
        if isinstance(error, LoxRuntimeError):
            self.runtime_error(error)
        else:
            self.error(error.line, getattr(error, "where", ""), error.msg)


class ErrorHandler(Reporter):
    """Prints errors/warnings to a stream with termcolor. Also a context manager that turns stray Python errors into
    reported internal errors.
    """
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream if stream is not None else sys.stderr
        self.errors = 0
        self.runtime_errors = 0

    def _print(self, msg):
        print(msg, file=self.stream)

    def error(self, line, where, message):
        label = colored(f"[line {line}] ", attrs=["bold"])
        self._print(label + colored(f"Error{where}: ", ErrorHandler.ERROR, attrs=["bold"]) + message)
        self.errors += 1

    def runtime_error(self, error):
        self._print(colored(error.msg, ErrorHandler.ERROR) + colored(f"\n[line {error.line}]", attrs=["bold"]))
        self.runtime_errors += 1

    def warn(self, msg):
        """Prints a non-fatal notice."""
        self._print(colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + msg)

    def debug(self, header, lines):
        """Dumps lines under a bold header, used for --tokens/--ast."""
        self._print(colored(f"== {header} ==", attrs=["bold"]))
        for line in lines:
            self._print(f"  {line}")

    def throw(self, error, code=70):
        """Reports an error that escaped the pipeline and exits with code if fatal."""
        msg = ""
        if error.internal:
            msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
        self._print(msg + colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg)

        if self.fatal:
            sys.exit(code)

    def reset(self):
        self.errors = 0
        self.runtime_errors = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(LoxError("keyboard interrupt"), code=130)
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(LoxError("expression nested too deeply"))
        elif exc_type is not None and issubclass(exc_type, LoxError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(LoxError(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit

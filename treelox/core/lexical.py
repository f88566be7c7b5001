"""Lexical analysis for treelox: a single forward pass turning source text into a flat list of Tokens.

Lexical grammar, loosely:

```
NUMBER      ::= DIGIT+ ( "." DIGIT+ )?          ; a trailing "." is not part of the number
STRING      ::= '"' <char>* '"'                 ; may span lines, literal excludes the quotes
IDENTIFIER  ::= ALPHA ( ALPHA | DIGIT )*        ; ALPHA includes "_", keywords are looked up afterwards
<comment>   ::= "//" <char>* <newline>
```

Errors never stop the scan: each one is collected in Lexer.errors and handed to the reporter (if any), so that all
lexical errors in a source are known before parsing is attempted.
"""

from treelox.core.tokens import COMPARATORS, KEYWORDS, PUNCTUATION, Token, TokenKind
from treelox.lang.error import LexError


def is_digit(char):
    return "0" <= char <= "9"


def is_alpha(char):
    return "a" <= char <= "z" or "A" <= char <= "Z" or char == "_"


def is_alphanumeric(char):
    return is_alpha(char) or is_digit(char)


class Lexer:
    """Scans one source string. Use a fresh Lexer per source: offsets and the line counter are per-instance."""
    WHITESPACE = " \r\t"

    def __init__(self, source, reporter=None):
        self.source = source
        self.reporter = reporter

        self.tokens = []
        self.errors = []

        self.start = 0    # first char of the lexeme being scanned
        self.current = 0  # char about to be consumed
        self.line = 1

    def scan(self):
        """Returns the token list, always terminated by a single EOF token on the final line."""
        while not self.at_end:
            self.start = self.current
            self.scan_token()

        self.tokens.append(Token(TokenKind.EOF, "", None, self.line))
        return self.tokens

    @property
    def at_end(self):
        return self.current >= len(self.source)

    def scan_token(self):
        char = self.advance()

        if char in PUNCTUATION:
            self.add_token(PUNCTUATION[char])

        elif char in COMPARATORS:
            alone, with_equal = COMPARATORS[char]
            self.add_token(with_equal if self.match("=") else alone)

        elif char == "/":
            if self.match("/"):
                while self.peek() != "\n" and not self.at_end:
                    self.advance()
            else:
                self.add_token(TokenKind.SLASH)

        elif char in Lexer.WHITESPACE:
            pass

        elif char == "\n":
            self.line += 1

        elif char == "\"":
            self.string()

        elif is_digit(char):
            self.number()

        elif is_alpha(char):
            self.identifier()

        else:
            self.error("Unexpected character.")

    def string(self):
        while self.peek() != "\"" and not self.at_end:
            char = self.advance()
            if char == "\n":
                self.line += 1
            elif char == "\\" and not self.at_end:
                if self.advance() == "\n":  # escaped char can't close the string, but still counts as a line
                    self.line += 1

        if self.at_end:
            self.error("Unterminated string.")
            return

        self.advance()  # closing quote
        self.add_token(TokenKind.STRING, self.source[self.start + 1:self.current - 1])

    def number(self):
        while is_digit(self.peek()):
            self.advance()

        if self.peek() == "." and is_digit(self.peek_next()):
            self.advance()
            while is_digit(self.peek()):
                self.advance()

        self.add_token(TokenKind.NUMBER, float(self.source[self.start:self.current]))

    def identifier(self):
        while is_alphanumeric(self.peek()):
            self.advance()

        text = self.source[self.start:self.current]
        self.add_token(KEYWORDS.get(text, TokenKind.IDENTIFIER))

    def advance(self):
        self.current += 1
        return self.source[self.current - 1]

    def match(self, expected):
        """Consumes the next char only if it is expected."""
        if self.at_end or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self):
        return "\0" if self.at_end else self.source[self.current]

    def peek_next(self):
        if self.current + 1 >= len(self.source):
            return "\0"
        return self.source[self.current + 1]

    def add_token(self, kind, literal=None):
        self.tokens.append(Token(kind, self.source[self.start:self.current], literal, self.line))

    def error(self, msg):
        error = LexError(msg, self.line)
        self.errors.append(error)
        if self.reporter is not None:
            self.reporter.report(error)

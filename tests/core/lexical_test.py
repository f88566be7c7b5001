import unittest

from treelox.core.lexical import Lexer
from treelox.core.tokens import Token, TokenKind


def kinds(source):
    return [token.kind for token in Lexer(source).scan()]


class LexerTestCase(unittest.TestCase):

    def test_numbers(self):
        cases = {"0": 0.0, "7": 7.0, "123": 123.0, "3.25": 3.25, "10.0": 10.0, "0.5": 0.5}
        for case, value in cases.items():
            self.assertEqual([Token(TokenKind.NUMBER, case, value, 1), Token(TokenKind.EOF, "", None, 1)],
                             Lexer(case).scan(), case)

    def test_trailing_dot_not_in_number(self):
        tokens = Lexer("12.").scan()
        self.assertEqual([TokenKind.NUMBER, TokenKind.DOT, TokenKind.EOF], [token.kind for token in tokens])
        self.assertEqual(12.0, tokens[0].literal)
        self.assertEqual([TokenKind.DOT, TokenKind.NUMBER, TokenKind.EOF], kinds(".5"))

    def test_punctuation_and_operators(self):
        cases = {
            "(){},.-+;*/": [TokenKind.LEFT_PAREN, TokenKind.RIGHT_PAREN, TokenKind.LEFT_BRACE,
                            TokenKind.RIGHT_BRACE, TokenKind.COMMA, TokenKind.DOT, TokenKind.MINUS, TokenKind.PLUS,
                            TokenKind.SEMICOLON, TokenKind.STAR, TokenKind.SLASH],
            "! != = == < <= > >=": [TokenKind.BANG, TokenKind.BANG_EQUAL, TokenKind.EQUAL, TokenKind.EQUAL_EQUAL,
                                    TokenKind.LESS, TokenKind.LESS_EQUAL, TokenKind.GREATER,
                                    TokenKind.GREATER_EQUAL],
            "!==": [TokenKind.BANG_EQUAL, TokenKind.EQUAL],
            "<==": [TokenKind.LESS_EQUAL, TokenKind.EQUAL],
        }
        for case, expected in cases.items():
            self.assertEqual(expected + [TokenKind.EOF], kinds(case), case)

    def test_keywords_and_identifiers(self):
        cases = {
            "and class else false for fun if nil or print return super this true var while": [
                TokenKind.AND, TokenKind.CLASS, TokenKind.ELSE, TokenKind.FALSE, TokenKind.FOR, TokenKind.FUN,
                TokenKind.IF, TokenKind.NIL, TokenKind.OR, TokenKind.PRINT, TokenKind.RETURN, TokenKind.SUPER,
                TokenKind.THIS, TokenKind.TRUE, TokenKind.VAR, TokenKind.WHILE],
            "orchid _x x1 printer And": [TokenKind.IDENTIFIER] * 5,
        }
        for case, expected in cases.items():
            self.assertEqual(expected + [TokenKind.EOF], kinds(case), case)

    def test_identifier_lexeme(self):
        token = Lexer("_foo_42 ").scan()[0]
        self.assertEqual(Token(TokenKind.IDENTIFIER, "_foo_42", None, 1), token)

    def test_comment(self):
        lexer = Lexer("// comment\n1")
        self.assertEqual([Token(TokenKind.NUMBER, "1", 1.0, 2), Token(TokenKind.EOF, "", None, 2)], lexer.scan())
        self.assertFalse(lexer.errors)

        self.assertEqual([TokenKind.SLASH, TokenKind.NUMBER, TokenKind.EOF], kinds("/ 2 // 3 / 4"))

    def test_strings(self):
        tokens = Lexer("\"hello world\"").scan()
        self.assertEqual(Token(TokenKind.STRING, "\"hello world\"", "hello world", 1), tokens[0])

        tokens = Lexer("\"one\ntwo\" x").scan()
        self.assertEqual("one\ntwo", tokens[0].literal)
        self.assertEqual(2, tokens[1].line)

        tokens = Lexer("\"say \\\"hi\\\"\"").scan()
        self.assertEqual([TokenKind.STRING, TokenKind.EOF], [token.kind for token in tokens])
        self.assertEqual("say \\\"hi\\\"", tokens[0].literal)

    def test_unterminated_string(self):
        lexer = Lexer("\"abc")
        tokens = lexer.scan()

        self.assertEqual([TokenKind.EOF], [token.kind for token in tokens])
        self.assertEqual(1, len(lexer.errors))
        self.assertEqual("Unterminated string.", lexer.errors[0].msg)

    def test_unexpected_characters_collected(self):
        lexer = Lexer("1 @ 2\n# 3")
        tokens = lexer.scan()

        self.assertEqual([TokenKind.NUMBER] * 3 + [TokenKind.EOF], [token.kind for token in tokens])
        self.assertEqual([(1, "Unexpected character."), (2, "Unexpected character.")],
                         [(error.line, error.msg) for error in lexer.errors])

    def test_digits_and_letters_are_not_errors(self):
        should_pass = ["123", "abc", "a1 2b", "x_1 = 42.5;"]
        for case in should_pass:
            lexer = Lexer(case)
            lexer.scan()
            self.assertFalse(lexer.errors, case)

    def test_errors_reported(self):
        reported = []

        class Recorder:
            def report(self, error):
                reported.append((error.line, error.where, error.msg))

        Lexer("\n$", Recorder()).scan()
        self.assertEqual([(2, "", "Unexpected character.")], reported)

    def test_lines(self):
        tokens = Lexer("a\n\nb\r\n\tc").scan()
        self.assertEqual([1, 3, 4, 4], [token.line for token in tokens])

        lines = [token.line for token in Lexer("1\n\"x\ny\"\n// c\n2 3\n").scan()]
        self.assertEqual(sorted(lines), lines)
        self.assertEqual(6, lines[-1])

    def test_empty_source(self):
        self.assertEqual([Token(TokenKind.EOF, "", None, 1)], Lexer("").scan())

    def test_idempotent(self):
        source = "print (1 + x) == \"s\"; // done\ny = !nil;"
        self.assertEqual(Lexer(source).scan(), Lexer(source).scan())


if __name__ == '__main__':
    unittest.main()

"""treelox: a tree-walking interpreter for a small dynamically-typed scripting language.

Basic program flow:
    1. Lexer (core/lexical.py): source text -> flat list of Tokens, always ending with EOF
    2. Parser (core/parser.py): tokens -> list of statements (see core/syntax.py for the node set)
    3. Interpreter (core/interpreter.py): walks the statements against one global Environment

Errors from every stage go to a Reporter (lang/error.py); lang/session.py ties the stages together and
lang/shell.py provides the interactive mode.
"""

__version__ = "0.1.0"

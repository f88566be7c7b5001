"""Runs the treelox interpreter on a file, or in command-line mode when no file is given. Installed as the `treelox`
console script.

Exit codes follow sysexits.h: 64 usage, 65 lexical/syntax error, 66 unreadable file, 70 runtime error.
"""

import argparse
import sys

from treelox.lang.error import ErrorHandler, LoxError
from treelox.lang.session import Session
from treelox.lang.shell import Shell

EX_USAGE = 64
EX_DATAERR = 65
EX_NOINPUT = 66
EX_SOFTWARE = 70


def parse_define(arg):
    """argparse type for -D NAME=VALUE."""
    name, sep, value = arg.partition("=")
    if not sep or not name.isidentifier():
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got '{arg}'")
    return name, Session.literal(value)


def build_parser():
    parser = argparse.ArgumentParser(prog="treelox", description="Tree-walking interpreter for treelox scripts.")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("-D", "--define", help="bind a global before running (repeatable)", metavar="NAME=VALUE",
                        type=parse_define, action="append", default=[])
    parser.add_argument("--tokens", help="dump the scanned tokens", action="store_true")
    parser.add_argument("--ast", help="dump the parsed statements", action="store_true")
    return parser


def run_file(sess, path):
    """Runs the file at path in sess. Returns the process exit code."""
    try:
        with open(path, "r", encoding="utf-8") as file:
            source = file.read()
    except OSError:
        sess.reporter.throw(LoxError(f"'{path}' could not be opened"), code=EX_NOINPUT)
        return EX_NOINPUT

    result = sess.run(source)
    if not result.syntax_ok:
        return EX_DATAERR
    if not result.runtime_ok:
        return EX_SOFTWARE
    return 0


def main(argv=None):
    """Runs treelox interpreter. Called from the treelox console script."""
    try:
        args = build_parser().parse_args(argv)
    except SystemExit as exc:
        return EX_USAGE if exc.code else 0

    with ErrorHandler(fatal=args.file is not None) as error_handler:
        sess = Session(error_handler, dump_tokens=args.tokens, dump_ast=args.ast)
        for name, value in args.define:
            sess.define(name, value)

        if args.file is not None:
            return run_file(sess, args.file)

        Shell(sess).cmdloop()
        return 0

    return EX_SOFTWARE  # only reached when the handler swallowed an error


if __name__ == "__main__":
    sys.exit(main())

"""Handles interactive/command-line mode for the treelox interpreter. Uses cmd as backend."""

import cmd

from treelox.lang.session import Session


class Shell(cmd.Cmd):
    """treelox interpreter shell."""
    intro = "treelox :: tree-walking interpreter\nType 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    def default(self, line):
        """Runs arbitrary treelox code."""
        with self.sess.reporter:  # needed because cmd.Cmd automatically exits on Exception
            line, add_to_prev = Session.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            if line:
                self.sess.run(line)

    def onecmd(self, line):
        # mid-continuation, every line is code, even "help" or "exit"
        if self._tmp_line:
            return self.default(line)
        return super().onecmd(line)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to treelox!\n\n"
              "Statements end with ';'. Try 'print 1 + 2;' or 'print \"a\" + 1;'. Variables\n"
              "can't be declared from the shell, but names passed with -D NAME=VALUE on the\n"
              "command line can be read and reassigned: 'x = x * 2; print x;'.\n\n"
              "Unbalanced parentheses or an open string continue onto the next line.\n"
              "Type 'exit' or Ctrl-D to leave.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            self.sess.reporter.warn(f"unrecognized argument to exit: '{arg}'")
            return False
        return True

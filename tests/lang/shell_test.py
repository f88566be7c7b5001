import io
import re
import unittest

from treelox.lang.error import ErrorHandler
from treelox.lang.session import Session
from treelox.lang.shell import Shell

ANSI = re.compile(r"\x1b\[[0-9;]*m")


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        self.stderr = io.StringIO()
        self.stdout = io.StringIO()
        self.printed = []
        sess = Session(ErrorHandler(fatal=False, stream=self.stderr), self.printed.append)
        self.shell = Shell(sess, stdout=self.stdout)

    def feed(self, *lines):
        """Runs lines through the shell the way cmdloop would. Returns whether the shell asked to stop."""
        stop = False
        for line in lines:
            stop = self.shell.onecmd(line)
        return stop

    def test_runs_lines(self):
        self.feed("print 1 + 1;", "print \"x\";")
        self.assertEqual(["2", "x"], self.printed)

    def test_continuation(self):
        self.feed("print (1 +")
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)
        self.assertEqual([], self.printed)

        self.feed("2);")
        self.assertEqual(Shell._tmp_prompt, self.shell.prompt)
        self.assertEqual(["3"], self.printed)

    def test_keywords_inside_continuation_are_code(self):
        self.feed("print (", "exit", ");")
        self.assertIn("Undefined variable 'exit'.", ANSI.sub("", self.stderr.getvalue()))

    def test_errors_keep_shell_alive(self):
        self.assertFalse(self.feed("print -nil;", "print (;", "@"))
        self.feed("print 4;")
        self.assertEqual(["4"], self.printed)

    def test_state_persists_between_lines(self):
        self.shell.sess.define("n", 1.0)
        self.feed("n = n + 1;", "print n;")
        self.assertEqual(["2"], self.printed)

    def test_comment_only_line(self):
        self.assertFalse(self.feed("// nothing here"))
        self.assertEqual([], self.printed)
        self.assertEqual("", self.stderr.getvalue())

    def test_exit(self):
        self.assertTrue(self.feed("exit"))
        self.assertFalse(self.feed("exit now"))
        self.assertIn("warning: unrecognized argument to exit: 'now'", ANSI.sub("", self.stderr.getvalue()))

    def test_emptyline(self):
        self.feed("print 1;")
        self.feed("")
        self.assertEqual(["1"], self.printed)


if __name__ == '__main__':
    unittest.main()

"""Handles interactive/command-line mode for the calculator. Uses cmd as backend."""

import cmd

from regcalc.lang.error import InputError


class Shell(cmd.Cmd):
    """Register calculator shell. Prompts and the intro are only shown when stdin is a terminal, so piped input
    produces the same output as running a file.
    """
    intro = "Register calculator :: lazy evaluation\nType 'quit' to exit."
    prompt = "> "

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self.line_num = 0

        self.interactive = self.stdin.isatty()
        if not self.interactive:
            self.use_rawinput = False
            self.intro = None
            self.prompt = ""

    def readline(self):
        """Returns the next input line without its line ending, or None at end of input. Unlike cmd.Cmd, a line that
        reads 'EOF' is an ordinary line.
        """
        try:
            if self.use_rawinput:
                try:
                    return input(self.prompt)
                except EOFError:
                    return None

            self.stdout.write(self.prompt)
            self.stdout.flush()
            line = self.stdin.readline()
        except (OSError, UnicodeDecodeError) as error:
            raise InputError(self.sess.path, getattr(error, "strerror", None) or error) from error

        return line.rstrip("\r\n") if line else None

    def cmdloop(self, intro=None):
        """Reads and processes lines until end of input or 'quit'."""
        self.preloop()
        if intro is not None:
            self.intro = intro
        if self.intro:
            self.stdout.write(str(self.intro) + "\n")

        stop = False
        while not stop:
            line = self.readline()
            if line is None:
                stop = self.do_EOF("")
            else:
                line = self.precmd(line)
                stop = self.postcmd(self.onecmd(line), line)
        self.postloop()

    def onecmd(self, line):
        """Hands every line to the session. cmd's own command dispatch is bypassed because registers may be named
        'help' and the like.
        """
        self.line_num += 1
        self.sess.add(line, self.line_num)
        return not self.sess.running

    def do_EOF(self, arg):
        """Exits interpreter."""
        if self.interactive:
            print()
        return True

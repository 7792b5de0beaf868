"""Interactive prompt for the Lox interpreter. Uses cmd as backend."""

import cmd

from lox.session import Session


class Shell(cmd.Cmd):
    """Lox interpreter shell. Every line runs in the same session, so
    variables and functions persist between lines."""
    intro = "Lox tree-walk interpreter\nType 'exit' or press Ctrl-D to leave."
    prompt = "> "

    def __init__(self, sess: Session, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess

    def onecmd(self, line):
        # only 'exit' and EOF are shell commands; 'help(x);' is Lox source
        stripped = line.strip()
        if stripped in ('exit', 'EOF'):
            return super().onecmd(stripped)
        if not stripped:
            return self.emptyline()
        return self.default(line)

    def default(self, line):
        """Runs a line of Lox source."""
        self.sess.run(line)
        self.sess.reset_errors()  # an error in one line doesn't poison the next

    def emptyline(self):
        """Do not repeat previous line on empty input."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return True

    def do_exit(self, arg):
        """Exits interpreter."""
        return True

"""Handles interactive/command-line mode for sril interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """sril interpreter shell."""
    intro = "Welcome to sril!\nType '?' or 'help' for more information.\n"
    prompt = "→  "
    secondary_prompt = ".  "  # used for line continuations
    _tmp_prompt = "→  "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0
        self._start_line_num = 0  # line a continued statement started on

    def onecmd(self, line):
        """Lines continuing a block, and names bound in the session, are never shell commands."""
        if self._tmp_line and line != "EOF":
            return self.default(line.strip())

        name, __, __ = self.parseline(line)
        if name and line.lstrip().startswith(name) and name in self.sess.env:
            return self.default(line.strip())

        return super().onecmd(line)

    def default(self, line):
        """Executes arbitrary sril statement."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            if not self._tmp_line:
                self._start_line_num = self.line_num

            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            if not line:
                return  # only a comment

            result = self.sess.run(line, self._start_line_num)
            if result is not None:
                print(result, file=self.stdout)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the sril interpreter!\n\n"
              "sril is a tiny expression language with integer arithmetic, immutable \n"
              "bindings and lexically scoped blocks.\n\n"
              "Try it out by typing 'let a = 10 / 2'. This binds the value 5 to the name \n"
              "'a'. Next, try typing '{ let b = a b }', a block that evaluates to its last \n"
              "statement. Bindings made inside a block are forgotten once it ends.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True

"""Session control for sril. Runs statements against one persistent top-level environment, either line by line in
command-line mode or all at once in file interpretation mode.
"""

import logging

from sril.interpreter import evaluate, parse
from sril.lang import value
from sril.lang.env import Environment
from sril.lang.error import SrilException


logger = logging.getLogger("sril.session")


class Session:
    """Governs a sril session, with control over the top-level scope bindings accumulate in."""
    SH_FILE = "<in>"  # command-line interpreter filename
    COMMENT = ";;"    # rest of the line is ignored

    def __init__(self, error_handler, path=SH_FILE, cmd_line=True):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.env = Environment()
        self.statements = []      # list of (statement, line_num) read from path

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            self._read(path)
        elif not cmd_line:
            raise SrilException("'{}' is a reserved filename", path, diagnosis=False)

    def _read(self, path):
        """Splits the file at path into statements. A statement that leaves a '{' open continues on the next line."""
        statement, start = "", None

        try:
            with open(path, "r") as file:
                for line_num, line in enumerate(file, start=1):
                    statement, add_to_prev = Session.preprocess_line(line, statement)

                    if statement and start is None:
                        start = line_num
                    if statement and not add_to_prev:
                        self.statements.append((statement, start))
                        statement, start = "", None
        except OSError:
            raise SrilException("'{}' could not be opened", path, diagnosis=False)

        if statement:
            self.statements.append((statement, start))  # unterminated block, let the parser complain

        logger.debug("read %d statement(s) from %s", len(self.statements), path)

    @staticmethod
    def preprocess_line(line, prev=""):
        """Strips comments and surrounding whitespace from line, and appends it to prev (a statement continued from
        earlier lines). Returns the statement so far and whether or not it continues on the next line.
        """
        if Session.COMMENT in line:
            line = line[:line.index(Session.COMMENT)]  # get rid of comments
        line = line.strip()

        if prev:
            line = prev + "\n" + line if line else prev

        return line, line.count("{") > line.count("}")

    def run(self, line, line_num=None):
        """Parses and evaluates line in this session's environment. Returns the resulting Value, or None if it is Unit.
        Will raise any errors that are encountered.
        """
        self.error_handler.register_line(self.path, line, line_num)  # in case error is raised

        parsed = parse(line)
        logger.debug("parsed %r", parsed.statement)

        result = evaluate(parsed, self.env)
        logger.debug("%s => %s", parsed, result)

        self.error_handler.remove_line(self.path)  # error was not raised
        return None if result is value.Unit else result

    def run_file(self):
        """Runs the statements read from this session's file in order, yielding every result that is not Unit."""
        for statement, line_num in self.statements:
            result = self.run(statement, line_num)
            if result is not None:
                yield result

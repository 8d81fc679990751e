"""Error handling for sril. Only SrilExceptions should be encountered during running: if another type of error is
raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Hierarchy:

```
SrilException
 +-- ParseError                 ; malformed input, carries the unconsumed input at the point of failure
 |    +-- LiteralOutOfRangeError ; not backtracked over, aborts the whole parse
 +-- EvalError
      +-- BindingNotFoundError
      +-- DivisionByZeroError
      +-- IntegerOverflowError
      +-- NestingDepthError
```
"""

import sys

from termcolor import colored


class SrilException(Exception):
    """Templates an error message so that it can be used to throw a sril error. exprs are substituted into msg, and
    exprs[0] is the offending expr that is highlighted (from start to end) when the error is diagnosed.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*exprs) if any(exprs) else msg
        self.expr = exprs[0]
        self.end = end if end != -1 else len(self.expr)

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


class ParseError(SrilException):
    """Raised by the scanner and grammar when input cannot be parsed. remaining is the cursor at the point of failure."""
    recoverable = True

    def __init__(self, msg, remaining="", width=1, **kwargs):
        super().__init__(msg, **kwargs)
        self.remaining = remaining
        self.width = width

    def locate(self, source):
        """Points this error at its column in source, the full text that was handed to the parser."""
        self.expr = source
        self.start = max(len(source) - len(self.remaining), 0)
        self.end = self.start + self.width
        return self


class LiteralOutOfRangeError(ParseError):
    """Integer literal that does not fit a signed 32-bit integer."""
    recoverable = False


class EvalError(SrilException):
    """Raised while evaluating a parsed statement."""

    def __init__(self, msg, exprs=None, **kwargs):
        kwargs.setdefault("diagnosis", False)
        super().__init__(msg, exprs, **kwargs)


class BindingNotFoundError(EvalError):

    def __init__(self, name):
        super().__init__("binding with name '{}' does not exist", name)
        self.name = name


class DivisionByZeroError(EvalError):

    def __init__(self, lhs):
        super().__init__("attempt to divide '{}' by zero", str(lhs))


class IntegerOverflowError(EvalError):

    def __init__(self, expr):
        super().__init__("'{}' overflows a 32-bit integer", expr)


class NestingDepthError(EvalError):
    """Blocks nested deeper than the interpreter's stack allows."""

    def __init__(self):
        super().__init__("maximum nesting depth exceeded")


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report sril errors instead."""
    ERROR = "red"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after a successful Session run."""
        self.traceback[path] = (None, None)

    @staticmethod
    def diagnose(error):
        """Returns offending part of error.expr highlighted and bolded, with a caret underneath."""
        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Reports error using self.traceback, a dict of file: (line, line_num) representing origination of error."""
        stream = self.stream if self.stream is not None else sys.stderr

        error_msg = ""
        for file, (line, line_num) in self.traceback.items():
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        kind = "parse error: " if isinstance(error, ParseError) else "error: "
        error_msg += colored(kind, ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg, file=stream)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error), file=stream)

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:  # if error occurred, reset traceback (no need if error is fatal)
            self.remove_line(path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(SrilException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(SrilException("maximum nesting depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, SrilException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(SrilException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit

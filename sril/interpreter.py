"""sril interpreter entry points.

Basic program flow:
    1. Parser: parse() consumes exactly one statement off the input text and produces its syntax tree
        - For the grammar, see sril/pure/lexical.py
        - For the primitive extractors it is built from, see sril/pure/scanner.py
    2. Evaluation: evaluate() walks the tree against a caller-owned Environment and produces a Value
        - See sril/lang/evaluator.py and sril/lang/env.py
    3. Everything else (shell, file mode, error display) lives in sril/lang and only calls these two functions

"""

from sril.lang.error import NestingDepthError, ParseError
from sril.lang.evaluator import evaluate as evaluate_node
from sril.pure.lexical import Statement
from sril.pure.scanner import extract_whitespaces


class Parse:
    """A fully parsed statement, ready to be evaluated any number of times."""

    def __init__(self, statement):
        self.statement = statement

    def eval(self, env):
        return evaluate_node(self.statement, env)

    def __eq__(self, other):
        return isinstance(other, Parse) and other.statement == self.statement

    def __repr__(self):
        return f"Parse({self.statement!r})"

    def __str__(self):
        return str(self.statement)


def parse(text):
    """Parses one statement from text. Anything but whitespace left over after the statement is an error."""
    try:
        remaining, statement = Statement.parse(text)

        remaining, __ = extract_whitespaces(remaining)
        if remaining:
            raise ParseError("input was not consumed fully by parser", remaining, width=len(remaining))

    except ParseError as error:
        raise error.locate(text)
    except RecursionError:
        raise ParseError("maximum nesting depth exceeded", text).locate(text) from None

    return Parse(statement)


def evaluate(parsed, env):
    """Evaluates parsed against env. env persists between calls, so bindings accumulate."""
    try:
        return parsed.eval(env)
    except RecursionError:
        raise NestingDepthError() from None

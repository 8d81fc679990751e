"""sril abstract syntax tree and recursive-descent parser.

The `pure` directory contains syntax only: what a sril statement looks like, not what it means (see lang/evaluator.py
for that). The grammar can be loosely defined as follows:

```
<statement>     ::= <binding_def> | <expression>           ; tried in that order
<binding_def>   ::= "let" <ws>+ <identifier> <ws>+ "=" <ws>* <expression>
<expression>    ::= <operation> | <number> | <binding_usage> | <block>
<operation>     ::= <number> <ws>* <operator> <ws>* <number>  ; operands are literals, so "1 + 2 + 3" is not
                                                             ; a single operation
<operator>      ::= "+" | "-" | "*" | "/"
<number>        ::= <digit>+                                ; must fit a signed 32-bit integer
<binding_usage> ::= <identifier>                            ; resolved when evaluated, not when parsed
<block>         ::= "{" <ws>* (<statement> <ws>*)* "}"
<identifier>    ::= <letter> (<letter> | <digit>)*
```

Every node class exposes parse(s), which takes the cursor (the remaining input) and returns (remaining, node) or
raises ParseError. Alternatives are tried in a fixed order against the same cursor, so a failed attempt leaves
nothing behind.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from sril.lang.error import LiteralOutOfRangeError, ParseError
from sril.lang.value import INT_MAX
from sril.pure.scanner import (extract_digits, extract_identifier, extract_required_whitespaces, extract_tag,
                               extract_whitespaces)


def first_of(s, *alternatives):
    """Returns the result of the first alternative that parses s. If they all fail, raises the error of the one that
    got furthest into s (the last such one on ties). Non-recoverable errors are never backtracked over.
    """
    failures = []
    for alternative in alternatives:
        try:
            return alternative.parse(s)
        except ParseError as error:
            if not error.recoverable:
                raise
            failures.append(error)

    raise min(reversed(failures), key=lambda error: len(error.remaining))


class Grammar(ABC):
    """Superclass of every sril syntax node."""

    @classmethod
    @abstractmethod
    def parse(cls, s):
        """Parses a node of this type off the front of s and returns (remaining, node)."""


class Operator(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @classmethod
    def parse(cls, s):
        """Tries each operator in definition order."""
        for op in cls:
            try:
                return extract_tag(op.value, s), op
            except ParseError:
                continue
        raise ParseError("expected one of '+', '-', '*', '/'", s)

    def __str__(self):
        return self.value


class Statement(Grammar):
    """Either a BindingDef or a bare Expression."""

    @classmethod
    def parse(cls, s):
        return first_of(s, BindingDef, Expression)


class Expression(Statement):
    """Either an Operation, a Number, a BindingUsage or a Block."""

    @classmethod
    def parse(cls, s):
        return first_of(s, Operation, Number, BindingUsage, Block)


@dataclass(frozen=True)
class Number(Expression):
    value: int

    @classmethod
    def parse(cls, s):
        remaining, digits = extract_digits(s)

        value = int(digits)
        if value > INT_MAX:
            raise LiteralOutOfRangeError("integer literal '{}' does not fit in 32 bits", s, exprs=digits,
                                         width=len(digits))

        return remaining, cls(value)

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class Operation(Expression):
    lhs: Number
    rhs: Number
    op: Operator

    @classmethod
    def parse(cls, s):
        s, lhs = Number.parse(s)
        s, __ = extract_whitespaces(s)

        s, op = Operator.parse(s)
        s, __ = extract_whitespaces(s)

        s, rhs = Number.parse(s)

        return s, cls(lhs, rhs, op)

    def __str__(self):
        return f"{self.lhs} {self.op} {self.rhs}"


@dataclass(frozen=True)
class BindingUsage(Expression):
    name: str

    @classmethod
    def parse(cls, s):
        s, name = extract_identifier(s)
        return s, cls(name)

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Block(Expression):
    statements: tuple = ()

    @classmethod
    def parse(cls, s):
        s = extract_tag("{", s)
        s, __ = extract_whitespaces(s)

        statements = []
        while True:
            try:
                s, statement = Statement.parse(s)
            except ParseError as error:
                if not error.recoverable:
                    raise
                break  # no more statements, the closing brace should come next

            statements.append(statement)
            s, __ = extract_whitespaces(s)

        s = extract_tag("}", s)

        return s, cls(tuple(statements))

    def __str__(self):
        if not self.statements:
            return "{}"
        return "{ " + " ".join(str(statement) for statement in self.statements) + " }"


@dataclass(frozen=True)
class BindingDef(Statement):
    name: str
    val: Expression

    @classmethod
    def parse(cls, s):
        s = extract_tag("let", s)
        s, __ = extract_required_whitespaces(s)

        s, name = extract_identifier(s)
        s, __ = extract_required_whitespaces(s)

        s = extract_tag("=", s)
        s, __ = extract_whitespaces(s)

        s, val = Expression.parse(s)

        return s, cls(name, val)

    def __str__(self):
        return f"let {self.name} = {self.val}"

"""Runtime values of sril: 32-bit signed integers and Unit, the value of statements that produce nothing."""

from dataclasses import dataclass


INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1


class Value:
    """Superclass of every sril runtime value."""


@dataclass(frozen=True)
class Number(Value):
    value: int

    def __str__(self):
        return str(self.value)


class _Unit(Value):
    """Result of a binding definition or an empty block. Not printed by the shell."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "Unit"

    __str__ = __repr__


Unit = _Unit()


def in_range(value):
    """Whether or not value fits a signed 32-bit integer."""
    return INT_MIN <= value <= INT_MAX

"""Primitive extractors the sril grammar is built from.

The cursor is simply the remaining, unconsumed input string. Every extractor takes the cursor and returns a
(remainder, extracted) tuple, or raises a ParseError carrying the cursor it failed at. Strings are immutable, so a
caller that catches the error still holds the untouched cursor it started with, which is what makes backtracking in
the grammar free.
"""

from sril.lang.error import ParseError


WHITESPACE = (" ", "\n", "\t")


def safe_extract(accept, s):
    """Splits s after the longest prefix whose characters all satisfy accept. Never fails."""
    end = 0
    while end < len(s) and accept(s[end]):
        end += 1
    return s[end:], s[:end]


def extract(accept, s, error_msg):
    """Like safe_extract, but raises ParseError(error_msg) if nothing was extracted."""
    remainder, extracted = safe_extract(accept, s)
    if not extracted:
        raise ParseError(error_msg, s)
    return remainder, extracted


def is_ascii_digit(char):
    return "0" <= char <= "9"


def is_ascii_alpha(char):
    return char.isascii() and char.isalpha()


def extract_digits(s):
    return extract(is_ascii_digit, s, "Expected digits")


def extract_whitespaces(s):
    return safe_extract(lambda char: char in WHITESPACE, s)


def extract_required_whitespaces(s):
    return extract(lambda char: char in WHITESPACE, s, "Expected space")


def extract_identifier(s):
    """Identifiers start with an ASCII letter, and continue with letters or digits."""
    if not s or not is_ascii_alpha(s[0]):
        raise ParseError("Identifier not found", s)
    return extract(str.isalnum, s, "Expected identifier")


def extract_tag(text, s):
    """Returns the remainder of s after the literal text."""
    if not s.startswith(text):
        raise ParseError(f"expected {text}", s)
    return s[len(text):]

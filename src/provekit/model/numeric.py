"""
Conversion of Z3 values into exact Python values.

Booleans become ``bool``, integer numerals ``int`` and real numerals
``fractions.Fraction``. Nothing is approximated: a value that does not
have the expected shape is an error.
"""
from fractions import Fraction
import re

import z3

from ..errors import UndecodableValueError

_DIVISION_RE = re.compile(r"\(/ (-?\d+)\.0 (\d+)\.0\)")


def decode_bool(value: z3.ExprRef) -> bool:
    if z3.is_true(value):
        return True
    if z3.is_false(value):
        return False
    raise UndecodableValueError(f"expected a boolean value, got {value}", value)


def decode_int(value: z3.ExprRef) -> int:
    if not z3.is_int_value(value):
        raise UndecodableValueError(f"expected an integer value, got {value}", value)
    return value.as_long()


def decode_rational(value: z3.ExprRef) -> Fraction:
    """Decode a real value.

    Rational numerals are read from their numerator/denominator pair.
    Anything else falls back to the canonical text ``(/ n.0 d.0)``.
    """
    if z3.is_rational_value(value):
        return Fraction(value.numerator_as_long(), value.denominator_as_long())
    if z3.is_int_value(value):
        return Fraction(value.as_long())
    return parse_division_text(value.sexpr(), value)


def parse_division_text(text: str, term=None) -> Fraction:
    """Parse ``(/ <int>.0 <int>.0)`` into an exact fraction.

    >>> parse_division_text("(/ 10.0 3.0)")
    Fraction(10, 3)
    """
    m = _DIVISION_RE.fullmatch(text.strip())
    if m is None:
        raise UndecodableValueError(f"could not parse rational from {text!r}", term)

    numerator, denominator = int(m.group(1)), int(m.group(2))
    if denominator == 0:
        raise UndecodableValueError(f"zero denominator in {text!r}", term)
    return Fraction(numerator, denominator)

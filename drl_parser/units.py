"""Unit table and exact conversion of dimensioned literals to internal units.

Internal units follow the board geometry engine: lengths in nanometres,
angles in tenths of a degree, ratios in thousandths of a percent.
Conversion goes through ``decimal.Decimal`` so the same literal always
yields the same integer, with no binary floating point involved.
"""

from decimal import (
    Decimal, InvalidOperation, ROUND_HALF_UP, getcontext, localcontext,
)
from enum import Enum


class Dimension(Enum):
    LENGTH = 'length'
    ANGLE = 'angle'
    RATIO = 'ratio'
    COUNT = 'count'


class UnknownUnit(KeyError):
    """Raised by the conversion helpers for a suffix not in ``UNITS``."""


# suffix -> (dimension, internal units per one external unit)
UNITS = {
    'nm':   (Dimension.LENGTH, 1),
    'um':   (Dimension.LENGTH, 1000),
    'mm':   (Dimension.LENGTH, 1000000),
    'cm':   (Dimension.LENGTH, 10000000),
    'mil':  (Dimension.LENGTH, 25400),
    'mils': (Dimension.LENGTH, 25400),
    'thou': (Dimension.LENGTH, 25400),
    'in':   (Dimension.LENGTH, 25400000),
    'deg':  (Dimension.ANGLE, 10),
    '%':    (Dimension.RATIO, 1000),
}

# Unit used when writing each dimension back to text.
CANONICAL_UNITS = {
    Dimension.LENGTH: 'mm',
    Dimension.ANGLE: 'deg',
    Dimension.RATIO: '%',
}


def lookup_unit(unit):
    """Return ``(dimension, scale)`` for *unit*, matched case-insensitively."""
    try:
        return UNITS[unit.lower()]
    except KeyError:
        raise UnknownUnit(unit) from None


# Extra digits for quotients that do not terminate (mil, in).
_GUARD_DIGITS = 10


def _context(*numbers):
    """Decimal context wide enough to hold *numbers* and their product exactly."""
    ctx = getcontext().copy()
    digits = sum(len(n.as_tuple().digits) for n in numbers)
    ctx.prec = max(ctx.prec, digits + _GUARD_DIGITS)
    return ctx


def to_internal(text, unit):
    """Convert the decimal literal *text* in *unit* to internal units.

    Returns ``(value, dimension)``.  Ties round half away from zero.
    """
    dimension, scale = lookup_unit(unit)
    try:
        literal = Decimal(text)
    except InvalidOperation:
        raise ValueError(f"Not a decimal literal: {text!r}") from None
    scale = Decimal(scale)
    with localcontext(_context(literal, scale)):
        exact = literal * scale
        value = int(exact.to_integral_value(rounding=ROUND_HALF_UP))
    return value, dimension


def from_internal(value, unit):
    """Convert an internal-unit integer back to a ``Decimal`` in *unit*.

    Scales that are not powers of ten (mil, in) give a quotient carried to
    enough digits that converting it back yields *value* again.
    """
    _, scale = lookup_unit(unit)
    value, scale = Decimal(value), Decimal(scale)
    with localcontext(_context(value, scale)):
        return value / scale


def _plain(number):
    with localcontext(_context(number)):
        return format(number.normalize(), 'f')


def format_value(value, dimension):
    """Shortest exact DRL text for an internal-unit *value*."""
    if dimension == Dimension.COUNT:
        return str(value)
    unit = CANONICAL_UNITS[dimension]
    return _plain(from_internal(value, unit)) + unit

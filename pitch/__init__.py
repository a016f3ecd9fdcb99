"""Pitch values of a Scala scale.

A pitch is one scale step, given either as a cents offset from the scale's
1/1 or as an exact frequency ratio of two unsigned 128-bit integers:

    Cents(701.955)      written as  701.95500   (or 701.955 cents)
    Ratio(3, 2)         written as  3/2
    Ratio(2, 1)         written as  2/1         (or the bare integer 2)

Parsing follows the Scala convention that a '.' anywhere in the token marks a
cents value, so the '.' test runs before the '/' test. Ratios keep the terms
they were written with ("4/2" formats back as "4/2") but compare equal by
their reduced value, like fractions.Fraction.
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Union

import consts
import utils
from errors import ParseFloatError, ParseIntError


@dataclass(frozen=True)
class Cents:
    """A pitch given directly in cents (1200 cents = 2/1)."""

    value: float

    def to_cents(self) -> float:
        return self.value

    def to_note_offset(self) -> float:
        return utils.cents_to_note_offset(self.value)

    def to_frequency(self, basenote_hz: float) -> float:
        return utils.apply_cents(basenote_hz, self.value)

    def __str__(self) -> str:
        return f"{self.value:.{consts.CENTS_DECIMALS}f}"


@dataclass(frozen=True, eq=False)
class Ratio:
    """A pitch given as an exact frequency ratio numerator/denominator.

    Both terms must be integers in [0, 2**128 - 1]; the denominator must not
    be zero. The terms are stored as given, not reduced.
    """

    numerator: int
    denominator: int = 1

    def __post_init__(self):
        for term in (self.numerator, self.denominator):
            if isinstance(term, bool) or not isinstance(term, int):
                raise TypeError(f"ratio terms must be integers, got {term!r}")
            if term < 0 or term > consts.U128_MAX:
                raise ValueError(f"ratio term out of unsigned 128-bit range: {term}")
        if self.denominator == 0:
            raise ZeroDivisionError(f"Ratio({self.numerator}, 0)")

    @classmethod
    def from_fraction(cls, value: Fraction) -> "Ratio":
        if value < 0:
            raise ValueError(f"negative ratio: {value}")
        return cls(value.numerator, value.denominator)

    def as_fraction(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)

    def to_cents(self) -> float:
        return utils.ratio_to_cents(self.numerator, self.denominator)

    def to_note_offset(self) -> float:
        return utils.ratio_to_note_offset(self.numerator, self.denominator)

    def to_frequency(self, basenote_hz: float) -> float:
        return float(basenote_hz) * self.numerator / self.denominator

    def __eq__(self, other):
        if not isinstance(other, Ratio):
            return NotImplemented
        return self.numerator * other.denominator == other.numerator * self.denominator

    def __hash__(self):
        return hash(self.as_fraction())

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


Pitch = Union[Cents, Ratio]


def parse_pitch(text: str) -> Pitch:
    """Parse one pitch token (without its trailing '!' comment).

    Spaces are insignificant anywhere in the token. Raises ParseFloatError
    for a malformed cents value and ParseIntError for a malformed ratio or
    bare integer.
    """
    s = text.replace(" ", "")

    if "." in s:
        s = s.replace(consts.CENTS_UNIT, "")
        try:
            return Cents(utils.parse_float(s))
        except ValueError as e:
            raise ParseFloatError(str(e), token=text) from e

    if "/" in s:
        numer, denom = s.split("/", 1)
        try:
            n = utils.parse_uint(numer)
            d = utils.parse_uint(denom)
        except ValueError as e:
            raise ParseIntError(str(e), token=text) from e
        if d == 0:
            raise ParseIntError(f"zero denominator in ratio: {text!r}", token=text)
        return Ratio(n, d)

    try:
        return Ratio(utils.parse_uint(s), 1)
    except ValueError as e:
        raise ParseIntError(str(e), token=text) from e


def format_pitch(pitch: Pitch) -> str:
    """Format a pitch as a Scala pitch line (without line terminator)."""
    return str(pitch)


def to_pitch(value) -> Pitch:
    """Coerce a literal to a pitch.

    Pitches pass through; floats are cents, ints are ratios over 1, Fractions
    are ratios and strings are parsed with parse_pitch.
    """
    if isinstance(value, (Cents, Ratio)):
        return value
    if isinstance(value, bool):
        raise TypeError(f"cannot build a pitch from {value!r}")
    if isinstance(value, int):
        return Ratio(value, 1)
    if isinstance(value, Fraction):
        return Ratio.from_fraction(value)
    if isinstance(value, float):
        return Cents(value)
    if isinstance(value, str):
        return parse_pitch(value)
    raise TypeError(f"cannot build a pitch from {value!r}")

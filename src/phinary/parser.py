"""
parser.py — Text to PhiNumber

================================================================================
ACCEPTED NOTATIONS
================================================================================

    101.01          positional, radix point optional
    1.0:01          repeating block after ':'
    ..1010.1        complement notation (infinite run of leading 1s)
    1_1/10          mixed number (integer part, fraction)
    100/1001        simple fraction
    10½             trailing vulgar-fraction glyph
    ∞  -∞  無  -無  infinity / undefined sentinels
    0; 10, 100      continued fraction  a0 + 1/(a1 + 1/(a2 + ...))
    0; 10.01        Egyptian fraction   seed + 1/t1 + 1/t2 + ...

Digits are 0-9 and a-z (case-insensitive). Only 0 and 1 are standard; other
digits are accepted with their face value and reported.

================================================================================
ERROR CHANNEL
================================================================================

Parsing never raises for bad text. Unknown characters and non-binary digits
are recorded in ParseFlag and the offending fragment falls back to zero (or
to the default of its position). Callers inspect ParseResult to decide.

================================================================================
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, Flag, auto
from fractions import Fraction
import logging

from .core import DIGITS, INFINITY, INV_PHI, ONE, UNDEFINED, ZERO, PhiNumber
from .powers import phi_power


logger = logging.getLogger(__name__)


class ParseFlag(Flag):
    """What the parser recognized (or rejected) in its input."""
    NONE = 0
    NUMBER = auto()
    COMPLEMENT = auto()
    FRACTION = auto()
    MIXED = auto()
    CONTINUED = auto()
    EGYPTIAN = auto()
    NONSTANDARD_DIGIT = auto()
    INVALID_CHAR = auto()
    ANY_FRACTION = FRACTION | MIXED | CONTINUED | EGYPTIAN


class Notation(Enum):
    PLAIN = "plain"
    FRACTION = "fraction"
    MIXED = "mixed"
    CONTINUED = "continued"
    EGYPTIAN = "egyptian"


class Dialect(Enum):
    """How text containing ';' is read."""
    PLAIN = "plain"
    CONTINUED = "continued"
    EGYPTIAN = "egyptian"


FRACTION_CHARS: dict[str, tuple[int, int]] = {
    "½": (1, 2), "⅓": (1, 3), "¼": (1, 4), "⅕": (1, 5), "⅙": (1, 6),
    "⅐": (1, 7), "⅛": (1, 8), "⅑": (1, 9), "⅒": (1, 10), "⅔": (2, 3),
    "¾": (3, 4), "⅖": (2, 5), "⅗": (3, 5), "⅘": (4, 5), "⅚": (5, 6),
    "⅜": (3, 8), "⅝": (5, 8), "⅞": (7, 8), "↉": (0, 1),
}

_SENTINELS = {"∞": INFINITY, "-∞": INFINITY, "無": UNDEFINED, "-無": UNDEFINED}


# ==============================================================================
# PARSE RESULT
# ==============================================================================

@dataclass(frozen=True)
class ParseResult:
    """
    A parsed value together with its diagnostics.

    flags keeps the raw bitset; the properties give the tagged view
    (notation kind, complement, nonstandard digits, invalid characters).
    """
    value: PhiNumber
    flags: ParseFlag = ParseFlag.NONE

    @property
    def recognized_as_number(self) -> bool:
        return ParseFlag.NUMBER in self.flags

    @property
    def notation(self) -> Notation:
        if ParseFlag.EGYPTIAN in self.flags:
            return Notation.EGYPTIAN
        if ParseFlag.CONTINUED in self.flags:
            return Notation.CONTINUED
        if ParseFlag.MIXED in self.flags:
            return Notation.MIXED
        if ParseFlag.FRACTION in self.flags:
            return Notation.FRACTION
        return Notation.PLAIN

    @property
    def complement(self) -> bool:
        return ParseFlag.COMPLEMENT in self.flags

    @property
    def has_nonstandard_digit(self) -> bool:
        return ParseFlag.NONSTANDARD_DIGIT in self.flags

    @property
    def has_invalid_char(self) -> bool:
        return ParseFlag.INVALID_CHAR in self.flags

    @property
    def is_well_formed(self) -> bool:
        """Recognized as a number, with only standard digits and no stray characters."""
        return self.recognized_as_number and not (
            self.flags & (ParseFlag.NONSTANDARD_DIGIT | ParseFlag.INVALID_CHAR)
        )


# ==============================================================================
# FINITE POSITIONAL DECODING
# ==============================================================================

def parse_finite_phinary(text: str, negative: bool = False) -> ParseResult:
    """
    Decode a finite positional string (no ':' block) by place value.

    The leftmost digit weighs φ^(point - marker - 1); each following digit
    weighs φ⁻¹ times the previous one (-φ⁻¹ in base -φ). A leading '..' is
    complement notation and subtracts the next higher power afterwards.
    """
    st = "".join(text.split())
    minus = st.startswith("-")
    complement = st.startswith("..")
    if complement and negative:
        return ParseResult(INFINITY, ParseFlag.NUMBER)
    flags = ParseFlag.NUMBER | ParseFlag.COMPLEMENT if complement else ParseFlag.NONE
    marker = 1 if minus else 2 if complement else 0
    point = st.find(".", marker)
    if point == -1:
        point = len(st)
    first_place = point - marker - 1

    step = -INV_PHI if negative else INV_PHI
    power = phi_power(first_place, negative)
    result = ZERO
    for i in range(marker, len(st)):
        digit = DIGITS.find(st[i].lower())
        if digit > -1:
            flags |= ParseFlag.NUMBER
            result += power * digit
            power *= step
            if digit > 1:
                flags |= ParseFlag.NONSTANDARD_DIGIT
        elif i != point:
            flags |= ParseFlag.INVALID_CHAR
            logger.debug("Invalid character %r at %d in %r", st[i], i, st)
    if complement:
        result -= phi_power(first_place + 1, negative)
    if minus:
        result = -result
    return ParseResult(result, flags)


# ==============================================================================
# PARSER
# ==============================================================================

class PhinaryParser:
    """
    Single-use parser state: the accumulated flags of one parse call.

    Use parse_phinary() unless the flags of several fragments need to be
    collected together.
    """

    def __init__(self, negative: bool = False):
        self.negative = negative
        self.flags = ParseFlag.NONE

    def parse(self, text: str, dialect: Dialect = Dialect.PLAIN) -> PhiNumber:
        st = "".join(text.split())
        semi = st.find(";")
        if semi == -1:
            return self.parse_fraction(st)

        head, tail = st[:semi], st[semi + 1:].split(",")
        if dialect is Dialect.EGYPTIAN:
            self.flags |= ParseFlag.NUMBER | ParseFlag.EGYPTIAN
            x = self.parse_fraction(head)
            for i, term in enumerate(reversed(tail)):
                x += self.parse_fraction(term, ZERO if i > 0 else INFINITY).inv()
            return x

        self.flags |= ParseFlag.NUMBER | ParseFlag.CONTINUED
        x = INFINITY
        for i, term in enumerate([*reversed(tail), head]):
            x = self.parse_fraction(term, ZERO if i > 0 else INFINITY) + x.inv()
        return x

    def parse_fraction(self, s: str, default: PhiNumber = ZERO) -> PhiNumber:
        """Mixed number "i_n/d", simple fraction "n/d" or a positional term."""
        under = s.find("_")
        slash = s.find("/")
        if slash > -1 and under > slash:
            under = -1
        if under > -1:
            self.flags |= ParseFlag.NUMBER | ParseFlag.MIXED
        if slash > -1:
            self.flags |= ParseFlag.NUMBER | ParseFlag.FRACTION
        if slash == -1 and under == -1:
            return self.parse_positional(s, default)

        if slash == -1:
            slash = len(s)
        integer = self.parse_positional(s[:max(under, 0)])
        numerator = self.parse_positional(s[under + 1:slash])
        denominator = self.parse_positional(s[min(slash + 1, len(s)):], ONE)
        fraction = numerator / denominator
        if under > -1 and s.startswith("-"):
            fraction = -fraction
        return integer + fraction

    def parse_positional(self, s: str, default: PhiNumber = ZERO) -> PhiNumber:
        """Positional term, possibly repeating, complemented or ending in a glyph."""
        sentinel = _SENTINELS.get(s)
        if sentinel is not None:
            self.flags |= ParseFlag.NUMBER
            return sentinel

        complement_trim = 2 if s.startswith("..") else 0
        glyph = s[-1] if s and s[-1] in FRACTION_CHARS else None
        st = s
        if glyph is not None:
            numer, denom = FRACTION_CHARS[glyph]
            if numer > 1 or 2 <= denom <= 9:
                self.flags |= ParseFlag.NONSTANDARD_DIGIT
            st = s[:-1]
        if "." not in s[complement_trim:]:
            st += "."

        point = st.index(".", complement_trim)
        rep = st.find(":")
        no_rep = rep == -1 or rep == len(st) - (1 if point < rep else 2)
        digits = st if no_rep else st[:point] + st[point + 1:]
        n = parse_finite_phinary(digits.replace(":", "", 1), self.negative)
        self.flags |= n.flags
        if glyph is not None:
            self.flags |= ParseFlag.NUMBER
            self.flags |= ParseFlag.MIXED if n.recognized_as_number else ParseFlag.FRACTION

        if not n.recognized_as_number and glyph is None:
            return default
        if no_rep:
            value = n.value
        else:
            # Sum of the geometric series of repeated blocks
            prefix = st[:rep]
            prefix = prefix[:point] + prefix[point + 1:]
            head = parse_finite_phinary(prefix, self.negative).value
            before = 2 if point < rep else 1
            after = -1 if point < rep else 1
            value = (n.value - head) / (
                phi_power(len(st) - point - before, self.negative)
                - phi_power(rep - point + after, self.negative)
            )
        if glyph is None:
            return value
        # ⅒ reads as phinary 0.1
        if glyph == "⅒":
            return value + INV_PHI
        return value + Fraction(*FRACTION_CHARS[glyph])


def parse_phinary(text: str, dialect: Dialect = Dialect.PLAIN, negative: bool = False) -> ParseResult:
    """
    Parse phinary text in any supported notation.

    Args:
        text: input, whitespace anywhere is ignored
        dialect: reading of ';' separated input (continued unless EGYPTIAN)
        negative: read every positional term in base -φ

    Returns:
        ParseResult with the exact value and the recognized-notation flags
    """
    parser = PhinaryParser(negative)
    value = parser.parse(text, dialect)
    result = ParseResult(value, parser.flags)
    logger.debug("Parsed %r as %r (%s)", text, value, result.notation.value)
    return result

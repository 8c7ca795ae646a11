"""
formatter.py — PhiNumber to phinary text

================================================================================
OUTPUT ALPHABET
================================================================================

    0 1     digits
    .       radix point
    :       start of the repeating block
    -       sign (standard mode)
    ..      infinite run of leading 1s (complement mode)
    …       inexact truncation at max_digits
    _ /     mixed number and fraction separators
    ; ,     continued and Egyptian fraction separators
    space   digit grouping (every 4 digits from the radix point)

================================================================================
ALGORITHMS
================================================================================

Integer part: greedy over the powers of φ, largest first.
Fractional part: multiply the remainder by φ, emit 1 and subtract 1 when the
product reaches 1. Every expansion of an element of Q(√5) is eventually
periodic, so a repeated remainder marks the cycle; a hard cap still bounds
the loop.

Base -φ: the value is scaled by powers of -φ into [-1/φ, 1/φ²), then every
digit, integer or fractional, comes from the same step: multiply by -φ,
emit 1 and subtract 1 when the product reaches 1/φ².

================================================================================
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional
import logging

from .core import INV_PHI, ONE, PHI, ZERO, PhiNumber
from .parser import Notation
from .powers import phi_power


logger = logging.getLogger(__name__)

# Hard caps for the expansion loops
MAX_FRACTION_DIGITS = 10_000
MAX_INTEGER_DIGITS = 100_000
MAX_CONTINUED_TERMS = 1_000

# Remainders of a base -φ expansion stay in [-1/φ, 1/φ²)
_NEGATIVE_LOW = -INV_PHI
_NEGATIVE_HIGH = phi_power(-2)


# ==============================================================================
# RENDER OPTIONS
# ==============================================================================

@dataclass(frozen=True)
class RenderOptions:
    """
    Options shared by every renderer.

    group_digits: space every 4 digits, counted from the radix point
    max_digits:   fractional digit cap (None = MAX_FRACTION_DIGITS)
    alt:          dual representation (finite <-> repeating)
    complement:   negatives as ..1 complement instead of a '-' sign
    negative:     positional digits in base -φ (plain notation only,
                  excludes alt and complement)
    max_terms:    continued fraction term cap
    """
    group_digits: bool = False
    max_digits: Optional[int] = None
    alt: bool = False
    complement: bool = False
    negative: bool = False
    max_terms: int = MAX_CONTINUED_TERMS

    def __post_init__(self):
        if self.max_digits is not None and self.max_digits < 1:
            raise ValueError(f"max_digits must be >= 1, got {self.max_digits}")
        if self.max_terms < 1:
            raise ValueError(f"max_terms must be >= 1, got {self.max_terms}")
        if self.negative and (self.alt or self.complement):
            raise ValueError("alt and complement apply to base φ only")

    def replace(self, **changes) -> RenderOptions:
        return replace(self, **changes)


# ==============================================================================
# HELPERS
# ==============================================================================

def _sentinel_text(x: PhiNumber) -> str:
    return "NaN" if x.is_undefined() else "Infinity"


def phinteger_part(x: PhiNumber, complement: bool = False, negative: bool = False) -> tuple[str, PhiNumber]:
    """
    Integer digits of x and the remainder they leave.

    Standard mode renders negatives as '-' plus the digits of |x|. Complement
    mode subtracts |x| from an odd power and prefixes '..10' / '..1010'.
    In base -φ no sign is needed; the remainder lies in [-1/φ, 1/φ²) and may
    be negative.

    Raises:
        ValueError: if |x| needs more than MAX_INTEGER_DIGITS places
    """
    if not x.is_finite():
        return _sentinel_text(x), ZERO
    if negative:
        return _negative_integer_part(x)
    if x < 0 and not complement:
        digits, rest = phinteger_part(-x)
        return "-" + digits, rest

    v = abs(x)
    powers = [ONE, PHI]
    while v >= powers[-1]:
        if len(powers) > MAX_INTEGER_DIGITS:
            raise ValueError(f"Integer part exceeds {MAX_INTEGER_DIGITS} digits")
        powers.append(powers[-1] * PHI)
    complemented = x < 0 and complement
    if complemented:
        if len(powers) % 2 == 0:
            powers.append(powers[-1] * PHI)
        v = powers[-1] - v

    out = []
    for p in reversed(powers[:-1]):
        if v >= p:
            v -= p
            out.append("1")
        else:
            out.append("0")
    digits = "".join(out)
    if complemented:
        digits = ("..10" if digits.startswith("10") else "..1010") + digits
    return digits, v


def _next_digit(rest: PhiNumber, negative: bool = False) -> tuple[str, PhiNumber]:
    """Shift rest one place left; emit 1 when the product leaves the digit range."""
    if negative:
        t = rest * -PHI
        if t >= _NEGATIVE_HIGH:
            return "1", t.decrement()
        return "0", t
    t = rest * PHI
    if t >= 1:
        return "1", t.decrement()
    return "0", t


def _negative_integer_part(x: PhiNumber) -> tuple[str, PhiNumber]:
    """
    Base -φ integer digits.

    x is divided by -φ until it falls in [-1/φ, 1/φ²); the k divisions give
    k integer places, which _next_digit then reads off left to right. The
    first digit is always 1.
    """
    v, places = x, 0
    while not (v >= _NEGATIVE_LOW and v < _NEGATIVE_HIGH):
        if places > MAX_INTEGER_DIGITS:
            raise ValueError(f"Integer part exceeds {MAX_INTEGER_DIGITS} digits")
        v = v * -INV_PHI
        places += 1
    out = []
    for _ in range(places):
        digit, v = _next_digit(v, negative=True)
        out.append(digit)
    return "".join(out) or "0", v


def insert_spaces(chars: list[str], group_digits: bool, point: int = -1) -> str:
    """Group digits by 4 from the radix point, skipping sign and marker characters."""
    if group_digits:
        cut_off = len(chars) - (1 if chars and chars[-1] == "…" else 0)
        text = "".join(chars)
        if point > -1:
            pos = point - cut_off + (2 if ":" in text else 1)
        else:
            pos = -2 if ".:" in text else 0
        for i in range(cut_off - 2, -1, -1):
            if chars[i] in "01":
                pos += 1
                if pos % 4 == 0 and pos != 0:
                    chars.insert(i + 1, " ")
    return "".join(chars)


def _place_exponents(digits: str) -> list[int]:
    """Exponents of the 1-digits of a finite positional string, largest first."""
    point = digits.find(".")
    if point == -1:
        point = len(digits)
    return [
        point - 1 - i if i < point else point - i
        for i, ch in enumerate(digits)
        if ch == "1"
    ]


# ==============================================================================
# RENDERERS
# ==============================================================================

def to_base_phi(
    x: PhiNumber,
    group_digits: bool = False,
    max_digits: Optional[int] = None,
    alt: bool = False,
    complement: bool = False,
    negative: bool = False,
) -> str:
    """
    Positional phinary string of x.

    Args:
        group_digits: space every 4 digits
        max_digits: fractional digit cap, the last kept digit becomes '…'
        alt: the other of the two representations (like 0.999... == 1)
        complement: negatives in complement notation
        negative: all digits in base -φ, negatives need no sign

    Without max_digits the expansion stops at MAX_FRACTION_DIGITS digits. A
    period longer than that (1/10007 has one) ends in '…' rather than a ':'
    block; pass a larger max_digits to get the exact cycle.

    Returns:
        e.g. "10" for φ, "0.:010" for 1/2, "..1010" for -1 with complement,
        "11.:1" for -1 in base -φ

    Raises:
        ValueError: alt or complement combined with negative
    """
    if negative and (alt or complement):
        raise ValueError("alt and complement apply to base φ only")
    if not x.is_finite():
        return _sentinel_text(x)
    limit = MAX_FRACTION_DIGITS if max_digits is None else max_digits

    digits, rest = phinteger_part(x, complement, negative)
    result = list(digits)
    point = -1 if rest.is_zero() else len(result)
    if point > -1:
        result.append(".")
        seen: dict[PhiNumber, int] = {}
        while True:
            seen[rest] = len(seen)
            digit, rest = _next_digit(rest, negative)
            result.append(digit)
            if rest.is_zero() or rest in seen or len(seen) > limit:
                break
        rep = seen.get(rest, -1)
        if rep > -1:
            result.insert(point + rep + 1, ":")
        if len(seen) > limit:
            result[-1] = "…"
            logger.debug("Truncated expansion of %r at %d digits", x, limit)

    if alt and result == ["0"]:
        return "..1010.:10"
    if alt and ":" not in result and "…" not in result:
        if point > -1:
            result = result[:-1] + list(":01")
        else:
            last1 = len(result) - 1 - result[::-1].index("1")
            result[last1] = "0"
            for i in range(last1 + 1, len(result)):
                if (i - last1) % 2 != 0:
                    result[i] = "1"
            result.extend(".:" + ("01" if (last1 - len(result)) % 2 == 0 else "10"))
            if result[:2] == ["0", "1"]:
                del result[0]
    return insert_spaces(result, group_digits, point)


def to_base_phi_fraction(x: PhiNumber, group_digits: bool = False, complement: bool = False) -> str:
    """
    "numerator/denominator" with both sides in phinary.

    The fractional digits of both sides are padded to equal length and the
    points dropped, which scales numerator and denominator alike.
    """
    if not x.is_finite():
        return "0/0" if x.is_undefined() else "1/0"
    numer = list(to_base_phi(PhiNumber(x.a_numer, x.b_numer), complement=complement))
    if x.denom == 1 and "." not in numer[2 if numer[:2] == [".", "."] else 0:]:
        return insert_spaces(numer, group_digits)
    denom = list(to_base_phi(PhiNumber(x.denom)))

    def fractional_length(chars: list[str], start: int) -> int:
        try:
            point = chars.index(".", start)
        except ValueError:
            return 0
        del chars[point]
        return len(chars) - point

    diff = (
        fractional_length(numer, 2 if numer[:2] == [".", "."] else 0)
        - fractional_length(denom, 0)
    )
    numer.extend("0" * max(-diff, 0))
    denom.extend("0" * max(diff, 0))
    return (
        insert_spaces(numer, group_digits).lstrip("0 ")
        + "/"
        + insert_spaces(denom, group_digits).lstrip("0 ")
    )


def to_base_phi_mixed(x: PhiNumber, group_digits: bool = False, complement: bool = False) -> str:
    """Integer part and proper fraction joined by '_' when |x| > 1."""
    if not x.is_finite() or abs(x) <= 1:
        return to_base_phi_fraction(x, group_digits, complement)
    digits, rest = phinteger_part(x, complement)
    text = insert_spaces(list(digits), group_digits)
    if rest > 0:
        text += "_" + to_base_phi_fraction(rest, group_digits)
    return text


def to_base_phi_continued(
    x: PhiNumber,
    group_digits: bool = False,
    complement: bool = False,
    max_terms: int = MAX_CONTINUED_TERMS,
) -> str:
    """
    Continued fraction "a0; a1, a2, ..." with phinary integer terms.

    A negative value whose integer part ends in 0 is shifted by 1 (else by
    φ⁻¹) before splitting, which keeps the terms canonical. Expansion stops
    at a zero remainder or after max_terms terms (then ends with '…').
    """
    terms: list[str] = []
    while True:
        digits, rest = phinteger_part(x, complement)
        if x < 0 and not complement and rest != ZERO:
            diff = ONE if digits.endswith("0") else INV_PHI
            digits, shifted = phinteger_part(x - diff, complement)
            rest = diff - shifted
        terms.append(insert_spaces(list(digits), group_digits))
        if rest == ZERO:
            break
        if len(terms) >= max_terms:
            logger.warning("Continued fraction of %r cut after %d terms", x, max_terms)
            terms.append("…")
            break
        x = rest.inv()
    if len(terms) == 1:
        return terms[0]
    return terms[0] + "; " + ", ".join(terms[1:])


def to_base_phi_egyptian(x: PhiNumber, group_digits: bool = False, complement: bool = False) -> str:
    """
    Egyptian fraction "seed; t1, t2, ..." meaning seed + 1/t1 + 1/t2 + ...

    The seed is the integer part. The remainder N/d has a finite numerator
    N = Σ φᵏ, so it splits into the unit fractions 1/(d·φ⁻ᵏ), each of which
    is again a finite phinary string. Terms are listed largest fraction first.
    """
    digits, rest = phinteger_part(x, complement)
    seed = insert_spaces(list(digits), group_digits)
    if rest == ZERO:
        return seed
    sign = "-" if digits.startswith("-") else ""
    numerator = to_base_phi(PhiNumber(rest.a_numer, rest.b_numer))
    terms = [
        sign + to_base_phi(phi_power(-k) * rest.denom, group_digits)
        for k in _place_exponents(numerator)
    ]
    return seed + "; " + ", ".join(terms)


def format_phinary(x: PhiNumber, notation: Notation = Notation.PLAIN, options: Optional[RenderOptions] = None) -> str:
    """
    Render x in the given notation.

    options.negative, options.max_digits and options.alt only apply to the
    plain positional notation; the other notations always split in base φ.
    """
    if options is None:
        options = RenderOptions()
    if notation is Notation.PLAIN:
        return to_base_phi(
            x,
            group_digits=options.group_digits,
            max_digits=options.max_digits,
            alt=options.alt,
            complement=options.complement,
            negative=options.negative,
        )
    if notation is Notation.FRACTION:
        return to_base_phi_fraction(x, options.group_digits, options.complement)
    if notation is Notation.MIXED:
        return to_base_phi_mixed(x, options.group_digits, options.complement)
    if notation is Notation.CONTINUED:
        return to_base_phi_continued(x, options.group_digits, options.complement, options.max_terms)
    if notation is Notation.EGYPTIAN:
        return to_base_phi_egyptian(x, options.group_digits, options.complement)
    raise ValueError(f"Unknown notation: {notation}")

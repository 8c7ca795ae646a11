"""
core.py — Exact value type for the golden-ratio field Q(√5)

================================================================================
DESIGN PRINCIPLES
================================================================================

1. INTERNAL REPRESENTATION
   A value is the triple (a_numer, b_numer, denom) meaning
   (a_numer + b_numer·φ) / denom, with φ = (1 + √5) / 2.
   Python ints throughout. Never floating point.

2. CANONICAL FORM
   The triple is normalized once, at construction:
   - denom > 0 and gcd(a_numer, b_numer, denom) == 1 for finite values
   - (1, 0, 0) is infinity, (0, 0, 0) is undefined (0/0)
   Equality and hashing are therefore plain triple comparisons.

3. IMMUTABILITY
   Frozen dataclass. Every operation returns a new instance.
   No side effects, safe to share between threads.

4. NO EXCEPTIONS FOR DEGENERATE VALUES
   Division by zero gives infinity (or undefined for 0/0).
   Undefined absorbs every operation it takes part in.

5. EXACT ORDERING
   Comparison reduces the difference to A + B·φ with integer A, B and decides
   its sign by integer arithmetic only.

================================================================================
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
import math


DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

# Display only
_PHI_FLOAT = (1.0 + math.sqrt(5.0)) / 2.0


class NumberKind(Enum):
    """Tagged view of a PhiNumber: a finite field element or a sentinel."""
    FINITE = "finite"
    INFINITY = "infinity"
    UNDEFINED = "undefined"


# ==============================================================================
# NORMALIZATION
# ==============================================================================

def normalize(a_numer: int, b_numer: int, denom: int) -> tuple[int, int, int]:
    """
    Canonical triple for (a_numer + b_numer·φ) / denom.

    Sentinels collapse to (1, 0, 0) for infinity and (0, 0, 0) for undefined.
    Finite values are reduced by the common gcd, sign carried by numerators.
    """
    if denom == 0:
        if a_numer == 0 and b_numer == 0:
            return (0, 0, 0)
        return (1, 0, 0)
    g = max(math.gcd(a_numer, b_numer, denom), 1)
    if denom < 0:
        g = -g
    return (a_numer // g, b_numer // g, denom // g)


def reduce_fraction(numer: int, denom: int) -> tuple[int, int]:
    """Reduced (numerator, denominator) pair. Zero denominators are kept as sentinels."""
    if denom == 1:
        return (numer, 1)
    g = max(math.gcd(numer, denom), 1)
    if denom < 0 or (denom == 0 and numer < 0):
        g = -g
    return (numer // g, denom // g)


def fraction_string(pair: tuple[int, int], radix: int = 10) -> str:
    numer, denom = pair
    text = int_to_radix(numer, radix)
    if denom == 1:
        return text
    return f"{text}/{int_to_radix(denom, radix)}"


def int_to_radix(n: int, radix: int = 10) -> str:
    """Render an int in radix 2-36 with lowercase digits."""
    if not 2 <= radix <= 36:
        raise ValueError(f"radix must be 2-36, got {radix}")
    if radix == 10:
        return str(n)
    if n == 0:
        return "0"
    sign = "-" if n < 0 else ""
    n = abs(n)
    out = []
    while n:
        n, digit = divmod(n, radix)
        out.append(DIGITS[digit])
    return sign + "".join(reversed(out))


def _format_number_pair(a: str, b: str, symbol: str) -> str:
    """Join rational part and irrational coefficient as in "1/2+3φ/2"."""
    head = "" if a == "0" and b != "0" else a
    if b == "0":
        return head
    if b.startswith("-"):
        joiner = "-"
    elif a == "0":
        joiner = ""
    else:
        joiner = "+"
    coefficient = "" if b in ("1", "-1") else b.removeprefix("-")
    return head + joiner + coefficient + symbol


def _sign_of(A: int, B: int) -> int:
    """
    Exact sign of A + B·φ.

    With d = 2A + B and c = B the value is (d + c·√5) / 2. When d and c agree
    in sign that is the answer; otherwise the larger of d² and 5c² decides.
    """
    d = 2 * A + B
    c = B
    d_sign = (d > 0) - (d < 0)
    c_sign = (c > 0) - (c < 0)
    if d_sign == c_sign:
        return d_sign
    if d * d > 5 * c * c:
        return d_sign
    return c_sign


# ==============================================================================
# PHI NUMBER
# ==============================================================================

@dataclass(frozen=True, slots=True, order=False)
class PhiNumber:
    """
    Exact element of Q(√5), written (a_numer + b_numer·φ) / denom.

    INVARIANTS:
    1. The stored triple is always the output of normalize()
    2. denom > 0 for finite values, denom == 0 only for the two sentinels
    3. Operations never mutate; they return new PhiNumbers

    USAGE:
        x = PhiNumber(1, 1)          # 1 + φ == φ²
        x == PHI * PHI               # True
        PhiNumber(3) / 0             # INFINITY
    """
    a_numer: int
    b_numer: int = 0
    denom: int = 1

    def __post_init__(self):
        for name in ("a_numer", "b_numer", "denom"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(
                    f"PhiNumber components must be int, not {type(value).__name__} ({name})"
                )
        a, b, d = normalize(self.a_numer, self.b_numer, self.denom)
        object.__setattr__(self, "a_numer", a)
        object.__setattr__(self, "b_numer", b)
        object.__setattr__(self, "denom", d)

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def from_fraction(cls, value: Fraction | int) -> PhiNumber:
        """Rational value with no φ component."""
        value = Fraction(value)
        return cls(value.numerator, 0, value.denominator)

    @classmethod
    def from_root5(cls, r_numer: int, s_numer: int, denom: int = 1) -> PhiNumber:
        """
        Value given in the √5 basis: (r_numer + s_numer·√5) / denom.

        Since √5 = 2φ - 1 this stores a = r - s, b = 2s.
        """
        return cls(r_numer - s_numer, 2 * s_numer, denom)

    @classmethod
    def from_dict(cls, data: dict) -> PhiNumber:
        """Accepts the format produced by to_dict()."""
        return cls(int(data["a_numer"]), int(data["b_numer"]), int(data["denom"]))

    # -------------------------------------------------------------------------
    # Kind
    # -------------------------------------------------------------------------

    @property
    def kind(self) -> NumberKind:
        if self.denom != 0:
            return NumberKind.FINITE
        if self.a_numer == 0:
            return NumberKind.UNDEFINED
        return NumberKind.INFINITY

    def is_finite(self) -> bool:
        return self.denom != 0

    def is_infinite(self) -> bool:
        return self.kind is NumberKind.INFINITY

    def is_undefined(self) -> bool:
        return self.kind is NumberKind.UNDEFINED

    def is_zero(self) -> bool:
        return self.denom != 0 and self.a_numer == 0 and self.b_numer == 0

    def is_rational(self) -> bool:
        return self.denom != 0 and self.b_numer == 0

    # -------------------------------------------------------------------------
    # Derived rational views
    # -------------------------------------------------------------------------

    @property
    def a(self) -> tuple[int, int]:
        """Rational part as a reduced (numerator, denominator) pair."""
        return reduce_fraction(self.a_numer, self.denom)

    @property
    def b(self) -> tuple[int, int]:
        """Coefficient of φ as a reduced pair."""
        return reduce_fraction(self.b_numer, self.denom)

    @property
    def r(self) -> tuple[int, int]:
        """Rational part in the √5 basis, value == r + s·√5."""
        return reduce_fraction(2 * self.a_numer + self.b_numer, 2 * self.denom)

    @property
    def s(self) -> tuple[int, int]:
        """Coefficient of √5."""
        return reduce_fraction(self.b_numer, 2 * self.denom)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def add(self, other: PhiNumber | Fraction | int) -> PhiNumber:
        o = _coerce(other, "+")
        if self.is_undefined() or o.is_undefined():
            return UNDEFINED
        return PhiNumber(
            self.a_numer * o.denom + o.a_numer * self.denom,
            self.b_numer * o.denom + o.b_numer * self.denom,
            self.denom * o.denom,
        )

    def sub(self, other: PhiNumber | Fraction | int) -> PhiNumber:
        o = _coerce(other, "-")
        if self.is_undefined() or o.is_undefined():
            return UNDEFINED
        return PhiNumber(
            self.a_numer * o.denom - o.a_numer * self.denom,
            self.b_numer * o.denom - o.b_numer * self.denom,
            self.denom * o.denom,
        )

    def mul(self, other: PhiNumber | Fraction | int) -> PhiNumber:
        """Product using φ² = φ + 1."""
        o = _coerce(other, "*")
        if self.is_undefined() or o.is_undefined():
            return UNDEFINED
        return PhiNumber(
            self.a_numer * o.a_numer + self.b_numer * o.b_numer,
            self.a_numer * o.b_numer + o.a_numer * self.b_numer + self.b_numer * o.b_numer,
            self.denom * o.denom,
        )

    def div(self, other: PhiNumber | Fraction | int) -> PhiNumber:
        """
        Quotient by conjugate rationalization:

            (a+bφ)/(c+dφ) = (a+bφ)(c+d-dφ) / (c²+cd-d²)

        Dividing by zero yields infinity, or undefined when self is zero too.
        """
        o = _coerce(other, "/")
        if self.is_undefined() or o.is_undefined():
            return UNDEFINED
        if o.is_zero():
            return PhiNumber(abs(self.a_numer) + abs(self.b_numer), 0, 0)
        c, d = o.a_numer, o.b_numer
        return PhiNumber(
            o.denom * (self.a_numer * c + self.a_numer * d - self.b_numer * d),
            o.denom * (self.b_numer * c - self.a_numer * d),
            self.denom * (c * c + c * d - d * d),
        )

    def inv(self) -> PhiNumber:
        """Reciprocal: 1/(a+bφ) = (a+b-bφ)/(a²+ab-b²)."""
        if self.is_undefined():
            return UNDEFINED
        if self.is_zero():
            return INFINITY
        a, b = self.a_numer, self.b_numer
        return PhiNumber((a + b) * self.denom, -b * self.denom, a * a + a * b - b * b)

    def neg(self) -> PhiNumber:
        return PhiNumber(-self.a_numer, -self.b_numer, self.denom)

    def increment(self) -> PhiNumber:
        """self + 1"""
        return PhiNumber(self.a_numer + self.denom, self.b_numer, self.denom)

    def decrement(self) -> PhiNumber:
        """self - 1"""
        return PhiNumber(self.a_numer - self.denom, self.b_numer, self.denom)

    def __add__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return _coerce(other, "+").add(self)

    def __sub__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.sub(other)

    def __rsub__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return _coerce(other, "-").sub(self)

    def __mul__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.mul(other)

    def __rmul__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return _coerce(other, "*").mul(self)

    def __truediv__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return self.div(other)

    def __rtruediv__(self, other):
        if not _is_operand(other):
            return NotImplemented
        return _coerce(other, "/").div(self)

    def __neg__(self) -> PhiNumber:
        return self.neg()

    def __pos__(self) -> PhiNumber:
        return self

    def __abs__(self) -> PhiNumber:
        if self.compare(0) == -1:
            return self.neg()
        return self

    def __bool__(self) -> bool:
        return not self.is_zero()

    # -------------------------------------------------------------------------
    # Ordering
    # -------------------------------------------------------------------------

    def compare(self, other: PhiNumber | Fraction | int) -> int | None:
        """
        -1, 0 or 1 as self is less than, equal to or greater than other.

        Infinity ranks above every finite value. Undefined is unordered and
        gives None.
        """
        if isinstance(other, float):
            raise TypeError("Cannot compare PhiNumber with float; convert explicitly")
        if self.is_undefined():
            return None
        if isinstance(other, PhiNumber):
            if other.is_undefined():
                return None
            if self.denom == 0:
                return 0 if other.denom == 0 else 1
            if other.denom == 0:
                return -1
            return _sign_of(
                self.a_numer * other.denom - other.a_numer * self.denom,
                self.b_numer * other.denom - other.b_numer * self.denom,
            )
        if isinstance(other, int):
            if self.denom == 0:
                return 1
            return _sign_of(self.a_numer - other * self.denom, self.b_numer)
        if isinstance(other, Fraction):
            if self.denom == 0:
                return 1
            p, q = other.numerator, other.denominator
            return _sign_of(self.a_numer * q - p * self.denom, self.b_numer * q)
        raise TypeError(f"Cannot compare PhiNumber with {type(other).__name__}")

    def sign(self) -> int | None:
        return self.compare(0)

    def __lt__(self, other) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return self.compare(other) == -1

    def __le__(self, other) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return self.compare(other) in (-1, 0)

    def __gt__(self, other) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return self.compare(other) == 1

    def __ge__(self, other) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return self.compare(other) in (0, 1)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PhiNumber):
            return (
                self.a_numer == other.a_numer
                and self.b_numer == other.b_numer
                and self.denom == other.denom
            )
        if isinstance(other, (int, Fraction)) and not isinstance(other, bool):
            return self.is_rational() and Fraction(self.a_numer, self.denom) == other
        return NotImplemented

    def __hash__(self) -> int:
        # Rational values hash like the equal int / Fraction
        if self.is_rational():
            return hash(Fraction(self.a_numer, self.denom))
        return hash((self.a_numer, self.b_numer, self.denom))

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def to_float(self) -> float:
        """
        Approximate value as float.

        NOTE: display only. Never feed the result back into arithmetic.
        """
        if self.is_undefined():
            return math.nan
        if self.is_infinite():
            return math.inf
        return float(Fraction(self.a_numer, self.denom)) + float(Fraction(self.b_numer, self.denom)) * _PHI_FLOAT

    def __float__(self) -> float:
        return self.to_float()

    def to_string(self, root5: bool = False, radix: int = 10) -> str:
        """Algebraic notation, e.g. "1/2+3φ/2", or "1/2+√5̅/2" with root5=True."""
        if root5:
            s_numer, s_denom = self.s
            symbol = "√5̅" + ("" if s_denom == 1 else "/" + int_to_radix(s_denom, radix))
            return _format_number_pair(
                fraction_string(self.r, radix), int_to_radix(s_numer, radix), symbol
            )
        b_numer, b_denom = self.b
        symbol = "φ" + ("" if b_denom == 1 else "/" + int_to_radix(b_denom, radix))
        return _format_number_pair(
            fraction_string(self.a, radix), int_to_radix(b_numer, radix), symbol
        )

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"PhiNumber({self.a_numer}, {self.b_numer}, {self.denom})"

    def to_dict(self) -> dict:
        """
        Serialize for persistence/API.

        Format: {"a_numer": int, "b_numer": int, "denom": int}
        """
        return {"a_numer": self.a_numer, "b_numer": self.b_numer, "denom": self.denom}


# ==============================================================================
# OPERAND COERCION
# ==============================================================================

def _is_operand(value: object) -> bool:
    return isinstance(value, (PhiNumber, int, Fraction, float)) and not isinstance(value, bool)


def _coerce(value: PhiNumber | Fraction | int, op: str) -> PhiNumber:
    if isinstance(value, PhiNumber):
        return value
    if isinstance(value, float):
        raise TypeError(
            f"Operation not allowed: PhiNumber {op} float. "
            f"Use Fraction or PhiNumber for exact values."
        )
    if isinstance(value, bool) or not isinstance(value, (int, Fraction)):
        raise TypeError(f"Operation not allowed: PhiNumber {op} {type(value).__name__}")
    return PhiNumber.from_fraction(value)


# ==============================================================================
# CONSTANTS
# ==============================================================================

ZERO = PhiNumber(0)
ONE = PhiNumber(1)
PHI = PhiNumber(0, 1)
INV_PHI = PhiNumber(-1, 1)
INFINITY = PhiNumber(1, 0, 0)
UNDEFINED = PhiNumber(0, 0, 0)

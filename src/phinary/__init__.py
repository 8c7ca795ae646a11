"""
phinary — Exact golden-ratio base arithmetic and notation conversion

Numbers are exact elements of Q(√5), held as (a + b·φ) / denom with Python
ints, parsed from and rendered to base-φ text in several notations.

================================================================================
QUICK START
================================================================================

Arithmetic:

    from phinary import PhiNumber, PHI, ONE

    PHI * PHI == PHI + ONE              # True, exactly
    PhiNumber(1) / 2                    # PhiNumber(1, 0, 2)
    ONE / 0                             # INFINITY, never an exception

Text conversion:

    from phinary import parse_phinary, to_base_phi, Dialect

    to_base_phi(PHI)                    # "10"
    to_base_phi(PhiNumber(1, 0, 2))     # "0.:010"  (':' starts the cycle)
    parse_phinary("0.:010").value       # PhiNumber(1, 0, 2)
    parse_phinary("0; 10, 100").value   # continued fraction -> 1/2

Other notations:

    from phinary import format_phinary, Notation, RenderOptions

    format_phinary(x, Notation.MIXED)
    format_phinary(x, Notation.CONTINUED, RenderOptions(group_digits=True))

================================================================================
"""

# Value type
from .core import (
    PhiNumber,
    NumberKind,
    normalize,
    reduce_fraction,
    ZERO,
    ONE,
    PHI,
    INV_PHI,
    INFINITY,
    UNDEFINED,
)

# Power / Fibonacci engine
from .powers import (
    phi_power,
    fibonacci,
    matrix_fibonacci,
)

# Parser
from .parser import (
    ParseFlag,
    ParseResult,
    Notation,
    Dialect,
    PhinaryParser,
    parse_phinary,
    parse_finite_phinary,
)

# Formatter
from .formatter import (
    RenderOptions,
    phinteger_part,
    insert_spaces,
    to_base_phi,
    to_base_phi_fraction,
    to_base_phi_mixed,
    to_base_phi_continued,
    to_base_phi_egyptian,
    format_phinary,
)

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Core
    "PhiNumber",
    "NumberKind",
    "normalize",
    "reduce_fraction",
    "ZERO",
    "ONE",
    "PHI",
    "INV_PHI",
    "INFINITY",
    "UNDEFINED",
    # Powers
    "phi_power",
    "fibonacci",
    "matrix_fibonacci",
    # Parser
    "ParseFlag",
    "ParseResult",
    "Notation",
    "Dialect",
    "PhinaryParser",
    "parse_phinary",
    "parse_finite_phinary",
    # Formatter
    "RenderOptions",
    "phinteger_part",
    "insert_spaces",
    "to_base_phi",
    "to_base_phi_fraction",
    "to_base_phi_mixed",
    "to_base_phi_continued",
    "to_base_phi_egyptian",
    "format_phinary",
]

"""
powers.py — Powers of φ and Fibonacci numbers

φⁿ = F(n-1) + F(n)·φ for every integer n, so place values of a phinary
numeral are computed from a Fibonacci pair. The pair comes from the doubling
identities

    F(2k-1) = F(k-1)² + F(k)²
    F(2k)   = F(k)·(F(k) + 2·F(k-1))

applied once per bit of n, iteratively.
"""

from __future__ import annotations

from .core import PhiNumber


def matrix_fibonacci(n: int) -> tuple[int, int]:
    """(F(n-1), F(n)) for n >= 1 in O(log n) steps."""
    if not isinstance(n, int) or isinstance(n, bool):
        raise TypeError(f"n must be int, not {type(n).__name__}")
    if n < 1:
        raise ValueError(f"n must be >= 1, got {n}")
    prev, cur = 0, 1  # k = 1
    for bit in bin(n)[3:]:
        prev, cur = prev * prev + cur * cur, cur * (cur + 2 * prev)  # k -> 2k
        if bit == "1":
            prev, cur = cur, prev + cur  # 2k -> 2k + 1
    return prev, cur


def phi_power(n: int, negative: bool = False) -> PhiNumber:
    """
    φⁿ as an exact PhiNumber, for any integer n.

    Non-positive exponents use φ⁻ᵐ = (-1)ᵐ·(F(m+1) - F(m)·φ).
    With negative=True this is (-φ)ⁿ: odd powers change sign.
    """
    if n >= 1:
        f_prev, f_cur = matrix_fibonacci(n)
        power = PhiNumber(f_prev, f_cur)
    else:
        f_prev, f_cur = matrix_fibonacci(1 - n)
        if n % 2 == 0:
            power = PhiNumber(f_cur, -f_prev)
        else:
            power = PhiNumber(-f_cur, f_prev)
    if negative and n % 2 != 0:
        return -power
    return power


def fibonacci(n: int) -> int:
    """F(n), extended to negative n by F(-n) = (-1)^(n+1)·F(n)."""
    if n > 0:
        return matrix_fibonacci(n)[1]
    if n < 0:
        value = matrix_fibonacci(-n)[1]
        return -value if n % 2 == 0 else value
    return 0

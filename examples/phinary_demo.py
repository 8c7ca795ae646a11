#!/usr/bin/env python3
"""
phinary_demo.py — Base φ, exactly

================================================================================
THE PROBLEM
================================================================================

    >>> phi = (1 + 5 ** 0.5) / 2
    >>> phi ** 2 == phi + 1
    False

φ² = φ + 1 is the defining identity of the golden ratio, and a float cannot
keep it. Any digit expansion in base φ built on floats drifts the same way.

================================================================================
THE FIX
================================================================================

Keep every value exact in Q(√5): (a + b·φ) / d with integers a, b, d.

    from phinary import PHI, ONE

    assert PHI * PHI == PHI + ONE

Digit strings are then produced and read back without any loss:

    0.:010      1/2 (repeating block after ':')
    ..1010      -1 in complement notation
    100/1001    1/2 as a phinary fraction

================================================================================
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from phinary import (
    PhiNumber, Notation, Dialect, RenderOptions,
    parse_phinary, format_phinary, phi_power, fibonacci,
    PHI, ONE, INFINITY,
)


def demonstrate_float_drift():
    """Show the floating-point failure."""
    print("=" * 60)
    print("THE PROBLEM")
    print("=" * 60)
    print()
    phi = (1 + 5 ** 0.5) / 2
    print(">>> phi ** 2 == phi + 1")
    print(f"{phi ** 2 == phi + 1}")
    print(f"Diff: {phi ** 2 - (phi + 1)}")
    print()


def demonstrate_exact_arithmetic():
    """Show the field arithmetic."""
    print("=" * 60)
    print("EXACT ARITHMETIC")
    print("=" * 60)
    print()
    print(f"φ² == φ + 1:  {PHI * PHI == PHI + ONE}")
    print(f"1/φ:          {ONE / PHI}")
    print(f"φ¹⁰:          {phi_power(10)}   (F(9) + F(10)·φ = {fibonacci(9)} + {fibonacci(10)}φ)")
    print(f"1/0:          {ONE / 0}")
    print(f"∞ - ∞:        {INFINITY - INFINITY}")
    print()


def demonstrate_notations():
    """Render one value in every notation."""
    print("=" * 60)
    print("NOTATIONS")
    print("=" * 60)
    print()
    half = PhiNumber(1, 0, 2)
    for notation in Notation:
        print(f"  1/2 {notation.name.lower():<10} {format_phinary(half, notation)}")
    print()
    options = RenderOptions(complement=True)
    print(f"  -1/2 complement    {format_phinary(-half, options=options)}")
    print(f"  2 alternate        {format_phinary(PhiNumber(2), options=RenderOptions(alt=True))}")
    print(f"  5+3φ grouped       {format_phinary(PhiNumber(5, 3), options=RenderOptions(group_digits=True))}")
    print()


def demonstrate_parsing():
    """Read strings back, with diagnostics."""
    print("=" * 60)
    print("PARSING")
    print("=" * 60)
    print()
    samples = [
        ("0.:010", Dialect.PLAIN),
        ("..1010", Dialect.PLAIN),
        ("1_100/1001", Dialect.PLAIN),
        ("0; 10, 100", Dialect.CONTINUED),
        ("0; 10.01", Dialect.EGYPTIAN),
        ("½", Dialect.PLAIN),
        ("12", Dialect.PLAIN),
        ("1#0", Dialect.PLAIN),
    ]
    for text, dialect in samples:
        result = parse_phinary(text, dialect)
        print(f"  {text!r:<14} -> {str(result.value):<10} {result.notation.name:<10} {result.flags}")
    print()


def demonstrate_serialization():
    """Show lossless serialization."""
    print("=" * 60)
    print("SERIALIZATION")
    print("=" * 60)
    print()
    original = phi_power(-3)
    data = original.to_dict()
    restored = PhiNumber.from_dict(data)
    print(f"Original:   {original}")
    print(f"Serialized: {data}")
    print(f"Equal:      {original == restored}")
    print()


def main():
    """Run all demonstrations."""
    demonstrate_float_drift()
    demonstrate_exact_arithmetic()
    demonstrate_notations()
    demonstrate_parsing()
    demonstrate_serialization()


if __name__ == "__main__":
    main()

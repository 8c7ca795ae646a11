"""
test_parser.py — Test suite for phinary text parsing

================================================================================
TEST STRUCTURE
================================================================================

1. POSITIONAL TERMS
   Digits, radix point, repeating block, complement, sentinels, glyphs.

2. FRACTION NOTATIONS
   Simple and mixed fractions, continued and Egyptian fractions.

3. DIAGNOSTICS
   Flags for nonstandard digits and invalid characters; parsing never raises.

================================================================================
"""

import logging
from fractions import Fraction

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from phinary import (
    PhiNumber, ParseFlag, Notation, Dialect, PhinaryParser,
    parse_phinary, parse_finite_phinary, phi_power,
    ZERO, ONE, PHI, INV_PHI, INFINITY, UNDEFINED,
)


# ==============================================================================
# UNIT TESTS: Positional terms
# ==============================================================================

class TestPositional:

    def test_phi(self):
        result = parse_phinary("10")
        assert result.value == PHI
        assert result.recognized_as_number
        assert result.notation is Notation.PLAIN
        assert result.is_well_formed

    def test_integer_places(self):
        assert parse_phinary("1").value == ONE
        assert parse_phinary("100").value == PHI + ONE
        assert parse_phinary("101").value == PhiNumber(2, 1)

    def test_fractional_places(self):
        assert parse_phinary("0.1").value == INV_PHI
        assert parse_phinary("0.01").value == phi_power(-2)
        assert parse_phinary(".1").value == INV_PHI

    def test_leading_minus(self):
        assert parse_phinary("-10").value == -PHI
        assert parse_phinary("-1.1").value == -PHI

    def test_whitespace_ignored(self):
        assert parse_phinary(" 1 0100 .01 ").value == PhiNumber(5, 3)

    def test_repeating_block(self):
        assert parse_phinary("0.:1").value == PHI
        assert parse_phinary("1.:01").value == PHI
        assert parse_phinary("0.:010").value == Fraction(1, 2)
        assert parse_phinary("10.:10").value == PHI + ONE

    def test_trailing_repeat_marker_is_finite(self):
        assert parse_phinary("10:").value == PHI
        assert parse_phinary("1.01:").value == parse_phinary("1.01").value

    def test_complement(self):
        result = parse_phinary("..1010")
        assert result.value == -ONE
        assert result.complement
        assert parse_phinary("..1010.:010").value == Fraction(-1, 2)

    def test_alternate_zero(self):
        assert parse_phinary("..1010.:10").value == ZERO

    def test_sentinels(self):
        assert parse_phinary("∞").value == INFINITY
        assert parse_phinary("-∞").value == INFINITY
        assert parse_phinary("無").value == UNDEFINED
        assert parse_phinary("-無").value == UNDEFINED
        assert parse_phinary("∞").recognized_as_number

    def test_negative_base(self):
        assert parse_phinary("11", negative=True).value == ONE - PHI
        assert parse_phinary("100", negative=True).value == PHI + ONE
        assert parse_phinary("0.1", negative=True).value == -INV_PHI

    def test_complement_in_negative_base_is_infinite(self):
        assert parse_phinary("..1", negative=True).value == INFINITY


class TestGlyphs:

    def test_half(self):
        result = parse_phinary("½")
        assert result.value == Fraction(1, 2)
        assert result.value.a == (1, 2)
        assert result.notation is Notation.FRACTION
        assert result.has_nonstandard_digit

    def test_digits_before_glyph_make_a_mixed_number(self):
        result = parse_phinary("1½")
        assert result.value == Fraction(3, 2)
        assert result.notation is Notation.MIXED

    def test_tenth_glyph_is_phinary_point_one(self):
        result = parse_phinary("⅒")
        assert result.value == INV_PHI
        assert not result.has_nonstandard_digit

    def test_zero_thirds_glyph(self):
        result = parse_phinary("↉")
        assert result.value == ZERO
        assert not result.has_nonstandard_digit

    def test_glyph_with_large_numerator(self):
        result = parse_phinary("⅚")
        assert result.value == Fraction(5, 6)
        assert result.has_nonstandard_digit


# ==============================================================================
# UNIT TESTS: Fraction notations
# ==============================================================================

class TestFractions:

    def test_simple_fraction(self):
        result = parse_phinary("100/1001")
        assert result.value == Fraction(1, 2)
        assert result.notation is Notation.FRACTION

    def test_division_by_zero(self):
        value = parse_phinary("1/0").value
        assert (value.a_numer, value.b_numer, value.denom) == (1, 0, 0)
        assert parse_phinary("0/0").value == UNDEFINED

    def test_empty_denominator_is_one(self):
        assert parse_phinary("10/").value == PHI

    def test_mixed_number(self):
        result = parse_phinary("1_1/10")
        assert result.value == PHI
        assert result.notation is Notation.MIXED
        assert ParseFlag.FRACTION in result.flags

    def test_sign_of_mixed_number_applies_to_fraction(self):
        assert parse_phinary("-1_1/10").value == -PHI
        assert parse_phinary("-1_100/1001").value == Fraction(-3, 2)

    def test_underscore_after_slash_is_not_a_separator(self):
        result = parse_phinary("1/10_1")
        assert ParseFlag.MIXED not in result.flags
        assert result.has_invalid_char
        assert result.value == ONE / (phi_power(3) + PHI)

    def test_mixed_without_slash(self):
        assert parse_phinary("1_10").value == ONE + PHI


class TestContinued:

    def test_half(self):
        result = parse_phinary("0; 10, 100", Dialect.CONTINUED)
        assert result.value == Fraction(1, 2)
        assert result.notation is Notation.CONTINUED

    def test_plain_dialect_reads_semicolon_as_continued(self):
        assert parse_phinary("1; 10, 100").value == Fraction(3, 2)

    def test_negative_seed(self):
        assert parse_phinary("-1; 10, 100").value == Fraction(-1, 2)

    def test_single_term(self):
        assert parse_phinary("1; 10").value == ONE + INV_PHI

    def test_empty_last_term(self):
        assert parse_phinary("10;").value == PHI


class TestEgyptian:

    def test_half(self):
        result = parse_phinary("0; 10.01", Dialect.EGYPTIAN)
        assert result.value == Fraction(1, 2)
        assert result.notation is Notation.EGYPTIAN

    def test_several_terms(self):
        # 1 + 1/φ + 1/φ² == 2
        assert parse_phinary("1; 10, 100", Dialect.EGYPTIAN).value == 2

    def test_empty_term_adds_nothing(self):
        assert parse_phinary("1;", Dialect.EGYPTIAN).value == ONE

    def test_negative_terms(self):
        assert parse_phinary("-0; -10.01", Dialect.EGYPTIAN).value == Fraction(-1, 2)


# ==============================================================================
# UNIT TESTS: Diagnostics
# ==============================================================================

class TestDiagnostics:

    def test_nonstandard_digit(self):
        result = parse_phinary("12")
        assert result.value == PHI + 2
        assert result.has_nonstandard_digit
        assert not result.is_well_formed

    def test_letters_are_digits(self):
        result = parse_phinary("A")
        assert result.value == 10
        assert parse_phinary("a").value == 10
        assert result.has_nonstandard_digit

    def test_invalid_char_does_not_advance_place(self):
        result = parse_phinary("1#0")
        assert result.value == phi_power(2)
        assert result.has_invalid_char
        assert result.recognized_as_number

    def test_empty_input(self):
        result = parse_phinary("")
        assert result.value == ZERO
        assert not result.recognized_as_number
        assert result.flags == ParseFlag.NONE

    def test_garbage_never_raises(self):
        for text in ["#", "--", "..", ":", "/", "_", ";;", "1/2/3", "∞∞", "...:"]:
            result = parse_phinary(text)
            assert isinstance(result.value, PhiNumber)

    def test_truncation_marker_is_invalid(self):
        assert parse_phinary("0.0…").has_invalid_char

    def test_any_fraction_alias(self):
        assert parse_phinary("100/1001").flags & ParseFlag.ANY_FRACTION
        assert not parse_phinary("101").flags & ParseFlag.ANY_FRACTION

    def test_invalid_char_is_logged(self, caplog):
        caplog.set_level(logging.DEBUG, logger="phinary.parser")
        parse_phinary("1#0")
        assert "Invalid character" in caplog.text

    @given(text=st.text(max_size=20))
    @settings(max_examples=500)
    def test_arbitrary_text_never_raises(self, text):
        for dialect in Dialect:
            result = parse_phinary(text, dialect)
            assert isinstance(result.value, PhiNumber)


class TestFinitePhinary:

    def test_place_values(self):
        assert parse_finite_phinary("101").value == PhiNumber(2, 1)
        assert parse_finite_phinary("-1.1").value == -PHI

    def test_complement_flag(self):
        result = parse_finite_phinary("..10")
        assert result.value == PHI - phi_power(2)
        assert ParseFlag.COMPLEMENT in result.flags

    def test_parser_accumulates_flags(self):
        parser = PhinaryParser()
        parser.parse_fraction("12")
        parser.parse_fraction("1#")
        assert ParseFlag.NONSTANDARD_DIGIT in parser.flags
        assert ParseFlag.INVALID_CHAR in parser.flags

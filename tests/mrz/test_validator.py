"""Unit tests for ICAO 9303 check digit validator."""

import pytest

from src.mrz.layouts import TD1_LAYOUT, TD3_LAYOUT
from src.mrz.validator import (
    calculate_check_digit,
    char_value,
    clean_field,
    document_series,
    format_ymd,
    split_names,
    validate_check_digit,
)
from tests.specimens import KGZ_LINE2, TD3_LINE2


class TestCharValue:
    """Test character to value mapping."""

    def test_digits(self):
        """Test digits keep face value."""
        for digit in "0123456789":
            assert char_value(digit) == int(digit)

    def test_letters(self):
        """Test letters map from A=10."""
        assert char_value("A") == 10
        assert char_value("L") == 21
        assert char_value("Z") == 35

    def test_filler_and_unknown(self):
        """Test filler and foreign characters count 0."""
        assert char_value("<") == 0
        assert char_value("?") == 0


class TestCalculateCheckDigit:
    """Test 7-3-1 weighted check digit calculation."""

    def test_icao_specimen_fields(self):
        """Test with field values of the ICAO TD3 specimen."""
        assert calculate_check_digit("L898902C3") == 6
        assert calculate_check_digit("740812") == 2
        assert calculate_check_digit("120415") == 9
        assert calculate_check_digit("ZE184226B<<<<<") == 1

    def test_weights_cycle(self):
        """A single 1 weighs 7, 3 or 1 depending on its position."""
        assert calculate_check_digit("1") == 7
        assert calculate_check_digit("<1") == 3
        assert calculate_check_digit("<<1") == 1
        assert calculate_check_digit("<<<1") == 7

    def test_all_fillers(self):
        """Test all-filler field has check digit 0."""
        assert calculate_check_digit("<<<<<<<<<<<<<<") == 0

    def test_empty(self):
        """Test empty field has check digit 0."""
        assert calculate_check_digit("") == 0


class TestValidateCheckDigit:
    """Test verification against a printed check digit."""

    def test_valid(self):
        """Test matching check digit."""
        result = validate_check_digit("L898902C3", "6")
        assert result.valid is True
        assert result.expected == 6
        assert result.found == "6"

    def test_mismatch(self):
        """Test mismatching check digit."""
        result = validate_check_digit("L898902C3", "8")
        assert result.valid is False
        assert result.expected == 6
        assert result.found == "8"

    def test_filler_check_digit_is_never_zero(self):
        """A '<' check character fails even when the computed digit is 0."""
        result = validate_check_digit("<<<<<<<<<<<<<<", "<")
        assert result.expected == 0
        assert result.valid is False
        assert result.found == "<"

    def test_letter_check_digit_fails(self):
        """OCR often reads 0 as O; it must not be accepted."""
        result = validate_check_digit("<<<<<<<<<<<<<<", "O")
        assert result.valid is False


class TestDeclaredCheckDigits:
    """Check digits of valid records are reproduced by the formula."""

    @pytest.mark.parametrize("line2", [TD3_LINE2, KGZ_LINE2])
    def test_td3_field_checks(self, line2):
        """Test every TD3 specimen check digit."""
        lines = ["", line2]
        for name in TD3_LAYOUT.checked:
            spec = TD3_LAYOUT.fields[name]
            declared = int(line2[spec.check_offset])
            assert calculate_check_digit(spec.slice(lines)) == declared

        composite = TD3_LAYOUT.composite
        assert calculate_check_digit(composite.source(lines)) == int(line2[43])

    def test_td1_field_checks(self, td1_lines):
        """Test every TD1 specimen check digit."""
        for name in TD1_LAYOUT.checked:
            spec = TD1_LAYOUT.fields[name]
            declared = int(td1_lines[spec.line][spec.check_offset])
            assert calculate_check_digit(spec.slice(td1_lines)) == declared

        composite = TD1_LAYOUT.composite
        assert calculate_check_digit(composite.source(td1_lines)) == int(td1_lines[1][29])


class TestFormatYMD:
    """Test YYMMDD rendering with the century pivot."""

    def test_pivot_examples(self):
        """Test years either side of the default pivot."""
        assert format_ymd("990101") == "1999-01-01"
        assert format_ymd("050101") == "2005-01-01"

    def test_pivot_boundary(self):
        """Test pivot year maps to 20xx."""
        assert format_ymd("500101") == "2050-01-01"
        assert format_ymd("510101") == "1951-01-01"

    def test_custom_pivot(self):
        """Test configured pivot."""
        assert format_ymd("300101", pivot=25) == "1930-01-01"

    def test_non_numeric_returned_unchanged(self):
        """Test malformed dates are returned as read."""
        assert format_ymd("74O812") == "74O812"
        assert format_ymd("<<<<<<") == "<<<<<<"
        assert format_ymd("7408") == "7408"


class TestNameHelpers:
    """Test name zone and filler helpers."""

    def test_split_names(self):
        """Test surname and given names split."""
        assert split_names("ERIKSSON<<ANNA<MARIA<<<<<<<") == ("ERIKSSON", "ANNA MARIA")

    def test_split_names_compound_surname(self):
        """Test single fillers inside the surname."""
        assert split_names("VAN<DER<BERG<<JAN<<<<") == ("VAN DER BERG", "JAN")

    def test_split_names_without_given_names(self):
        """Test mononym name zone."""
        assert split_names("MONONYM<<<<<<<<<") == ("MONONYM", "")

    def test_split_names_without_separator(self):
        """Test name zone without double filler."""
        assert split_names("ERIKSSON<ANNA") == ("ERIKSSON ANNA", "")

    def test_clean_field(self):
        """Test filler runs collapse to single spaces."""
        assert clean_field("ZE184226B<<<<<") == "ZE184226B"
        assert clean_field("<<<<") == ""

    def test_document_series(self):
        """Test series prefix extraction."""
        assert document_series("AN1234567") == "AN"
        assert document_series("L898902C3") == "L"
        assert document_series("123456789") == ""

"""Unit tests for field decoding and check digit verification."""

import pytest

from src.mrz.config_loader import DateConfig
from src.mrz.decoder import FieldDecoder
from src.mrz.types import DocumentFormat, VerificationStatus
from tests.specimens import (
    KGZ_LINE2,
    KGZ_LINE2_BAD_CHECKS,
    TD1_LINE1,
    TD1_LINE2,
    TD1_LINE3,
    TD3_LINE1,
    TD3_LINE2,
)

KGZ_LINE1_PADDED = "P<KGZSURNAME<<NAME" + "<" * 26


@pytest.fixture
def decoder():
    """Provide FieldDecoder with default century pivot."""
    return FieldDecoder(DateConfig())


class TestTD3Decoding:
    """Test 2 x 44 passport decoding."""

    def test_icao_specimen_fields(self, decoder, td3_lines):
        """Test every TD3 field of the ICAO specimen."""
        record = decoder.decode(td3_lines, DocumentFormat.PASSPORT_TD3)

        assert record.document_format == DocumentFormat.PASSPORT_TD3
        assert record.document_code == "P"
        assert record.issuing_country == "UTO"
        assert record.surname == "ERIKSSON"
        assert record.given_names == "ANNA MARIA"
        assert record.document_number == "L898902C3"
        assert record.series == "L"
        assert record.nationality == "UTO"
        assert record.birth_date == "1974-08-12"
        assert record.sex == "F"
        assert record.expiry_date == "2012-04-15"
        assert record.personal_number == "ZE184226B"
        assert record.optional_data == ""

    def test_icao_specimen_valid(self, decoder, td3_lines):
        """Test ICAO specimen passes all five check digits."""
        record = decoder.decode(td3_lines, DocumentFormat.PASSPORT_TD3)

        assert record.verification_status == VerificationStatus.VALID
        assert record.is_valid()
        assert record.errors == ()
        assert list(record.check_digits) == [
            "Document Number",
            "Date of Birth",
            "Date of Expiry",
            "Personal Number",
            "Composite (Final)",
        ]
        assert all(result.valid for result in record.check_digits.values())

    def test_lines_attached(self, decoder, td3_lines):
        """Test raw and normalized lines are kept on the record."""
        record = decoder.decode(td3_lines, DocumentFormat.PASSPORT_TD3, raw_lines=["RAW1", "RAW2"])

        assert record.normalized_lines == (TD3_LINE1, TD3_LINE2)
        assert record.raw_lines == ("RAW1", "RAW2")

    def test_document_number_filler_removed(self, decoder):
        """Test short document number loses its filler."""
        record = decoder.decode([KGZ_LINE1_PADDED, KGZ_LINE2], DocumentFormat.PASSPORT_TD3)

        assert record.document_number == "A1234567"
        assert record.series == "A"
        assert record.sex == "M"
        assert record.birth_date == "1998-01-01"
        assert record.expiry_date == "2028-01-01"
        assert record.is_valid()

    def test_each_failing_field_reported(self, decoder):
        """Test one error per failing check digit, in order."""
        record = decoder.decode(
            [KGZ_LINE1_PADDED, KGZ_LINE2_BAD_CHECKS], DocumentFormat.PASSPORT_TD3
        )

        assert record.verification_status == VerificationStatus.INVALID
        assert [error.label for error in record.errors] == [
            "Document Number",
            "Date of Expiry",
            "Composite (Final)",
        ]
        assert all(error.line == 2 for error in record.errors)
        assert record.errors[0].expected == 6
        assert record.errors[0].found == "8"
        # Fields are still populated
        assert record.surname == "SURNAME"
        assert record.nationality == "KGZ"

    def test_composite_only(self, decoder):
        """Test a lone composite failure and its description."""
        line2 = KGZ_LINE2[:43] + "7"
        record = decoder.decode([KGZ_LINE1_PADDED, line2], DocumentFormat.PASSPORT_TD3)

        assert len(record.errors) == 1
        assert record.errors[0].label == "Composite (Final)"
        assert record.error_descriptions == ["Composite (Final) (line 2): expected 6, found '7'"]

    def test_non_digit_check_character(self, decoder):
        """Test filler in a check column fails."""
        line2 = TD3_LINE2[:19] + "<" + TD3_LINE2[20:]
        record = decoder.decode([TD3_LINE1, line2], DocumentFormat.PASSPORT_TD3)

        labels = [error.label for error in record.errors]
        assert "Date of Birth" in labels
        assert record.check_digits["Date of Birth"].found == "<"

    def test_sex_filler(self, decoder):
        """Test filler sex marker decodes as empty."""
        line2 = TD3_LINE2[:20] + "<" + TD3_LINE2[21:]
        record = decoder.decode([TD3_LINE1, line2], DocumentFormat.PASSPORT_TD3)
        assert record.sex == ""


class TestTD1Decoding:
    """Test 3 x 30 identity card decoding."""

    def test_icao_specimen(self, decoder, td1_lines):
        """Test every TD1 field of the ICAO specimen."""
        record = decoder.decode(td1_lines, DocumentFormat.ID_TD1)

        assert record.document_format == DocumentFormat.ID_TD1
        assert record.document_code == "I"
        assert record.issuing_country == "UTO"
        assert record.document_number == "D23145890"
        assert record.series == "D"
        assert record.personal_number == ""
        assert record.birth_date == "1974-08-12"
        assert record.sex == "F"
        assert record.expiry_date == "2012-04-15"
        assert record.nationality == "UTO"
        assert record.optional_data == ""
        assert record.surname == "ERIKSSON"
        assert record.given_names == "ANNA MARIA"
        assert record.is_valid()
        assert list(record.check_digits) == [
            "Document Number",
            "Date of Birth",
            "Date of Expiry",
            "Composite (Final)",
        ]

    def test_document_number_error_on_line_1(self, decoder):
        """Test TD1 document number error points at line 1."""
        line1 = TD1_LINE1[:14] + "1" + TD1_LINE1[15:]
        record = decoder.decode([line1, TD1_LINE2, TD1_LINE3], DocumentFormat.ID_TD1)

        errors = {error.label: error for error in record.errors}
        assert errors["Document Number"].line == 1
        assert errors["Document Number"].expected == 7
        # Composite covers line 1 columns 5-30, check digit included
        assert errors["Composite (Final)"].line == 2

    def test_birth_date_substitution(self, decoder):
        """Test birth date error keeps other fields populated."""
        line2 = "7408132" + TD1_LINE2[7:]
        record = decoder.decode([TD1_LINE1, line2, TD1_LINE3], DocumentFormat.ID_TD1)

        assert record.verification_status == VerificationStatus.INVALID
        assert "Date of Birth" in [error.label for error in record.errors]
        assert record.birth_date == "1974-08-13"
        assert record.document_number == "D23145890"
        assert record.surname == "ERIKSSON"


class TestVerifyAndAssemble:
    """Test the two decoding steps used by the window search."""

    def test_verify_only_computes_check_digits(self, decoder):
        """Test verify reports failures without building a record."""
        check_digits, errors = decoder.verify(
            [KGZ_LINE1_PADDED, KGZ_LINE2_BAD_CHECKS], DocumentFormat.PASSPORT_TD3
        )

        assert [error.label for error in errors] == [
            "Document Number",
            "Date of Expiry",
            "Composite (Final)",
        ]
        assert check_digits["Date of Birth"].valid

    def test_assemble_matches_decode(self, decoder, td1_lines):
        """Test verify followed by assemble equals decode."""
        check_digits, errors = decoder.verify(td1_lines, DocumentFormat.ID_TD1)
        record = decoder.assemble(
            td1_lines, DocumentFormat.ID_TD1, check_digits, errors, raw_lines=td1_lines
        )

        assert record == decoder.decode(
            td1_lines, DocumentFormat.ID_TD1, raw_lines=td1_lines
        )


class TestShapeChecks:
    """Widths are enforced before decoding."""

    def test_wrong_line_count(self, decoder):
        """Test error for wrong number of lines."""
        with pytest.raises(ValueError, match="expects 2 lines"):
            decoder.decode([TD3_LINE1], DocumentFormat.PASSPORT_TD3)

    def test_wrong_width(self, decoder):
        """Test error for wrong line width."""
        with pytest.raises(ValueError, match="must be 44 characters"):
            decoder.decode([TD3_LINE1, TD3_LINE2[:43]], DocumentFormat.PASSPORT_TD3)

        with pytest.raises(ValueError, match="must be 30 characters"):
            decoder.decode([TD1_LINE1, TD1_LINE2, TD1_LINE3 + "<"], DocumentFormat.ID_TD1)


def test_custom_century_pivot(td3_lines):
    """Test configured pivot changes the birth century."""
    decoder = FieldDecoder(DateConfig(century_pivot=80))
    record = decoder.decode(td3_lines, DocumentFormat.PASSPORT_TD3)
    assert record.birth_date == "2074-08-12"

"""ICAO 9303 check digit calculation and field formatting helpers.

This module implements the 7-3-1 weighted check digit used by every MRZ
layout, plus the small formatting rules applied to decoded fields (dates,
names, filler removal).

References:
    - ICAO Doc 9303 Part 3, section 4.9 - Check digits in the MRZ
"""

import re
from typing import Tuple

from .types import CheckDigitResult

FILLER = "<"
MRZ_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789<"

# Weights cycle over the field positions
WEIGHTS = (7, 3, 1)

DEFAULT_CENTURY_PIVOT = 50


def char_value(char: str) -> int:
    """Map an MRZ character to its check digit value.

    Digits keep their face value, letters map to A=10 ... Z=35, and the
    filler (or any character outside the MRZ alphabet) counts as 0.

    Example:
        >>> char_value("7")
        7
        >>> char_value("L")
        21
        >>> char_value("<")
        0
    """
    if "0" <= char <= "9":
        return ord(char) - ord("0")
    if "A" <= char <= "Z":
        return ord(char) - ord("A") + 10
    return 0


def calculate_check_digit(value: str) -> int:
    """Calculate the ICAO 7-3-1 check digit of a field value.

    1. Map each character to a numeric value (see ``char_value``)
    2. Multiply by the cycling weights 7, 3, 1
    3. Check digit = sum of products mod 10

    Args:
        value: Field value as printed in the MRZ (fillers included)

    Returns:
        Check digit (0-9)

    Example:
        >>> calculate_check_digit("L898902C3")
        6
        >>> calculate_check_digit("740812")
        2
    """
    total = sum(
        char_value(char) * WEIGHTS[pos % len(WEIGHTS)] for pos, char in enumerate(value)
    )
    return total % 10


def validate_check_digit(value: str, check_char: str) -> CheckDigitResult:
    """Verify a field value against its printed check digit.

    A check character that is not a decimal digit always fails; it is never
    read as 0, so a filler in a check digit column is reported as found.

    Args:
        value: Field value
        check_char: Character read at the check digit column

    Returns:
        CheckDigitResult with expected digit, found character and verdict

    Example:
        >>> validate_check_digit("740812", "2").valid
        True
        >>> validate_check_digit("740812", "<").valid
        False
    """
    expected = calculate_check_digit(value)
    is_digit = len(check_char) == 1 and "0" <= check_char <= "9"
    valid = is_digit and int(check_char) == expected
    return CheckDigitResult(expected=expected, found=check_char, valid=valid)


def format_ymd(value: str, pivot: int = DEFAULT_CENTURY_PIVOT) -> str:
    """Render a YYMMDD field as YYYY-MM-DD.

    Two-digit years above ``pivot`` map to 19YY, the others to 20YY. The
    pivot is not checked against the current year.

    Args:
        value: Six-character date field
        pivot: Century pivot (default 50)

    Returns:
        Formatted date, or ``value`` unchanged when it is not six digits

    Example:
        >>> format_ymd("990101")
        '1999-01-01'
        >>> format_ymd("050101")
        '2005-01-01'
    """
    if not re.fullmatch(r"[0-9]{6}", value):
        return value
    year = int(value[:2])
    century = 1900 if year > pivot else 2000
    return f"{century + year:04d}-{value[2:4]}-{value[4:6]}"


def clean_field(value: str) -> str:
    """Render fillers as spaces, collapse runs and trim.

    Example:
        >>> clean_field("ANNA<MARIA<<<<")
        'ANNA MARIA'
    """
    return " ".join(value.replace(FILLER, " ").split())


def split_names(zone: str) -> Tuple[str, str]:
    """Split a name zone into surname and given names.

    The zone is split on the first double filler; text before it is the
    surname, text after it the given names.

    Args:
        zone: Name zone with fillers

    Returns:
        Tuple of (surname, given_names)

    Example:
        >>> split_names("ERIKSSON<<ANNA<MARIA<<<<<")
        ('ERIKSSON', 'ANNA MARIA')
        >>> split_names("MONONYM<<<<<<")
        ('MONONYM', '')
    """
    surname, _, given = zone.partition(FILLER * 2)
    return clean_field(surname), clean_field(given)


def document_series(document_number: str) -> str:
    """Return the leading alphabetic prefix of a document number.

    Example:
        >>> document_series("AN1234567")
        'AN'
        >>> document_series("123456789")
        ''
    """
    match = re.match(r"[A-Z]*", document_number)
    return match.group(0)

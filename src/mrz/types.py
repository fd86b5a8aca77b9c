"""Type definitions for the MRZ module.

This module defines the core data structures used throughout the MRZ
pipeline: document formats, field offset specifications, check digit
reports, the decoded record and the terminal no-match result.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple


class DocumentFormat(Enum):
    """Fixed MRZ layouts supported by the decoder."""

    PASSPORT_TD3 = "passport_td3"  # 2 lines x 44 columns
    ID_TD1 = "id_td1"  # 3 lines x 30 columns

    @property
    def line_count(self) -> int:
        return 2 if self is DocumentFormat.PASSPORT_TD3 else 3

    @property
    def line_width(self) -> int:
        return 44 if self is DocumentFormat.PASSPORT_TD3 else 30


class VerificationStatus(Enum):
    """Verdict of check digit verification over a whole record."""

    VALID = "valid"
    INVALID = "invalid"


class NoMatchReason(Enum):
    """Why the pipeline could not produce a record."""

    TOO_FEW_CANDIDATE_LINES = "too-few-candidate-lines"
    NO_FORMAT_FIT = "no-format-fit"


@dataclass(frozen=True)
class FieldSpec:
    """Column offsets of one MRZ field.

    Attributes:
        name: Record attribute the field decodes into
        label: Human-readable label used in error descriptions
        line: 0-based index of the line holding the field
        start: 0-based start column
        length: Number of columns
        check_offset: Column of the field's check digit on the same line, if any
    """

    name: str
    label: str
    line: int
    start: int
    length: int
    check_offset: Optional[int] = None

    @property
    def end(self) -> int:
        return self.start + self.length

    def slice(self, lines: Sequence[str]) -> str:
        return lines[self.line][self.start : self.end]


@dataclass(frozen=True)
class CompositeSpec:
    """Composite check digit location and the column ranges it covers.

    Attributes:
        label: Human-readable label used in error descriptions
        line: 0-based index of the line holding the composite digit
        check_offset: Column of the composite digit
        ranges: Ordered (line, start, end) ranges concatenated for the check
    """

    label: str
    line: int
    check_offset: int
    ranges: Tuple[Tuple[int, int, int], ...]

    def source(self, lines: Sequence[str]) -> str:
        return "".join(lines[ln][start:end] for ln, start, end in self.ranges)


@dataclass(frozen=True)
class CheckDigitResult:
    """Outcome of one check digit verification.

    Attributes:
        expected: Check digit computed from the field value (0-9)
        found: Character read at the check digit column
        valid: Whether ``found`` is a digit equal to ``expected``
    """

    expected: int
    found: str
    valid: bool

    def to_dict(self) -> Dict[str, Any]:
        return {"expected": self.expected, "found": self.found, "valid": self.valid}


@dataclass(frozen=True)
class CheckDigitError:
    """A failed check digit, tied to a field label and a 1-based line number."""

    label: str
    line: int
    expected: int
    found: str

    @property
    def description(self) -> str:
        return f"{self.label} (line {self.line}): expected {self.expected}, found {self.found!r}"

    def __str__(self) -> str:
        return self.description


@dataclass(frozen=True)
class ParsedRecord:
    """Decoded and verified MRZ record.

    Attributes:
        document_format: Layout the lines were decoded with
        document_code: Document type code (e.g. "P", "I", "ID")
        issuing_country: Issuing state or organization code
        document_number: Document number with fillers removed
        series: Leading alphabetic prefix of the document number
        nationality: Holder nationality code
        birth_date: Date of birth as YYYY-MM-DD (raw value if not 6 digits)
        sex: Sex marker ("M", "F", "X" or "" for filler)
        expiry_date: Date of expiry as YYYY-MM-DD (raw value if not 6 digits)
        personal_number: Personal number (TD3) or optional data of line 1 (TD1)
        optional_data: Optional data of line 2 (TD1 only, "" for TD3)
        surname: Primary identifier from the name zone
        given_names: Secondary identifier from the name zone
        verification_status: VALID iff ``errors`` is empty
        errors: Failed check digits in verification order
        check_digits: Every verified check digit keyed by label (read-only)
        raw_lines: Candidate lines as extracted from OCR text
        normalized_lines: Exact-width lines the record was decoded from
    """

    document_format: DocumentFormat
    document_code: str
    issuing_country: str
    document_number: str
    series: str
    nationality: str
    birth_date: str
    sex: str
    expiry_date: str
    personal_number: str
    optional_data: str
    surname: str
    given_names: str
    verification_status: VerificationStatus
    errors: Tuple[CheckDigitError, ...] = ()
    check_digits: Mapping[str, CheckDigitResult] = field(default_factory=dict, hash=False)
    raw_lines: Tuple[str, ...] = ()
    normalized_lines: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "errors", tuple(self.errors))
        object.__setattr__(
            self, "check_digits", MappingProxyType(dict(self.check_digits))
        )
        is_valid = self.verification_status == VerificationStatus.VALID
        if is_valid == bool(self.errors):
            raise ValueError(
                f"verification_status {self.verification_status.value} inconsistent "
                f"with {len(self.errors)} check digit error(s)"
            )

    def is_valid(self) -> bool:
        """Check if every check digit matched.

        Returns:
            True if verification status is VALID, False otherwise.
        """
        return self.verification_status == VerificationStatus.VALID

    @property
    def error_descriptions(self) -> List[str]:
        return [error.description for error in self.errors]

    def to_dict(self) -> Dict[str, Any]:
        """Render the record as a JSON-ready mapping."""
        return {
            "document_type": self.document_format.value,
            "document_code": self.document_code,
            "issuing_country": self.issuing_country,
            "document_number": self.document_number,
            "series": self.series,
            "nationality": self.nationality,
            "birth_date": self.birth_date,
            "sex": self.sex,
            "expiry_date": self.expiry_date,
            "personal_number": self.personal_number,
            "optional_data": self.optional_data,
            "surname": self.surname,
            "given_names": self.given_names,
            "verification_status": self.verification_status.value,
            "errors": self.error_descriptions,
            "check_digits": {
                label: result.to_dict() for label, result in self.check_digits.items()
            },
            "lines": {
                "raw": list(self.raw_lines),
                "normalized": list(self.normalized_lines),
            },
        }


@dataclass(frozen=True)
class NoMatch:
    """Terminal result when no MRZ could be decoded.

    Attributes:
        reason: Diagnostic reason for the failure
        normalized_lines: Best normalized lines found, for diagnostics
        raw_lines: Candidate lines before normalization
    """

    reason: NoMatchReason
    normalized_lines: Tuple[str, ...] = ()
    raw_lines: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "no_match": self.reason.value,
            "lines": {
                "raw": list(self.raw_lines),
                "normalized": list(self.normalized_lines),
            },
        }

"""Field decoding and check digit verification of resolved MRZ lines.

The decoder slices exact-width lines into named fields using the constant
layout tables, verifies every check digit and assembles a ParsedRecord.
Check digit failures never raise; each one becomes an entry of the record's
error list and flips the verdict to INVALID.

Example:
    >>> decoder = FieldDecoder()
    >>> record = decoder.decode(
    ...     [
    ...         "P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<",
    ...         "L898902C36UTO7408122F1204159ZE184226B<<<<<10",
    ...     ],
    ...     DocumentFormat.PASSPORT_TD3,
    ... )
    >>> record.surname, record.birth_date, record.verification_status
    ('ERIKSSON', '1974-08-12', <VerificationStatus.VALID: 'valid'>)
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .config_loader import DateConfig
from .layouts import LAYOUTS
from .types import (
    CheckDigitError,
    CheckDigitResult,
    DocumentFormat,
    ParsedRecord,
    VerificationStatus,
)
from .validator import (
    FILLER,
    clean_field,
    document_series,
    format_ymd,
    split_names,
    validate_check_digit,
)

logger = logging.getLogger(__name__)


Verification = Tuple[Dict[str, CheckDigitResult], List[CheckDigitError]]


class FieldDecoder:
    """Decodes and verifies MRZ lines of a known document format.

    Decoding is split in two steps so that alignment search stays cheap:
    ``verify`` computes check digits only, ``assemble`` slices and formats
    every field into a record. ``decode`` runs both.

    Lines of the wrong count or width are a caller error and raise
    ``ValueError`` from ``decode``; ``verify`` and ``assemble`` assume
    exact-width windows.

    Args:
        config: Date configuration (century pivot).
    """

    def __init__(self, config: Optional[DateConfig] = None):
        """Initialize decoder with date configuration.

        Args:
            config: Date configuration. If None, uses the default pivot.
        """
        self.config = config or DateConfig()

    def decode(
        self,
        lines: Sequence[str],
        document_format: DocumentFormat,
        raw_lines: Sequence[str] = (),
    ) -> ParsedRecord:
        """Decode lines into a fully populated record.

        Args:
            lines: Exactly ``document_format.line_count`` lines, each
                ``document_format.line_width`` characters
            document_format: Layout to decode with
            raw_lines: Candidate lines the input was derived from

        Returns:
            ParsedRecord, VALID iff every check digit matches

        Raises:
            ValueError: If line count or widths do not match the format
        """
        self._check_shape(lines, document_format)
        check_digits, errors = self.verify(lines, document_format)
        return self.assemble(lines, document_format, check_digits, errors, raw_lines)

    def verify(
        self, lines: Sequence[str], document_format: DocumentFormat
    ) -> Verification:
        """Verify every check digit of exact-width lines.

        Returns:
            Tuple of (check digit results keyed by label, failed check digits
            in verification order)
        """
        layout = LAYOUTS[document_format]
        check_digits: Dict[str, CheckDigitResult] = {}
        errors: List[CheckDigitError] = []

        for name in layout.checked:
            spec = layout.fields[name]
            result = validate_check_digit(
                spec.slice(lines), lines[spec.line][spec.check_offset]
            )
            check_digits[spec.label] = result
            if not result.valid:
                errors.append(self._error(spec.label, spec.line, result))

        composite = layout.composite
        result = validate_check_digit(
            composite.source(lines), lines[composite.line][composite.check_offset]
        )
        check_digits[composite.label] = result
        if not result.valid:
            errors.append(self._error(composite.label, composite.line, result))

        return check_digits, errors

    def assemble(
        self,
        lines: Sequence[str],
        document_format: DocumentFormat,
        check_digits: Dict[str, CheckDigitResult],
        errors: List[CheckDigitError],
        raw_lines: Sequence[str] = (),
    ) -> ParsedRecord:
        """Slice every field of the layout and build the record."""
        layout = LAYOUTS[document_format]
        status = VerificationStatus.INVALID if errors else VerificationStatus.VALID
        if errors:
            logger.debug(
                f"{document_format.value} decode INVALID: "
                f"{[error.description for error in errors]}"
            )

        values = {name: spec.slice(lines) for name, spec in layout.fields.items()}
        surname, given_names = split_names(values["names"])
        document_number = values["document_number"].replace(FILLER, "")
        pivot = self.config.century_pivot

        return ParsedRecord(
            document_format=document_format,
            document_code=values["document_code"].replace(FILLER, ""),
            issuing_country=values["issuing_country"].replace(FILLER, ""),
            document_number=document_number,
            series=document_series(document_number),
            nationality=values["nationality"].replace(FILLER, ""),
            birth_date=format_ymd(values["birth_date"], pivot),
            sex=values["sex"].replace(FILLER, ""),
            expiry_date=format_ymd(values["expiry_date"], pivot),
            personal_number=clean_field(values["personal_number"]),
            optional_data=clean_field(values.get("optional_data", "")),
            surname=surname,
            given_names=given_names,
            verification_status=status,
            errors=tuple(errors),
            check_digits=check_digits,
            raw_lines=tuple(raw_lines),
            normalized_lines=tuple(lines),
        )

    @staticmethod
    def _error(label: str, line: int, result: CheckDigitResult) -> CheckDigitError:
        return CheckDigitError(
            label=label, line=line + 1, expected=result.expected, found=result.found
        )

    @staticmethod
    def _check_shape(lines: Sequence[str], document_format: DocumentFormat) -> None:
        if len(lines) != document_format.line_count:
            raise ValueError(
                f"{document_format.value} expects {document_format.line_count} lines, "
                f"got {len(lines)}"
            )
        for index, line in enumerate(lines, start=1):
            if len(line) != document_format.line_width:
                raise ValueError(
                    f"{document_format.value} line {index} must be "
                    f"{document_format.line_width} characters, got {len(line)}"
                )

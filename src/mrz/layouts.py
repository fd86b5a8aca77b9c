"""Constant column-offset tables for the supported MRZ layouts.

Offsets follow ICAO Doc 9303 (Part 4 for TD3, Part 5 for TD1). All offsets
are 0-based; ``line`` indexes the lines of one document.

References:
    - ICAO Doc 9303, Machine Readable Travel Documents, 8th edition
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, Tuple

from .types import CompositeSpec, DocumentFormat, FieldSpec

DOCUMENT_NUMBER = "Document Number"
DATE_OF_BIRTH = "Date of Birth"
DATE_OF_EXPIRY = "Date of Expiry"
PERSONAL_NUMBER = "Personal Number"
COMPOSITE = "Composite (Final)"


@dataclass(frozen=True)
class Layout:
    """Field table of one document format.

    Attributes:
        document_format: Format the table belongs to
        fields: Every decoded field keyed by record attribute name
        checked: Names of fields carrying their own check digit, in check order
        composite: Composite check digit specification
    """

    document_format: DocumentFormat
    fields: Dict[str, FieldSpec]
    checked: Tuple[str, ...]
    composite: CompositeSpec

    @property
    def verified_lines(self) -> FrozenSet[int]:
        """Line indexes read by any check digit (field, check column or composite)."""
        lines = {self.fields[name].line for name in self.checked}
        lines.add(self.composite.line)
        lines.update(line for line, _, _ in self.composite.ranges)
        return frozenset(lines)


def _table(*specs: FieldSpec) -> Dict[str, FieldSpec]:
    return {spec.name: spec for spec in specs}


TD3_LAYOUT = Layout(
    document_format=DocumentFormat.PASSPORT_TD3,
    fields=_table(
        FieldSpec("document_code", "Document Code", 0, 0, 2),
        FieldSpec("issuing_country", "Issuing Country", 0, 2, 3),
        FieldSpec("names", "Name", 0, 5, 39),
        FieldSpec("document_number", DOCUMENT_NUMBER, 1, 0, 9, check_offset=9),
        FieldSpec("nationality", "Nationality", 1, 10, 3),
        FieldSpec("birth_date", DATE_OF_BIRTH, 1, 13, 6, check_offset=19),
        FieldSpec("sex", "Sex", 1, 20, 1),
        FieldSpec("expiry_date", DATE_OF_EXPIRY, 1, 21, 6, check_offset=27),
        FieldSpec("personal_number", PERSONAL_NUMBER, 1, 28, 14, check_offset=42),
    ),
    checked=("document_number", "birth_date", "expiry_date", "personal_number"),
    composite=CompositeSpec(
        label=COMPOSITE,
        line=1,
        check_offset=43,
        ranges=((1, 0, 10), (1, 13, 20), (1, 21, 43)),
    ),
)

TD1_LAYOUT = Layout(
    document_format=DocumentFormat.ID_TD1,
    fields=_table(
        FieldSpec("document_code", "Document Code", 0, 0, 2),
        FieldSpec("issuing_country", "Issuing Country", 0, 2, 3),
        FieldSpec("document_number", DOCUMENT_NUMBER, 0, 5, 9, check_offset=14),
        FieldSpec("personal_number", PERSONAL_NUMBER, 0, 15, 15),
        FieldSpec("birth_date", DATE_OF_BIRTH, 1, 0, 6, check_offset=6),
        FieldSpec("sex", "Sex", 1, 7, 1),
        FieldSpec("expiry_date", DATE_OF_EXPIRY, 1, 8, 6, check_offset=14),
        FieldSpec("nationality", "Nationality", 1, 15, 3),
        FieldSpec("optional_data", "Optional Data", 1, 18, 11),
        FieldSpec("names", "Name", 2, 0, 30),
    ),
    checked=("document_number", "birth_date", "expiry_date"),
    composite=CompositeSpec(
        label=COMPOSITE,
        line=1,
        check_offset=29,
        ranges=((0, 5, 30), (1, 0, 7), (1, 8, 15), (1, 18, 29)),
    ),
)

LAYOUTS: Dict[DocumentFormat, Layout] = {
    DocumentFormat.PASSPORT_TD3: TD3_LAYOUT,
    DocumentFormat.ID_TD1: TD1_LAYOUT,
}

"""Candidate MRZ line extraction from raw OCR text.

OCR output of a document page contains the MRZ together with arbitrary
noise (visual zone text, stamps, partial lines). The extractor keeps only
lines whose shape matches an MRZ line:

1. At least one character of the MRZ alphabet (A-Z, 0-9, '<')
2. Whitespace-stripped length within a permissive band (20-100 by default)
3. Either several fillers ('<') or an exact MRZ line length (30, 36, 44)

The length band tolerates characters inserted or dropped by OCR; the format
resolver applies the strict widths later.

Example:
    >>> extract("HELLO\\nP<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<")
    ['P<UTOERIKSSON<<ANNA<MARIA<<<<<<<<<<<<<<<<<<<']
"""

import logging
import re
from typing import List, Optional

from .config_loader import ExtractionConfig
from .validator import FILLER

logger = logging.getLogger(__name__)

_MRZ_CHAR = re.compile(r"[A-Z0-9<]")


class LineExtractor:
    """Selects MRZ-shaped lines from OCR text.

    Args:
        config: Extraction configuration with shape thresholds.
    """

    def __init__(self, config: Optional[ExtractionConfig] = None):
        """Initialize extractor with shape thresholds."""
        self.config = config or ExtractionConfig()
        self.exact_lengths = frozenset(self.config.exact_lengths)

    def extract(self, text: str) -> List[str]:
        """Return candidate lines in their original order.

        Args:
            text: Raw OCR text block

        Returns:
            Whitespace-stripped, upper-cased candidate lines
        """
        candidates = []
        for raw_line in text.splitlines():
            line = "".join(raw_line.split()).upper()
            if self.is_candidate(line):
                candidates.append(line)

        logger.debug(f"Extracted {len(candidates)} candidate line(s): {candidates}")
        return candidates

    def is_candidate(self, line: str) -> bool:
        """Check whether a whitespace-stripped line has an MRZ shape."""
        if not _MRZ_CHAR.search(line):
            return False

        if not self.config.min_length <= len(line) <= self.config.max_length:
            return False

        return (
            line.count(FILLER) >= self.config.min_fillers
            or len(line) in self.exact_lengths
        )


def extract(text: str) -> List[str]:
    """Extract candidate MRZ lines using the default thresholds."""
    return LineExtractor().extract(text)

"""Document format resolution with sliding-window alignment.

OCR may shift MRZ line boundaries by a few columns (leading or trailing
noise). Rather than trusting line lengths, the resolver tries every
fixed-width window of each line:

1. **TD3 attempt**: last 2 lines, width 44, cross-product of windows
2. **TD1 attempt**: last 3 lines, width 30, only when no VALID TD3 fit
   exists and at least 3 lines are available

The first VALID decode in line-then-window order wins. Otherwise the first
decoded record (TD3 before TD1) is returned as an INVALID fallback. If no
window of the right width exists at all, the result is a NoMatch.

Only lines read by check digits are searched: O(w) TD3 and O(w^2) TD1
verifications for a per-line overshoot w, and at most one record is
assembled per format.
"""

import itertools
import logging
from typing import List, Optional, Sequence, Union

from .config_loader import ResolverConfig
from .decoder import FieldDecoder
from .layouts import LAYOUTS
from .types import DocumentFormat, NoMatch, NoMatchReason, ParsedRecord

logger = logging.getLogger(__name__)

# Attempt order
FORMATS = (DocumentFormat.PASSPORT_TD3, DocumentFormat.ID_TD1)


def candidate_windows(line: str, width: int) -> List[str]:
    """List every contiguous ``width``-character window of a line.

    Args:
        line: Normalized line
        width: Target line width

    Returns:
        ``[line]`` if it is exactly ``width`` long, windows from left to
        right if it is longer, an empty list if it is shorter

    Example:
        >>> candidate_windows("ABCDE", 3)
        ['ABC', 'BCD', 'CDE']
    """
    if len(line) < width:
        return []
    return [line[start : start + width] for start in range(len(line) - width + 1)]


class FormatResolver:
    """Finds the document format and alignment that decodes best.

    Args:
        decoder: Field decoder used for every candidate alignment.
        config: Resolver configuration.
    """

    def __init__(
        self,
        decoder: Optional[FieldDecoder] = None,
        config: Optional[ResolverConfig] = None,
    ):
        """Initialize resolver with a decoder shared across attempts."""
        self.decoder = decoder or FieldDecoder()
        self.config = config or ResolverConfig()

    def resolve(
        self,
        lines: Sequence[str],
        raw_lines: Sequence[str] = (),
    ) -> Union[ParsedRecord, NoMatch]:
        """Resolve normalized lines into a record.

        Args:
            lines: Normalized candidate lines in OCR order
            raw_lines: Candidate lines before normalization (diagnostics)

        Returns:
            First VALID record, else first decoded record, else NoMatch
        """
        fallback: Optional[ParsedRecord] = None

        for document_format in FORMATS:
            if document_format is DocumentFormat.ID_TD1 and not self.config.try_td1:
                break
            if len(lines) < document_format.line_count:
                continue

            record = self._attempt(lines, document_format, raw_lines)
            if record is None:
                continue
            if record.is_valid():
                return record
            if fallback is None:
                fallback = record

        if fallback is not None:
            logger.debug(
                f"No VALID alignment, falling back to first "
                f"{fallback.document_format.value} decode"
            )
            return fallback

        logger.warning(f"No format fit for {len(lines)} normalized line(s)")
        return NoMatch(
            reason=NoMatchReason.NO_FORMAT_FIT,
            normalized_lines=tuple(lines),
            raw_lines=tuple(raw_lines),
        )

    def _attempt(
        self,
        lines: Sequence[str],
        document_format: DocumentFormat,
        raw_lines: Sequence[str],
    ) -> Optional[ParsedRecord]:
        """Search window combinations of the last lines for one format.

        Only combinations are verified; a record is assembled for the
        winning combination alone. Lines no check digit reads (the TD3 name
        line, the TD1 name line) cannot change the verdict, so they keep
        their first window.

        Returns:
            First VALID record, else first decoded record, else None
        """
        tail = lines[-document_format.line_count :]
        raw_tail = tuple(raw_lines[-document_format.line_count :])
        windows = [candidate_windows(line, document_format.line_width) for line in tail]
        logger.debug(
            f"{document_format.value} attempt: "
            f"{[len(w) for w in windows]} window(s) per line"
        )
        if not all(windows):
            return None

        verified = LAYOUTS[document_format].verified_lines
        choices = [
            line_windows if index in verified else line_windows[:1]
            for index, line_windows in enumerate(windows)
        ]

        first = None
        for combination in itertools.product(*choices):
            check_digits, errors = self.decoder.verify(combination, document_format)
            if not errors:
                return self.decoder.assemble(
                    combination, document_format, check_digits, errors, raw_tail
                )
            if first is None:
                first = (combination, check_digits, errors)

        combination, check_digits, errors = first
        return self.decoder.assemble(
            combination, document_format, check_digits, errors, raw_tail
        )

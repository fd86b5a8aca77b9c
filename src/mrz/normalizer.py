"""Repair of common OCR corruption in candidate MRZ lines.

OCR on the monospaced MRZ font mostly confuses the filler glyph '<' with
visually similar letters (C, K, L, S) and drops trailing filler columns.
The normalizer applies four ordered rules that only target this
filler/letter confusion class:

1. **Document type**: ``P`` or ``I`` followed by S/L/C/K and three more
   letters or fillers gets '<' at column 1.
2. **Name separator**: ``<C`` or ``<L`` followed by a letter becomes ``<<``.
3. **Trailing fillers**: a trailing run of 3+ characters from {L, C, K, <}
   containing a letter becomes all fillers.
4. **Length**: ``P<`` lines of length 31-43 are padded to 44, ``I<`` lines
   of length 21-29 to 30.

The sequence is re-applied until the line is stable, so normalizing an
already normalized line is a no-op.

Example:
    >>> normalizer = LineNormalizer()
    >>> normalizer.normalize("PKUTOERIKSSON<CANNA<<<<<<<<<<<<<<<<<<<<<<<<<")
    'P<UTOERIKSSON<<ANNA<<<<<<<<<<<<<<<<<<<<<<<<'
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional

from .config_loader import NormalizationConfig
from .validator import FILLER

logger = logging.getLogger(__name__)

_DOCUMENT_TYPE = re.compile(r"^[PI][SLCK][A-Z<]{3}")
_SEPARATOR = re.compile(r"<[CL](?=[A-Z])")
_TRAILING_RUN = re.compile(r"[LCK<]{3,}$")

TD3_WIDTH = 44
TD1_WIDTH = 30


@dataclass
class NormalizationResult:
    """Result of line normalization.

    Attributes:
        normalized_text: Line after all repairs
        original_text: Line before repair
        rules_applied: Names of rules that changed the line, in firing order
        fallback: Whether an internal error forced returning the input
    """

    normalized_text: str
    original_text: str
    rules_applied: List[str] = field(default_factory=list)
    fallback: bool = False

    @property
    def repair_applied(self) -> bool:
        return self.normalized_text != self.original_text


def repair_document_type(line: str) -> str:
    """Force the column after a P/I document code to a filler."""
    if _DOCUMENT_TYPE.match(line):
        return line[0] + FILLER + line[2:]
    return line


def repair_separators(line: str) -> str:
    """Collapse filler + C/L + letter into a double filler, to a fixed point."""
    while True:
        repaired = _SEPARATOR.sub(FILLER * 2, line)
        if repaired == line:
            return line
        line = repaired


def repair_trailing_fillers(line: str) -> str:
    """Turn letters inside a trailing filler run into fillers."""
    match = _TRAILING_RUN.search(line)
    if match is None:
        return line
    run = match.group(0)
    if run.count(FILLER) == len(run):
        return line
    return line[: match.start()] + FILLER * len(run)


def repair_length(line: str) -> str:
    """Pad passport and identity card lines that lost trailing fillers."""
    if line.startswith("P" + FILLER) and 30 < len(line) < TD3_WIDTH:
        return line.ljust(TD3_WIDTH, FILLER)
    if line.startswith("I" + FILLER) and 20 < len(line) < TD1_WIDTH:
        return line.ljust(TD1_WIDTH, FILLER)
    return line


RULES = (
    ("document_type", repair_document_type),
    ("separator", repair_separators),
    ("trailing_fillers", repair_trailing_fillers),
    ("length", repair_length),
)


class LineNormalizer:
    """Best-effort OCR repair of candidate MRZ lines.

    Normalization never fails: an unexpected error while repairing a line
    is logged and the line is returned unchanged.

    Args:
        config: Normalization configuration.

    Example:
        >>> normalizer = LineNormalizer(NormalizationConfig(enabled=True))
        >>> result = normalizer.normalize_with_trace("I<UTOD231458907<<<<<<<<<<<<")
        >>> result.normalized_text
        'I<UTOD231458907<<<<<<<<<<<<<<<'
        >>> result.rules_applied
        ['length']
    """

    def __init__(self, config: Optional[NormalizationConfig] = None):
        """Initialize normalizer.

        Args:
            config: Normalization configuration. If None, repairs are enabled.
        """
        self.config = config or NormalizationConfig()

    def normalize(self, line: str) -> str:
        """Return the repaired line (the input itself if nothing applies)."""
        return self.normalize_with_trace(line).normalized_text

    def normalize_with_trace(self, line: str) -> NormalizationResult:
        """Repair a line and record which rules fired.

        Args:
            line: Candidate line (upper-case, no whitespace)

        Returns:
            NormalizationResult with repaired text and rule log
        """
        if not self.config.enabled:
            return NormalizationResult(normalized_text=line, original_text=line)

        try:
            text = line
            rules_applied: List[str] = []
            for _ in range(self.config.max_passes):
                previous = text
                for name, rule in RULES:
                    repaired = rule(text)
                    if repaired != text:
                        rules_applied.append(name)
                        text = repaired
                if text == previous:
                    break
            else:
                logger.debug(
                    f"Normalization of '{line}' not stable after "
                    f"{self.config.max_passes} passes"
                )
        except Exception as e:
            logger.warning(f"Normalization failed for '{line}', keeping input: {e}")
            return NormalizationResult(
                normalized_text=line, original_text=line, fallback=True
            )

        if rules_applied:
            logger.debug(f"Normalized '{line}' -> '{text}' (rules={rules_applied})")

        return NormalizationResult(
            normalized_text=text, original_text=line, rules_applied=rules_applied
        )


def normalize(line: str) -> str:
    """Normalize a candidate line using the default configuration."""
    return LineNormalizer().normalize(line)

"""Main MRZ processor with 4-stage pipeline.

This module orchestrates the complete MRZ reading workflow:
    1. LINE EXTRACTION: MRZ-shaped lines from raw OCR text
    2. LINE NORMALIZATION: Filler/letter OCR repairs and length padding
    3. FORMAT RESOLUTION: TD3/TD1 sliding-window alignment search
    4. FIELD DECODING: Field slicing and check digit verification

The pipeline is synchronous and holds no state between calls, so one
processor may serve many documents concurrently.

Example:
    >>> from src.mrz import MRZProcessor
    >>> processor = MRZProcessor()
    >>> result = processor.process(ocr_text)
    >>> if isinstance(result, ParsedRecord) and result.is_valid():
    ...     print(f"Document number: {result.document_number}")
"""

import logging
import time
from pathlib import Path
from typing import Optional, Union

from .config_loader import Config, get_default_config, load_config
from .decoder import FieldDecoder
from .extractor import LineExtractor
from .normalizer import LineNormalizer
from .resolver import FormatResolver
from .types import NoMatch, NoMatchReason, ParsedRecord

logger = logging.getLogger(__name__)

# Smallest MRZ (TD3) has two lines
MIN_CANDIDATE_LINES = 2


class MRZProcessor:
    """Main MRZ processing class with 4-stage pipeline.

    Args:
        config_path: Optional path to config YAML file. If None, uses default config.
        config: Optional already-loaded configuration (takes precedence).

    Attributes:
        config: Full configuration object
        extractor: Candidate line extractor
        normalizer: OCR repair engine
        decoder: Field decoder and check digit verifier
        resolver: Document format resolver
    """

    def __init__(
        self,
        config_path: Optional[Path] = None,
        config: Optional[Config] = None,
    ):
        """Initialize MRZ processor with configuration.

        Args:
            config_path: Path to config YAML. If None, uses bundled config.
            config: Loaded configuration, used instead of config_path.

        Raises:
            FileNotFoundError: If config_path does not exist
        """
        if config is not None:
            self.config: Config = config
        elif config_path is None:
            self.config = get_default_config()
        else:
            self.config = load_config(config_path)

        settings = self.config.mrz
        self.extractor = LineExtractor(config=settings.extraction)
        self.normalizer = LineNormalizer(config=settings.normalization)
        self.decoder = FieldDecoder(config=settings.dates)
        self.resolver = FormatResolver(decoder=self.decoder, config=settings.resolver)

        logger.info(
            f"MRZProcessor initialized: "
            f"normalization={settings.normalization.enabled}, "
            f"try_td1={settings.resolver.try_td1}, "
            f"century_pivot={settings.dates.century_pivot}"
        )

    def process(self, ocr_text: str) -> Union[ParsedRecord, NoMatch]:
        """Process OCR text through the 4-stage pipeline.

        Args:
            ocr_text: Single completed block of OCR text

        Returns:
            ParsedRecord (VALID or INVALID) or a terminal NoMatch
        """
        start_time = time.perf_counter()

        # ═══════════════════════════════════════════════════════════════
        # STAGE 1: LINE EXTRACTION
        # ═══════════════════════════════════════════════════════════════
        candidates = self.extractor.extract(ocr_text)
        if len(candidates) < MIN_CANDIDATE_LINES:
            logger.warning(
                f"Only {len(candidates)} candidate MRZ line(s) found, "
                f"need at least {MIN_CANDIDATE_LINES}"
            )
            return NoMatch(
                reason=NoMatchReason.TOO_FEW_CANDIDATE_LINES,
                normalized_lines=tuple(
                    self.normalizer.normalize(line) for line in candidates
                ),
                raw_lines=tuple(candidates),
            )

        # ═══════════════════════════════════════════════════════════════
        # STAGE 2: LINE NORMALIZATION
        # ═══════════════════════════════════════════════════════════════
        normalized = [self.normalizer.normalize(line) for line in candidates]

        # ═══════════════════════════════════════════════════════════════
        # STAGE 3 + 4: FORMAT RESOLUTION AND FIELD DECODING
        # ═══════════════════════════════════════════════════════════════
        result = self.resolver.resolve(normalized, raw_lines=candidates)

        processing_time_ms = (time.perf_counter() - start_time) * 1000
        if isinstance(result, ParsedRecord):
            logger.info(
                f"Decoded {result.document_format.value} record: "
                f"status={result.verification_status.value}, "
                f"errors={len(result.errors)}, time={processing_time_ms:.1f}ms"
            )
        return result

    def get_processing_stats(self) -> dict:
        """Get processor statistics.

        Returns:
            Dictionary with processor configuration and component status
        """
        settings = self.config.mrz
        return {
            "normalization_enabled": settings.normalization.enabled,
            "try_td1": settings.resolver.try_td1,
            "century_pivot": settings.dates.century_pivot,
            "extraction": {
                "min_length": settings.extraction.min_length,
                "max_length": settings.extraction.max_length,
                "min_fillers": settings.extraction.min_fillers,
                "exact_lengths": list(settings.extraction.exact_lengths),
            },
        }


_default_processor: Optional[MRZProcessor] = None


def process(ocr_text: str) -> Union[ParsedRecord, NoMatch]:
    """Process OCR text with a processor built from the default configuration."""
    global _default_processor
    if _default_processor is None:
        _default_processor = MRZProcessor()
    return _default_processor.process(ocr_text)

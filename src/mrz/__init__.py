"""MRZ Reading & Verification.

This module locates the machine-readable zone (MRZ) of an identity document
in noisy OCR text, repairs common OCR corruption, resolves the document
layout (TD3 passport or TD1 identity card), decodes its fields and verifies
them with ICAO 9303 check digits.

Core Components:
    - types: Data structures (ParsedRecord, NoMatch, DocumentFormat, etc.)
    - config_loader: Configuration loading with Pydantic validation
    - extractor: Candidate MRZ line extraction
    - normalizer: Filler/letter OCR repairs
    - resolver: Sliding-window format resolution
    - decoder: Field decoding and check digit verification
    - processor: Main MRZ processing pipeline

Example:
    >>> from src.mrz import process
    >>> result = process(ocr_text)
    >>> if isinstance(result, ParsedRecord):
    ...     print(result.surname, result.verification_status)
"""

from .config_loader import (
    Config,
    DateConfig,
    ExtractionConfig,
    ImageSourceConfig,
    MRZModuleConfig,
    NormalizationConfig,
    OCREngineConfig,
    ResolverConfig,
    get_default_config,
    load_config,
)
from .decoder import FieldDecoder
from .extractor import LineExtractor, extract
from .layouts import LAYOUTS, TD1_LAYOUT, TD3_LAYOUT
from .normalizer import LineNormalizer, NormalizationResult, normalize
from .processor import MRZProcessor, process
from .resolver import FormatResolver, candidate_windows
from .types import (
    CheckDigitError,
    CheckDigitResult,
    CompositeSpec,
    DocumentFormat,
    FieldSpec,
    NoMatch,
    NoMatchReason,
    ParsedRecord,
    VerificationStatus,
)
from .validator import (
    calculate_check_digit,
    format_ymd,
    split_names,
    validate_check_digit,
)

__all__ = [
    # Types
    "DocumentFormat",
    "VerificationStatus",
    "NoMatchReason",
    "FieldSpec",
    "CompositeSpec",
    "CheckDigitResult",
    "CheckDigitError",
    "ParsedRecord",
    "NoMatch",
    # Configuration
    "Config",
    "MRZModuleConfig",
    "ExtractionConfig",
    "NormalizationConfig",
    "ResolverConfig",
    "DateConfig",
    "OCREngineConfig",
    "ImageSourceConfig",
    "load_config",
    "get_default_config",
    # Layouts
    "LAYOUTS",
    "TD3_LAYOUT",
    "TD1_LAYOUT",
    # Validation
    "calculate_check_digit",
    "validate_check_digit",
    "format_ymd",
    "split_names",
    # Pipeline
    "LineExtractor",
    "extract",
    "LineNormalizer",
    "NormalizationResult",
    "normalize",
    "FieldDecoder",
    "FormatResolver",
    "candidate_windows",
    "MRZProcessor",
    "process",
]

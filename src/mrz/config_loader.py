"""Pydantic configuration models for the MRZ pipeline and their YAML loader.

Every setting has a default, so an empty or partial YAML file is valid.
"""

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field


class ExtractionConfig(BaseModel):
    """Candidate line extraction heuristics.

    Attributes:
        min_length: Minimum whitespace-stripped line length
        max_length: Maximum whitespace-stripped line length
        min_fillers: Minimum number of '<' characters for a shape match
        exact_lengths: Line lengths accepted without the filler requirement
    """

    min_length: int = Field(default=20, gt=0)
    max_length: int = Field(default=100, gt=0)
    min_fillers: int = Field(default=2, ge=0)
    exact_lengths: List[int] = [30, 36, 44]


class NormalizationConfig(BaseModel):
    """Line normalization configuration.

    Attributes:
        enabled: Enable OCR repair rules
        max_passes: Upper bound on rule-sequence passes per line
    """

    enabled: bool = True
    max_passes: int = Field(default=8, ge=1)


class ResolverConfig(BaseModel):
    """Format resolution configuration.

    Attributes:
        try_td1: Attempt the 3 x 30 layout when no VALID 2 x 44 fit exists
    """

    try_td1: bool = True


class DateConfig(BaseModel):
    """Date rendering configuration.

    Attributes:
        century_pivot: Two-digit years above this map to 19xx, others to 20xx
    """

    century_pivot: int = Field(default=50, ge=0, le=99)


class OCREngineConfig(BaseModel):
    """Tesseract engine configuration.

    Attributes:
        psm: Tesseract page segmentation mode (6 = single uniform block)
        lang: Tesseract language/model name
        char_whitelist: Characters Tesseract may emit
        tessdata_dir: Optional directory holding custom traineddata
    """

    psm: int = 6
    lang: str = "eng"
    char_whitelist: str = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789<"
    tessdata_dir: Optional[str] = None


class ImageSourceConfig(BaseModel):
    """Image source configuration.

    Attributes:
        pdf_dpi: Rasterization resolution for the first PDF page
    """

    pdf_dpi: int = Field(default=300, gt=0)


class MRZModuleConfig(BaseModel):
    """Complete MRZ module configuration.

    Attributes:
        extraction: Candidate line extraction heuristics
        normalization: OCR repair configuration
        resolver: Format resolution configuration
        dates: Date rendering configuration
        engine: OCR engine configuration
        image_source: Image source configuration
    """

    extraction: ExtractionConfig = ExtractionConfig()
    normalization: NormalizationConfig = NormalizationConfig()
    resolver: ResolverConfig = ResolverConfig()
    dates: DateConfig = DateConfig()
    engine: OCREngineConfig = OCREngineConfig()
    image_source: ImageSourceConfig = ImageSourceConfig()


class Config(BaseModel):
    """Root configuration container.

    Attributes:
        mrz: MRZ module configuration
    """

    mrz: MRZModuleConfig = MRZModuleConfig()


def load_config(config_path: Path) -> Config:
    """Load and validate an MRZ configuration file.

    The file may hold the module settings at top level or nested under an
    ``mrz`` key.

    Args:
        config_path: YAML file to read

    Returns:
        Validated Config; sections missing from the file keep their defaults

    Raises:
        FileNotFoundError: If the file does not exist
        yaml.YAMLError: If the file is not valid YAML
        pydantic.ValidationError: If a value is out of range or mistyped

    Example:
        >>> config = load_config(Path("src/mrz/config.yaml"))
        >>> config.mrz.dates.century_pivot
        50
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    settings = raw.get("mrz", raw) or {}

    return Config(mrz=MRZModuleConfig(**settings))


def get_default_config() -> Config:
    """Return the configuration bundled next to this module.

    Falls back to the model defaults when ``config.yaml`` is not installed.
    """
    bundled = Path(__file__).with_name("config.yaml")
    if not bundled.exists():
        return Config()
    return load_config(bundled)

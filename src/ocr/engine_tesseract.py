"""Tesseract OCR engine wrapper for MRZ recognition.

This module provides a high-level interface to Tesseract OCR configured for
the machine-readable zone: single uniform text block (PSM 6) and a character
whitelist restricted to the MRZ alphabet (A-Z, 0-9, '<').

Example:
    >>> from src.mrz.config_loader import OCREngineConfig
    >>> engine = TesseractEngine(OCREngineConfig())
    >>> result = engine.extract_text(image, progress_callback=print)
    0.0
    1.0
    >>> print(result.text)
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

import cv2
import numpy as np
import pytesseract

from src.mrz.config_loader import OCREngineConfig

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


@dataclass
class OCREngineResult:
    """Result from OCR engine text extraction.

    Attributes:
        text: Recognized upper-case text block (lines separated by newlines).
        success: Whether extraction was successful.
    """

    text: str
    success: bool


class TesseractEngine:
    """Tesseract recognizer restricted to the MRZ alphabet.

    Args:
        config: OCR engine configuration.

    Attributes:
        config: Engine configuration.
        tesseract_config: Command-line options passed to Tesseract.

    Raises:
        RuntimeError: If the Tesseract binary cannot be run.
    """

    def __init__(self, config: OCREngineConfig):
        """Initialize Tesseract wrapper and check the binary can be run."""
        self.config = config
        self.tesseract_config = self._build_config(config)

        try:
            version = pytesseract.get_tesseract_version()
        except Exception as e:
            logger.error(f"Cannot run Tesseract binary: {e}")
            raise RuntimeError(
                "Tesseract not available. Install the tesseract-ocr package "
                "and make sure the binary is on PATH."
            ) from e
        logger.info(f"TesseractEngine initialized: version={version}, psm={config.psm}")

    @staticmethod
    def _build_config(config: OCREngineConfig) -> str:
        options = [f"--psm {config.psm}"]
        if config.tessdata_dir:
            options.append(f"--tessdata-dir {config.tessdata_dir}")
        # Dictionaries only hurt on MRZ text
        options.extend(
            [
                "-c load_system_dawg=F",
                "-c load_freq_dawg=F",
                f"-c tessedit_char_whitelist={config.char_whitelist}",
            ]
        )
        return " ".join(options)

    @staticmethod
    def _to_grayscale(image: np.ndarray) -> Optional[np.ndarray]:
        """Return a 2-D view of the image, or None for unusable input."""
        if image is None or image.size == 0:
            return None
        if image.ndim == 2:
            return image
        if image.ndim == 3 and image.shape[2] == 1:
            return image[:, :, 0]
        if image.ndim == 3 and image.shape[2] == 3:
            return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        return None

    def extract_text(
        self,
        image: np.ndarray,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> OCREngineResult:
        """Recognize the text block of an MRZ image.

        Args:
            image: Grayscale (H, W) or BGR (H, W, 3) image.
            progress_callback: Optional callable receiving fractional progress.

        Returns:
            OCREngineResult; ``success`` is False when nothing was recognized.
        """
        gray = self._to_grayscale(image)
        if gray is None:
            shape = None if image is None else image.shape
            logger.error(f"Unusable image for OCR: shape={shape}")
            return OCREngineResult(text="", success=False)

        self._report(progress_callback, 0.0)
        try:
            logger.debug(f"Running Tesseract with config: {self.tesseract_config}")
            text = pytesseract.image_to_string(
                gray, lang=self.config.lang, config=self.tesseract_config
            )
        except Exception as e:
            logger.error(f"Tesseract recognition failed: {e}", exc_info=True)
            return OCREngineResult(text="", success=False)
        self._report(progress_callback, 1.0)

        text = text.upper().strip()
        if not text:
            logger.warning("Tesseract returned no text")
            return OCREngineResult(text="", success=False)

        logger.debug(f"Tesseract recognized {len(text.splitlines())} line(s)")
        return OCREngineResult(text=text, success=True)

    @staticmethod
    def _report(progress_callback: Optional[ProgressCallback], progress: float) -> None:
        if progress_callback is not None:
            progress_callback(progress)

"""OCR collaborators for the MRZ pipeline.

Thin adapters that turn an uploaded file into the single text block the MRZ
core consumes:

    - image_source: raster frame from an image file or first PDF page
    - engine_tesseract: Tesseract recognition with the MRZ whitelist

Example:
    >>> from src.ocr import TesseractEngine, load_image
    >>> image = load_image("passport.jpg")
    >>> result = TesseractEngine(OCREngineConfig()).extract_text(image)
"""

from .engine_tesseract import OCREngineResult, TesseractEngine
from .image_source import ImageSourceError, load_image

__all__ = [
    "OCREngineResult",
    "TesseractEngine",
    "ImageSourceError",
    "load_image",
]

"""Image source: a single raster frame from an image file or a PDF.

Images are decoded with OpenCV. PDFs are rasterized with pdf2image (Poppler)
and only the first page is used.
"""

import logging
from pathlib import Path
from typing import Union

import cv2
import numpy as np
from pdf2image import convert_from_bytes

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"


class ImageSourceError(Exception):
    """Raised when no raster frame can be decoded from the input."""


def is_pdf(data: bytes) -> bool:
    return data[:4] == PDF_MAGIC


def load_image(source: Union[str, Path, bytes], dpi: int = 300) -> np.ndarray:
    """Load a BGR frame from a path or raw bytes.

    Args:
        source: File path or file content
        dpi: Rasterization resolution for PDF input

    Returns:
        BGR image as numpy array (H, W, 3)

    Raises:
        FileNotFoundError: If a path does not exist
        ImageSourceError: If the content cannot be decoded
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Input file not found: {path}")
        data = path.read_bytes()
    else:
        data = source

    if not data:
        raise ImageSourceError("Input is empty")

    if is_pdf(data):
        return _first_pdf_page(data, dpi)

    image = cv2.imdecode(np.frombuffer(data, np.uint8), cv2.IMREAD_COLOR)
    if image is None:
        raise ImageSourceError("Could not decode image data")

    logger.debug(f"Decoded image of shape {image.shape}")
    return image


def _first_pdf_page(data: bytes, dpi: int) -> np.ndarray:
    try:
        pages = convert_from_bytes(data, dpi=dpi, first_page=1, last_page=1)
    except Exception as e:
        raise ImageSourceError(f"PDF rasterization failed: {e}") from e

    if not pages:
        raise ImageSourceError("PDF has no pages")

    rgb = np.array(pages[0].convert("RGB"))
    logger.debug(f"Rasterized first PDF page at {dpi} dpi: shape {rgb.shape}")
    return cv2.cvtColor(rgb, cv2.COLOR_RGB2BGR)

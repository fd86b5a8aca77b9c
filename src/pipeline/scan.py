"""
MRZ Scan Pipeline

Runs OCR (optional) and the MRZ core on one input file and prints the
structured result as JSON.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from src.mrz import MRZProcessor, ParsedRecord
from src.mrz.config_loader import get_default_config, load_config

logger = logging.getLogger(__name__)

EXIT_RECORD = 0
EXIT_NO_MATCH = 2

TEXT_SUFFIXES = {".txt", ".mrz"}


def read_ocr_text(input_path: Path, as_text: bool, config) -> str:
    """Return the OCR text block for an input file."""
    if as_text or input_path.suffix.lower() in TEXT_SUFFIXES:
        return input_path.read_text(encoding="utf-8")

    # Imported lazily so text-only runs do not need OpenCV or Tesseract
    from src.ocr import TesseractEngine, load_image

    image = load_image(input_path, dpi=config.mrz.image_source.pdf_dpi)
    engine = TesseractEngine(config.mrz.engine)
    result = engine.extract_text(
        image, progress_callback=lambda p: logger.info(f"OCR progress: {p:.0%}")
    )
    return result.text


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Read and verify the MRZ of an identity document",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--input", type=str, required=True, help="Image, PDF or OCR text file")
    parser.add_argument("--text", action="store_true", help="Treat input as OCR text")
    parser.add_argument("--config", type=str, default=None, help="Configuration YAML file")
    parser.add_argument("--output", type=str, default=None, help="Write JSON result to this file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    config = load_config(Path(args.config)) if args.config else get_default_config()
    processor = MRZProcessor(config=config)

    ocr_text = read_ocr_text(Path(args.input), args.text, config)
    result = processor.process(ocr_text)

    payload = json.dumps(result.to_dict(), indent=2)
    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(payload + "\n", encoding="utf-8")
        logger.info(f"Result written to {output_path}")
    else:
        print(payload)

    return EXIT_RECORD if isinstance(result, ParsedRecord) else EXIT_NO_MATCH


if __name__ == "__main__":
    sys.exit(main())

"""
Receipt reading for Dinner Debt: photo in, structured receipt data out
"""

import logging
from pathlib import Path
from typing import Optional

from config import MAX_IMAGE_SIZE_BYTES
from constants import SUPPORTED_IMAGE_EXTENSIONS, UNSUPPORTED_IMAGE_EXTENSIONS
from data_models import ReceiptData
from errors import ReceiptReadError
from ocr_processor import ReceiptImageReader
from receipt_parser import ReceiptTextParser

logger = logging.getLogger(__name__)


def validate_receipt_image(image_path: str) -> Path:
    """Check that the path is a readable, supported image; raise otherwise"""
    path = Path(image_path)
    suffix = path.suffix.lower()

    if suffix in UNSUPPORTED_IMAGE_EXTENSIONS:
        raise ReceiptReadError("HEIC/HEIF format is not supported. Please convert to JPEG or PNG first.")
    if not path.is_file():
        raise ReceiptReadError(f"File not found: {image_path}")
    if suffix not in SUPPORTED_IMAGE_EXTENSIONS:
        raise ReceiptReadError(f"Unsupported file extension: {path.suffix or '(none)'}")

    size = path.stat().st_size
    if size > MAX_IMAGE_SIZE_BYTES:
        raise ReceiptReadError(f"File too large: {size} bytes (max: {MAX_IMAGE_SIZE_BYTES})")
    return path


def read_receipt(image_path: str, reader: Optional[ReceiptImageReader] = None,
                 parser: Optional[ReceiptTextParser] = None) -> ReceiptData:
    """Validate, OCR and parse a receipt photo"""
    path = validate_receipt_image(image_path)
    reader = reader or ReceiptImageReader()
    parser = parser or ReceiptTextParser()

    text = reader.read_text(str(path))
    logger.debug("OCR text:\n%s", text)
    receipt = parser.parse(text)
    reader.metrics.items_detected = len(receipt.items)

    if not receipt.items:
        raise ReceiptReadError(f"No items found on receipt {image_path}")
    return receipt

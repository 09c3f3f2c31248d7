"""
OCR Processing module for Dinner Debt
Reads the text of a receipt photo using parallel OCR over image bands
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Tuple

import cv2
import numpy as np
import pytesseract
from PIL import Image, ImageEnhance, ImageFilter, ImageOps

from config import (
    DEFAULT_MAX_WORKERS, IMAGE_REGION_OVERLAP_PX, MAX_IMAGE_DIMENSION,
    OCR_LANGUAGES, OCR_PSM, WORKERS_MAX, WORKERS_MIN,
)
from data_models import ProcessingMetrics
from errors import ReceiptReadError

logger = logging.getLogger(__name__)


class ReceiptImageReader:
    """Parallel OCR of receipt images"""

    def __init__(self, num_workers: int = DEFAULT_MAX_WORKERS, languages: str = OCR_LANGUAGES):
        self.num_workers = max(WORKERS_MIN, min(WORKERS_MAX, num_workers))
        self.languages = languages
        self.metrics = ProcessingMetrics()

    def preprocess_image(self, image: Image.Image) -> Image.Image:
        """Grayscale, shrink, sharpen and denoise to help Tesseract"""
        image = ImageOps.exif_transpose(image)
        if max(image.size) > MAX_IMAGE_DIMENSION:
            image = image.copy()
            image.thumbnail((MAX_IMAGE_DIMENSION, MAX_IMAGE_DIMENSION))
            logger.debug("Resized image to %dx%d", *image.size)

        if image.mode != 'L':
            image = image.convert('L')

        image = ImageEnhance.Contrast(image).enhance(2.0)
        image = image.filter(ImageFilter.SHARPEN)

        img_array = np.array(image)
        img_array = cv2.bilateralFilter(img_array, 9, 75, 75)
        return Image.fromarray(img_array)

    def split_image_into_regions(self, image: Image.Image) -> List[Tuple[int, Image.Image]]:
        """Horizontal bands with a small overlap so no line is cut in half"""
        width, height = image.size
        region_count = max(1, min(self.num_workers, height // (IMAGE_REGION_OVERLAP_PX * 2)))
        region_height = height // region_count
        regions = []

        for i in range(region_count):
            y_start = i * region_height
            y_end = height if i == region_count - 1 else (i + 1) * region_height + IMAGE_REGION_OVERLAP_PX
            regions.append((i, image.crop((0, y_start, width, min(y_end, height)))))

        return regions

    def process_region(self, region_data: Tuple[int, Image.Image]) -> str:
        region_id, region_image = region_data
        logger.debug("Worker %d: processing region", region_id + 1)
        return pytesseract.image_to_string(
            region_image,
            lang=self.languages,
            config=f'--psm {OCR_PSM}',
        )

    def read_text(self, image_path: str) -> str:
        """OCR the whole image and return its text in reading order"""
        start_time = time.time()
        try:
            with Image.open(image_path) as image:
                image.load()
                processed_image = self.preprocess_image(image)
        except OSError as e:
            raise ReceiptReadError(f"Could not open image {image_path}: {e}") from e

        regions = self.split_image_into_regions(processed_image)
        self.metrics = ProcessingMetrics(regions_processed=len(regions))

        region_texts = []
        with ThreadPoolExecutor(max_workers=self.num_workers) as executor:
            future_to_region = {
                executor.submit(self.process_region, region): region[0]
                for region in regions
            }
            for future in as_completed(future_to_region):
                region_id = future_to_region[future]
                try:
                    region_texts.append((region_id, future.result()))
                except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as e:
                    raise ReceiptReadError(f"OCR failed on region {region_id + 1}: {e}") from e

        region_texts.sort(key=lambda x: x[0])
        combined_text = '\n'.join(text for _, text in region_texts)

        self.metrics.workers_used = min(self.num_workers, len(regions))
        self.metrics.processing_time = time.time() - start_time
        self.metrics.lines_read = len([line for line in combined_text.split('\n') if line.strip()])
        logger.info("OCR complete in %.2fs using %d workers",
                    self.metrics.processing_time, self.metrics.workers_used)
        return combined_text

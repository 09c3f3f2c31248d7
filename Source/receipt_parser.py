"""
Receipt Parser module for Dinner Debt
Parses OCR text into receipt items, subtotal, total and tip information
"""

import logging
import re
from difflib import SequenceMatcher
from typing import List, Optional

from config import DUPLICATE_SIMILARITY_THRESHOLD, ITEM_PRICE_MAX, ITEM_PRICE_MIN
from constants import PATTERNS, SKIP_WORDS
from data_models import ReceiptData, ReceiptLine

logger = logging.getLogger(__name__)

MAX_LINE_QUANTITY = 20


class ReceiptTextParser:
    """Parses OCR text to extract receipt items and totals"""

    def __init__(self, similarity_threshold: float = DUPLICATE_SIMILARITY_THRESHOLD):
        self.similarity_threshold = similarity_threshold

    def _clean_price(self, price_str: str) -> Optional[float]:
        """Convert a price string such as '1,234.50' to float"""
        if not price_str:
            return None
        cleaned = re.sub(r'[^\d\.\-]', '', str(price_str))
        try:
            return float(cleaned)
        except ValueError:
            return None

    def _is_item_price(self, price: Optional[float]) -> bool:
        return price is not None and ITEM_PRICE_MIN <= price <= ITEM_PRICE_MAX

    def _is_valid_item_name(self, name: str) -> bool:
        """Check if the name is likely a menu item"""
        if not name or len(name.strip()) < 2:
            return False

        words = re.findall(r'[a-z]+', name.lower())
        if any(word in SKIP_WORDS for word in words):
            return False

        # need at least two letters
        if len(re.findall(r'[^\W\d_]', name)) < 2:
            return False

        return True

    def _similarity_score(self, str1: str, str2: str) -> float:
        return SequenceMatcher(None, str1.lower(), str2.lower()).ratio()

    def deduplicate_lines(self, text: str) -> List[str]:
        """Drop lines repeated by overlapping OCR regions"""
        unique_lines = []
        for line in text.split('\n'):
            line = line.strip()
            if not line:
                continue
            # only the region overlap repeats, so compare against recent lines
            recent = unique_lines[-10:]
            duplicate = next(
                (seen for seen in recent
                 if seen == line or self._similarity_score(line, seen) > self.similarity_threshold),
                None,
            )
            if duplicate is not None:
                logger.debug("Skipping duplicate line %r (matches %r)", line, duplicate)
                continue
            unique_lines.append(line)
        return unique_lines

    def _match_amount(self, key: str, line: str) -> Optional[float]:
        match = re.search(PATTERNS[key], line, re.IGNORECASE)
        if not match:
            return None
        return self._clean_price(match.group(1))

    def extract_items(self, line: str) -> List[ReceiptLine]:
        """Items on one line; a quantity becomes that many equal items"""
        # Pattern 1: Qty Name Price
        qty_match = re.search(PATTERNS['qty_prefix'], line, re.IGNORECASE)
        # Pattern 2: Name xQty Price
        if not qty_match:
            suffix_match = re.search(PATTERNS['qty_suffix'], line, re.IGNORECASE)
            if suffix_match:
                name, quantity, price = suffix_match.groups()
                return self._expand_quantity(name, quantity, price)
        else:
            quantity, name, price = qty_match.groups()
            items = self._expand_quantity(name, quantity, price)
            if items:
                return items

        # Pattern 3: Name Price
        simple_match = re.search(PATTERNS['simple_item'], line, re.IGNORECASE)
        if simple_match:
            name = simple_match.group(1).strip(' .-:*')
            price = self._clean_price(simple_match.group(2))
            if self._is_valid_item_name(name) and self._is_item_price(price):
                return [ReceiptLine(name=name, cost=price)]

        return []

    def _expand_quantity(self, name: str, quantity: str, price: str) -> List[ReceiptLine]:
        name = name.strip(' .-:*')
        count = int(quantity)
        line_total = self._clean_price(price)
        if not (1 <= count <= MAX_LINE_QUANTITY):
            return []
        if not self._is_valid_item_name(name) or not self._is_item_price(line_total):
            return []
        unit_cost = round(line_total / count, 2)
        return [ReceiptLine(name=name, cost=unit_cost) for _ in range(count)]

    def parse(self, ocr_text: str) -> ReceiptData:
        """Parse OCR text into receipt data"""
        lines = self.deduplicate_lines(ocr_text or '')
        logger.debug("Parsing %d receipt lines", len(lines))

        receipt = ReceiptData()
        gratuity_found = False
        tip = None

        for line in lines:
            subtotal = self._match_amount('subtotal', line)
            if subtotal is not None:
                if receipt.subtotal is None:
                    receipt.subtotal = subtotal
                continue

            if self._match_amount('gratuity', line) is not None:
                gratuity_found = True
                continue

            tip_amount = self._match_amount('tip', line)
            if tip_amount is not None:
                tip = tip_amount
                continue

            if self._match_amount('tax', line) is not None:
                continue

            total = self._match_amount('total', line)
            if total is not None:
                # later totals are hand-written or payment lines
                if receipt.total is None:
                    receipt.total = total
                continue

            if receipt.total is None:
                receipt.items.extend(self.extract_items(line))

        if tip:
            receipt.tip = tip
            receipt.tip_included_in_total = False
        elif gratuity_found:
            receipt.tip = 0
            receipt.tip_included_in_total = True

        logger.info(
            "Parsed receipt: %d items, subtotal=%s, total=%s, tip=%s, tip included=%s",
            len(receipt.items), receipt.subtotal, receipt.total,
            receipt.tip, receipt.tip_included_in_total,
        )
        return receipt

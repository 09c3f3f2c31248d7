#!/usr/bin/env python3
"""
Utility functions for Dinner Debt
"""

import re
from typing import Optional

from debt_calculator import round_currency
from expression import safe_eval


def format_currency(amount: float, currency: str = 'USD') -> str:
    """Format currency amount with proper symbols"""
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        return "0.00"

    currency_symbols = {
        'USD': '$',
        'EUR': '€',
        'GBP': '£',
    }

    symbol = currency_symbols.get(currency, currency)
    rounded = round_currency(amount)
    sign = '-' if rounded < 0 else ''

    if currency in currency_symbols:
        return f"{sign}{symbol}{abs(rounded):.2f}"
    return f"{rounded:.2f} {symbol}"


def parse_amount(value: str) -> Optional[float]:
    """Parse a typed amount, allowing arithmetic like '45/3' and a leading '$'"""
    if not isinstance(value, str):
        return None
    cleaned = value.strip().replace('$', '').replace(',', '')
    return safe_eval(cleaned, None)


def parse_portions(value: str) -> Optional[tuple[float, float]]:
    """Parse 'PAYING/TOTAL' (e.g. '2/3') or a bare total split count"""
    if not isinstance(value, str) or not value.strip():
        return None
    paying_text, sep, total_text = value.strip().partition('/')
    if not sep:
        total = safe_eval(paying_text, None)
        return (1, total) if total is not None else None
    paying = safe_eval(paying_text, None)
    total = safe_eval(total_text, None)
    if paying is None or total is None:
        return None
    return paying, total


def validate_menu_choice(choice: str, valid_choices: list[str]) -> Optional[str]:
    """Validate a menu choice against allowed options"""
    if not isinstance(choice, str):
        return None
    choice = choice.strip()
    return choice if choice in set(valid_choices) else None


def clean_text_for_display(text: str, max_length: int = 100) -> str:
    """Clean text for safe display in the terminal"""
    if not isinstance(text, str):
        return ""

    text = re.sub(r'[\x00-\x1f\x7f-\x9f]', '', text)
    text = ' '.join(text.split())

    if len(text) > max_length:
        text = text[:max_length-3] + "..."

    return text


def mask_secret(value: Optional[str], visible: int = 4) -> str:
    if not value:
        return 'not set'
    if len(value) <= visible:
        return '*' * len(value)
    return '*' * (len(value) - visible) + value[-visible:]

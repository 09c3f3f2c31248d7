"""
Encode and decode a bill for sharing in a URL.
The bill is serialized as compact JSON, then base64 encoded into one query parameter.
"""

import base64
import binascii
import json
import logging
from typing import Optional
from urllib.parse import parse_qs, quote, urlsplit

from config import SHARE_QUERY_PARAM
from data_models import Bill
from item_helpers import ensure_item_ids

logger = logging.getLogger(__name__)


def encode_form_state(bill: Bill) -> str:
    """Serialize a bill into an opaque base64 string, or '' on failure"""
    try:
        payload = json.dumps(bill.to_dict(), separators=(',', ':'), allow_nan=False)
    except (TypeError, ValueError) as e:
        logger.error("Failed to encode form state: %s", e)
        return ''
    return base64.b64encode(payload.encode('utf-8')).decode('ascii')


def decode_form_state(encoded: str) -> Optional[Bill]:
    """Inverse of encode_form_state; None when the string is not valid shared state"""
    try:
        raw = base64.b64decode(encoded, validate=True)
        text = raw.decode('utf-8')
        logger.debug("Decoded form state JSON: %s", text)
        bill = Bill.from_dict(json.loads(text))
    except (TypeError, ValueError, binascii.Error) as e:
        # UnicodeDecodeError and JSONDecodeError are ValueErrors
        logger.error("Failed to decode form state: %s", e)
        return None
    bill.items = ensure_item_ids(bill.items)
    return bill


def build_share_url(base_url: str, bill: Bill) -> str:
    """Link that reopens this bill, e.g. https://host/app?data=..."""
    encoded = encode_form_state(bill)
    separator = '&' if '?' in base_url else '?'
    return f"{base_url}{separator}{SHARE_QUERY_PARAM}={quote(encoded, safe='')}"


def extract_shared_state(url: str) -> Optional[Bill]:
    """Read the shared bill out of a link, None if the link carries none"""
    query = urlsplit(url).query
    # keep '+' as-is since unquoted base64 links are common
    values = parse_qs(query.replace('+', '%2B')).get(SHARE_QUERY_PARAM)
    if not values:
        return None
    return decode_form_state(values[0])

"""
Venmo payment links for mobile and desktop.
Mobile uses the venmo:// scheme, desktop uses https:// with an @ prefix for recipients.
"""

import re
from typing import Optional, Union
from urllib.parse import quote

from config import VENMO_NOTE
from constants import MOBILE_USER_AGENT_PATTERN, VENMO_MOBILE_BASE, VENMO_WEB_BASE
from debt_calculator import round_currency


def is_mobile_device(user_agent: Optional[str]) -> bool:
    if not user_agent:
        return False
    return re.search(MOBILE_USER_AGENT_PATTERN, user_agent, re.IGNORECASE) is not None


def format_amount(amount: Union[str, float]) -> str:
    """Amount as Venmo expects it, always two decimals"""
    if isinstance(amount, str):
        return amount
    return f"{round_currency(amount):.2f}"


def get_venmo_url(amount: Union[str, float], note: str = VENMO_NOTE,
                  recipient: Optional[str] = None, user_agent: Optional[str] = None,
                  mobile: Optional[bool] = None) -> str:
    """Build a Venmo pay link; mobile overrides user agent detection when given"""
    if mobile is None:
        mobile = is_mobile_device(user_agent)

    params = f"amount={format_amount(amount)}&note={quote(note, safe='')}"
    if mobile:
        base_url = f"{VENMO_MOBILE_BASE}&{params}"
        return f"{base_url}&recipients={recipient}" if recipient else base_url

    base_url = f"{VENMO_WEB_BASE}&{params}"
    return f"{base_url}&recipients=@{recipient}" if recipient else base_url

import pytest

from venmo_url import format_amount, get_venmo_url, is_mobile_device

IPHONE = "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15"
DESKTOP = "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 Chrome/120.0 Safari/537.36"


@pytest.mark.parametrize("user_agent, expected", [
    (IPHONE, True),
    ("Mozilla/5.0 (Linux; android 14; Pixel 8)", True),
    ("Mozilla/5.0 (iPad; CPU OS 16_0 like Mac OS X)", True),
    (DESKTOP, False),
    ("", False),
    (None, False),
])
def test_is_mobile_device(user_agent, expected):
    assert is_mobile_device(user_agent) is expected


def test_mobile_link_with_recipient():
    url = get_venmo_url("13.20", "dinner-debt", "alex-k", user_agent=IPHONE)
    assert url == "venmo://paycharge?txn=pay&amount=13.20&note=dinner-debt&recipients=alex-k"


def test_mobile_link_without_recipient():
    url = get_venmo_url("13.20", "dinner-debt", mobile=True)
    assert url == "venmo://paycharge?txn=pay&amount=13.20&note=dinner-debt"


def test_desktop_link_prefixes_recipient():
    url = get_venmo_url("13.20", "dinner-debt", "alex-k", user_agent=DESKTOP)
    assert url == "https://venmo.com/?txn=pay&amount=13.20&note=dinner-debt&recipients=@alex-k"


def test_desktop_link_without_recipient():
    assert get_venmo_url("5.00") == "https://venmo.com/?txn=pay&amount=5.00&note=dinner-debt"


def test_mobile_flag_overrides_user_agent():
    assert get_venmo_url("1.00", mobile=False, user_agent=IPHONE).startswith("https://venmo.com/")


def test_note_is_url_encoded():
    url = get_venmo_url("1.00", "tacos & beer", mobile=True)
    assert "note=tacos%20%26%20beer" in url


def test_numeric_amount_is_rounded_to_cents():
    assert format_amount(48.852) == "48.85"
    assert format_amount(13.2) == "13.20"
    assert "amount=40.57&" in get_venmo_url(40.5672)

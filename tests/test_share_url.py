import base64
import json
import logging

import pytest

from data_models import Bill, Item
from debt_calculator import calculate_debt
from share_url import build_share_url, decode_form_state, encode_form_state, extract_shared_state


def sample_bill():
    return Bill(
        items=[
            Item(name="Nachos", cost=12, portions_paying=1, total_portions=3, id="a1"),
            Item(name="Burger", cost=18.5, portions_paying=1, total_portions=1, id="b2"),
        ],
        subtotal=60,
        total=65.4,
        tip=18,
        tip_is_rate=True,
        tip_included_in_total=False,
        venmo_username="alex-k",
    )


def test_encoded_state_is_base64_of_compact_json():
    encoded = encode_form_state(sample_bill())
    payload = json.loads(base64.b64decode(encoded))
    assert payload == {
        "items": [
            {"name": "Nachos", "cost": 12, "portionsPaying": 1, "totalPortions": 3, "id": "a1"},
            {"name": "Burger", "cost": 18.5, "portionsPaying": 1, "totalPortions": 1, "id": "b2"},
        ],
        "subtotal": 60,
        "total": 65.4,
        "tip": 18,
        "tipIsRate": True,
        "tipIncludedInTotal": False,
        "venmoUsername": "alex-k",
    }
    assert b" " not in base64.b64decode(encoded)


def test_absent_values_are_left_out():
    encoded = encode_form_state(Bill(items=[Item(cost=5)]))
    payload = json.loads(base64.b64decode(encoded))
    assert payload == {"items": [{"cost": 5}], "tipIsRate": True, "tipIncludedInTotal": False}


def test_decode_restores_bill():
    bill = sample_bill()
    decoded = decode_form_state(encode_form_state(bill))
    assert decoded == bill
    assert calculate_debt(decoded) == calculate_debt(bill)


def test_decode_state_written_by_the_web_app():
    # JSON.stringify output from the browser, then btoa
    web_json = ('{"items":[{"portionsPaying":2,"totalPortions":3,"id":"x","cost":30}],'
                '"subtotal":30,"total":33,"tip":20,"tipIsRate":true,"tipIncludedInTotal":false}')
    bill = decode_form_state(base64.b64encode(web_json.encode()).decode())
    assert bill.items == [Item(cost=30, portions_paying=2, total_portions=3, id="x")]
    assert calculate_debt(bill) == pytest.approx(26.4)


def test_decode_assigns_missing_ids():
    web_json = '{"items":[{"cost":4},{"cost":6,"id":"keep"}],"tipIsRate":false,"tipIncludedInTotal":false}'
    bill = decode_form_state(base64.b64encode(web_json.encode()).decode())
    assert bill.items[0].id
    assert bill.items[1].id == "keep"
    assert bill.tip_is_rate is False


def test_decode_malformed_base64_returns_none(caplog):
    with caplog.at_level(logging.ERROR, logger="share_url"):
        assert decode_form_state("not base64!!") is None
    assert "Failed to decode form state" in caplog.text


def test_decode_invalid_json_returns_none():
    assert decode_form_state(base64.b64encode(b"{items: oops").decode()) is None


def test_decode_wrong_shape_returns_none():
    assert decode_form_state(base64.b64encode(b"[1, 2, 3]").decode()) is None
    assert decode_form_state(base64.b64encode(b'{"items": "nope"}').decode()) is None
    assert decode_form_state(base64.b64encode(b'{"items": [{"cost": "ten"}]}').decode()) is None


@pytest.mark.parametrize("flags", [
    '"tipIsRate":"false"',
    '"tipIncludedInTotal":1',
    '"tipIsRate":0',
    '"tipIncludedInTotal":"true"',
])
def test_decode_non_boolean_flags_returns_none(flags):
    web_json = '{"items":[{"cost":10}],"subtotal":10,%s}' % flags
    assert decode_form_state(base64.b64encode(web_json.encode()).decode()) is None


def test_decode_missing_or_null_flags_use_defaults():
    web_json = '{"items":[{"cost":10}],"tipIsRate":null}'
    bill = decode_form_state(base64.b64encode(web_json.encode()).decode())
    assert bill.tip_is_rate is True
    assert bill.tip_included_in_total is False


def test_decode_non_utf8_returns_none():
    assert decode_form_state(base64.b64encode(b"\xff\xfe\x00").decode()) is None


def test_decode_empty_string_returns_none():
    assert decode_form_state("") is None


def test_share_url_round_trip():
    bill = sample_bill()
    url = build_share_url("https://dinnerdebt.app/", bill)
    assert url.startswith("https://dinnerdebt.app/?data=")
    assert extract_shared_state(url) == bill


def test_share_url_appends_to_existing_query():
    url = build_share_url("https://example.com/split?lang=en", sample_bill())
    assert "?lang=en&data=" in url
    assert extract_shared_state(url) == sample_bill()


def test_extract_accepts_unquoted_base64():
    encoded = encode_form_state(sample_bill())
    assert extract_shared_state(f"https://dinnerdebt.app/?data={encoded}") == sample_bill()


def test_extract_without_state_returns_none():
    assert extract_shared_state("https://dinnerdebt.app/") is None
    assert extract_shared_state("https://dinnerdebt.app/?data=%%%") is None

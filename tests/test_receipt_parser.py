import pytest

from data_models import ReceiptLine
from receipt_parser import ReceiptTextParser

PRINTED_RECEIPT = """
THE CORNER BISTRO
123 Main St
Server: Jamie   Table 12
Burger 14.00
2 Fries 9.00
Caesar Salad x2 22.00
Iced Tea $3.50
Subtotal 48.50
Sales Tax 8.875% 4.30
Total $52.80
Tip ______
VISA **** 1234 52.80
Thank you!
"""


@pytest.fixture
def parser():
    return ReceiptTextParser()


def test_parse_items_and_totals(parser):
    receipt = parser.parse(PRINTED_RECEIPT)
    assert receipt.items == [
        ReceiptLine("Burger", 14.0),
        ReceiptLine("Fries", 4.5),
        ReceiptLine("Fries", 4.5),
        ReceiptLine("Caesar Salad", 11.0),
        ReceiptLine("Caesar Salad", 11.0),
        ReceiptLine("Iced Tea", 3.5),
    ]
    assert receipt.subtotal == 48.5
    assert receipt.total == 52.8
    assert receipt.tip is None
    assert receipt.tip_included_in_total is False


def test_gratuity_means_tip_is_in_total(parser):
    text = "Pasta 18.00\nSubtotal 18.00\nTax 1.62\nGratuity 18% 3.24\nTotal 22.86\n"
    receipt = parser.parse(text)
    assert receipt.items == [ReceiptLine("Pasta", 18.0)]
    assert receipt.tip_included_in_total is True
    assert receipt.tip == 0
    assert receipt.total == 22.86


def test_written_tip_is_separate(parser):
    text = "Pasta 18.00\nSubtotal 18.00\nTotal 19.62\nTip 4.00\nTotal 23.62\n"
    receipt = parser.parse(text)
    assert receipt.tip == 4.0
    assert receipt.tip_included_in_total is False
    # the printed total wins over the hand-written one
    assert receipt.total == 19.62


def test_written_tip_beats_service_charge(parser):
    text = "Pizza 20.00\nService Charge 2.00\nTotal 22.00\nTip: 3.00\n"
    receipt = parser.parse(text)
    assert receipt.tip == 3.0
    assert receipt.tip_included_in_total is False


def test_overlapping_region_lines_are_deduplicated(parser):
    text = ("Burger 14.00\nFries 4.50\nFries 4.50\n"
            "Chicken Caesar Salad 14.50\nChicken Caesar Salad 14.5O\nSoda 2.00\n")
    receipt = parser.parse(text)
    assert [line.name for line in receipt.items] == ["Burger", "Fries", "Chicken Caesar Salad", "Soda"]


def test_non_item_lines_are_skipped(parser):
    text = "Date 01/02/2026\nCash 50.00\nChange 7.20\n12.00\n"
    assert parser.parse(text).items == []


def test_comma_thousands(parser):
    receipt = parser.parse("Wine Bottle 1,250.00\nTotal 1,250.00\n")
    assert receipt.items == [ReceiptLine("Wine Bottle", 1250.0)]
    assert receipt.total == 1250.0


def test_empty_text(parser):
    receipt = parser.parse("")
    assert receipt.items == []
    assert receipt.subtotal is None and receipt.total is None

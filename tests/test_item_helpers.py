from data_models import Bill, Item, ReceiptData, ReceiptLine
from item_helpers import (
    bill_from_receipt, default_bill, empty_item, ensure_item_ids, items_from_receipt,
)


def receipt(**kwargs):
    lines = [ReceiptLine("Tacos", 14.0), ReceiptLine("Margarita", 11.5)]
    return ReceiptData(items=lines, **kwargs)


def test_empty_item():
    item = empty_item()
    assert item.portions_paying == 1
    assert item.total_portions == 1
    assert item.cost is None
    assert item.id and item.id != empty_item().id


def test_default_bill_has_one_blank_item_and_default_tip():
    bill = default_bill()
    assert len(bill.items) == 1
    assert bill.tip == 20
    assert bill.tip_is_rate is True
    assert bill.tip_included_in_total is False


def test_ensure_item_ids_keeps_existing():
    items = ensure_item_ids([Item(cost=1, id="mine"), Item(cost=2)])
    assert items[0].id == "mine"
    assert items[1].id


def test_receipt_lines_become_unsplit_items():
    items = items_from_receipt(receipt())
    assert [(i.name, i.cost, i.portions_paying, i.total_portions) for i in items] == [
        ("Tacos", 14.0, 1, 1),
        ("Margarita", 11.5, 1, 1),
    ]
    assert len({i.id for i in items}) == 2


def test_bill_from_receipt_copies_totals():
    bill = bill_from_receipt(receipt(subtotal=25.5, total=27.8))
    assert bill.subtotal == 25.5
    assert bill.total == 27.8
    assert bill.tip == 20 and bill.tip_is_rate
    assert bill.tip_included_in_total is False


def test_bill_from_receipt_with_tip_in_total():
    bill = bill_from_receipt(receipt(subtotal=25.5, total=31.0, tip_included_in_total=True, tip=0))
    assert bill.tip == 0
    assert bill.tip_included_in_total is True


def test_bill_from_receipt_with_written_tip_is_flat():
    bill = bill_from_receipt(receipt(subtotal=25.5, total=27.8, tip=5.0))
    assert bill.tip == 5.0
    assert bill.tip_is_rate is False
    assert bill.tip_included_in_total is False


def test_bill_from_receipt_keeps_base_settings():
    base = Bill(items=[Item(cost=99)], subtotal=10, tip=15, tip_is_rate=True,
                tip_included_in_total=True, venmo_username="host")
    bill = bill_from_receipt(receipt(), base=base)
    assert [i.name for i in bill.items] == ["Tacos", "Margarita"]
    # zero or missing receipt totals leave the base values alone
    assert bill.subtotal == 10
    assert bill.tip == 15
    assert bill.tip_included_in_total is False
    assert bill.venmo_username == "host"
    assert base.items[0].cost == 99

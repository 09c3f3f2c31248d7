"""
Helpers for creating bill items and filling a bill from a receipt
"""

import uuid
from dataclasses import replace
from typing import List, Optional

from config import DEFAULT_TIP, DEFAULT_TIP_IS_RATE
from data_models import Bill, Item, ReceiptData


def new_item_id() -> str:
    return uuid.uuid4().hex


def empty_item() -> Item:
    """A blank item that is unsplit and fully mine"""
    return Item(portions_paying=1, total_portions=1, id=new_item_id())


def default_bill() -> Bill:
    """Starting state of a fresh form"""
    return Bill(items=[empty_item()], tip=DEFAULT_TIP, tip_is_rate=DEFAULT_TIP_IS_RATE)


def ensure_item_ids(items: List[Item]) -> List[Item]:
    """Give every item an id, keeping the ones already set"""
    return [item if item.id else replace(item, id=new_item_id()) for item in items]


def items_from_receipt(receipt: ReceiptData) -> List[Item]:
    """Receipt lines become items that are assumed unsplit and mine"""
    return [
        Item(
            name=line.name,
            cost=line.cost,
            portions_paying=1,
            total_portions=1,
            id=new_item_id(),
        )
        for line in receipt.items
    ]


def bill_from_receipt(receipt: ReceiptData, base: Optional[Bill] = None) -> Bill:
    """Populate a bill from receipt data, keeping unrelated settings of base"""
    bill = replace(base) if base is not None else default_bill()
    bill.items = items_from_receipt(receipt)

    if receipt.subtotal:
        bill.subtotal = receipt.subtotal
    if receipt.total:
        bill.total = receipt.total

    if receipt.tip_included_in_total:
        bill.tip = 0
        bill.tip_included_in_total = True
    elif receipt.tip:
        bill.tip = receipt.tip
        bill.tip_is_rate = False
        bill.tip_included_in_total = False
    else:
        bill.tip_included_in_total = False

    return bill

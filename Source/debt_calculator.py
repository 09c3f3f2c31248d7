"""
Debt calculator for Dinner Debt
Works out how much one diner owes, including their share of tax and tip
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from config import CURRENCY_QUANTUM
from data_models import Bill, Item, DebtBreakdown


def calculate_my_subtotal(items: Iterable[Item]) -> float:
    """Sum of my shares of every item, before tax and tip"""
    my_subtotal = 0.0
    for item in items:
        my_subtotal += item.my_cost()
    return my_subtotal


def calculate_tip_cost(bill: Bill, my_subtotal: float) -> float:
    """Whole-bill tip in currency, zero when it is already in the total"""
    if bill.tip_included_in_total:
        return 0.0
    tip = bill.tip if bill.tip is not None else 0
    if not bill.tip_is_rate:
        return tip
    # percentage of the post-tax total
    return _effective_total(bill, my_subtotal) * tip / 100


def calculate_my_ratio(my_subtotal: float, subtotal: Optional[float]) -> float:
    """My pre-tax spend over the bill's pre-tax spend.

    A subtotal of 0 counts as unknown, same as the zero guard in
    calculate_debt, so the divisor falls back to my own subtotal.
    Callers must check that at least one of the two is non-zero.
    """
    return my_subtotal / (subtotal or my_subtotal)


def _effective_subtotal(bill: Bill, my_subtotal: float) -> float:
    return bill.subtotal if bill.subtotal is not None else my_subtotal


def _effective_total(bill: Bill, my_subtotal: float) -> float:
    return bill.total if bill.total is not None else _effective_subtotal(bill, my_subtotal)


def _calculate_tax(bill: Bill, my_subtotal: float) -> float:
    # not clamped: total < subtotal gives negative tax
    return _effective_total(bill, my_subtotal) - _effective_subtotal(bill, my_subtotal)


def calculate_breakdown(bill: Bill) -> DebtBreakdown:
    """Split my debt into item subtotal, tax share and tip share.

    Tax and tip shares go through the same ratio and the total is built
    from them, so my_subtotal + fees == total holds exactly.
    """
    my_subtotal = calculate_my_subtotal(bill.items)
    if not (bill.subtotal or my_subtotal):
        return DebtBreakdown()

    my_ratio = calculate_my_ratio(my_subtotal, bill.subtotal)
    tax_share = _calculate_tax(bill, my_subtotal) * my_ratio
    tip_share = calculate_tip_cost(bill, my_subtotal) * my_ratio
    breakdown = DebtBreakdown(my_subtotal=my_subtotal, tax_share=tax_share, tip_share=tip_share)
    breakdown.total = my_subtotal + breakdown.fees
    return breakdown


def calculate_debt(bill: Bill) -> float:
    """Amount I owe for the bill, inclusive of my share of tax and tip.

    Tax is whatever the total adds on top of the subtotal (an embedded
    tip included). Tax and tip are allocated in proportion to my share
    of the pre-tax spend. Never raises: with no usable subtotal and
    nothing of mine on the bill the answer is 0.
    """
    return calculate_breakdown(bill).total


def round_currency(amount: float) -> Decimal:
    """Round an amount to cents, half up"""
    return Decimal(str(amount)).quantize(CURRENCY_QUANTUM, rounding=ROUND_HALF_UP)

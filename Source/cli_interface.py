"""
CLI Interface module for Dinner Debt
Interactive terminal front end for entering a bill and working out what I owe
"""

from typing import Optional

from config import SETTINGS_PATH
from data_models import Bill, Item
from debt_calculator import calculate_breakdown, round_currency
from errors import DinnerDebtError
from item_helpers import bill_from_receipt, default_bill, empty_item
from ocr_processor import ReceiptImageReader
from receipt_reader import read_receipt
from settings import JsonFileStore, KeyValueStore, Settings, load_settings, save_settings
from share_url import build_share_url, decode_form_state, extract_shared_state
from utils import (
    clean_text_for_display, format_currency, mask_secret, parse_amount,
    parse_portions, validate_menu_choice,
)
from venmo_url import get_venmo_url


def print_breakdown(bill: Bill):
    """Print my share of the bill, line by line"""
    breakdown = calculate_breakdown(bill)
    print("\n" + "="*50)
    print("💸 WHAT I OWE")
    print("="*50)
    print(f"{'My items:':30} {format_currency(breakdown.my_subtotal):>12}")
    print(f"{'My share of tax and fees:':30} {format_currency(breakdown.tax_share):>12}")
    if bill.tip_included_in_total:
        print(f"{'Tip:':30} {'in total':>12}")
    else:
        print(f"{'My share of tip:':30} {format_currency(breakdown.tip_share):>12}")
    print("-"*50)
    print(f"{'TOTAL:':30} {format_currency(breakdown.total):>12}")
    return breakdown


def load_shared_bill(value: str) -> Optional[Bill]:
    """Accept either a full share link or the bare encoded state"""
    value = value.strip()
    if '://' in value or '?' in value:
        return extract_shared_state(value)
    return decode_form_state(value)


class DinnerDebtCLI:
    """Command-line interface for Dinner Debt"""

    def __init__(self, store: Optional[KeyValueStore] = None, reader: Optional[ReceiptImageReader] = None,
                 share_base: str = 'https://dinnerdebt.app/', mobile: bool = False):
        self.store = store if store is not None else JsonFileStore(SETTINGS_PATH)
        self.settings: Settings = load_settings(self.store)
        self.reader = reader or ReceiptImageReader()
        self.bill = default_bill()
        self.share_base = share_base
        self.mobile = mobile

    def display_banner(self):
        print("\n" + "="*60)
        print("🍽️  DINNER DEBT - What do I owe?")
        print("="*60)

    def display_bill(self):
        """Display the current items and bill totals"""
        print("\n" + "="*50)
        print("📋 BILL ITEMS")
        print("="*50)

        if not self.bill.items:
            print("No items yet")
        for i, item in enumerate(self.bill.items, 1):
            name = clean_text_for_display(item.name or f"Item {i}", 24)
            cost = item.cost if item.cost is not None else 0
            paying = item.portions_paying if item.portions_paying is not None else 1
            total = item.total_portions if item.total_portions is not None else 1
            print(f"{i:2}. {name:24} {format_currency(cost):>10}  paying {paying:g} of {abs(total) or 1:g}")

        print("-"*50)
        subtotal = 'unknown' if self.bill.subtotal is None else format_currency(self.bill.subtotal)
        total = 'unknown' if self.bill.total is None else format_currency(self.bill.total)
        print(f"{'SUBTOTAL:':30} {subtotal:>12}")
        print(f"{'TOTAL:':30} {total:>12}")
        print(f"{'TIP:':30} {self._describe_tip():>12}")

    def _describe_tip(self) -> str:
        if self.bill.tip_included_in_total:
            return 'in total'
        tip = self.bill.tip or 0
        return f"{tip:g}%" if self.bill.tip_is_rate else format_currency(tip)

    def _prompt_amount(self, prompt: str, allow_blank: bool = True) -> Optional[float]:
        while True:
            raw = input(prompt).strip()
            if not raw and allow_blank:
                return None
            value = parse_amount(raw)
            if value is not None:
                return value
            print("⚠ Enter a number or arithmetic like 45/3")

    def add_item(self):
        """Add an item to the bill"""
        item = empty_item()
        item.name = input("\nItem name (optional): ").strip() or None
        item.cost = self._prompt_amount("Cost: ", allow_blank=False)
        self._prompt_split(item)
        self.bill.items.append(item)
        print(f"✓ Added {item.name or 'item'}: I pay {format_currency(item.my_cost())}")

    def _prompt_split(self, item: Item):
        raw = input("Split as PAYING/TOTAL (blank = not split): ").strip()
        if not raw:
            return
        portions = parse_portions(raw)
        if portions is None:
            print("⚠ Invalid split, keeping the previous one")
            return
        item.portions_paying, item.total_portions = portions

    def _select_item(self) -> Optional[int]:
        if not self.bill.items:
            print("\n⚠ No items on the bill")
            return None
        self.display_bill()
        raw = input("Select item number: ").strip()
        try:
            idx = int(raw) - 1
        except ValueError:
            print("Invalid selection")
            return None
        if not 0 <= idx < len(self.bill.items):
            print("Invalid selection")
            return None
        return idx

    def edit_item(self):
        idx = self._select_item()
        if idx is None:
            return
        item = self.bill.items[idx]
        name = input(f"Name [{item.name or ''}]: ").strip()
        if name:
            item.name = name
        cost = self._prompt_amount(f"Cost [{item.cost if item.cost is not None else ''}]: ")
        if cost is not None:
            item.cost = cost
        self._prompt_split(item)
        print(f"✓ Updated item {idx + 1}")

    def remove_item(self):
        idx = self._select_item()
        if idx is None:
            return
        removed = self.bill.items.pop(idx)
        print(f"✓ Removed {removed.name or f'item {idx + 1}'}")

    def set_totals(self):
        """Set the printed subtotal and total of the whole bill"""
        print("\nLeave blank if unknown")
        self.bill.subtotal = self._prompt_amount("Bill subtotal (before tax): ")
        self.bill.total = self._prompt_amount("Bill total (after tax): ")

    def set_tip(self):
        print("\n1. Percentage")
        print("2. Flat amount")
        print("3. Already included in total")
        choice = validate_menu_choice(input("Choice: "), ['1', '2', '3']) or ''

        if choice == '3':
            self.bill.tip_included_in_total = True
            self.bill.tip = 0
            print("✓ Tip is part of the total")
        elif choice in ('1', '2'):
            tip = self._prompt_amount("Tip: ", allow_blank=False)
            self.bill.tip = tip
            self.bill.tip_is_rate = choice == '1'
            self.bill.tip_included_in_total = False
            print(f"✓ Tip set to {self._describe_tip()}")
        else:
            print("Invalid choice")

    def load_receipt(self):
        image_path = input("\nEnter image path: ").strip()
        print(f"📸 Reading receipt: {image_path}")
        receipt = read_receipt(image_path, reader=self.reader)
        self.bill = bill_from_receipt(receipt, base=self.bill)
        m = self.reader.metrics
        print(f"✅ Found {len(receipt.items)} items in {m.processing_time:.2f}s")
        self.display_bill()

    def show_debt(self):
        print_breakdown(self.bill)

    def share_link(self):
        if self.settings.venmo_username and not self.bill.venmo_username:
            self.bill.venmo_username = self.settings.venmo_username
        url = build_share_url(self.share_base, self.bill)
        print("\n🔗 Send this link to the table:")
        print(url)

    def load_shared(self):
        value = input("\nPaste share link or code: ")
        bill = load_shared_bill(value)
        if bill is None:
            print("⚠ That link does not contain a bill")
            return
        self.bill = bill
        print("✓ Loaded shared bill")
        self.display_bill()

    def payment_link(self):
        amount = round_currency(calculate_breakdown(self.bill).total)
        recipient = self.bill.venmo_username or self.settings.venmo_username
        url = get_venmo_url(f"{amount:.2f}", recipient=recipient, mobile=self.mobile)
        print(f"\n💰 Pay {format_currency(float(amount))}:")
        print(url)

    def manage_settings(self):
        while True:
            print("\n" + "="*50)
            print("⚙️  SETTINGS")
            print("="*50)
            print(f"1. Venmo username   [{self.settings.venmo_username or 'not set'}]")
            print(f"2. API key          [{mask_secret(self.settings.api_key)}]")
            print(f"3. Beta features    [{'on' if self.settings.beta_features_enabled else 'off'}]")
            print("4. Done")
            choice = validate_menu_choice(input("\nChoice: "), ['1', '2', '3', '4']) or ''

            if choice == '1':
                self.settings.venmo_username = input("Venmo username (blank to clear): ").strip().lstrip('@') or None
            elif choice == '2':
                self.settings.api_key = input("API key (blank to clear): ").strip() or None
            elif choice == '3':
                self.settings.beta_features_enabled = not self.settings.beta_features_enabled
            elif choice == '4':
                break
            else:
                continue
            save_settings(self.settings, self.store)
            print("✓ Saved")

    def run(self):
        """Run the CLI application"""
        self.display_banner()
        actions = {
            '1': self.add_item,
            '2': self.edit_item,
            '3': self.remove_item,
            '4': self.set_totals,
            '5': self.set_tip,
            '6': self.load_receipt,
            '7': self.show_debt,
            '8': self.share_link,
            '9': self.load_shared,
            '10': self.payment_link,
            '11': self.manage_settings,
        }

        while True:
            self.display_bill()
            print("\n" + "="*50)
            print("MAIN MENU")
            print("="*50)
            print("1. Add item          2. Edit item       3. Remove item")
            print("4. Set totals        5. Set tip         6. Read receipt photo")
            print("7. Show what I owe   8. Share link      9. Load shared link")
            print("10. Venmo link       11. Settings       12. Exit")

            choice = validate_menu_choice(input("\nChoice: "), list(actions) + ['12'])
            if choice == '12':
                print("\n👋 Thanks for using Dinner Debt!")
                break
            if choice is None:
                print("Invalid choice")
                continue
            try:
                actions[choice]()
            except DinnerDebtError as e:
                print(f"⚠ {e}")

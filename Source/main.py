"""
Dinner Debt - work out my share of a shared restaurant bill

python3 main.py --interactive                                  # Interactive CLI mode
python3 main.py --item 12 --item "30:1/2@Nachos" --subtotal 80 --total 88 --tip 20
python3 main.py --receipt receipt.jpg --item "..."             # Bill totals from a photo
python3 main.py --shared "https://dinnerdebt.app/?data=..."    # Open a shared bill
"""

import argparse
import logging
import sys
from typing import Optional

from config import LOG_LEVEL, SETTINGS_PATH, DEFAULT_MAX_WORKERS, WORKERS_MIN, WORKERS_MAX
from data_models import Bill, Item
from debt_calculator import round_currency
from errors import DinnerDebtError
from item_helpers import bill_from_receipt, default_bill, new_item_id
from cli_interface import DinnerDebtCLI, load_shared_bill, print_breakdown
from ocr_processor import ReceiptImageReader
from receipt_reader import read_receipt
from settings import JsonFileStore, load_settings
from share_url import build_share_url
from utils import parse_amount, parse_portions
from venmo_url import get_venmo_url

__version__ = '1.0.0'


def parse_item(value: str) -> Item:
    """Parse COST[:PAYING/TOTAL][@NAME], e.g. '30:2/3@Nachos'"""
    body, _, name = value.partition('@')
    cost_text, sep, split_text = body.partition(':')
    cost = parse_amount(cost_text)
    if cost is None:
        raise argparse.ArgumentTypeError(f"invalid item cost: {cost_text!r}")

    item = Item(cost=cost, portions_paying=1, total_portions=1, name=name.strip() or None, id=new_item_id())
    if sep:
        portions = parse_portions(split_text)
        if portions is None:
            raise argparse.ArgumentTypeError(f"invalid item split: {split_text!r}")
        item.portions_paying, item.total_portions = portions
    return item


def amount_arg(value: str) -> float:
    amount = parse_amount(value)
    if amount is None:
        raise argparse.ArgumentTypeError(f"invalid amount: {value!r}")
    return amount


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Dinner Debt - work out my share of a shared bill',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --interactive
  python main.py --item 10 --item "20:1/2" --item 15 --subtotal 45 --total 49.5 --tip 20
  python main.py --item 30 --subtotal 80 --total 92 --tip 15 --flat-tip
  python main.py --receipt receipt.jpg --share-base https://dinnerdebt.app/
        """
    )
    parser.add_argument('--item', action='append', type=parse_item, default=[],
                        metavar='COST[:PAYING/TOTAL][@NAME]',
                        help='An item I ate from; cost accepts arithmetic like 45/3')
    parser.add_argument('--subtotal', type=amount_arg, help='Whole bill before tax')
    parser.add_argument('--total', type=amount_arg, help='Whole bill after tax')
    parser.add_argument('--tip', type=amount_arg, help='Tip percentage (or amount with --flat-tip)')
    parser.add_argument('--flat-tip', action='store_true', help='Treat --tip as a currency amount')
    parser.add_argument('--tip-included', action='store_true', help='Tip is already part of --total')
    parser.add_argument('--receipt', metavar='IMAGE', help='Read items and totals from a receipt photo')
    parser.add_argument('--shared', metavar='LINK_OR_CODE', help='Start from a shared bill')
    parser.add_argument('--venmo', metavar='USER', help='Venmo username to pay')
    parser.add_argument('--mobile', action='store_true', help='Print a venmo:// app link')
    parser.add_argument('--share-base', metavar='URL', help='Print a share link rooted at URL')
    parser.add_argument('--workers', type=int, default=DEFAULT_MAX_WORKERS,
                        help=f'Number of parallel OCR workers (default: {DEFAULT_MAX_WORKERS})')
    parser.add_argument('--settings', default=SETTINGS_PATH, help='Settings file path')
    parser.add_argument('--interactive', action='store_true', help='Start the interactive menu')
    parser.add_argument('--version', action='version', version=f'Dinner Debt {__version__}')
    return parser


def build_bill(args: argparse.Namespace, reader: ReceiptImageReader) -> Bill:
    """Combine shared state, receipt data and command line values into one bill"""
    bill: Optional[Bill] = None
    if args.shared:
        bill = load_shared_bill(args.shared)
        if bill is None:
            raise DinnerDebtError("The shared link does not contain a bill")
    bill = bill or default_bill()

    if args.receipt:
        print(f"📸 Reading receipt: {args.receipt}")
        bill = bill_from_receipt(read_receipt(args.receipt, reader=reader), base=bill)

    # --item lists what I ate, replacing receipt or shared lines
    if args.item:
        bill.items = list(args.item)
    if args.subtotal is not None:
        bill.subtotal = args.subtotal
    if args.total is not None:
        bill.total = args.total
    if args.tip is not None:
        bill.tip = args.tip
        bill.tip_is_rate = not args.flat_tip
    if args.tip_included:
        bill.tip_included_in_total = True
    if args.venmo:
        bill.venmo_username = args.venmo.lstrip('@')
    return bill


def main():
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.WARNING),
                        format='%(levelname)s %(name)s: %(message)s')

    if args.workers < WORKERS_MIN or args.workers > WORKERS_MAX:
        print(f"⚠ Workers must be between {WORKERS_MIN} and {WORKERS_MAX}")
        args.workers = max(WORKERS_MIN, min(WORKERS_MAX, args.workers))

    store = JsonFileStore(args.settings)
    reader = ReceiptImageReader(num_workers=args.workers)

    if args.interactive:
        cli = DinnerDebtCLI(store=store, reader=reader,
                            share_base=args.share_base or 'https://dinnerdebt.app/',
                            mobile=args.mobile)
        if args.shared or args.receipt or args.item:
            cli.bill = build_bill(args, reader)
        cli.run()
        return

    if not (args.item or args.receipt or args.shared):
        parser.error("give at least one --item, --receipt or --shared (or use --interactive)")

    settings = load_settings(store)
    bill = build_bill(args, reader)
    breakdown = print_breakdown(bill)

    amount = round_currency(breakdown.total)
    recipient = bill.venmo_username or settings.venmo_username
    print(f"\n💰 Venmo: {get_venmo_url(f'{amount:.2f}', recipient=recipient, mobile=args.mobile)}")

    if args.share_base:
        if settings.venmo_username and not bill.venmo_username:
            bill.venmo_username = settings.venmo_username
        print(f"🔗 Share: {build_share_url(args.share_base, bill)}")


def run():
    """Console entry point: report errors and exit with a status code"""
    try:
        main()
    except KeyboardInterrupt:
        print("\n\n👋 Goodbye!")
        sys.exit(0)
    except DinnerDebtError as e:
        print(f"\n❌ {e}")
        sys.exit(1)
    except Exception as e:
        print(f"\n❌ An error occurred: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    run()

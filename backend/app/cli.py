#!/usr/bin/env python3
"""
Kisan vendor console

Vendor screens for the terminal. The vendor identity is kept in a local
session file after login so later commands do not ask for credentials.

Usage:
    kisan login --email vendor@example.com
    kisan whoami
    kisan orders
    kisan advance 42 shipped
    kisan catalog --category Vegetables
    kisan logout
"""
import argparse
import getpass
import logging
import sys
from typing import List, Optional

from app.core.config import settings
from app.core.database import get_data_backend
from app.core.exceptions import MarketplaceError
from app.core.session import SessionStore, VendorSessionContext
from app.services.auth_service import AccountService
from app.services.catalog_service import CatalogService
from app.services.fulfillment_service import FulfillmentService

logger = logging.getLogger(__name__)


def cmd_login(args, context: VendorSessionContext) -> int:
    password = args.password or getpass.getpass("Password: ")
    session = AccountService(get_data_backend()).authenticate_vendor(args.email, password)
    context.login(session)
    print(f"✅ Logged in as {session.name or session.email}")
    return 0


def cmd_logout(args, context: VendorSessionContext) -> int:
    context.logout()
    print("Logged out")
    return 0


def cmd_whoami(args, context: VendorSessionContext) -> int:
    session = context.require()
    print(f"{session.name or '-'} <{session.email}> (vendor {session.id})")
    return 0


def cmd_orders(args, context: VendorSessionContext) -> int:
    session = context.require()
    board = FulfillmentService(get_data_backend()).load_board(session.id)

    if not len(board):
        print("No orders found")
        return 0

    print(f"{'ORDER':>8}  {'STATUS':<11} {'QTY':>4} {'TOTAL':>10}  SHIP TO")
    for order in board.orders:
        print(
            f"{str(order.id):>8}  {order.display_status:<11} {order.quantity:>4} "
            f"{order.total:>10.2f}  {order.full_name or '-'}, {order.pin_code or '-'}"
        )
    return 0


def cmd_advance(args, context: VendorSessionContext) -> int:
    session = context.require()
    service = FulfillmentService(get_data_backend())
    board = service.load_board(session.id)

    previous = board.status_of(args.order_id)
    order = service.advance(board, args.order_id, args.status)
    print(f"Order {order.id}: {previous} -> {order.display_status}")
    return 0


def cmd_catalog(args, context: VendorSessionContext) -> int:
    grid = CatalogService(get_data_backend()).browse(args.category)

    print("Categories: " + " | ".join(grid['categories']))
    print(f"Showing {grid['count']} product(s) in '{grid['selected']}'")
    for product in grid['products']:
        print(f"  [{product['id']}] {product['name']} ({product['category']}) ₹{product['display_price']}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kisan", description="Kisan vendor console")
    parser.add_argument("--session-file", default=settings.SESSION_FILE, help="Where the vendor session is kept")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    login = subparsers.add_parser("login", help="Log in as a vendor")
    login.add_argument("--email", required=True)
    login.add_argument("--password", help="Prompted for when omitted")
    login.set_defaults(func=cmd_login)

    subparsers.add_parser("logout", help="Clear the stored session").set_defaults(func=cmd_logout)
    subparsers.add_parser("whoami", help="Show the stored vendor").set_defaults(func=cmd_whoami)
    subparsers.add_parser("orders", help="List orders for your products").set_defaults(func=cmd_orders)

    advance = subparsers.add_parser("advance", help="Change the status of an order")
    advance.add_argument("order_id")
    advance.add_argument("status", help="processing, shipped, delivered or cancelled")
    advance.set_defaults(func=cmd_advance)

    catalog = subparsers.add_parser("catalog", help="Browse the product catalog")
    catalog.add_argument("--category", help="Category to show (default: All)")
    catalog.set_defaults(func=cmd_catalog)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )

    context = VendorSessionContext(SessionStore(args.session_file))
    context.restore()

    try:
        return args.func(args, context)
    except MarketplaceError as e:
        print(f"❌ {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

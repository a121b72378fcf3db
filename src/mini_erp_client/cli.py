from __future__ import annotations

import argparse
import getpass
import logging
import os
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path

from .app import MiniErpClient
from .config import ConfigError, load_config
from .documents import FileDocumentSink
from .models import ProductInput, ProductListView
from .session import SessionStatus


def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from exc


def _confirm_interactively(prompt: str) -> bool:
    answer = input(f"{prompt} [y/N] ").strip().lower()
    return answer in {"y", "yes", "j", "ja", "д", "да"}


def format_table(view: ProductListView) -> str:
    if view.is_empty:
        return "No products found"
    lines = [f"{'ID':>5}  {'Name':<30} {'Qty':>8} {'Price':>10} {'Total':>12}"]
    for product in view.products:
        lines.append(
            f"{product.id:>5}  {product.name:<30} {product.quantity:>8} "
            f"{product.price:>10.2f} {product.line_total:>12.2f}"
        )
    lines.append(f"{'Total value:':>58} {view.total_value():>12.2f}")
    return "\n".join(lines)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _login(client: MiniErpClient, args: argparse.Namespace) -> bool:
    password = os.getenv("MINI_ERP_PASSWORD") or getpass.getpass("Password: ")
    client.search.filter_text = getattr(args, "search", None) or ""
    client.login(args.username, password)
    return client.status is SessionStatus.AUTHENTICATED


def cmd_list(client: MiniErpClient, args: argparse.Namespace) -> None:
    # the login read already fetched the list for --search
    return None


def cmd_add(client: MiniErpClient, args: argparse.Namespace) -> None:
    client.engine.create(ProductInput(name=args.name, quantity=args.quantity, price=args.price))


def cmd_update(client: MiniErpClient, args: argparse.Namespace) -> None:
    client.engine.update(args.id, ProductInput(name=args.name, quantity=args.quantity, price=args.price))


def cmd_delete(client: MiniErpClient, args: argparse.Namespace) -> None:
    if args.yes:
        client.engine.confirm = lambda prompt: True
    client.engine.remove(args.id)


def cmd_invoice(client: MiniErpClient, args: argparse.Namespace) -> None:
    client.engine.fetch_invoice_document()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mini-erp", description="Mini ERP inventory client")
    parser.add_argument("--env-file", default=None)
    parser.add_argument("--username", default=os.getenv("MINI_ERP_USERNAME"))
    parser.add_argument("--verbose", action="store_true")
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list")
    list_parser.add_argument("--search", default="")
    list_parser.set_defaults(func=cmd_list)

    add_parser = subparsers.add_parser("add")
    add_parser.add_argument("name")
    add_parser.add_argument("quantity", type=int)
    add_parser.add_argument("price", type=_decimal)
    add_parser.set_defaults(func=cmd_add)

    update_parser = subparsers.add_parser("update")
    update_parser.add_argument("id", type=int)
    update_parser.add_argument("name")
    update_parser.add_argument("quantity", type=int)
    update_parser.add_argument("price", type=_decimal)
    update_parser.set_defaults(func=cmd_update)

    delete_parser = subparsers.add_parser("delete")
    delete_parser.add_argument("id", type=int)
    delete_parser.add_argument("--yes", action="store_true")
    delete_parser.set_defaults(func=cmd_delete)

    invoice_parser = subparsers.add_parser("invoice")
    invoice_parser.add_argument("--out", type=Path, default=Path.cwd())
    invoice_parser.set_defaults(func=cmd_invoice)
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.username:
        parser.error("--username or MINI_ERP_USERNAME is required")
    _configure_logging(args.verbose)
    try:
        config = load_config(args.env_file)
    except ConfigError as exc:
        print(f"config error: {exc}", file=sys.stderr)
        return 2

    client = MiniErpClient(
        config,
        sink=FileDocumentSink(getattr(args, "out", None) or Path.cwd()),
        confirm=_confirm_interactively,
    )
    try:
        if not _login(client, args):
            print(client.error_message or "login failed", file=sys.stderr)
            return 1
        delivered_before = client.documents.delivered
        args.func(client, args)
        if client.error_message:
            print(client.error_message, file=sys.stderr)
            return 1
        if args.command == "invoice":
            if client.documents.delivered == delivered_before:
                print("invoice not available", file=sys.stderr)
                return 1
            print(str(Path(args.out) / client.documents.filename))
        else:
            print(format_table(client.view))
        return 0
    finally:
        client.close()

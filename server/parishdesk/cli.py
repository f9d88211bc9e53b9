"""Command line access to the record store for parish office staff."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from sqlalchemy.orm import Session

from parishdesk.auth.deps import InvalidTokenError, user_from_token
from parishdesk.config import PAGE_SIZES
from parishdesk.core.config import settings
from parishdesk.core.db import SessionLocal
from parishdesk.core.logging_config import configure_logging
from parishdesk.core.timezone import local_now, local_timezone
from parishdesk.schemas.collections import PRIEST_VISIBLE_COLLECTIONS, CollectionName
from parishdesk.services.browser import ALL_MONTHS, MONTH_OPTIONS, RecordBrowser
from parishdesk.services.columns import columns_for, title_for
from parishdesk.services.priests import visible_records
from parishdesk.services.session import SessionContext, SessionUser
from parishdesk.stores import StoreError, build_store

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="parishdesk", description="Parish office records from the terminal.")
    parser.add_argument("--session-file", default=settings.SESSION_FILE, help="Where the signed-in user is kept")
    commands = parser.add_subparsers(dest="command", required=True)

    login = commands.add_parser("login", help="Sign in with a token from the identity provider")
    login.add_argument("--token", required=True, help="Signed JWT for the staff account")

    commands.add_parser("logout", help="Forget the signed-in user")
    commands.add_parser("whoami", help="Show the signed-in user")

    browse = commands.add_parser("browse", help="Print one page of a collection, newest first")
    browse.add_argument("collection", choices=[name.value for name in CollectionName])
    browse.add_argument("--query", default="", help="Case-insensitive text to look for anywhere in a record")
    browse.add_argument("--month", default=ALL_MONTHS, choices=MONTH_OPTIONS)
    browse.add_argument("--page", type=int, default=1)
    browse.add_argument("--page-size", type=int, default=PAGE_SIZES[0], choices=PAGE_SIZES)

    export = commands.add_parser("export", help="Write a whole collection to CSV")
    export.add_argument("collection", choices=[name.value for name in CollectionName])
    export.add_argument("--output", help="Target file (defaults to '<title>.csv' in the current directory)")
    return parser


def _require_user(context: SessionContext) -> SessionUser:
    user = context.load()
    if user is None:
        raise SystemExit("Not signed in. Run 'parishdesk login --token ...' first.")
    return user


def _open_browser(collection: CollectionName, user: SessionUser) -> tuple[RecordBrowser, Session]:
    if not user.is_super_admin and collection not in PRIEST_VISIBLE_COLLECTIONS:
        raise SystemExit("Super Admin privileges required")
    db = SessionLocal()
    store = build_store(db)
    browser = RecordBrowser(
        visible_records(store, collection, user),
        columns_for(collection),
        title=title_for(collection),
        debounce_seconds=settings.SEARCH_DEBOUNCE_MS / 1000,
        today=local_now,
        tz=local_timezone(),
    )
    return browser, db


def _format_cell(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def cmd_login(args: argparse.Namespace, context: SessionContext) -> int:
    try:
        user = user_from_token(args.token)
    except InvalidTokenError as exc:
        raise SystemExit(str(exc)) from exc
    context.login(user)
    print(f"Signed in as {user.name or user.id}")
    return 0


def cmd_logout(args: argparse.Namespace, context: SessionContext) -> int:
    context.load()
    context.clear()
    print("Signed out")
    return 0


def cmd_whoami(args: argparse.Namespace, context: SessionContext) -> int:
    user = _require_user(context)
    role = "super admin" if user.is_super_admin else "staff"
    print(f"{user.name or user.id} ({role})")
    return 0


def cmd_browse(args: argparse.Namespace, context: SessionContext) -> int:
    user = _require_user(context)
    browser, db = _open_browser(CollectionName(args.collection), user)
    try:
        browser.set_page_size(args.page_size)
        browser.set_page(max(args.page, 1))
        browser.set_month(args.month)
        if args.query:
            browser.apply_search_now(args.query)

        print("\t".join(column.title or column.header for column in browser.columns))
        for row in browser.rows():
            print("\t".join(_format_cell(cell) for cell in row))
        print(f"-- page {browser.page}/{browser.page_count()}, {browser.total_filtered()} matching")
    finally:
        db.close()
    return 0


def cmd_export(args: argparse.Namespace, context: SessionContext) -> int:
    user = _require_user(context)
    browser, db = _open_browser(CollectionName(args.collection), user)
    try:
        export = browser.export_csv()
    finally:
        db.close()
    target = Path(args.output or export.filename)
    target.write_text(export.content, encoding="utf-8", newline="")
    print(f"Wrote {export.row_count} rows to {target}")
    return 0


COMMANDS = {
    "login": cmd_login,
    "logout": cmd_logout,
    "whoami": cmd_whoami,
    "browse": cmd_browse,
    "export": cmd_export,
}


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    context = SessionContext(args.session_file)
    try:
        return COMMANDS[args.command](args, context)
    except StoreError as exc:
        logger.error("cli_store_failed", extra={"command": args.command, "error": str(exc)})
        raise SystemExit(f"Record store unavailable: {exc}") from exc


if __name__ == "__main__":
    raise SystemExit(main())

"""Command-line front end: browse the backend's lists from a terminal."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from tokolist.config import AppPaths, SettingsManager
from tokolist.core.di_container import AppContainer
from tokolist.domain.session import Session, User
from tokolist.errors import TokoListError
from tokolist.managers import ListLoaderManager, LoaderStatus
from tokolist.services import Resource
from tokolist.utils import format_quantity, format_rupiah, format_status_line, truncate_text

logger = logging.getLogger("TokoList.CLI")

RESOURCES = [resource.value for resource in Resource]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tokolist")
    parser.add_argument("--config", type=Path, help="Path to settings.yml")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    list_cmd = commands.add_parser("list", help="Load a paginated list")
    list_cmd.add_argument("resource", choices=RESOURCES)
    list_cmd.add_argument("--pages", type=int, default=1, help="Maximum pages to load")
    list_cmd.add_argument("--toko-id", help="Use this store instead of the saved session")
    list_cmd.add_argument("--search", default="", help="Filter loaded records by name")
    list_cmd.add_argument("--search-field", default="nama_produk")

    detail_cmd = commands.add_parser("detail", help="Show one record and its items")
    detail_cmd.add_argument("resource", choices=RESOURCES)
    detail_cmd.add_argument("record_id")

    review_cmd = commands.add_parser("review", help="Approve or reject a return")
    review_cmd.add_argument("decision", choices=["approve", "reject"])
    review_cmd.add_argument("record_id")

    cancel_cmd = commands.add_parser("cancel", help="Cancel a purchase or a sale")
    cancel_cmd.add_argument(
        "resource", choices=[Resource.PEMBELIAN.value, Resource.TRANSAKSI.value]
    )
    cancel_cmd.add_argument("record_id")

    session_cmd = commands.add_parser("session", help="Inspect or edit the saved session")
    session_actions = session_cmd.add_subparsers(dest="action", required=True)
    session_actions.add_parser("show")
    session_actions.add_parser("clear")
    set_cmd = session_actions.add_parser("set")
    set_cmd.add_argument("--user-id", required=True)
    set_cmd.add_argument("--toko-id", required=True)
    set_cmd.add_argument("--username")
    set_cmd.add_argument("--nama")
    set_cmd.add_argument("--role")

    return parser


def _describe(record) -> str:
    if not isinstance(record, dict):
        return str(record)
    name = record.get("nama_produk") or record.get("nama") or record.get("invoice") or ""
    parts = [f"#{record.get('id', '?')}", truncate_text(str(name), 40)]
    if "total" in record:
        parts.append(format_rupiah(record.get("total")))
    elif "harga_jual" in record:
        parts.append(format_rupiah(record.get("harga_jual")))
    if "stok" in record:
        parts.append(f"stok {format_quantity(record.get('stok'))}")
    return "  ".join(part for part in parts if part)


async def run_list(container: AppContainer, args) -> int:
    session = None
    if args.toko_id:
        session = Session(user=User(id=0, toko_id=args.toko_id))
    loader = container.list_loader(args.resource, session, search_field=args.search_field)

    await loader.load_first_page()
    pages = 1
    while pages < args.pages and loader.state.status is LoaderStatus.READY:
        if not loader.pagination.has_more:
            break
        # Stay outside the fetch guard's debounce window
        await asyncio.sleep(container.settings.debounce_seconds)
        if not await loader.load_next_page():
            break
        pages += 1

    return _print_list(loader, args.search)


def _print_list(loader: ListLoaderManager, search: str = "") -> int:
    state = loader.state
    loader.dispose()
    if state.status is LoaderStatus.ERROR:
        print(f"Error: {state.error}", file=sys.stderr)
        return 1

    if search:
        loader.search_manager.set_query(search)
    visible = loader.search_manager.apply(state.items)
    if not visible:
        print("No records found" if search else "No data yet")
    for record in visible:
        print(_describe(record))
    print(format_status_line(loader.state))
    return 0


async def run_detail(container: AppContainer, args) -> int:
    detail = await container.detail_loader(args.resource).load(args.record_id)
    for key, value in detail.info.items():
        print(f"{key}: {value}")
    if not detail.items:
        print("No valid line items")
    for item in detail.items:
        name = item.get("nama_produk") or item.get("nama") or "Unnamed product"
        print(
            f"- {name}  qty {format_quantity(item.get('quantity'))}"
            f"  @ {format_rupiah(item.get('harga_beli'))}"
        )
    return 0


async def run_review(container: AppContainer, args) -> int:
    approve = args.decision == "approve"
    loader = container.list_loader(Resource.RETURN.value)
    await container.record_actions(Resource.RETURN.value).review_return(
        args.record_id, approve, loader=loader
    )
    print(f"Return {args.record_id} {'approved' if approve else 'rejected'}")
    return _print_list(loader)


async def run_cancel(container: AppContainer, args) -> int:
    await container.record_actions(args.resource).cancel(args.record_id)
    print(f"{args.resource} {args.record_id} cancelled")
    return 0


def run_session(container: AppContainer, args) -> int:
    service = container.session_service
    if args.action == "show":
        session = service.get_user()
        if session is None:
            print("No session saved")
            return 1
        print(session.model_dump_json(indent=2))
        return 0
    if args.action == "clear":
        return 0 if service.remove_user() else 1

    session = Session(
        user=User(
            id=args.user_id,
            toko_id=args.toko_id,
            username=args.username,
            nama_lengkap=args.nama,
            role=args.role,
        )
    )
    return 0 if service.save_user(session) else 1


async def _run_async(container: AppContainer, args) -> int:
    try:
        if args.command == "list":
            return await run_list(container, args)
        if args.command == "review":
            return await run_review(container, args)
        if args.command == "cancel":
            return await run_cancel(container, args)
        return await run_detail(container, args)
    finally:
        await container.aclose()


def main(argv: Optional[List[str]] = None, container: Optional[AppContainer] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if container is None:
        paths = AppPaths.default()
        settings = SettingsManager(args.config or paths.config_path)
        container = AppContainer.create(settings=settings, paths=paths)

    logger.debug("Running command %s", args.command)
    if args.command == "session":
        return run_session(container, args)

    try:
        return asyncio.run(_run_async(container, args))
    except TokoListError as e:
        logger.error("Command %s failed: %s", args.command, e.message)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

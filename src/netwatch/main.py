"""Command-line entrypoint for NetWatch maintenance tasks."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from collections.abc import Sequence
from contextlib import suppress

from sqlalchemy.orm import sessionmaker

from netwatch.config import Settings, get_settings
from netwatch.database import create_db_engine, get_table_names, init_db
from netwatch.factory import create_hack_monitor, create_hack_service
from netwatch.schemas import HackOperationRecord

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="netwatch", description="NetWatch game tools")
    parser.add_argument(
        "--database-url", default=None, help="SQLAlchemy URL (overrides NETWATCH_DATABASE_URL)"
    )
    subcommands = parser.add_subparsers(dest="command", required=True)

    subcommands.add_parser("init-db", help="Create missing database tables")

    resolve = subcommands.add_parser("resolve-hacks", help="Resolve every due hack once")
    resolve.add_argument(
        "--json", action="store_true", help="Print resolved operations as JSON lines"
    )

    watch = subcommands.add_parser("watch", help="Resolve due hacks continuously")
    watch.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Seconds between passes (overrides NETWATCH_HACK_POLL_INTERVAL_SECONDS)",
    )
    return parser


def _init_db(url: str) -> int:
    engine = create_db_engine(url)
    init_db(engine)
    logger.info("database ready: %s", ", ".join(sorted(get_table_names(engine))))
    return 0


def _resolve_hacks(settings: Settings, url: str, as_json: bool) -> int:
    factory = sessionmaker(bind=create_db_engine(url), autoflush=False)
    with factory() as session:
        resolved = create_hack_service(session, settings).resolve_due_hacks()
    if as_json:
        for operation in resolved:
            print(HackOperationRecord.from_domain(operation).model_dump_json())
    else:
        print(f"Resolved {len(resolved)} hack operation(s)")
    return 0


async def _watch(settings: Settings, url: str, interval: float | None) -> None:
    if interval is not None:
        settings = settings.model_copy(update={"hack_poll_interval_seconds": interval})
    factory = sessionmaker(bind=create_db_engine(url), autoflush=False)
    monitor = create_hack_monitor(factory, settings)
    monitor.start()
    try:
        await asyncio.Event().wait()
    finally:
        await monitor.stop()


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    url = args.database_url or settings.database_url

    if args.command == "init-db":
        return _init_db(url)
    if args.command == "resolve-hacks":
        return _resolve_hacks(settings, url, args.json)
    with suppress(KeyboardInterrupt):
        asyncio.run(_watch(settings, url, args.interval))
    return 0


if __name__ == "__main__":  # pragma: no cover - manual launch helper
    raise SystemExit(main())

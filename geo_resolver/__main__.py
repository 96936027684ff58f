"""CLI entrypoint for geo_resolver."""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Optional

from geo_resolver.config import get_settings
from geo_resolver.logging_config import setup_logging


def main() -> None:
    setup_logging()

    parser = argparse.ArgumentParser(prog="geo-resolver")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("serve")
    sub.add_parser("migrate")

    seed_parser = sub.add_parser("seed")
    seed_parser.add_argument("file", type=Path, help="JSON Lines reference file")

    resolve_parser = sub.add_parser("resolve")
    resolve_parser.add_argument("text")
    resolve_parser.add_argument("--file", type=Path, default=None,
                                help="JSON Lines reference file (default: GEO_REFERENCE_FILE, then Postgres)")

    args = parser.parse_args()

    if args.command == "serve":
        _serve()
    elif args.command == "migrate":
        asyncio.run(_migrate())
    elif args.command == "seed":
        asyncio.run(_seed(args.file))
    elif args.command == "resolve":
        _resolve_once(args.text, args.file)


def _serve() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "geo_resolver.api:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=(settings.env == "development"),
        log_level=settings.log_level.lower(),
    )


async def _migrate() -> None:
    from geo_resolver.db import close_pool, get_pool, run_migrations

    await get_pool()
    await run_migrations()
    await close_pool()
    print("Migrations applied successfully.")


async def _seed(path: Path) -> None:
    from geo_resolver.db import close_pool
    from geo_resolver.ingest import seed_from_jsonl

    try:
        stats = await seed_from_jsonl(path)
    finally:
        await close_pool()
    print(f"Seeding completed: {stats}")


async def _load_from_db():
    from geo_resolver.db import close_pool, load_reference_store

    try:
        return await load_reference_store()
    finally:
        await close_pool()


def _resolve_once(text: str, reference_file: Optional[Path]) -> None:
    from geo_resolver.models import ResolveResponse
    from geo_resolver.resolver import GeoResolver
    from geo_resolver.store import InMemoryReferenceStore

    if reference_file is None and get_settings().reference.reference_file:
        reference_file = Path(get_settings().reference.reference_file)

    if reference_file is not None:
        store = InMemoryReferenceStore.from_jsonl(reference_file)
    else:
        store = asyncio.run(_load_from_db())

    result = GeoResolver(store).resolve(text)
    out = ResolveResponse.from_result(text, result)
    print(out.model_dump_json(indent=2))


if __name__ == "__main__":
    main()

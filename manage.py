#!/usr/bin/env python3
"""
Spare parts reordering assistant management CLI.

Usage:
    python manage.py serve       Start the API server
    python manage.py migrate     Apply pending database migrations
    python manage.py status      Show migration status
    python manage.py seed        Load the eight sample parts
    python manage.py rank        Print the ranked parts table (--watch to refresh)
"""

import argparse
import asyncio
import subprocess
import sys
from pathlib import Path

from reorder.application.dto.requests import CreatePartRequest
from reorder.application.sample_data import generate_sample_parts
from reorder.application.use_cases import CreatePartUseCase, ViewPartsUseCase
from reorder.config import configure_logging, get_settings
from reorder.core.entities import (
    PartsView,
    SearchMode,
    SortAlgorithm,
    SortDirection,
    SortField,
    ViewQuery,
)
from reorder.core.services import compose_view
from reorder.infrastructure.storage.sqlite import SQLitePartStore, close_pool
from reorder.infrastructure.storage.sqlite.migrations import (
    migration_status,
    run_migrations,
)

ROOT_DIR = Path(__file__).resolve().parent


def _render_table(view: PartsView) -> str:
    """Format a view as a fixed-width text table."""
    header = f"{'Name':<24} {'Stock':>6} {'Reorder':>8} {'Urgency':>8} {'Lead':>5} {'Cost':>10}  Status"
    lines = [header, "-" * len(header)]
    for part in view.parts:
        lines.append(
            f"{part.name[:24]:<24} {part.current_stock:>6} {part.reorder_point:>8} "
            f"{part.urgency:>+8} {part.supplier_lead_time:>5} {part.cost:>10.2f}  "
            f"{part.stock_status.label}"
        )
    lines.append("")
    lines.append(
        f"{view.total} parts, {view.needs_reorder_count} need reorder, "
        f"{view.adequate_count} adequate"
    )
    if view.query.search.strip():
        lines.append(f"{view.match_count} match '{view.query.search}'")
    return "\n".join(lines)


def cmd_serve(args: argparse.Namespace) -> None:
    """Start uvicorn on the FastAPI app."""
    uvicorn_cmd = [
        sys.executable, "-m", "uvicorn",
        "reorder.api.main:app",
        "--host", args.host,
        "--port", str(args.port),
    ]
    if args.reload:
        uvicorn_cmd.append("--reload")

    print(f"Starting server on {args.host}:{args.port}...")
    try:
        result = subprocess.run(uvicorn_cmd, cwd=str(ROOT_DIR))
    except KeyboardInterrupt:
        print("\nServer stopped.")
        return
    sys.exit(result.returncode)


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply pending migrations."""
    results = asyncio.run(
        run_migrations(args.db_path, backup=not args.no_backup)
    )
    if not results:
        print("Database is up to date.")
    for result in results:
        status = "SUCCESS" if result.success else "FAILED"
        print(f"[{status}] v{result.version}: {result.name} ({result.execution_time_ms}ms)")
        if result.error:
            print(f"         Error: {result.error}")
    if any(not r.success for r in results):
        sys.exit(1)


def cmd_status(args: argparse.Namespace) -> None:
    """Show migration status."""
    status = asyncio.run(migration_status(args.db_path))
    print(f"Database: {args.db_path or get_settings().storage.db_path}")
    print(f"Database exists: {status['exists']}")
    print(f"Current version: {status.get('current_version') or 'N/A'}")
    print(f"Applied migrations: {status.get('applied_migrations', [])}")
    print(f"Pending migrations: {status.get('pending_migrations', [])}")


async def _seed(force: bool) -> int:
    await run_migrations(backup=False)
    store = SQLitePartStore()
    try:
        if not force and await store.list_parts():
            return 0

        use_case = CreatePartUseCase(part_store=store)
        samples = generate_sample_parts()
        for part in samples:
            await use_case.execute(
                CreatePartRequest(
                    name=part.name,
                    current_stock=part.current_stock,
                    reorder_point=part.reorder_point,
                    supplier_lead_time=part.supplier_lead_time,
                    cost=part.cost,
                )
            )
        return len(samples)
    finally:
        await close_pool()


def cmd_seed(args: argparse.Namespace) -> None:
    """Load the sample parts into the database."""
    created = asyncio.run(_seed(args.force))
    if created:
        print(f"Created {created} sample parts.")
    else:
        print("Database already has parts; use --force to add the samples anyway.")


async def _watch(query: ViewQuery, interval: float, iterations: int = 0) -> None:
    """Reprint the ranked table every interval seconds, keeping the last good snapshot."""
    await run_migrations(backup=False)
    try:
        session = await ViewPartsUseCase(part_store=SQLitePartStore()).open_session()
        shown = 0
        while True:
            print(_render_table(session.render(query)))
            if session.stale:
                print(f"(showing last good snapshot: {session.last_error})")
            shown += 1
            if iterations and shown >= iterations:
                return
            await asyncio.sleep(interval)
            print()
            await session.refresh()
    finally:
        await close_pool()


async def _load_view(query: ViewQuery) -> PartsView:
    await run_migrations(backup=False)
    try:
        return await ViewPartsUseCase(part_store=SQLitePartStore()).execute(query)
    finally:
        await close_pool()


def cmd_rank(args: argparse.Namespace) -> None:
    """Print the ranked view."""
    query = ViewQuery(
        sort_field=SortField(args.sort),
        direction=SortDirection(args.direction),
        algorithm=SortAlgorithm(args.algorithm),
        search=args.search,
        search_mode=SearchMode.EXACT if args.exact else SearchMode.SUBSTRING,
    )
    if args.sample:
        view = compose_view(generate_sample_parts(), query)
    elif args.watch is not None:
        try:
            asyncio.run(_watch(query, args.watch, args.iterations))
        except KeyboardInterrupt:
            print("\nStopped.")
        return
    else:
        view = asyncio.run(_load_view(query))
    print(_render_table(view))


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Spare parts reordering assistant CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default=settings.api.host, help="Bind host")
    p_serve.add_argument("--port", type=int, default=settings.api.port, help="Bind port")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    p_migrate.add_argument("--no-backup", action="store_true", help="Skip backup before migrations")
    p_migrate.set_defaults(func=cmd_migrate)

    # status
    p_status = sub.add_parser("status", help="Show migration status")
    p_status.add_argument("--db-path", type=Path, help="Database path (default from settings)")
    p_status.set_defaults(func=cmd_status)

    # seed
    p_seed = sub.add_parser("seed", help="Load the sample parts")
    p_seed.add_argument("--force", action="store_true", help="Add samples even if parts exist")
    p_seed.set_defaults(func=cmd_seed)

    # rank
    p_rank = sub.add_parser("rank", help="Print the ranked parts table")
    p_rank.add_argument(
        "--sort",
        choices=[f.value for f in SortField],
        default=settings.ranking.default_sort_field,
    )
    p_rank.add_argument(
        "--direction",
        choices=[d.value for d in SortDirection],
        default=settings.ranking.default_direction,
    )
    p_rank.add_argument(
        "--algorithm",
        choices=[a.value for a in SortAlgorithm],
        default=settings.ranking.default_algorithm,
    )
    p_rank.add_argument("--search", default="", help="Filter by name")
    p_rank.add_argument("--exact", action="store_true", help="Exact name match (binary search)")
    p_rank.add_argument("--sample", action="store_true", help="Rank the built-in sample parts")
    p_rank.add_argument(
        "--watch", type=float, metavar="SECONDS", help="Refresh the table every SECONDS"
    )
    p_rank.add_argument(
        "--iterations", type=int, default=0, help="Stop watching after N tables (0: until Ctrl-C)"
    )
    p_rank.set_defaults(func=cmd_rank)

    args = parser.parse_args()
    configure_logging()
    args.func(args)


if __name__ == "__main__":
    main()

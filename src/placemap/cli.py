"""Command-line interface for placemap."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

import questionary
from rich.console import Console
from rich.table import Table

from placemap.activity import ActivityTracker
from placemap.backend import HttpPlaceBackend, InMemoryPlaceBackend, PlaceBackend
from placemap.config import PlaceMapConfig, load_config
from placemap.exceptions import (
    BackendError,
    ConfigError,
    FallbackCacheError,
    OperationCancelledError,
    PlaceNotFoundError,
    PlaceValidationError,
)
from placemap.forms import DraftForm
from placemap.geocoding import GeocodingResolver, NominatimGeocoder, load_bundled_directory
from placemap.lifecycle import PlaceLifecycle
from placemap.mapview import MapReconciler, SceneMapSurface
from placemap.models import Place, PlaceStatus, parse_calendar_date
from placemap.persistence import FallbackCache
from placemap.progress import RichBusyIndicator
from placemap.store import PlaceStore


def _package_version() -> str:
    try:
        return version("placemap")
    except PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="placemap", description="Track planned and visited places.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")
    parser.add_argument("--config", help="Path to a placemap JSON config (defaults + PLACEMAP_* env otherwise)")
    parser.add_argument(
        "--backend",
        choices=["http", "memory"],
        default="http",
        help="Places backend; 'memory' keeps everything in this process",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List places")
    list_parser.add_argument("--status", choices=[s.value for s in PlaceStatus], help="Only this status")

    subparsers.add_parser("stats", help="Show visited/planned statistics")

    add_parser = subparsers.add_parser("add", help="Plan a new place")
    add_parser.add_argument("name", help="Place name (searched in the directory, then the geocoder)")
    add_parser.add_argument("--description", default="", help="Description (suggested from the category if empty)")
    add_parser.add_argument("--lat", type=float, help="Latitude of a picked point")
    add_parser.add_argument("--lon", type=float, help="Longitude of a picked point")
    add_parser.add_argument("--date", help="Planned date (YYYY-MM-DD), defaults to one month ahead")

    visit_parser = subparsers.add_parser("visit", help="Mark a place as visited")
    visit_parser.add_argument("id", help="Place id")
    visit_parser.add_argument("--narrative", help="How the visit went (prompted when missing)")

    plan_parser = subparsers.add_parser("plan", help="Move a visited place back to planned")
    plan_parser.add_argument("id", help="Place id")
    plan_parser.add_argument("--yes", action="store_true", help="Skip confirmation")

    edit_parser = subparsers.add_parser("edit", help="Edit the text shown for a place")
    edit_parser.add_argument("id", help="Place id")
    edit_parser.add_argument("text", help="New text")
    edit_parser.add_argument("--planned", action="store_true", help="Edit the base description of a planned place")

    delete_parser = subparsers.add_parser("delete", help="Delete a place")
    delete_parser.add_argument("id", help="Place id")
    delete_parser.add_argument("--yes", action="store_true", help="Skip confirmation")

    suggest_parser = subparsers.add_parser("suggest", help="Show directory suggestions for a query")
    suggest_parser.add_argument("query", help="Search text")

    subparsers.add_parser("migrate-cache", help="Upload places from the fallback cache to the backend")

    export_parser = subparsers.add_parser("export-map", help="Write the reconciled map scene as GeoJSON")
    export_parser.add_argument("output", help="Output .geojson path")

    return parser


@dataclass
class Session:
    """Everything a command handler needs."""

    config: PlaceMapConfig
    store: PlaceStore
    lifecycle: PlaceLifecycle
    resolver: GeocodingResolver
    console: Console


async def _ask_confirm(question: str) -> bool:
    answer = await questionary.confirm(question, default=False).ask_async()
    return bool(answer)


# ------------------------------------------------------------------
# Command handlers
# ------------------------------------------------------------------


def _places_table(places: list[Place], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Name", style="bold")
    table.add_column("Status")
    table.add_column("Date")
    table.add_column("Description")
    for place in places:
        when = place.relevant_date
        style = "red" if place.status is PlaceStatus.VISITED else "blue"
        table.add_row(
            place.identity or "-",
            place.name,
            f"[{style}]{place.status.value}[/]",
            when.isoformat() if when else "-",
            place.narrative,
        )
    return table


async def _cmd_list(args: argparse.Namespace, session: Session) -> int:
    store = session.store
    if args.status == PlaceStatus.VISITED.value:
        places, title = store.visited_places, "Visited places"
    elif args.status == PlaceStatus.PLANNED.value:
        places, title = store.planned_places, "Planned places"
    else:
        places, title = list(store.places), "All places"
    session.console.print(_places_table(places, title))
    return 0


async def _cmd_stats(args: argparse.Namespace, session: Session) -> int:
    stats = session.store.stats()
    session.console.print(
        f"Total: {stats.total}  Visited: [red]{stats.visited}[/]  "
        f"Planned: [blue]{stats.planned}[/]  Visited: {stats.percentage}%"
    )
    return 0


async def _cmd_add(args: argparse.Namespace, session: Session) -> int:
    form = DraftForm(session.resolver)
    form.type_name(args.name)
    form.draft.description = args.description
    if args.date:
        form.draft.planned_date = parse_calendar_date(args.date)

    if args.lat is not None and args.lon is not None:
        await form.map_click(args.lat, args.lon)
    elif await form.search() is None:
        print(f"error: {form.message}", file=sys.stderr)
        return 3

    place = await session.lifecycle.plan_place(form.draft)
    session.console.print(f"Planned [bold]{place.name}[/] ({place.identity})")
    return 0


async def _cmd_visit(args: argparse.Namespace, session: Session) -> int:
    narrative = args.narrative
    if narrative is None:
        narrative = await questionary.text("How was the trip? Tell the details:").ask_async()
        if narrative is None:
            raise OperationCancelledError("visit narrative prompt was cancelled")
    place = await session.lifecycle.mark_visited(args.id, narrative)
    session.console.print(f"[red]Visited[/] [bold]{place.name}[/]")
    return 0


async def _cmd_plan(args: argparse.Namespace, session: Session) -> int:
    place = await session.lifecycle.mark_planned(args.id, confirmed=args.yes)
    session.console.print(f"[blue]Planned[/] [bold]{place.name}[/] again")
    return 0


async def _cmd_edit(args: argparse.Namespace, session: Session) -> int:
    if args.planned:
        place = await session.lifecycle.edit_planned_description(args.id, args.text)
    else:
        place = await session.lifecycle.edit_description(args.id, args.text)
    if place is None:
        session.console.print("Nothing to change.")
    else:
        session.console.print(f"Updated [bold]{place.name}[/]")
    return 0


async def _cmd_delete(args: argparse.Namespace, session: Session) -> int:
    await session.lifecycle.delete(args.id, confirmed=args.yes)
    session.console.print(f"Deleted {args.id}")
    return 0


async def _cmd_migrate_cache(args: argparse.Namespace, session: Session) -> int:
    created = await session.store.migrate_fallback_cache()
    session.console.print(f"Migrated {len(created)} place(s) from {session.config.fallback_cache_path}")
    return 0


async def _cmd_export_map(args: argparse.Namespace, session: Session) -> int:
    config = session.config
    surface = SceneMapSurface(center=config.default_center, zoom=config.default_zoom)
    reconciler = MapReconciler.from_config(surface, config)
    reconciler.attach(session.store)
    reconciler.detach()

    output = Path(args.output)
    output.write_text(json.dumps(surface.to_geojson(), indent=2, ensure_ascii=False), encoding="utf-8")
    session.console.print(
        f"Wrote {len(surface.markers)} marker(s) and {len(surface.routes)} route(s) to {output}"
    )
    return 0


_HANDLERS: dict[str, Callable[[argparse.Namespace, Session], Awaitable[int]]] = {
    "list": _cmd_list,
    "stats": _cmd_stats,
    "add": _cmd_add,
    "visit": _cmd_visit,
    "plan": _cmd_plan,
    "edit": _cmd_edit,
    "delete": _cmd_delete,
    "migrate-cache": _cmd_migrate_cache,
    "export-map": _cmd_export_map,
}


def _run_suggest(args: argparse.Namespace, config: PlaceMapConfig, console: Console) -> int:
    resolver = GeocodingResolver(
        load_bundled_directory(),
        suggestion_limit=config.suggestion_limit,
        min_query_length=config.min_query_length,
    )
    suggestions = resolver.suggest(args.query)
    if not suggestions:
        console.print("No suggestions.")
        return 0
    table = Table(title=f"Suggestions for {args.query!r}")
    table.add_column("Name", style="bold")
    table.add_column("Region")
    table.add_column("Category")
    table.add_column("Coordinates")
    for entry in suggestions:
        lat, lon = entry.coordinates
        region = ", ".join(part for part in (entry.state, entry.country) if part)
        category = entry.category.value if entry.category else "-"
        table.add_row(entry.name, region, category, f"{lat:.4f}, {lon:.4f}")
    console.print(table)
    return 0


def _create_backend(kind: str, config: PlaceMapConfig) -> PlaceBackend:
    if kind == "memory":
        return InMemoryPlaceBackend()
    return HttpPlaceBackend(base_url=config.api_url, timeout=config.request_timeout)


async def _run_command(args: argparse.Namespace, config: PlaceMapConfig, console: Console) -> int:
    with RichBusyIndicator() as indicator:
        activity = ActivityTracker(indicator)
        async with (
            _create_backend(args.backend, config) as backend,
            NominatimGeocoder(
                base_url=config.geocoder_url,
                user_agent=config.geocoder_user_agent,
                timeout=config.request_timeout,
                activity=activity,
            ) as geocoder,
        ):
            store = PlaceStore(backend, FallbackCache(config.fallback_cache_path), activity=activity)
            await store.fetch_all()
            session = Session(
                config=config,
                store=store,
                lifecycle=PlaceLifecycle(store, confirm=_ask_confirm),
                resolver=GeocodingResolver(
                    load_bundled_directory(),
                    geocoder,
                    suggestion_limit=config.suggestion_limit,
                    min_query_length=config.min_query_length,
                ),
                console=console,
            )
            return await _HANDLERS[args.command](args, session)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)

    console = Console()
    try:
        config = load_config(args.config) if args.config else PlaceMapConfig.from_env()
        if args.command == "suggest":
            return _run_suggest(args, config, console)
        return asyncio.run(_run_command(args, config, console))
    except OperationCancelledError as exc:
        print(f"cancelled: {exc}", file=sys.stderr)
        return 2
    except (ConfigError, PlaceValidationError, PlaceNotFoundError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except (BackendError, FallbackCacheError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except Exception as exc:  # pragma: no cover
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

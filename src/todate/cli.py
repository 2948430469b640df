"""
Todate Command Line Interface (CLI).

This module exposes the timeline engine in the terminal using `typer` and `rich`.
It is a read-only viewer: it loads a JSON export, runs the timeline view
pipeline and prints the result. Nothing is written back.

Export Format
-------------
Either a bare list of todates, or an object::

    {
      "todates": [{"_id": "...", "title": "...", "date": "...", "dateDisplay": {...}}],
      "school": {"referenceYear": 2000, "month": 9, "day": 1, ...}
    }

Usage
-----
    # Render a timeline export
    $ todate show export.json --tag work --from 2010 --to 2020

    # Resolve a single DateValue
    $ todate resolve '{"kind": "school", "schoolYear": 2, "period": 3}'

    # Inspect the year-axis ticks for a window
    $ todate ticks 1900 2000 400
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import pendulum
import typer
from dotenv import load_dotenv
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from todate.core.calendar.display import format_display
from todate.core.calendar.resolve import check_school_config, resolve_iso
from todate.core.contracts.date_value import parse_date_value
from todate.core.contracts.school import SchoolCalendarConfig
from todate.core.contracts.todate import Todate
from todate.core.layout.axis import compute_tick_years
from todate.pipelines.timeline_view import TimelineFilters, TimelineView, build_timeline_view

load_dotenv()

app = typer.Typer(
    help="Todate: flexible-precision personal timelines.",
    rich_markup_mode="markdown",
)
console = Console()

_TODATES = TypeAdapter(list[Todate])


# --------------------------------------------------------------------------- #
# Helpers: I/O & Rendering
# --------------------------------------------------------------------------- #


def _read_json(path: Path) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def _load_export(path: Path) -> tuple[list[Todate], SchoolCalendarConfig | None]:
    """Read todates (and the optional school config) from an export file."""
    data = _read_json(path)
    if isinstance(data, list):
        return _TODATES.validate_python(data), None
    if not isinstance(data, dict):
        raise ValueError("export must be a list of todates or an object with 'todates'")

    todates = _TODATES.validate_python(data.get("todates", []))
    school = data.get("school")
    config = SchoolCalendarConfig.model_validate(school) if school else None
    return todates, config


def _render_view(view: TimelineView) -> None:
    """Print the entries table and the tick axis."""
    span = view["span"]
    console.rule(f"[bold]{int(span.start_year)} – {int(span.end_year)}[/bold]")

    if not view["entries"]:
        message = "No todates yet." if view["total"] == 0 else "No todates match the filters."
        console.print(f"[dim]{message}[/dim]")
    else:
        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Title")
        table.add_column("When")
        table.add_column("Lane", justify="right")
        table.add_column("Tags", style="dim")
        for entry in view["entries"]:
            lane = entry["lane"]
            table.add_row(
                entry["title"],
                entry["label"],
                "·" if lane is None else str(lane),
                ", ".join(entry["tag_ids"]),
            )
        console.print(table)

    ticks = " ".join(str(year) for year in view["ticks"]) or "—"
    console.print(f"[bold yellow]Axis:[/bold yellow] {ticks}")
    console.print(
        f"[dim]{len(view['entries'])} of {view['total']} shown, "
        f"{view['lane_count']} lane(s)[/dim]"
    )


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def show(
    file: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="Path to a JSON export of todates.",
        ),
    ],
    tag: Annotated[
        list[str] | None,
        typer.Option("--tag", "-t", help="Only show todates carrying this tag id (repeatable)."),
    ] = None,
    untagged: Annotated[
        bool,
        typer.Option("--untagged/--no-untagged", help="Include todates without tags."),
    ] = True,
    start_year: Annotated[
        int | None,
        typer.Option("--from", help="First year of the window."),
    ] = None,
    end_year: Annotated[
        int | None,
        typer.Option("--to", help="Last year of the window."),
    ] = None,
    height: Annotated[
        float,
        typer.Option("--height", help="Axis height in pixels (drives tick spacing)."),
    ] = 600.0,
    locale: Annotated[
        str | None,
        typer.Option("--locale", "-l", help="Locale for month names (default: TODATE_LOCALE)."),
    ] = None,
) -> None:
    """
    Render a todate export as a table with lanes and a year axis.
    """
    try:
        todates, school = _load_export(file)
        view = build_timeline_view(
            todates,
            pixel_height=height,
            today_year=pendulum.now().year,
            school_config=school,
            filters=TimelineFilters(
                selected_tag_ids=frozenset(tag or ()),
                show_untagged=untagged,
                start_year=start_year,
                end_year=end_year,
            ),
            locale=locale,
        )
    except (OSError, ValueError, ValidationError) as e:
        console.print(f"[bold red]❌ Could not load {file.name}:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    _render_view(view)


@app.command()  # type: ignore[misc]
def resolve(
    value: Annotated[
        str,
        typer.Argument(help="A DateValue as JSON, e.g. '{\"kind\": \"month\", \"year\": 2001, \"month\": 3}'."),
    ],
    school: Annotated[
        Path | None,
        typer.Option(
            "--school",
            "-s",
            exists=True,
            dir_okay=False,
            help="JSON file holding a school calendar config.",
        ),
    ] = None,
    locale: Annotated[
        str | None,
        typer.Option("--locale", "-l", help="Locale for month names."),
    ] = None,
) -> None:
    """
    Resolve one DateValue to its sortable instant and display label.
    """
    try:
        payload = json.loads(value)
        config = SchoolCalendarConfig.model_validate(_read_json(school)) if school else None
    except (OSError, ValueError, ValidationError) as e:
        console.print(f"[bold red]❌ Invalid input:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    parsed = parse_date_value(payload if isinstance(payload, dict) else {})
    if parsed.is_err():
        console.print(f"[bold red]❌ {escape(parsed.unwrap_err())}[/bold red]")
        raise typer.Exit(code=1)

    date_value = parsed.unwrap()
    check_school_config(config)
    console.print(
        Panel.fit(
            f"[bold]Instant:[/bold] {resolve_iso(date_value, config)}\n"
            f"[bold]Label:[/bold]   {format_display(date_value, locale=locale, school_config=config)}",
            title=date_value.kind,
            border_style="cyan",
        )
    )


@app.command()  # type: ignore[misc]
def ticks(
    start: Annotated[float, typer.Argument(help="First year of the window.")],
    end: Annotated[float, typer.Argument(help="Last year of the window.")],
    height: Annotated[float, typer.Argument(help="Axis height in pixels.")],
    min_label_px: Annotated[
        float | None,
        typer.Option("--min-label-px", help="Minimum gap between labels (default: TODATE_LABEL_MIN_PX)."),
    ] = None,
) -> None:
    """
    Print the labelled years for a window of the given pixel height.
    """
    years = compute_tick_years(start, end, height, min_label_px)
    if not years:
        console.print("[dim]No ticks for this window.[/dim]")
        return
    console.print(" ".join(str(year) for year in years))


if __name__ == "__main__":
    app()

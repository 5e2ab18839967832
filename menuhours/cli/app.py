"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, List, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..adapters.schedule_file import ScheduleSet, load_schedule_file
from ..config import AppConfig, load_config
from ..domain.exceptions import MenuHoursError
from ..domain.models import Instant
from ..domain.overrides import ScheduleLevel, resolve_effective_level
from ..services.availability_service import AvailabilityService

app = typer.Typer(
    name="menuhours",
    help="Validate, evaluate and describe restaurant menu availability schedules",
    add_completion=False
)

console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _fail(message: object) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(str(message))}")
    raise typer.Exit(1)


def _config(ctx: typer.Context) -> AppConfig:
    return ctx.obj["config"]


def _load_schedules(path: Path, lenient: bool) -> ScheduleSet:
    try:
        return load_schedule_file(path, strict=not lenient)
    except (FileNotFoundError, MenuHoursError) as e:
        _fail(e)


def _levels(schedules: ScheduleSet, level: Optional[ScheduleLevel]) -> List[ScheduleLevel]:
    if level is not None:
        return [level]
    return [lvl for lvl in ScheduleLevel if schedules.get(lvl) is not None]


def _parse_instant(at: Optional[str], timezone: str) -> Instant:
    if at is None:
        return Instant.now(timezone)
    try:
        moment = pendulum.from_format(at, "YYYY-MM-DD HH:mm", tz=timezone)
    except ValueError as e:
        _fail(f"Could not parse --at value {at!r} (use YYYY-MM-DD HH:mm): {e}")
    return Instant.from_datetime(moment)


@app.callback()
def main(
    ctx: typer.Context,
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Restaurant menu availability tools.
    """
    _configure_logging(verbose)

    try:
        config = load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        _fail(e)

    ctx.obj = {"config": config}


@app.command()
def validate(
    ctx: typer.Context,
    schedule_file: Annotated[Path, typer.Argument(help="YAML/JSON file with item/category/restaurant schedules")],
    level: Annotated[Optional[ScheduleLevel], typer.Option("--level", "-l", help="Only validate this level")] = None,
):
    """
    Check schedules for inverted and overlapping time ranges.

    Examples:

        menuhours validate hours.yaml
        menuhours validate hours.yaml --level restaurant
    """
    config = _config(ctx)
    schedules = _load_schedules(schedule_file, lenient=False)
    service = AvailabilityService(
        labels=config.display_labels(),
        validator=config.schedule_validator(),
    )

    levels = _levels(schedules, level)
    if not levels:
        console.print("[yellow]No schedules declared; nothing to validate.[/yellow]")
        return

    has_errors = False
    for lvl in levels:
        schedule = schedules.get(lvl)
        if schedule is None:
            console.print(f"[dim]{lvl.value}: no schedule[/dim]")
            continue

        result = service.validate(schedule)
        if result.is_valid:
            console.print(f"[green]✓ {lvl.value}: schedule is valid[/green]")
            continue

        has_errors = True
        console.print(f"[bold red]✗ {lvl.value}: {escape(result.summary_error)}[/bold red]")

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Day", style="bold yellow")
        table.add_column("Error")
        for weekday, issues in result.per_day_errors.items():
            for issue in issues:
                table.add_row(weekday.label, escape(issue.message))
        console.print(table)

    if has_errors:
        raise typer.Exit(1)


@app.command()
def status(
    ctx: typer.Context,
    schedule_file: Annotated[Path, typer.Argument(help="YAML/JSON file with item/category/restaurant schedules")],
    at: Annotated[Optional[str], typer.Option("--at", help="Query time (YYYY-MM-DD HH:mm) in the configured timezone. Defaults to now.")] = None,
    locale: Annotated[Optional[str], typer.Option("--locale", help="Locale for day names, e.g. en, de")] = None,
    lenient: Annotated[bool, typer.Option("--lenient", help="Skip malformed entries instead of failing.")] = False,
):
    """
    Show whether the item is available at a given time.

    Examples:

        menuhours status hours.yaml
        menuhours status hours.yaml --at "2024-11-25 12:30" --locale de
    """
    config = _config(ctx)
    schedules = _load_schedules(schedule_file, lenient=lenient)
    now = _parse_instant(at, config.timezone)

    service = AvailabilityService(labels=config.display_labels(locale))
    result = service.evaluate(
        now,
        item=schedules.item,
        category=schedules.category,
        restaurant=schedules.restaurant,
    )

    effective_level, _ = resolve_effective_level(
        schedules.item, schedules.category, schedules.restaurant
    )
    source = effective_level.value if effective_level else "none (always available)"

    console.print(f"\n[bold]Query:[/bold] {now}")
    console.print(f"[bold]Effective schedule:[/bold] {source}")
    if result.is_open_now:
        console.print("[bold green]✓ Available now[/bold green]")
    else:
        console.print("[bold yellow]✗ Not available now[/bold yellow]")
    if result.label:
        console.print(f"  {escape(result.label)}")
    console.print()


@app.command()
def show(
    ctx: typer.Context,
    schedule_file: Annotated[Path, typer.Argument(help="YAML/JSON file with item/category/restaurant schedules")],
    level: Annotated[Optional[ScheduleLevel], typer.Option("--level", "-l", help="Only show this level")] = None,
    locale: Annotated[Optional[str], typer.Option("--locale", help="Locale for day names, e.g. en, de")] = None,
    lenient: Annotated[bool, typer.Option("--lenient", help="Skip malformed entries instead of failing.")] = False,
):
    """
    Print the weekly pattern of each declared schedule.
    """
    config = _config(ctx)
    schedules = _load_schedules(schedule_file, lenient=lenient)
    service = AvailabilityService(labels=config.display_labels(locale))

    levels = [level] if level is not None else list(ScheduleLevel)
    for lvl in levels:
        text = service.format(schedules.get(lvl))
        if text is None:
            console.print(f"[bold]{lvl.value}:[/bold] [dim]no schedule (always available)[/dim]")
        else:
            rendered = escape(text) if text else "[dim]no declared hours[/dim]"
            console.print(f"[bold]{lvl.value}:[/bold] {rendered}")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]menuhours[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()

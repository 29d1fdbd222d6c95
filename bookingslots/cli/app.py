"""
Main CLI application using Typer.
"""

import logging
from pathlib import Path
from typing import Annotated, List, Optional

import pendulum
import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..adapters.config_source import ConfigCalendarSource
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import BookingSlotsError
from ..domain.models import CalendarSlot, Weekday
from ..services.slot_finder import SlotFinderService

app = typer.Typer(
    name="bookingslots",
    help="Find bookable time slots from weekly availability and booked events",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml"),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Bookable slot finder (all times in UTC).
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load_config(config_file: Optional[Path]) -> AppConfig:
    config_path = config_file or get_default_config_path()
    return AppConfig.load_from_yaml(config_path)


def _parse_date(value: str, label: str, end_of_day: bool = False) -> pendulum.DateTime:
    """Parse a YYYY-MM-DD option as a UTC day boundary."""
    try:
        day = pendulum.from_format(value, "YYYY-MM-DD", tz="UTC")
    except ValueError as e:
        console.print(f"[red]Could not parse {label} '{value}': {escape(str(e))}[/red]")
        raise typer.Exit(1)
    return day.end_of("day") if end_of_day else day.start_of("day")


def _parse_instant(value: str) -> pendulum.DateTime:
    """Parse an ISO-8601 instant; values without offset are read as UTC."""
    try:
        parsed = pendulum.parse(value, tz="UTC")
    except ValueError as e:
        console.print(f"[red]Could not parse start '{value}': {escape(str(e))}[/red]")
        raise typer.Exit(1)
    if not isinstance(parsed, pendulum.DateTime):
        console.print(f"[red]Start must be a date and time, got '{value}'[/red]")
        raise typer.Exit(1)
    return parsed.in_timezone("UTC")


@app.command()
def find(
    participants: Annotated[List[str], typer.Argument(help="Participant names from the config, e.g. 'alice bob'.")],
    config_file: ConfigOption = None,
    start: Annotated[Optional[str], typer.Option("--start", help="Start date (YYYY-MM-DD)")] = None,
    end: Annotated[Optional[str], typer.Option("--end", help="End date (YYYY-MM-DD)")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Slot duration in minutes")] = None,
    fixed_block: Annotated[bool, typer.Option("--fixed-block", help="Read each range entry as the start of a fixed block (single participant only).")] = False,
):
    """
    Find open slots for one or more participants.

    Examples:

        # One participant, next seven days
        bookingslots find alice

        # Mutually free slots, custom range and duration
        bookingslots find alice bob --start 2024-11-24 --end 2024-11-30 --duration 60
    """
    try:
        config = _load_config(config_file)
        names = [participant.name for participant in config.resolve_participants(participants)]

        start_date = _parse_date(start, "start date") if start else pendulum.now("UTC").start_of("day")
        end_date = _parse_date(end, "end date", end_of_day=True) if end else start_date.add(days=7).end_of("day")

        slot_duration = duration if duration is not None else config.defaults.slot_duration_minutes
        if slot_duration <= 0:
            console.print("[red]Duration must be greater than zero.[/red]")
            raise typer.Exit(1)

        if fixed_block and len(names) > 1:
            console.print("[red]--fixed-block works with a single participant only.[/red]")
            raise typer.Exit(1)

        mode = "fixed-block" if fixed_block else config.defaults.mode

        service = SlotFinderService(
            calendar_source=ConfigCalendarSource(config),
            slot_duration_minutes=slot_duration,
            apply_buffer=config.defaults.apply_buffer,
        )
        slots = service.find_slots(
            participants=names,
            start_date=start_date,
            end_date=end_date,
            mode=mode,
        )

        console.print()
        if not slots:
            console.print(
                "[yellow]⚠ No open slots found.[/yellow]\n"
                "Try a longer date range or a shorter duration."
            )
            return

        table = Table(
            title=f"Open slots for {', '.join(names)}",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("Day", style="bold yellow")
        table.add_column("Date")
        table.add_column("Time (UTC)")
        table.add_column("Minutes", justify="right", style="dim")

        for slot in slots:
            slot_start = slot.time_range.start
            table.add_row(
                Weekday(slot_start.isoweekday() % 7).name.capitalize(),
                slot_start.format("YYYY-MM-DD"),
                f"{slot_start.format('HH:mm')} – {slot.end.format('HH:mm')}",
                str(slot.duration_minutes),
            )

        console.print(table)
        console.print(f"[bold green]✓ {len(slots)} open slot(s)[/bold green]\n")

    except BookingSlotsError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def check(
    participant: Annotated[str, typer.Argument(help="Participant name from the config.")],
    start: Annotated[str, typer.Option("--start", help="Slot start, e.g. 2024-11-24T09:30 (UTC)")],
    config_file: ConfigOption = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Slot duration in minutes")] = None,
):
    """
    Check whether one slot can be booked. Exits with 2 when it cannot.
    """
    try:
        config = _load_config(config_file)
        slot_duration = duration if duration is not None else config.defaults.slot_duration_minutes
        if slot_duration <= 0:
            console.print("[red]Duration must be greater than zero.[/red]")
            raise typer.Exit(1)

        slot = CalendarSlot(start=_parse_instant(start), duration_minutes=slot_duration)

        service = SlotFinderService(
            calendar_source=ConfigCalendarSource(config),
            slot_duration_minutes=slot.duration_minutes,
            apply_buffer=config.defaults.apply_buffer,
        )
        available = service.check_slot(participant=participant, slot=slot)

    except BookingSlotsError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    if available:
        console.print(Panel.fit(
            f"[bold green]✓ Available[/bold green]\n\n{slot.format_display()}",
            title=participant
        ))
    else:
        console.print(Panel.fit(
            f"[bold red]✗ Not available[/bold red]\n\n{slot.format_display()}",
            title=participant
        ))
        raise typer.Exit(2)


@app.command()
def common(
    participants: Annotated[List[str], typer.Argument(help="Participant names from the config.")],
    weekday: Annotated[int, typer.Option("--weekday", "-w", min=0, max=6, help="Weekday, 0=Sunday")] = 1,
    config_file: ConfigOption = None,
):
    """
    Show the availability windows shared by all participants on a weekday.
    """
    try:
        config = _load_config(config_file)
        names = [participant.name for participant in config.resolve_participants(participants)]

        service = SlotFinderService(calendar_source=ConfigCalendarSource(config))
        shared = service.common_availability(participants=names, weekday=weekday)

    except BookingSlotsError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    day_name = Weekday(weekday).name.capitalize()
    if not shared:
        console.print(f"[yellow]No shared availability on {day_name}.[/yellow]")
        return

    console.print(f"\n[bold]{day_name}[/bold] (UTC):")
    for index in range(0, len(shared) - 1, 2):
        console.print(f"  {shared[index]} – {shared[index + 1]}")
    console.print()


@app.command()
def list_participants(config_file: ConfigOption = None):
    """
    List all configured participants.
    """
    try:
        config = _load_config(config_file)
    except BookingSlotsError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    if not config.participants:
        console.print("[yellow]No participants defined in the config file.[/yellow]")
        return

    table = Table(
        title="Configured participants",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Name", style="bold yellow")
    table.add_column("Weekdays")
    table.add_column("Events", justify="right", style="dim")

    for participant in config.participants:
        weekdays = ", ".join(
            Weekday(window.weekday).name[:3].capitalize() for window in participant.availability
        )
        table.add_row(participant.name, weekdays or "-", str(len(participant.events)))

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]bookingslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()

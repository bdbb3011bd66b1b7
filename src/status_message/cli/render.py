"""Rich renderables for the CLI."""

from typing import Iterable

from rich.panel import Panel
from rich.table import Table

from status_message.display import format_timestamp
from status_message.models.status import FeedEntry, StatusRecord, ViewState


def render_current(state: ViewState) -> Panel:
    if state.current is None:
        body = "[dim]No status message yet![/dim]"
    else:
        body = f"{state.current.message}\n[dim]{format_timestamp(state.current.timestamp)}[/dim]"
    title = f"Status of {state.identity}" if state.identity else "Status"
    return Panel(body, title=title)


def render_history(records: Iterable[StatusRecord], title: str = "History") -> Table:
    table = Table(title=title)
    table.add_column("Time", style="dim")
    table.add_column("Message")
    for record in records:
        table.add_row(format_timestamp(record.timestamp), record.message)
    return table


def render_entries(entries: Iterable[FeedEntry], title: str = "Public feed") -> Table:
    table = Table(title=title)
    table.add_column("Account", style="bold")
    table.add_column("Time", style="dim")
    table.add_column("Message")
    for entry in entries:
        table.add_row(entry.account_id, format_timestamp(entry.status.timestamp), entry.message)
    return table

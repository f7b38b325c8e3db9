# rich-based end-of-run summary
# src/app/summary.py

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .pipeline import DumpResult


def build_summary_table(result: DumpResult) -> Table:
    """One row per command group, plus a totals row."""
    table = Table(title="Waypoint dump", show_header=True, header_style="bold magenta")
    table.add_column("Group")
    table.add_column("Commands", justify="right")

    # Group names come from the waypoint file; never parse them as markup.
    for group_name, count in result.group_counts.items():
        table.add_row(Text(group_name), str(count))

    table.add_section()
    table.add_row("[bold]Total[/bold]", f"[bold]{result.command_count}[/bold]")
    return table


def print_summary(result: DumpResult, console: Optional[Console] = None) -> None:
    console = console or Console()
    console.print(build_summary_table(result))

    csv_note = escape(str(result.csv_path)) if result.csv_path else "[yellow]not generated[/yellow]"
    console.print(f"JSON: {escape(str(result.json_path))}")
    console.print(f"CSV:  {csv_note} ({result.record_count} rows)")
    console.print(f"TXT:  {escape(str(result.commands_path))}")

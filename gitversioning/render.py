"""
Rendering functions for gitversioning output.

This module handles all pretty-printing and table formatting.
Commands compute data, this module makes it human-readable.
"""

from rich.table import Table
from rich.console import Console
from rich import box
from typing import List, Dict, Any, Optional

console = Console()


def render_table(headers: List[str], rows: List[List[str]], title: Optional[str] = None) -> None:
    """
    Render a generic table with the given headers and rows.

    Args:
        headers: List of column headers
        rows: List of rows, where each row is a list of values
        title: Optional table title
    """
    if not rows:
        console.print("[yellow]No data to display.[/yellow]")
        return

    table = Table(
        title=title,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )

    for header in headers:
        table.add_column(header)

    for row in rows:
        table.add_row(*[str(val) for val in row])

    console.print(table)


def render_tags_table(tags: List[Dict[str, Any]], winner: Optional[str] = None) -> None:
    """
    Render version tags as a table, highest version first.

    Args:
        tags: Tag dictionaries with tag, version, commit and reachable keys
        winner: Name of the selected tag, highlighted in the table
    """
    if not tags:
        console.print("[yellow]No version tags found.[/yellow]")
        return

    table = Table(
        title="Version tags",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )
    table.add_column("Tag", style="cyan")
    table.add_column("Version")
    table.add_column("Commit", style="dim")
    table.add_column("Reachable", justify="center")

    for tag in tags:
        if tag.get('version') is None:
            reachable = "[dim]-[/dim]"
        elif tag.get('reachable'):
            reachable = "[green]✓[/green]"
        else:
            reachable = "[red]✗[/red]"
        name = tag['tag']
        if winner is not None and name == winner:
            name = f"[bold green]{name}[/bold green]"
        commit = tag.get('commit') or ''
        table.add_row(name, tag.get('version') or '', commit[:12], reachable)

    console.print(table)


def render_status(status: Dict[str, Any]) -> None:
    """
    Render the dirty state of a work tree.

    Args:
        status: Dictionary with sub_directory, dirty and changes keys
    """
    scope = status.get('sub_directory') or '.'
    if not status.get('dirty'):
        console.print(f"[green]Clean[/green] ({scope})")
        return

    console.print(f"[yellow]Dirty[/yellow] ({scope})")
    rows = []
    for category, paths in status.get('changes', {}).items():
        for path in paths:
            rows.append([category, path])
    render_table(["Category", "Path"], rows)

"""
Rich-based console utilities for the geopeaks CLI.

Provides consistent terminal output with:
- geopeaks branding
- Styled messages (info, success, warning, error)
- Formatted panels and result tables
"""

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

GEOPEAKS_THEME = Theme(
    {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red bold",
        "muted": "dim",
    }
)

# Global console instance with custom theme
console = Console(theme=GEOPEAKS_THEME)

GEOPEAKS_TAGLINE = "Cities and peaks in a geo index"


def print_logo(show_tagline: bool = True, show_version: bool = True) -> None:
    """Print the geopeaks name with optional tagline and version."""
    from geopeaks import __version__

    logo_text = Text("geopeaks", style="bold blue")

    if show_tagline:
        logo_text.append(Text(f"\n  {GEOPEAKS_TAGLINE}", style="italic cyan"))

    if show_version:
        logo_text.append(Text(f"\n  v{__version__}", style="dim"))

    console.print(logo_text)


def info(message: str, prefix: str = "info") -> None:
    """Print an info message."""
    console.print(f"[info]{prefix}:[/info] {message}")


def success(message: str, prefix: str = "done") -> None:
    """Print a success message."""
    console.print(f"[success]{prefix}:[/success] {message}")


def warning(message: str, prefix: str = "warning") -> None:
    """Print a warning message."""
    console.print(f"[warning]{prefix}:[/warning] {message}")


def print_key_value(key: str, value: Any, indent: int = 2) -> None:
    spaces = " " * indent
    console.print(f"{spaces}[muted]{key}:[/muted] {value}")


def print_error_panel(title: str, message: str, hint: str | None = None) -> None:
    """Print an error in a styled panel."""
    content = f"[error]{message}[/error]"
    if hint:
        content += f"\n\n[dim]Hint: {hint}[/dim]"
    console.print(Panel(content, title=f"[error]{title}[/error]", padding=(1, 2)))


def print_seed_table(added: dict[str, int], totals: dict[str, int]) -> None:
    """
    Print a compact table of seeded geo-sets.

    Args:
        added: Geo-set name -> number of newly added members
        totals: Geo-set name -> number of built-in records sent
    """
    table = Table(
        show_header=True,
        header_style="bold",
        border_style="dim",
        padding=(0, 1),
    )
    table.add_column("Geo-set", style="bold")
    table.add_column("Records", justify="right")
    table.add_column("New", justify="right")

    for name, count in added.items():
        new_str = f"[success]{count}[/success]" if count else "[muted]0[/muted]"
        table.add_row(name, str(totals.get(name, 0)), new_str)

    console.print(table)

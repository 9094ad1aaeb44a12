"""Rich formatting utilities for the CLI.

Keeps all Rich rendering (tables, panels, syntax) out of the command
module; nothing here knows about persistence or merging.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from curriculum_settings.domain.models.enums import FormComplexity
from curriculum_settings.domain.rules.registry import FIELD_TIERS

console = Console()

_TIER_ICONS = {
    FormComplexity.ESSENTIAL: "⚡",
    FormComplexity.ENHANCED: "⚙️",
    FormComplexity.ADVANCED: "🔧",
}


# ---------------------------------------------------------------------------
# Success / error panels
# ---------------------------------------------------------------------------


def success_panel(message: str, title: str = "Curriculum Curator") -> None:
    """Print a green success panel."""
    console.print(Panel(message, title=title, border_style="green"))


def error_message(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]❌ {message}[/]")


def warning_message(message: str) -> None:
    """Print a yellow warning."""
    console.print(f"[bold yellow]⚠️  {message}[/]")


# ---------------------------------------------------------------------------
# JSON rendering
# ---------------------------------------------------------------------------


def json_panel(raw_json: str, title: str = "⚙️  Settings") -> None:
    """Render JSON inside a syntax-highlighted panel."""
    console.print(
        Panel(
            Syntax(raw_json, "json", theme="monokai", line_numbers=True),
            title=title,
            border_style="blue",
        )
    )


# ---------------------------------------------------------------------------
# Tier rendering
# ---------------------------------------------------------------------------


def tier_panel(tier: FormComplexity, summary: str) -> None:
    """Print the current form tier and its description."""
    console.print(
        Panel(
            f"{_TIER_ICONS[tier]} [bold]{tier.value.capitalize()}[/]\n{summary}",
            title="Form complexity",
            border_style="cyan",
        )
    )


def hidden_features_panel(features: list[str]) -> None:
    """Print the features hidden at the current tier."""
    if not features:
        console.print("[green]All features are visible.[/]")
        return
    body = "Switch to Enhanced or Advanced mode to access:\n" + "\n".join(
        f"  • {feature}" for feature in features
    )
    console.print(
        Panel(body, title=f"Hidden Features ({len(features)})", border_style="yellow")
    )


def fields_table(tier: FormComplexity, visible: dict[str, bool], active: dict[str, bool]) -> None:
    """Print every tier-gated field with its visibility at *tier*."""
    table = Table(
        title=f"🔎 Gated fields at {tier.value}",
        show_header=True,
        border_style="blue",
    )
    table.add_column("Field", style="cyan")
    table.add_column("Requires", width=10)
    table.add_column("Visible", width=8)
    table.add_column("Active", width=8)

    for field, required in FIELD_TIERS.items():
        table.add_row(
            field,
            required.value,
            "✅" if visible[field] else "—",
            "✅" if active[field] else "—",
        )

    console.print(table)

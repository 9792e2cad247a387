# ABOUTME: Rich table builders for the CLI's human-readable output
# ABOUTME: Character records, per-field error reports, update summaries and logging status

from typing import Any

from rich.box import ROUNDED, SIMPLE
from rich.console import Console
from rich.markup import escape
from rich.table import Table


def _label(value: Any) -> str:
    """Display name for enum members (``SUBMACHINE_GUN`` → ``Submachine Gun``)."""
    name = getattr(value, "name", None)
    if name is None:
        return str(value)
    return name if len(name) <= 3 else name.replace("_", " ").title()


def create_key_value_table(
    title: str,
    data: dict[str, str],
    title_style: str = "bold cyan",
    key_style: str = "bold blue",
    value_style: str = "green",
    box_style=ROUNDED,
) -> Table:
    """Create a two-column Field/Value table.

    Args:
        title: Table title with emoji/styling
        data: Dictionary of key-value pairs to display
        title_style: Style for the table title
        key_style: Style for the key column
        value_style: Style for the value column
        box_style: Border style for the table

    Returns:
        Formatted Rich table ready for printing
    """
    table = Table(
        title=f"[{title_style}]{title}[/{title_style}]",
        box=box_style,
        show_header=True,
        header_style="bold magenta",
        border_style="cyan",
        title_justify="left",
        expand=False,
    )

    table.add_column("Field", style=key_style, no_wrap=False)
    table.add_column("Value", style=value_style, no_wrap=False)

    for key, value in data.items():
        table.add_row(key, str(value))

    return table


def create_nikke_table(record: Any, title_prefix: str = "🎯") -> Table:
    """Create a table describing one character record.

    Args:
        record: ExtractedNikke or Nikke instance

    Returns:
        Key-value table with display names for every enum field
    """
    data = {
        "⭐ Rarity": _label(record.rarity),
        "💥 Burst": _label(record.burst),
        "🔥 Code": _label(record.code),
        "🔫 Weapon": _label(record.weapon_type),
        "🏷️ Weapon Name": escape(record.weapon_name) if record.weapon_name else "[dim]None[/dim]",
        "🛡️ Position": _label(record.position),
        "🏭 Manufacturer": _label(record.manufacturer),
        "👥 Squad": escape(record.squad),
    }

    image_url = getattr(record, "image_url", None)
    if image_url:
        data["🖼️ Image"] = image_url

    return create_key_value_table(
        title=f"{title_prefix} {escape(record.name)}",
        data=data,
        title_style="bold yellow",
        key_style="bold blue",
        value_style="white",
    )


def create_error_report_table(errors: dict[str, str], title: str = "❌ Extraction Failed") -> Table:
    """Create a table listing every field that could not be read."""
    table = Table(
        title=f"[bold red]{title}[/bold red]",
        box=ROUNDED,
        show_header=True,
        header_style="bold magenta",
        border_style="red",
        title_justify="left",
        row_styles=["", "dim"],
    )
    table.add_column("Field", style="cyan")
    table.add_column("Error", style="white")

    for field_name, message in errors.items():
        table.add_row(field_name, escape(message))

    return table


def create_update_summary_table(report: Any) -> Table:
    """Create the end-of-run summary for ``nikkedex update``."""
    summary_data = {
        "📋 Listed": str(report.listed),
        "💾 Already Stored": str(report.cached),
        "✅ Added": str(len(report.added)),
        "❌ Failed": str(len(report.failed)),
    }

    if report.added:
        summary_data["🆕 New Characters"] = escape(", ".join(report.added))

    if report.failed:
        summary_data["⚠️ Skipped"] = escape(", ".join(sorted(report.failed)))

    return create_key_value_table(
        title="🔄 Update Summary",
        data=summary_data,
        title_style="bold green",
        key_style="cyan",
        value_style="white",
        box_style=SIMPLE,
    )


def create_logging_status_table(status: dict[str, Any], fetch_status: dict[str, Any] | None = None) -> Table:
    """Create a logging configuration status table.

    Args:
        status: Logging status dictionary
        fetch_status: Optional fetch rate limiter status to append

    Returns:
        Styled logging configuration table
    """
    logging_data = {
        "🔧 Mode": status["mode"].title(),
        "📁 Log Directory": status["log_directory"] or "N/A (production mode)",
        "🔇 Suppressed Libraries": ", ".join(status["third_party_suppressed"]),
    }

    log_files = status["log_files"]
    for label, key in [("📝 Main Log", "main"), ("📊 JSON Log", "json"), ("🚨 Error Log", "errors")]:
        if log_files[key]:
            logging_data[label] = log_files[key]

    if fetch_status:
        rate = fetch_status["rate_limiter"]["calls_per_second"]
        logging_data["⏱️ Fetch Rate Limit"] = f"{rate:g} req/s" if rate > 0 else "disabled"

    return create_key_value_table(
        title="🔍 Logging Configuration",
        data=logging_data,
        title_style="bold green",
        key_style="blue",
        value_style="white",
    )


def print_rich_table(console: Console, table: Table) -> None:
    """Print a rich table with spacing before and after."""
    console.print()
    console.print(table)
    console.print()

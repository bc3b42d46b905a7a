"""Rich table formatter for CLI output."""

import sys
from typing import Any, Dict, Optional, TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ...provider import Provider
from ...registry import Registry


def create_console(output: Optional[TextIO] = None, no_color: bool = False) -> Console:
    """Create a Rich console instance.

    Args:
        output: Output stream (defaults to stdout)
        no_color: Disable color output

    Returns:
        Console instance
    """
    if output is None:
        output = sys.stdout

    # Let Rich use the actual terminal width to avoid truncating headers
    return Console(file=output, no_color=no_color)


def _flag(value: bool) -> Text:
    return Text("✓", style="green") if value else Text("")


def format_providers_table(registry: Registry, console: Optional[Console] = None) -> None:
    """Format providers as a Rich table.

    Args:
        registry: Registry to list
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    title = "Storage Providers"
    if registry.version:
        title = f"{title} (data {registry.version})"
    table = Table(title=title, show_header=True, header_style="bold magenta")

    table.add_column("Provider", style="cyan")
    table.add_column("Label")
    table.add_column("Default Region", style="yellow")
    table.add_column("Regions", justify="right")
    table.add_column("Path Style", justify="center")
    table.add_column("Account ID", justify="center")
    table.add_column("Custom Endpoint", justify="center")

    for provider_key, provider in registry.get_providers().items():
        table.add_row(
            provider_key,
            provider.to_dict()["label"],
            provider.default_region,
            str(len(provider.regions)),
            _flag(provider.use_path_style),
            _flag(provider.requires_account_id()),
            _flag(provider.requires_custom_endpoint()),
        )

    console.print(table)


def format_provider_table(provider: Provider, console: Optional[Console] = None) -> None:
    """Print the details of one provider followed by its regions."""
    if console is None:
        console = create_console()

    raw = provider.to_dict()
    table = Table(title=f"Provider: {provider.key}", show_header=False)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")

    table.add_row("Label", raw["label"])
    table.add_row("Supplier", raw["supplier"] or "N/A")
    table.add_row("Homepage", raw["homepage"] or "N/A")
    table.add_row("Dashboard", raw["dashboard"] or "N/A")
    table.add_row("Endpoint", raw["endpoint"] or "(custom)")
    table.add_row("Default Region", provider.default_region or "N/A")
    table.add_row("Path Style", "Yes" if provider.use_path_style else "No")
    table.add_row("Requires Account ID", "Yes" if provider.requires_account_id() else "No")
    table.add_row("Requires Custom Endpoint", "Yes" if provider.requires_custom_endpoint() else "No")

    console.print(table)
    format_regions_table(provider, console)


def format_regions_table(provider: Provider, console: Optional[Console] = None) -> None:
    """Format a provider's regions as a Rich table.

    The default region is highlighted.
    """
    if console is None:
        console = create_console()

    table = Table(title=f"Regions: {provider.key}", show_header=True, header_style="bold magenta")
    table.add_column("Continent", style="dim")
    table.add_column("Region", style="cyan")
    table.add_column("Label")
    table.add_column("Default", justify="center")

    for code, region in provider.regions.items():
        is_default = code == provider.default_region
        table.add_row(
            region.continent,
            region.to_dict()["region"],
            region.to_dict()["label"],
            _flag(is_default),
            style="bold green" if is_default else "",
        )

    console.print(table)


def format_endpoint_table(data: Dict[str, Any], console: Optional[Console] = None) -> None:
    """Print a resolved endpoint."""
    if console is None:
        console = create_console()

    console.print(f"[bold]Provider:[/bold] {data['provider']}")
    console.print(f"[bold]Region:[/bold] {data['region'] or 'N/A'}")
    console.print(f"[bold]Endpoint:[/bold] {data['endpoint']}")
    if "reachable" in data:
        status = "[green]reachable[/green]" if data["reachable"] else "[red]unreachable[/red]"
        console.print(f"[bold]Status:[/bold] {status}")


def format_data_paths_table(paths: Dict[str, Any], console: Optional[Console] = None) -> None:
    """Format data paths as a Rich table.

    Args:
        paths: Path information
        console: Rich console (will create if None)
    """
    if console is None:
        console = create_console()

    table = Table(title="Data Source Paths", show_header=True, header_style="bold magenta")

    table.add_column("File", style="cyan")
    table.add_column("Source", style="yellow")
    table.add_column("Path", style="dim")
    table.add_column("Status", justify="center")
    table.add_column("Modified", style="dim")

    for name, path_info in paths.items():
        exists = path_info.get("exists", False)
        table.add_row(
            name,
            path_info.get("source", "Unknown"),
            str(path_info.get("path", "N/A")),
            Text("✓" if exists else "✗", style="green" if exists else "red"),
            path_info.get("last_modified") or "N/A",
        )

    console.print(table)

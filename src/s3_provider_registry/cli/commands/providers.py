"""Provider inspection commands for the s3pr CLI."""

import click

from ..formatters import (
    create_console,
    format_provider_json,
    format_provider_table,
    format_providers_json,
    format_providers_table,
)
from ..utils import handle_error, load_registry, output_data


@click.group()
def providers() -> None:
    """List and inspect storage providers."""
    pass


@providers.command(name="list")
@click.pass_context
def list_providers(ctx: click.Context) -> None:
    """List all registered providers."""
    registry = load_registry(ctx.obj)
    try:
        format_type = ctx.obj["format"]
        if format_type == "table":
            console = create_console(no_color=ctx.obj["no_color"])
            format_providers_table(registry, console)
        else:
            output_data(format_providers_json(registry), format_type)
    except Exception as e:
        handle_error(e)


@providers.command()
@click.argument("provider_key")
@click.pass_context
def show(ctx: click.Context, provider_key: str) -> None:
    """Show the details and regions of PROVIDER_KEY."""
    registry = load_registry(ctx.obj)
    try:
        provider = registry.get_provider(provider_key)

        format_type = ctx.obj["format"]
        if format_type == "table":
            console = create_console(no_color=ctx.obj["no_color"])
            format_provider_table(provider, console)
        else:
            output_data(format_provider_json(provider), format_type)
    except Exception as e:
        handle_error(e)


@providers.command()
@click.pass_context
def default(ctx: click.Context) -> None:
    """Show the provider preselected in option lists (the first key)."""
    registry = load_registry(ctx.obj)
    try:
        provider_key = registry.first_provider_key() or ""
        default_region = registry.default_region(provider_key)

        format_type = ctx.obj["format"]
        if format_type == "table":
            console = create_console(no_color=ctx.obj["no_color"])
            console.print(f"[bold]Default Provider:[/bold] {provider_key}")
            console.print(f"[bold]Default Region:[/bold] {default_region or 'N/A'}")
        else:
            output_data({"provider": provider_key, "default_region": default_region}, format_type)
    except Exception as e:
        handle_error(e)

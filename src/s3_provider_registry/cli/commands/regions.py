"""Region inspection commands for the s3pr CLI."""

import click

from ..formatters import create_console, format_regions_json, format_regions_table
from ..utils import handle_error, load_registry, output_data


@click.group()
def regions() -> None:
    """List the regions offered by providers."""
    pass


@regions.command(name="list")
@click.argument("provider_key")
@click.option("--group", is_flag=True, help="Group regions by continent (json/yaml output).")
@click.pass_context
def list_regions(ctx: click.Context, provider_key: str, group: bool) -> None:
    """List the regions of PROVIDER_KEY."""
    registry = load_registry(ctx.obj)
    try:
        provider = registry.get_provider(provider_key)

        format_type = ctx.obj["format"]
        if format_type == "table":
            # The table always shows the continent column
            console = create_console(no_color=ctx.obj["no_color"])
            format_regions_table(provider, console)
        else:
            output_data(format_regions_json(provider, group_by_continent=group), format_type)
    except Exception as e:
        handle_error(e)

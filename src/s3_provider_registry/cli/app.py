"""Main CLI application for the S3 Provider Registry."""

from typing import Optional

import click
import rich_click as rich_click

from .utils import configure_logging, resolve_format

# Configure rich-click
rich_click.rich_click.USE_RICH_MARKUP = True
rich_click.rich_click.USE_MARKDOWN = True
rich_click.rich_click.SHOW_ARGUMENTS = True
rich_click.rich_click.GROUP_ARGUMENTS_OPTIONS = True


@click.group(cls=rich_click.RichGroup, invoke_without_command=True)
@click.option(
    "--data",
    "data_path",
    type=click.Path(dir_okay=False),
    help="Providers document to use instead of the configured one.",
)
@click.option(
    "--format",
    type=click.Choice(["table", "json", "yaml"], case_sensitive=False),
    help="Output format. Defaults to 'table' for TTY, 'json' for non-TTY.",
)
@click.option("--verbose", "-v", count=True, help="Increase verbosity (can be used multiple times).")
@click.option("--quiet", "-q", count=True, help="Decrease verbosity (can be used multiple times).")
@click.option("--debug", is_flag=True, help="Enable debug-level logging.")
@click.option("--no-color", is_flag=True, help="Disable color output.")
@click.option("--version", is_flag=True, is_eager=True, help="Print CLI and library version information.")
@click.pass_context
def app(
    ctx: click.Context,
    data_path: Optional[str] = None,
    format: Optional[str] = None,
    verbose: int = 0,
    quiet: int = 0,
    debug: bool = False,
    no_color: bool = False,
    version: bool = False,
) -> None:
    """S3 Provider Registry CLI.

    Inspect S3-compatible storage providers, their regions and endpoints.

    Examples:
      # List all providers
      s3pr providers list

      # Resolve an endpoint
      s3pr endpoint aws --region eu-west-1

      # Show data source paths
      s3pr data paths
    """
    if version:
        try:
            from .. import __version__

            library_version = __version__
        except ImportError:
            library_version = "unknown"

        click.echo(f"s3pr version: {library_version}")
        ctx.exit()

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit()

    # Store global options in context for subcommands
    ctx.ensure_object(dict)

    # Configure logging level based on verbosity
    log_level = "WARNING"
    if debug:
        log_level = "DEBUG"
    elif verbose > quiet:
        if verbose >= 2:
            log_level = "DEBUG"
        elif verbose >= 1:
            log_level = "INFO"
    elif quiet > verbose:
        log_level = "ERROR"

    configure_logging(log_level, no_color)

    ctx.obj.update(
        {
            "data_path": data_path,
            "format": resolve_format(format),
            "format_explicit": format is not None,
            "verbose": verbose,
            "quiet": quiet,
            "debug": debug,
            "no_color": no_color,
            "log_level": log_level,
        }
    )


# Import and register subcommands after the group is defined
from .commands import data, endpoint, providers, regions  # noqa: E402

app.add_command(providers.providers)
app.add_command(regions.regions)
app.add_command(endpoint.endpoint)
app.add_command(data.data)


if __name__ == "__main__":
    app()

"""Data inspection commands for the s3pr CLI."""

import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import click

from ...config_paths import (
    ENV_PROVIDERS_PATH,
    PROVIDERS_FILENAME,
    copy_default_to_user_config,
    get_bundled_providers_path,
    get_providers_path,
    get_providers_path_source,
    get_user_config_dir,
)
from ...loader import Loader
from ..formatters import (
    create_console,
    format_data_paths_json,
    format_data_paths_table,
    format_json,
    format_yaml,
)
from ..utils import ExitCode, handle_error, load_registry, output_data, validate_format_support


def _file_info(path: Optional[Path], source: str) -> Dict[str, Any]:
    """Describe one candidate providers document."""
    info: Dict[str, Any] = {
        "path": str(path) if path else "N/A",
        "source": source,
        "exists": bool(path and path.is_file()),
        "last_modified": None,
        "file_size": None,
    }
    if path and path.is_file():
        try:
            stat = path.stat()
            info["file_size"] = stat.st_size
            info["last_modified"] = datetime.fromtimestamp(stat.st_mtime).strftime("%Y-%m-%d %H:%M:%S")
        except OSError:
            # If we can't read file info, leave the fields as None
            pass
    return info


@click.group()
def data() -> None:
    """Inspect providers documents and configuration."""
    pass


@data.command()
@click.pass_context
def paths(ctx: click.Context) -> None:
    """Show candidate providers documents and which one is active."""
    try:
        data_path = ctx.obj.get("data_path")
        active = Path(data_path) if data_path else get_providers_path()

        env_value = os.environ.get(ENV_PROVIDERS_PATH)
        candidates: Dict[str, Dict[str, Any]] = {
            "active": _file_info(active, "--data option" if data_path else get_providers_path_source(active)),
            "environment": _file_info(Path(env_value) if env_value else None, ENV_PROVIDERS_PATH),
            "user_config": _file_info(get_user_config_dir() / PROVIDERS_FILENAME, "User config directory"),
            "bundled": _file_info(get_bundled_providers_path(), "Bundled package data"),
        }

        format_type = ctx.obj["format"]
        if format_type == "table":
            console = create_console(no_color=ctx.obj["no_color"])
            format_data_paths_table(candidates, console)
        else:
            output_data(format_data_paths_json(candidates), format_type)

    except Exception as e:
        handle_error(e, ExitCode.DATA_SOURCE_ERROR)


@data.command()
@click.option("--path", "path", type=click.Path(dir_okay=False), help="Document to checksum instead of the active one.")
@click.option("--expect", default=None, help="Expected SHA-256; exit non-zero on mismatch.")
@click.pass_context
def checksum(ctx: click.Context, path: Optional[str], expect: Optional[str]) -> None:
    """Print the SHA-256 checksum of a providers document."""
    try:
        if path:
            loader = Loader()
            digest = loader.get_checksum(path)
            target = Path(path)
        else:
            registry = load_registry(ctx.obj)
            digest = registry.checksum()
            target = registry.source_path or get_bundled_providers_path()
    except Exception as e:
        handle_error(e, ExitCode.DATA_SOURCE_ERROR)

    result: Dict[str, Any] = {"path": str(target), "sha256": digest}
    if expect is not None:
        result["matches"] = digest == expect.strip().lower()

    format_type = ctx.obj["format"]
    if format_type == "table":
        click.echo(f"{digest}  {target}")
        if expect is not None:
            click.echo("OK" if result["matches"] else "MISMATCH")
    else:
        output_data(result, format_type)

    if expect is not None and not result["matches"]:
        ctx.exit(ExitCode.DATA_SOURCE_ERROR)


@data.command()
@click.option("--output", "-o", type=click.Path(), help="Write output to file instead of stdout.")
@click.pass_context
def dump(ctx: click.Context, output: Optional[str] = None) -> None:
    """Dump the active registry as a providers document.

    The dump is re-loadable with --data.
    """
    registry = load_registry(ctx.obj)
    try:
        # Validate format support for data dump (no table rendering)
        format_type = validate_format_support(ctx.obj["format"], ["json", "yaml"], "data dump", ctx.obj)
        document = registry.dump()

        if output:
            with open(output, "w", encoding="utf-8") as output_file:
                if format_type == "yaml":
                    format_yaml(document, output_file, sort_keys=False)
                else:
                    format_json(document, output_file, sort_keys=False)
            click.echo(f"Wrote {output}", err=True)
        else:
            output_data(document, format_type, sort_keys=False)

    except Exception as e:
        handle_error(e)


@data.command()
@click.option("--force", is_flag=True, help="Overwrite an existing user copy.")
def init(force: bool) -> None:
    """Copy the bundled providers document to the user config directory."""
    try:
        written = copy_default_to_user_config(overwrite=force)
    except OSError as e:
        handle_error(e, ExitCode.DATA_SOURCE_ERROR)

    if written is None:
        click.echo(
            f"{get_user_config_dir() / PROVIDERS_FILENAME} already exists; use --force to overwrite.",
            err=True,
        )
        return
    click.echo(f"Created {written}")

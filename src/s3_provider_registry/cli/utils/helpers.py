"""Helper functions for CLI operations."""

import logging
import sys
from typing import Any, Dict, List, NoReturn, Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from ...config_paths import get_providers_path
from ...errors import (
    ConfigurationError,
    EndpointResolutionError,
    InputError,
    InvalidProviderDefinitionError,
    UnknownProviderError,
    UnknownRegionError,
)
from ...logging import ROOT_LOGGER_NAME
from ...registry import Registry
from ..formatters import format_json, format_yaml


class ExitCode:
    """Standard exit codes for the CLI."""

    SUCCESS = 0
    GENERIC_ERROR = 1
    INVALID_USAGE = 2
    PROVIDER_NOT_FOUND = 3
    DATA_SOURCE_ERROR = 4
    REGION_NOT_FOUND = 5
    MISSING_PARAMETER = 6


def resolve_format(cli_format: Optional[str] = None, default_tty: str = "table", default_non_tty: str = "json") -> str:
    """Resolve output format with TTY detection.

    Args:
        cli_format: Format specified via CLI flag
        default_tty: Default format for TTY output
        default_non_tty: Default format for non-TTY output

    Returns:
        Resolved format name
    """
    if cli_format:
        return cli_format.lower()

    if sys.stdout.isatty():
        return default_tty
    return default_non_tty


def exit_code_for(error: Exception) -> int:
    """Map a registry error to its CLI exit code."""
    if isinstance(error, UnknownProviderError):
        return ExitCode.PROVIDER_NOT_FOUND
    if isinstance(error, UnknownRegionError):
        return ExitCode.REGION_NOT_FOUND
    if isinstance(error, EndpointResolutionError):
        return ExitCode.MISSING_PARAMETER
    if isinstance(error, (ConfigurationError, InvalidProviderDefinitionError)):
        return ExitCode.DATA_SOURCE_ERROR
    if isinstance(error, (InputError, click.BadParameter)):
        return ExitCode.INVALID_USAGE
    return ExitCode.GENERIC_ERROR


def handle_error(error: Exception, exit_code: Optional[int] = None) -> NoReturn:
    """Handle CLI errors with consistent formatting.

    Args:
        error: Exception to handle
        exit_code: Exit code to use; derived from the error type when omitted
    """
    click.echo(f"Error: {str(error)}", err=True)
    sys.exit(exit_code if exit_code is not None else exit_code_for(error))


def configure_logging(level: str, no_color: bool = False) -> None:
    """Send package log records to stderr through a Rich handler."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        console = Console(stderr=True, no_color=no_color)
        logger.addHandler(RichHandler(console=console, show_path=False))


def load_registry(ctx_obj: Dict[str, Any]) -> Registry:
    """Build (once per invocation) the registry selected by the global options.

    Exits with ``DATA_SOURCE_ERROR`` when the providers document is unusable.
    """
    registry = ctx_obj.get("registry")
    if registry is None:
        path = ctx_obj.get("data_path") or get_providers_path()
        try:
            registry = Registry(path)
        except (ConfigurationError, InvalidProviderDefinitionError, InputError) as e:
            handle_error(e, ExitCode.DATA_SOURCE_ERROR)
        ctx_obj["registry"] = registry
    return registry


def validate_format_support(
    format_type: str,
    supported_formats: List[str],
    command_name: str,
    ctx_obj: Dict[str, Any],
) -> str:
    """Validate format support for a command with consistent fallback behavior.

    Args:
        format_type: The requested format
        supported_formats: List of supported formats for this command
        command_name: Name of the command for error messages
        ctx_obj: Click context object containing verbosity settings

    Returns:
        The validated format (may be changed from input for fallback)

    Raises:
        click.BadParameter: For unsupported formats that can't fall back
    """
    if format_type in supported_formats:
        return format_type

    if format_type == "table":
        fallback_format = "json" if "json" in supported_formats else supported_formats[0]
        if ctx_obj.get("verbose", 0) > 0:
            click.echo(
                f"Note: {command_name} doesn't support '{format_type}' format, using {fallback_format} instead.",
                err=True,
            )
        return fallback_format

    supported_list = "', '".join(supported_formats)
    raise click.BadParameter(f"Format '{format_type}' is not supported for {command_name}. Use '{supported_list}'.")


def output_data(data: Any, format_type: str, sort_keys: bool = True) -> None:
    """Write structured data in a machine-readable format (json or yaml)."""
    if format_type == "yaml":
        format_yaml(data, sort_keys=sort_keys)
    else:
        format_json(data, sort_keys=sort_keys)

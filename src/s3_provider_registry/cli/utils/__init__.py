"""CLI utilities package."""

from .helpers import (
    ExitCode,
    configure_logging,
    exit_code_for,
    handle_error,
    load_registry,
    output_data,
    resolve_format,
    validate_format_support,
)

__all__ = [
    "ExitCode",
    "configure_logging",
    "exit_code_for",
    "handle_error",
    "load_registry",
    "output_data",
    "resolve_format",
    "validate_format_support",
]

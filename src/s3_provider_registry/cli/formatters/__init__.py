"""CLI formatters package."""

from .json import (
    format_data_paths_json,
    format_endpoint_json,
    format_json,
    format_provider_json,
    format_providers_json,
    format_regions_json,
)
from .table import (
    create_console,
    format_data_paths_table,
    format_endpoint_table,
    format_provider_table,
    format_providers_table,
    format_regions_table,
)
from .yaml import format_yaml

__all__ = [
    "format_json",
    "format_providers_json",
    "format_provider_json",
    "format_regions_json",
    "format_endpoint_json",
    "format_data_paths_json",
    "create_console",
    "format_providers_table",
    "format_provider_table",
    "format_regions_table",
    "format_endpoint_table",
    "format_data_paths_table",
    "format_yaml",
]

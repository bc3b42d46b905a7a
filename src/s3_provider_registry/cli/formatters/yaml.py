"""YAML output formatter for CLI."""

import sys
from typing import Any, Optional, TextIO

import yaml


def format_yaml(data: Any, output: Optional[TextIO] = None, sort_keys: bool = True) -> None:
    """Format data as YAML and write to output.

    Args:
        data: Data to format (plain dicts, lists and scalars)
        output: Output stream (defaults to stdout)
        sort_keys: Sort mapping keys; providers documents keep their own order
    """
    if output is None:
        output = sys.stdout

    yaml.safe_dump(data, output, default_flow_style=False, sort_keys=sort_keys, allow_unicode=True)

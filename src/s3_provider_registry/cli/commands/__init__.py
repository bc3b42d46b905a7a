"""CLI commands package."""

# Import all command modules to make them available
from . import data, endpoint, providers, regions

__all__ = ["data", "endpoint", "providers", "regions"]

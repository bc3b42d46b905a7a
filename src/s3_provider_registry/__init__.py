"""Registry of S3-compatible object storage providers.

This package provides a static registry of storage provider metadata
(endpoint templates, regions, path-style flags) and resolves a provider's
endpoint from a provider key, region key and optional account id.
"""

# Version of the package
try:
    from importlib.metadata import version as _version

    __version__ = _version("s3-provider-registry")
except ImportError:
    raise ImportError(
        "Failed to determine package version. This package requires Python 3.8+ "
        "where importlib.metadata is available, or must be installed as a package."
    )

# Import main components for easier access
from .errors import (
    ConfigurationError,
    DataFileNotFoundError,
    EmptyInputError,
    EmptyProviderTableError,
    EndpointResolutionError,
    InvalidInputError,
    InvalidProviderDefinitionError,
    MalformedSourceError,
    MissingAccountIdError,
    MissingCustomEndpointError,
    ProviderRegistryError,
    SettingsError,
    UnknownProviderError,
    UnknownRegionError,
)
from .loader import Loader
from .provider import Provider
from .region import Region
from .registry import Registry, get_registry
from .settings import SignerSettings

# Define public API
__all__ = [
    # Core registry
    "Registry",
    "Provider",
    "Region",
    "Loader",
    "SignerSettings",
    "get_registry",
    # Errors
    "ProviderRegistryError",
    "ConfigurationError",
    "DataFileNotFoundError",
    "MalformedSourceError",
    "InvalidInputError",
    "EmptyInputError",
    "EmptyProviderTableError",
    "InvalidProviderDefinitionError",
    "UnknownProviderError",
    "UnknownRegionError",
    "EndpointResolutionError",
    "MissingAccountIdError",
    "MissingCustomEndpointError",
    "SettingsError",
]

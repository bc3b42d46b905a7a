"""Core registry functionality for S3-compatible storage providers.

This module provides the Registry class, the keyed collection of
:class:`~s3_provider_registry.provider.Provider` objects built from a
providers document or an in-memory provider table.

Typical usage:

    from s3_provider_registry import Registry

    registry = Registry()  # bundled providers document
    registry.get_endpoint("aws", "eu-west-1")  # 's3.eu-west-1.amazonaws.com'

A registry is immutable once constructed; build a new one when the source
changes.
"""

import threading
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Union

from .config_paths import get_providers_path
from .errors import (
    EmptyInputError,
    EmptyProviderTableError,
    InvalidInputError,
    UnknownProviderError,
)
from .loader import Loader
from .logging import LogEvent, get_logger, log_info
from .provider import Provider
from .region import Region

# Create module logger
logger = get_logger("registry")

ProviderTable = Mapping[str, Mapping[str, Any]]
RegistrySource = Union[str, Path, ProviderTable, None]
DataFilter = Callable[[Dict[str, Any], str], Mapping[str, Any]]


class Registry:
    """Registry of storage providers, their regions and endpoints."""

    _default_instance: Optional["Registry"] = None
    _instance_lock = threading.RLock()

    @classmethod
    def get_default(cls) -> "Registry":
        """Get the default registry instance.

        The instance is built from the configured providers document:
        ``S3PR_PROVIDERS_PATH``, then the user config copy, then the bundled
        document.

        Returns:
            The shared Registry instance
        """
        with cls._instance_lock:
            if cls._default_instance is None:
                cls._default_instance = cls(get_providers_path())
            return cls._default_instance

    @staticmethod
    def cleanup() -> None:
        """Drop the shared default instance."""
        with Registry._instance_lock:
            Registry._default_instance = None

    def __init__(
        self,
        source: RegistrySource = None,
        context: str = "",
        data_filter: Optional[DataFilter] = None,
        loader: Optional[Loader] = None,
    ):
        """Build a registry.

        Args:
            source: Path to a providers document, a provider table mapping
                provider keys to raw provider records, or None for the
                bundled document
            context: Free-text description of the caller, passed to
                ``data_filter``
            data_filter: Optional ``(raw_table, context) -> raw_table``
                transformation applied before providers are parsed
            loader: Loader used for documents and checksums

        Raises:
            EmptyInputError: If ``source`` is an empty string or sequence
            EmptyProviderTableError: If the provider table (after filtering) is empty
            InvalidInputError: If ``source`` has an unsupported type or the
                filter returns something other than a mapping
            ConfigurationError: If the document cannot be loaded
            InvalidProviderDefinitionError: If any provider record is invalid
        """
        self._loader = loader or Loader()
        self.context = context
        self.version: Optional[str] = None
        self.source_path: Optional[Path] = None

        raw_table = self._resolve_source(source)

        if data_filter is not None:
            filtered = data_filter(raw_table, context)
            if not isinstance(filtered, Mapping):
                raise InvalidInputError(
                    f"Provider data filter must return a mapping, got {type(filtered).__name__}",
                    value=filtered,
                )
            raw_table = dict(filtered)
            log_info(LogEvent.REGISTRY, "Applied provider data filter", context=context, providers=len(raw_table))

        providers: Dict[str, Provider] = {}
        for key, record in raw_table.items():
            provider = Provider(key, record)
            providers[provider.key] = provider

        if not providers:
            raise EmptyProviderTableError("The provider table is empty. Please provide at least one provider.")

        self._providers: Dict[str, Provider] = dict(sorted(providers.items()))

        log_info(
            LogEvent.REGISTRY,
            "Registry built",
            providers=len(self._providers),
            source=str(self.source_path) if self.source_path else "table",
            context=context,
        )

    def _resolve_source(self, source: RegistrySource) -> Dict[str, Any]:
        if source is None:
            table = self._loader.load()
            self.version = self._loader.version
            self.source_path = self._loader.path
            return table

        if isinstance(source, (str, Path)):
            if not str(source).strip():
                raise EmptyInputError(
                    "Input is empty. It should either be a valid path to a providers document, "
                    "a table of provider data, or None to load the bundled document."
                )
            table = self._loader.load(source)
            self.version = self._loader.version
            self.source_path = self._loader.path
            return table

        if isinstance(source, Mapping):
            if not source:
                raise EmptyProviderTableError(
                    "The provided table is empty. Please provide a valid table of provider data."
                )
            return dict(source)

        if isinstance(source, (list, tuple)) and not source:
            raise EmptyInputError(
                "Input is empty. It should either be a valid path to a providers document, "
                "a table of provider data, or None to load the bundled document."
            )

        raise InvalidInputError(
            f"Unsupported registry source of type {type(source).__name__}; "
            "expected a path, a provider table or None",
            value=source,
        )

    def __len__(self) -> int:
        return len(self._providers)

    def __contains__(self, provider_key: object) -> bool:
        return provider_key in self._providers

    def __iter__(self) -> Iterator[str]:
        return iter(self._providers)

    # Providers

    @property
    def providers(self) -> Dict[str, Provider]:
        """Get a read-only view of registered providers, sorted by key."""
        return dict(self._providers)

    def get_providers(self) -> Dict[str, Provider]:
        """Return all providers keyed by provider key."""
        return self.providers

    def get_provider(self, provider_key: str) -> Provider:
        """Get a provider by key.

        Raises:
            UnknownProviderError: If the provider does not exist
        """
        try:
            return self._providers[provider_key]
        except KeyError:
            raise UnknownProviderError(
                f"The provider '{provider_key}' does not exist",
                provider=provider_key,
                available_providers=self._providers.keys(),
            ) from None

    def provider_exists(self, provider_key: str) -> bool:
        """Check whether a provider is registered."""
        return provider_key in self._providers

    def first_provider_key(self) -> Optional[str]:
        """Return the lexicographically smallest provider key."""
        return next(iter(self._providers), None)

    def provider_options(self, empty_label: str = "") -> Dict[str, str]:
        """Build a ``key -> label`` mapping for option lists.

        Args:
            empty_label: Label of a leading ``""`` option; omitted when empty
        """
        options: Dict[str, str] = {}
        if empty_label:
            options[""] = empty_label
        for provider_key, provider in self._providers.items():
            options.setdefault(provider_key, provider.label)
        return options

    def provider_continents(self, provider_key: str) -> List[str]:
        """Return the continents a provider operates in."""
        return self.get_provider(provider_key).list_continents()

    def requires_account_id(self, provider_key: str) -> bool:
        """Check whether a provider's endpoint needs an account id."""
        return self.get_provider(provider_key).requires_account_id()

    def uses_path_style(self, provider_key: str) -> bool:
        """Check whether a provider uses path-style bucket addressing."""
        return self.get_provider(provider_key).use_path_style

    # Regions

    def get_regions(self, provider_key: str) -> Dict[str, Region]:
        """Return a provider's regions keyed by code."""
        return self.get_provider(provider_key).regions

    def get_region(self, provider_key: str, region_code: str) -> Region:
        """Get one region of a provider.

        Raises:
            UnknownProviderError: If the provider does not exist
            UnknownRegionError: If the provider does not offer the region
        """
        return self.get_provider(provider_key).get_region(region_code)

    def region_exists(self, provider_key: str, region_code: str) -> bool:
        """Check whether a provider offers a region."""
        return self.get_provider(provider_key).region_exists(region_code)

    def region_options(
        self, provider_key: str, empty_label: str = "", group_by_continent: bool = False
    ) -> Dict[str, Any]:
        """Build region options for a provider, see :meth:`Provider.region_options`."""
        return self.get_provider(provider_key).region_options(empty_label, group_by_continent)

    def default_region(self, provider_key: str) -> str:
        """Return a provider's default region key."""
        return self.get_provider(provider_key).default_region

    def first_provider_regions(self) -> Dict[str, Region]:
        """Return the regions of the first provider."""
        return self.get_regions(self._first_key())

    def first_provider_region_options(self, empty_label: str = "", group_by_continent: bool = False) -> Dict[str, Any]:
        """Build region options for the first provider."""
        return self.region_options(self._first_key(), empty_label, group_by_continent)

    def _first_key(self) -> str:
        # Construction guarantees at least one provider.
        return next(iter(self._providers))

    # Endpoints

    def get_endpoint(
        self,
        provider_key: str,
        region_key: str = "",
        account_id: str = "",
        custom_endpoint: Optional[str] = None,
    ) -> str:
        """Resolve a provider's endpoint, see :meth:`Provider.resolve_endpoint`.

        Raises:
            UnknownProviderError: If the provider does not exist
            MissingCustomEndpointError: Custom-endpoint provider without a custom endpoint
            MissingAccountIdError: Template needs an account id and none was given
            UnknownRegionError: The region is not offered and no custom endpoint was given
        """
        return self.get_provider(provider_key).resolve_endpoint(region_key, account_id, custom_endpoint)

    # Data

    def checksum(self, path: Union[str, Path, None] = None) -> str:
        """Return the SHA-256 checksum of a providers document.

        Args:
            path: Document path; defaults to the document this registry was
                loaded from, or the bundled document for table-built registries

        Raises:
            DataFileNotFoundError: If the file does not exist
        """
        return self._loader.get_checksum(path or self.source_path)

    def to_table(self) -> Dict[str, Dict[str, Any]]:
        """Export the providers as a table accepted by :class:`Registry`."""
        return {provider_key: provider.to_dict() for provider_key, provider in self._providers.items()}

    def dump(self) -> Dict[str, Any]:
        """Export the registry as a providers document."""
        return {"version": self.version or "1.0.0", "providers": self.to_table()}


def get_registry() -> Registry:
    """Get the shared registry built from the configured providers document.

    Returns:
        Registry: The shared registry instance
    """
    return Registry.get_default()

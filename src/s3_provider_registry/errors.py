"""Error types for the S3 provider registry.

This module defines the error types raised by the registry, its providers
and the loader when input is misused, data is malformed or a lookup fails.
"""

from typing import Any, Iterable, List, Optional


class ProviderRegistryError(Exception):
    """Base class for all registry-related errors.

    This is the parent class for all registry-specific exceptions.
    """

    def __init__(self, message: str) -> None:
        """Initialize registry error.

        Args:
            message: Error message
        """
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        """Return string representation of the error."""
        return self.message


class InputError(ProviderRegistryError):
    """Base class for construction-time argument misuse."""

    pass


class InvalidInputError(InputError):
    """Raised when the registry source is neither a path, a table nor None.

    Examples:
        >>> try:
        ...     Registry(42)
        ... except InvalidInputError as e:
        ...     print(f"Unsupported source: {e.value!r}")
    """

    def __init__(self, message: str, value: Any = None) -> None:
        """Initialize invalid input error.

        Args:
            message: Error message
            value: The rejected input value
        """
        super().__init__(message)
        self.value = value


class EmptyInputError(InputError):
    """Raised when an explicit but empty source is supplied."""

    pass


class EmptyProviderTableError(EmptyInputError):
    """Raised when a structured provider table is supplied but contains no providers."""

    pass


class ConfigurationError(ProviderRegistryError):
    """Base class for data-source errors.

    This is raised for errors related to loading or parsing a providers document.
    """

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        """Initialize configuration error.

        Args:
            message: Error message
            path: Optional path to the data file that caused the error
        """
        super().__init__(message)
        self.path = path


class DataFileNotFoundError(ConfigurationError):
    """Raised when a providers document does not exist.

    Examples:
        >>> try:
        ...     Loader().load("missing.json")
        ... except DataFileNotFoundError as e:
        ...     print(f"Data file not found: {e.path}")
    """

    pass


class MalformedSourceError(ConfigurationError):
    """Raised when a providers document cannot be parsed or lacks required keys."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        expected_type: str = "dict",
    ) -> None:
        """Initialize malformed source error.

        Args:
            message: Error message
            path: Optional path to the data file
            expected_type: Expected type of the offending structure
        """
        super().__init__(message, path)
        self.expected_type = expected_type


class InvalidProviderDefinitionError(ProviderRegistryError):
    """Raised when a provider or region record is missing a required field.

    Examples:
        >>> try:
        ...     Provider("aws", {"regions": {}})
        ... except InvalidProviderDefinitionError as e:
        ...     print(f"{e.provider}: missing {e.field}")
    """

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        field: Optional[str] = None,
    ) -> None:
        """Initialize invalid provider definition error.

        Args:
            message: Error message
            provider: Key of the provider being built (if known)
            field: Name of the missing or invalid field
        """
        super().__init__(message)
        self.provider = provider
        self.field = field


class UnknownProviderError(ProviderRegistryError):
    """Raised when a provider key is not present in the registry.

    Examples:
        >>> try:
        ...     registry.get_provider("no-such-provider")
        ... except UnknownProviderError as e:
        ...     print(f"Provider {e.provider} is not registered")
    """

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        available_providers: Optional[Iterable[str]] = None,
    ) -> None:
        """Initialize unknown provider error.

        Args:
            message: Error message
            provider: The requested provider key
            available_providers: Keys that are registered (optional)
        """
        super().__init__(message)
        self.provider = provider
        self.available_providers: Optional[List[str]] = (
            list(available_providers) if available_providers is not None else None
        )


class UnknownRegionError(ProviderRegistryError):
    """Raised when a region code is not offered by a provider.

    Examples:
        >>> try:
        ...     registry.get_endpoint("aws", "mars-1")
        ... except UnknownRegionError as e:
        ...     print(f"{e.region} is not a region of {e.provider}")
    """

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        region: Optional[str] = None,
        available_regions: Optional[Iterable[str]] = None,
    ) -> None:
        """Initialize unknown region error.

        Args:
            message: Error message
            provider: Key of the provider that was queried
            region: The requested region code
            available_regions: Region codes offered by the provider (optional)
        """
        super().__init__(message)
        self.provider = provider
        self.region = region
        self.available_regions: Optional[List[str]] = (
            list(available_regions) if available_regions is not None else None
        )


class EndpointResolutionError(ProviderRegistryError):
    """Base class for missing call-time parameters during endpoint resolution."""

    def __init__(self, message: str, provider: Optional[str] = None) -> None:
        """Initialize endpoint resolution error.

        Args:
            message: Error message
            provider: Key of the provider whose endpoint was requested
        """
        super().__init__(message)
        self.provider = provider


class MissingAccountIdError(EndpointResolutionError):
    """Raised when a provider's endpoint template needs an account id and none was given."""

    pass


class MissingCustomEndpointError(EndpointResolutionError):
    """Raised when a custom-endpoint provider is resolved without a custom endpoint."""

    pass


class SettingsError(ProviderRegistryError):
    """Raised when signer settings fail validation.

    Examples:
        >>> try:
        ...     SignerSettings.from_mapping({"provider": "aws"})
        ... except SettingsError as e:
        ...     print(f"Invalid setting {e.field}: {e}")
    """

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        """Initialize settings error.

        Args:
            message: Error message
            field: Name of the offending setting
        """
        super().__init__(message)
        self.field = field

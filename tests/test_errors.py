"""Tests for error classes."""

import pytest

from s3_provider_registry.errors import (
    ConfigurationError,
    DataFileNotFoundError,
    EmptyInputError,
    EmptyProviderTableError,
    EndpointResolutionError,
    InputError,
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


class TestErrorClasses:
    """Tests for all error classes."""

    def test_provider_registry_error(self) -> None:
        """Test ProviderRegistryError base class."""
        error = ProviderRegistryError("Base error message")
        assert str(error) == "Base error message"
        assert error.message == "Base error message"

    def test_input_errors(self) -> None:
        """Test the construction-time input errors."""
        error = InvalidInputError("Unsupported source", value=42)
        assert error.value == 42
        assert isinstance(error, InputError)

        empty_table = EmptyProviderTableError("No providers")
        assert isinstance(empty_table, EmptyInputError)
        assert isinstance(empty_table, InputError)
        assert isinstance(empty_table, ProviderRegistryError)

    def test_configuration_errors(self) -> None:
        """Test data-source errors carry the path."""
        error = DataFileNotFoundError("Missing", path="/tmp/providers.json")
        assert error.path == "/tmp/providers.json"
        assert isinstance(error, ConfigurationError)

        malformed = MalformedSourceError("No version", path="/tmp/providers.json", expected_type="str")
        assert malformed.expected_type == "str"
        assert MalformedSourceError("Bad").expected_type == "dict"
        assert MalformedSourceError("Bad").path is None

    def test_invalid_provider_definition_error(self) -> None:
        """Test InvalidProviderDefinitionError."""
        error = InvalidProviderDefinitionError("Missing label", provider="aws", field="label")
        assert error.provider == "aws"
        assert error.field == "label"

    def test_unknown_provider_error(self) -> None:
        """Test UnknownProviderError copies the available keys."""
        error = UnknownProviderError("Unknown", provider="nope", available_providers=iter(["aws", "linode"]))
        assert error.provider == "nope"
        assert error.available_providers == ["aws", "linode"]
        assert UnknownProviderError("Unknown").available_providers is None

    def test_unknown_region_error(self) -> None:
        """Test UnknownRegionError."""
        error = UnknownRegionError("Unknown", provider="aws", region="mars-1", available_regions={"us-east-1": 1})
        assert error.provider == "aws"
        assert error.region == "mars-1"
        assert error.available_regions == ["us-east-1"]

    @pytest.mark.parametrize("error_class", [MissingAccountIdError, MissingCustomEndpointError])
    def test_endpoint_resolution_errors(self, error_class: type) -> None:
        """Test the missing-parameter errors."""
        error = error_class("Missing parameter", provider="cloudflare")
        assert error.provider == "cloudflare"
        assert isinstance(error, EndpointResolutionError)
        assert isinstance(error, ProviderRegistryError)

    def test_settings_error(self) -> None:
        """Test SettingsError."""
        error = SettingsError("Invalid Duration specified", field="duration")
        assert error.field == "duration"
        assert str(error) == "Invalid Duration specified"

    def test_catch_all(self) -> None:
        """All registry errors share one base class."""
        with pytest.raises(ProviderRegistryError):
            raise UnknownRegionError("Unknown region")

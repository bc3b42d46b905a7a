"""Tests for the provider registry."""

import json
from pathlib import Path
from typing import Any, Dict, Generator, Mapping

import pytest

from s3_provider_registry import Registry, get_registry
from s3_provider_registry.config_paths import ENV_PROVIDERS_PATH, get_bundled_providers_path
from s3_provider_registry.errors import (
    DataFileNotFoundError,
    EmptyInputError,
    EmptyProviderTableError,
    InputError,
    InvalidInputError,
    InvalidProviderDefinitionError,
    MissingAccountIdError,
    MissingCustomEndpointError,
    UnknownProviderError,
    UnknownRegionError,
)
from s3_provider_registry.loader import Loader


def _provider(label: str, endpoint: str, regions: Dict[str, Any], default_region: str, **extra: Any) -> Dict[str, Any]:
    record = {
        "label": label,
        "endpoint": endpoint,
        "defaultRegion": default_region,
        "usePathStyle": False,
        "regions": regions,
    }
    record.update(extra)
    return record


@pytest.fixture
def table() -> Dict[str, Dict[str, Any]]:
    """A small provider table, deliberately out of key order."""
    return {
        "wasabi": _provider(
            "Wasabi",
            "s3.{region}.wasabisys.com",
            {"north_america": [{"label": "N. Virginia", "region": "us-east-1"}]},
            "us-east-1",
        ),
        "aws": _provider(
            "Amazon S3",
            "s3.{region}.amazonaws.com",
            {
                "north_america": [{"label": "US East (N. Virginia)", "region": "us-east-1"}],
                "europe": [{"label": "EU (Ireland)", "region": "eu-west-1"}],
            },
            "us-east-1",
        ),
        "cloudflare": _provider(
            "Cloudflare R2",
            "{account_id}.r2.cloudflarestorage.com",
            {"global": [{"label": "Automatic", "region": "auto"}]},
            "auto",
            usePathStyle=True,
        ),
        "custom": _provider(
            "Custom",
            "",
            {"global": [{"label": "Automatic", "region": "auto"}]},
            "auto",
            usePathStyle=True,
        ),
    }


@pytest.fixture
def registry(table: Dict[str, Dict[str, Any]]) -> Registry:
    """Registry built from the in-memory table."""
    return Registry(table)


@pytest.fixture
def document_path(tmp_path: Path, table: Dict[str, Dict[str, Any]]) -> Path:
    """The table written as a providers document."""
    path = tmp_path / "providers.json"
    path.write_text(json.dumps({"version": "2.0.0", "providers": table}), encoding="utf-8")
    return path


@pytest.fixture
def clean_default() -> Generator[None, None, None]:
    """Drop the shared default registry around a test."""
    Registry.cleanup()
    yield
    Registry.cleanup()


class TestConstruction:
    """Building registries from the supported sources."""

    def test_from_table(self, registry: Registry) -> None:
        assert len(registry) == 4
        assert registry.version is None
        assert registry.source_path is None

    def test_from_path(self, document_path: Path) -> None:
        registry = Registry(document_path)
        assert registry.version == "2.0.0"
        assert registry.source_path == document_path
        assert "aws" in registry

    def test_from_str_path(self, document_path: Path) -> None:
        assert len(Registry(str(document_path))) == 4

    def test_bundled_document(self) -> None:
        registry = Registry()
        assert registry.source_path == get_bundled_providers_path()
        assert registry.version
        assert registry.get_endpoint("linode", "us-east-1") == "us-east-1.linodeobjects.com"
        assert registry.get_endpoint("aws", "eu-west-1") == "s3.eu-west-1.amazonaws.com"

    @pytest.mark.parametrize("source", ["", "   "])
    def test_empty_path(self, source: str) -> None:
        with pytest.raises(EmptyInputError):
            Registry(source)

    def test_empty_table(self) -> None:
        with pytest.raises(EmptyProviderTableError) as exc_info:
            Registry({})
        assert isinstance(exc_info.value, EmptyInputError)
        assert isinstance(exc_info.value, InputError)

    @pytest.mark.parametrize("source", [[], ()])
    def test_empty_sequence(self, source: Any) -> None:
        with pytest.raises(EmptyInputError) as exc_info:
            Registry(source)
        assert not isinstance(exc_info.value, EmptyProviderTableError)

    @pytest.mark.parametrize("source", [42, 1.5, ["aws"], object()])
    def test_unsupported_source(self, source: Any) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            Registry(source)
        assert exc_info.value.value is source

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(DataFileNotFoundError):
            Registry(tmp_path / "missing.json")

    def test_invalid_provider_aborts(self, table: Dict[str, Dict[str, Any]]) -> None:
        del table["aws"]["label"]
        with pytest.raises(InvalidProviderDefinitionError):
            Registry(table)

    def test_sorted_by_key(self, registry: Registry) -> None:
        assert list(registry) == ["aws", "cloudflare", "custom", "wasabi"]
        assert list(registry.get_providers()) == ["aws", "cloudflare", "custom", "wasabi"]

    def test_keys_are_normalized(self, table: Dict[str, Dict[str, Any]]) -> None:
        table["My Storage"] = table.pop("wasabi")
        registry = Registry(table)
        assert registry.provider_exists("mystorage")
        assert not registry.provider_exists("My Storage")

    def test_providers_is_a_copy(self, registry: Registry) -> None:
        registry.providers.clear()
        assert len(registry) == 4


class TestDataFilter:
    """The optional transformation applied before parsing."""

    def test_filter_receives_table_and_context(self, table: Dict[str, Dict[str, Any]]) -> None:
        seen: Dict[str, Any] = {}

        def only_aws(raw: Dict[str, Any], context: str) -> Mapping[str, Any]:
            seen["keys"] = sorted(raw)
            seen["context"] = context
            return {"aws": raw["aws"]}

        registry = Registry(table, context="media-offload", data_filter=only_aws)
        assert seen == {"keys": ["aws", "cloudflare", "custom", "wasabi"], "context": "media-offload"}
        assert list(registry) == ["aws"]

    def test_filter_can_add_providers(self, table: Dict[str, Dict[str, Any]]) -> None:
        def add_minio(raw: Dict[str, Any], context: str) -> Mapping[str, Any]:
            extended = dict(raw)
            extended["minio"] = dict(raw["custom"], label="MinIO", requiresCustomEndpoint=True)
            return extended

        registry = Registry(table, data_filter=add_minio)
        assert registry.get_endpoint("minio", custom_endpoint="minio.local:9000") == "minio.local:9000"

    def test_filter_must_return_mapping(self, table: Dict[str, Dict[str, Any]]) -> None:
        with pytest.raises(InvalidInputError):
            Registry(table, data_filter=lambda raw, context: list(raw))  # type: ignore[arg-type,return-value]

    def test_filter_emptying_table(self, table: Dict[str, Dict[str, Any]]) -> None:
        with pytest.raises(EmptyProviderTableError):
            Registry(table, data_filter=lambda raw, context: {})


class TestLookups:
    """Provider and region lookups."""

    def test_get_provider(self, registry: Registry) -> None:
        assert registry.get_provider("aws").label == "Amazon S3"

    def test_unknown_provider(self, registry: Registry) -> None:
        with pytest.raises(UnknownProviderError) as exc_info:
            registry.get_provider("nope")
        assert exc_info.value.provider == "nope"
        assert exc_info.value.available_providers == ["aws", "cloudflare", "custom", "wasabi"]

    def test_lookup_is_exact(self, registry: Registry) -> None:
        assert not registry.provider_exists("AWS")
        with pytest.raises(UnknownProviderError):
            registry.get_regions("AWS")

    def test_first_provider_key(self, registry: Registry) -> None:
        assert registry.first_provider_key() == "aws"

    def test_provider_options(self, registry: Registry) -> None:
        assert registry.provider_options() == {
            "aws": "Amazon S3",
            "cloudflare": "Cloudflare R2",
            "custom": "Custom",
            "wasabi": "Wasabi",
        }
        options = registry.provider_options("Choose a provider")
        assert list(options)[:2] == ["", "aws"]

    def test_regions(self, registry: Registry) -> None:
        assert list(registry.get_regions("aws")) == ["us-east-1", "eu-west-1"]
        assert registry.get_region("aws", "eu-west-1").label == "EU (Ireland)"
        assert registry.region_exists("aws", "eu-west-1")
        assert not registry.region_exists("aws", "mars-1")
        assert registry.default_region("cloudflare") == "auto"
        assert registry.provider_continents("aws") == ["north_america", "europe"]

    def test_unknown_region(self, registry: Registry) -> None:
        with pytest.raises(UnknownRegionError):
            registry.get_region("aws", "mars-1")

    def test_region_options(self, registry: Registry) -> None:
        assert registry.region_options("aws", group_by_continent=True) == {
            "north_america": {"us-east-1": "US East (N. Virginia) (us-east-1)"},
            "europe": {"eu-west-1": "EU (Ireland) (eu-west-1)"},
        }

    def test_first_provider_regions(self, registry: Registry) -> None:
        assert registry.first_provider_regions() == registry.get_regions("aws")
        assert registry.first_provider_region_options("Pick") == registry.region_options("aws", "Pick")

    def test_flags(self, registry: Registry) -> None:
        assert registry.requires_account_id("cloudflare")
        assert not registry.requires_account_id("aws")
        assert registry.uses_path_style("custom")
        assert not registry.uses_path_style("wasabi")


class TestEndpoints:
    """Endpoint resolution through the registry."""

    def test_get_endpoint(self, registry: Registry) -> None:
        assert registry.get_endpoint("aws", "eu-west-1") == "s3.eu-west-1.amazonaws.com"
        assert registry.get_endpoint("wasabi") == "s3.us-east-1.wasabisys.com"
        assert registry.get_endpoint("cloudflare", "auto", "abc123") == "abc123.r2.cloudflarestorage.com"

    def test_default_region_equivalence(self, registry: Registry) -> None:
        for provider_key in ("aws", "wasabi"):
            default = registry.default_region(provider_key)
            assert registry.get_endpoint(provider_key) == registry.get_endpoint(provider_key, default)

    def test_errors(self, registry: Registry) -> None:
        with pytest.raises(UnknownProviderError):
            registry.get_endpoint("nope", "us-east-1")
        with pytest.raises(UnknownRegionError):
            registry.get_endpoint("aws", "mars-1")
        with pytest.raises(MissingAccountIdError):
            registry.get_endpoint("cloudflare", "auto")
        with pytest.raises(MissingCustomEndpointError):
            registry.get_endpoint("custom", "auto", "abc")

    def test_custom(self, registry: Registry) -> None:
        assert registry.get_endpoint("custom", "auto", "abc", "https://x.example.com") == "https://x.example.com"


class TestData:
    """Checksums and exports."""

    def test_checksum_of_source(self, document_path: Path) -> None:
        registry = Registry(document_path)
        assert registry.checksum() == Loader().get_checksum(document_path)

    def test_checksum_defaults_to_bundled_for_tables(self, registry: Registry) -> None:
        assert registry.checksum() == Loader().get_checksum(get_bundled_providers_path())

    def test_checksum_explicit_path(self, registry: Registry, document_path: Path) -> None:
        assert registry.checksum(document_path) == Loader().get_checksum(document_path)

    def test_checksum_missing_file(self, registry: Registry, tmp_path: Path) -> None:
        with pytest.raises(DataFileNotFoundError):
            registry.checksum(tmp_path / "missing.json")

    def test_to_table_round_trip(self, registry: Registry) -> None:
        rebuilt = Registry(registry.to_table())
        assert list(rebuilt) == list(registry)
        assert rebuilt.to_table() == registry.to_table()
        assert rebuilt.get_endpoint("aws", "eu-west-1") == registry.get_endpoint("aws", "eu-west-1")

    def test_dump_reloads(self, document_path: Path, tmp_path: Path) -> None:
        registry = Registry(document_path)
        dumped = tmp_path / "dumped.json"
        dumped.write_text(json.dumps(registry.dump()), encoding="utf-8")
        reloaded = Registry(dumped)
        assert reloaded.version == "2.0.0"
        assert reloaded.to_table() == registry.to_table()

    def test_dump_version_for_tables(self, registry: Registry) -> None:
        assert registry.dump()["version"] == "1.0.0"


class TestDefaultInstance:
    """The shared registry built from the configured document."""

    def test_get_default_is_shared(self, clean_default: None) -> None:
        assert Registry.get_default() is Registry.get_default()
        assert get_registry() is Registry.get_default()

    def test_cleanup(self, clean_default: None) -> None:
        first = Registry.get_default()
        Registry.cleanup()
        assert Registry.get_default() is not first

    def test_get_default_follows_environment(
        self, clean_default: None, document_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(ENV_PROVIDERS_PATH, str(document_path))
        registry = Registry.get_default()
        assert registry.source_path == document_path
        assert registry.version == "2.0.0"
        assert Registry().source_path == get_bundled_providers_path()

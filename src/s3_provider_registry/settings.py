"""Signer settings.

Applications that sign S3 requests keep a handful of options (credentials,
provider, region, custom endpoint...). :class:`SignerSettings` holds them as
a typed, validated struct and resolves the endpoint through a
:class:`~s3_provider_registry.registry.Registry`.
"""

import os
import re
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional
from urllib.parse import parse_qsl, urlparse

from . import sanitize
from .errors import ProviderRegistryError, SettingsError
from .logging import LogEvent, log_info
from .registry import Registry

_REGION_PATTERN = re.compile(r"^[a-z0-9][a-z0-9_-]*$")
_BUCKET_PATTERN = re.compile(r"^[a-z0-9][a-z0-9.-]{1,61}[a-z0-9]$")
_HOST_PATTERN = re.compile(r"^[A-Za-z0-9]([A-Za-z0-9.-]*[A-Za-z0-9])?(:\d{1,5})?(/\S*)?$")


def is_valid_endpoint(value: str) -> bool:
    """Accept ``http(s)://host[:port][/path]`` URLs and bare ``host[:port]`` names."""
    if "://" in value:
        parsed = urlparse(value)
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)
    return bool(_HOST_PATTERN.match(value))


def is_valid_region(value: str) -> bool:
    """Check a region code such as ``us-east-1``."""
    return bool(_REGION_PATTERN.match(value))


def is_valid_bucket(value: str) -> bool:
    """Check an S3 bucket name (3-63 chars of lowercase letters, digits, dots and hyphens)."""
    return bool(_BUCKET_PATTERN.match(value)) and ".." not in value


def is_valid_query_string(value: str) -> bool:
    """Check that an extra query string parses as ``key=value`` pairs."""
    try:
        parse_qsl(value.lstrip("?"), keep_blank_values=True, strict_parsing=True)
    except ValueError:
        return False
    return True


@dataclass(frozen=True)
class SignerSettings:
    """Validated options for signing requests against a provider.

    Attributes:
        access_key: Access key id (required)
        secret_key: Secret access key (required)
        provider: Provider key (required, must be registered)
        region: Region code; defaults to the provider's default region
        custom_region: Region used by custom-endpoint providers
        custom_endpoint: Endpoint used by custom-endpoint providers
        account_id: Account id for providers whose endpoint embeds it
        use_path_style: Path-style addressing; taken from the provider
            unless it requires a custom endpoint
        default_bucket: Bucket used when a request names none
        duration: Lifetime of signed URLs in minutes
        extra_query_string: Query string appended to signed URLs
    """

    access_key: str
    secret_key: str
    provider: str
    region: str = ""
    custom_region: str = ""
    custom_endpoint: str = ""
    account_id: str = ""
    use_path_style: bool = True
    default_bucket: str = ""
    duration: int = 5
    extra_query_string: str = ""

    @classmethod
    def from_mapping(
        cls,
        options: Mapping[str, Any],
        prefix: Optional[str] = None,
        registry: Optional[Registry] = None,
    ) -> "SignerSettings":
        """Build validated settings from an options mapping.

        Args:
            options: Option values keyed by field name, or by
                ``<prefix>_<field>`` when ``prefix`` is given
            prefix: Optional key prefix
            registry: Registry used for provider checks; defaults to the
                shared default registry

        Raises:
            SettingsError: If a required option is missing or a value is invalid
        """
        values: Dict[str, Any] = {}
        for field in fields(cls):
            option_key = f"{prefix}_{field.name}" if prefix else field.name
            value = options.get(option_key)
            if isinstance(value, str):
                value = value.strip()
            if value is None or value == "":
                continue
            values[field.name] = value

        for required in ("access_key", "secret_key", "provider"):
            if not values.get(required):
                label = required.replace("_", " ").title()
                raise SettingsError(f"{label} is required and cannot be empty", field=required)

        if "use_path_style" in values:
            values["use_path_style"] = sanitize.boolean(values["use_path_style"])
        if "duration" in values:
            values["duration"] = _coerce_duration(values["duration"])

        for key, value in values.items():
            if key not in ("use_path_style", "duration"):
                values[key] = str(value)

        return cls(**values).validated(registry)

    @classmethod
    def from_env(
        cls,
        prefix: str = "S3",
        environ: Optional[Mapping[str, str]] = None,
        registry: Optional[Registry] = None,
    ) -> "SignerSettings":
        """Build validated settings from ``<PREFIX>_<FIELD>`` environment variables."""
        source = os.environ if environ is None else environ
        options = {key.lower(): value for key, value in source.items() if key.startswith(f"{prefix.upper()}_")}
        return cls.from_mapping(options, prefix=prefix.lower(), registry=registry)

    def validated(self, registry: Optional[Registry] = None) -> "SignerSettings":
        """Validate the settings against a registry and resolve derived values.

        Returns:
            Settings with the region and path-style flag resolved

        Raises:
            SettingsError: If any option is invalid for the provider
        """
        registry = registry or Registry.get_default()

        if not registry.provider_exists(self.provider):
            raise SettingsError(f"Invalid provider specified: '{self.provider}'", field="provider")
        provider = registry.get_provider(self.provider)

        if provider.requires_account_id() and not self.account_id:
            raise SettingsError("Account ID is required for this provider", field="account_id")

        region = self.region
        use_path_style = self.use_path_style
        if provider.requires_custom_endpoint():
            if not self.custom_endpoint or not is_valid_endpoint(self.custom_endpoint):
                raise SettingsError(
                    "Custom Endpoint is required and must be a valid URL for this provider",
                    field="custom_endpoint",
                )
            if not self.custom_region or not is_valid_region(self.custom_region.lower()):
                raise SettingsError(
                    "Custom Region is required and must be a valid region for this provider",
                    field="custom_region",
                )
            region = self.custom_region.lower()
        else:
            region = region or provider.default_region
            if not provider.region_exists(region):
                raise SettingsError(
                    "Region is required and must be a valid region for this provider", field="region"
                )
            use_path_style = provider.use_path_style

        if self.default_bucket and not is_valid_bucket(self.default_bucket):
            raise SettingsError("Invalid Default Bucket specified", field="default_bucket")

        if self.duration < 1:
            raise SettingsError("Invalid Duration specified", field="duration")

        if self.extra_query_string and not is_valid_query_string(self.extra_query_string):
            raise SettingsError("Invalid extra query string specified", field="extra_query_string")

        log_info(LogEvent.SETTINGS, "Signer settings validated", provider=self.provider, region=region)
        return replace(self, region=region, use_path_style=use_path_style)

    def has_credentials(self, registry: Optional[Registry] = None) -> bool:
        """Check whether the credentials needed by the provider are present."""
        registry = registry or Registry.get_default()
        if not (self.access_key and self.secret_key):
            return False
        if registry.provider_exists(self.provider) and registry.requires_account_id(self.provider):
            return bool(self.account_id)
        return True

    def endpoint(self, registry: Optional[Registry] = None) -> str:
        """Resolve the endpoint these settings point at."""
        registry = registry or Registry.get_default()
        return registry.get_endpoint(self.provider, self.region, self.account_id, self.custom_endpoint or None)

    def signer_properties(self, registry: Optional[Registry] = None) -> Dict[str, Any]:
        """Return the arguments a request signer needs, endpoint included.

        Raises:
            SettingsError: If the endpoint cannot be resolved
        """
        try:
            endpoint = self.endpoint(registry)
        except ProviderRegistryError as e:
            raise SettingsError(f"Could not resolve endpoint: {e}", field="provider") from e

        return {
            "access_key": self.access_key,
            "secret_key": self.secret_key,
            "endpoint": endpoint,
            "region": self.region,
            "use_path_style": self.use_path_style,
            "extra_query_string": self.extra_query_string,
            "duration": self.duration,
            "default_bucket": self.default_bucket,
        }

    def to_dict(self, redact: bool = True) -> Dict[str, Any]:
        """Return the settings as a dictionary, secrets redacted by default."""
        data = asdict(self)
        if redact and data["secret_key"]:
            data["secret_key"] = "********"
        return data


def _coerce_duration(value: Any) -> int:
    if isinstance(value, bool):
        raise SettingsError("Invalid Duration specified", field="duration")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise SettingsError("Invalid Duration specified", field="duration") from None

"""Provider definitions and endpoint resolution.

A :class:`Provider` is built once from one raw provider record of a providers
document and is read-only afterwards. Its :meth:`Provider.resolve_endpoint`
turns the provider's endpoint template and call-time parameters into the
endpoint host (or URL) that S3 clients connect to.
"""

import re
from typing import Any, Dict, List, Mapping, Optional

from . import sanitize
from .errors import (
    InvalidProviderDefinitionError,
    MissingAccountIdError,
    MissingCustomEndpointError,
    UnknownRegionError,
)
from .logging import LogEvent, log_debug
from .region import AUTOMATIC_REGION, Region

REGION_PLACEHOLDER = "{region}"
ACCOUNT_ID_PLACEHOLDER = "{account_id}"
CUSTOM_PROVIDER_KEY = "custom"

_PLACEHOLDER_PATTERN = re.compile(re.escape(REGION_PLACEHOLDER) + "|" + re.escape(ACCOUNT_ID_PLACEHOLDER))
_DOT_RUN_PATTERN = re.compile(r"\.{2,}")


class Provider:
    """An object storage vendor and the regions it operates in."""

    def __init__(self, key: Any, data: Mapping[str, Any]):
        """Build a provider from its raw record.

        Args:
            key: Provider key as found in the providers document
            data: Raw provider record (``label``, ``supplier``, ``homepage``,
                ``dashboard``, ``defaultRegion``, ``usePathStyle``,
                ``endpoint``, ``regions`` and optionally
                ``requiresCustomEndpoint``)

        Raises:
            InvalidProviderDefinitionError: If the key, label or regions are
                missing or invalid, or a region record is incomplete
        """
        self._key = sanitize.key(key)
        if not self._key:
            raise InvalidProviderDefinitionError(
                f"Missing or invalid key for provider {key!r}", provider=None, field="key"
            )

        if not isinstance(data, Mapping):
            raise InvalidProviderDefinitionError(
                f"Provider '{self._key}' must be defined by a mapping, got {type(data).__name__}",
                provider=self._key,
            )

        self._label = sanitize.escape(data.get("label") or "")
        if not self._label:
            raise InvalidProviderDefinitionError(
                f"Missing or invalid 'label' for provider '{self._key}'", provider=self._key, field="label"
            )

        self._supplier = sanitize.escape(data.get("supplier") or "")
        self._homepage = sanitize.url(data.get("homepage") or "")
        self._dashboard = sanitize.url(data.get("dashboard") or "")
        self._default_region = sanitize.key(data.get("defaultRegion") or "")
        self._use_path_style = sanitize.boolean(data.get("usePathStyle", False))
        endpoint = data.get("endpoint") or ""
        self._endpoint_template = endpoint.strip() if isinstance(endpoint, str) else ""

        if "requiresCustomEndpoint" in data:
            self._requires_custom_endpoint = sanitize.boolean(data["requiresCustomEndpoint"])
        else:
            self._requires_custom_endpoint = self._key == CUSTOM_PROVIDER_KEY

        self._regions = self._parse_regions(data.get("regions"))

    def _parse_regions(self, raw_regions: Any) -> Dict[str, Region]:
        if not isinstance(raw_regions, Mapping):
            raise InvalidProviderDefinitionError(
                f"Invalid or missing 'regions' data for provider '{self._key}'",
                provider=self._key,
                field="regions",
            )

        regions: Dict[str, Region] = {}
        for continent, region_group in raw_regions.items():
            if not isinstance(region_group, list):
                raise InvalidProviderDefinitionError(
                    f"Regions of continent '{continent}' for provider '{self._key}' must be a list",
                    provider=self._key,
                    field="regions",
                )
            for region_data in region_group:
                if not isinstance(region_data, Mapping) or not region_data.get("region"):
                    raise InvalidProviderDefinitionError(
                        f"Missing 'region' key in regions data for provider '{self._key}'",
                        provider=self._key,
                        field="region",
                    )
                if not region_data.get("label"):
                    raise InvalidProviderDefinitionError(
                        f"Missing 'label' key in regions data for provider '{self._key}'",
                        provider=self._key,
                        field="label",
                    )

                # Keyed by the raw code; Region.code holds the escaped form.
                code = str(region_data["region"])
                if code in regions:
                    raise InvalidProviderDefinitionError(
                        f"Duplicate region '{code}' for provider '{self._key}'",
                        provider=self._key,
                        field="region",
                    )
                regions[code] = Region.create(continent, region_data["label"], code)

        if not regions:
            raise InvalidProviderDefinitionError(
                f"Provider '{self._key}' does not define any regions", provider=self._key, field="regions"
            )
        return regions

    def __repr__(self) -> str:
        return f"Provider(key={self._key!r}, label={self._label!r}, regions={len(self._regions)})"

    @property
    def key(self) -> str:
        """Normalized provider key."""
        return self._key

    @property
    def label(self) -> str:
        """Human-readable provider name."""
        return self._label

    @property
    def supplier(self) -> str:
        """Company supplying the service."""
        return self._supplier

    @property
    def homepage(self) -> str:
        """Provider homepage URL, empty if the data held an invalid URL."""
        return self._homepage

    @property
    def dashboard(self) -> str:
        """Provider console URL, empty if the data held an invalid URL."""
        return self._dashboard

    @property
    def default_region(self) -> str:
        """Key of the region used when none is requested."""
        return self._default_region

    @property
    def use_path_style(self) -> bool:
        """Whether buckets are addressed in the URL path instead of the host name."""
        return self._use_path_style

    @property
    def endpoint_template(self) -> str:
        """Endpoint template with ``{region}`` and ``{account_id}`` placeholders."""
        return self._endpoint_template

    @property
    def regions(self) -> Dict[str, Region]:
        """Get a read-only view of the provider's regions keyed by code."""
        return dict(self._regions)

    def requires_account_id(self) -> bool:
        """Check whether the endpoint template contains ``{account_id}``."""
        return ACCOUNT_ID_PLACEHOLDER in self._endpoint_template

    def requires_custom_endpoint(self) -> bool:
        """Check whether callers must supply their own endpoint."""
        return self._requires_custom_endpoint

    def region_exists(self, code: str) -> bool:
        """Check whether the provider offers a region."""
        return code in self._regions

    def default_region_exists(self) -> bool:
        """Check whether the default region is one of the provider's regions."""
        return self.region_exists(self._default_region)

    def get_region(self, code: str) -> Region:
        """Get a region by code.

        Raises:
            UnknownRegionError: If the provider does not offer the region
        """
        try:
            return self._regions[code]
        except KeyError:
            raise UnknownRegionError(
                f"The region '{code}' does not exist for the provider '{self._key}'",
                provider=self._key,
                region=code,
                available_regions=self._regions.keys(),
            ) from None

    def first_region_key(self) -> Optional[str]:
        """Return the code of the first declared region."""
        return next(iter(self._regions), None)

    def list_continents(self) -> List[str]:
        """Return the continents the provider operates in, in first-seen order."""
        continents: List[str] = []
        for region in self._regions.values():
            if region.continent not in continents:
                continents.append(region.continent)
        return continents

    def region_options(self, empty_label: str = "", group_by_continent: bool = False) -> Dict[str, Any]:
        """Build a ``code -> "label (code)"`` mapping for option lists.

        Args:
            empty_label: Label of a leading ``""`` option; omitted when empty
            group_by_continent: Nest the options under their continent

        Returns:
            Flat mapping of region codes to display labels, or a mapping of
            continents to such mappings
        """
        options: Dict[str, Any] = {}
        if empty_label:
            options[""] = empty_label

        for code, region in self._regions.items():
            if group_by_continent:
                options.setdefault(region.continent, {})[code] = region.display_label
            else:
                options[code] = region.display_label
        return options

    def resolve_endpoint(
        self,
        region_key: str = "",
        account_id: str = "",
        custom_endpoint: Optional[str] = None,
    ) -> str:
        """Resolve the endpoint for a region.

        Args:
            region_key: Region code; the default region is used when empty
                (except for custom-endpoint providers)
            account_id: Substituted for ``{account_id}``
            custom_endpoint: Caller-supplied endpoint template. Required by
                custom-endpoint providers; supplying one skips region
                validation for any provider.

        Returns:
            Endpoint with placeholders substituted, runs of dots collapsed and
            leading/trailing dots removed

        Raises:
            MissingCustomEndpointError: Custom-endpoint provider without a custom endpoint
            MissingAccountIdError: Template needs an account id and none was given
            UnknownRegionError: The region is not offered and no custom endpoint was given
        """
        custom_endpoint = (custom_endpoint or "").strip()

        if self._requires_custom_endpoint and not custom_endpoint:
            log_debug(LogEvent.ENDPOINT_RESOLUTION, "Custom endpoint missing", provider=self._key)
            raise MissingCustomEndpointError(
                f"A custom endpoint is required for the provider '{self._key}'", provider=self._key
            )

        if self.requires_account_id() and not account_id:
            log_debug(LogEvent.ENDPOINT_RESOLUTION, "Account id missing", provider=self._key)
            raise MissingAccountIdError(
                f"An account ID is required for the provider '{self._key}'", provider=self._key
            )

        if not region_key and not self._requires_custom_endpoint:
            region_key = self._default_region

        if not custom_endpoint and not self.region_exists(region_key):
            log_debug(LogEvent.ENDPOINT_RESOLUTION, "Unknown region", provider=self._key, region=region_key)
            raise UnknownRegionError(
                f"The region '{region_key}' does not exist for the provider '{self._key}'",
                provider=self._key,
                region=region_key,
                available_regions=self._regions.keys(),
            )

        if self._requires_custom_endpoint and custom_endpoint:
            template = custom_endpoint
        else:
            template = self._endpoint_template

        if region_key == AUTOMATIC_REGION:
            region_key = ""

        values = {REGION_PLACEHOLDER: region_key, ACCOUNT_ID_PLACEHOLDER: account_id}
        endpoint = _PLACEHOLDER_PATTERN.sub(lambda match: values[match.group(0)], template)
        endpoint = _DOT_RUN_PATTERN.sub(".", endpoint).strip(".")

        log_debug(
            LogEvent.ENDPOINT_RESOLUTION,
            "Resolved endpoint",
            provider=self._key,
            region=region_key,
            endpoint=endpoint,
        )
        return endpoint

    def to_dict(self) -> Dict[str, Any]:
        """Export the provider as a raw record accepted by :class:`Provider`."""
        regions: Dict[str, List[Dict[str, str]]] = {}
        for region in self._regions.values():
            regions.setdefault(region.continent, []).append(region.to_dict())

        return {
            "label": sanitize.unescape(self._label),
            "supplier": sanitize.unescape(self._supplier),
            "homepage": self._homepage,
            "dashboard": self._dashboard,
            "defaultRegion": self._default_region,
            "usePathStyle": self._use_path_style,
            "requiresCustomEndpoint": self._requires_custom_endpoint,
            "endpoint": self._endpoint_template,
            "regions": regions,
        }

"""JSON output formatter for CLI."""

import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional, TextIO

from ...config_paths import ENV_PROVIDERS_PATH
from ...provider import Provider
from ...registry import Registry


def _default_serializer(obj: Any) -> Any:
    """Serialize otherwise non-JSON-serializable objects.

    - Path -> POSIX string
    - Fallback -> str(obj)
    """
    if isinstance(obj, Path):
        return obj.as_posix()
    return str(obj)


def format_json(data: Any, output: Optional[TextIO] = None, indent: int = 2, sort_keys: bool = True) -> None:
    """Format data as JSON and write to output.

    Args:
        data: Data to format
        output: Output stream (defaults to stdout)
        indent: JSON indentation level
        sort_keys: Sort mapping keys; providers documents keep their own order
    """
    if output is None:
        output = sys.stdout

    json.dump(
        data,
        output,
        indent=indent,
        ensure_ascii=False,
        sort_keys=sort_keys,
        default=_default_serializer,
    )
    output.write("\n")


def _provider_summary(provider: Provider) -> Dict[str, Any]:
    return {
        "key": provider.key,
        "label": provider.to_dict()["label"],
        "default_region": provider.default_region,
        "use_path_style": provider.use_path_style,
        "requires_account_id": provider.requires_account_id(),
        "requires_custom_endpoint": provider.requires_custom_endpoint(),
        "region_count": len(provider.regions),
    }


def format_providers_json(registry: Registry) -> Dict[str, Any]:
    """Format the provider list for JSON output.

    Args:
        registry: Registry to list

    Returns:
        Formatted data structure
    """
    providers = [_provider_summary(provider) for provider in registry.get_providers().values()]
    return {"providers": providers, "count": len(providers), "version": registry.version}


def format_provider_json(provider: Provider) -> Dict[str, Any]:
    """Format one provider, regions included, for JSON output."""
    data = _provider_summary(provider)
    raw = provider.to_dict()
    data.update(
        {
            "supplier": raw["supplier"],
            "homepage": raw["homepage"],
            "dashboard": raw["dashboard"],
            "endpoint": raw["endpoint"],
            "regions": raw["regions"],
        }
    )
    return data


def format_regions_json(provider: Provider, group_by_continent: bool = False) -> Dict[str, Any]:
    """Format a provider's regions for JSON output.

    Args:
        provider: Provider whose regions are listed
        group_by_continent: Nest regions under their continent

    Returns:
        Formatted data structure
    """
    regions = {code: region.to_dict()["label"] for code, region in provider.regions.items()}
    data: Dict[str, Any] = {
        "provider": provider.key,
        "default_region": provider.default_region,
        "count": len(regions),
    }
    if group_by_continent:
        grouped: Dict[str, Dict[str, str]] = {}
        for code, region in provider.regions.items():
            grouped.setdefault(region.continent, {})[code] = regions[code]
        data["regions"] = grouped
    else:
        data["regions"] = regions
    return data


def format_endpoint_json(provider_key: str, region: str, endpoint: str, reachable: Optional[bool]) -> Dict[str, Any]:
    """Format a resolved endpoint for JSON output."""
    data: Dict[str, Any] = {"provider": provider_key, "region": region, "endpoint": endpoint}
    if reachable is not None:
        data["reachable"] = reachable
    return data


def format_data_paths_json(paths: Dict[str, Any]) -> Dict[str, Any]:
    """Format data paths for JSON output.

    Args:
        paths: Path information

    Returns:
        Formatted data structure
    """
    return {
        "data_sources": paths,
        "resolution_order": [
            "--data option",
            f"{ENV_PROVIDERS_PATH} environment variable",
            "User config directory",
            "Bundled package data",
        ],
    }

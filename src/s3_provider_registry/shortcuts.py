"""Convenience functions that never raise.

Each function builds (or reuses) a registry, performs one lookup and returns
a sentinel (``None``, ``False`` or an empty dict) instead of raising. The
exception is handed to ``error_callback`` when one is given, so callers can
still report what went wrong.
"""

from typing import Any, Callable, Dict, Optional, TypeVar

import requests

from .config_paths import get_providers_path
from .errors import ProviderRegistryError
from .logging import LogEvent, log_debug
from .provider import Provider
from .region import Region
from .registry import Registry, RegistrySource
from .settings import SignerSettings

ErrorCallback = Callable[[Exception], None]
T = TypeVar("T")

VERIFY_TIMEOUT = 10


def _registry(source: RegistrySource, context: str) -> Registry:
    if source is None and not context:
        return Registry.get_default()
    return Registry(get_providers_path() if source is None else source, context)


def _call(
    func: Callable[[], T],
    fallback: T,
    error_callback: Optional[ErrorCallback],
) -> T:
    try:
        return func()
    except ProviderRegistryError as e:
        log_debug(LogEvent.REGISTRY, "Convenience lookup failed", error=str(e), error_type=type(e).__name__)
        if error_callback is not None:
            error_callback(e)
        return fallback


def get_providers(
    source: RegistrySource = None,
    context: str = "",
    error_callback: Optional[ErrorCallback] = None,
) -> Optional[Dict[str, Provider]]:
    """Return all providers, or None on failure."""
    return _call(lambda: _registry(source, context).get_providers(), None, error_callback)


def get_provider(
    provider_key: str,
    source: RegistrySource = None,
    context: str = "",
    error_callback: Optional[ErrorCallback] = None,
) -> Optional[Provider]:
    """Return one provider, or None on failure."""
    return _call(lambda: _registry(source, context).get_provider(provider_key), None, error_callback)


def get_provider_default_region(
    provider_key: str,
    source: RegistrySource = None,
    context: str = "",
    error_callback: Optional[ErrorCallback] = None,
) -> Optional[str]:
    """Return a provider's default region key, or None on failure."""
    return _call(lambda: _registry(source, context).default_region(provider_key), None, error_callback)


def get_regions(
    provider_key: str,
    source: RegistrySource = None,
    context: str = "",
    error_callback: Optional[ErrorCallback] = None,
) -> Optional[Dict[str, Region]]:
    """Return a provider's regions, or None on failure."""
    return _call(lambda: _registry(source, context).get_regions(provider_key), None, error_callback)


def get_region(
    provider_key: str,
    region_code: str,
    source: RegistrySource = None,
    context: str = "",
    error_callback: Optional[ErrorCallback] = None,
) -> Optional[Region]:
    """Return one region of a provider, or None on failure."""
    return _call(lambda: _registry(source, context).get_region(provider_key, region_code), None, error_callback)


def get_provider_options(
    empty_label: str = "",
    source: RegistrySource = None,
    context: str = "",
    error_callback: Optional[ErrorCallback] = None,
) -> Dict[str, str]:
    """Return provider options, or an empty dict on failure."""
    return _call(lambda: _registry(source, context).provider_options(empty_label), {}, error_callback)


def get_region_options(
    provider_key: str = "",
    empty_label: str = "",
    group_by_continent: bool = False,
    source: RegistrySource = None,
    context: str = "",
    error_callback: Optional[ErrorCallback] = None,
) -> Dict[str, Any]:
    """Return region options of a provider (the first one if none is named), or an empty dict."""

    def _options() -> Dict[str, Any]:
        registry = _registry(source, context)
        key = provider_key or registry.first_provider_key() or ""
        return registry.region_options(key, empty_label, group_by_continent)

    return _call(_options, {}, error_callback)


def get_endpoint(
    provider_key: str,
    region_key: str = "",
    account_id: str = "",
    custom_endpoint: Optional[str] = None,
    source: RegistrySource = None,
    context: str = "",
    error_callback: Optional[ErrorCallback] = None,
) -> Optional[str]:
    """Resolve an endpoint, or return None on failure."""
    return _call(
        lambda: _registry(source, context).get_endpoint(provider_key, region_key, account_id, custom_endpoint),
        None,
        error_callback,
    )


def verify_endpoint(
    provider_key: str,
    region_key: str = "",
    account_id: str = "",
    custom_endpoint: Optional[str] = None,
    source: RegistrySource = None,
    context: str = "",
    error_callback: Optional[ErrorCallback] = None,
    timeout: float = VERIFY_TIMEOUT,
) -> bool:
    """Check that a resolved endpoint answers HTTP requests.

    Any response below 500 counts as reachable, since S3 endpoints answer
    anonymous requests with 403.
    """
    endpoint = get_endpoint(provider_key, region_key, account_id, custom_endpoint, source, context, error_callback)
    if not endpoint:
        return False
    return probe_endpoint(endpoint, timeout, error_callback)


def probe_endpoint(
    endpoint: str,
    timeout: float = VERIFY_TIMEOUT,
    error_callback: Optional[ErrorCallback] = None,
) -> bool:
    """Send a HEAD request to an endpoint (``https://`` is assumed for bare hosts)."""
    url = endpoint if "://" in endpoint else f"https://{endpoint}"
    try:
        response = requests.head(url, timeout=timeout, allow_redirects=True)
    except requests.RequestException as e:
        log_debug(LogEvent.ENDPOINT_RESOLUTION, "Endpoint verification failed", url=url, error=str(e))
        if error_callback is not None:
            error_callback(e)
        return False

    log_debug(LogEvent.ENDPOINT_RESOLUTION, "Endpoint verified", url=url, status=response.status_code)
    return response.status_code < 500


def has_credentials(
    options: Dict[str, Any],
    prefix: Optional[str] = None,
    error_callback: Optional[ErrorCallback] = None,
) -> bool:
    """Check whether signer options hold usable credentials."""
    return _call(
        lambda: SignerSettings.from_mapping(options, prefix).has_credentials(),
        False,
        error_callback,
    )


def get_signer_properties(
    options: Dict[str, Any],
    prefix: Optional[str] = None,
    error_callback: Optional[ErrorCallback] = None,
) -> Optional[Dict[str, Any]]:
    """Return signer properties for the given options, or None on failure."""
    return _call(
        lambda: SignerSettings.from_mapping(options, prefix).signer_properties(),
        None,
        error_callback,
    )

#!/usr/bin/env python3
"""Example of basic registry usage."""

from s3_provider_registry import ProviderRegistryError, Registry, SignerSettings


def print_provider_info(registry, provider_key):
    """Print information about a provider.

    Args:
        registry: Registry to query
        provider_key: Key of the provider to look up
    """
    try:
        provider = registry.get_provider(provider_key)

        print(f"Provider: {provider.key} ({provider.label})")
        print(f"  Default region: {provider.default_region}")
        print(f"  Path-style addressing: {provider.use_path_style}")
        print(f"  Needs account id: {provider.requires_account_id()}")
        print(f"  Continents: {', '.join(provider.list_continents())}")
        print()
    except ProviderRegistryError as e:
        print(f"Error getting information for {provider_key}: {e}")


def main():
    """Run the example."""
    registry = Registry.get_default()

    for provider_key in ["aws", "cloudflare", "linode"]:
        print_provider_info(registry, provider_key)

    print("Endpoint examples:")
    examples = [
        ("aws", "eu-west-1", "", None),
        ("linode", "", "", None),
        ("cloudflare", "auto", "abc123", None),
        ("cloudflare", "auto", "", None),
        ("custom", "", "", "https://minio.example.com:9000"),
        ("aws", "mars-1", "", None),
    ]
    for provider_key, region, account_id, custom_endpoint in examples:
        try:
            endpoint = registry.get_endpoint(provider_key, region, account_id, custom_endpoint)
            print(f"  ✅ {provider_key}/{region or 'default'} -> {endpoint}")
        except ProviderRegistryError as e:
            print(f"  ❌ {provider_key}/{region or 'default'} - {e}")

    print()
    print("Signer settings:")
    settings = SignerSettings.from_mapping(
        {"access_key": "AKIAEXAMPLE", "secret_key": "example", "provider": "wasabi"},
        registry=registry,
    )
    print(f"  {settings.to_dict()}")
    print(f"  endpoint: {settings.endpoint(registry)}")


if __name__ == "__main__":
    main()

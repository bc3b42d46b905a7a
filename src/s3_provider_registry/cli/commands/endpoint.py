"""Endpoint resolution command for the s3pr CLI."""

from typing import Optional

import click

from ...shortcuts import VERIFY_TIMEOUT, probe_endpoint
from ..formatters import create_console, format_endpoint_json, format_endpoint_table
from ..utils import ExitCode, handle_error, load_registry, output_data


@click.command()
@click.argument("provider_key")
@click.option("--region", "region_key", default="", help="Region code; defaults to the provider's default region.")
@click.option("--account-id", default="", help="Account id for providers whose endpoint embeds it.")
@click.option("--custom-endpoint", default=None, help="Endpoint template for custom-endpoint providers.")
@click.option("--verify", is_flag=True, help="Send a HEAD request to the resolved endpoint.")
@click.option("--timeout", type=float, default=VERIFY_TIMEOUT, show_default=True, help="Timeout of --verify in seconds.")
@click.pass_context
def endpoint(
    ctx: click.Context,
    provider_key: str,
    region_key: str,
    account_id: str,
    custom_endpoint: Optional[str],
    verify: bool,
    timeout: float,
) -> None:
    """Resolve the endpoint of PROVIDER_KEY.

    Examples:
      s3pr endpoint aws --region eu-west-1

      s3pr endpoint cloudflare --account-id abc123

      s3pr endpoint custom --custom-endpoint minio.example.com --verify
    """
    registry = load_registry(ctx.obj)
    reachable: Optional[bool] = None
    try:
        provider = registry.get_provider(provider_key)
        resolved = provider.resolve_endpoint(region_key, account_id, custom_endpoint)
        if not region_key and not provider.requires_custom_endpoint():
            region_key = provider.default_region

        if verify:
            reachable = probe_endpoint(resolved, timeout)
        data = format_endpoint_json(provider.key, region_key, resolved, reachable)

        format_type = ctx.obj["format"]
        if format_type == "table":
            console = create_console(no_color=ctx.obj["no_color"])
            format_endpoint_table(data, console)
        else:
            output_data(data, format_type)
    except Exception as e:
        handle_error(e)

    if reachable is False:
        ctx.exit(ExitCode.GENERIC_ERROR)

"""DNS provider factory — resolve provider name to concrete implementation."""

from __future__ import annotations

from acme_dns_hook.config import PROVIDER_GOOGLE, PROVIDER_NAMECOM, HookConfig
from acme_dns_hook.dns.base import DnsProvider
from acme_dns_hook.dns.google_acme import GoogleAcmeDnsProvider
from acme_dns_hook.dns.namecom import NameComDnsProvider
from acme_dns_hook.errors import ConfigError


def get_dns_provider(config: HookConfig, provider_name: str | None = None) -> DnsProvider:
    """Instantiate a DNS provider by name.

    Args:
        config: Hook configuration.
        provider_name: Override the provider recorded in the configuration.

    Returns:
        A configured DnsProvider instance.
    """
    name = (provider_name or config.provider).lower()

    if name == PROVIDER_GOOGLE:
        if not config.zone_tokens:
            raise ConfigError("No domains defined in config")
        return GoogleAcmeDnsProvider(
            zone_tokens=config.zone_tokens,
            keep_expired_records=config.keep_expired_records,
        )

    if name == PROVIDER_NAMECOM:
        if not config.username or not config.token:
            raise ConfigError("No username and/or token defined in config")
        return NameComDnsProvider(
            username=config.username,
            token=config.token,
            zones=config.zones,
            api_host=config.api_host,
        )

    raise ConfigError(f"Unknown DNS provider: '{name}'")

"""Exception hierarchy for the hook."""

from __future__ import annotations


class HookError(Exception):
    """Base class for every error raised by the hook."""


class ConfigError(HookError):
    """Configuration is missing, unreadable or incomplete. Always fatal."""


class MissingCredentialError(ConfigError):
    """No credential is configured for the resolved zone."""

    def __init__(self, zone: str) -> None:
        self.zone = zone
        super().__init__(f"No token found for {zone}")


class TransportError(HookError):
    """The provider API could not be reached or returned an unusable response."""


class RecordNotFoundError(HookError):
    """A lookup against the live zone found no matching record."""

    def __init__(self, zone: str, fqdn: str) -> None:
        self.zone = zone
        self.fqdn = fqdn
        super().__init__(f"No TXT record {fqdn} in zone {zone}")

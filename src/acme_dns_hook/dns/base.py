"""Abstract base class for DNS providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Self

from acme_dns_hook.dns.util import resolve_zone, split_subdomain
from acme_dns_hook.models import ProviderResult, ResolvedTarget


class DnsProvider(ABC):
    """Interface for DNS providers that publish and retract ACME DNS-01 TXT records."""

    zones: Sequence[str] = ()

    def close(self) -> None:
        """Release resources. Override in subclasses that hold open connections."""

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def resolve_target(self, fqdn: str) -> ResolvedTarget:
        """Find the zone owning ``fqdn`` and the credential to manage it.

        Raises ConfigError when no credential exists for the zone, which is
        also the case for the ``"unknown"`` zone.
        """
        zone = resolve_zone(fqdn, self.zones)
        credential = self.credential_for(zone)
        return ResolvedTarget(zone=zone, subdomain=split_subdomain(fqdn, zone), credential=credential)

    @abstractmethod
    def credential_for(self, zone: str) -> object:
        """Return the credential for ``zone`` or raise MissingCredentialError."""

    @abstractmethod
    def publish(self, target: ResolvedTarget, fqdn: str, digest: str) -> ProviderResult:
        """Publish the challenge TXT record for ``fqdn``.

        Args:
            target: Zone and credential resolved for ``fqdn``.
            fqdn: Domain being validated (e.g. "www.example.com").
            digest: TXT record value handed over by the ACME client.
        """

    @abstractmethod
    def retract(self, target: ResolvedTarget, fqdn: str, digest: str) -> ProviderResult:
        """Remove the challenge TXT record for ``fqdn``.

        A record that is already gone is not an error.
        """

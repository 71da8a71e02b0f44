"""Google ACME DNS provider — rotate challenge records via the acmedns REST API."""

from __future__ import annotations

import logging
from collections.abc import Mapping

import httpx

from acme_dns_hook.dns.base import DnsProvider
from acme_dns_hook.dns.util import rotate_record
from acme_dns_hook.errors import HookError, MissingCredentialError, TransportError
from acme_dns_hook.models import ProviderResult, ResolvedTarget, TxtRecord

logger = logging.getLogger(__name__)

_API_BASE = "https://acmedns.googleapis.com/v1"


def _wire_record(record: TxtRecord) -> dict:
    return {"fqdn": record.host, "digest": record.value}


class GoogleAcmeDnsProvider(DnsProvider):
    """DNS provider backed by Google's ACME DNS API, one access token per zone."""

    def __init__(
        self,
        zone_tokens: Mapping[str, str],
        keep_expired_records: bool | None = None,
        _http_client: httpx.Client | None = None,
    ) -> None:
        self._zone_tokens = dict(zone_tokens)
        self.zones = tuple(self._zone_tokens)
        self._keep_expired = keep_expired_records
        self._client = _http_client or httpx.Client(timeout=30)

    def credential_for(self, zone: str) -> str:
        try:
            return self._zone_tokens[zone]
        except KeyError:
            raise MissingCredentialError(zone) from None

    def _parse(self, resp: httpx.Response, action: str) -> dict:
        try:
            resp.raise_for_status()
            return resp.json()
        except (httpx.HTTPStatusError, ValueError) as exc:
            raise TransportError(f"Unusable response to {action}: {exc}") from exc

    def rotate_challenges(
        self,
        zone: str,
        records_to_add: list[TxtRecord] | None = None,
        records_to_remove: list[TxtRecord] | None = None,
        keep_expired: bool | None = None,
        access_token: str | None = None,
    ) -> dict:
        """Add and/or remove challenge records in a single call.

        A side left as ``None`` is omitted from the request and left untouched.
        ``access_token`` defaults to the token configured for ``zone``.
        """
        body: dict = {"accessToken": access_token or self.credential_for(zone)}
        if isinstance(keep_expired, bool):
            body["keepExpiredRecords"] = keep_expired
        if records_to_add is not None:
            body["recordsToAdd"] = [_wire_record(r) for r in records_to_add]
        if records_to_remove is not None:
            body["recordsToRemove"] = [_wire_record(r) for r in records_to_remove]

        try:
            resp = self._client.post(f"{_API_BASE}/acmeChallengeSets/{zone}:rotateChallenges", json=body)
        except httpx.HTTPError as exc:
            raise TransportError(f"rotateChallenges for {zone} failed: {exc}") from exc
        return self._parse(resp, f"rotateChallenges for {zone}")

    def publish(self, target: ResolvedTarget, fqdn: str, digest: str) -> ProviderResult:
        record = rotate_record(fqdn, digest)
        try:
            self.rotate_challenges(
                target.zone,
                records_to_add=[record],
                keep_expired=self._keep_expired,
                access_token=target.credential,
            )
        except HookError as exc:
            logger.error("Failed to add %s to challenge set %s: %s", record.host, target.zone, exc)
            return ProviderResult.failed(str(exc))
        logger.info("Added TXT record %s to challenge set %s", record.host, target.zone)
        return ProviderResult.ok()

    def retract(self, target: ResolvedTarget, fqdn: str, digest: str) -> ProviderResult:
        record = rotate_record(fqdn, digest)
        try:
            self.rotate_challenges(
                target.zone,
                records_to_remove=[record],
                keep_expired=self._keep_expired,
                access_token=target.credential,
            )
        except HookError as exc:
            logger.error("Failed to remove %s from challenge set %s: %s", record.host, target.zone, exc)
            return ProviderResult.failed(str(exc))
        logger.info("Removed TXT record %s from challenge set %s", record.host, target.zone)
        return ProviderResult.ok()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

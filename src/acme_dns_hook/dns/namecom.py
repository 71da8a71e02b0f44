"""name.com DNS provider — create/delete TXT records via the name.com v4 REST API."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx

from acme_dns_hook.dns.base import DnsProvider
from acme_dns_hook.dns.util import build_record
from acme_dns_hook.errors import HookError, MissingCredentialError, RecordNotFoundError, TransportError
from acme_dns_hook.models import ProviderResult, ResolvedTarget, TxtRecord

logger = logging.getLogger(__name__)

_API_HOST = "api.name.com"
_PER_PAGE = 1000


class NameComDnsProvider(DnsProvider):
    """DNS provider backed by the name.com API, one account credential for all zones."""

    def __init__(
        self,
        username: str,
        token: str,
        zones: Sequence[str],
        api_host: str | None = None,
        _http_client: httpx.Client | None = None,
    ) -> None:
        self.zones = tuple(zones)
        self._username = username
        self._api_base = f"https://{api_host or _API_HOST}/v4"
        self._client = _http_client or httpx.Client(auth=(username, token), timeout=30)

    def credential_for(self, zone: str) -> str:
        # The account credential covers every zone, but only configured ones are managed.
        if zone not in self.zones:
            raise MissingCredentialError(zone)
        return self._username

    def _records_url(self, zone: str) -> str:
        return f"{self._api_base}/domains/{zone}/records"

    def list_records(self, zone: str) -> list[TxtRecord]:
        """List the TXT records of ``zone``, hosts fully qualified as the API reports them."""
        try:
            resp = self._client.get(self._records_url(zone), params={"perPage": _PER_PAGE})
            resp.raise_for_status()
            payload = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise TransportError(f"Listing records of {zone} failed: {exc}") from exc

        items = (payload.get("records") or []) if isinstance(payload, dict) else None
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            raise TransportError(f"Listing records of {zone} returned an unexpected body: {payload!r:.200}")

        return [
            TxtRecord(
                host=(item.get("fqdn") or "").strip(),
                value=item.get("answer", ""),
                ttl=item.get("ttl"),
            ).with_id(item.get("id"))
            for item in items
            if item.get("type", "TXT") == "TXT"
        ]

    def find_by_host(self, zone: str, fqdn: str, answer: str | None = None) -> TxtRecord:
        """Return the TXT record named ``fqdn``, with or without trailing dot.

        When ``answer`` is given the record value must match as well, so the
        right record is picked when a wildcard and its base domain share a name.
        """
        wanted = fqdn.strip().rstrip(".")
        for record in self.list_records(zone):
            if record.host.rstrip(".") != wanted:
                continue
            if answer is not None and record.value != answer:
                continue
            return record
        raise RecordNotFoundError(zone, fqdn)

    def create_record(self, zone: str, record: TxtRecord) -> dict:
        body = {"host": record.host, "type": "TXT", "answer": record.value, "ttl": record.ttl}
        try:
            resp = self._client.post(self._records_url(zone), json=body)
            resp.raise_for_status()
            return resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise TransportError(f"Creating {record.host} in {zone} failed: {exc}") from exc

    def delete_record(self, zone: str, record_id: int) -> None:
        try:
            self._client.delete(f"{self._records_url(zone)}/{record_id}").raise_for_status()
        except httpx.HTTPError as exc:
            raise TransportError(f"Deleting record {record_id} in {zone} failed: {exc}") from exc

    def publish(self, target: ResolvedTarget, fqdn: str, digest: str) -> ProviderResult:
        record = build_record(target.subdomain, digest)
        try:
            self.create_record(target.zone, record)
        except HookError as exc:
            logger.error("Failed to create TXT record %s in %s: %s", record.host, target.zone, exc)
            return ProviderResult.failed(str(exc))
        logger.info("Created TXT record %s.%s", record.host, target.zone)
        return ProviderResult.ok()

    def retract(self, target: ResolvedTarget, fqdn: str, digest: str) -> ProviderResult:
        record = build_record(target.subdomain, digest)
        name = f"{record.host}.{target.zone}"
        try:
            existing = self.find_by_host(target.zone, name, answer=digest)
            self.delete_record(target.zone, existing.record_id)
        except RecordNotFoundError:
            logger.info("TXT record %s not found in name.com, nothing to clean", name)
            return ProviderResult.ok()
        except HookError as exc:
            logger.error("Failed to delete TXT record %s: %s", name, exc)
            return ProviderResult.failed(str(exc))
        logger.info("Deleted TXT record %s", name)
        return ProviderResult.ok()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

"""Zone resolution and challenge record construction."""

from __future__ import annotations

from collections.abc import Iterable

from acme_dns_hook.models import UNKNOWN_ZONE, TxtRecord

CHALLENGE_LABEL = "_acme-challenge"
CHALLENGE_TTL = 300


def resolve_zone(fqdn: str | None, zones: Iterable[str]) -> str:
    """Return the first configured zone contained in ``fqdn``.

    This is a substring match in configuration order, not a longest-suffix
    match: with both ``example.com`` and ``sub.example.com`` configured, the
    one listed first wins. Returns ``"unknown"`` when nothing matches.
    """
    if fqdn:
        for zone in zones:
            zone = zone.strip()
            if zone and zone in fqdn:
                return zone
    return UNKNOWN_ZONE


def split_subdomain(fqdn: str, zone: str) -> str:
    """Return the part of ``fqdn`` in front of ``zone``.

    ``split_subdomain("www.example.com", "example.com")`` is ``"www"``; the
    zone apex gives ``""``.
    """
    if fqdn.strip() == zone.strip():
        return ""
    return fqdn.replace(f".{zone}", "", 1).strip()


def rotate_record(fqdn: str, digest: str) -> TxtRecord:
    """Challenge record for the batch-rotate API, addressed by full name."""
    return TxtRecord(host=f"{CHALLENGE_LABEL}.{fqdn}", value=digest)


def build_record(subdomain: str, digest: str) -> TxtRecord:
    """Challenge record for CRUD APIs, addressed relative to the zone."""
    host = f"{CHALLENGE_LABEL}.{subdomain}" if subdomain else CHALLENGE_LABEL
    return TxtRecord(host=host, value=digest, ttl=CHALLENGE_TTL)

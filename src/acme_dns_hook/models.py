"""Value objects passed between the CLI, the hook controller and DNS providers."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, replace
from enum import Enum

UNKNOWN_ZONE = "unknown"


class HookVerb(Enum):
    """Hook names understood by this hook. Everything else is ignored."""

    DEPLOY = "deploy_challenge"
    CLEAN = "clean_challenge"
    UNKNOWN = ""

    @classmethod
    def parse(cls, name: str | None) -> HookVerb:
        name = (name or "").strip()
        for verb in (cls.DEPLOY, cls.CLEAN):
            if verb.value == name:
                return verb
        return cls.UNKNOWN


@dataclass(frozen=True)
class ChallengeRequest:
    """One hook invocation: ``<verb> <fqdn> <ignored> <digest>``."""

    verb: HookVerb
    fqdn: str
    digest: str
    hook_name: str = ""

    @classmethod
    def from_args(cls, args: Sequence[str]) -> ChallengeRequest:
        """Build a request from positional arguments, excluding the program name.

        Missing trailing arguments are treated as empty strings. The third
        argument is reserved by the calling client for other hooks and unused.
        """
        padded = [str(a).strip() for a in args] + [""] * 4
        hook_name, fqdn, _unused, digest = padded[:4]
        return cls(verb=HookVerb.parse(hook_name), fqdn=fqdn, digest=digest, hook_name=hook_name)


@dataclass(frozen=True)
class ResolvedTarget:
    """An fqdn resolved against the configured zones."""

    zone: str
    subdomain: str
    credential: object = None


@dataclass(frozen=True)
class TxtRecord:
    """Provider-agnostic view of an ``_acme-challenge`` TXT record.

    ``ttl`` and ``record_id`` are only set for providers that use them; the id
    is known only after a lookup against the live zone.
    """

    host: str
    value: str
    ttl: int | None = None
    record_id: int | None = None

    def with_id(self, record_id: int) -> TxtRecord:
        return replace(self, record_id=record_id)


@dataclass(frozen=True)
class ProviderResult:
    """Outcome of a publish or retract call."""

    success: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> ProviderResult:
        return cls(success=True)

    @classmethod
    def failed(cls, error: str) -> ProviderResult:
        return cls(success=False, error=error)

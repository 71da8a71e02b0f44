"""Hook controller — drive a DNS provider for one deploy/clean invocation."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from enum import Enum

from acme_dns_hook.dns.base import DnsProvider
from acme_dns_hook.errors import ConfigError
from acme_dns_hook.models import ChallengeRequest, HookVerb

logger = logging.getLogger(__name__)

PROPAGATION_DELAY = 30


class HookState(Enum):
    IDLE = "idle"
    DISPATCHING = "dispatching"
    AWAITING_PROVIDER = "awaiting_provider"
    PROPAGATING = "propagating"
    DONE = "done"


class HookOutcome(Enum):
    SUCCESS = "success"
    FAILURE = "failure"

    @property
    def exit_code(self) -> int:
        return 0 if self is HookOutcome.SUCCESS else 1


class HookController:
    """Map a hook verb onto provider calls and report a single outcome.

    A successful deploy blocks for ``propagation_delay`` seconds before
    returning, since the ACME client asks for validation as soon as the hook
    exits. Clean and ignored verbs return immediately.
    """

    def __init__(
        self,
        provider: DnsProvider,
        propagation_delay: float = PROPAGATION_DELAY,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self._provider = provider
        self._propagation_delay = propagation_delay
        self._sleep = sleep or time.sleep
        self.state = HookState.IDLE

    def _transition(self, state: HookState) -> None:
        logger.debug("Hook state %s -> %s", self.state.value, state.value)
        self.state = state

    def handle(self, request: ChallengeRequest) -> HookOutcome:
        self._transition(HookState.DISPATCHING)
        if request.verb is HookVerb.UNKNOWN:
            logger.debug("Ignoring hook '%s'", request.hook_name)
            self._transition(HookState.DONE)
            return HookOutcome.SUCCESS

        try:
            target = self._provider.resolve_target(request.fqdn)
        except ConfigError as exc:
            logger.error("%s", exc)
            self._transition(HookState.DONE)
            return HookOutcome.FAILURE

        self._transition(HookState.AWAITING_PROVIDER)
        if request.verb is HookVerb.DEPLOY:
            result = self._provider.publish(target, request.fqdn, request.digest)
        else:
            result = self._provider.retract(target, request.fqdn, request.digest)

        if not result.success:
            self._transition(HookState.DONE)
            return HookOutcome.FAILURE

        if request.verb is HookVerb.DEPLOY:
            self._wait_for_propagation()

        self._transition(HookState.DONE)
        return HookOutcome.SUCCESS

    def _wait_for_propagation(self) -> None:
        self._transition(HookState.PROPAGATING)
        logger.info("Waiting %ss for propagation", self._propagation_delay)
        self._sleep(self._propagation_delay)

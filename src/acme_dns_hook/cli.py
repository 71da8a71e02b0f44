"""Command-line entry point: ``acme-dns-hook <hook> <fqdn> <unused> <digest>``."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence

from acme_dns_hook.config import load_config
from acme_dns_hook.dns import get_dns_provider
from acme_dns_hook.errors import ConfigError
from acme_dns_hook.hook import HookController, HookOutcome
from acme_dns_hook.models import ChallengeRequest, HookVerb

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    level = os.environ.get("LOG_LEVEL", "INFO").upper()
    if level not in logging.getLevelNamesMapping():
        level = "INFO"
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run(request: ChallengeRequest, config_path: str | None = None) -> HookOutcome:
    """Load configuration, build the provider and run the hook for ``request``."""
    if request.verb is HookVerb.UNKNOWN:
        logger.debug("Ignoring hook '%s'", request.hook_name)
        return HookOutcome.SUCCESS

    try:
        config = load_config(config_path)
        provider = get_dns_provider(config)
    except ConfigError as exc:
        logger.error("%s", exc)
        return HookOutcome.FAILURE

    with provider:
        return HookController(provider).handle(request)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the hook and return the process exit status."""
    _configure_logging()
    args = sys.argv[1:] if argv is None else argv
    return run(ChallengeRequest.from_args(args)).exit_code

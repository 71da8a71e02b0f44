"""Configuration loading and validation from the hook's JSON config file."""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from acme_dns_hook.errors import ConfigError

_DEFAULT_CONFIG_FILE = "config.ini"
_CONFIG_ENV = "ACME_DNS_HOOK_CONFIG"
_PROVIDER_ENV = "DNS_PROVIDER"

PROVIDER_GOOGLE = "google"
PROVIDER_NAMECOM = "namecom"


@dataclass(frozen=True)
class HookConfig:
    """Hook configuration, loaded once per process and never mutated.

    ``zone_tokens`` keeps the configured order, which decides which zone wins
    when several of them match an fqdn.
    """

    provider: str
    zone_tokens: dict[str, str] = field(default_factory=dict)
    zones: tuple[str, ...] = ()
    username: str | None = None
    token: str | None = None
    api_host: str | None = None
    keep_expired_records: bool | None = None


def _config_path(path: str | os.PathLike | None) -> Path:
    if path:
        return Path(path)
    if os.environ.get(_CONFIG_ENV):
        return Path(os.environ[_CONFIG_ENV])
    # The calling client keeps its own working directory.
    beside_hook = Path(sys.argv[0]).resolve().parent / _DEFAULT_CONFIG_FILE
    if beside_hook.is_file():
        return beside_hook
    return Path(_DEFAULT_CONFIG_FILE)


def _read_json(path: Path) -> dict:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read config file {path}: {exc}") from exc
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise ConfigError(f"Config file {path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return data


def _require_str(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"Required config key '{key}' is not set")
    return value


def _detect_provider(data: dict) -> str:
    provider = data.get("provider") or os.environ.get(_PROVIDER_ENV)
    if provider:
        return str(provider).lower()
    domains = data.get("domains")
    if isinstance(domains, dict):
        return PROVIDER_GOOGLE
    if isinstance(domains, list):
        return PROVIDER_NAMECOM
    raise ConfigError("No domains defined in config")


def _load_google(data: dict) -> HookConfig:
    domains = data.get("domains")
    if not isinstance(domains, dict) or not domains:
        raise ConfigError("No domains defined in config")
    zone_tokens = {}
    for zone, token in domains.items():
        if not isinstance(token, str):
            raise ConfigError(f"Token for domain '{zone}' must be a string")
        zone_tokens[zone.strip()] = token

    keep_expired = data.get("keepExpiredRecords")
    if keep_expired is not None and not isinstance(keep_expired, bool):
        raise ConfigError(f"keepExpiredRecords must be a boolean, got: {keep_expired!r}")

    return HookConfig(
        provider=PROVIDER_GOOGLE,
        zone_tokens=zone_tokens,
        zones=tuple(zone_tokens),
        keep_expired_records=keep_expired,
    )


def _load_namecom(data: dict) -> HookConfig:
    username = data.get("username")
    token = data.get("token")
    if not username or not token:
        raise ConfigError("No username and/or token defined in config")
    if not isinstance(username, str) or not isinstance(token, str):
        raise ConfigError("username and token must be strings")

    domains = data.get("domains")
    if not isinstance(domains, list) or not domains:
        raise ConfigError("No domains defined in config")
    if not all(isinstance(zone, str) for zone in domains):
        raise ConfigError("domains must be a list of strings")

    api_host = data.get("api_host")
    if api_host is not None:
        api_host = _require_str(data, "api_host")

    return HookConfig(
        provider=PROVIDER_NAMECOM,
        zones=tuple(zone.strip() for zone in domains),
        username=username,
        token=token,
        api_host=api_host,
    )


def load_config(path: str | os.PathLike | None = None) -> HookConfig:
    """Load and validate the hook configuration.

    The file is looked up at ``path``, then ``$ACME_DNS_HOOK_CONFIG``, then
    ``config.ini`` beside the hook executable, then in the working directory.
    Raises ConfigError on any problem.
    """
    config_path = _config_path(path)
    data = _read_json(config_path)
    provider = _detect_provider(data)

    if provider == PROVIDER_GOOGLE:
        return _load_google(data)
    if provider == PROVIDER_NAMECOM:
        return _load_namecom(data)
    raise ConfigError(f"Unknown DNS provider: '{provider}'")

"""Shared test fixtures for acme-dns-hook."""

import json

import pytest


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep the developer's environment out of config lookups."""
    monkeypatch.delenv("ACME_DNS_HOOK_CONFIG", raising=False)
    monkeypatch.delenv("DNS_PROVIDER", raising=False)


@pytest.fixture
def write_config(tmp_path):
    def _write(data, name="config.ini"):
        path = tmp_path / name
        path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
        return path

    return _write

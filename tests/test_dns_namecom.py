"""Tests for name.com DNS provider."""

from unittest.mock import MagicMock, patch

import httpx
import pytest

from acme_dns_hook.dns.namecom import NameComDnsProvider
from acme_dns_hook.dns.util import build_record
from acme_dns_hook.errors import MissingCredentialError, RecordNotFoundError, TransportError
from acme_dns_hook.models import ResolvedTarget

_BASE = "https://api.name.com/v4"

_RECORDS = {
    "records": [
        {"id": 11, "host": "www", "fqdn": "www.example.com.", "type": "A", "answer": "10.0.0.1", "ttl": 300},
        {
            "id": 12,
            "host": "_acme-challenge.foo",
            "fqdn": "_acme-challenge.foo.example.com.",
            "type": "TXT",
            "answer": "old",
            "ttl": 300,
        },
        {
            "id": 13,
            "host": "_acme-challenge.foo",
            "fqdn": "_acme-challenge.foo.example.com",
            "type": "TXT",
            "answer": "abc",
            "ttl": 300,
        },
    ]
}


def _response(payload=None):
    return MagicMock(
        status_code=200,
        json=MagicMock(return_value=payload if payload is not None else {}),
        raise_for_status=MagicMock(),
    )


def _provider(mock_client, **kwargs):
    return NameComDnsProvider(
        username="u",
        token="t",
        zones=["example.com"],
        _http_client=mock_client,
        **kwargs,
    )


_TARGET = ResolvedTarget(zone="example.com", subdomain="foo", credential="u")


class TestNameComCredentials:
    def test_configured_zone(self):
        assert _provider(MagicMock()).credential_for("example.com") == "u"

    def test_unknown_zone_fails_closed(self):
        with pytest.raises(MissingCredentialError, match="unknown"):
            _provider(MagicMock()).credential_for("unknown")

    def test_client_uses_basic_auth(self):
        with patch("acme_dns_hook.dns.namecom.httpx.Client") as mock_cls:
            NameComDnsProvider(username="user", token="secret", zones=["example.com"])
            mock_cls.assert_called_once_with(auth=("user", "secret"), timeout=30)


class TestNameComListRecords:
    def test_returns_txt_records_only(self):
        mock_client = MagicMock()
        mock_client.get.return_value = _response(_RECORDS)

        records = _provider(mock_client).list_records("example.com")

        assert [r.record_id for r in records] == [12, 13]
        assert records[0].host == "_acme-challenge.foo.example.com."
        assert records[0].value == "old"
        mock_client.get.assert_called_once_with(f"{_BASE}/domains/example.com/records", params={"perPage": 1000})

    def test_empty_zone(self):
        mock_client = MagicMock()
        mock_client.get.return_value = _response({})

        assert _provider(mock_client).list_records("example.com") == []

    def test_sandbox_host(self):
        mock_client = MagicMock()
        mock_client.get.return_value = _response({})

        _provider(mock_client, api_host="api.dev.name.com").list_records("example.com")

        assert mock_client.get.call_args.args[0] == "https://api.dev.name.com/v4/domains/example.com/records"

    def test_http_error_is_transport_error(self):
        mock_client = MagicMock()
        mock_client.get.side_effect = httpx.ConnectError("refused")

        with pytest.raises(TransportError, match="Listing records of example.com"):
            _provider(mock_client).list_records("example.com")

    @pytest.mark.parametrize("payload", [[], {"records": {"id": 1}}, {"records": ["_acme-challenge"]}])
    def test_unexpected_body_is_transport_error(self, payload):
        mock_client = MagicMock()
        mock_client.get.return_value = _response(payload)

        with pytest.raises(TransportError, match="unexpected body"):
            _provider(mock_client).list_records("example.com")


class TestNameComFindByHost:
    def test_matches_with_and_without_trailing_dot(self):
        mock_client = MagicMock()
        mock_client.get.return_value = _response(_RECORDS)
        provider = _provider(mock_client)

        assert provider.find_by_host("example.com", "_acme-challenge.foo.example.com").record_id == 12
        assert provider.find_by_host("example.com", "_acme-challenge.foo.example.com.").record_id == 12

    def test_answer_narrows_match(self):
        mock_client = MagicMock()
        mock_client.get.return_value = _response(_RECORDS)

        record = _provider(mock_client).find_by_host("example.com", "_acme-challenge.foo.example.com", answer="abc")

        assert record.record_id == 13

    def test_not_found(self):
        mock_client = MagicMock()
        mock_client.get.return_value = _response(_RECORDS)

        with pytest.raises(RecordNotFoundError):
            _provider(mock_client).find_by_host("example.com", "_acme-challenge.bar.example.com")


class TestNameComPublish:
    def test_creates_record(self):
        mock_client = MagicMock()
        mock_client.post.return_value = _response({"id": 99})

        result = _provider(mock_client).publish(_TARGET, "foo.example.com", "abc")

        assert result.success
        mock_client.post.assert_called_once_with(
            f"{_BASE}/domains/example.com/records",
            json={"host": "_acme-challenge.foo", "type": "TXT", "answer": "abc", "ttl": 300},
        )

    def test_create_record_returns_payload(self):
        mock_client = MagicMock()
        mock_client.post.return_value = _response({"id": 99})

        assert _provider(mock_client).create_record("example.com", build_record("", "d")) == {"id": 99}

    def test_http_status_failure_is_reported(self):
        mock_client = MagicMock()
        request = httpx.Request("POST", f"{_BASE}/domains/example.com/records")
        mock_client.post.return_value = httpx.Response(401, json={"message": "Unauthenticated"}, request=request)

        result = _provider(mock_client).publish(_TARGET, "foo.example.com", "abc")

        assert not result.success
        assert "401" in result.error


class TestNameComRetract:
    def test_finds_and_deletes_record(self):
        mock_client = MagicMock()
        mock_client.get.return_value = _response(_RECORDS)
        mock_client.delete.return_value = _response()

        result = _provider(mock_client).retract(_TARGET, "foo.example.com", "abc")

        assert result.success
        mock_client.delete.assert_called_once_with(f"{_BASE}/domains/example.com/records/13")

    def test_missing_record_is_success(self):
        mock_client = MagicMock()
        mock_client.get.return_value = _response({"records": []})

        result = _provider(mock_client).retract(_TARGET, "foo.example.com", "abc")

        assert result.success
        mock_client.delete.assert_not_called()

    def test_malformed_listing_is_reported(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=[])

        client = httpx.Client(transport=httpx.MockTransport(handler))
        provider = NameComDnsProvider(username="u", token="t", zones=["example.com"], _http_client=client)

        result = provider.retract(_TARGET, "foo.example.com", "abc")

        assert not result.success
        assert "unexpected body" in result.error

    def test_delete_failure_is_reported(self):
        mock_client = MagicMock()
        mock_client.get.return_value = _response(_RECORDS)
        mock_client.delete.side_effect = httpx.ReadTimeout("timed out")

        result = _provider(mock_client).retract(_TARGET, "foo.example.com", "abc")

        assert not result.success
        assert "Deleting record 13" in result.error

    def test_close_closes_http_client(self):
        mock_client = MagicMock()

        _provider(mock_client).close()

        mock_client.close.assert_called_once()

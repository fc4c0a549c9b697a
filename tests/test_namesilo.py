"""Tests for the NameSilo API client."""

from __future__ import annotations

import logging

import httpx
import pytest

from namesilo_ddns.errors import APIError, DecodeError, TransportError
from namesilo_ddns.models import RecordType
from namesilo_ddns.namesilo import RECORD_TTL, NameSiloClient


@pytest.fixture
def api(http_client):
    return NameSiloClient(http_client, "K")


class TestListRecords:
    """Tests for NameSiloClient.list_records."""

    def test_returns_records(self, fake_server, api):
        fake_server.set_reply(
            "dnsListRecords",
            resource_record=[
                {"record_id": "r1", "type": "A", "host": "home.example.com",
                 "value": "192.0.2.1", "ttl": "7207", "distance": 0},
                {"record_id": "r2", "type": "MX", "host": "example.com",
                 "value": "mail.example.com", "ttl": "3600", "distance": 10},
            ],
        )
        records = api.list_records("example.com")
        assert [r.record_id for r in records] == ["r1", "r2"]

    def test_query_parameters(self, fake_server, api):
        api.list_records("example.com")
        (request,) = fake_server.requests
        assert request.method == "GET"
        assert request.url.host == "www.namesilo.com"
        assert request.url.path == "/api/dnsListRecords"
        assert dict(request.url.params) == {
            "version": "1",
            "type": "json",
            "key": "K",
            "domain": "example.com",
        }

    def test_api_error_carries_detail(self, fake_server, api):
        fake_server.set_reply("dnsListRecords", code=110, detail="Invalid API Key")
        with pytest.raises(APIError) as exc_info:
            api.list_records("example.com")
        assert exc_info.value.code == 110
        assert exc_info.value.detail == "Invalid API Key"
        assert "Invalid API Key" in str(exc_info.value)
        # No retry
        assert len(fake_server.requests) == 1

    def test_invalid_json(self, fake_server, api):
        fake_server.set_raw_reply("dnsListRecords", "<html>oops</html>")
        with pytest.raises(DecodeError, match="Failed to parse JSON"):
            api.list_records("example.com")

    def test_unexpected_shape(self, fake_server, api):
        fake_server.set_raw_reply("dnsListRecords", '{"reply": {"code": "abc"}}')
        with pytest.raises(DecodeError, match="Unexpected response shape"):
            api.list_records("example.com")

    def test_json_array_is_unexpected_shape(self, fake_server, api):
        fake_server.set_raw_reply("dnsListRecords", "[1, 2]")
        with pytest.raises(DecodeError, match="Unexpected response shape"):
            api.list_records("example.com")

    def test_missing_code_is_api_error(self, fake_server, api):
        fake_server.set_raw_reply("dnsListRecords", '{"reply": {"detail": "no code"}}')
        with pytest.raises(APIError) as exc_info:
            api.list_records("example.com")
        assert exc_info.value.code == 0
        assert exc_info.value.detail == "no code"

    def test_body_text_not_decoded_without_debug(self, api, monkeypatch):
        def fail(_self):
            msg = "response text decoded"
            raise AssertionError(msg)

        monkeypatch.setattr(httpx.Response, "text", property(fail))
        module_logger = logging.getLogger("namesilo_ddns.namesilo")
        previous_level = module_logger.level
        module_logger.setLevel(logging.INFO)
        try:
            assert api.list_records("example.com") == []
        finally:
            module_logger.setLevel(previous_level)

    def test_body_logged_in_debug(self, api, caplog):
        with caplog.at_level(logging.DEBUG, logger="namesilo_ddns.namesilo"):
            api.list_records("example.com")
        assert any("[namesilo] Response:" in r.getMessage() for r in caplog.records)

    def test_transport_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        with httpx.Client(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(TransportError, match="timed out"):
                NameSiloClient(client, "K").list_records("example.com")


class TestAddRecord:
    """Tests for NameSiloClient.add_record."""

    def test_add_parameters(self, fake_server, api):
        response = api.add_record("example.com", RecordType.A, "home", "203.0.113.5")
        assert response.reply.record_id == "new-id"

        (request,) = fake_server.calls("dnsAddRecord")
        assert dict(request.url.params) == {
            "version": "1",
            "type": "json",
            "key": "K",
            "domain": "example.com",
            "rrtype": "A",
            "rrhost": "home",
            "rrvalue": "203.0.113.5",
            "rrttl": "7207",
        }

    def test_default_ttl(self):
        assert RECORD_TTL == 7207

    def test_api_error(self, fake_server, api):
        fake_server.set_reply("dnsAddRecord", code=280, detail="Invalid record")
        with pytest.raises(APIError, match="Invalid record"):
            api.add_record("example.com", RecordType.A, "home", "203.0.113.5")
        assert len(fake_server.requests) == 1

    def test_invalid_json(self, fake_server, api):
        fake_server.set_raw_reply("dnsAddRecord", "<html>Service Unavailable</html>")
        with pytest.raises(DecodeError, match="Failed to parse JSON"):
            api.add_record("example.com", RecordType.A, "home", "203.0.113.5")


class TestUpdateRecord:
    """Tests for NameSiloClient.update_record."""

    def test_update_parameters(self, fake_server, api):
        response = api.update_record("example.com", "r1", "home", "203.0.113.5")
        assert response.is_success

        (request,) = fake_server.calls("dnsUpdateRecord")
        assert dict(request.url.params) == {
            "version": "1",
            "type": "json",
            "key": "K",
            "domain": "example.com",
            "rrid": "r1",
            "rrhost": "home",
            "rrvalue": "203.0.113.5",
            "rrttl": "7207",
        }

    def test_values_are_url_encoded(self, fake_server, api):
        api.update_record("example.com", "r1", "txt", "v=spf1 include:_spf.example.com ~all")
        (request,) = fake_server.calls("dnsUpdateRecord")
        assert request.url.params["rrvalue"] == "v=spf1 include:_spf.example.com ~all"

    def test_api_error(self, fake_server, api):
        fake_server.set_reply("dnsUpdateRecord", code=280, detail="Record not found")
        with pytest.raises(APIError) as exc_info:
            api.update_record("example.com", "r1", "home", "203.0.113.5")
        assert exc_info.value.detail == "Record not found"
        assert len(fake_server.requests) == 1

    def test_invalid_json(self, fake_server, api):
        fake_server.set_raw_reply("dnsUpdateRecord", "")
        with pytest.raises(DecodeError, match="Failed to parse JSON"):
            api.update_record("example.com", "r1", "home", "203.0.113.5")

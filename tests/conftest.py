"""Shared fixtures: a fake NameSilo API and IP echo service over httpx.MockTransport."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import httpx
import pytest


def namesilo_reply(code: int = 300, detail: str = "success", **reply) -> dict:
    """Build a NameSilo JSON envelope."""
    return {
        "request": {"operation": "test", "ip": "198.51.100.1"},
        "reply": {"code": code, "detail": detail, **reply},
    }


class FakeDNSServer:
    """
    Records every request and answers NameSilo and ipw.cn calls.

    Replies are configured per operation; the IP echo answers with `ip`.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.ip = "203.0.113.5"
        self.replies: dict[str, dict | str] = {
            "dnsListRecords": namesilo_reply(resource_record=[]),
            "dnsAddRecord": namesilo_reply(record_id="new-id"),
            "dnsUpdateRecord": namesilo_reply(record_id="updated-id"),
        }

    def set_reply(
        self,
        operation: str,
        code: int = 300,
        detail: str = "success",
        **reply,
    ) -> None:
        """Configure the JSON reply of a NameSilo operation."""
        self.replies[operation] = namesilo_reply(code, detail, **reply)

    def set_raw_reply(self, operation: str, body: str) -> None:
        """Configure a raw (non-JSON) body for a NameSilo operation."""
        self.replies[operation] = body

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host in {"4.ipw.cn", "6.ipw.cn"}:
            return httpx.Response(200, text=f"{self.ip}\n")
        operation = request.url.path.rsplit("/", 1)[-1]
        reply = self.replies[operation]
        if isinstance(reply, str):
            return httpx.Response(200, text=reply)
        return httpx.Response(200, json=reply)

    def calls(self, operation: str) -> list[httpx.Request]:
        """Requests made to a NameSilo operation or an echo host."""
        return [
            r
            for r in self.requests
            if r.url.path.endswith(f"/{operation}") or r.url.host == operation
        ]


@pytest.fixture
def fake_server() -> FakeDNSServer:
    return FakeDNSServer()


@pytest.fixture
def http_client(fake_server: FakeDNSServer) -> Iterator[httpx.Client]:
    with httpx.Client(transport=httpx.MockTransport(fake_server)) as client:
        yield client


@pytest.fixture
def test_logger() -> logging.Logger:
    logger = logging.getLogger("tests.namesilo_ddns")
    logger.setLevel(logging.DEBUG)
    return logger

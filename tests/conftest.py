"""Pytest configuration - loads .env for integration tests and provides a fake transport."""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from dotenv import load_dotenv

from cfdns_cli.core.client import APIClient
from cfdns_cli.sdk import CloudflareClient

# Load .env from project root
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(env_path)


def envelope(result: Any = None, *, success: bool = True, errors: list | None = None, result_info: dict | None = None):
    """Build a Cloudflare response envelope."""
    body: dict[str, Any] = {
        "success": success,
        "errors": errors or [],
        "messages": [],
        "result": result,
    }
    if result_info is not None:
        body["result_info"] = result_info
    return body


class FakeResponse:
    """Stands in for the object returned by OpenerDirector.open()."""

    def __init__(self, body: bytes = b"", error: BaseException | None = None):
        self._body = body
        self._error = error

    def read(self) -> bytes:
        if self._error is not None:
            raise self._error
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class FakeOpener:
    """
    Records every request and answers with queued replies.

    A reply may be a dict (sent as JSON), raw bytes, a FakeResponse, or an
    exception to raise from open(). Passing ``handler`` instead computes the
    reply from the request.
    """

    def __init__(self, replies: list | None = None, handler: Callable | None = None):
        self.requests: list = []
        self.timeouts: list = []
        self._replies = list(replies or [])
        self._handler = handler

    def open(self, request, timeout=None):
        self.requests.append(request)
        self.timeouts.append(timeout)
        reply = self._handler(request) if self._handler else self._replies.pop(0)

        if isinstance(reply, BaseException):
            raise reply
        if isinstance(reply, FakeResponse):
            return reply
        if isinstance(reply, bytes):
            return FakeResponse(reply)
        return FakeResponse(json.dumps(reply).encode("utf-8"))


@pytest.fixture
def make_client() -> Callable[..., tuple[APIClient, FakeOpener]]:
    """Create an APIClient wired to a FakeOpener."""

    def _make(replies: list | None = None, handler: Callable | None = None, token: str = "test-token"):
        opener = FakeOpener(replies, handler)
        return APIClient(token, opener=opener), opener

    return _make


@pytest.fixture
def make_cloudflare() -> Callable[..., tuple[CloudflareClient, FakeOpener]]:
    """Create a CloudflareClient wired to a FakeOpener."""

    def _make(replies: list | None = None, handler: Callable | None = None, token: str = "test-token"):
        opener = FakeOpener(replies, handler)
        return CloudflareClient(token, opener=opener), opener

    return _make

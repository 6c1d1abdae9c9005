"""Client test fixtures — scripted upstream behind httpx.MockTransport.

Invariants:
    - MockUpstream replays one scripted response per request, in order
    - Every request is recorded (method, path, json body, headers) for call-count assertions
    - time.sleep is replaced by a recorder: retry tests never actually wait

Design Decisions:
    - Real httpx.Client over MockTransport: exercises the same request/response
      objects the production transport produces
"""

import json

import httpx
import pytest

from employee_api.infrastructure.employee_client import ResilientEmployeeClient

BASE_URL = "http://upstream.test/api/v1/employee"


class MockUpstream:
    """Scripted upstream: each item is an httpx.Response or an exception to raise."""

    def __init__(self):
        self.script = []
        self.requests = []

    def queue(self, *items):
        self.script.extend(items)
        return self

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content) if request.content else None
        self.requests.append({
            "method": request.method,
            "path": request.url.path,
            "raw_path": request.url.raw_path.decode("ascii"),
            "json": body,
            "headers": request.headers,
        })
        if not self.script:
            raise AssertionError(f"Unexpected upstream call: {request.method} {request.url}")
        item = self.script.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    @property
    def methods(self):
        return [r["method"] for r in self.requests]


def envelope(data, status=200, **extra):
    """Upstream success envelope."""
    return httpx.Response(
        status, json={"data": data, "status": "Handled successfully.", **extra},
    )


def rate_limited(retry_after=None):
    headers = {"Retry-After": str(retry_after)} if retry_after is not None else {}
    return httpx.Response(429, json={"error": "Too Many Requests"}, headers=headers)


@pytest.fixture
def upstream():
    return MockUpstream()


@pytest.fixture
def sleeps(monkeypatch):
    """Record requested sleep durations (seconds) instead of sleeping."""
    calls = []
    monkeypatch.setattr("time.sleep", calls.append)
    return calls


@pytest.fixture
def client(upstream, sleeps):
    c = ResilientEmployeeClient(
        BASE_URL, transport=httpx.MockTransport(upstream.handler),
    )
    yield c
    c.close()


@pytest.fixture(name="envelope")
def envelope_fixture():
    return envelope


@pytest.fixture(name="rate_limited")
def rate_limited_fixture():
    return rate_limited

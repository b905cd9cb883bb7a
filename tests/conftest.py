"""Global pytest fixtures & helpers.

Adds project root to path and provides a fake HTTP server (a stand-in for
``requests.Session``) that routes GETs by URL path to canned bodies or
handler callables, plus client factories wired to it.
"""
from __future__ import annotations

import os
import sys
import threading
from pathlib import Path
from urllib.parse import parse_qs, urlsplit

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from rwgps_client import rwgps_api
from rwgps_client.credentials import Credentials
from rwgps_client.rwgps_api import RideWithGPSClient

FIXTURES = Path(__file__).parent / "fixtures"
BASE_URL = "http://rwgps.test"
GOOD_TOKENS = {"beef1337", "ffffff"}


def load_fixture(name: str) -> str:
    return (FIXTURES / name).read_text(encoding="utf-8")


class FakeResp:
    """Minimal fake response matching needed parts of requests.Response."""

    def __init__(self, status_code=200, text="", reason=None):
        self.status_code = status_code
        self.text = text
        self.reason = reason if reason is not None else ("OK" if status_code == 200 else "")


def default_auth(path, query):
    def arg(key):
        return query.get(key, [""])[-1]

    if arg("auth_token") in GOOD_TOKENS:
        return load_fixture("current.json")
    if arg("email") == "test@example.com" and arg("password") == "supers3cret":
        return load_fixture("current.json")
    return "401 bad auth"


class FakeServer:
    """Routes ``get(url)`` calls like a tiny test HTTP server."""

    def __init__(self, static=None, dynamic=None):
        self.static = dict(static or {})
        self.dynamic = dict(dynamic or {})
        self.dynamic.setdefault("/users/current.json", default_auth)
        self.calls = []
        self._lock = threading.Lock()

    def get(self, url, timeout=None):
        parts = urlsplit(url)
        query = parse_qs(parts.query, keep_blank_values=True)
        with self._lock:
            self.calls.append((parts.path, query, url))
        if parts.path in self.static:
            return FakeResp(200, self.static[parts.path])
        handler = self.dynamic.get(parts.path)
        if handler is not None:
            result = handler(parts.path, query)
            if isinstance(result, FakeResp):
                return result
            return FakeResp(200, result)
        return FakeResp(404, f"404 Not found: {parts.path!r}", reason="Not Found")

    def calls_to(self, path):
        return [call for call in self.calls if call[0] == path]

    def logins(self):
        """Current-user calls made with email/password."""
        return [q for _, q, _ in self.calls_to("/users/current.json") if "email" in q]


def make_credentials(password="supers3cret"):
    return Credentials(email="test@example.com", password=password, api_key="test key")


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def fixture_text():
    return load_fixture


@pytest.fixture
def credentials():
    return make_credentials()


@pytest.fixture
def make_server():
    def _make(static=None, dynamic=None):
        return FakeServer(static=static, dynamic=dynamic)

    return _make


@pytest.fixture
def make_client():
    def _make(server, password="supers3cret", **kwargs):
        kwargs.setdefault("base_url", BASE_URL)
        return RideWithGPSClient(make_credentials(password), session=server, **kwargs)

    return _make


@pytest.fixture(autouse=True)
def reset_default_client():
    rwgps_api.set_default_client(None)
    yield
    rwgps_api.set_default_client(None)

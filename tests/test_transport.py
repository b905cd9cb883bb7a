from urllib.parse import parse_qsl, urlsplit

import pytest
import requests

from rwgps_client.client.transport import Transport
from rwgps_client.errors import TransportError


def test_get_returns_body_for_static_paths(make_server):
    server = make_server(static={"/": "test", "/path": "something"})
    transport = Transport("http://rwgps.test", session=server)

    assert transport.get("/") == "test"
    assert transport.get("/path") == "something"


def test_build_url_with_and_without_base():
    transport = Transport("http://rwgps.test", session=object())
    assert transport.build_url("/trips/1.json") == "http://rwgps.test/trips/1.json"

    bare = Transport("", session=object())
    assert bare.build_url("http://other.test/x") == "http://other.test/x"


def test_build_url_encodes_params_in_order_and_keeps_duplicates():
    transport = Transport("http://rwgps.test", session=object())
    url = transport.build_url(
        "/users/current.json",
        [("email", "a b@example.com"), ("version", "1"), ("version", "2")],
    )
    parts = urlsplit(url)
    assert parts.path == "/users/current.json"
    assert parse_qsl(parts.query) == [
        ("email", "a b@example.com"),
        ("version", "1"),
        ("version", "2"),
    ]


def test_no_query_string_for_empty_params():
    transport = Transport("http://rwgps.test", session=object())
    assert "?" not in transport.build_url("/x", {})
    assert "?" not in transport.build_url("/x", None)


def test_non_200_raises_with_status_text(make_server):
    transport = Transport("http://rwgps.test", session=make_server())

    with pytest.raises(TransportError) as excinfo:
        transport.get("/missing", context="probe")

    err = excinfo.value
    assert err.status_code == 404
    assert err.status == "404 Not Found"
    assert err.path == "/missing"
    assert "404 Not Found" in str(err)
    assert str(err).startswith("probe:")


def test_network_error_is_wrapped():
    class BrokenSession:
        def get(self, url, timeout=None):
            raise requests.ConnectionError("connection refused")

    transport = Transport("http://rwgps.test", session=BrokenSession())
    with pytest.raises(TransportError) as excinfo:
        transport.get("/users/current.json")

    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)


def test_timeout_is_passed_to_session():
    seen = {}

    class RecordingSession:
        def get(self, url, timeout=None):
            seen["timeout"] = timeout
            return type("R", (), {"status_code": 200, "text": "ok", "reason": "OK"})()

    Transport("http://rwgps.test", session=RecordingSession(), timeout=3.5).get("/")
    assert seen["timeout"] == 3.5

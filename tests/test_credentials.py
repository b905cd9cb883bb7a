import logging

import pytest

from rwgps_client.credentials import (
    Credentials,
    credentials_from_env,
    env_auth_token,
    load_credentials,
)
from rwgps_client.errors import ConfigError


def test_load_credentials_from_ini(tmp_path):
    path = tmp_path / "cfg.ini"
    path.write_text(
        "\n".join(
            [
                "[Auth]",
                "email = test@example.com",
                "password = supers3cret",
                'name = "test key"',
            ]
        )
    )

    got = load_credentials(str(path))

    assert got == Credentials(
        email="test@example.com",
        password="supers3cret",
        api_key="test key",
        source_path=str(path),
    )


def test_unknown_sections_are_logged_not_fatal(tmp_path, caplog):
    path = tmp_path / "cfg.ini"
    path.write_text("[Auth]\nemail = a@b.c\npassword = p\nname = k\n[Extra]\nfoo = bar\n")

    with caplog.at_level(logging.WARNING, logger="rwgps_client.credentials"):
        got = load_credentials(str(path))

    assert got.email == "a@b.c"
    assert "Extra" in caplog.text


def test_missing_file_raises_config_error(tmp_path):
    with pytest.raises(ConfigError):
        load_credentials(str(tmp_path / "nope.ini"))


def test_malformed_file_raises_config_error(tmp_path):
    path = tmp_path / "cfg.ini"
    path.write_text("email = no section header\n")

    with pytest.raises(ConfigError):
        load_credentials(str(path))


def test_password_not_in_repr():
    creds = Credentials(email="a@b.c", password="hunter2", api_key="k")
    assert "hunter2" not in repr(creds)


def test_credentials_from_env(monkeypatch):
    monkeypatch.setenv("RWGPS_EMAIL", "env@example.com")
    monkeypatch.setenv("RWGPS_PASSWORD", "pw")
    monkeypatch.setenv("RWGPS_API_KEY", "key")
    monkeypatch.setenv("RWGPS_AUTH_TOKEN", "beef1337")

    creds = credentials_from_env()

    assert (creds.email, creds.password, creds.api_key) == ("env@example.com", "pw", "key")
    assert env_auth_token() == "beef1337"


def test_env_auth_token_absent(monkeypatch):
    monkeypatch.delenv("RWGPS_AUTH_TOKEN", raising=False)
    assert env_auth_token() is None

"""Account credentials and the loaders that produce them.

Credentials come either from an INI file with an ``[Auth]`` section::

    [Auth]
    email = someone@example.com
    password = supers3cret
    name = "my api key"

or from the ``RWGPS_EMAIL`` / ``RWGPS_PASSWORD`` / ``RWGPS_API_KEY``
environment variables (a local ``.env`` is honoured, see ``config``).
"""

from __future__ import annotations

import configparser
import logging
import os
from dataclasses import dataclass, field

from .config import AUTH_SECTION, RWGPS_CONFIG_PATH
from .errors import ConfigError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Credentials:
    email: str
    password: str = field(repr=False)
    api_key: str
    # Where the values were loaded from, if a file.
    source_path: str | None = None


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


def load_credentials(path: str | None = None) -> Credentials:
    """Read credentials from the ``[Auth]`` section of an INI file.

    Unknown sections are logged and ignored. Missing keys become empty
    strings; the remote API rejects them at login time.

    Raises:
        ConfigError: If the file is missing, unreadable or not valid INI.
    """
    path = path or RWGPS_CONFIG_PATH
    parser = configparser.ConfigParser(interpolation=None)
    try:
        with open(path, encoding="utf-8") as fh:
            parser.read_file(fh)
    except OSError as exc:
        raise ConfigError(f"can't load config from {path!r}: {exc}") from exc
    except configparser.Error as exc:
        raise ConfigError(f"error loading ini file from {path!r}: {exc}") from exc

    email = password = api_key = ""
    for name in parser.sections():
        if name == AUTH_SECTION:
            section = parser[name]
            email = _unquote(section.get("email", ""))
            password = _unquote(section.get("password", ""))
            api_key = _unquote(section.get("name", ""))
        else:
            LOGGER.warning("Bad section in ini: %r", name)

    if not email:
        LOGGER.warning("No email configured in %s", path)
    return Credentials(
        email=email, password=password, api_key=api_key, source_path=path
    )


def credentials_from_env() -> Credentials:
    """Build credentials from ``RWGPS_*`` environment variables."""

    return Credentials(
        email=os.getenv("RWGPS_EMAIL", ""),
        password=os.getenv("RWGPS_PASSWORD", ""),
        api_key=os.getenv("RWGPS_API_KEY", ""),
    )


def env_auth_token() -> str | None:
    """Return a pre-issued auth token from ``RWGPS_AUTH_TOKEN``, if set."""

    return os.getenv("RWGPS_AUTH_TOKEN") or None

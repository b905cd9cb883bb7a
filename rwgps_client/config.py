"""Central configuration for the RideWithGPS client.

All values are constants imported by the rest of the package. Each one can be
overridden from the environment (optionally via a local `.env`). Credentials
are never hardcoded here; see ``rwgps_client.credentials``.
"""

from __future__ import annotations

import os

from dotenv import load_dotenv


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


# Load .env from the current directory or any parent folder.
load_dotenv()


# ---------------------------------------------------------------------------
# RideWithGPS API
# ---------------------------------------------------------------------------
# Base URL prepended to every resource path. An empty value means paths are
# already absolute (useful for local test servers).
RWGPS_BASE_URL = os.getenv("RWGPS_BASE_URL", "https://ridewithgps.com")

# Protocol version marker sent with every request.
API_VERSION = os.getenv("RWGPS_API_VERSION", "2")

# Resource paths.
CURRENT_USER_PATH = "/users/current.json"
USER_TRIPS_PATH = "/users/{user_id}/trips.json"
TRIP_PATH = "/trips/{trip_id}.json"

# Discriminator value expected in single-trip responses.
TRIP_RESULT_TYPE = "trip"


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------
# INI file holding an [Auth] section with email, password and name (API key).
RWGPS_CONFIG_PATH = os.path.expanduser(
    os.getenv("RWGPS_CONFIG_PATH", "~/.config/rwgps/rwgps.ini")
)

# Section name inside the credentials file.
AUTH_SECTION = "Auth"


# ---------------------------------------------------------------------------
# HTTP behaviour
# ---------------------------------------------------------------------------
# Request timeout in seconds.
REQUEST_TIMEOUT = _env_float("RWGPS_REQUEST_TIMEOUT", 15.0)

# Adapter-level retries. Each call is a single attempt unless raised.
RWGPS_HTTP_RETRIES = _env_int("RWGPS_HTTP_RETRIES", 0)

# HTTP session pool sizes.
HTTP_POOL_CONNECTIONS = _env_int("RWGPS_HTTP_POOL_CONNECTIONS", 10)
HTTP_POOL_MAXSIZE = _env_int("RWGPS_HTTP_POOL_MAXSIZE", 10)

# Maximum characters of a response body kept on errors and in logs.
ERROR_SNIPPET_LENGTH = _env_int("RWGPS_ERROR_SNIPPET_LENGTH", 300)


# ---------------------------------------------------------------------------
# Session behaviour
# ---------------------------------------------------------------------------
# When True, a 401 on an authenticated request drops the cached identity,
# logs in again with the configured credentials and repeats the request once.
# When False the 401 is raised to the caller.
RWGPS_RELOGIN_ON_UNAUTHORIZED = _env_bool("RWGPS_RELOGIN_ON_UNAUTHORIZED", False)

# Page size used by the ride iterator.
RIDES_PAGE_SIZE = _env_int("RWGPS_RIDES_PAGE_SIZE", 100)

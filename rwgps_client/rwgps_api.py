"""RideWithGPS API accessors: current user, trip listing and trip detail.

Public surface:
- RideWithGPSClient(credentials, ...)
- get_current_user(), get_rides(user_id, offset, limit), get_ride(ride_id)
  on a lazily built default client
"""

from __future__ import annotations

import logging
import os
import threading
from typing import Optional

import requests

from .client.base import AuthSession
from .client.envelopes import TripEnvelope, TripsPageEnvelope
from .client.response_handling import decode
from .client.transport import Transport
from .config import (
    REQUEST_TIMEOUT,
    RWGPS_BASE_URL,
    RWGPS_CONFIG_PATH,
    RWGPS_RELOGIN_ON_UNAUTHORIZED,
    TRIP_PATH,
    TRIP_RESULT_TYPE,
    USER_TRIPS_PATH,
)
from .credentials import (
    Credentials,
    credentials_from_env,
    env_auth_token,
    load_credentials,
)
from .errors import ValidationError
from .models import Identity, Ride, RidePage

LOGGER = logging.getLogger(__name__)


class RideWithGPSClient:
    """Typed accessors over an authenticated RideWithGPS session."""

    def __init__(
        self,
        credentials: Credentials,
        *,
        base_url: str = RWGPS_BASE_URL,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
        auth_token: str | None = None,
        relogin_on_unauthorized: bool = RWGPS_RELOGIN_ON_UNAUTHORIZED,
    ) -> None:
        self._transport = Transport(base_url, session=session, timeout=timeout)
        self._auth = AuthSession(
            credentials,
            self._transport,
            auth_token=auth_token,
            relogin_on_unauthorized=relogin_on_unauthorized,
        )

    @classmethod
    def from_config(cls, path: str | None = None, **kwargs) -> "RideWithGPSClient":
        """Build a client from a credentials file (default ``RWGPS_CONFIG_PATH``)."""

        kwargs.setdefault("auth_token", env_auth_token())
        return cls(load_credentials(path), **kwargs)

    @classmethod
    def from_env(cls, **kwargs) -> "RideWithGPSClient":
        kwargs.setdefault("auth_token", env_auth_token())
        return cls(credentials_from_env(), **kwargs)

    @property
    def session(self) -> AuthSession:
        return self._auth

    def auth(self) -> Identity:
        """Log in (or refresh the cached identity) and return it."""

        return self._auth.login()

    def get_current_user(self) -> Identity:
        """Fetch the current user; uses the cached token when logged in."""

        return self._auth.fetch_current_user(context="error getting current user")

    def get_rides(self, user_id: int, offset: int, limit: int) -> RidePage:
        """Fetch one page of ``user_id``'s trips.

        ``offset`` and ``limit`` go to the server verbatim.
        """
        context = f"error getting rides {offset}+{limit} for {user_id}"
        body = self._auth.authenticated_get(
            USER_TRIPS_PATH.format(user_id=user_id),
            [("offset", str(offset)), ("limit", str(limit))],
            context=context,
        )
        envelope = decode(body, TripsPageEnvelope, context)
        return RidePage(rides=envelope.results, total_count=envelope.results_count)

    def get_ride(self, ride_id: int) -> Ride:
        """Fetch a single trip.

        Raises:
            ValidationError: If the response is not a ``trip`` result.
        """
        context = f"error getting ride id {ride_id}"
        body = self._auth.authenticated_get(
            TRIP_PATH.format(trip_id=ride_id), context=context
        )
        envelope = decode(body, TripEnvelope, context)
        if envelope.type != TRIP_RESULT_TYPE:
            raise ValidationError(f"{context}: unexpected result type {envelope.type!r}")
        if envelope.trip is None:
            raise ValidationError(f"{context}: response carried no trip")
        return envelope.trip


_default_client: Optional[RideWithGPSClient] = None
_default_client_lock = threading.Lock()


def _build_default_client() -> RideWithGPSClient:
    if os.path.exists(RWGPS_CONFIG_PATH):
        LOGGER.debug("Loading credentials from %s", RWGPS_CONFIG_PATH)
        return RideWithGPSClient.from_config(RWGPS_CONFIG_PATH)
    LOGGER.debug("No credentials file at %s; using environment", RWGPS_CONFIG_PATH)
    return RideWithGPSClient.from_env()


def get_default_client() -> RideWithGPSClient:
    """Return the shared client, building it on first use."""

    global _default_client
    with _default_client_lock:
        if _default_client is None:
            _default_client = _build_default_client()
        return _default_client


def set_default_client(client: Optional[RideWithGPSClient]) -> None:
    """Replace (or with None, reset) the shared client."""

    global _default_client
    with _default_client_lock:
        _default_client = client


def get_current_user() -> Identity:
    return get_default_client().get_current_user()


def get_rides(user_id: int, offset: int, limit: int) -> RidePage:
    return get_default_client().get_rides(user_id, offset, limit)


def get_ride(ride_id: int) -> Ride:
    return get_default_client().get_ride(ride_id)


__all__ = [
    "RideWithGPSClient",
    "get_default_client",
    "set_default_client",
    "get_current_user",
    "get_rides",
    "get_ride",
]

"""Authenticated session: login, token caching and authenticated GETs."""

from __future__ import annotations

import dataclasses
import logging
import threading
from typing import Any, List, Optional, Tuple

from ..config import (
    API_VERSION,
    CURRENT_USER_PATH,
    RWGPS_RELOGIN_ON_UNAUTHORIZED,
)
from ..credentials import Credentials
from ..errors import AuthError, RideWithGPSError, TransportError
from ..models import Identity
from .envelopes import CurrentUserEnvelope
from .response_handling import decode
from .transport import QueryParams, Transport, param_pairs

LOGGER = logging.getLogger(__name__)

__all__ = ["AuthSession", "mask_token"]


def mask_token(value: str | None, visible: int = 4) -> str:
    """Mask all but the last ``visible`` characters of a secret."""

    if not value:
        return ""
    if visible <= 0:
        return "*" * len(value)
    if len(value) <= visible:
        return value
    return "*" * (len(value) - visible) + value[-visible:]


def _has_token(identity: Optional[Identity]) -> bool:
    return identity is not None and bool(identity.auth_token)


class AuthSession:
    """Owns the credentials and the currently authenticated identity.

    The session is authenticated only while it holds an identity with a
    non-empty token. Anything else logs in on the next authenticated request.
    Login is single-flight: concurrent callers wait on one attempt.

    A 401 on an authenticated request is raised as ``TransportError`` unless
    ``relogin_on_unauthorized`` is set, in which case the identity is dropped,
    a fresh credential login runs, and the request is repeated once.
    """

    def __init__(
        self,
        credentials: Credentials,
        transport: Transport,
        *,
        api_version: str = API_VERSION,
        auth_token: str | None = None,
        relogin_on_unauthorized: bool = RWGPS_RELOGIN_ON_UNAUTHORIZED,
    ) -> None:
        self._credentials = credentials
        self._transport = transport
        self._api_version = api_version
        # Pre-issued token, tried instead of email/password on first login.
        self._auth_token = auth_token or None
        self._relogin_on_unauthorized = relogin_on_unauthorized
        self._identity: Optional[Identity] = None
        self._login_lock = threading.RLock()

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    @property
    def is_authenticated(self) -> bool:
        return _has_token(self._identity)

    def invalidate(self) -> None:
        """Forget the cached identity and any pre-issued token."""

        with self._login_lock:
            self._identity = None
            self._auth_token = None

    # ------------------------------------------------------------------
    # Parameter assembly
    # ------------------------------------------------------------------
    def _credential_params(self) -> List[Tuple[str, Any]]:
        return [
            ("email", self._credentials.email),
            ("password", self._credentials.password),
            ("apikey", self._credentials.api_key),
            ("version", self._api_version),
        ]

    def _auth_params(self, token: str) -> List[Tuple[str, Any]]:
        return [
            ("apikey", self._credentials.api_key),
            ("version", self._api_version),
            ("auth_token", token),
        ]

    # ------------------------------------------------------------------
    # Current user / login
    # ------------------------------------------------------------------
    def fetch_current_user(self, context: str = "current user") -> Identity:
        """Fetch and decode the current user without storing it.

        Uses the cached identity's token when authenticated, then a
        pre-issued token, then email/password.
        """
        token = self._auth_token
        if self.is_authenticated:
            token = None
            body = self.authenticated_get(CURRENT_USER_PATH, context=context)
        elif token:
            LOGGER.info("Logging in with pre-issued token %s", mask_token(token))
            body = self._transport.get(
                CURRENT_USER_PATH, self._auth_params(token), context=context
            )
        else:
            LOGGER.info("No auth token found, logging in...")
            body = self._transport.get(
                CURRENT_USER_PATH, self._credential_params(), context=context
            )
        user = decode(body, CurrentUserEnvelope, context).user
        if token and not user.auth_token:
            user = dataclasses.replace(user, auth_token=token)
        return user

    def login(self) -> Identity:
        """Log in and cache the resulting identity.

        Raises:
            AuthError: If the request or decode fails, or no token comes back.
        """
        with self._login_lock:
            return self._login_locked()

    def _login_locked(self) -> Identity:
        try:
            user = self.fetch_current_user(context="login")
        except RideWithGPSError as exc:
            raise AuthError(f"can't log in: {exc}") from exc
        if not user.auth_token:
            raise AuthError(f"can't log in: no auth token returned for user {user.id}")
        self._identity = user
        LOGGER.info(
            'Logged in as "%s" (%s) auth_token=%s',
            user.name,
            user.id,
            mask_token(user.auth_token),
        )
        return user

    def ensure_authenticated(self, context: str = "request") -> Identity:
        """Return the cached identity, logging in first when there is none."""

        identity = self._identity
        if _has_token(identity):
            return identity  # type: ignore[return-value]
        with self._login_lock:
            # Another thread may have logged in while we waited.
            identity = self._identity
            if _has_token(identity):
                return identity  # type: ignore[return-value]
            try:
                return self._login_locked()
            except AuthError as exc:
                raise AuthError(f"{context}: can't authenticate: {exc}") from exc

    def _drop_identity(self, identity: Identity) -> None:
        with self._login_lock:
            if self._identity is identity:
                self._identity = None
                self._auth_token = None

    # ------------------------------------------------------------------
    # Authenticated requests
    # ------------------------------------------------------------------
    def authenticated_get(
        self,
        path: str,
        params: Optional[QueryParams] = None,
        *,
        context: str = "request",
    ) -> str:
        """GET ``path`` with the auth parameters appended after ``params``."""

        identity = self.ensure_authenticated(context)
        try:
            return self._transport.get(
                path,
                param_pairs(params) + self._auth_params(identity.auth_token),
                context=context,
            )
        except TransportError as exc:
            if exc.status_code != 401 or not self._relogin_on_unauthorized:
                raise
            LOGGER.warning(
                "%s: 401 for user %s; logging in again and retrying once",
                context,
                identity.id,
            )
        self._drop_identity(identity)
        identity = self.ensure_authenticated(context)
        return self._transport.get(
            path,
            param_pairs(params) + self._auth_params(identity.auth_token),
            context=context,
        )

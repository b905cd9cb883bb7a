"""Single-attempt HTTP GET against the RideWithGPS API."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union
from urllib.parse import urlencode

import requests

from ..config import REQUEST_TIMEOUT, RWGPS_BASE_URL
from ..errors import TransportError
from .response_handling import body_snippet
from .session import get_default_session

LOGGER = logging.getLogger(__name__)

QueryParams = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


def param_pairs(params: Optional[QueryParams]) -> List[Tuple[str, Any]]:
    """Normalise params to an ordered list of ``(key, value)`` pairs."""

    if not params:
        return []
    if isinstance(params, Mapping):
        return list(params.items())
    return list(params)


class Transport:
    """Builds request URLs and performs GETs with a shared requests session.

    An empty ``base_url`` means every path is already absolute.
    """

    def __init__(
        self,
        base_url: str = RWGPS_BASE_URL,
        *,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.base_url = base_url or ""
        self._session = session or get_default_session()
        self._timeout = timeout

    def build_url(self, path: str, params: Optional[QueryParams] = None) -> str:
        uri = self.base_url + path if self.base_url else path
        pairs = param_pairs(params)
        if pairs:
            uri += "?" + urlencode(pairs)
        return uri

    def get(
        self,
        path: str,
        params: Optional[QueryParams] = None,
        *,
        context: str = "GET",
    ) -> str:
        """GET ``path`` and return the body text.

        Raises:
            TransportError: On a network failure or any status other than 200.
        """
        url = self.build_url(path, params)
        LOGGER.debug(
            "%s GET %s params=%s",
            context,
            path,
            [key for key, _ in param_pairs(params)],
        )
        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            # str(exc) embeds the full URL, query secrets included.
            message = f"{context}: error in GET {path!r}: {exc.__class__.__name__}"
            LOGGER.error(message)
            raise TransportError(message, path=path) from exc

        if response.status_code != 200:
            status = f"{response.status_code} {getattr(response, 'reason', '') or ''}".strip()
            snippet = body_snippet(getattr(response, "text", ""))
            message = f"{context}: error in GET {path!r}: {status!r}"
            if snippet:
                message = f"{message} | {snippet}"
            LOGGER.error(message)
            raise TransportError(
                message,
                path=path,
                status_code=response.status_code,
                status=status,
                snippet=snippet,
            )
        return response.text

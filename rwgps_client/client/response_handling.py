"""Response decoding and error-text helpers shared by the client."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional, Protocol, Type, TypeVar

from ..config import ERROR_SNIPPET_LENGTH
from ..errors import DecodeError

LOGGER = logging.getLogger(__name__)

T = TypeVar("T", bound="PayloadShape")

__all__ = ["PayloadShape", "decode", "body_snippet"]


class PayloadShape(Protocol):
    """Anything that can be built from a decoded JSON object."""

    @classmethod
    def from_payload(cls: Type[T], payload: Mapping[str, Any]) -> T:  # pragma: no cover
        ...


def body_snippet(text: Optional[str], limit: int = ERROR_SNIPPET_LENGTH) -> str:
    """Return a trimmed, length-bounded copy of a response body."""

    if not isinstance(text, str):
        return ""
    trimmed = text.strip()
    if len(trimmed) > limit:
        return trimmed[: limit - 3] + "..."
    return trimmed


def decode(body: str, shape: Type[T], context: str) -> T:
    """Parse ``body`` as JSON and build ``shape`` from it.

    Raises:
        DecodeError: If the body is not JSON, is not a JSON object, or lacks
            the keys/types ``shape`` requires. The raw body (bounded) is kept
            on the error as ``payload``.
    """
    snippet = body_snippet(body)
    try:
        data = json.loads(body)
    except (TypeError, ValueError, RecursionError) as exc:
        LOGGER.debug("%s returned non-JSON body: %s", context, snippet)
        raise DecodeError(
            f"{context}: error decoding json: {exc}\n{snippet}", payload=snippet
        ) from exc

    if not isinstance(data, dict):
        raise DecodeError(
            f"{context}: expected a JSON object, got {type(data).__name__}\n{snippet}",
            payload=snippet,
        )

    try:
        return shape.from_payload(data)
    except (KeyError, TypeError, ValueError, ArithmeticError) as exc:
        detail = f"missing field {exc}" if isinstance(exc, KeyError) else str(exc)
        raise DecodeError(
            f"{context}: unexpected {shape.__name__} payload: {detail}\n{snippet}",
            payload=snippet,
        ) from exc

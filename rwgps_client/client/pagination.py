"""Caller-side pagination over the trip listing endpoint."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from ..config import RIDES_PAGE_SIZE
from ..models import RideSummary

if TYPE_CHECKING:  # pragma: no cover
    from ..rwgps_api import RideWithGPSClient

LOGGER = logging.getLogger(__name__)


def iter_rides(
    client: "RideWithGPSClient",
    user_id: int,
    *,
    page_size: int = RIDES_PAGE_SIZE,
    start: int = 0,
) -> Iterator[RideSummary]:
    """Yield every trip for ``user_id`` from ``start`` onwards, in server order.

    Stops once the server-declared total is reached or a page comes back
    empty. Errors from any page propagate; pages already yielded stay yielded.
    """
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    offset = start
    while True:
        page = client.get_rides(user_id, offset, page_size)
        LOGGER.debug(
            "user=%s offset=%s got %s of %s trips",
            user_id,
            offset,
            len(page),
            page.total_count,
        )
        if not page.rides:
            return
        yield from page.rides
        offset += len(page.rides)
        if offset >= page.total_count:
            return

"""Response envelopes, one per endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..config import TRIP_RESULT_TYPE
from ..models import Identity, Ride, RideSummary


@dataclass(frozen=True)
class CurrentUserEnvelope:
    """``{"user": {...}}`` from ``/users/current.json``."""

    user: Identity

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "CurrentUserEnvelope":
        return cls(user=Identity.from_dict(payload["user"]))


@dataclass(frozen=True)
class TripsPageEnvelope:
    """``{"results_count": n, "results": [...]}`` from the trip listing."""

    results_count: int
    results: tuple[RideSummary, ...]

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "TripsPageEnvelope":
        results = payload["results"]
        if not isinstance(results, list):
            raise TypeError("results must be a list")
        return cls(
            results_count=int(payload["results_count"]),
            results=tuple(RideSummary.from_dict(item) for item in results),
        )


@dataclass(frozen=True)
class TripEnvelope:
    """``{"type": "trip", "trip": {...}}`` from the trip detail endpoint.

    ``trip`` is only decoded when ``type`` is ``"trip"``; for any other result
    type it is None whatever the body holds, and callers check ``type``.
    """

    type: str
    trip: Optional[Ride]

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "TripEnvelope":
        result_type = str(payload.get("type") or "")
        trip = payload.get("trip")
        if result_type != TRIP_RESULT_TYPE or trip is None:
            return cls(type=result_type, trip=None)
        return cls(type=result_type, trip=Ride.from_dict(trip))

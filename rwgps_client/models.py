from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an API timestamp into an aware datetime (UTC when unzoned)."""

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    else:
        raise TypeError(f"unsupported timestamp {value!r}")
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed


def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _as_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise TypeError(f"{what} must be an object, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class Gear:
    id: int
    name: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Gear":
        data = _as_mapping(data, "gear")
        return cls(id=int(data["id"]), name=str(data.get("name") or ""))


@dataclass(frozen=True)
class Identity:
    id: int
    name: str
    auth_token: str
    gear: Tuple[Gear, ...] = ()
    total_trips: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Identity":
        data = _as_mapping(data, "user")
        gear = data.get("gear") or []
        if not isinstance(gear, list):
            raise TypeError("gear must be a list")
        return cls(
            id=int(data["id"]),
            name=str(data.get("name") or ""),
            auth_token=str(data.get("auth_token") or ""),
            gear=tuple(Gear.from_dict(item) for item in gear),
            total_trips=int(data.get("trips_included_in_totals_count") or 0),
        )


@dataclass(frozen=True)
class MinAvgMax:
    min: float = 0.0
    avg: float = 0.0
    max: float = 0.0

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "MinAvgMax":
        if data is None:
            return cls()
        data = _as_mapping(data, "range")
        return cls(
            min=float(data.get("min") or 0.0),
            avg=float(data.get("avg") or 0.0),
            max=float(data.get("max") or 0.0),
        )


@dataclass(frozen=True)
class Metrics:
    ascent_time: int = 0
    descent_time: int = 0
    calories: int = 0
    distance: float = 0.0
    # Seconds.
    duration: float = 0.0
    ele_gain: float = 0.0
    ele_loss: float = 0.0
    grade: MinAvgMax = MinAvgMax()
    moving_time: int = 0
    speed: MinAvgMax = MinAvgMax()
    stationary: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "Metrics":
        if data is None:
            return cls()
        data = _as_mapping(data, "metrics")
        return cls(
            ascent_time=int(_pick(data, "ascentTime", "ascent_time", default=0)),
            descent_time=int(_pick(data, "descentTime", "descent_time", default=0)),
            calories=int(_pick(data, "calories", default=0)),
            distance=float(_pick(data, "distance", default=0.0)),
            duration=float(_pick(data, "duration", default=0.0)),
            ele_gain=float(_pick(data, "ele_gain", "eleGain", default=0.0)),
            ele_loss=float(_pick(data, "ele_loss", "eleLoss", default=0.0)),
            grade=MinAvgMax.from_dict(data.get("grade")),
            moving_time=int(_pick(data, "movingTime", "moving_time", default=0)),
            speed=MinAvgMax.from_dict(data.get("speed")),
            stationary=bool(data.get("stationary", False)),
        )


@dataclass(frozen=True)
class LatLng:
    lat: float
    lng: float

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LatLng":
        data = _as_mapping(data, "bounding box point")
        return cls(lat=float(data["lat"]), lng=float(data["lng"]))


@dataclass(frozen=True)
class Ride:
    """A single trip as returned by the trip detail endpoint."""

    id: int
    departed_at: Optional[datetime]
    metrics: Metrics
    distance: float = 0.0
    name: str = ""
    description: str = ""
    bounding_box: Tuple[LatLng, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Ride":
        data = _as_mapping(data, "trip")
        box = data.get("bounding_box") or []
        if not isinstance(box, list):
            raise TypeError("bounding_box must be a list")
        return cls(
            id=int(data["id"]),
            departed_at=parse_timestamp(data.get("departed_at")),
            metrics=Metrics.from_dict(data.get("metrics")),
            distance=float(data.get("distance") or 0.0),
            name=str(data.get("name") or ""),
            description=str(data.get("description") or ""),
            bounding_box=tuple(LatLng.from_dict(point) for point in box),
        )


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise TypeError(f"expected a boolean, got {value!r}")


def _as_str(value: Any) -> str:
    if isinstance(value, (dict, list)):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    return str(value)


# Keyed by the (string) field annotation.
_SUMMARY_CONVERTERS = {
    "Optional[int]": int,
    "Optional[float]": float,
    "Optional[str]": _as_str,
    "Optional[bool]": _as_bool,
    "Optional[datetime]": parse_timestamp,
}


@dataclass(frozen=True)
class RideSummary:
    """One row of the trip listing endpoint.

    Field names follow the listing payload keys. Anything the server omits or
    sends as null is ``None``.
    """

    id: int
    group_membership_id: Optional[int] = None
    route_id: Optional[int] = None
    created_at: Optional[datetime] = None
    gear_id: Optional[int] = None
    departed_at: Optional[datetime] = None
    duration: Optional[int] = None
    distance: Optional[float] = None
    elevation_gain: Optional[float] = None
    elevation_loss: Optional[float] = None
    visibility: Optional[int] = None
    description: Optional[str] = None
    is_gps: Optional[bool] = None
    name: Optional[str] = None
    max_hr: Optional[float] = None
    min_hr: Optional[float] = None
    avg_hr: Optional[float] = None
    max_cad: Optional[float] = None
    min_cad: Optional[float] = None
    avg_cad: Optional[float] = None
    avg_speed: Optional[float] = None
    max_speed: Optional[float] = None
    moving_time: Optional[int] = None
    processed: Optional[bool] = None
    avg_watts: Optional[float] = None
    max_watts: Optional[float] = None
    min_watts: Optional[float] = None
    is_stationary: Optional[bool] = None
    calories: Optional[int] = None
    updated_at: Optional[datetime] = None
    time_zone: Optional[str] = None
    first_lng: Optional[float] = None
    first_lat: Optional[float] = None
    last_lng: Optional[float] = None
    last_lat: Optional[float] = None
    user_id: Optional[int] = None
    deleted_at: Optional[datetime] = None
    sw_lng: Optional[float] = None
    sw_lat: Optional[float] = None
    ne_lng: Optional[float] = None
    ne_lat: Optional[float] = None
    track_id: Optional[str] = None
    postal_code: Optional[str] = None
    locality: Optional[str] = None
    administrative_area: Optional[str] = None
    country_code: Optional[str] = None
    source_type: Optional[str] = None
    likes_count: Optional[int] = None
    highlighted_photo_id: Optional[int] = None
    highlighted_photo_checksum: Optional[str] = None
    utc_offset: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RideSummary":
        data = _as_mapping(data, "trip summary")
        values: Dict[str, Any] = {}
        for f in fields(cls):
            raw = data.get(f.name)
            convert = _SUMMARY_CONVERTERS.get(f.type)
            if raw is not None and convert is not None:
                raw = convert(raw)
            values[f.name] = raw
        values["id"] = int(data["id"])
        return cls(**values)


@dataclass(frozen=True)
class RidePage:
    """One page of a user's trips plus the server-declared total."""

    rides: Tuple[RideSummary, ...]
    total_count: int

    def __iter__(self) -> Iterator[RideSummary]:
        return iter(self.rides)

    def __len__(self) -> int:
        return len(self.rides)

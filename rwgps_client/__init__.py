"""RideWithGPS API client package."""

from .client import AuthSession, Transport, iter_rides
from .credentials import Credentials, credentials_from_env, load_credentials
from .errors import (
    AuthError,
    ConfigError,
    DecodeError,
    RideWithGPSError,
    TransportError,
    ValidationError,
)
from .models import Gear, Identity, LatLng, Metrics, MinAvgMax, Ride, RidePage, RideSummary
from .rwgps_api import RideWithGPSClient, get_default_client, set_default_client

__all__ = [
    "RideWithGPSClient",
    "get_default_client",
    "set_default_client",
    "AuthSession",
    "Transport",
    "iter_rides",
    "Credentials",
    "credentials_from_env",
    "load_credentials",
    "Gear",
    "Identity",
    "LatLng",
    "Metrics",
    "MinAvgMax",
    "Ride",
    "RidePage",
    "RideSummary",
    "RideWithGPSError",
    "ConfigError",
    "TransportError",
    "DecodeError",
    "AuthError",
    "ValidationError",
]

"""Modular RideWithGPS client components (transport, decoding, auth session)."""

from .base import AuthSession, mask_token  # noqa: F401
from .pagination import iter_rides  # noqa: F401
from .response_handling import decode  # noqa: F401
from .session import create_default_session, get_default_session  # noqa: F401
from .transport import Transport  # noqa: F401

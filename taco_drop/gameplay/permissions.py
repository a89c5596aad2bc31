"""
Location permission states.
NO UI DEPENDENCIES.
"""
from enum import Enum, auto


class LocationPermission(Enum):
    """Whether we may read the device location."""
    GRANTED = auto()
    DENIED = auto()          # Denied or restricted - never measure
    NOT_DETERMINED = auto()  # Still waiting on the user


PERMISSION_DENIED_MESSAGE = "Please enable location access in Settings"

_STATUS_MAP = {
    "authorizedwheninuse": LocationPermission.GRANTED,
    "authorizedalways": LocationPermission.GRANTED,
    "granted": LocationPermission.GRANTED,
    "denied": LocationPermission.DENIED,
    "restricted": LocationPermission.DENIED,
}


def permission_from_status(status: str) -> LocationPermission:
    """
    Resolve a platform authorization status name to a permission.
    Unknown names are treated as not determined.
    """
    key = status.replace("_", "").replace("-", "").strip().lower()
    return _STATUS_MAP.get(key, LocationPermission.NOT_DETERMINED)

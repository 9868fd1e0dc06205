"""
Shared utilities (NOT business logic).

Usage:
    from track_ingest.shared import haversine_distance, perpendicular_distance
    from track_ingest.shared.formatters import format_pace
"""
from .geo import (
    haversine_distance,
    perpendicular_distance,
    calculate_total_distance,
    EARTH_RADIUS_M,
)
from .elevation import calculate_elevation_changes
from .formatters import (
    format_pace,
    format_distance,
    format_duration,
)
from .constants import (
    TrackFormat,
    CONTENT_TYPE_TO_FORMAT,
    EXTENSION_TO_FORMAT,
    DEFAULT_SIMPLIFY_EPSILON_M,
    DEFAULT_MAX_UPLOAD_BYTES,
)

__all__ = [
    # geo
    "haversine_distance",
    "perpendicular_distance",
    "calculate_total_distance",
    "EARTH_RADIUS_M",
    # elevation
    "calculate_elevation_changes",
    # formatters
    "format_pace",
    "format_distance",
    "format_duration",
    # constants
    "TrackFormat",
    "CONTENT_TYPE_TO_FORMAT",
    "EXTENSION_TO_FORMAT",
    "DEFAULT_SIMPLIFY_EPSILON_M",
    "DEFAULT_MAX_UPLOAD_BYTES",
]

"""
Constants shared across the ingestion pipeline.
"""

from enum import Enum


class TrackFormat(str, Enum):
    """Workout file formats understood by the dispatcher."""
    GPX = "gpx"
    FIT = "fit"


# Declared content types -> format.
# application/octet-stream is deliberately absent: browsers send it for both.
CONTENT_TYPE_TO_FORMAT: dict[str, TrackFormat] = {
    "application/gpx+xml": TrackFormat.GPX,
    "application/gpx": TrackFormat.GPX,
    "application/xml": TrackFormat.GPX,
    "text/xml": TrackFormat.GPX,
    "application/vnd.ant.fit": TrackFormat.FIT,
    "application/fit": TrackFormat.FIT,
}

# File extensions -> format
EXTENSION_TO_FORMAT: dict[str, TrackFormat] = {
    ".gpx": TrackFormat.GPX,
    ".fit": TrackFormat.FIT,
}

# Douglas-Peucker tolerance in meters
DEFAULT_SIMPLIFY_EPSILON_M = 5.0

# Upload bound enforced before any parser runs (20MB)
DEFAULT_MAX_UPLOAD_BYTES = 20 * 1024 * 1024

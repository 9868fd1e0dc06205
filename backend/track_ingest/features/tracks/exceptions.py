"""
Track ingestion errors.

One class per failure kind. The HTTP layer maps `http_status` straight to a
response code; nothing in this package retries or recovers from these.
"""


class TrackParseError(ValueError):
    """Base error for anything that rejects an uploaded workout file."""
    kind = "ParseError"
    http_status = 400


class TooShortError(TrackParseError):
    """Buffer is smaller than the minimum needed to attempt parsing."""
    kind = "TooShort"


class InvalidHeaderError(TrackParseError):
    """Format-specific header failed validation."""
    kind = "InvalidHeader"


class InvalidGPXError(InvalidHeaderError):
    """Document is not well-formed GPX."""
    pass


class InsufficientPointsError(TrackParseError):
    """Fewer than 2 usable track points."""
    kind = "InsufficientPoints"
    http_status = 422


class NonMonotonicTimestampsError(TrackParseError):
    """Track point timestamps go backwards."""
    kind = "NonMonotonicTimestamps"
    http_status = 422


class DegenerateTrackError(TrackParseError):
    """Track has zero distance or non-positive duration."""
    kind = "DegenerateTrack"
    http_status = 422


class UnsupportedFormatError(TrackParseError):
    """Format could not be identified or is not supported."""
    kind = "UnsupportedFormat"
    http_status = 415


class FileTooLargeError(TrackParseError):
    """Upload exceeds the configured size bound."""
    kind = "FileTooLarge"
    http_status = 413


class FitDecodingNotImplementedError(TrackParseError, NotImplementedError):
    """FIT header is valid but record decoding is not available yet."""
    kind = "NotImplemented"
    http_status = 501


class MalformedPolylineError(ValueError):
    """Encoded polyline violates the encoding's structure."""
    kind = "MalformedPolyline"
    http_status = 400

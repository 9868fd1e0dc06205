"""
GPS workout track ingestion.

Usage:
    from track_ingest.features.tracks import TrackIngestionService
    from track_ingest.features.tracks import encode_polyline, decode_polyline

Components:
- TrackIngestionService: Upload boundary (parse, prepare_for_storage, decode_route)
- FormatDispatcher: Detect GPX/FIT and route to the parser
- GPXParserService / FITParserService: Format parsers
- TrackSimplifier: Douglas-Peucker reduction
- encode_polyline / decode_polyline: Google encoded polyline codec
- GpsPoint, ParsedTrack, StoredRoute, LatLng: Schemas
"""

from .schemas import GpsPoint, ParsedTrack, StoredRoute, LatLng
from .exceptions import (
    TrackParseError,
    TooShortError,
    InvalidHeaderError,
    InvalidGPXError,
    InsufficientPointsError,
    NonMonotonicTimestampsError,
    DegenerateTrackError,
    UnsupportedFormatError,
    FileTooLargeError,
    FitDecodingNotImplementedError,
    MalformedPolylineError,
)
from .polyline import encode_polyline, decode_polyline
from .simplifier import TrackSimplifier
from .metrics import build_parsed_track
from .parsers import GPXParserService, FITParserService, FitHeader
from .dispatcher import FormatDispatcher
from .service import TrackIngestionService

__all__ = [
    # Schemas
    "GpsPoint",
    "ParsedTrack",
    "StoredRoute",
    "LatLng",
    # Errors
    "TrackParseError",
    "TooShortError",
    "InvalidHeaderError",
    "InvalidGPXError",
    "InsufficientPointsError",
    "NonMonotonicTimestampsError",
    "DegenerateTrackError",
    "UnsupportedFormatError",
    "FileTooLargeError",
    "FitDecodingNotImplementedError",
    "MalformedPolylineError",
    # Codec / geometry
    "encode_polyline",
    "decode_polyline",
    "TrackSimplifier",
    "build_parsed_track",
    # Services
    "GPXParserService",
    "FITParserService",
    "FitHeader",
    "FormatDispatcher",
    "TrackIngestionService",
]

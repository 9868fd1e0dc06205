"""
Track Ingestion Service

Boundary between the upload layer and the parsing core:
- parse(): uploaded bytes -> ParsedTrack
- prepare_for_storage(): ParsedTrack -> StoredRoute (simplified + encoded)
- decode_route(): stored polyline -> drawable points
"""

import logging
from typing import List, Optional

from track_ingest.config import settings
from track_ingest.shared.formatters import format_distance, format_duration, format_pace

from .dispatcher import FormatDispatcher
from .exceptions import FileTooLargeError, TooShortError
from .polyline import decode_polyline, encode_polyline
from .schemas import LatLng, ParsedTrack, StoredRoute
from .simplifier import TrackSimplifier

logger = logging.getLogger(__name__)


class TrackIngestionService:
    """Entry point for workout file ingestion."""

    def __init__(
        self,
        max_upload_bytes: Optional[int] = None,
        simplify_epsilon_m: Optional[float] = None
    ):
        self.max_upload_bytes = (
            max_upload_bytes if max_upload_bytes is not None else settings.max_upload_bytes
        )
        self.simplify_epsilon_m = (
            simplify_epsilon_m if simplify_epsilon_m is not None else settings.simplify_epsilon_m
        )

    def parse(
        self,
        content: bytes,
        content_type: Optional[str] = None,
        filename: Optional[str] = None
    ) -> ParsedTrack:
        """
        Parse an uploaded workout file.

        Args:
            content: Fully buffered, untrusted file bytes
            content_type: Declared MIME type, if any
            filename: Original file name, if any

        Returns:
            ParsedTrack

        Raises:
            TooShortError: Empty upload
            FileTooLargeError: Upload above max_upload_bytes
            TrackParseError: Any parser failure, unchanged
        """
        if len(content) == 0:
            raise TooShortError("File is empty")

        if len(content) > self.max_upload_bytes:
            raise FileTooLargeError(
                f"File too large: {len(content)} bytes (max {self.max_upload_bytes})"
            )

        track = FormatDispatcher.parse(content, content_type, filename)

        logger.info(
            f"Parsed {track.source_format.value} track: {len(track.gps_track)} points, "
            f"{format_distance(track.distance)}, {format_duration(track.duration)}, "
            f"pace {format_pace(track.avg_pace)}"
        )
        return track

    def prepare_for_storage(
        self,
        track: ParsedTrack,
        epsilon: Optional[float] = None
    ) -> StoredRoute:
        """
        Build the storage payload: scalar metrics plus the simplified,
        encoded route. Sensor metadata is not part of the polyline.
        """
        if epsilon is None:
            epsilon = self.simplify_epsilon_m

        simplified = TrackSimplifier.simplify(track.gps_track, epsilon)
        polyline = encode_polyline((p.lat, p.lon) for p in simplified)

        logger.debug(
            f"Route for storage: {len(track.gps_track)} -> {len(simplified)} points, "
            f"{len(polyline)} chars"
        )

        return StoredRoute(
            distance=track.distance,
            duration=track.duration,
            avg_pace=track.avg_pace,
            start_time=track.start_time,
            polyline=polyline,
            epsilon=epsilon,
            original_points=len(track.gps_track),
            simplified_points=len(simplified),
        )

    @staticmethod
    def decode_route(encoded: str) -> List[LatLng]:
        """Rebuild drawable points from a stored polyline."""
        return decode_polyline(encoded)

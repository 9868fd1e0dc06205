"""
GPX Parser Service

Parses GPX files into a ParsedTrack.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Union

import gpxpy
import gpxpy.gpx
from pydantic import ValidationError

from track_ingest.shared.constants import TrackFormat

from ..exceptions import InvalidGPXError
from ..metrics import build_parsed_track
from ..schemas import GpsPoint, ParsedTrack

logger = logging.getLogger(__name__)

# Local names of Garmin TrackPointExtension (and similar) children
HEART_RATE_TAGS = {"hr", "heartrate"}
CADENCE_TAGS = {"cad", "cadence"}


class GPXParserService:
    """Service for parsing GPX files."""

    @staticmethod
    def parse(content: Union[bytes, str]) -> ParsedTrack:
        """
        Parse GPX content into a track with derived metrics.

        Tracks and segments are flattened in document order. Route points
        are used only when the file has no track points.

        Args:
            content: GPX file content as bytes or text

        Returns:
            ParsedTrack

        Raises:
            InvalidGPXError: If the document is not valid GPX
            InsufficientPointsError: If fewer than 2 timed points
            NonMonotonicTimestampsError, DegenerateTrackError: See
                build_parsed_track
        """
        points = GPXParserService.extract_points(content)
        track = build_parsed_track(points, TrackFormat.GPX)

        logger.debug(
            f"Parsed GPX: {len(track.gps_track)} points, "
            f"{track.distance:.0f}m in {track.duration}s"
        )
        return track

    @staticmethod
    def extract_points(content: Union[bytes, str]) -> List[GpsPoint]:
        """
        Extract usable points from GPX content.

        A point is usable when it has a <time>; untimed points are skipped.

        Args:
            content: GPX file content as bytes or text

        Returns:
            List of GpsPoint in document order
        """
        gpx = GPXParserService._load(content)

        raw_points: List[gpxpy.gpx.GPXTrackPoint] = []

        # From tracks
        for track in gpx.tracks:
            for segment in track.segments:
                raw_points.extend(segment.points)

        # From routes (if no tracks)
        if not raw_points:
            for route in gpx.routes:
                raw_points.extend(route.points)

        points: List[GpsPoint] = []
        skipped = 0
        for raw in raw_points:
            if raw.time is None:
                skipped += 1
                continue
            points.append(GPXParserService._to_gps_point(raw))

        if skipped:
            logger.debug(f"Skipped {skipped} GPX points without <time>")

        return points

    @staticmethod
    def _load(content: Union[bytes, str]) -> gpxpy.gpx.GPX:
        try:
            text = content.decode('utf-8-sig') if isinstance(content, bytes) else content
            return gpxpy.parse(text)
        except Exception as e:
            logger.warning(f"Failed to parse GPX: {e}")
            raise InvalidGPXError(f"Invalid GPX file: {e}") from e

    @staticmethod
    def _to_gps_point(raw: gpxpy.gpx.GPXTrackPoint) -> GpsPoint:
        heart_rate = GPXParserService._extension_value(raw.extensions, HEART_RATE_TAGS)
        cadence = GPXParserService._extension_value(raw.extensions, CADENCE_TAGS)

        try:
            return GpsPoint(
                lat=raw.latitude,
                lon=raw.longitude,
                timestamp=_as_utc(raw.time),
                elevation=raw.elevation,
                heart_rate=heart_rate,
                cadence=cadence,
            )
        except ValidationError as e:
            logger.warning(
                f"Rejected GPX point lat={raw.latitude} lon={raw.longitude}: "
                f"{e.error_count()} invalid field(s)"
            )
            raise InvalidGPXError(
                f"Invalid GPX file: bad track point at lat={raw.latitude} lon={raw.longitude}"
            ) from e

    @staticmethod
    def _extension_value(extensions: Iterable, names: set) -> Optional[float]:
        """First numeric value among extension elements whose local tag is in names."""
        for extension in extensions or []:
            for element in extension.iter():
                if not isinstance(element.tag, str):
                    continue  # comments
                tag = element.tag.rsplit('}', 1)[-1].lower()
                if tag not in names or not element.text:
                    continue
                try:
                    return float(element.text.strip())
                except ValueError:
                    logger.debug(f"Ignoring non-numeric <{tag}> value: {element.text!r}")
        return None


def _as_utc(value: datetime) -> datetime:
    # GPX times are UTC; a missing offset means UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)

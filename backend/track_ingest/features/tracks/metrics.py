"""
Track Metrics

Turns a raw point list from any parser into a validated ParsedTrack.
All ParsedTrack invariants are enforced here, so every format
gets the same acceptance rules.
"""

import logging
import math
from statistics import mean
from typing import Optional, Sequence, Tuple

from track_ingest.shared.constants import TrackFormat
from track_ingest.shared.elevation import calculate_elevation_changes
from track_ingest.shared.geo import calculate_total_distance

from .exceptions import (
    DegenerateTrackError,
    InsufficientPointsError,
    NonMonotonicTimestampsError,
)
from .schemas import GpsPoint, ParsedTrack

logger = logging.getLogger(__name__)

MIN_TRACK_POINTS = 2


def _check_timestamps(points: Sequence[GpsPoint]) -> None:
    previous = None
    for i, point in enumerate(points):
        if point.timestamp is None:
            continue
        if previous is not None and point.timestamp < previous:
            raise NonMonotonicTimestampsError(
                f"Track point {i} at {point.timestamp.isoformat()} is earlier "
                f"than the point before it ({previous.isoformat()})"
            )
        previous = point.timestamp


def _sensor_stats(values: Sequence[Optional[float]]) -> Tuple[Optional[float], Optional[float]]:
    """(average, max) of the present readings, (None, None) if there are none."""
    present = [v for v in values if v is not None]
    if not present:
        return None, None
    return mean(present), max(present)


def build_parsed_track(
    points: Sequence[GpsPoint],
    source_format: TrackFormat
) -> ParsedTrack:
    """
    Validate points and derive track aggregates.

    Args:
        points: Usable track points in file order
        source_format: Format the points were read from

    Returns:
        Immutable ParsedTrack

    Raises:
        InsufficientPointsError: Fewer than 2 points
        NonMonotonicTimestampsError: A timestamp goes backwards
        DegenerateTrackError: Missing start/end time, zero distance
            or non-positive duration
    """
    if len(points) < MIN_TRACK_POINTS:
        raise InsufficientPointsError(
            f"Track has insufficient track points: {len(points)} "
            f"(need at least {MIN_TRACK_POINTS})"
        )

    _check_timestamps(points)

    start_time = points[0].timestamp
    end_time = points[-1].timestamp
    if start_time is None or end_time is None:
        raise DegenerateTrackError("Track has no start or end timestamp")

    distance = calculate_total_distance(points)
    duration = int((end_time - start_time).total_seconds())

    if not math.isfinite(distance) or distance <= 0:
        raise DegenerateTrackError(f"Track has invalid distance: {distance}")
    if duration <= 0:
        raise DegenerateTrackError(f"Track has non-positive duration: {duration}s")

    elevations = [p.elevation for p in points if p.elevation is not None]
    elevation_gain = elevation_loss = None
    if len(elevations) >= 2:
        elevation_gain, elevation_loss = calculate_elevation_changes(elevations)

    avg_hr, max_hr = _sensor_stats([p.heart_rate for p in points])
    avg_cadence, max_cadence = _sensor_stats([p.cadence for p in points])

    return ParsedTrack(
        source_format=source_format,
        start_time=start_time,
        end_time=end_time,
        duration=duration,
        distance=distance,
        gps_track=tuple(points),
        elevation_gain=elevation_gain,
        elevation_loss=elevation_loss,
        avg_heart_rate=avg_hr,
        max_heart_rate=max_hr,
        avg_cadence=avg_cadence,
        max_cadence=max_cadence,
    )

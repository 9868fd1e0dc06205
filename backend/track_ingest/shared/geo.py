"""
Geographic utility functions.

This is the SINGLE SOURCE OF TRUTH for geographic calculations.
DO NOT duplicate these functions elsewhere.

All distances are in meters.
"""
import math
from typing import Any, Iterable, Sequence, Tuple, Union

# Earth radius in meters
EARTH_RADIUS_M = 6371000.0

# Anything with .lat/.lon attributes, or a (lat, lon, ...) sequence
PointLike = Union[Any, Sequence[float]]


def haversine_distance(
    lat1: float, lon1: float,
    lat2: float, lon2: float
) -> float:
    """
    Calculate great-circle distance between two points.

    Args:
        lat1, lon1: First point coordinates (degrees)
        lat2, lon2: Second point coordinates (degrees)

    Returns:
        Distance in meters
    """
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(delta_lat / 2) ** 2 +
        math.cos(lat1_rad) * math.cos(lat2_rad) *
        math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_M * c


def _lat_lon(point: PointLike) -> Tuple[float, float]:
    if hasattr(point, "lat"):
        return point.lat, point.lon
    return point[0], point[1]


def perpendicular_distance(
    point: PointLike,
    segment_start: PointLike,
    segment_end: PointLike
) -> float:
    """
    Approximate distance from a point to the line through a segment.

    The cross product is taken in a flat lat/lon projection and scaled back
    to meters using the segment's own haversine components. Valid for the
    short segments of a single workout (up to a few tens of km); it is NOT
    geodesically exact and must not be used for long segments.

    A degenerate segment (start == end) falls back to the haversine
    distance between the point and the segment start.

    Args:
        point: Point to measure, (lat, lon) or object with .lat/.lon
        segment_start: First end of the segment
        segment_end: Second end of the segment

    Returns:
        Distance in meters
    """
    lat, lon = _lat_lon(point)
    lat1, lon1 = _lat_lon(segment_start)
    lat2, lon2 = _lat_lon(segment_end)

    if haversine_distance(lat1, lon1, lat2, lon2) == 0:
        return haversine_distance(lat, lon, lat1, lon1)

    dx = lat2 - lat1
    dy = lon2 - lon1
    area = abs(dy * lat - dx * lon + lat2 * lon1 - lon2 * lat1)
    base = math.sqrt(dx * dx + dy * dy)
    if base == 0:
        return 0.0

    # Segment length in meters from its north-south and east-west legs
    lat_meters = haversine_distance(lat1, lon1, lat2, lon1)
    lon_meters = haversine_distance(lat1, lon1, lat1, lon2)
    segment_meters = math.sqrt(lat_meters ** 2 + lon_meters ** 2)

    return (area / base) / base * segment_meters


def calculate_total_distance(points: Iterable[PointLike]) -> float:
    """
    Calculate total distance for a track.

    Args:
        points: Sequence of (lat, lon, ...) tuples or objects with .lat/.lon

    Returns:
        Total distance in meters
    """
    total = 0.0
    previous = None

    for point in points:
        current = _lat_lon(point)
        if previous is not None:
            total += haversine_distance(previous[0], previous[1], current[0], current[1])
        previous = current

    return total

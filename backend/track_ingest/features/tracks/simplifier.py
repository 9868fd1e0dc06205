"""
Track Simplifier

Douglas-Peucker reduction of a GPS track before it is encoded for storage.
"""

import logging
from typing import List, Sequence, TypeVar

from track_ingest.shared.constants import DEFAULT_SIMPLIFY_EPSILON_M
from track_ingest.shared.geo import perpendicular_distance

logger = logging.getLogger(__name__)

P = TypeVar("P")


class TrackSimplifier:
    """
    Simplifies a point sequence within a perpendicular-distance tolerance.

    Points only need .lat/.lon attributes (GpsPoint) or be (lat, lon, ...)
    sequences. Distances use the flat-projection perpendicular_distance,
    which is fine for workout-sized segments.

    The classic recursion is run on an explicit stack, so long tracks
    (tens of thousands of points) do not hit the recursion limit. Ranges
    are processed left half first, same as the recursive form.
    """

    DEFAULT_EPSILON_M = DEFAULT_SIMPLIFY_EPSILON_M

    @classmethod
    def simplify(
        cls,
        points: Sequence[P],
        epsilon: float = DEFAULT_EPSILON_M
    ) -> List[P]:
        """
        Reduce points to an ordered subsequence.

        Args:
            points: Track points in order
            epsilon: Tolerance in meters. <= 0 keeps every point that
                deviates at all from its chord.

        Returns:
            New list that always contains the first and last point.
            The input is never modified.
        """
        if len(points) <= 2:
            return list(points)

        keep = [False] * len(points)
        keep[0] = True
        keep[-1] = True

        stack = [(0, len(points) - 1)]
        while stack:
            start, end = stack.pop()
            if end <= start + 1:
                continue

            index, max_distance = cls._farthest_point(points, start, end)

            # Zero deviation never splits, even for a negative epsilon
            if max_distance > epsilon and max_distance > 0:
                keep[index] = True
                # Pushed in reverse so the left half is handled first
                stack.append((index, end))
                stack.append((start, index))

        simplified = [point for point, kept in zip(points, keep) if kept]

        logger.debug(
            f"Simplified track {len(points)} -> {len(simplified)} points "
            f"(epsilon={epsilon}m)"
        )
        return simplified

    @staticmethod
    def _farthest_point(points: Sequence[P], start: int, end: int):
        """Interior index with the largest distance to the chord (first wins on ties)."""
        max_distance = 0.0
        max_index = start

        for i in range(start + 1, end):
            distance = perpendicular_distance(points[i], points[start], points[end])
            if distance > max_distance:
                max_distance = distance
                max_index = i

        return max_index, max_distance

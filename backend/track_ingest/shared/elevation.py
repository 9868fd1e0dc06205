"""
Elevation processing utilities.

This is the SINGLE SOURCE OF TRUTH for elevation calculations.
"""
from typing import Iterable, Optional, Tuple


def calculate_elevation_changes(
    elevations: Iterable[Optional[float]]
) -> Tuple[float, float]:
    """
    Calculate total elevation gain and loss.

    Missing readings (None) are skipped; the next reading is compared
    with the last known one.

    Args:
        elevations: Elevation values in meters

    Returns:
        Tuple of (gain_m, loss_m)
    """
    gain = 0.0
    loss = 0.0
    previous = None

    for elevation in elevations:
        if elevation is None:
            continue
        if previous is not None:
            diff = elevation - previous
            if diff > 0:
                gain += diff
            else:
                loss += abs(diff)
        previous = elevation

    return gain, loss

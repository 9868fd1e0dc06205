"""
Formatting utilities for display.

Used in log lines and by the rendering side.
"""
from typing import Optional


def format_pace(seconds_per_km: Optional[float]) -> str:
    """
    Format pace as 'M:SS /km'.

    Args:
        seconds_per_km: Pace in seconds per km

    Returns:
        Formatted string (e.g., '5:30 /km')
    """
    if seconds_per_km is None or seconds_per_km < 0:
        return "—"

    total_seconds = int(round(seconds_per_km))
    minutes = total_seconds // 60
    seconds = total_seconds % 60

    return f"{minutes}:{seconds:02d} /km"


def format_distance(meters: float) -> str:
    """
    Format distance.

    Args:
        meters: Distance in meters

    Returns:
        Formatted string (e.g., '12.50 km' or '850 m')
    """
    if meters < 1000:
        return f"{int(meters)} m"
    return f"{meters / 1000:.2f} km"


def format_duration(seconds: int) -> str:
    """
    Format duration as 'H:MM:SS' (or 'M:SS' under an hour).

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string (e.g., '1:02:03')
    """
    if seconds < 0:
        return "—"

    h = seconds // 3600
    m = (seconds % 3600) // 60
    s = seconds % 60

    if h == 0:
        return f"{m}:{s:02d}"
    return f"{h}:{m:02d}:{s:02d}"

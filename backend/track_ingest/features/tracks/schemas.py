"""
Track-related schemas.

Pydantic models for parsed workout tracks and stored routes.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field

from track_ingest.shared.constants import TrackFormat


class GpsPoint(BaseModel):
    """Single sample along a track."""

    model_config = ConfigDict(frozen=True, extra="allow", allow_inf_nan=False)

    # WGS84 degrees
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)
    timestamp: Optional[datetime] = None

    # Sensor readings, absent when the device does not record them
    elevation: Optional[float] = None
    heart_rate: Optional[float] = None
    cadence: Optional[float] = None


class ParsedTrack(BaseModel):
    """
    Parser output for one uploaded file.

    Immutable; distance and duration are always derived from gps_track
    by the metrics builder, never supplied by the source file.
    """

    model_config = ConfigDict(frozen=True)

    source_format: TrackFormat

    start_time: datetime
    end_time: datetime
    duration: int        # seconds
    distance: float      # meters

    gps_track: Tuple[GpsPoint, ...]

    # Optional aggregates, only when the points carry the readings
    elevation_gain: Optional[float] = None
    elevation_loss: Optional[float] = None
    avg_heart_rate: Optional[float] = None
    max_heart_rate: Optional[float] = None
    avg_cadence: Optional[float] = None
    max_cadence: Optional[float] = None

    @computed_field
    @property
    def avg_pace(self) -> Optional[float]:
        """Seconds per km; None when distance is zero."""
        if self.distance <= 0:
            return None
        return self.duration / (self.distance / 1000)


class StoredRoute(BaseModel):
    """Payload handed to the workout-file storage collaborator."""

    model_config = ConfigDict(frozen=True)

    distance: float
    duration: int
    avg_pace: Optional[float] = None
    start_time: datetime

    polyline: str
    epsilon: float
    original_points: int
    simplified_points: int


@dataclass(frozen=True)
class LatLng:
    """Minimal coordinate pair used by the polyline codec."""
    lat: float
    lng: float

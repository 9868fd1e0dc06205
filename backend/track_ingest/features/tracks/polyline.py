"""
Google Encoded Polyline Algorithm.

See: https://developers.google.com/maps/documentation/utilities/polylinealgorithm

Coordinates are quantized to 5 decimal places before encoding, so decoding
recovers them to 1e-5 degrees. That loss is intentional.
"""

import math
from typing import Iterable, List, Sequence, Tuple, Union

from .exceptions import MalformedPolylineError
from .schemas import LatLng

PRECISION = 1e5

# Every encoded character is a 6-bit chunk offset by 63: '?' .. '~'
_OFFSET = 63
_CONTINUATION = 0x20
_CHUNK_MASK = 0x1f


def _quantize(value: float) -> int:
    # Half rounds up, as Math.round does in the map clients
    return math.floor(value * PRECISION + 0.5)


def _encode_value(value: int) -> List[str]:
    """Encode a single coordinate delta value."""
    value = ~(value << 1) if value < 0 else (value << 1)

    chunks = []
    while value >= _CONTINUATION:
        chunks.append(chr((_CONTINUATION | (value & _CHUNK_MASK)) + _OFFSET))
        value >>= 5

    chunks.append(chr(value + _OFFSET))
    return chunks


def encode_polyline(points: Iterable[Union[LatLng, Sequence[float]]]) -> str:
    """
    Encode coordinates into a polyline string.

    Args:
        points: LatLng objects or (lat, lng) pairs

    Returns:
        Encoded string, "" for no points
    """
    encoded: List[str] = []
    prev_lat = 0
    prev_lng = 0

    for point in points:
        if isinstance(point, LatLng):
            lat, lng = point.lat, point.lng
        else:
            lat, lng = point[0], point[1]

        lat_int = _quantize(lat)
        lng_int = _quantize(lng)

        # Latitude always before longitude
        encoded.extend(_encode_value(lat_int - prev_lat))
        encoded.extend(_encode_value(lng_int - prev_lng))

        prev_lat = lat_int
        prev_lng = lng_int

    return ''.join(encoded)


def _decode_value(encoded: str, index: int) -> Tuple[int, int]:
    """
    Decode one zig-zag value starting at index.

    Returns:
        (value, next_index)

    Raises:
        MalformedPolylineError: On an out-of-range character or when the
            string ends inside a continuation sequence
    """
    result = 0
    shift = 0

    while True:
        if index >= len(encoded):
            raise MalformedPolylineError(
                f"Truncated polyline: value starting before offset {index} is incomplete"
            )
        chunk = ord(encoded[index]) - _OFFSET
        if not 0 <= chunk < 64:
            raise MalformedPolylineError(
                f"Invalid polyline character {encoded[index]!r} at offset {index}"
            )
        index += 1
        result |= (chunk & _CHUNK_MASK) << shift
        shift += 5
        if chunk < _CONTINUATION:
            break

    value = ~(result >> 1) if (result & 1) else (result >> 1)
    return value, index


def decode_polyline(encoded: str) -> List[LatLng]:
    """
    Decode a polyline string into coordinates.

    Args:
        encoded: Encoded polyline

    Returns:
        List of LatLng, [] for ""

    Raises:
        MalformedPolylineError: If the string is structurally invalid
    """
    if not encoded:
        return []

    points: List[LatLng] = []
    index = 0
    lat = 0
    lng = 0

    while index < len(encoded):
        dlat, index = _decode_value(encoded, index)
        if index >= len(encoded):
            raise MalformedPolylineError(
                f"Truncated polyline: latitude at point {len(points)} has no longitude"
            )
        dlng, index = _decode_value(encoded, index)

        lat += dlat
        lng += dlng
        points.append(LatLng(lat=lat / PRECISION, lng=lng / PRECISION))

    return points

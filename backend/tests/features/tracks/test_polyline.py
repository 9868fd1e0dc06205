"""
Tests for the encoded polyline codec.
"""

import random

import pytest

from track_ingest.features.tracks.polyline import encode_polyline, decode_polyline
from track_ingest.features.tracks.schemas import LatLng
from track_ingest.features.tracks.exceptions import MalformedPolylineError


# Google's published example
GOOGLE_POINTS = [
    LatLng(lat=38.5, lng=-120.2),
    LatLng(lat=40.7, lng=-120.95),
    LatLng(lat=43.252, lng=-126.453),
]
GOOGLE_ENCODED = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"


# =============================================================================
# Test Encode
# =============================================================================

class TestEncodePolyline:
    """Tests for encode_polyline."""

    def test_empty(self):
        """No points encode to the empty string."""
        assert encode_polyline([]) == ""

    def test_reference_vector(self):
        """Google's example encodes to the published string."""
        assert encode_polyline(GOOGLE_POINTS) == GOOGLE_ENCODED

    def test_tuples_match_latlng(self):
        """(lat, lng) pairs encode the same as LatLng objects."""
        pairs = [(p.lat, p.lng) for p in GOOGLE_POINTS]
        assert encode_polyline(pairs) == GOOGLE_ENCODED

    def test_accepts_generator(self):
        """Any iterable of points works."""
        assert encode_polyline((p.lat, p.lng) for p in GOOGLE_POINTS) == GOOGLE_ENCODED

    def test_output_is_printable_ascii(self):
        """Every character is in the '?'..'~' range."""
        encoded = encode_polyline([(37.5665, 126.978), (-33.8688, 151.2093)])
        assert all(63 <= ord(c) <= 126 for c in encoded)

    def test_sub_precision_values_are_rounded(self):
        """Differences below 1e-5 degrees do not change the output."""
        assert encode_polyline([(38.500001, -120.200004)]) == encode_polyline([(38.5, -120.2)])


# =============================================================================
# Test Decode
# =============================================================================

class TestDecodePolyline:
    """Tests for decode_polyline."""

    def test_empty(self):
        """The empty string decodes to no points."""
        assert decode_polyline("") == []

    def test_reference_vector(self):
        """Google's example decodes to the original points."""
        points = decode_polyline(GOOGLE_ENCODED)

        assert len(points) == 3
        for decoded, expected in zip(points, GOOGLE_POINTS):
            assert decoded.lat == pytest.approx(expected.lat, abs=1e-4)
            assert decoded.lng == pytest.approx(expected.lng, abs=1e-4)

    def test_round_trip(self):
        """Points rounded to 5 decimals survive encode/decode within 1e-5."""
        rng = random.Random(42)
        original = [
            (round(rng.uniform(-90, 90), 5), round(rng.uniform(-180, 180), 5))
            for _ in range(200)
        ]

        decoded = decode_polyline(encode_polyline(original))

        assert len(decoded) == len(original)
        for point, (lat, lng) in zip(decoded, original):
            assert point.lat == pytest.approx(lat, abs=1e-5)
            assert point.lng == pytest.approx(lng, abs=1e-5)

    def test_round_trip_small_track(self):
        """A short running track round-trips."""
        original = [(37.5665, 126.978), (37.567, 126.979), (37.568, 126.98)]
        decoded = decode_polyline(encode_polyline(original))
        assert [(p.lat, p.lng) for p in decoded] == [
            pytest.approx(pair, abs=1e-5) for pair in original
        ]


# =============================================================================
# Test Malformed Input
# =============================================================================

class TestMalformedPolyline:
    """Structurally invalid strings raise MalformedPolylineError."""

    def test_latitude_without_longitude(self):
        """A lone latitude value is rejected."""
        with pytest.raises(MalformedPolylineError):
            decode_polyline("?")

    def test_truncated_first_value(self):
        """String ending with the continuation bit set is rejected."""
        with pytest.raises(MalformedPolylineError):
            decode_polyline("_")

    def test_truncated_later_point(self):
        """Truncation after complete points is rejected the same way."""
        with pytest.raises(MalformedPolylineError):
            decode_polyline(GOOGLE_ENCODED + "_")

    def test_cut_inside_point(self):
        """Dropping the final character breaks the last longitude."""
        with pytest.raises(MalformedPolylineError):
            decode_polyline(GOOGLE_ENCODED[:-1])

    def test_invalid_character(self):
        """Characters below '?' are not part of the alphabet."""
        with pytest.raises(MalformedPolylineError):
            decode_polyline("_p~iF ps|U")

    def test_is_value_error(self):
        """Callers catching ValueError still see it."""
        with pytest.raises(ValueError):
            decode_polyline("~")

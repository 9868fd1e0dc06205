"""
Tests for FormatDispatcher.
"""

import pytest

from track_ingest.features.tracks.dispatcher import FormatDispatcher
from track_ingest.features.tracks.exceptions import (
    FitDecodingNotImplementedError,
    InsufficientPointsError,
    InvalidHeaderError,
    TooShortError,
    UnsupportedFormatError,
)
from track_ingest.shared.constants import TrackFormat


GPX = (
    b'<?xml version="1.0" encoding="UTF-8"?>'
    b'<gpx version="1.1" creator="tests"><trk><trkseg>'
    b'<trkpt lat="43.0" lon="76.0"><time>2024-05-01T06:00:00Z</time></trkpt>'
    b'<trkpt lat="43.009" lon="76.0"><time>2024-05-01T06:05:00Z</time></trkpt>'
    b'</trkseg></trk></gpx>'
)

# 12-byte header with the .FIT signature, no records
FIT = bytes([12, 0x10, 0x6c, 0x08, 0, 0, 0, 0]) + b".FIT"


# =============================================================================
# Test Detect Format
# =============================================================================

class TestDetectFormat:
    """Tests for FormatDispatcher.detect_format."""

    def test_xml_declaration(self):
        assert FormatDispatcher.detect_format(GPX) == TrackFormat.GPX

    def test_bare_gpx_root(self):
        """<gpx without a declaration, after whitespace."""
        assert FormatDispatcher.detect_format(b"\n  <gpx version='1.1'></gpx>") == TrackFormat.GPX

    def test_bom(self):
        assert FormatDispatcher.detect_format(b"\xef\xbb\xbf" + GPX) == TrackFormat.GPX

    def test_fit_signature(self):
        """The .FIT signature at offset 8 identifies FIT."""
        assert FormatDispatcher.detect_format(FIT) == TrackFormat.FIT

    def test_content_sniffing_beats_declared_type(self):
        """Bytes win over a wrong content type."""
        assert FormatDispatcher.detect_format(GPX, "application/vnd.ant.fit") == TrackFormat.GPX

    @pytest.mark.parametrize("content_type, expected", [
        ("application/gpx+xml", TrackFormat.GPX),
        ("text/xml; charset=utf-8", TrackFormat.GPX),
        ("application/vnd.ant.fit", TrackFormat.FIT),
        ("APPLICATION/FIT", TrackFormat.FIT),
    ])
    def test_declared_content_type(self, content_type, expected):
        assert FormatDispatcher.detect_format(b"\x00" * 16, content_type) == expected

    @pytest.mark.parametrize("filename, expected", [
        ("morning_run.gpx", TrackFormat.GPX),
        ("Activity.FIT", TrackFormat.FIT),
    ])
    def test_extension(self, filename, expected):
        """octet-stream is resolved by the file extension."""
        result = FormatDispatcher.detect_format(
            b"\x00" * 16, "application/octet-stream", filename
        )
        assert result == expected

    def test_unknown(self):
        """Nothing recognizable is unsupported, not a default parser."""
        with pytest.raises(UnsupportedFormatError):
            FormatDispatcher.detect_format(b"PK\x03\x04zipzip", "application/zip", "run.zip")

    def test_octet_stream_without_name(self):
        with pytest.raises(UnsupportedFormatError):
            FormatDispatcher.detect_format(b"\x00" * 16, "application/octet-stream")


# =============================================================================
# Test Parse
# =============================================================================

class TestDispatchParse:
    """Tests for FormatDispatcher.parse."""

    def test_gpx(self):
        result = FormatDispatcher.parse(GPX, "application/gpx+xml", "run.gpx")
        assert result.source_format == TrackFormat.GPX
        assert result.duration == 300

    def test_fit_not_implemented(self):
        with pytest.raises(FitDecodingNotImplementedError):
            FormatDispatcher.parse(FIT, None, "run.fit")

    def test_fit_errors_propagate(self):
        """FIT header errors come through unchanged."""
        with pytest.raises(TooShortError):
            FormatDispatcher.parse(b"\x0e\x00", "application/vnd.ant.fit")
        with pytest.raises(InvalidHeaderError):
            FormatDispatcher.parse(bytes([40]) + bytes(15), None, "run.fit")

    def test_gpx_errors_propagate(self):
        with pytest.raises(InsufficientPointsError):
            FormatDispatcher.parse(b'<gpx version="1.1" creator="t"><trk><trkseg/></trk></gpx>')

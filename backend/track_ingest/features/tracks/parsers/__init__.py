"""
Format-specific parsers. Each returns a ParsedTrack.
"""

from .gpx import GPXParserService
from .fit import FITParserService, FitHeader, semicircles_to_degrees

__all__ = [
    "GPXParserService",
    "FITParserService",
    "FitHeader",
    "semicircles_to_degrees",
]

"""
Format Dispatcher

Picks the parser for an uploaded workout file.

Detection order:
1. Content sniffing (<?xml / <gpx prefix, .FIT signature)
2. Declared content type
3. File extension
"""

import logging
from pathlib import PurePath
from typing import Optional

from track_ingest.shared.constants import (
    CONTENT_TYPE_TO_FORMAT,
    EXTENSION_TO_FORMAT,
    TrackFormat,
)

from .exceptions import UnsupportedFormatError
from .parsers.fit import FIT_SIGNATURE, SIGNATURE_OFFSET, FITParserService
from .parsers.gpx import GPXParserService
from .schemas import ParsedTrack

logger = logging.getLogger(__name__)

_UTF8_BOM = b"\xef\xbb\xbf"
_XML_PREFIXES = (b"<?xml", b"<gpx")


class FormatDispatcher:
    """Routes uploaded bytes to the GPX or FIT parser."""

    @staticmethod
    def detect_format(
        content: bytes,
        content_type: Optional[str] = None,
        filename: Optional[str] = None
    ) -> TrackFormat:
        """
        Identify the workout file format.

        Args:
            content: Uploaded bytes
            content_type: Declared MIME type, parameters allowed
            filename: Original file name

        Returns:
            TrackFormat

        Raises:
            UnsupportedFormatError: Nothing identifies a supported format
        """
        sniffed = FormatDispatcher._sniff(content)
        if sniffed is not None:
            return sniffed

        if content_type:
            mime = content_type.split(';', 1)[0].strip().lower()
            if mime in CONTENT_TYPE_TO_FORMAT:
                return CONTENT_TYPE_TO_FORMAT[mime]

        if filename:
            suffix = PurePath(filename).suffix.lower()
            if suffix in EXTENSION_TO_FORMAT:
                return EXTENSION_TO_FORMAT[suffix]

        logger.info(
            f"Unsupported upload: content_type={content_type!r} filename={filename!r}"
        )
        raise UnsupportedFormatError(
            f"Unsupported file type (content type {content_type!r}, file {filename!r})"
        )

    @staticmethod
    def parse(
        content: bytes,
        content_type: Optional[str] = None,
        filename: Optional[str] = None
    ) -> ParsedTrack:
        """
        Detect the format and parse with the matching parser.

        Parser errors propagate unchanged.
        """
        track_format = FormatDispatcher.detect_format(content, content_type, filename)
        logger.debug(f"Dispatching {len(content)} bytes to {track_format.value} parser")

        if track_format is TrackFormat.GPX:
            return GPXParserService.parse(content)
        return FITParserService.parse(content)

    @staticmethod
    def _sniff(content: bytes) -> Optional[TrackFormat]:
        head = content[:256]
        if head.startswith(_UTF8_BOM):
            head = head[len(_UTF8_BOM):]
        if head.lstrip().startswith(_XML_PREFIXES):
            return TrackFormat.GPX

        signature = content[SIGNATURE_OFFSET:SIGNATURE_OFFSET + len(FIT_SIGNATURE)]
        if signature == FIT_SIGNATURE:
            return TrackFormat.FIT

        return None

"""
FIT Parser Service

Validates FIT file headers. Record decoding (definition and data messages,
CRC) is not implemented yet: a file with a valid header is rejected with
FitDecodingNotImplementedError so the upload layer can tell users to send
GPX instead.

File layout:
    [header: 12 or 14 bytes][records: data_size bytes][crc: 2 bytes]
"""

import logging
import struct
from dataclasses import dataclass
from typing import List, Optional

from track_ingest.shared.constants import TrackFormat

from ..exceptions import (
    FitDecodingNotImplementedError,
    InvalidHeaderError,
    TooShortError,
)
from ..metrics import build_parsed_track
from ..schemas import GpsPoint, ParsedTrack

logger = logging.getLogger(__name__)

MIN_HEADER_SIZE = 12
VALID_HEADER_SIZES = (12, 14)
FIT_SIGNATURE = b".FIT"
SIGNATURE_OFFSET = 8

# 2^31 semicircles = 180 degrees
SEMICIRCLES_TO_DEGREES = 180 / 2 ** 31


@dataclass(frozen=True)
class FitHeader:
    """Decoded FIT file header."""
    header_size: int
    protocol_version: int
    profile_version: int
    data_size: int
    data_type: bytes
    crc: Optional[int] = None

    @property
    def has_signature(self) -> bool:
        return self.data_type == FIT_SIGNATURE


def semicircles_to_degrees(semicircles: int) -> float:
    """Convert a FIT position field to decimal degrees."""
    return semicircles * SEMICIRCLES_TO_DEGREES


class FITParserService:
    """Service for parsing FIT files."""

    @staticmethod
    def read_header(content: bytes) -> FitHeader:
        """
        Decode and validate the file header.

        Raises:
            TooShortError: Buffer shorter than the 12-byte minimum header
            InvalidHeaderError: Header size byte is not 12 or 14
        """
        if len(content) < MIN_HEADER_SIZE:
            raise TooShortError("Invalid FIT file: too short")

        header_size = content[0]
        if header_size not in VALID_HEADER_SIZES:
            raise InvalidHeaderError(
                f"Invalid FIT file: bad header size ({header_size})"
            )

        protocol_version, profile_version, data_size, data_type = struct.unpack_from(
            "<BHI4s", content, 1
        )

        crc = None
        if header_size == 14 and len(content) >= 14:
            (crc,) = struct.unpack_from("<H", content, 12)

        return FitHeader(
            header_size=header_size,
            protocol_version=protocol_version,
            profile_version=profile_version,
            data_size=data_size,
            data_type=data_type,
            crc=crc,
        )

    @staticmethod
    def parse(content: bytes) -> ParsedTrack:
        """
        Parse FIT content into a track with derived metrics.

        Args:
            content: FIT file content

        Returns:
            ParsedTrack

        Raises:
            TooShortError, InvalidHeaderError: Header validation failed
            FitDecodingNotImplementedError: Header is valid, records
                cannot be decoded yet
        """
        header = FITParserService.read_header(content)
        logger.debug(
            f"FIT header: size={header.header_size} "
            f"protocol={header.protocol_version} profile={header.profile_version} "
            f"data_size={header.data_size}"
        )

        points = FITParserService._decode_records(content, header)
        return build_parsed_track(points, TrackFormat.FIT)

    @staticmethod
    def _decode_records(content: bytes, header: FitHeader) -> List[GpsPoint]:
        """
        Walk the record stream and collect positioned record messages.

        Positions arrive in semicircles (see semicircles_to_degrees).
        Decoding of definition/data messages and the file CRC is deferred;
        until then every call raises FitDecodingNotImplementedError.
        """
        logger.info(
            f"FIT record decoding requested for {header.data_size} bytes "
            f"of records; not implemented"
        )
        raise FitDecodingNotImplementedError(
            "FIT record decoding is not yet implemented; upload a GPX file instead"
        )

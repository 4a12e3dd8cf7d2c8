# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
PyAPRS - Pure Python APRS packet codec

Provides:
- TNC2 / APRS-IS text line encoding/decoding
- AX.25 UI frame encoding/decoding
- Position (compressed and uncompressed) and message payloads

"""

from .core import __version__

# Packet codec
from .core.packet import (
    AprsPacket,
    Unknown,
    decode_text,
    encode_text,
    decode_binary,
    encode_binary,
    decode_binary_parts,
    encode_binary_parts,
)

# Data model
from .core.callsign import Callsign, RawAddress
from .core.path import QConstruct, ViaCallsign
from .core.timestamp import HHMMSS, DDHHMM, LocalDDHHMM
from .core.lonlat import Latitude, Longitude, Precision
from .core.compression import Altitude, CompressionType, CourseSpeed, RadioRange
from .core.position import AprsPosition, Compressed, Uncompressed
from .core.message import AprsMessage
from .core.config import AprsCodecConfig, DEFAULT_CONFIG

# Exceptions
from .core.exceptions import (
    AprsError,
    DecodeError,
    MalformedAddress,
    MalformedTimestamp,
    MalformedPosition,
    MalformedMessage,
    TruncatedFrame,
    UnsupportedEncoding,
)

__all__ = [
    # Codec
    'AprsPacket',
    'Unknown',
    'decode_text',
    'encode_text',
    'decode_binary',
    'encode_binary',
    'decode_binary_parts',
    'encode_binary_parts',

    # Data model
    'Callsign',
    'RawAddress',
    'QConstruct',
    'ViaCallsign',
    'HHMMSS',
    'DDHHMM',
    'LocalDDHHMM',
    'Latitude',
    'Longitude',
    'Precision',
    'Altitude',
    'CompressionType',
    'CourseSpeed',
    'RadioRange',
    'AprsPosition',
    'Compressed',
    'Uncompressed',
    'AprsMessage',
    'AprsCodecConfig',
    'DEFAULT_CONFIG',

    # Exceptions
    'AprsError',
    'DecodeError',
    'MalformedAddress',
    'MalformedTimestamp',
    'MalformedPosition',
    'MalformedMessage',
    'TruncatedFrame',
    'UnsupportedEncoding',

    # Utilities
    'configure_logging',
    'get_version',

    # Metadata
    '__version__'
]


def configure_logging(level: str = "INFO") -> None:
    """
    Configure package-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    import logging
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s %(name)s %(levelname)s: %(message)s'
    )


def get_version() -> str:
    """Return the package version."""
    return __version__

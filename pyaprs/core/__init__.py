# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
pyaprs.core.__init__.py

PyAPRS Core Module - APRS packet codec

Contains:
- Callsign and address path encoding/decoding (TNC2 text and AX.25)
- Timestamp, position and message payload codecs
- Packet codec with data type dispatch
"""

from __future__ import annotations

# Addressing
from .callsign import (
    Callsign,
    RawAddress,
    SSID_MASK,
    EXTENSION_BIT,
    RESERVED_BITS,
    COMMAND_BIT,
    HAS_BEEN_REPEATED_BIT,
)
from .path import (
    QConstruct,
    ViaCallsign,
    decode_path_text,
    encode_path_text,
    decode_path_binary,
    encode_path_binary,
)

# Payload components
from .timestamp import HHMMSS, DDHHMM, LocalDDHHMM, decode_timestamp
from .lonlat import Latitude, Longitude, Precision
from .compression import (
    Altitude,
    CompressionType,
    CourseSpeed,
    GpsFix,
    NmeaSource,
    Origin,
    RadioRange,
)
from .position import AprsPosition, Compressed, Uncompressed
from .message import AprsMessage

# Packets
from .packet import (
    AprsPacket,
    Unknown,
    decode_text,
    encode_text,
    decode_binary,
    encode_binary,
    decode_binary_parts,
    encode_binary_parts,
)

# Configuration
from .config import AprsCodecConfig, DEFAULT_CONFIG

# Exceptions
from .exceptions import (
    AprsError,
    DecodeError,
    MalformedAddress,
    MalformedTimestamp,
    MalformedPosition,
    MalformedMessage,
    TruncatedFrame,
    UnsupportedEncoding,
)

__version__ = "0.1.0"

# Public API
__all__ = [
    # Addressing
    'Callsign',
    'RawAddress',
    'SSID_MASK',
    'EXTENSION_BIT',
    'RESERVED_BITS',
    'COMMAND_BIT',
    'HAS_BEEN_REPEATED_BIT',
    'QConstruct',
    'ViaCallsign',
    'decode_path_text',
    'encode_path_text',
    'decode_path_binary',
    'encode_path_binary',

    # Payload components
    'HHMMSS',
    'DDHHMM',
    'LocalDDHHMM',
    'decode_timestamp',
    'Latitude',
    'Longitude',
    'Precision',
    'Altitude',
    'CompressionType',
    'CourseSpeed',
    'GpsFix',
    'NmeaSource',
    'Origin',
    'RadioRange',
    'AprsPosition',
    'Compressed',
    'Uncompressed',
    'AprsMessage',

    # Packets
    'AprsPacket',
    'Unknown',
    'decode_text',
    'encode_text',
    'decode_binary',
    'encode_binary',
    'decode_binary_parts',
    'encode_binary_parts',

    # Configuration
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

    '__version__',
]

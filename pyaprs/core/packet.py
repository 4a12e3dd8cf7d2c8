# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
pyaprs.core.packet.py

Top-level APRS packet codec.

Implements:
- TNC2 / APRS-IS text lines: "FROM>TO,VIA...:PAYLOAD"
- AX.25 UI frames: address block, control 0x03, PID 0xF0, info field
- Payload dispatch on the data type byte, with an opaque fallback

Every call is independent: no state is kept between calls and the
caller's buffers are never referenced after return.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Tuple, Union

from .callsign import Callsign
from .config import DEFAULT_CONFIG, AprsCodecConfig
from .exceptions import DecodeError, MalformedAddress, TruncatedFrame, UnsupportedEncoding
from .message import MESSAGE_DATA_TYPE, AprsMessage
from .path import (
    Destination,
    ViaElement,
    check_via_length,
    decode_path_binary,
    decode_path_text,
    encode_path_binary,
    encode_path_text,
)
from .position import POSITION_DATA_TYPES, AprsPosition

logger = logging.getLogger(__name__)

# AX.25 UI frame constants
CONTROL_UI = 0x03
PID_NO_LAYER3 = 0xF0

PAYLOAD_SEPARATOR = b":"
LINE_ENDINGS = b"\r\n"


@dataclass(frozen=True)
class Unknown:
    """Payload of a data type that is not modelled, kept verbatim."""

    payload: bytes

    def encode(self) -> bytes:
        return self.payload


PacketData = Union[AprsPosition, AprsMessage, Unknown]


@dataclass(frozen=True)
class AprsPacket:
    """
    One APRS packet, independent of its wire encoding.

    Attributes:
        source: Originating station
        destination: Destination callsign (often the software id) or raw
            AX.25 bytes that are not callsign syntax
        via: Digipeater path and Q-constructs, in path order
        data: Decoded payload
    """

    source: Callsign
    destination: Destination
    via: List[ViaElement] = field(default_factory=list)
    data: PacketData = field(default_factory=lambda: Unknown(b""))

    def __post_init__(self) -> None:
        object.__setattr__(self, "via", list(self.via))
        check_via_length(self.via)


# Data type byte -> payload decoder
_DATA_TYPE_DECODERS: Dict[int, Callable[[bytes], PacketData]] = {
    data_type: AprsPosition.decode for data_type in POSITION_DATA_TYPES
}
_DATA_TYPE_DECODERS[MESSAGE_DATA_TYPE] = AprsMessage.decode


def decode_payload(payload: bytes) -> PacketData:
    """
    Decode a payload by its first byte.

    Unrecognised data types (and an empty payload) become Unknown.

    Raises:
        DecodeError: A recognised data type with a malformed body
    """
    decoder = _DATA_TYPE_DECODERS.get(payload[0]) if payload else None
    if decoder is None:
        logger.debug(f"Unmodelled data type {payload[:1]!r}, keeping {len(payload)} bytes")
        return Unknown(bytes(payload))
    return decoder(payload)


def encode_payload(data: PacketData) -> bytes:
    return data.encode()


def decode_text(line: Union[bytes, str], config: AprsCodecConfig = DEFAULT_CONFIG) -> AprsPacket:
    """
    Decode a TNC2 / APRS-IS line.

    Args:
        line: "FROM>TO,VIA...:PAYLOAD", optionally with a trailing CR/LF
        config: Codec configuration

    Returns:
        AprsPacket

    Raises:
        MalformedAddress: Missing ':' or a bad header
        DecodeError: Any payload error, offset relative to the line
    """
    if isinstance(line, str):
        line = line.encode("utf-8")
    if config.strip_line_ending:
        line = line.rstrip(LINE_ENDINGS)

    header_end = line.find(PAYLOAD_SEPARATOR)
    if header_end < 0:
        raise MalformedAddress(
            "Missing ':' between header and payload", field="header", offset=len(line), data=bytes(line)
        )

    header = line[:header_end]
    source, destination, via = decode_path_text(header, config)

    payload_start = header_end + 1
    try:
        data = decode_payload(line[payload_start:])
    except DecodeError as exc:
        exc.rebase(payload_start)
        raise

    packet = AprsPacket(source, destination, via, data)
    logger.debug(f"Decoded text packet from {source} ({type(data).__name__})")
    return packet


def encode_text(packet: AprsPacket) -> bytes:
    """Encode as a TNC2 line without line ending."""
    header = encode_path_text(packet.source, packet.destination, packet.via)
    return header + PAYLOAD_SEPARATOR + encode_payload(packet.data)


def decode_binary(frame: bytes, config: AprsCodecConfig = DEFAULT_CONFIG) -> AprsPacket:
    """
    Decode one deframed AX.25 UI frame (no flags, no FCS).

    Raises:
        TruncatedFrame: Frame ends inside the address block or before PID
        UnsupportedEncoding: Control is not UI or PID is not "no layer 3"
        DecodeError: Any address or payload error, offset relative to the frame
    """
    frame = bytes(frame)
    source, destination, via, offset = decode_path_binary(frame, config)

    if len(frame) < offset + 2:
        raise TruncatedFrame(
            "Frame ends before control and PID", field="control", offset=len(frame), data=frame
        )
    control, pid = frame[offset], frame[offset + 1]
    if control != CONTROL_UI:
        raise UnsupportedEncoding(
            f"Not a UI frame: control {control:#04x}", field="control", offset=offset, data=frame
        )
    if pid != PID_NO_LAYER3:
        raise UnsupportedEncoding(
            f"Unsupported PID {pid:#04x}", field="pid", offset=offset + 1, data=frame
        )

    info_start = offset + 2
    try:
        data = decode_payload(frame[info_start:])
    except DecodeError as exc:
        exc.rebase(info_start)
        raise

    packet = AprsPacket(source, destination, via, data)
    logger.debug(f"Decoded AX.25 packet from {source} ({len(frame)} bytes)")
    return packet


def decode_binary_parts(
    address_block: bytes, info_field: bytes, config: AprsCodecConfig = DEFAULT_CONFIG
) -> AprsPacket:
    """
    Decode an address block and info field with control/PID already removed.

    Raises:
        MalformedAddress: Bytes left over after the last address
        DecodeError: As decode_binary; payload offsets are relative to info_field
    """
    address_block = bytes(address_block)
    source, destination, via, offset = decode_path_binary(address_block, config)
    if offset != len(address_block):
        raise MalformedAddress(
            "Trailing bytes after the last address", field="address", offset=offset, data=address_block
        )
    return AprsPacket(source, destination, via, decode_payload(bytes(info_field)))


def encode_binary_parts(packet: AprsPacket) -> Tuple[bytes, bytes]:
    """
    Encode as (address block, info field).

    Q-constructs are dropped from the path.

    Raises:
        MalformedAddress: A callsign that does not fit an AX.25 address
    """
    address_block = encode_path_binary(packet.source, packet.destination, packet.via)
    return address_block, encode_payload(packet.data)


def encode_binary(packet: AprsPacket) -> bytes:
    """Encode as an AX.25 UI frame without flags or FCS."""
    address_block, info_field = encode_binary_parts(packet)
    frame = address_block + bytes([CONTROL_UI, PID_NO_LAYER3]) + info_field
    logger.debug(f"Encoded AX.25 packet from {packet.source} ({len(frame)} bytes)")
    return frame

# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
pyaprs.core.position.py

Position reports (data type '!', '=', '/', '@').

Payload layout:
    TYPE [TIMESTAMP(7)] POSITION COMMENT

Uncompressed POSITION (19 bytes):
    DDMM.HHN T DDDMM.HHE C

Compressed POSITION (13 bytes):
    T YYYY XXXX C c s t

'T' is the symbol table and 'C' the symbol code. The encoder writes the
form named by `cst`; it never picks one on its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from . import base91
from .compression import (
    CompressionType,
    Kinematics,
    check_kinematics,
    decode_cs,
    encode_cs,
)
from .exceptions import DecodeError, MalformedPosition
from .lonlat import LATITUDE_LENGTH, LONGITUDE_LENGTH, Latitude, Longitude, Precision
from .timestamp import TIMESTAMP_LENGTH, Timestamp, decode_timestamp

logger = logging.getLogger(__name__)

# Data type indicators
POSITION_NO_TIMESTAMP = ord("!")
POSITION_NO_TIMESTAMP_MESSAGING = ord("=")
POSITION_TIMESTAMP = ord("/")
POSITION_TIMESTAMP_MESSAGING = ord("@")

POSITION_DATA_TYPES = frozenset(
    [
        POSITION_NO_TIMESTAMP,
        POSITION_NO_TIMESTAMP_MESSAGING,
        POSITION_TIMESTAMP,
        POSITION_TIMESTAMP_MESSAGING,
    ]
)

UNCOMPRESSED_LENGTH = 19
COMPRESSED_LENGTH = 13

# Primary and alternate tables, overlays A-Z, and a-j standing for 0-9
COMPRESSED_SYMBOL_TABLES = frozenset("/\\ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghij")

# Written when a compressed position carries no course/speed
NO_CST = b" sT"


@dataclass(frozen=True)
class Uncompressed:
    """Position was (or will be) sent as degrees and decimal minutes."""


@dataclass(frozen=True)
class Compressed:
    """
    Position was (or will be) sent in base-91 form.

    Attributes:
        kinematics: Course/speed, radio range or altitude; None when the
            c byte is a space
        compression_type: Decoded T byte; None exactly when kinematics is None
    """

    kinematics: Optional[Kinematics] = None
    compression_type: Optional[CompressionType] = None

    def __post_init__(self) -> None:
        if self.kinematics is None and self.compression_type is not None:
            raise MalformedPosition("Compression type without course/speed is not encodable", field="cst")
        check_kinematics(self.kinematics, self.compression_type)


CompressionState = Union[Uncompressed, Compressed]


def _check_symbol(name: str, value: str) -> None:
    if not isinstance(value, str) or len(value) != 1 or not 0x21 <= ord(value) <= 0x7E:
        raise MalformedPosition(f"Symbol {name} must be one printable character, got {value!r}", field=name)


@dataclass(frozen=True)
class AprsPosition:
    """
    Decoded position report.

    Attributes:
        timestamp: Present for data types '/' and '@'
        messaging_supported: True for data types '=' and '@'
        latitude: Center latitude
        longitude: Center longitude
        precision: Ambiguity of an uncompressed position
        symbol_table: Symbol table identifier or overlay
        symbol_code: Symbol code
        comment: Remaining payload bytes, verbatim
        cst: Uncompressed() or Compressed(...)
    """

    timestamp: Optional[Timestamp]
    messaging_supported: bool
    latitude: Latitude
    longitude: Longitude
    precision: Precision = Precision.HUNDREDTH_MINUTE
    symbol_table: str = "/"
    symbol_code: str = "-"
    comment: bytes = b""
    cst: CompressionState = Uncompressed()

    def __post_init__(self) -> None:
        _check_symbol("symbol_table", self.symbol_table)
        _check_symbol("symbol_code", self.symbol_code)
        if isinstance(self.cst, Compressed):
            if self.symbol_table not in COMPRESSED_SYMBOL_TABLES:
                raise MalformedPosition(
                    f"Symbol table {self.symbol_table!r} not allowed in compressed form",
                    field="symbol_table",
                )
            if self.precision != Precision.HUNDREDTH_MINUTE:
                raise MalformedPosition("Compressed positions have no ambiguity", field="precision")

    @property
    def data_type(self) -> int:
        """Data type indicator byte selected by timestamp and messaging."""
        if self.timestamp is not None:
            return POSITION_TIMESTAMP_MESSAGING if self.messaging_supported else POSITION_TIMESTAMP
        return POSITION_NO_TIMESTAMP_MESSAGING if self.messaging_supported else POSITION_NO_TIMESTAMP

    def latitude_bounds(self) -> Tuple[float, float]:
        """Interval the true latitude lies in, given the precision."""
        return self.precision.bounds(self.latitude.value)

    def longitude_bounds(self) -> Tuple[float, float]:
        """Interval the true longitude lies in, given the precision."""
        return self.precision.bounds(self.longitude.value)

    @classmethod
    def decode(cls, payload: bytes) -> "AprsPosition":
        """
        Decode a position payload, data type byte included.

        Args:
            payload: Bytes starting at the data type indicator

        Returns:
            AprsPosition

        Raises:
            MalformedPosition: Bad layout, digits or coordinates
            MalformedTimestamp: Bad timestamp for '/' and '@'
        """
        if not payload or payload[0] not in POSITION_DATA_TYPES:
            raise MalformedPosition("Not a position report", field="data_type", offset=0, data=bytes(payload))

        data_type = payload[0]
        messaging_supported = data_type in (POSITION_NO_TIMESTAMP_MESSAGING, POSITION_TIMESTAMP_MESSAGING)

        timestamp = None
        offset = 1
        if data_type in (POSITION_TIMESTAMP, POSITION_TIMESTAMP_MESSAGING):
            try:
                timestamp = decode_timestamp(payload[offset:offset + TIMESTAMP_LENGTH])
            except DecodeError as exc:
                exc.rebase(offset)
                raise
            offset += TIMESTAMP_LENGTH

        body = payload[offset:]
        try:
            if body[:1].isdigit():
                fields = _decode_uncompressed(body)
                length = UNCOMPRESSED_LENGTH
            else:
                fields = _decode_compressed(body)
                length = COMPRESSED_LENGTH
        except DecodeError as exc:
            exc.rebase(offset)
            raise

        latitude, longitude, precision, symbol_table, symbol_code, cst = fields
        position = cls(
            timestamp=timestamp,
            messaging_supported=messaging_supported,
            latitude=latitude,
            longitude=longitude,
            precision=precision,
            symbol_table=symbol_table,
            symbol_code=symbol_code,
            comment=bytes(body[length:]),
            cst=cst,
        )
        logger.debug(
            f"Decoded position {latitude.value:.5f},{longitude.value:.5f} "
            f"({type(cst).__name__}, {precision.name})"
        )
        return position

    def encode(self) -> bytes:
        """Encode to payload bytes, data type byte included."""
        parts = [bytes([self.data_type])]
        if self.timestamp is not None:
            parts.append(self.timestamp.encode())

        table = self.symbol_table.encode("ascii")
        code = self.symbol_code.encode("ascii")

        if isinstance(self.cst, Compressed):
            parts.append(table)
            parts.append(self.latitude.encode_compressed())
            parts.append(self.longitude.encode_compressed())
            parts.append(code)
            if self.cst.kinematics is None:
                parts.append(NO_CST)
            else:
                parts.append(encode_cs(self.cst.kinematics))
                parts.append(bytes([base91.digit_to_ascii(self.cst.compression_type.to_byte())]))
        else:
            parts.append(self.latitude.encode_uncompressed(self.precision))
            parts.append(table)
            parts.append(self.longitude.encode_uncompressed())
            parts.append(code)

        parts.append(self.comment)
        return b"".join(parts)


def _decode_uncompressed(body: bytes):
    if len(body) < UNCOMPRESSED_LENGTH:
        raise MalformedPosition(
            f"Uncompressed position needs {UNCOMPRESSED_LENGTH} bytes, got {len(body)}",
            field="position",
            offset=0,
            data=bytes(body),
        )

    latitude, precision = Latitude.decode_uncompressed(body[0:LATITUDE_LENGTH])
    lon_start = LATITUDE_LENGTH + 1
    try:
        longitude = Longitude.decode_uncompressed(body[lon_start:lon_start + LONGITUDE_LENGTH], precision)
    except DecodeError as exc:
        exc.rebase(lon_start)
        raise

    symbol_table = chr(body[LATITUDE_LENGTH])
    symbol_code = chr(body[lon_start + LONGITUDE_LENGTH])
    _check_symbol_byte("symbol_table", body, LATITUDE_LENGTH)
    _check_symbol_byte("symbol_code", body, lon_start + LONGITUDE_LENGTH)

    return latitude, longitude, precision, symbol_table, symbol_code, Uncompressed()


def _decode_compressed(body: bytes):
    if len(body) < COMPRESSED_LENGTH:
        raise MalformedPosition(
            f"Compressed position needs {COMPRESSED_LENGTH} bytes, got {len(body)}",
            field="position",
            offset=0,
            data=bytes(body),
        )

    symbol_table = chr(body[0])
    if symbol_table not in COMPRESSED_SYMBOL_TABLES:
        raise MalformedPosition(
            f"Invalid compressed symbol table {symbol_table!r}", field="symbol_table", offset=0, data=bytes(body)
        )

    try:
        latitude = Latitude.decode_compressed(body[1:5])
    except DecodeError as exc:
        exc.rebase(1)
        raise
    try:
        longitude = Longitude.decode_compressed(body[5:9])
    except DecodeError as exc:
        exc.rebase(5)
        raise

    _check_symbol_byte("symbol_code", body, 9)
    symbol_code = chr(body[9])

    # c == ' ' means the cs and T bytes carry nothing
    if body[10] == 0x20:
        return latitude, longitude, Precision.HUNDREDTH_MINUTE, symbol_table, symbol_code, Compressed()

    type_value = base91.digit_from_ascii(body[12])
    if type_value is None:
        raise MalformedPosition(
            "Invalid compression type byte", field="compression_type", offset=12, data=bytes(body)
        )
    compression_type = CompressionType.from_byte(type_value)
    try:
        kinematics = decode_cs(body[10:12], compression_type)
    except DecodeError as exc:
        exc.rebase(10)
        raise

    cst = Compressed(kinematics, compression_type)
    return latitude, longitude, Precision.HUNDREDTH_MINUTE, symbol_table, symbol_code, cst


def _check_symbol_byte(name: str, body: bytes, offset: int) -> None:
    if not 0x21 <= body[offset] <= 0x7E:
        raise MalformedPosition(
            f"Invalid {name} byte {body[offset]:#04x}", field=name, offset=offset, data=bytes(body)
        )

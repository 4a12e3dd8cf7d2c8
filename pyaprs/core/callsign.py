# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
pyaprs.core.callsign.py

Station identifier (callsign + SSID) encoding and decoding.

Two wire forms are handled:
- Text (TNC2 / APRS-IS): "CALL" or "CALL-SSID"
- Binary (AX.25): 6 space-padded ASCII bytes shifted left by one bit,
  followed by an SSID byte

SSID byte format (per AX.25 v2.2):
- Bit 7: C bit (source/destination) or H bit (digipeater)
- Bits 6-5: Reserved (always 1)
- Bits 4-1: SSID
- Bit 0: Extension (1 = last address)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .exceptions import MalformedAddress, TruncatedFrame

logger = logging.getLogger(__name__)

# AX.25 address constants
ADDRESS_LENGTH = 7
CALL_LENGTH = 6
SSID_MASK = 0x1E
RESERVED_BITS = 0x60
COMMAND_BIT = 0x80
HAS_BEEN_REPEATED_BIT = 0x80
EXTENSION_BIT = 0x01
MAX_SSID = 15
MAX_CALL_CHAR = 0x7F

# Bits a caller may pass as flags to encode_binary
FLAG_MASK = COMMAND_BIT | EXTENSION_BIT

# Separators of the TNC2 header
_TEXT_SEPARATORS = frozenset(b">,:*")


def _is_text_safe(byte: int) -> bool:
    """True if the byte may appear in a TNC2 callsign token."""
    return 0x21 <= byte <= 0x7E and byte not in _TEXT_SEPARATORS


@dataclass(frozen=True)
class Callsign:
    """
    Callsign with optional SSID.

    The text form may exceed 6 characters (tactical and Internet calls).
    SSID 0 is normalised to None.
    """

    call: str
    ssid: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate and normalize callsign."""
        if not isinstance(self.call, str) or not self.call:
            raise MalformedAddress("Empty callsign", field="callsign")
        if not self.call.isascii():
            raise MalformedAddress(f"Callsign '{self.call}' is not ASCII", field="callsign")
        if self.ssid is not None:
            if not 0 <= self.ssid <= MAX_SSID:
                raise MalformedAddress(f"SSID {self.ssid} out of range (0-15)", field="ssid")
            if self.ssid == 0:
                object.__setattr__(self, "ssid", None)

    def __str__(self) -> str:
        if self.ssid:
            return f"{self.call}-{self.ssid}"
        return self.call

    @property
    def is_binary_safe(self) -> bool:
        """
        True if the call fits a fixed-width AX.25 address.

        Any 7-bit character is accepted so that calls read from a frame
        re-encode byte for byte. Trailing spaces would be lost as padding.
        """
        return (
            len(self.call) <= CALL_LENGTH
            and not self.call.endswith(" ")
            and all(ord(c) <= MAX_CALL_CHAR for c in self.call)
        )

    @classmethod
    def parse_text(cls, token: Union[bytes, str]) -> "Callsign":
        """
        Parse "CALL" or "CALL-SSID".

        The token is split at the last '-' when the remainder is a 1-2 digit
        number. Any other remainder is part of the call.

        Raises:
            MalformedAddress: Empty call, bad character or SSID above 15
        """
        if isinstance(token, str):
            token = token.encode("utf-8")

        for index, byte in enumerate(token):
            if not _is_text_safe(byte):
                raise MalformedAddress(
                    f"Invalid character {byte:#04x} in callsign",
                    field="callsign",
                    offset=index,
                    data=bytes(token),
                )

        text = token.decode("ascii")
        call, sep, suffix = text.rpartition("-")
        ssid = None
        if sep and 1 <= len(suffix) <= 2 and suffix.isdigit():
            ssid = int(suffix)
            if ssid > MAX_SSID:
                raise MalformedAddress(
                    f"SSID {ssid} out of range (0-15)",
                    field="ssid",
                    offset=len(call) + 1,
                    data=bytes(token),
                )
        else:
            call = text

        if not call:
            raise MalformedAddress("Empty callsign", field="callsign", offset=0, data=bytes(token))

        return cls(call, ssid)

    def encode_text(self) -> bytes:
        """Encode as "CALL" or "CALL-SSID"."""
        return str(self).encode("ascii")

    @classmethod
    def parse_binary(cls, data: bytes) -> "Callsign":
        """
        Decode a 7-byte AX.25 address field.

        Flag bits (C/H, extension) are not stored; see decode_address().

        Raises:
            TruncatedFrame: Fewer than 7 bytes
            MalformedAddress: Call is all spaces
        """
        if len(data) < ADDRESS_LENGTH:
            raise TruncatedFrame("Address field too short", field="address", offset=len(data))

        call = "".join(chr(b >> 1) for b in data[:CALL_LENGTH]).rstrip(" ")
        ssid = (data[CALL_LENGTH] & SSID_MASK) >> 1
        return cls(call, ssid)

    def encode_binary(self, flags: int = 0) -> bytes:
        """
        Encode 7-byte address field.

        The call is written as stored; case is not changed.

        Args:
            flags: COMMAND_BIT / HAS_BEEN_REPEATED_BIT and EXTENSION_BIT

        Raises:
            MalformedAddress: Call longer than 6 characters or ending in a space
        """
        if not self.is_binary_safe:
            raise MalformedAddress(
                f"Callsign '{self.call}' cannot be encoded as an AX.25 address",
                field="callsign",
            )

        call_bytes = bytes(ord(c) << 1 for c in self.call.ljust(CALL_LENGTH))
        ssid_byte = RESERVED_BITS
        ssid_byte |= ((self.ssid or 0) << 1) & SSID_MASK
        ssid_byte |= flags & FLAG_MASK
        return call_bytes + bytes([ssid_byte])


@dataclass(frozen=True)
class RawAddress:
    """
    Binary destination field that is not valid callsign syntax.

    Kept verbatim so that the frame re-encodes to the same bytes.
    """

    data: bytes

    def __post_init__(self) -> None:
        if len(self.data) != ADDRESS_LENGTH:
            raise MalformedAddress(
                f"Raw address must be {ADDRESS_LENGTH} bytes, got {len(self.data)}",
                field="destination",
            )

    def __str__(self) -> str:
        return self.encode_text().decode("latin-1")

    def encode_text(self) -> bytes:
        """
        Best-effort text rendering: unshifted call bytes plus SSID.

        Bytes that cannot appear in a TNC2 header token are written as
        "\\xNN" so the line still parses. The text form does not map back
        to the same raw bytes.
        """
        call = bytes(b >> 1 for b in self.data[:CALL_LENGTH]).rstrip(b" ")
        rendered = b"".join(
            bytes([b]) if _is_text_safe(b) else b"\\x%02x" % b for b in call
        ) or b"\\x20"
        ssid = (self.data[CALL_LENGTH] & SSID_MASK) >> 1
        if ssid:
            rendered += b"-%d" % ssid
        return rendered

    def encode_binary(self, flags: int = 0) -> bytes:
        """Stored bytes with only the extension bit replaced."""
        last = self.data[CALL_LENGTH] & ~EXTENSION_BIT & 0xFF
        return self.data[:CALL_LENGTH] + bytes([last | (flags & EXTENSION_BIT)])


def is_valid_binary_call(data: bytes) -> bool:
    """
    Check the six call bytes of an address field.

    Valid calls unshift to characters a TNC2 header can carry, with
    trailing space padding only and bit 0 of every byte clear.
    """
    if len(data) < CALL_LENGTH:
        return False
    if any(b & 0x01 for b in data[:CALL_LENGTH]):
        return False
    stripped = bytes(b >> 1 for b in data[:CALL_LENGTH]).rstrip(b" ")
    return bool(stripped) and all(_is_text_safe(b) for b in stripped)


def decode_address(data: bytes, offset: int = 0) -> Tuple[Callsign, int]:
    """
    Decode one address field starting at offset.

    Returns:
        (callsign, ssid byte) so the caller can read C/H and extension bits

    Raises:
        TruncatedFrame: Fewer than 7 bytes remain
    """
    field = data[offset:offset + ADDRESS_LENGTH]
    if len(field) < ADDRESS_LENGTH:
        raise TruncatedFrame(
            "Address field cut off before extension bit",
            field="address",
            offset=len(data),
            data=bytes(data),
        )
    try:
        callsign = Callsign.parse_binary(field)
    except MalformedAddress as exc:
        exc.offset = offset
        raise
    return callsign, field[CALL_LENGTH]

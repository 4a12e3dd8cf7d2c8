# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
tests/test_callsign.py

Unit tests for the callsign codec.

Covers:
- Text parsing and SSID range
- AX.25 address field encoding/decoding
- Raw destination addresses
- Error cases (empty call, bad characters, truncated fields)
"""

import pytest

from pyaprs.core.callsign import (
    COMMAND_BIT,
    EXTENSION_BIT,
    HAS_BEEN_REPEATED_BIT,
    Callsign,
    RawAddress,
    decode_address,
    is_valid_binary_call,
)
from pyaprs.core.exceptions import MalformedAddress, TruncatedFrame


def shifted(call: str) -> bytes:
    return bytes(ord(c) << 1 for c in call.ljust(6))


def test_parse_text_plain_and_ssid():
    """Test CALL and CALL-SSID parsing."""
    assert Callsign.parse_text(b"N0CALL") == Callsign("N0CALL")
    assert Callsign.parse_text(b"KE4AHR-7") == Callsign("KE4AHR", 7)
    assert Callsign.parse_text("WIDE2-2") == Callsign("WIDE2", 2)


def test_ssid_boundaries():
    """SSID 0 and 15 are accepted, 16 is rejected."""
    zero = Callsign.parse_text(b"N0CALL-0")
    assert zero.ssid is None
    assert zero == Callsign("N0CALL")
    assert str(zero) == "N0CALL"

    assert Callsign.parse_text(b"N0CALL-15").ssid == 15

    with pytest.raises(MalformedAddress) as excinfo:
        Callsign.parse_text(b"N0CALL-16")
    assert excinfo.value.field == "ssid"
    assert excinfo.value.offset == 7

    with pytest.raises(MalformedAddress):
        Callsign("N0CALL", 16)

    with pytest.raises(MalformedAddress):
        Callsign("N0CALL", -1)


def test_non_numeric_suffix_is_part_of_call():
    """Only a 1-2 digit remainder is an SSID."""
    assert Callsign.parse_text(b"N0CALL-AB") == Callsign("N0CALL-AB")
    assert Callsign.parse_text(b"N0CALL-123") == Callsign("N0CALL-123")
    assert Callsign.parse_text(b"TACTICAL1") == Callsign("TACTICAL1")


def test_parse_text_errors():
    """Empty calls and separator characters are rejected."""
    with pytest.raises(MalformedAddress):
        Callsign.parse_text(b"")

    with pytest.raises(MalformedAddress):
        Callsign.parse_text(b"-5")

    with pytest.raises(MalformedAddress) as excinfo:
        Callsign.parse_text(b"N0 CALL")
    assert excinfo.value.offset == 2

    with pytest.raises(MalformedAddress):
        Callsign.parse_text(b"N0CALL*")


def test_encode_text():
    """Test text encoding."""
    assert Callsign("N0CALL").encode_text() == b"N0CALL"
    assert Callsign("N0CALL", 9).encode_text() == b"N0CALL-9"
    assert Callsign("dl4mea").encode_text() == b"dl4mea"


def test_encode_binary():
    """Test AX.25 address field encoding."""
    encoded = Callsign("DEST", 1).encode_binary()
    assert encoded == shifted("DEST") + bytes([0x60 | (1 << 1)])

    last = Callsign("SRC", 2).encode_binary(EXTENSION_BIT)
    assert last == shifted("SRC") + bytes([0x61 | (2 << 1)])

    command = Callsign("APRS").encode_binary(COMMAND_BIT)
    assert command[-1] == 0xE0

    # Case is kept
    assert Callsign("dl4mea").encode_binary()[:6] == shifted("dl4mea")


def test_encode_binary_length_limit():
    """Calls longer than 6 characters cannot go into AX.25."""
    with pytest.raises(MalformedAddress):
        Callsign("ICA3D17F2").encode_binary()

    with pytest.raises(MalformedAddress):
        Callsign("AB ").encode_binary()

    assert Callsign("AB1CDE").is_binary_safe
    assert Callsign("N0/AB").is_binary_safe
    assert not Callsign("TOOLONG").is_binary_safe


def test_binary_round_trip_keeps_characters():
    """Lowercase and punctuation survive encode/decode unchanged."""
    for call in ("n0call", "N0/AB", "a-b"):
        encoded = Callsign(call, 3).encode_binary()
        assert encoded[:6] == shifted(call)
        assert Callsign.parse_binary(encoded) == Callsign(call, 3)


def test_parse_binary():
    """Test AX.25 address field decoding."""
    data = shifted("VE9GFI") + bytes([0xE4])
    assert Callsign.parse_binary(data) == Callsign("VE9GFI", 2)

    with pytest.raises(TruncatedFrame):
        Callsign.parse_binary(data[:6])

    with pytest.raises(MalformedAddress):
        Callsign.parse_binary(shifted("") + bytes([0x60]))


def test_decode_address_returns_flags():
    """The SSID byte is handed back so the path codec can read flags."""
    data = b"\x00" * 7 + shifted("WIDE3") + bytes([0x61 | HAS_BEEN_REPEATED_BIT])
    callsign, ssid_byte = decode_address(data, 7)
    assert callsign == Callsign("WIDE3")
    assert ssid_byte & HAS_BEEN_REPEATED_BIT
    assert ssid_byte & EXTENSION_BIT

    with pytest.raises(TruncatedFrame) as excinfo:
        decode_address(data[:10], 7)
    assert excinfo.value.offset == 10


def test_is_valid_binary_call():
    """Test the destination syntax check."""
    assert is_valid_binary_call(shifted("APRS") + b"\x60")
    assert is_valid_binary_call(shifted("aprs") + b"\x60")
    assert not is_valid_binary_call(shifted(">PRS") + b"\x60")
    assert not is_valid_binary_call(shifted("AP RS") + b"\x60")
    assert not is_valid_binary_call(shifted("") + b"\x60")
    assert not is_valid_binary_call(b"\x83" + shifted("PRS")[:5] + b"\x60")


def test_raw_address_round_trip():
    """Raw destination bytes are kept; only the extension bit changes."""
    field = shifted("aprs") + bytes([0xE1])
    raw = RawAddress(field)
    assert raw.encode_binary(EXTENSION_BIT) == field
    assert raw.encode_binary(0) == field[:6] + bytes([0xE0])
    assert raw.encode_text() == b"aprs"

    with pytest.raises(MalformedAddress):
        RawAddress(b"\x00" * 6)


def test_raw_address_text_escapes_separators():
    """Header separators and spaces are written as \\xNN escapes."""
    raw = RawAddress(shifted("A>B,C") + bytes([0x60 | (5 << 1)]))
    assert raw.encode_text() == b"A\\x3eB\\x2cC-5"
    assert Callsign.parse_text(raw.encode_text()) == Callsign("A\\x3eB\\x2cC", 5)

    assert RawAddress(shifted("") + b"\x60").encode_text() == b"\\x20"

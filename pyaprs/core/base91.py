# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
Base-91 digits as used by APRS compressed positions.

Each digit is a printable ASCII byte from '!' (0) to '{' (90).
"""

from typing import Optional

BASE = 91
OFFSET = 33


def digit_from_ascii(byte: int) -> Optional[int]:
    """Return the digit value of byte, or None if it is not a base-91 digit."""
    value = byte - OFFSET
    if 0 <= value < BASE:
        return value
    return None


def digit_to_ascii(value: int) -> int:
    if not 0 <= value < BASE:
        raise ValueError(f"Base-91 digit {value} out of range (0-90)")
    return value + OFFSET


def decode(data: bytes) -> Optional[int]:
    """Σ digit_i * 91^(n-1-i), or None on any invalid digit."""
    value = 0
    for byte in data:
        digit = digit_from_ascii(byte)
        if digit is None:
            return None
        value = value * BASE + digit
    return value


def encode(value: int, width: int) -> bytes:
    """Encode a non-negative integer as exactly width digits."""
    if not 0 <= value < BASE ** width:
        raise ValueError(f"{value} does not fit in {width} base-91 digits")
    digits = bytearray(width)
    for i in range(width - 1, -1, -1):
        value, digit = divmod(value, BASE)
        digits[i] = digit + OFFSET
    return bytes(digits)

# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
pyaprs.core.timestamp.py

APRS timestamps: six digits followed by a type character.

- "HHMMSSh": hour, minute, second (UTC)
- "DDHHMMz": day of month, hour, minute (UTC)
- "DDHHMM/": day of month, hour, minute (local time)

Absent calendar fields (month, year, seconds) are never guessed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from .exceptions import MalformedTimestamp

TIMESTAMP_LENGTH = 7


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        raise MalformedTimestamp(f"{name} {value} out of range ({low}-{high})", field="timestamp")


@dataclass(frozen=True)
class HHMMSS:
    """Hour, minute and second in UTC"""

    hour: int
    minute: int
    second: int

    def __post_init__(self) -> None:
        _check_range("Hour", self.hour, 0, 23)
        _check_range("Minute", self.minute, 0, 59)
        _check_range("Second", self.second, 0, 59)

    def encode(self) -> bytes:
        return b"%02d%02d%02dh" % (self.hour, self.minute, self.second)


@dataclass(frozen=True)
class DDHHMM:
    """Day of month, hour and minute in UTC"""

    day: int
    hour: int
    minute: int

    def __post_init__(self) -> None:
        _check_range("Day", self.day, 1, 31)
        _check_range("Hour", self.hour, 0, 23)
        _check_range("Minute", self.minute, 0, 59)

    def encode(self) -> bytes:
        return b"%02d%02d%02dz" % (self.day, self.hour, self.minute)


@dataclass(frozen=True)
class LocalDDHHMM(DDHHMM):
    """Day of month, hour and minute in the sender's local time"""

    def encode(self) -> bytes:
        return b"%02d%02d%02d/" % (self.day, self.hour, self.minute)


Timestamp = Union[HHMMSS, DDHHMM, LocalDDHHMM]

_VARIANTS = {
    ord("h"): HHMMSS,
    ord("H"): HHMMSS,
    ord("z"): DDHHMM,
    ord("Z"): DDHHMM,
    ord("/"): LocalDDHHMM,
}


def decode_timestamp(data: bytes) -> Timestamp:
    """
    Decode a 7-byte timestamp field.

    Raises:
        MalformedTimestamp: Wrong length, non-digit, unknown type character
            or calendar field out of range
    """
    if len(data) != TIMESTAMP_LENGTH:
        raise MalformedTimestamp(
            f"Timestamp must be {TIMESTAMP_LENGTH} bytes, got {len(data)}",
            field="timestamp",
            offset=0,
            data=bytes(data),
        )

    variant = _VARIANTS.get(data[6])
    if variant is None:
        raise MalformedTimestamp(
            f"Unknown timestamp type {chr(data[6])!r}", field="timestamp", offset=6, data=bytes(data)
        )

    fields = _parse_digit_pairs(data)
    try:
        return variant(*fields)
    except MalformedTimestamp as exc:
        exc.offset = 0
        exc.data = bytes(data)
        raise


def _parse_digit_pairs(data: bytes) -> Tuple[int, int, int]:
    for index in range(6):
        if not 0x30 <= data[index] <= 0x39:
            raise MalformedTimestamp(
                "Non-digit in timestamp", field="timestamp", offset=index, data=bytes(data)
            )
    return int(data[0:2]), int(data[2:4]), int(data[4:6])

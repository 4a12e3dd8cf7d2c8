# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
pyaprs.core.compression.py

Extra fields of a compressed position: the two "cs" bytes and the
compression type byte "T".

cs carries one of:
- course/speed: c in 0..89, course = c * 4, speed = 1.08^s - 1 knots
- radio range: c == '{', range = 2 * 1.08^s miles
- altitude: when T says the NMEA source is GGA, altitude = 1.002^(c*91+s) feet

T byte format (after subtracting 33):
- Bit 5: GPS fix (0 = old, 1 = current)
- Bits 4-3: NMEA source
- Bits 2-0: Compression origin
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Union

from . import base91
from .exceptions import MalformedPosition

RANGE_MARKER = 90  # '{' as a base-91 digit
MAX_COURSE_DIGIT = 89

GPS_FIX_BIT = 0x20
NMEA_SOURCE_MASK = 0x18
NMEA_SOURCE_SHIFT = 3
ORIGIN_MASK = 0x07
TYPE_MASK = GPS_FIX_BIT | NMEA_SOURCE_MASK | ORIGIN_MASK

SPEED_BASE = 1.08
ALTITUDE_BASE = 1.002


class GpsFix(IntEnum):
    OLD = 0
    CURRENT = 1


class NmeaSource(IntEnum):
    OTHER = 0
    GLL = 1
    GGA = 2
    RMC = 3


class Origin(IntEnum):
    COMPRESSED = 0
    TNC_BTEXT = 1
    SOFTWARE = 2
    TBD = 3
    KPC3 = 4
    PICO = 5
    OTHER = 6
    DIGIPEATER = 7


@dataclass(frozen=True)
class CompressionType:
    """Decoded compression type byte."""

    gps_fix: GpsFix = GpsFix.OLD
    nmea_source: NmeaSource = NmeaSource.OTHER
    origin: Origin = Origin.COMPRESSED

    @classmethod
    def from_byte(cls, value: int) -> "CompressionType":
        """
        Decode the T value (ASCII byte minus 33).

        Bits 6 and 7 are unused and ignored; to_byte() writes them as zero.
        """
        value &= TYPE_MASK
        return cls(
            gps_fix=GpsFix(1 if value & GPS_FIX_BIT else 0),
            nmea_source=NmeaSource((value & NMEA_SOURCE_MASK) >> NMEA_SOURCE_SHIFT),
            origin=Origin(value & ORIGIN_MASK),
        )

    def to_byte(self) -> int:
        value = GPS_FIX_BIT if self.gps_fix == GpsFix.CURRENT else 0
        value |= int(self.nmea_source) << NMEA_SOURCE_SHIFT
        value |= int(self.origin)
        return value


@dataclass(frozen=True)
class CourseSpeed:
    """Course in degrees (0-359, multiples of 4 on the wire) and speed in knots."""

    course_degrees: int
    speed_knots: float

    def __post_init__(self) -> None:
        if not 0 <= self.course_degrees < 360:
            raise MalformedPosition(f"Course {self.course_degrees} out of range", field="course")
        if self.speed_knots < 0:
            raise MalformedPosition(f"Speed {self.speed_knots} is negative", field="speed")
        if self._speed_digit() >= base91.BASE:
            raise MalformedPosition(f"Speed {self.speed_knots} too large", field="speed")

    @classmethod
    def from_cs(cls, c: int, s: int) -> "CourseSpeed":
        return cls(c * 4, SPEED_BASE ** s - 1.0)

    def _speed_digit(self) -> int:
        return round(math.log(self.speed_knots + 1.0) / math.log(SPEED_BASE))

    def to_cs(self):
        return self.course_degrees // 4, self._speed_digit()


@dataclass(frozen=True)
class RadioRange:
    """Pre-calculated radio range in miles."""

    range_miles: float

    def __post_init__(self) -> None:
        if not self.range_miles > 0 or not 0 <= self._range_digit() < base91.BASE:
            raise MalformedPosition(f"Radio range {self.range_miles} out of range", field="range")

    @classmethod
    def from_s(cls, s: int) -> "RadioRange":
        return cls(2.0 * SPEED_BASE ** s)

    def _range_digit(self) -> int:
        return round(math.log(self.range_miles / 2.0) / math.log(SPEED_BASE))

    def to_cs(self):
        return RANGE_MARKER, self._range_digit()


@dataclass(frozen=True)
class Altitude:
    """Altitude in feet, only carried when the NMEA source is GGA."""

    altitude_feet: float

    def __post_init__(self) -> None:
        if not self.altitude_feet > 0 or not 0 <= self._altitude_digits() < base91.BASE ** 2:
            raise MalformedPosition(f"Altitude {self.altitude_feet} out of range", field="altitude")

    @classmethod
    def from_cs(cls, c: int, s: int) -> "Altitude":
        return cls(ALTITUDE_BASE ** (c * base91.BASE + s))

    def _altitude_digits(self) -> int:
        return round(math.log(self.altitude_feet) / math.log(ALTITUDE_BASE))

    def to_cs(self):
        return divmod(self._altitude_digits(), base91.BASE)


Kinematics = Union[CourseSpeed, RadioRange, Altitude]


def decode_cs(data: bytes, compression_type: CompressionType) -> Kinematics:
    """
    Decode the two cs bytes.

    Raises:
        MalformedPosition: Invalid digit, or c above '{'
    """
    c = base91.digit_from_ascii(data[0])
    s = base91.digit_from_ascii(data[1])
    if c is None or s is None:
        raise MalformedPosition(
            "Invalid base-91 digit in course/speed", field="course_speed", offset=0, data=bytes(data)
        )

    if compression_type.nmea_source == NmeaSource.GGA:
        return Altitude.from_cs(c, s)
    if c <= MAX_COURSE_DIGIT:
        return CourseSpeed.from_cs(c, s)
    return RadioRange.from_s(s)


def encode_cs(kinematics: Kinematics) -> bytes:
    c, s = kinematics.to_cs()
    return bytes([base91.digit_to_ascii(c), base91.digit_to_ascii(s)])


def check_kinematics(kinematics: Optional[Kinematics], compression_type: Optional[CompressionType]) -> None:
    """
    Altitude is carried iff the NMEA source is GGA; any cs value needs a T byte.

    Raises:
        MalformedPosition: Combination that would not decode back to itself
    """
    if kinematics is None:
        return
    if compression_type is None:
        raise MalformedPosition("Compressed course/speed requires a compression type", field="cst")
    is_gga = compression_type.nmea_source == NmeaSource.GGA
    if isinstance(kinematics, Altitude) != is_gga:
        raise MalformedPosition(
            "Altitude requires NMEA source GGA and GGA requires altitude", field="cst"
        )

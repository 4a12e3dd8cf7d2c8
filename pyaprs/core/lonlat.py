# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
pyaprs.core.lonlat.py

Latitude and longitude value types and their APRS encodings.

Implements:
- Uncompressed degrees/decimal-minutes ("4903.50N", "07201.75W") with
  position ambiguity expressed by trailing spaces in the latitude
- Compressed base-91 coordinates (4 digits per axis)

Construction enforces -90 <= lat <= 90 and -180 <= lon <= 180; values
outside range are decode errors, never clamped.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

from . import base91
from .exceptions import MalformedPosition

LATITUDE_LENGTH = 8
LONGITUDE_LENGTH = 9
COMPRESSED_LENGTH = 4

# Compressed coordinate scale factors (APRS 1.01, chapter 9)
LATITUDE_SCALE = 380926.0
LONGITUDE_SCALE = 190463.0


class Precision(IntEnum):
    """
    Position ambiguity, valued by the number of blanked trailing digits.

    Compressed positions always carry HUNDREDTH_MINUTE.
    """
    HUNDREDTH_MINUTE = 0
    TENTH_MINUTE = 1
    ONE_MINUTE = 2
    TEN_MINUTE = 3
    ONE_DEGREE = 4
    TEN_DEGREE = 5

    @property
    def width(self) -> float:
        """Width of the uncertainty interval in degrees."""
        return _PRECISION_WIDTH[self]

    def bounds(self, center: float) -> Tuple[float, float]:
        half = self.width / 2.0
        return center - half, center + half


_PRECISION_WIDTH = {
    Precision.HUNDREDTH_MINUTE: 1.0 / 6000.0,
    Precision.TENTH_MINUTE: 1.0 / 600.0,
    Precision.ONE_MINUTE: 1.0 / 60.0,
    Precision.TEN_MINUTE: 1.0 / 6.0,
    Precision.ONE_DEGREE: 1.0,
    Precision.TEN_DEGREE: 10.0,
}


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _from_dmh(deg: int, minute: int, hundredths: int, positive: bool) -> float:
    value = deg + minute / 60.0 + hundredths / 6000.0
    return value if positive else -value


def _to_dmh(value: float) -> Tuple[int, int, int, bool]:
    positive = value >= 0.0
    value = abs(value)

    deg = int(value)
    minute = int((value - deg) * 60.0)
    hundredths = _round_half_up((value - deg - minute / 60.0) * 6000.0)

    # carry rounding overflow upwards
    if hundredths == 100:
        hundredths = 0
        minute += 1
    if minute == 60:
        minute = 0
        deg += 1

    return deg, minute, hundredths, positive


def _parse_digits(data: bytes) -> Optional[int]:
    if data and all(0x30 <= b <= 0x39 for b in data):
        return int(data)
    return None


def _parse_digits_trailing_spaces(pair: bytes, only_spaces: bool) -> Optional[Tuple[int, int]]:
    """
    Parse a two-character group that may end in ambiguity spaces.

    Returns:
        (value, number of spaces) or None if the group is invalid. Once a
        space has been seen, every following group must be all spaces.
    """
    if pair == b"  ":
        return 0, 2
    if only_spaces:
        return None
    if pair[1:] == b" ":
        digit = _parse_digits(pair[:1])
        return None if digit is None else (digit * 10, 1)
    value = _parse_digits(pair)
    return None if value is None else (value, 0)


@dataclass(frozen=True)
class Latitude:
    """Latitude in decimal degrees, north positive."""

    value: float

    def __post_init__(self) -> None:
        if math.isnan(self.value) or not -90.0 <= self.value <= 90.0:
            raise MalformedPosition(f"Latitude {self.value} out of range", field="latitude")

    def __float__(self) -> float:
        return float(self.value)

    @classmethod
    def from_dmh(cls, deg: int, minute: int, hundredths: int, north: bool) -> "Latitude":
        """Create from degrees, minutes, hundredths of a minute and hemisphere."""
        return cls(_from_dmh(deg, minute, hundredths, north))

    def dmh(self) -> Tuple[int, int, int, bool]:
        """Degrees, minutes, hundredths of a minute and north flag."""
        return _to_dmh(self.value)

    @classmethod
    def decode_uncompressed(cls, data: bytes) -> Tuple["Latitude", Precision]:
        """
        Decode "DDMM.HHN".

        Trailing spaces define the precision. "4903.5 N" is TENTH_MINUTE,
        "49  .  N" is ONE_DEGREE.

        Raises:
            MalformedPosition: Bad width, digits, hemisphere or range
        """
        if len(data) != LATITUDE_LENGTH or data[4:5] != b".":
            raise _bad("latitude", "Latitude must be DDMM.HH[NS]", data)

        hemisphere = data[7:8]
        if hemisphere not in (b"N", b"S"):
            raise _bad("latitude", "Latitude hemisphere must be N or S", data, 7)

        total_spaces = 0
        groups = []
        spaces = 0
        for start, group in ((0, data[0:2]), (2, data[2:4]), (5, data[5:7])):
            parsed = _parse_digits_trailing_spaces(group, spaces > 0)
            if parsed is None:
                raise _bad("latitude", "Invalid latitude digits", data, start)
            value, spaces = parsed
            groups.append(value)
            total_spaces += spaces

        if total_spaces > Precision.TEN_DEGREE:
            raise _bad("latitude", "Latitude has no significant digits", data)
        precision = Precision(total_spaces)

        try:
            latitude = cls.from_dmh(groups[0], groups[1], groups[2], hemisphere == b"N")
        except MalformedPosition as exc:
            exc.offset = 0
            exc.data = bytes(data)
            raise
        return latitude, precision

    def encode_uncompressed(self, precision: Precision = Precision.HUNDREDTH_MINUTE) -> bytes:
        """Encode "DDMM.HHN", blanking digits per precision."""
        deg, minute, hundredths, north = self.dmh()
        digits = b"%02d%02d%02d" % (deg, minute, hundredths)
        keep = len(digits) - int(precision)
        digits = digits[:keep] + b" " * (len(digits) - keep)
        return digits[0:4] + b"." + digits[4:6] + (b"N" if north else b"S")

    @classmethod
    def decode_compressed(cls, data: bytes) -> "Latitude":
        """
        Decode 4 base-91 digits: lat = 90 - value / 380926.

        Raises:
            MalformedPosition: Invalid digit or result out of range
        """
        value = _decode_base91(data, "latitude")
        try:
            return cls(90.0 - value / LATITUDE_SCALE)
        except MalformedPosition as exc:
            exc.offset = 0
            exc.data = bytes(data)
            raise

    def encode_compressed(self) -> bytes:
        return base91.encode(_round_half_up((90.0 - self.value) * LATITUDE_SCALE), COMPRESSED_LENGTH)


@dataclass(frozen=True)
class Longitude:
    """Longitude in decimal degrees, east positive."""

    value: float

    def __post_init__(self) -> None:
        if math.isnan(self.value) or not -180.0 <= self.value <= 180.0:
            raise MalformedPosition(f"Longitude {self.value} out of range", field="longitude")

    def __float__(self) -> float:
        return float(self.value)

    @classmethod
    def from_dmh(cls, deg: int, minute: int, hundredths: int, east: bool) -> "Longitude":
        """Create from degrees, minutes, hundredths of a minute and hemisphere."""
        return cls(_from_dmh(deg, minute, hundredths, east))

    def dmh(self) -> Tuple[int, int, int, bool]:
        """Degrees, minutes, hundredths of a minute and east flag."""
        return _to_dmh(self.value)

    @classmethod
    def decode_uncompressed(
        cls, data: bytes, precision: Precision = Precision.HUNDREDTH_MINUTE
    ) -> "Longitude":
        """
        Decode "DDDMM.HHE".

        The last `precision` digits are ignored, whatever they contain;
        the latitude decides the ambiguity of the whole position.

        Raises:
            MalformedPosition: Bad width, digits, hemisphere or range
        """
        if len(data) != LONGITUDE_LENGTH or data[5:6] != b".":
            raise _bad("longitude", "Longitude must be DDDMM.HH[EW]", data)

        hemisphere = data[8:9]
        if hemisphere not in (b"E", b"W"):
            raise _bad("longitude", "Longitude hemisphere must be E or W", data, 8)

        digits = bytearray(data[0:5] + data[6:8])
        for i in range(len(digits) - int(precision), len(digits)):
            digits[i] = 0x30

        deg = _parse_digits(bytes(digits[0:3]))
        minute = _parse_digits(bytes(digits[3:5]))
        hundredths = _parse_digits(bytes(digits[5:7]))
        if deg is None or minute is None or hundredths is None:
            raise _bad("longitude", "Invalid longitude digits", data)

        try:
            return cls.from_dmh(deg, minute, hundredths, hemisphere == b"E")
        except MalformedPosition as exc:
            exc.offset = 0
            exc.data = bytes(data)
            raise

    def encode_uncompressed(self) -> bytes:
        """Encode "DDDMM.HHE" with all digits."""
        deg, minute, hundredths, east = self.dmh()
        return b"%03d%02d.%02d" % (deg, minute, hundredths) + (b"E" if east else b"W")

    @classmethod
    def decode_compressed(cls, data: bytes) -> "Longitude":
        """
        Decode 4 base-91 digits: lon = -180 + value / 190463.

        Raises:
            MalformedPosition: Invalid digit or result out of range
        """
        value = _decode_base91(data, "longitude")
        try:
            return cls(value / LONGITUDE_SCALE - 180.0)
        except MalformedPosition as exc:
            exc.offset = 0
            exc.data = bytes(data)
            raise

    def encode_compressed(self) -> bytes:
        return base91.encode(_round_half_up((180.0 + self.value) * LONGITUDE_SCALE), COMPRESSED_LENGTH)


def _decode_base91(data: bytes, field: str) -> int:
    if len(data) != COMPRESSED_LENGTH:
        raise _bad(field, f"Compressed {field} must be {COMPRESSED_LENGTH} digits", data)
    value = base91.decode(data)
    if value is None:
        bad_index = next(i for i, b in enumerate(data) if base91.digit_from_ascii(b) is None)
        raise _bad(field, f"Invalid base-91 digit in {field}", data, bad_index)
    return value


def _bad(field: str, message: str, data: bytes, offset: int = 0) -> MalformedPosition:
    return MalformedPosition(message, field=field, offset=offset, data=bytes(data))

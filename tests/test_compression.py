# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
tests/test_compression.py

Unit tests for compressed position extras: the compression type byte and
course/speed, radio range and altitude.
"""

import pytest

from pyaprs.core.compression import (
    Altitude,
    CompressionType,
    CourseSpeed,
    GpsFix,
    NmeaSource,
    Origin,
    RadioRange,
    check_kinematics,
    decode_cs,
    encode_cs,
)
from pyaprs.core.exceptions import MalformedPosition


def test_compression_type_bits():
    """Test T byte field layout."""
    t = CompressionType.from_byte(ord("C") - 33)
    assert t == CompressionType(GpsFix.CURRENT, NmeaSource.OTHER, Origin.SOFTWARE)

    gga = CompressionType.from_byte(ord("1") - 33)
    assert gga.nmea_source == NmeaSource.GGA
    assert gga.gps_fix == GpsFix.OLD
    assert gga.origin == Origin.COMPRESSED

    assert CompressionType(GpsFix.CURRENT, NmeaSource.RMC, Origin.DIGIPEATER).to_byte() == 0x3F


def test_compression_type_all_values():
    """Every 6-bit value decodes and encodes back to itself."""
    for value in range(64):
        assert CompressionType.from_byte(value).to_byte() == value


def test_compression_type_unused_bits():
    """Bits above 5 are ignored on decode and written as zero."""
    t = CompressionType.from_byte(0x40 | 0x22)
    assert t == CompressionType.from_byte(0x22)
    assert t.to_byte() == 0x22

    assert CompressionType.from_byte(ord("{") - 33).to_byte() == 0x1A


def test_course_speed():
    """c in 0-89 is course/speed."""
    cs = decode_cs(b"A>", CompressionType())
    assert isinstance(cs, CourseSpeed)
    assert cs.course_degrees == 128
    assert cs.speed_knots == pytest.approx(1.08 ** 29 - 1)
    assert encode_cs(cs) == b"A>"

    assert encode_cs(CourseSpeed(0, 0.0)) == b"!!"

    with pytest.raises(MalformedPosition):
        CourseSpeed(360, 1.0)

    with pytest.raises(MalformedPosition):
        CourseSpeed(90, -1.0)

    with pytest.raises(MalformedPosition):
        CourseSpeed(90, 1.08 ** 95)


def test_radio_range():
    """c == '{' is a radio range."""
    rng = decode_cs(b"{>", CompressionType())
    assert isinstance(rng, RadioRange)
    assert rng.range_miles == pytest.approx(2 * 1.08 ** 29)
    assert encode_cs(rng) == b"{>"

    with pytest.raises(MalformedPosition):
        RadioRange(0.0)

    with pytest.raises(MalformedPosition):
        RadioRange(0.5)


def test_altitude():
    """GGA NMEA source means cs is altitude."""
    gga = CompressionType(nmea_source=NmeaSource.GGA)
    alt = decode_cs(b"2>", gga)
    assert isinstance(alt, Altitude)
    assert alt.altitude_feet == pytest.approx(1.002 ** (17 * 91 + 29))
    assert encode_cs(alt) == b"2>"

    # GGA wins over the '{' range marker
    assert isinstance(decode_cs(b"{>", gga), Altitude)

    assert encode_cs(Altitude.from_cs(50, 60)) == b"S]"

    with pytest.raises(MalformedPosition):
        Altitude(-5.0)


def test_invalid_cs_digit():
    """cs bytes must be base-91 digits."""
    with pytest.raises(MalformedPosition) as excinfo:
        decode_cs(b"A\x7f", CompressionType())
    assert excinfo.value.offset == 0


def test_check_kinematics():
    """Altitude iff GGA; any cs value needs a compression type."""
    check_kinematics(None, None)
    check_kinematics(CourseSpeed(88, 10.0), CompressionType())
    check_kinematics(Altitude(1000.0), CompressionType(nmea_source=NmeaSource.GGA))

    with pytest.raises(MalformedPosition):
        check_kinematics(CourseSpeed(88, 10.0), None)

    with pytest.raises(MalformedPosition):
        check_kinematics(Altitude(1000.0), CompressionType(nmea_source=NmeaSource.RMC))

    with pytest.raises(MalformedPosition):
        check_kinematics(RadioRange(20.0), CompressionType(nmea_source=NmeaSource.GGA))

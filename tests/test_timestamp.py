# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
tests/test_timestamp.py

Unit tests for the timestamp codec.
"""

import pytest

from pyaprs.core.exceptions import MalformedTimestamp
from pyaprs.core.timestamp import DDHHMM, HHMMSS, LocalDDHHMM, decode_timestamp


def test_decode_variants():
    """Type character selects the variant."""
    assert decode_timestamp(b"074849h") == HHMMSS(7, 48, 49)
    assert decode_timestamp(b"092345z") == DDHHMM(9, 23, 45)
    assert decode_timestamp(b"092345/") == LocalDDHHMM(9, 23, 45)


def test_local_and_utc_are_distinct():
    """Local and UTC day/hour/minute never compare equal."""
    assert decode_timestamp(b"092345/") != decode_timestamp(b"092345z")


def test_encode():
    """Test encoding back to 7 bytes."""
    assert HHMMSS(7, 48, 49).encode() == b"074849h"
    assert DDHHMM(1, 0, 5).encode() == b"010005z"
    assert LocalDDHHMM(31, 23, 59).encode() == b"312359/"


def test_uppercase_type_written_lowercase():
    """'H' and 'Z' are accepted and encoded as 'h' and 'z'."""
    assert decode_timestamp(b"074849H").encode() == b"074849h"
    assert decode_timestamp(b"092345Z").encode() == b"092345z"


def test_out_of_range_fields():
    """Calendar fields are checked, never wrapped."""
    with pytest.raises(MalformedTimestamp):
        decode_timestamp(b"240000h")

    with pytest.raises(MalformedTimestamp):
        decode_timestamp(b"076000h")

    with pytest.raises(MalformedTimestamp):
        decode_timestamp(b"000000z")  # day 0

    with pytest.raises(MalformedTimestamp):
        decode_timestamp(b"320000z")

    with pytest.raises(MalformedTimestamp):
        HHMMSS(0, 0, 60)


def test_layout_errors():
    """Wrong length, non-digits and unknown types carry offsets."""
    with pytest.raises(MalformedTimestamp) as excinfo:
        decode_timestamp(b"07484h")
    assert excinfo.value.offset == 0

    with pytest.raises(MalformedTimestamp) as excinfo:
        decode_timestamp(b"0748x9h")
    assert excinfo.value.offset == 4

    with pytest.raises(MalformedTimestamp) as excinfo:
        decode_timestamp(b"074849x")
    assert excinfo.value.offset == 6
    assert excinfo.value.field == "timestamp"

# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
tests/test_message.py

Unit tests for the message payload codec.
"""

import pytest

from pyaprs.core.exceptions import MalformedMessage
from pyaprs.core.message import AprsMessage


def test_decode_with_id():
    """Test addressee, text and message id."""
    message = AprsMessage.decode(b":N0CALL   :Hello there{123")
    assert message.addressee == "N0CALL"
    assert message.text == b"Hello there"
    assert message.id == b"123"
    assert message.encode() == b":N0CALL   :Hello there{123"


def test_decode_without_id():
    """Bulletins and acks carry no id."""
    bulletin = AprsMessage.decode(b":BLN1     :Net tonight 2000z")
    assert bulletin == AprsMessage("BLN1", b"Net tonight 2000z")

    ack = AprsMessage.decode(b":KE4AHR-7 :ack5")
    assert ack.addressee == "KE4AHR-7"
    assert ack.text == b"ack5"
    assert ack.id is None


def test_full_width_addressee_and_empty_text():
    """A 9 character addressee needs no padding; text may be empty."""
    message = AprsMessage.decode(b":ABCDEFGHI:")
    assert message == AprsMessage("ABCDEFGHI", b"")
    assert message.encode() == b":ABCDEFGHI:"


def test_bad_addressee_layout():
    """Addressee must be exactly 9 bytes between colons."""
    with pytest.raises(MalformedMessage):
        AprsMessage.decode(b":N0CALL:hi")

    with pytest.raises(MalformedMessage):
        AprsMessage.decode(b":N0CALL   ")

    with pytest.raises(MalformedMessage) as excinfo:
        AprsMessage.decode(b":N0 CALL  :hi")
    assert excinfo.value.offset == 1

    with pytest.raises(MalformedMessage):
        AprsMessage.decode(b":         :hi")


def test_bad_message_id():
    """Ids are 1-5 alphanumeric characters."""
    with pytest.raises(MalformedMessage) as excinfo:
        AprsMessage.decode(b":N0CALL   :hi{123456")
    assert excinfo.value.field == "id"
    assert excinfo.value.offset == 14

    with pytest.raises(MalformedMessage):
        AprsMessage.decode(b":N0CALL   :hi{")


def test_construction_checks():
    """Values that would not decode back are rejected."""
    with pytest.raises(MalformedMessage):
        AprsMessage("TOOLONGNAME", b"hi")

    with pytest.raises(MalformedMessage):
        AprsMessage("N0CALL", b"a{b")

    with pytest.raises(MalformedMessage):
        AprsMessage("N0CALL", b"hi", b"12-4")

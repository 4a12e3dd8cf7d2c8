# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
tests/conftest.py

Project-wide test configuration and shared fixtures.
"""

import logging
from typing import Generator

import pytest


@pytest.fixture(scope="session", autouse=True)
def configure_logging() -> Generator[None, None, None]:
    """Configure logging for all tests"""
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    yield


@pytest.fixture
def digipeated_line() -> bytes:
    """Station heard through three digipeaters, uncompressed position."""
    return (
        b"VE9BCQ>APNU19,VE9DGP,VE9GFI-2,VE9FPG*,WIDE3:"
        b"!4627.20NS06631.19W#PHG5460/W3 MARCAN UIDIGI BOIESTOWN, NB"
    )


@pytest.fixture
def digipeated_frame() -> bytes:
    """The same packet as an AX.25 UI frame."""
    return bytes(
        [
            0x82, 0xA0, 0x9C, 0xAA, 0x62, 0x72, 0xE0,  # APNU19, C bit
            0xAC, 0x8A, 0x72, 0x84, 0x86, 0xA2, 0x60,  # VE9BCQ
            0xAC, 0x8A, 0x72, 0x88, 0x8E, 0xA0, 0xE0,  # VE9DGP*
            0xAC, 0x8A, 0x72, 0x8E, 0x8C, 0x92, 0xE4,  # VE9GFI-2*
            0xAC, 0x8A, 0x72, 0x8C, 0xA0, 0x8E, 0xE0,  # VE9FPG*
            0xAE, 0x92, 0x88, 0x8A, 0x66, 0x40, 0x61,  # WIDE3, last
            0x03, 0xF0,
        ]
    ) + b"!4627.20NS06631.19W#PHG5460/W3 MARCAN UIDIGI BOIESTOWN, NB"


@pytest.fixture
def igate_line() -> bytes:
    """Packet gated to APRS-IS with a Q-construct in the path."""
    return b"ICA3D17F2>APRS,qAS,dl4mea:/074849h4821.61N\\01224.49E^322/103/A=003054"

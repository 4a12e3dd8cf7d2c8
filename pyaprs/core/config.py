# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
pyaprs.core.config.py

Codec configuration.

The defaults follow the APRS and AX.25 specifications. A config object is
immutable and may be shared freely between threads.
"""

from __future__ import annotations

from dataclasses import dataclass

# AX.25 allows at most 8 digipeater addresses
MAX_DIGIPEATERS = 8


@dataclass(frozen=True)
class AprsCodecConfig:
    """
    Tunables for decoding.

    Attributes:
        max_digipeaters: Maximum via callsigns accepted (0-8)
        propagate_repeated: In text form "A,B*,C" means "A*,B*,C"; mark every
            via before the last repeated one as repeated too
        strip_line_ending: Drop trailing CR/LF from textual lines
        raw_destination_fallback: Keep a binary destination that is not
            valid callsign syntax as a RawAddress instead of failing
    """

    max_digipeaters: int = MAX_DIGIPEATERS
    propagate_repeated: bool = True
    strip_line_ending: bool = True
    raw_destination_fallback: bool = True

    def __post_init__(self) -> None:
        if not 0 <= self.max_digipeaters <= MAX_DIGIPEATERS:
            raise ValueError(
                f"max_digipeaters must be 0-{MAX_DIGIPEATERS}, got {self.max_digipeaters}"
            )


DEFAULT_CONFIG = AprsCodecConfig()

# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
pyaprs.core.exceptions.py

Exception hierarchy for APRS packet decoding and encoding.

Every decoder raises a subclass of DecodeError carrying the name of the
field being parsed and the byte offset of the fault. Sub-decoders report
offsets relative to the bytes they were handed; the packet codec rebases
them onto the full line or frame before re-raising.
"""

from __future__ import annotations

from typing import Optional


class AprsError(Exception):
    """Base exception for all PyAPRS errors"""


class DecodeError(AprsError, ValueError):
    """
    Raised when bytes cannot be turned into a structured value.

    Attributes:
        field: Name of the field being parsed (e.g. "latitude")
        offset: Byte offset of the fault within the decoded input
        data: The offending bytes, if available
    """

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        offset: Optional[int] = None,
        data: Optional[bytes] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.offset = offset
        self.data = data

    def rebase(self, base: int) -> "DecodeError":
        """Shift the offset by base so it points into the enclosing input."""
        if self.offset is not None:
            self.offset += base
        return self

    def __str__(self) -> str:
        context = []
        if self.field is not None:
            context.append(f"field={self.field}")
        if self.offset is not None:
            context.append(f"offset={self.offset}")
        if context:
            return f"{self.message} ({', '.join(context)})"
        return self.message


class MalformedAddress(DecodeError):
    """Bad callsign, SSID, separator or via path"""


class MalformedTimestamp(DecodeError):
    """Bad timestamp digits, type character or calendar field"""


class MalformedPosition(DecodeError):
    """Bad coordinate field, base-91 digit or out-of-range position"""


class MalformedMessage(DecodeError):
    """Bad message addressee layout"""


class TruncatedFrame(DecodeError):
    """Input shorter than the structure being parsed"""


class UnsupportedEncoding(DecodeError):
    """Well-formed input that is not one of the modelled variants"""

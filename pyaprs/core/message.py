# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
pyaprs.core.message.py

APRS messages (data type ':').

Payload layout:
    :ADDRESSEE:text{id

ADDRESSEE is exactly 9 bytes, space padded. The message id is optional,
1-5 alphanumeric characters after the first '{'.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .exceptions import MalformedMessage

logger = logging.getLogger(__name__)

MESSAGE_DATA_TYPE = ord(":")
ADDRESSEE_LENGTH = 9
MAX_ID_LENGTH = 5
ID_SEPARATOR = b"{"


@dataclass(frozen=True)
class AprsMessage:
    """
    Message addressed to a station, bulletin or announcement group.

    Attributes:
        addressee: Recipient, up to 9 characters, padding removed
        text: Message text bytes, verbatim
        id: Message number used for acknowledgement, if any
    """

    addressee: str
    text: bytes
    id: Optional[bytes] = None

    def __post_init__(self) -> None:
        if not self.addressee or len(self.addressee) > ADDRESSEE_LENGTH:
            raise MalformedMessage(
                f"Addressee must be 1-{ADDRESSEE_LENGTH} characters, got {self.addressee!r}",
                field="addressee",
            )
        if not self.addressee.isascii() or " " in self.addressee or ":" in self.addressee:
            raise MalformedMessage(f"Invalid addressee {self.addressee!r}", field="addressee")
        if ID_SEPARATOR in self.text:
            raise MalformedMessage("Message text may not contain '{'", field="text")
        if self.id is not None and not _valid_id(self.id):
            raise MalformedMessage(f"Invalid message id {self.id!r}", field="id")

    @classmethod
    def decode(cls, payload: bytes) -> "AprsMessage":
        """
        Decode a message payload, data type byte included.

        Raises:
            MalformedMessage: Addressee not 9 bytes followed by ':', or bad id
        """
        end = 1 + ADDRESSEE_LENGTH
        if payload[:1] != b":" or len(payload) <= end or payload[end:end + 1] != b":":
            raise MalformedMessage(
                f"Message addressee must be {ADDRESSEE_LENGTH} bytes between ':'",
                field="addressee",
                offset=min(len(payload), end),
                data=bytes(payload),
            )

        raw_addressee = payload[1:end]
        addressee = raw_addressee.split(b" ", 1)[0]
        if not addressee or raw_addressee[len(addressee):].strip(b" "):
            raise MalformedMessage(
                "Addressee must be left aligned and space padded", field="addressee", offset=1, data=bytes(payload)
            )

        body = payload[end + 1:]
        text, sep, msg_id = body.partition(ID_SEPARATOR)
        if sep and not _valid_id(msg_id):
            raise MalformedMessage(
                f"Invalid message id {msg_id!r}",
                field="id",
                offset=end + 2 + len(text),
                data=bytes(payload),
            )

        try:
            message = cls(addressee.decode("ascii"), bytes(text), bytes(msg_id) if sep else None)
        except UnicodeDecodeError:
            raise MalformedMessage(
                "Addressee is not ASCII", field="addressee", offset=1, data=bytes(payload)
            ) from None
        except MalformedMessage as exc:
            exc.offset = 1
            exc.data = bytes(payload)
            raise

        logger.debug(f"Decoded message to {message.addressee} id={message.id!r}")
        return message

    def encode(self) -> bytes:
        """Encode to payload bytes, data type byte included."""
        out = b":" + self.addressee.encode("ascii").ljust(ADDRESSEE_LENGTH) + b":" + self.text
        if self.id is not None:
            out += ID_SEPARATOR + self.id
        return out


def _valid_id(msg_id: bytes) -> bool:
    return 1 <= len(msg_id) <= MAX_ID_LENGTH and msg_id.isalnum()

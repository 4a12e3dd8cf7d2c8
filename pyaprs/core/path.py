# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
pyaprs.core.path.py

Address path (source, destination, via chain) encoding and decoding.

Implements:
- TNC2 header "FROM>TO,VIA1,VIA2*" with Q-construct recognition
- AX.25 address block: destination, source and up to 8 digipeaters,
  terminated by the extension bit
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple, Union

from .callsign import (
    ADDRESS_LENGTH,
    COMMAND_BIT,
    EXTENSION_BIT,
    HAS_BEEN_REPEATED_BIT,
    Callsign,
    RawAddress,
    decode_address,
    is_valid_binary_call,
)
from .config import DEFAULT_CONFIG, MAX_DIGIPEATERS, AprsCodecConfig
from .exceptions import MalformedAddress, TruncatedFrame

logger = logging.getLogger(__name__)

Destination = Union[Callsign, RawAddress]


class QConstruct(Enum):
    """
    APRS-IS Q-constructs.

    Only valid in text form; these never go on the air.
    """
    AC = "qAC"  # Verified login via bidirectional port
    AX = "qAX"  # Unverified login
    AU = "qAU"  # Received directly via UDP
    Ao = "qAo"  # Gated from RF by a client-only port, no messaging
    AO = "qAO"  # Gated from RF by a non-verified client
    AS = "qAS"  # Received from a server
    Ar = "qAr"  # Gated from RF, igate identified by trace
    AR = "qAR"  # Gated from RF by a verified igate
    AZ = "qAZ"  # Server-client command packet
    AI = "qAI"  # Trace packet

    @classmethod
    def parse_text(cls, token: bytes) -> Optional["QConstruct"]:
        """
        Match a via token against the known Q-constructs.

        Returns:
            The construct, or None if the token is not one of them. Unknown
            "qA?" tokens are left to be parsed as callsigns.
        """
        if len(token) != 3 or token[:1] != b"q":
            return None
        try:
            return cls(token.decode("ascii"))
        except ValueError:
            return None

    def encode_text(self) -> bytes:
        return self.value.encode("ascii")


@dataclass(frozen=True)
class ViaCallsign:
    """Digipeater entry; repeated is the AX.25 H bit or a trailing '*'."""

    callsign: Callsign
    repeated: bool = False

    def encode_text(self) -> bytes:
        return self.callsign.encode_text() + (b"*" if self.repeated else b"")


ViaElement = Union[ViaCallsign, QConstruct]


def via_callsigns(via: Sequence[ViaElement]) -> List[ViaCallsign]:
    """Callsign entries of a via path, in order, without Q-constructs."""
    return [v for v in via if isinstance(v, ViaCallsign)]


def check_via_length(via: Sequence[ViaElement], limit: int = MAX_DIGIPEATERS) -> None:
    count = len(via_callsigns(via))
    if count > limit:
        raise MalformedAddress(f"Too many digipeaters: {count} > {limit}", field="via")


def decode_path_text(
    header: bytes, config: AprsCodecConfig = DEFAULT_CONFIG
) -> Tuple[Callsign, Callsign, List[ViaElement]]:
    """
    Decode a TNC2 header "FROM>TO[,VIA...]".

    Returns:
        (source, destination, via)

    Raises:
        MalformedAddress: Missing '>', bad callsign or too many digipeaters
    """
    source_end = header.find(b">")
    if source_end < 0:
        raise MalformedAddress(
            "Missing '>' after source callsign", field="source", offset=len(header), data=bytes(header)
        )

    source = _parse_token(Callsign.parse_text, header[:source_end], "source", 0)

    offset = source_end + 1
    tokens = header[offset:].split(b",")
    destination = _parse_token(Callsign.parse_text, tokens[0], "destination", offset)
    offset += len(tokens[0]) + 1

    via: List[ViaElement] = []
    for token in tokens[1:]:
        via.append(_parse_token(_parse_via_text, token, "via", offset))
        offset += len(token) + 1

    try:
        check_via_length(via, config.max_digipeaters)
    except MalformedAddress as exc:
        exc.offset = source_end + 1
        raise

    if config.propagate_repeated:
        via = _propagate_repeated(via)

    return source, destination, via


def encode_path_text(source: Callsign, destination: Destination, via: Sequence[ViaElement]) -> bytes:
    """
    Encode a TNC2 header.

    Only the last repeated digipeater carries a '*'; earlier ones are
    implied by it.
    """
    parts = [source.encode_text(), b">", destination.encode_text()]

    last_repeated = None
    for index, v in enumerate(via):
        if isinstance(v, ViaCallsign) and v.repeated:
            last_repeated = index

    for index, v in enumerate(via):
        parts.append(b",")
        if isinstance(v, ViaCallsign):
            parts.append(v.callsign.encode_text())
            if index == last_repeated:
                parts.append(b"*")
        else:
            parts.append(v.encode_text())

    return b"".join(parts)


def decode_path_binary(
    data: bytes, config: AprsCodecConfig = DEFAULT_CONFIG
) -> Tuple[Callsign, Destination, List[ViaElement], int]:
    """
    Decode an AX.25 address block.

    Returns:
        (source, destination, via, offset of the first byte after the block)

    Raises:
        TruncatedFrame: Block cut off before the extension bit
        MalformedAddress: Empty call or too many digipeaters
    """
    if len(data) < 2 * ADDRESS_LENGTH:
        raise TruncatedFrame(
            "AX.25 frame too short for source and destination",
            field="address",
            offset=len(data),
            data=bytes(data),
        )

    destination_field = bytes(data[:ADDRESS_LENGTH])
    if destination_field[-1] & EXTENSION_BIT:
        raise MalformedAddress(
            "Extension bit set on destination address", field="destination", offset=ADDRESS_LENGTH - 1
        )
    destination = _decode_destination(destination_field, config)

    source, ssid_byte = decode_address(data, ADDRESS_LENGTH)
    # C bit of the source is not meaningful for APRS
    offset = 2 * ADDRESS_LENGTH
    last = bool(ssid_byte & EXTENSION_BIT)

    via: List[ViaElement] = []
    while not last:
        if len(via) == config.max_digipeaters:
            raise MalformedAddress(
                f"Too many digipeaters: more than {config.max_digipeaters}",
                field="via",
                offset=offset,
            )
        callsign, ssid_byte = decode_address(data, offset)
        via.append(ViaCallsign(callsign, bool(ssid_byte & HAS_BEEN_REPEATED_BIT)))
        last = bool(ssid_byte & EXTENSION_BIT)
        offset += ADDRESS_LENGTH

    logger.debug(f"Decoded AX.25 address block: {source}>{destination} via {len(via)}")
    return source, destination, via, offset


def encode_path_binary(source: Callsign, destination: Destination, via: Sequence[ViaElement]) -> bytes:
    """
    Encode an AX.25 address block.

    Q-constructs are dropped. The destination carries the C bit, the source
    does not (AX.25 v2 command frame).

    Raises:
        MalformedAddress: Callsign not representable in 6 characters
            or too many digipeaters
    """
    digis = via_callsigns(via)
    check_via_length(digis)

    addr_field = destination.encode_binary(COMMAND_BIT)
    addr_field += source.encode_binary(0 if digis else EXTENSION_BIT)

    for i, digi in enumerate(digis):
        flags = HAS_BEEN_REPEATED_BIT if digi.repeated else 0
        if i == len(digis) - 1:
            flags |= EXTENSION_BIT
        addr_field += digi.callsign.encode_binary(flags)

    return addr_field


def _decode_destination(field: bytes, config: AprsCodecConfig) -> Destination:
    if is_valid_binary_call(field):
        return Callsign.parse_binary(field)
    if not config.raw_destination_fallback:
        raise MalformedAddress(
            "Destination is not a valid callsign", field="destination", offset=0, data=field
        )
    logger.warning(f"Keeping non-callsign destination verbatim: {field.hex()}")
    return RawAddress(field)


def _parse_via_text(token: bytes) -> ViaElement:
    q = QConstruct.parse_text(token)
    if q is not None:
        return q

    repeated = token.endswith(b"*")
    if repeated:
        token = token[:-1]
    return ViaCallsign(Callsign.parse_text(token), repeated)


def _parse_token(parser, token: bytes, field: str, offset: int):
    try:
        return parser(token)
    except MalformedAddress as exc:
        exc.field = field
        exc.rebase(offset)
        raise


def _propagate_repeated(via: List[ViaElement]) -> List[ViaElement]:
    """A,B,C*,D means A*,B*,C*,D: mark everything before the last '*'."""
    result: List[ViaElement] = []
    repeated = False
    for v in reversed(via):
        if isinstance(v, ViaCallsign):
            repeated = repeated or v.repeated
            if repeated and not v.repeated:
                v = ViaCallsign(v.callsign, True)
        result.append(v)
    result.reverse()
    return result

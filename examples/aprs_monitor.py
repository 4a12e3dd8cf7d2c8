# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
examples/aprs_monitor.py

Decode TNC2 lines (for example an APRS-IS feed saved to a file) and print
a one-line summary of each packet.

Run with:
    python examples/aprs_monitor.py capture.txt
    some-feed | python examples/aprs_monitor.py
"""

import logging
import sys

from pyaprs import AprsMessage, AprsPosition, DecodeError, configure_logging, decode_text

logger = logging.getLogger("aprs_monitor")


def summarize(line: bytes) -> str:
    packet = decode_text(line)
    data = packet.data
    if isinstance(data, AprsPosition):
        what = f"position {data.latitude.value:.4f},{data.longitude.value:.4f}"
    elif isinstance(data, AprsMessage):
        what = f"message to {data.addressee}"
    else:
        what = f"unknown {data.payload[:1]!r}"
    return f"{packet.source} -> {packet.destination}: {what}"


def main() -> int:
    configure_logging("WARNING")
    stream = open(sys.argv[1], "rb") if len(sys.argv) > 1 else sys.stdin.buffer

    bad = 0
    with stream:
        for line in stream:
            if not line.strip() or line.startswith(b"#"):
                continue  # APRS-IS server comments
            try:
                print(summarize(line))
            except DecodeError as e:
                bad += 1
                logger.warning(f"Skipping packet: {e}")

    return 1 if bad else 0


if __name__ == "__main__":
    sys.exit(main())

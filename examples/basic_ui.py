# SPDX-License-Identifier: LGPL-3.0-or-later
# Copyright (C) 2025-2026 Kris Kirby, KE4AHR

"""
examples/basic_ui.py

Simple demonstration of building an APRS position report and encoding it
in both wire forms.

This example shows the minimal usage of the PyAPRS codec to:
- Create source and destination callsigns with SSIDs and a via path
- Build a compressed position report with course and speed
- Encode it as a TNC2 text line and as an AX.25 UI frame
- Decode the frame again and display the result

Run this script directly to see the output.
"""

from pyaprs import (
    AprsPacket,
    AprsPosition,
    Callsign,
    Compressed,
    CompressionType,
    CourseSpeed,
    Latitude,
    Longitude,
    ViaCallsign,
    decode_binary,
    encode_binary,
    encode_text,
)


def main() -> None:
    """
    Main function demonstrating position report encoding.
    """
    position = AprsPosition(
        timestamp=None,
        messaging_supported=True,
        latitude=Latitude(35.2271),
        longitude=Longitude(-80.8431),
        symbol_table="/",
        symbol_code=">",            # Car
        comment=b"PyAPRS 0.1.0 - 73 de KE4AHR",
        cst=Compressed(CourseSpeed(88, 36.2), CompressionType()),
    )

    packet = AprsPacket(
        source=Callsign("KE4AHR", 9),           # Your station with SSID 9
        destination=Callsign("APRS"),
        via=[ViaCallsign(Callsign("WIDE1", 1)), ViaCallsign(Callsign("WIDE2", 1))],
        data=position,
    )

    line = encode_text(packet)
    frame = encode_binary(packet)

    # Display results
    print("Basic APRS Position Example")
    print("=" * 50)
    print(f"Source:      {packet.source}")
    print(f"Destination: {packet.destination}")
    print(f"Text line:   {line.decode('ascii', errors='replace')}")
    print(f"Frame length: {len(frame)} bytes")
    print(f"Encoded frame (hex):")
    print(frame.hex().upper())

    # Decode the frame again
    decoded = decode_binary(frame)
    kinematics = decoded.data.cst.kinematics
    print("\nDecoded frame:")
    print(f"  Latitude:    {decoded.data.latitude.value:.5f}")
    print(f"  Longitude:   {decoded.data.longitude.value:.5f}")
    print(f"  Course:      {kinematics.course_degrees} deg")
    print(f"  Speed:       {kinematics.speed_knots:.1f} kt")
    print(f"  Comment:     {decoded.data.comment.decode('ascii', errors='replace')}")


if __name__ == "__main__":
    main()

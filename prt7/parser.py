"""
Pure PRT-7 line parsing.

Converts one cleaned text line into a frame. No I/O here; the session decides
what to do with malformed lines.

Line layout: <TYPE>,<PAYLOAD>
"""

from .frames import Frame, LoadFrame, MapFrame
from .protocol import FRAME_SEPARATOR, PAYLOAD_OFFSET, SPACE_PLACEHOLDER, FrameType


class MalformedFrameError(ValueError):
    """Raised when a line does not match the frame grammar."""

    pass


def parse_signed_int(text: str) -> int:
    """
    Parse a leading signed decimal integer.

    An optional '+' or '-' is followed by digits; parsing stops at the first
    non-digit. No digits yields 0 rather than an error.
    """
    sign = 1
    i = 0
    if text[:1] == "-":
        sign = -1
        i = 1
    elif text[:1] == "+":
        i = 1

    value = 0
    while i < len(text) and "0" <= text[i] <= "9":
        value = value * 10 + (ord(text[i]) - ord("0"))
        i += 1

    return sign * value


def parse_line(line: str) -> Frame:
    """
    Parse a data line into a frame.

    Args:
        line: Line with line-ending characters already stripped

    Returns:
        Frame: ``LoadFrame`` or ``MapFrame``

    Raises:
        MalformedFrameError: If the type is unknown, the comma is missing,
            or a Load line has nothing after the comma
    """
    if len(line) < PAYLOAD_OFFSET or line[1] != FRAME_SEPARATOR:
        raise MalformedFrameError(f"Missing separator in {line!r}")

    frame_type = line[0]
    payload = line[PAYLOAD_OFFSET:]

    if frame_type == FrameType.LOAD.value:
        if not payload:
            raise MalformedFrameError(f"Empty load payload in {line!r}")
        # Lenient prefix match: anything starting with "Spa" is the space frame
        if payload.startswith(SPACE_PLACEHOLDER):
            return LoadFrame(" ")
        return LoadFrame(payload[0])

    if frame_type == FrameType.MAP.value:
        return MapFrame(parse_signed_int(payload))

    raise MalformedFrameError(f"Unknown frame type {frame_type!r} in {line!r}")

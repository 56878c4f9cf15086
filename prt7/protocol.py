"""
PRT-7 wire protocol constants.

One frame per text line:
    L,<char>          load a character through the rotor
    L,Spa...          load the space character
    M,<signed-int>    rotate the rotor
    FIN               end of transmission
    SISTEMA PRT-7 ACTIVO   greeting sent by the device on startup
"""

from enum import Enum


class FrameType(Enum):
    """Frame type identifiers (first character of a data line)."""

    LOAD = "L"
    MAP = "M"


# Rotor alphabet, in ring order
ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Control lines
TERMINATION_SENTINEL = "FIN"
GREETING_SENTINEL = "SISTEMA PRT-7 ACTIVO"

# Data line layout: <TYPE><SEPARATOR><PAYLOAD>
FRAME_SEPARATOR = ","
PAYLOAD_OFFSET = 2
SPACE_PLACEHOLDER = "Spa"

# Longest line accepted from the wire (device buffer is 256 bytes incl. NUL)
MAX_LINE_LENGTH = 255

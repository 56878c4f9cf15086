"""
PRT-7 frame variants and their application.

A frame is built from one parsed line, applied once against the session's
rotor and accumulator, then dropped. Applying a frame cannot fail.
"""

import logging
from dataclasses import dataclass
from typing import Union

from .accumulator import Accumulator
from .rotor import Rotor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadFrame:
    """Load one character through the rotor."""

    character: str


@dataclass(frozen=True)
class MapFrame:
    """Rotate the rotor by a signed amount."""

    rotation: int


Frame = Union[LoadFrame, MapFrame]


def apply_frame(frame: Frame, rotor: Rotor, accumulator: Accumulator) -> str:
    """
    Apply a frame to the rotor and accumulator.

    Args:
        frame: Frame to apply
        rotor: Session rotor
        accumulator: Session accumulator

    Returns:
        str: Human-readable trace of what the frame did

    Raises:
        TypeError: If ``frame`` is not a known frame variant
    """
    if isinstance(frame, LoadFrame):
        decoded = rotor.map(frame.character)
        accumulator.append(decoded)
        logger.debug(f"Loaded {frame.character!r} -> {decoded!r}")
        return (
            f"Fragment '{frame.character}' decoded as '{decoded}'. "
            f"{accumulator.render_fragments()}"
        )

    if isinstance(frame, MapFrame):
        rotor.rotate(frame.rotation)
        return (
            f"ROTATING ROTOR {frame.rotation:+d}. "
            f"('A' now maps to '{rotor.head_symbol()}')"
        )

    raise TypeError(f"Unknown frame type: {type(frame).__name__}")

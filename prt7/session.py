"""
Decoder Session - Frame Dispatch Loop

This module contains the DecoderSession class, which pulls lines from a line
source, recognises the control lines, hands data lines to the parser and
applies the resulting frames to the rotor and accumulator.

Policy layer - uses pure parts (parser, frames, rotor, accumulator) and the
I/O boundary (LineSource). The session owns the rotor and accumulator for
its whole lifetime.
"""

import logging
from enum import Enum
from typing import Callable, Optional

from .accumulator import Accumulator
from .frames import apply_frame
from .line_source import LineSource
from .parser import MalformedFrameError, parse_line
from .protocol import GREETING_SENTINEL, TERMINATION_SENTINEL
from .rotor import Rotor


logger = logging.getLogger(__name__)

TraceSink = Callable[[str], None]


class SessionState(Enum):
    """Outcome of handling one line."""

    AWAITING_LINE = "awaiting_line"
    SKIP_CONTROL = "skip_control"
    DISPATCH = "dispatch"
    TERMINATED = "terminated"

    def __str__(self) -> str:
        return self.value


class DecoderSession:
    """
    One PRT-7 decoding run.

    Trace lines are written to ``sink`` (``print`` by default), one per
    handled line, followed by the final report.
    """

    def __init__(
        self,
        rotor: Optional[Rotor] = None,
        accumulator: Optional[Accumulator] = None,
        sink: Optional[TraceSink] = None,
    ):
        self.rotor = rotor or Rotor()
        self.accumulator = accumulator or Accumulator()
        self.sink: TraceSink = sink or print
        self.state = SessionState.AWAITING_LINE

        self._stats = {
            "frames_processed": 0,
            "frames_malformed": 0,
            "control_lines": 0,
        }

    @property
    def terminated(self) -> bool:
        return self.state is SessionState.TERMINATED

    @property
    def message(self) -> str:
        """The message assembled so far."""
        return self.accumulator.render_plain()

    def handle_line(self, line: Optional[str]) -> SessionState:
        """
        Handle one line from the source.

        Args:
            line: Cleaned line, or None for end-of-stream

        Returns:
            SessionState: TERMINATED, SKIP_CONTROL or DISPATCH
        """
        if self.terminated:
            return self.state

        if line is None:
            logger.info("End of stream, terminating session")
            self.state = SessionState.TERMINATED
            return self.state

        if line == TERMINATION_SENTINEL:
            self.sink(f"Frame received: [{TERMINATION_SENTINEL}]. Stopping.")
            self.state = SessionState.TERMINATED
            return self.state

        if line == GREETING_SENTINEL:
            self._stats["control_lines"] += 1
            self.sink(f"Control message received: [{GREETING_SENTINEL}]")
            self.sink("")
            self.state = SessionState.SKIP_CONTROL
            return self.state

        self.state = SessionState.DISPATCH
        prefix = f"Frame received: [{line}] -> Processing... -> "
        try:
            frame = parse_line(line)
        except MalformedFrameError as e:
            self._stats["frames_malformed"] += 1
            logger.debug(f"Malformed frame: {e}")
            self.sink(prefix + "ERROR: Malformed frame.")
        else:
            self.sink(prefix + apply_frame(frame, self.rotor, self.accumulator))
            self._stats["frames_processed"] += 1
        self.sink("")

        return self.state

    async def run(self, source: LineSource) -> str:
        """
        Pull lines until FIN or end-of-stream, then report the message.

        Args:
            source: Connected line source

        Returns:
            str: The assembled hidden message
        """
        logger.info("Session started, waiting for frames")
        while not self.terminated:
            self.state = SessionState.AWAITING_LINE
            line = await source.read_line()
            self.handle_line(line)

        self.report()
        logger.info(
            "Session finished: %d frames, %d malformed, %d control lines",
            self._stats["frames_processed"],
            self._stats["frames_malformed"],
            self._stats["control_lines"],
        )
        return self.message

    def report(self) -> None:
        """Emit the final hidden-message report."""
        self.sink("---")
        self.sink("Data stream finished.")
        self.sink("ASSEMBLED HIDDEN MESSAGE:")
        self.sink(self.message)
        self.sink("---")

    def get_session_stats(self) -> dict:
        """Counters and current rotor/message state."""
        return {
            **self._stats,
            "state": str(self.state),
            "rotor_head": self.rotor.head_symbol(),
            "message_length": len(self.accumulator),
        }

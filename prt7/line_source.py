"""
Line Source I/O Boundary

This module provides the LineSource classes, which deliver complete PRT-7 text
lines to the decoder session. It abstracts away the hardware/replay
distinction: the session only sees cleaned lines, or None at end-of-stream.

I/O boundary - handles serial port discovery, configuration and line reading.
"""

import asyncio
import logging
import sys
from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Iterable, List, Optional

from aioserial import AioSerial
from serial import SerialException
from serial.tools import list_ports

from .config import SerialConfig
from .protocol import MAX_LINE_LENGTH


logger = logging.getLogger(__name__)

# Pause between empty reads so a silent port does not spin
IDLE_POLL_INTERVAL = 0.01


class LineSourceError(Exception):
    """Raised when line source operations fail."""

    pass


class LineSourceUnavailable(LineSourceError):
    """Raised when no underlying transport could be established."""

    pass


def clean_line(text: str) -> Optional[str]:
    """
    Strip line-ending characters from a line.

    The trailing newline is dropped and every carriage return removed.

    Returns:
        Optional[str]: The line, or None if nothing is left
    """
    if text.endswith("\n"):
        text = text[:-1]
    text = text.replace("\r", "")
    return text or None


def decode_line(raw: bytes) -> Optional[str]:
    """Decode raw serial bytes into a cleaned line (None for an empty line)."""
    return clean_line(raw.decode("ascii", errors="replace"))


def default_candidate_ports() -> List[str]:
    """Ports tried, in order, when none is configured."""
    if sys.platform.startswith("win"):
        return ["COM3", "COM4", "COM5", "COM6", "COM7"]
    return ["/dev/ttyUSB0", "/dev/ttyACM0", "/dev/ttyUSB1", "/dev/ttyACM1"]


class LineSource(ABC):
    """
    Abstract base class for PRT-7 line sources.

    Implementations handle real serial hardware or replayed lines.
    """

    @abstractmethod
    async def connect(self) -> None:
        """
        Open the underlying transport.

        Raises:
            LineSourceUnavailable: If no transport could be established
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """
        Close the underlying transport.

        Raises:
            LineSourceError: If closing fails
        """
        pass

    @abstractmethod
    def is_connected(self) -> bool:
        """Check if the transport is open."""
        pass

    @abstractmethod
    async def read_line(self) -> Optional[str]:
        """
        Wait for the next non-empty line.

        Returns:
            Optional[str]: Line without line-ending characters, or None at
            end-of-stream or after an unrecoverable read failure
        """
        pass


class HardwareLineSource(LineSource):
    """
    Serial line source using aioserial.

    Tries each candidate port in turn and keeps the first one that opens.
    """

    def __init__(self, config: SerialConfig):
        self.config = config
        self._serial: Optional[AioSerial] = None
        self._port_name: Optional[str] = None
        self._io_lock = asyncio.Lock()

    @property
    def port_name(self) -> Optional[str]:
        """Port that was opened, if connected."""
        return self._port_name

    def candidate_ports(self) -> List[str]:
        """
        Ports to try, in order.

        An explicit port wins, then the configured candidates, then the
        platform defaults followed by any enumerated ports.
        """
        if self.config.port:
            return [self.config.port]
        if self.config.candidate_ports:
            return list(self.config.candidate_ports)

        ports = default_candidate_ports()
        for info in list_ports.comports():
            if info.device not in ports:
                ports.append(info.device)
        return ports

    async def connect(self) -> None:
        """Open the first candidate port that accepts the configuration."""
        async with self._io_lock:
            ports = self.candidate_ports()
            for port in ports:
                try:
                    self._serial = AioSerial(
                        port=port,
                        baudrate=self.config.baudrate,
                        bytesize=self.config.bytesize,
                        parity=self.config.parity,
                        stopbits=self.config.stopbits,
                        timeout=self.config.timeout,
                    )
                except (SerialException, OSError, ValueError) as e:
                    logger.debug(f"Could not open serial port {port}: {e}")
                    continue

                self._port_name = port
                logger.info(f"Connected to serial port {port}")
                return

            self._serial = None
            raise LineSourceUnavailable(
                f"Could not open any serial port (tried {', '.join(ports) or 'none'})"
            )

    async def disconnect(self) -> None:
        """Close the serial port."""
        async with self._io_lock:
            if self._serial:
                try:
                    self._serial.close()
                    logger.info(f"Disconnected from serial port {self._port_name}")
                except (SerialException, OSError) as e:
                    raise LineSourceError(
                        f"Serial disconnect failed on {self._port_name}: {e}"
                    ) from e
                finally:
                    self._serial = None
                    self._port_name = None

    def is_connected(self) -> bool:
        return self._serial is not None

    async def read_line(self) -> Optional[str]:
        """
        Read the next non-empty line from the port.

        A timeout with no data keeps waiting. A timeout with partial data
        delivers what arrived. Read errors end the stream.
        """
        if not self._serial:
            raise LineSourceUnavailable("Not connected to serial port")

        while True:
            try:
                raw = await self._serial.read_until_async(
                    expected=b"\n", size=MAX_LINE_LENGTH
                )
            except (SerialException, OSError) as e:
                logger.error(f"Serial read failed on {self._port_name}: {e}")
                return None

            if not raw:
                await asyncio.sleep(IDLE_POLL_INTERVAL)
                continue

            line = decode_line(raw)
            if line is not None:
                return line


class MockLineSource(LineSource):
    """
    Replaying line source for development and testing.

    Serves lines from a list or from ``config.replay_file``, then reports
    end-of-stream.
    """

    def __init__(self, config: SerialConfig, lines: Optional[Iterable[str]] = None):
        self.config = config
        self._lines = list(lines) if lines is not None else None
        self._pending: Deque[str] = deque()
        self._connected = False

    async def connect(self) -> None:
        """Load the lines to replay."""
        lines = self._lines
        if lines is None:
            lines = self._read_replay_file()

        self._pending = deque(lines)
        self._connected = True
        await asyncio.sleep(0)
        logger.info(f"[MOCK] Connected ({len(self._pending)} lines queued)")

    def _read_replay_file(self) -> List[str]:
        if self.config.replay_file is None:
            return []
        try:
            text = self.config.replay_file.read_text(encoding="ascii", errors="replace")
        except OSError as e:
            raise LineSourceUnavailable(
                f"Cannot read replay file {self.config.replay_file}: {e}"
            ) from e
        return text.split("\n")

    async def disconnect(self) -> None:
        self._connected = False
        logger.info("[MOCK] Disconnected")

    def is_connected(self) -> bool:
        return self._connected

    async def read_line(self) -> Optional[str]:
        if not self._connected:
            raise LineSourceUnavailable("Not connected to mock source")

        while self._pending:
            line = clean_line(self._pending.popleft())
            if line is not None:
                await asyncio.sleep(0)
                return line

        return None


def create_line_source(
    config: SerialConfig, use_hardware: Optional[bool] = None
) -> LineSource:
    """
    Factory function to create the appropriate line source.

    Args:
        config: Serial configuration
        use_hardware: Force hardware (True) or mock (False). If None, uses config.mock

    Returns:
        LineSource: Hardware or mock implementation
    """
    if use_hardware is None:
        use_hardware = not config.mock

    if use_hardware:
        logger.info("Creating hardware line source")
        return HardwareLineSource(config)
    else:
        logger.info("Creating mock line source")
        return MockLineSource(config)

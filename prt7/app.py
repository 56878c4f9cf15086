"""
DecoderApp - Composition Root

This module contains the DecoderApp class, which is responsible for:
- Loading configuration
- Creating and connecting the line source
- Running the decoder session
- Releasing the serial port on shutdown

Composition root - wires up all components.
"""

import logging
from typing import Optional

from .config import DecoderConfig, resolve_config
from .line_source import LineSource, create_line_source
from .session import DecoderSession, TraceSink


logger = logging.getLogger(__name__)

BANNER = (
    "========================================",
    "   PRT-7 DECODER v1.0",
    "   Industrial Cybersecurity System",
    "========================================",
    "",
)


class DecoderApp:
    """
    Application composition root for the PRT-7 decoder.

    Usage::

        app = DecoderApp()
        await app.startup()
        try:
            message = await app.run()
        finally:
            await app.shutdown()
    """

    def __init__(
        self,
        config: Optional[DecoderConfig] = None,
        line_source: Optional[LineSource] = None,
        sink: Optional[TraceSink] = None,
    ):
        self.config = config
        self.line_source = line_source
        self.sink: TraceSink = sink or print
        self.session: Optional[DecoderSession] = None

    async def startup(self) -> None:
        """
        Load configuration and connect the line source.

        Raises:
            LineSourceUnavailable: If no serial port could be opened
        """
        if self.config is None:
            self.config = resolve_config()

        if self.config.banner:
            for line in BANNER:
                self.sink(line)

        self.session = DecoderSession(sink=self.sink)

        if self.line_source is None:
            self.line_source = create_line_source(self.config.serial)

        self.sink("Starting PRT-7 decoder. Connecting to serial port...")
        await self.line_source.connect()

        port_name = getattr(self.line_source, "port_name", None)
        if port_name:
            self.sink(f"Connection established on {port_name}")
        self.sink("Waiting for frames...")
        self.sink("")

    async def run(self) -> str:
        """Run the session to completion and return the hidden message."""
        if self.session is None or self.line_source is None:
            raise RuntimeError("DecoderApp not started")
        return await self.session.run(self.line_source)

    async def shutdown(self) -> None:
        """Close the line source."""
        if self.line_source and self.line_source.is_connected():
            await self.line_source.disconnect()
        if self.session and self.session.terminated:
            self.sink("Releasing resources... System shut down.")
        logger.info("Decoder shut down")

#!/usr/bin/env python3
"""
PRT-7 Decoder - Main Application Entry Point

Runs one decoding session against the serial device (or a replay file) and
prints the assembled hidden message.
"""

import argparse
import asyncio
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .app import DecoderApp
from .config import resolve_config
from .line_source import LineSourceError, LineSourceUnavailable


logger = logging.getLogger(__name__)


async def run_decoder(
    config_path: Optional[str] = None, replay: Optional[str] = None
) -> str:
    """Run the decoder with the given configuration."""
    config = resolve_config(Path(config_path) if config_path else None)
    if replay:
        serial = dataclasses.replace(config.serial, mock=True, replay_file=Path(replay))
        config = dataclasses.replace(config, serial=serial)
        config.validate()

    app = DecoderApp(config=config)
    try:
        await app.startup()
        return await app.run()
    finally:
        await app.shutdown()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="PRT-7 Serial Frame Decoder")
    parser.add_argument("--config", help="Path to configuration file")
    parser.add_argument("--replay", help="Replay frames from a text file instead of a serial port")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        asyncio.run(run_decoder(config_path=args.config, replay=args.replay))
    except LineSourceUnavailable as e:
        logger.debug(f"Line source unavailable: {e}")
        print("ERROR: Could not connect to any serial port.", file=sys.stderr)
        print("Check that the device is connected.", file=sys.stderr)
        return 1
    except LineSourceError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except (FileNotFoundError, ValueError) as e:
        print(f"ERROR: Invalid configuration: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Decoder stopped by user")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())

# prt7/config.py
from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple, Literal

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path("prt7.toml")

Parity = Literal["N", "E", "O"]


@dataclass(frozen=True)
class SerialConfig:
    port: Optional[str] = None
    candidate_ports: Tuple[str, ...] = ()
    baudrate: int = 9600
    timeout: float = 1.0
    bytesize: int = 8
    parity: Parity = "N"
    stopbits: int = 1
    mock: bool = False
    replay_file: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.baudrate <= 0:
            raise ValueError("Serial baudrate must be > 0")
        if self.timeout <= 0:
            raise ValueError("Serial timeout must be > 0")
        if self.bytesize not in {5, 6, 7, 8}:
            raise ValueError(f"Serial bytesize must be 5-8, got {self.bytesize}")
        if self.parity not in {"N", "E", "O"}:
            raise ValueError(f"Serial parity must be N, E or O, got '{self.parity}'")
        if self.stopbits not in {1, 2}:
            raise ValueError(f"Serial stopbits must be 1 or 2, got {self.stopbits}")


@dataclass(frozen=True)
class DecoderConfig:
    serial: SerialConfig = field(default_factory=SerialConfig)
    banner: bool = True

    def validate(self) -> None:
        from .validation import validate_decoder_config

        validate_decoder_config(self)


_PARITY_ALIASES = {
    "none": "N",
    "n": "N",
    "even": "E",
    "e": "E",
    "odd": "O",
    "o": "O",
}


def _parse_parity(parity: Optional[str]) -> Parity:
    key = (parity or "none").lower()
    if key not in _PARITY_ALIASES:
        raise ValueError(f"Invalid parity '{parity}' in config file")
    return _PARITY_ALIASES[key]  # type: ignore[return-value]


def _parse_candidate_ports(value: object) -> Tuple[str, ...]:
    if not isinstance(value, list):
        raise ValueError(
            f"candidate_ports must be a list of port names, got {type(value).__name__}"
        )
    return tuple(str(p) for p in value)


def _load_serial(entry: dict, base_dir: Path) -> SerialConfig:
    port = entry.get("port")
    replay_file = entry.get("replay_file")
    replay_path = None
    if replay_file:
        replay_path = Path(replay_file)
        if not replay_path.is_absolute():
            replay_path = base_dir / replay_path

    return SerialConfig(
        port=str(port) if port else None,
        candidate_ports=_parse_candidate_ports(entry.get("candidate_ports", [])),
        baudrate=int(entry.get("baudrate", 9600)),
        timeout=float(entry.get("timeout", 1.0)),
        bytesize=int(entry.get("bytesize", 8)),
        parity=_parse_parity(entry.get("parity")),
        stopbits=int(entry.get("stopbits", 1)),
        mock=bool(entry.get("mock", False)),
        replay_file=replay_path,
    )


def load_from_toml(config_path: str | Path) -> DecoderConfig:
    """
    Load a DecoderConfig from a TOML file.

    Expected TOML structure:

    [serial]
    port = "/dev/ttyUSB0"       # omit to try candidate_ports / platform defaults
    candidate_ports = ["/dev/ttyUSB0", "/dev/ttyACM0"]
    baudrate = 9600
    timeout = 1.0
    bytesize = 8
    parity = "N"                # N|E|O|none|even|odd
    stopbits = 1
    mock = false
    replay_file = "frames.txt"  # relative to the config file

    [session]
    banner = true
    """
    p = Path(config_path)
    if not p.exists():
        raise FileNotFoundError(f"Configuration file not found: {p}")

    with p.open("rb") as f:
        data = tomllib.load(f)

    serial = data.get("serial") or {}
    session = data.get("session") or {}

    cfg = DecoderConfig(
        serial=_load_serial(serial, p.parent),
        banner=bool(session.get("banner", True)),
    )
    cfg.validate()

    logger.info(
        "Loaded DecoderConfig: serial=%s@%d (mock=%s)",
        cfg.serial.port or "auto",
        cfg.serial.baudrate,
        cfg.serial.mock,
    )
    return cfg


def default_config() -> DecoderConfig:
    """Hardware mode, auto-discovered port, 9600 8N1."""
    cfg = DecoderConfig(serial=SerialConfig(), banner=True)
    cfg.validate()
    return cfg


def resolve_config(config_path: Optional[str | Path] = None) -> DecoderConfig:
    """
    Pick the configuration for a run.

    An explicit path must exist. Without one, ``prt7.toml`` in the working
    directory is used if present, else the built-in defaults.
    """
    if config_path is not None:
        return load_from_toml(config_path)
    if DEFAULT_CONFIG_FILE.exists():
        return load_from_toml(DEFAULT_CONFIG_FILE)
    logger.info("No configuration file, using defaults")
    return default_config()

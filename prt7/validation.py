"""
Cross-field validation for decoder configuration.

Type-local invariants stay in the dataclass __post_init__ methods; rules that
depend on more than one field live here.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import DecoderConfig


class ValidationError(ValueError):
    """Base exception for validation errors."""
    pass


class SerialValidationError(ValidationError):
    """Raised when the serial section is inconsistent."""
    pass


def validate_decoder_config(config: "DecoderConfig") -> None:
    """
    Validate rules spanning several configuration fields.

    Raises:
        SerialValidationError: If the serial settings contradict each other
    """
    serial = config.serial

    if serial.replay_file is not None:
        if not serial.mock:
            raise SerialValidationError("replay_file is only used when mock = true")
        if not serial.replay_file.is_file():
            raise SerialValidationError(f"Replay file not found: {serial.replay_file}")

    if serial.port is not None and not serial.port.strip():
        raise SerialValidationError("Serial port must not be blank")

    ports = list(serial.candidate_ports)
    if any(not p.strip() for p in ports):
        raise SerialValidationError("Candidate ports must not be blank")
    if len(ports) != len(set(ports)):
        duplicates = sorted({p for p in ports if ports.count(p) > 1})
        raise SerialValidationError(f"Duplicate candidate ports: {duplicates}")

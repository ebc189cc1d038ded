from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    DEVICE_NOT_FOUND = "device_not_found"
    INVALID_TIMESTAMP = "invalid_timestamp"
    INVALID_STATS = "invalid_stats"


class TelemetryError(Exception):
    """Base class for every failure the telemetry store reports to its caller."""

    kind: ErrorKind

    def __init__(self, message: str, *, device_id: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.device_id = device_id


class DeviceNotFoundError(TelemetryError):
    kind = ErrorKind.DEVICE_NOT_FOUND

    def __init__(self, device_id: str) -> None:
        super().__init__("Device not found", device_id=device_id)


class InvalidTimestampError(TelemetryError):
    kind = ErrorKind.INVALID_TIMESTAMP


class InvalidStatsError(TelemetryError):
    kind = ErrorKind.INVALID_STATS


class RosterError(Exception):
    """Raised when the device roster cannot be loaded at startup."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class HeartbeatRecord:
    timestamp: datetime


@dataclass(frozen=True)
class StatsRecord:
    timestamp: datetime
    upload_duration_ns: int


@dataclass(frozen=True)
class DeviceMetrics:
    uptime_percent: float
    # Empty string when the device has not reported any stats yet.
    avg_upload_duration: str


@dataclass(frozen=True)
class DeviceSnapshot:
    device_id: str
    heartbeats: tuple[HeartbeatRecord, ...]
    stats: tuple[StatsRecord, ...]

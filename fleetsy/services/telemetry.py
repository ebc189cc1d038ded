from __future__ import annotations

import logging
import threading
from datetime import datetime

from fleetsy.core.errors import (
    DeviceNotFoundError,
    InvalidStatsError,
    InvalidTimestampError,
)
from fleetsy.core.timeutil import parse_rfc3339
from fleetsy.models.telemetry import (
    DeviceMetrics,
    DeviceSnapshot,
    HeartbeatRecord,
    StatsRecord,
)
from fleetsy.services.metrics import compute_device_metrics
from fleetsy.services.registry import DeviceRegistry

logger = logging.getLogger(__name__)

MAX_UPLOAD_DURATION_NS = 2**63 - 1


class TelemetryStore:
    """In-memory heartbeat and stats history for every registered device.

    All operations run under one lock, so reads never observe a half-applied
    append. Sequences are append-only and exist only for registered devices.
    """

    def __init__(self, registry: DeviceRegistry) -> None:
        self._lock = threading.Lock()
        self._registry = registry
        self._heartbeats: dict[str, list[HeartbeatRecord]] = {d: [] for d in registry}
        self._stats: dict[str, list[StatsRecord]] = {d: [] for d in registry}

    @property
    def device_ids(self) -> list[str]:
        return list(self._registry)

    def record_heartbeat(self, device_id: str, raw_timestamp: str) -> None:
        with self._lock:
            heartbeats = self._heartbeats.get(device_id)
            if heartbeats is None:
                raise DeviceNotFoundError(device_id)
            timestamp = _parse_timestamp(device_id, raw_timestamp)
            heartbeats.append(HeartbeatRecord(timestamp=timestamp))
        logger.debug("heartbeat device=%s sent_at=%s", device_id, raw_timestamp)

    def record_stats(
        self, device_id: str, raw_timestamp: str, upload_duration_ns: int
    ) -> None:
        with self._lock:
            stats = self._stats.get(device_id)
            if stats is None:
                raise DeviceNotFoundError(device_id)
            timestamp = _parse_timestamp(device_id, raw_timestamp)
            _validate_upload_duration(device_id, upload_duration_ns)
            stats.append(
                StatsRecord(timestamp=timestamp, upload_duration_ns=upload_duration_ns)
            )
        logger.debug(
            "stats device=%s sent_at=%s upload_time_ns=%d",
            device_id,
            raw_timestamp,
            upload_duration_ns,
        )

    def get_stats(self, device_id: str) -> DeviceMetrics:
        with self._lock:
            heartbeats = self._heartbeats.get(device_id)
            stats = self._stats.get(device_id)
            if heartbeats is None or stats is None:
                raise DeviceNotFoundError(device_id)
            return compute_device_metrics(heartbeats, stats)

    def snapshot(self, device_id: str) -> DeviceSnapshot:
        with self._lock:
            heartbeats = self._heartbeats.get(device_id)
            stats = self._stats.get(device_id)
            if heartbeats is None or stats is None:
                raise DeviceNotFoundError(device_id)
            return DeviceSnapshot(
                device_id=device_id, heartbeats=tuple(heartbeats), stats=tuple(stats)
            )


def _parse_timestamp(device_id: str, raw: str) -> datetime:
    try:
        return parse_rfc3339(raw)
    except (ValueError, OverflowError) as e:
        raise InvalidTimestampError(
            "Invalid timestamp, expected RFC 3339 date-time", device_id=device_id
        ) from e


def _validate_upload_duration(device_id: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidStatsError("upload_time must be an integer", device_id=device_id)
    if value < 0 or value > MAX_UPLOAD_DURATION_NS:
        raise InvalidStatsError(
            "upload_time must be a non-negative nanosecond count", device_id=device_id
        )

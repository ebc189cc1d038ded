"""Derived per-device metrics.

Pure functions over a device's stored sequences. They never fail: empty or
degenerate input yields a fixed sentinel instead of an exception.
"""
from __future__ import annotations

from collections.abc import Sequence

from fleetsy.core.timeutil import SECOND, format_duration
from fleetsy.models.telemetry import DeviceMetrics, HeartbeatRecord, StatsRecord


def uptime_percent(heartbeats: Sequence[HeartbeatRecord]) -> float:
    """Heartbeats per minute between the first and last heartbeat, times 100.

    Zero heartbeats, or a zero-length span (which covers a single heartbeat),
    give 0. The result is not clamped and exceeds 100 when devices report
    more often than once a minute.
    """
    count = len(heartbeats)
    if count == 0:
        return 0.0
    span_minutes = (heartbeats[-1].timestamp - heartbeats[0].timestamp).total_seconds() / 60
    if span_minutes == 0:
        return 0.0
    return (count / span_minutes) * 100


def average_upload_duration(stats: Sequence[StatsRecord]) -> str:
    """Mean upload duration rendered like ``"1m30s"``; ``""`` when there are no samples.

    Durations are summed as float seconds so sub-second averages survive.
    """
    if not stats:
        return ""
    total_seconds = sum(s.upload_duration_ns / SECOND for s in stats)
    avg_seconds = total_seconds / len(stats)
    return format_duration(round(avg_seconds * SECOND))


def compute_device_metrics(
    heartbeats: Sequence[HeartbeatRecord], stats: Sequence[StatsRecord]
) -> DeviceMetrics:
    return DeviceMetrics(
        uptime_percent=uptime_percent(heartbeats),
        avg_upload_duration=average_upload_duration(stats),
    )

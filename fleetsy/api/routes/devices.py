from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from fleetsy.api.deps import get_telemetry_store
from fleetsy.schemas.telemetry import (
    DeviceStatsRead,
    ErrorRead,
    HeartbeatCreate,
    StatsCreate,
)
from fleetsy.services.telemetry import TelemetryStore

router = APIRouter(prefix="/devices")

Store = Annotated[TelemetryStore, Depends(get_telemetry_store)]

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorRead}}
BAD_REQUEST = {status.HTTP_400_BAD_REQUEST: {"model": ErrorRead}}


@router.post(
    "/{device_id}/heartbeat",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**NOT_FOUND, **BAD_REQUEST},
)
def post_heartbeat(device_id: str, payload: HeartbeatCreate, store: Store) -> Response:
    store.record_heartbeat(device_id, payload.sent_at)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{device_id}/stats",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**NOT_FOUND, **BAD_REQUEST},
)
def post_stats(device_id: str, payload: StatsCreate, store: Store) -> Response:
    store.record_stats(device_id, payload.sent_at, payload.upload_time)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{device_id}/stats",
    response_model=DeviceStatsRead,
    responses=NOT_FOUND,
)
def get_stats(device_id: str, store: Store) -> DeviceStatsRead:
    metrics = store.get_stats(device_id)
    return DeviceStatsRead(
        uptime=metrics.uptime_percent, avg_upload_time=metrics.avg_upload_duration
    )

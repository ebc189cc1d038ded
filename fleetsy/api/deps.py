from __future__ import annotations

from fastapi import HTTPException, Request, status

from fleetsy.services.telemetry import TelemetryStore


def get_telemetry_store(request: Request) -> TelemetryStore:
    store = getattr(request.app.state, "telemetry_store", None)
    if not isinstance(store, TelemetryStore):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Device roster not loaded",
        )
    return store

from __future__ import annotations

from pydantic import BaseModel, Field, StrictInt


class HeartbeatCreate(BaseModel):
    # Kept as a raw string; the store owns RFC 3339 validation.
    sent_at: str = Field(max_length=64)


class StatsCreate(BaseModel):
    sent_at: str = Field(max_length=64)
    upload_time: StrictInt = Field(description="Upload duration in nanoseconds.")


class DeviceStatsRead(BaseModel):
    uptime: float
    avg_upload_time: str


class ErrorRead(BaseModel):
    code: int
    message: str

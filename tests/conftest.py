from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from fleetsy.core.config import Settings
from fleetsy.factory import create_app
from fleetsy.services.registry import DeviceRegistry
from fleetsy.services.telemetry import TelemetryStore


@pytest.fixture()
def devices_file(tmp_path: Path) -> Path:
    path = tmp_path / "devices.csv"
    path.write_text("device_id\ndev1\ndev2\ndev1\n", encoding="utf-8")
    return path


@pytest.fixture()
def settings(devices_file: Path) -> Settings:
    return Settings(
        _env_file=None,
        env="test",
        debug=True,
        docs_enabled=False,
        log_level="DEBUG",
        devices_file=devices_file,
        devices_file_has_header=True,
        cors_origins=["http://localhost"],
        trusted_hosts=["testserver", "localhost"],
    )


@pytest.fixture()
def client(settings: Settings) -> TestClient:
    app = create_app(settings)
    with TestClient(app) as client:
        yield client


@pytest.fixture()
def store() -> TelemetryStore:
    return TelemetryStore(DeviceRegistry(["dev1", "dev2"]))


@pytest.fixture()
def t0() -> datetime:
    return datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from fleetsy.core.config import Settings
from fleetsy.core.errors import RosterError
from fleetsy.factory import create_app
from fleetsy.repositories.roster import CsvDeviceRoster


def test_reads_first_column_and_skips_header(tmp_path: Path) -> None:
    path = tmp_path / "devices.csv"
    path.write_text("device_id,model\nabc-1,x\n\n  abc-2 ,y\nabc-1,z\n", encoding="utf-8")
    roster = CsvDeviceRoster(path=path)
    assert roster.load_device_ids() == ["abc-1", "abc-2", "abc-1"]


def test_without_header(tmp_path: Path) -> None:
    path = tmp_path / "devices.csv"
    path.write_text("abc-1\nabc-2\n", encoding="utf-8")
    roster = CsvDeviceRoster(path=path, has_header=False)
    assert roster.load_device_ids() == ["abc-1", "abc-2"]


def test_missing_file(tmp_path: Path) -> None:
    roster = CsvDeviceRoster(path=tmp_path / "nope.csv")
    with pytest.raises(RosterError):
        roster.load_device_ids()


def test_app_startup_fails_without_roster(settings: Settings, tmp_path: Path) -> None:
    settings.devices_file = tmp_path / "missing.csv"
    app = create_app(settings)
    with pytest.raises(RosterError):
        with TestClient(app):
            pass


class StaticRoster:
    def load_device_ids(self) -> list[str]:
        return ["static-1"]


def test_app_accepts_custom_roster_source(settings: Settings) -> None:
    app = create_app(settings, roster=StaticRoster())
    with TestClient(app) as client:
        assert client.get("/api/v1/devices/static-1/stats").status_code == 200
        assert client.get("/api/v1/devices/dev1/stats").status_code == 404

from __future__ import annotations

from typing import Protocol


class DeviceRosterSource(Protocol):
    def load_device_ids(self) -> list[str]: ...

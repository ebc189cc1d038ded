from __future__ import annotations

from collections.abc import Iterable, Iterator


class DeviceRegistry:
    """Fixed set of device ids known to the telemetry store.

    Built once from the roster; duplicates collapse and blank ids are ignored.
    """

    def __init__(self, device_ids: Iterable[str]) -> None:
        ordered: dict[str, None] = {}
        for device_id in device_ids:
            device_id = device_id.strip()
            if device_id:
                ordered.setdefault(device_id, None)
        self._ids: tuple[str, ...] = tuple(ordered)
        self._members: frozenset[str] = frozenset(ordered)

    def contains(self, device_id: str) -> bool:
        return device_id in self._members

    def __contains__(self, device_id: object) -> bool:
        return device_id in self._members

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

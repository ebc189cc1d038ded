from __future__ import annotations

import csv
import logging
from pathlib import Path

from fleetsy.core.errors import RosterError

logger = logging.getLogger(__name__)


class CsvDeviceRoster:
    """Reads device ids from the first column of a CSV listing."""

    def __init__(self, *, path: Path, has_header: bool = True) -> None:
        self._path = Path(path)
        self._has_header = has_header

    def load_device_ids(self) -> list[str]:
        try:
            with self._path.open(newline="", encoding="utf-8") as fh:
                rows = list(csv.reader(fh))
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise RosterError(f"Failed to read device roster {self._path}") from e

        if self._has_header and rows:
            rows = rows[1:]

        device_ids = [row[0].strip() for row in rows if row and row[0].strip()]
        logger.info("loaded %d device ids from %s", len(device_ids), self._path)
        return device_ids

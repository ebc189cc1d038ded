from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # basicConfig is a no-op once handlers exist; keep the level in sync anyway.
    logging.getLogger().setLevel(level)

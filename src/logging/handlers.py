# src/logging/handlers.py — v1
"""Size-based rotation for the optional tokenslim log file.

Driven by ``LOG_FILE``, ``LOG_ROTATION`` and ``LOG_RETENTION``. Settings
validation calls ``parse_size`` too, so a bad rotation value is reported
at startup rather than when the first record is written.
"""

from __future__ import annotations

import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

_SIZE_RE = re.compile(r"^(\d+)\s*(KB|MB|GB)$", re.IGNORECASE)
_UNIT_BYTES = {"KB": 1024, "MB": 1024**2, "GB": 1024**3}


def parse_size(size_str: str) -> int:
    """Convert a ``LOG_ROTATION`` value such as ``"10MB"`` or ``"512kb"`` to bytes.

    Raises:
        ValueError: If the value is not a positive count followed by KB, MB or GB.
    """
    match = _SIZE_RE.match(size_str.strip())
    if not match or int(match.group(1)) == 0:
        raise ValueError(f"Invalid size format: {size_str!r}. Use e.g. '10MB'.")
    return int(match.group(1)) * _UNIT_BYTES[match.group(2).upper()]


def create_rotating_handler(
    log_file: str | Path,
    rotation: str = "10MB",
    retention: int = 5,
) -> RotatingFileHandler:
    """Open the log file for appending, creating its directory if needed.

    The file rolls over to ``<name>.1`` once it reaches ``rotation`` bytes;
    ``retention`` rolled-over files are kept and older ones are deleted.
    """
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        filename=str(path),
        maxBytes=parse_size(rotation),
        backupCount=retention,
        encoding="utf-8",
    )

from __future__ import annotations

from pathlib import Path

# Default log folder, relative to the working directory
LOG_DIR = Path("Logs")

# Generation file names, newest first
ACTIVE_LOG_NAME = "log.txt"
PREVIOUS_LOG_NAME = "log1.txt"
OLDEST_LOG_NAME = "log2.txt"
GENERATION_NAMES = (ACTIVE_LOG_NAME, PREVIOUS_LOG_NAME, OLDEST_LOG_NAME)

# Any file whose name contains this is owned by rotation
LOG_NAME_MARKER = "log"


def active_log_path(directory: Path | str) -> Path:
    """Return `directory/log.txt`."""
    return Path(directory) / ACTIVE_LOG_NAME

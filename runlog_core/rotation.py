from __future__ import annotations

from pathlib import Path
from typing import List

from runlog_core.errors import DirectoryNotAccessibleError
from runlog_core.logging_config import get_logger
from runlog_core.paths import (
    ACTIVE_LOG_NAME,
    GENERATION_NAMES,
    LOG_NAME_MARKER,
    OLDEST_LOG_NAME,
    PREVIOUS_LOG_NAME,
    active_log_path,
)

logger = get_logger("rotation")

# Expected file set for each count of matching files, and the
# (source, destination) moves that shift every generation down one slot.
# A None destination means delete.
_ROTATION_PLANS = {
    1: (
        {ACTIVE_LOG_NAME},
        [(ACTIVE_LOG_NAME, PREVIOUS_LOG_NAME)],
    ),
    2: (
        {ACTIVE_LOG_NAME, PREVIOUS_LOG_NAME},
        [(PREVIOUS_LOG_NAME, OLDEST_LOG_NAME), (ACTIVE_LOG_NAME, PREVIOUS_LOG_NAME)],
    ),
    3: (
        set(GENERATION_NAMES),
        [
            (OLDEST_LOG_NAME, None),
            (PREVIOUS_LOG_NAME, OLDEST_LOG_NAME),
            (ACTIVE_LOG_NAME, PREVIOUS_LOG_NAME),
        ],
    ),
}


def matching_files(directory: Path) -> List[Path]:
    """Regular files in `directory` whose name contains "log", sorted by name."""
    return sorted(
        p for p in directory.iterdir() if p.is_file() and LOG_NAME_MARKER in p.name
    )


def _clear(files: List[Path]) -> None:
    for path in files:
        path.unlink()
        logger.info("Removed %s", path)


def prepare_log_file(directory: Path | str) -> Path:
    """
    Make room for a fresh `log.txt` in `directory` and return its path.

    Existing generations shift down one slot (log.txt -> log1.txt ->
    log2.txt, the old log2.txt is dropped). If the files containing "log"
    are not exactly the expected generation set, all of them are deleted.

    Raises DirectoryNotAccessibleError when the directory cannot be created,
    listed, or modified.
    """
    directory = Path(directory)

    try:
        directory.mkdir(parents=True, exist_ok=True)
        files = matching_files(directory)
        names = {p.name for p in files}

        plan = _ROTATION_PLANS.get(len(files))
        if plan is None:
            if files:
                logger.info("Unexpected log set %s in %s; clearing", sorted(names), directory)
                _clear(files)
        elif names == plan[0]:
            for src, dest in plan[1]:
                if dest is None:
                    (directory / src).unlink()
                    logger.info("Dropped oldest generation %s", directory / src)
                else:
                    (directory / src).replace(directory / dest)
                    logger.info("Rotated %s -> %s", src, dest)
        else:
            logger.info("Unexpected log set %s in %s; clearing", sorted(names), directory)
            _clear(files)
    except OSError as e:
        raise DirectoryNotAccessibleError(
            f"Log directory {directory} is not accessible: {e}"
        ) from e

    return active_log_path(directory)


def list_generations(directory: Path | str) -> List[Path]:
    """Existing generation files in `directory`, newest first."""
    directory = Path(directory)
    return [directory / name for name in GENERATION_NAMES if (directory / name).is_file()]


def read_generation(directory: Path | str, index: int = 0) -> str:
    """
    Return the text of one generation (0 = log.txt, 1 = log1.txt, 2 = log2.txt).
    """
    if not 0 <= index < len(GENERATION_NAMES):
        raise ValueError(f"generation must be 0..{len(GENERATION_NAMES) - 1}, got {index}")
    path = Path(directory) / GENERATION_NAMES[index]
    return path.read_text(encoding="utf-8")


__all__ = ["prepare_log_file", "matching_files", "list_generations", "read_generation"]

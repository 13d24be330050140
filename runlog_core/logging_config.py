from __future__ import annotations

import logging
import os
import sys

DIAGNOSTICS_NAMESPACE = "runlog"
LEVEL_ENV_VAR = "RUNLOG_LOG_LEVEL"


def get_logger(name: str) -> logging.Logger:
    """
    Return a logger for the library's own diagnostics that:
      - lives under the `runlog.` namespace
      - prints to stderr, never into the log directory (rotation would
        sweep any file there whose name contains "log")
    """
    logger = logging.getLogger(f"{DIAGNOSTICS_NAMESPACE}.{name}")

    # Avoid attaching handlers twice
    if logger.handlers:
        return logger

    level_name = os.environ.get(LEVEL_ENV_VAR, "WARNING").upper()
    logger.setLevel(getattr(logging, level_name, logging.WARNING))

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    return logger

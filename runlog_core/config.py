from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any, Sequence

from pydantic import BaseModel

from runlog_core.paths import LOG_DIR

CONSOLE_FLAGS = ("-console", "--console")


class ErrorPolicy(str, Enum):
    RELAY = "relay"
    THROW = "throw"


class LoggerConfig(BaseModel):
    """
    Session settings, resolved by the caller before `initialize`.

    mirror_queued_immediately: echo queued lines to the console as they are
    queued instead of after `queue_execute` has written them to disk.
    """

    log_directory: Path = LOG_DIR
    console: bool = False
    error_policy: ErrorPolicy = ErrorPolicy.RELAY
    timestamps: bool = False
    mirror_queued_immediately: bool = False

    @classmethod
    def from_launch_args(cls, args: Sequence[str], **overrides: Any) -> "LoggerConfig":
        """
        Build a config from process arguments: `-console` turns mirroring on.
        Everything else in `args` is ignored.
        """
        values: dict[str, Any] = {"console": any(a in CONSOLE_FLAGS for a in args)}
        values.update(overrides)
        return cls(**values)


__all__ = ["ErrorPolicy", "LoggerConfig", "CONSOLE_FLAGS"]

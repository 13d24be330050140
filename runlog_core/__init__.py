"""
Append-only text logger with fixed-depth file rotation.

The module-level helpers drive one process-wide `LogSession`; create your own
`LogSession` objects when more than one logger is needed.
"""
from __future__ import annotations

from typing import Iterable, Optional, Sequence, Union

from runlog_core.config import ErrorPolicy, LoggerConfig
from runlog_core.dispatch import ErrorCallback
from runlog_core.errors import (
    DirectoryNotAccessibleError,
    ErrorKind,
    RunlogError,
    SessionNotInitializedError,
)
from runlog_core.message_types import Emphasis, MessageType
from runlog_core.session import LogSession

_session = LogSession()


def get_session() -> LogSession:
    return _session


def initialize(
    config: Optional[LoggerConfig] = None,
    launch_args: Optional[Sequence[str]] = None,
    **overrides,
) -> bool:
    """
    Start the process-wide session. Without `config`, one is built from
    `launch_args` (`-console` enables mirroring) and keyword overrides;
    with it, keyword overrides replace the matching fields of `config`.
    """
    if config is None:
        config = LoggerConfig.from_launch_args(launch_args or [], **overrides)
    elif overrides:
        config = LoggerConfig.model_validate({**config.model_dump(), **overrides})
    return _session.initialize(config)


def set_error_handler(callback: Optional[ErrorCallback]) -> None:
    _session.on_error = callback


def log(message: str, message_type: MessageType = MessageType.GENERAL) -> bool:
    return _session.log(message, message_type)


def log_many(
    messages: Iterable[str],
    message_types: Union[MessageType, Sequence[MessageType]] = MessageType.GENERAL,
) -> bool:
    return _session.log_many(messages, message_types)


def queue_add(message: str, message_type: MessageType = MessageType.GENERAL) -> bool:
    return _session.queue_add(message, message_type)


def queue_execute() -> bool:
    return _session.queue_execute()


def divider() -> bool:
    return _session.divider()


def divider_line() -> bool:
    return _session.divider_line()


def end() -> bool:
    return _session.end()


__all__ = [
    "DirectoryNotAccessibleError",
    "Emphasis",
    "ErrorKind",
    "ErrorPolicy",
    "LogSession",
    "LoggerConfig",
    "MessageType",
    "RunlogError",
    "SessionNotInitializedError",
    "divider",
    "divider_line",
    "end",
    "get_session",
    "initialize",
    "log",
    "log_many",
    "queue_add",
    "queue_execute",
    "set_error_handler",
]

from __future__ import annotations

from typing import Callable, Optional

from runlog_core.config import ErrorPolicy
from runlog_core.errors import ErrorKind, error_for
from runlog_core.logging_config import get_logger

ErrorCallback = Callable[[ErrorKind, str], None]

logger = get_logger("dispatch")


class ErrorDispatcher:
    """
    Single choke point for logger faults.

    RELAY hands `(kind, message)` to the registered callback (or drops it when
    none is registered); THROW raises the matching `RunlogError`.
    Only runtime faults count towards `error_count`; usage errors do not.
    """

    def __init__(
        self,
        policy: ErrorPolicy = ErrorPolicy.RELAY,
        callback: Optional[ErrorCallback] = None,
    ):
        self.policy = policy
        self.callback = callback
        self.error_count = 0

    def reset(self) -> None:
        self.error_count = 0

    def dispatch(self, kind: ErrorKind, message: str) -> None:
        if kind is ErrorKind.DIRECTORY_NOT_ACCESSIBLE:
            self.error_count += 1

        logger.debug("%s: %s", kind.value, message)

        if self.policy is ErrorPolicy.THROW:
            raise error_for(kind, message)

        if self.callback is not None:
            self.callback(kind, message)


__all__ = ["ErrorCallback", "ErrorDispatcher"]

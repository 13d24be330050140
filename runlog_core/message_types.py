from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class Emphasis(str, Enum):
    """How the console sink should render a line."""

    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"
    MUTED = "muted"


class MessageType(Enum):
    """
    Closed set of message types.

    Each member's value is its (prefix, emphasis) pair, so a member cannot
    exist without both. Prefixes are unique, which keeps members distinct.
    """

    GENERAL = ("", Emphasis.NORMAL)
    GENERAL_SUB = (" |", Emphasis.NORMAL)
    ALERT = ("!", Emphasis.WARNING)
    ALERT_SUB = ("! |", Emphasis.WARNING)
    HIGH_ALERT = ("!!", Emphasis.CRITICAL)
    HIGH_ALERT_SUB = ("!! |", Emphasis.CRITICAL)
    MAINTENANCE = ("~", Emphasis.MUTED)
    MAINTENANCE_SUB = ("~ |", Emphasis.MUTED)

    @property
    def prefix(self) -> str:
        return self.value[0]

    @property
    def emphasis(self) -> Emphasis:
        return self.value[1]


def timestamp_token(now: Optional[datetime] = None) -> str:
    """Return the `[HH:MM:SS]` UTC token."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).strftime("[%H:%M:%S]")


def format_line(
    message_type: MessageType,
    message: str,
    *,
    timestamps: bool = False,
    now: Optional[datetime] = None,
) -> str:
    """
    Build one log line: `[HH:MM:SS] <prefix><message>` (token only when
    `timestamps` is set).
    """
    if not isinstance(message_type, MessageType):
        raise TypeError(f"expected MessageType, got {message_type!r}")

    line = f"{message_type.prefix}{message}"
    if timestamps:
        line = f"{timestamp_token(now)} {line}"
    return line


__all__ = ["Emphasis", "MessageType", "format_line", "timestamp_token"]

from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from rich.console import Console

from runlog_core.config import LoggerConfig
from runlog_core.dispatch import ErrorCallback, ErrorDispatcher
from runlog_core.errors import DirectoryNotAccessibleError, ErrorKind, RunlogError
from runlog_core.logging_config import get_logger
from runlog_core.message_types import Emphasis, MessageType, format_line
from runlog_core.rotation import prepare_log_file
from runlog_core.sinks import ConsoleSink, FileSink

logger = get_logger("session")

DASHED_LINE = "-" * 46

Entry = Tuple[str, Emphasis]


@dataclass
class QueuedLine:
    line: str
    emphasis: Emphasis
    mirrored: bool = False


def expand_types(
    message_types: Union[MessageType, Sequence[MessageType]], count: int
) -> List[MessageType]:
    """
    Pair `count` messages with types. A single type applies to all of them;
    a sequence shorter than `count` repeats its last type for the rest.
    An empty sequence means General.
    """
    if isinstance(message_types, MessageType):
        return [message_types] * count
    types = list(message_types)[:count]
    if not types:
        return [MessageType.GENERAL] * count
    return types + [types[-1]] * (count - len(types))


def _utc_stamp() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


class LogSession:
    """
    One logging session: rotation on `initialize`, typed lines appended to
    `log.txt` and optionally mirrored to the console, until `end`.

    Every logging call returns True when its lines reached the file. Faults
    go through the session's ErrorDispatcher, so under the RELAY policy a
    failed call returns False instead of raising.
    """

    def __init__(
        self,
        config: Optional[LoggerConfig] = None,
        on_error: Optional[ErrorCallback] = None,
        console: Optional[Console] = None,
    ):
        self.config = config or LoggerConfig()
        self._dispatcher = ErrorDispatcher(self.config.error_policy, on_error)
        self._console_sink = ConsoleSink(console)
        self._lock = threading.RLock()
        self._reset_state()

    def _reset_state(self) -> None:
        self._file_sink: Optional[FileSink] = None
        self._console = False
        self._timestamps = False
        self._mirror_queued_immediately = False
        self._queue: List[QueuedLine] = []

    # -----------------------------
    # Introspection
    # -----------------------------
    @property
    def initialized(self) -> bool:
        return self._file_sink is not None

    @property
    def active_file(self) -> Optional[Path]:
        return self._file_sink.path if self._file_sink else None

    @property
    def error_count(self) -> int:
        return self._dispatcher.error_count

    @property
    def pending(self) -> int:
        return len(self._queue)

    @property
    def on_error(self) -> Optional[ErrorCallback]:
        return self._dispatcher.callback

    @on_error.setter
    def on_error(self, callback: Optional[ErrorCallback]) -> None:
        self._dispatcher.callback = callback

    # -----------------------------
    # Internals
    # -----------------------------
    def _require_session(self) -> bool:
        if self.initialized:
            return True
        self._dispatcher.dispatch(
            ErrorKind.SESSION_NOT_INITIALIZED,
            "Logger session is not initialized; call initialize() first",
        )
        return False

    def _format(self, message_type: MessageType, message: str) -> Entry:
        line = format_line(message_type, message, timestamps=self._timestamps)
        return line, message_type.emphasis

    def _append(self, entries: Sequence[Entry]) -> bool:
        try:
            self._file_sink.append([line for line, _ in entries])
        except DirectoryNotAccessibleError as e:
            self._dispatcher.dispatch(e.kind, e.message)
            return False
        return True

    def _emit(self, entries: Sequence[Entry]) -> bool:
        if not self._require_session():
            return False
        if not self._append(entries):
            return False
        if self._console:
            self._console_sink.write_all(entries)
        return True

    # -----------------------------
    # Lifecycle
    # -----------------------------
    def initialize(self, config: Optional[LoggerConfig] = None) -> bool:
        """
        Rotate the log directory and open a new session.

        An already-active session is ended first. Returns False (RELAY) or
        raises (THROW) when the directory cannot be prepared; the session then
        stays uninitialized.
        """
        with self._lock:
            if self.initialized:
                self.end()

            if config is not None:
                self.config = config
            cfg = self.config
            self._dispatcher.policy = cfg.error_policy
            self._dispatcher.reset()

            try:
                active = prepare_log_file(cfg.log_directory)
            except DirectoryNotAccessibleError as e:
                self._dispatcher.dispatch(e.kind, e.message)
                return False

            self._file_sink = FileSink(active)
            self._console = cfg.console
            self._timestamps = cfg.timestamps
            self._mirror_queued_immediately = cfg.mirror_queued_immediately
            logger.info("Session started at %s", active)

            try:
                started = self.begin()
            except RunlogError:
                self._reset_state()
                raise
            if not started:
                self._reset_state()
                return False
            if self._console:
                self.log("Console logging enabled.", MessageType.ALERT)
            return True

    def begin(self) -> bool:
        """Write the session header block."""
        with self._lock:
            if not self._require_session():
                return False
            entries = [(DASHED_LINE, Emphasis.NORMAL)]
            entries += [
                self._format(MessageType.MAINTENANCE, "Logger initialized."),
                self._format(
                    MessageType.MAINTENANCE_SUB,
                    f"Console logging: {'enabled' if self._console else 'disabled'}",
                ),
                self._format(MessageType.MAINTENANCE_SUB, f"Log file: {self.active_file.resolve()}"),
                self._format(MessageType.MAINTENANCE_SUB, f"Started: {_utc_stamp()}"),
            ]
            entries.append((DASHED_LINE, Emphasis.NORMAL))
            return self._emit(entries)

    def end(self) -> bool:
        """
        Flush the queue, write the footer and reset the session.

        Returns False when the flush or the footer could not be written, and
        does nothing (returning False) without an active session.
        """
        with self._lock:
            if not self.initialized:
                logger.debug("end() called without an active session; ignoring")
                return False

            try:
                flushed = self.queue_execute() if self._queue else True

                # a failed flush has already been dispatched; the footer would fail the same way
                written = False
                if flushed:
                    entries = [(DASHED_LINE, Emphasis.NORMAL)]
                    entries.append(self._format(MessageType.MAINTENANCE, "Logger finalized."))
                    if self.error_count:
                        entries.append(
                            self._format(MessageType.MAINTENANCE_SUB, f"Errors: {self.error_count}")
                        )
                    entries += [
                        self._format(MessageType.MAINTENANCE_SUB, f"Log file: {self.active_file.resolve()}"),
                        self._format(MessageType.MAINTENANCE_SUB, f"Finished: {_utc_stamp()}"),
                    ]
                    entries.append((DASHED_LINE, Emphasis.NORMAL))
                    written = self._emit(entries)
            finally:
                logger.info("Session at %s finished", self.active_file)
                self._reset_state()
                self._dispatcher.reset()
            return written

    def __enter__(self) -> "LogSession":
        self.initialize()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.end()

    # -----------------------------
    # Message pipeline
    # -----------------------------
    def log(self, message: str, message_type: MessageType = MessageType.GENERAL) -> bool:
        """Append one typed line."""
        with self._lock:
            return self._emit([self._format(message_type, message)])

    def log_many(
        self,
        messages: Iterable[str],
        message_types: Union[MessageType, Sequence[MessageType]] = MessageType.GENERAL,
    ) -> bool:
        """
        Append several lines in one file write.

        `message_types` is either one type for every message or a sequence
        where type i formats message i; when it runs out, its last type is
        reused for the remaining messages.
        """
        with self._lock:
            if not self._require_session():
                return False
            messages = list(messages)
            types = expand_types(message_types, len(messages))
            entries = [self._format(t, m) for t, m in zip(types, messages)]
            if not entries:
                return True
            return self._emit(entries)

    def queue_add(self, message: str, message_type: MessageType = MessageType.GENERAL) -> bool:
        """Format a line now and hold it until `queue_execute`."""
        with self._lock:
            if not self._require_session():
                return False
            line, emphasis = self._format(message_type, message)
            queued = QueuedLine(line, emphasis)
            if self._console and self._mirror_queued_immediately:
                self._console_sink.write(line, emphasis)
                queued.mirrored = True
            self._queue.append(queued)
            return True

    def queue_execute(self) -> bool:
        """
        Write every queued line in one append, mirror the ones not yet shown,
        and empty the queue. A failed write drops the queued lines.
        """
        with self._lock:
            if not self._require_session():
                return False
            pending, self._queue = self._queue, []
            if not pending:
                return True
            if not self._append([(q.line, q.emphasis) for q in pending]):
                return False
            if self._console:
                self._console_sink.write_all(
                    (q.line, q.emphasis) for q in pending if not q.mirrored
                )
            return True

    def divider(self) -> bool:
        """Append an empty line."""
        with self._lock:
            return self._emit([("", Emphasis.NORMAL)])

    def divider_line(self) -> bool:
        """Append a dashed separator line."""
        with self._lock:
            return self._emit([(DASHED_LINE, Emphasis.NORMAL)])


__all__ = ["LogSession", "QueuedLine", "DASHED_LINE", "expand_types"]

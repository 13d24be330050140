from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, Sequence

from rich.console import Console

from runlog_core.errors import DirectoryNotAccessibleError
from runlog_core.message_types import Emphasis

EMPHASIS_STYLES = {
    Emphasis.NORMAL: None,
    Emphasis.WARNING: "yellow",
    Emphasis.CRITICAL: "bold red",
    Emphasis.MUTED: "dim",
}


class FileSink:
    """
    Appends lines to one file. The handle is opened and closed inside every
    call, so nothing stays open between writes.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def append(self, lines: Sequence[str]) -> None:
        if not lines:
            return
        payload = "".join(f"{line}\n" for line in lines)
        try:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(payload)
        except OSError as e:
            raise DirectoryNotAccessibleError(
                f"Cannot append to {self.path}: {e}"
            ) from e


class ConsoleSink:
    """Mirrors lines to the terminal, styled by emphasis."""

    def __init__(self, console: Optional[Console] = None):
        # file=None makes rich resolve sys.stdout at print time
        self.console = console or Console(highlight=False, emoji=False, soft_wrap=True)

    def write(self, line: str, emphasis: Emphasis = Emphasis.NORMAL) -> None:
        self.console.print(line, style=EMPHASIS_STYLES[emphasis], markup=False)

    def write_all(self, entries: Iterable[tuple[str, Emphasis]]) -> None:
        for line, emphasis in entries:
            self.write(line, emphasis)


__all__ = ["FileSink", "ConsoleSink", "EMPHASIS_STYLES"]

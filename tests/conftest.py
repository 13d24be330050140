"""
Shared pytest fixtures.

Puts the project root on sys.path so `runlog_core` and `runlog_cli` import
without installing the package.
"""
import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from runlog_core.config import LoggerConfig  # noqa: E402
from runlog_core.session import LogSession  # noqa: E402


@pytest.fixture
def log_dir(tmp_path):
    return tmp_path / "Logs"


@pytest.fixture
def make_session(log_dir):
    """Build a LogSession on the temporary log directory."""

    def factory(on_error=None, **overrides):
        overrides.setdefault("log_directory", log_dir)
        return LogSession(LoggerConfig(**overrides), on_error=on_error)

    return factory

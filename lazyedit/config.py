"""Editor tunables and on-disk locations.

The editor reads no configuration file; defaults live in ``EditorConfig``
and the command line may override a few of them.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "lazyedit"
VERSION = "0.1.0"
LOG_FILENAME = "lazyedit.log"
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / LOG_FILENAME


@dataclass(frozen=True)
class EditorConfig:
    """Constants that shape rendering, input timing, and quit confirmation."""

    tab_stop: int = 4
    quit_times: int = 3
    status_message_seconds: float = 2.0
    status_message_max_bytes: int = 128
    read_timeout_ms: int = 100
    esc_sequence_timeout_ms: int = 25

    def __post_init__(self) -> None:
        if self.tab_stop <= 0:
            raise ValueError("tab_stop must be >= 1")
        if self.quit_times < 0:
            raise ValueError("quit_times must be >= 0")
        if self.status_message_max_bytes <= 1:
            raise ValueError("status_message_max_bytes must be >= 2")


def default_log_path() -> Path:
    return DEFAULT_LOG_PATH

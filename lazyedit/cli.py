"""Command-line front door for lazyedit.

Parses CLI options, sets up file logging, and loads the optional file.
Then runs the interactive editor and maps fatal errors to exit status 1.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import persistence
from .app import Editor
from .config import EditorConfig, default_log_path
from .errors import PersistenceError, TerminalError
from .input import InputDecoder
from .logs import LOG_LEVELS, configure_logging
from .state import EditorState
from .terminal import TerminalSession

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Edit a plain-text file in the terminal.")
    parser.add_argument("path", nargs="?", default=None, help="File to edit. Created on first save if missing.")
    parser.add_argument("--tab-stop", type=_positive_int, default=EditorConfig.tab_stop, help="Tab width in columns.")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="warning", help="Log verbosity.")
    parser.add_argument("--log-file", type=Path, default=None, help="Log file path.")
    return parser


def build_state(path: Path | None, config: EditorConfig) -> EditorState:
    """Create the editor state and load ``path`` into it when given.

    A file that cannot be read leaves an empty buffer bound to the path and a
    message in the status bar.
    """
    state = EditorState.create(config)
    if path is None:
        return state
    try:
        persistence.load(state.document, path)
    except PersistenceError as exc:
        logger.warning("could not open %s: %s", path, exc.message)
        state.set_status_message(exc.message)
    return state


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and run the editor until the user quits."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_file or default_log_path())

    config = EditorConfig(tab_stop=args.tab_stop)
    path = Path(args.path) if args.path is not None else None
    state = build_state(path, config)

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    try:
        session = TerminalSession(stdin_fd, stdout_fd)
        decoder = InputDecoder(stdin_fd, config.read_timeout_ms, config.esc_sequence_timeout_ms)
        Editor(state, session, decoder, stdout_fd).run()
    except (TerminalError, OSError) as exc:
        logger.exception("fatal terminal error")
        raise SystemExit(f"lazyedit: {exc}") from exc


if __name__ == "__main__":
    main()

"""Main interactive loop: render, decode one key, dispatch.

``Editor`` wires the terminal session, the input decoder, and the editor
state together. Feature logic lives in the editing, navigation, search, and
persistence modules; this class only binds keys to them.
"""

from __future__ import annotations

import logging
from pathlib import Path

from . import editing, persistence
from .errors import PersistenceError
from .input import (
    BACKSPACE,
    DELETE,
    DOWN,
    END,
    ESC,
    HOME,
    LEFT,
    PAGE_DOWN,
    PAGE_UP,
    RETURN,
    RIGHT,
    UP,
    InputDecoder,
    Key,
    ctrl_key,
)
from .keymap import KeyBinding, KeyMap
from .navigation import move_cursor, move_end, move_home, page_cursor
from .prompt import PromptIO, PromptMode, run_prompt
from .render import refresh_screen
from .search import SearchState
from .state import EditorState
from .terminal import TerminalSession

logger = logging.getLogger(__name__)

QUIT_KEY = ctrl_key("x")
SAVE_KEY = ctrl_key("s")
FIND_KEY = ctrl_key("f")
REDRAW_KEY = ctrl_key("l")
TAB_KEY = 0x09

SAVE_AS_PROMPT = "save as: {}"
FIND_PROMPT = "find (next/prev with arrow keys): {}"


def is_insertable(key: Key) -> bool:
    """Printable ASCII, tab, and any byte of a multi-byte UTF-8 sequence."""
    return isinstance(key, int) and (key == TAB_KEY or 32 <= key < 127 or key >= 128)


class Editor:
    """One editing session bound to a terminal."""

    def __init__(
        self,
        state: EditorState,
        session: TerminalSession,
        decoder: InputDecoder,
        stdout_fd: int,
    ) -> None:
        self.state = state
        self.session = session
        self.decoder = decoder
        self.stdout_fd = stdout_fd
        self.running = True
        self.prompt_io = PromptIO(refresh=self.refresh, read_key=self.read_key)
        self.keymap = KeyMap(fallback=self._insert).register_bindings(
            KeyBinding((QUIT_KEY,), self._quit),
            KeyBinding((SAVE_KEY,), lambda _key: self.save()),
            KeyBinding((FIND_KEY,), lambda _key: self.find()),
            KeyBinding((RETURN,), lambda _key: editing.newline(self.state)),
            KeyBinding((UP, DOWN, LEFT, RIGHT), lambda key: move_cursor(self.state, key)),
            KeyBinding((HOME,), lambda _key: move_home(self.state)),
            KeyBinding((END,), lambda _key: move_end(self.state)),
            KeyBinding((PAGE_UP, PAGE_DOWN), lambda key: page_cursor(self.state, key)),
            KeyBinding((DELETE,), lambda _key: editing.delete_forward(self.state)),
            KeyBinding((BACKSPACE,), lambda _key: editing.backspace(self.state)),
            KeyBinding((ESC, REDRAW_KEY), lambda _key: None),
        )

    def remeasure(self) -> None:
        rows, cols = self.session.measure()
        self.state.set_viewport(rows, cols)
        logger.debug("viewport %dx%d", rows, cols)

    def refresh(self) -> None:
        if self.session.consume_resize():
            self.remeasure()
        refresh_screen(self.state, self.stdout_fd)

    def _on_idle(self) -> None:
        if self.session.resize_pending:
            self.refresh()

    def read_key(self) -> Key:
        return self.decoder.next_key(idle=self._on_idle)

    def process_key(self, key: Key) -> bool:
        """Handle one key; return ``False`` once the editor should exit."""
        self.keymap.dispatch(key)
        if key != QUIT_KEY:
            self.state.quit_confirmation.reset()
        return self.running

    def _insert(self, key: Key) -> None:
        if is_insertable(key):
            editing.insert_char(self.state, key)

    def _quit(self, _key: Key) -> None:
        confirmation = self.state.quit_confirmation
        tries_left = confirmation.remaining
        if confirmation.request(bool(self.state.document.dirty)):
            self.running = False
            return
        noun = "time" if tries_left == 1 else "times"
        self.state.set_status_message(
            f"Unsaved changes in buffer! (press ^X {tries_left} more {noun} to quit)"
        )

    def save(self) -> None:
        document = self.state.document
        if document.path is None:
            name = run_prompt(self.state, self.prompt_io, SAVE_AS_PROMPT)
            if not name:
                self.state.set_status_message("write aborted")
                return
            document.path = Path(name)
        try:
            result = persistence.save(document)
        except PersistenceError as exc:
            self.state.set_status_message(exc.message)
            return
        message = f"wrote {result.written} bytes"
        if result.note:
            message = f"{message} ({result.note})"
        self.state.set_status_message(message)

    def find(self) -> None:
        search = SearchState.begin(self.state)
        query = run_prompt(self.state, self.prompt_io, FIND_PROMPT, PromptMode.SEARCH, search)
        if not query:
            search.restore(self.state)

    def run(self) -> None:
        """Run the loop inside raw mode until the user quits."""
        with self.session.raw_mode():
            self.session.install_resize_handler()
            try:
                self.remeasure()
                logger.info("session started")
                while self.running:
                    self.refresh()
                    self.process_key(self.read_key())
            finally:
                self.session.restore_resize_handler()
        logger.info("session ended")

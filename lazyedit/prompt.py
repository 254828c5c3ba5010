"""Message-bar prompt used for find and save-as.

The prompt is told what it is for through ``PromptMode`` instead of taking a
callback; in ``SEARCH`` mode every keystroke also drives ``find_step``.
"""

from __future__ import annotations

import enum
from collections.abc import Callable
from dataclasses import dataclass

from .byte_buffer import ByteBuffer
from .input import BACKSPACE, DELETE, ESC, RETURN, Key
from .search import SearchState, find_step
from .state import EditorState

PROMPT_MAX_BYTES = 256
_ERASE_KEYS = frozenset({BACKSPACE, DELETE})


class PromptMode(enum.Enum):
    PLAIN = "plain"
    SEARCH = "search"


@dataclass(frozen=True)
class PromptIO:
    """Screen refresh and key reading supplied by the running editor."""

    refresh: Callable[[], None]
    read_key: Callable[[], Key]


def _is_prompt_char(key: Key) -> bool:
    return isinstance(key, int) and 32 <= key < 127


def run_prompt(
    state: EditorState,
    io: PromptIO,
    template: str,
    mode: PromptMode = PromptMode.PLAIN,
    search: SearchState | None = None,
) -> str | None:
    """Collect a line of input in the message bar.

    ``template`` contains one ``{}`` placeholder for the text typed so far.
    Returns the text on Return and ``None`` on Escape.
    """
    if mode is PromptMode.SEARCH and search is None:
        raise ValueError("search mode requires a SearchState")
    typed = ByteBuffer()
    while True:
        text = typed.getvalue().decode("ascii")
        state.set_status_message(template.format(text))
        io.refresh()
        key = io.read_key()

        if key in _ERASE_KEYS:
            typed.pop(1)
        elif key == ESC or key == RETURN:
            state.set_status_message("")
            if mode is PromptMode.SEARCH:
                find_step(state, search, text, key)
            return None if key == ESC else text
        elif _is_prompt_char(key) and len(typed) < PROMPT_MAX_BYTES:
            typed.append_byte(key)

        if mode is PromptMode.SEARCH:
            find_step(state, search, typed.getvalue().decode("ascii"), key)

"""Reusable key-binding registry primitives."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .input import Key


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from one or more keys to a single action callback."""

    keys: tuple[Key, ...]
    handler: Callable[[Key], None]


class KeyMap:
    """Small key-dispatch table with a fallback for unbound keys."""

    def __init__(self, fallback: Callable[[Key], None] | None = None) -> None:
        self._handlers: dict[Key, Callable[[Key], None]] = {}
        self._fallback = fallback

    def register_binding(self, binding: KeyBinding) -> KeyMap:
        """Register one binding, overwriting existing handlers for the same keys."""
        for key in binding.keys:
            self._handlers[key] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyBinding) -> KeyMap:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, key: Key) -> bool:
        """Invoke the handler bound to ``key``; return whether anything ran."""
        handler = self._handlers.get(key, self._fallback)
        if handler is None:
            return False
        handler(key)
        return True

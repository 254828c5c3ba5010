"""lazyedit: a small raw-mode terminal editor for UTF-8 text files.

``main`` runs the command-line editor; the editing engine lives in
``lazyedit.document``, ``lazyedit.editing`` and ``lazyedit.render``.
"""

from __future__ import annotations

__all__ = ["main"]


def main(argv: list[str] | None = None) -> None:
    """Run the editor; the CLI module is imported on first call."""
    from .cli import main as cli_main

    cli_main(argv)

"""Loading files into a ``Document`` and saving them back atomically.

Saving writes a temporary file in the target's directory, copies the
target's permission bits and ownership onto it, then renames it over the
target. A failure at any step leaves the original file and the in-memory
document untouched.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path

from .document import Document
from .errors import PersistenceError

logger = logging.getLogger(__name__)

DEFAULT_FILE_MODE = 0o644


@dataclass(frozen=True)
class TargetInfo:
    """Where a save really lands and the metadata to carry over."""

    real_path: Path
    mode: int
    uid: int
    gid: int
    existed: bool


def split_lines(data: bytes) -> list[bytes]:
    """Split file content into rows, stripping trailing ``\\r``/``\\n`` bytes."""
    lines = data.split(b"\n")
    if lines and lines[-1] == b"":
        lines.pop()
    return [line.rstrip(b"\r\n") for line in lines]


def load(document: Document, path: Path) -> bool:
    """Associate ``path`` with ``document`` and read it if it exists.

    Returns ``False`` when the file does not exist yet; the path is still kept
    so the first save writes there without asking.
    """
    document.path = path
    try:
        data = path.read_bytes()
    except FileNotFoundError:
        document.replace_lines([])
        logger.info("new file %s", path)
        return False
    except OSError as exc:
        raise PersistenceError("open", exc.strerror or str(exc)) from exc
    document.replace_lines(split_lines(data))
    logger.info("loaded %s (%d rows)", path, document.nrows)
    return True


def serialize(document: Document) -> bytes:
    """Join rows with ``\\n``; no newline is added after the last row."""
    return b"\n".join(document.lines())


def inspect_target(path: Path) -> TargetInfo:
    """Resolve symlinks and capture mode/owner of the file about to be replaced."""
    real_path = Path(os.path.realpath(path)) if path.is_symlink() else path
    try:
        st = os.stat(real_path)
    except FileNotFoundError:
        return TargetInfo(real_path, DEFAULT_FILE_MODE, os.getuid(), os.getgid(), existed=False)
    except OSError as exc:
        raise PersistenceError("stat", exc.strerror or str(exc)) from exc
    return TargetInfo(real_path, stat.S_IMODE(st.st_mode), st.st_uid, st.st_gid, existed=True)


@dataclass(frozen=True)
class SaveResult:
    """Outcome of a successful save; ``note`` reports metadata that was not kept."""

    written: int
    note: str | None = None


def _apply_metadata(fd: int, target: TargetInfo) -> str | None:
    """Copy mode and ownership onto ``fd``; return a note if ownership was lost.

    Only the owner or root may give a file away, so a ``PermissionError`` from
    ``fchown`` does not abort the save.
    """
    try:
        os.fchmod(fd, target.mode)
    except OSError as exc:
        raise PersistenceError("chmod", exc.strerror or str(exc)) from exc
    st = os.fstat(fd)
    if (st.st_uid, st.st_gid) == (target.uid, target.gid):
        return None
    try:
        os.fchown(fd, target.uid, target.gid)
    except PermissionError as exc:
        logger.warning("could not keep owner %d:%d of %s: %s", target.uid, target.gid, target.real_path, exc)
        return f"chown error: {exc.strerror or exc}"
    except OSError as exc:
        raise PersistenceError("chown", exc.strerror or str(exc)) from exc
    return None


def save(document: Document) -> SaveResult:
    """Atomically write ``document`` to its path.

    Raises ``PersistenceError`` when no path is set or any step fails.
    """
    if document.path is None:
        raise PersistenceError("write", "no file name")

    target = inspect_target(document.path)
    data = serialize(document)
    directory = target.real_path.parent
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.real_path.name}.", dir=directory)
    except OSError as exc:
        raise PersistenceError("write", exc.strerror or str(exc)) from exc

    try:
        try:
            view = memoryview(data)
            while view:
                written = os.write(fd, view)
                view = view[written:]
            os.fsync(fd)
        except OSError as exc:
            raise PersistenceError("write", exc.strerror or str(exc)) from exc
        note = _apply_metadata(fd, target)
        try:
            os.replace(tmp_name, target.real_path)
        except OSError as exc:
            raise PersistenceError("save", exc.strerror or str(exc)) from exc
    except PersistenceError:
        os.close(fd)
        _discard(tmp_name)
        logger.warning("save to %s failed", document.path, exc_info=True)
        raise
    os.close(fd)

    document.mark_clean()
    logger.info("wrote %d bytes to %s", len(data), target.real_path)
    return SaveResult(len(data), note)


def _discard(tmp_name: str) -> None:
    try:
        os.unlink(tmp_name)
    except FileNotFoundError:
        pass
    except OSError:
        logger.warning("could not remove temporary file %s", tmp_name, exc_info=True)

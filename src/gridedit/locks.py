"""Per-sibling-group mutual exclusion.

Every operation that reads a sibling group and then renames inside it holds
the lock of the group's parent directory for the whole read-shift-write
sequence. Cell operations also hold their tab's lock so that a row rename
cannot happen underneath them. Locks are always taken outermost first (tab
before row), which keeps acquisition order consistent across operations.

A directory's entry lives in the registry only while some thread holds or
waits for its lock, so deleted rows and paths of failed requests do not
accumulate.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator


@dataclass
class _LockEntry:
    lock: threading.Lock = field(default_factory=threading.Lock)
    holders: int = 0


_registry_lock = threading.Lock()
_group_locks: dict[Path, _LockEntry] = {}


def lock_for(path: Path) -> threading.Lock:
    """Return the process-wide lock for the directory at ``path``.

    A lock looked up while nobody holds it stays registered until a
    ``group_lock`` on the same directory releases it.
    """
    key = Path(path).resolve()
    with _registry_lock:
        entry = _group_locks.get(key)
        if entry is None:
            entry = _LockEntry()
            _group_locks[key] = entry
        return entry.lock


def registered_paths() -> set[Path]:
    """Directories whose lock is currently held or awaited."""
    with _registry_lock:
        return {key for key, entry in _group_locks.items() if entry.holders}


def _acquire(key: Path) -> _LockEntry:
    with _registry_lock:
        entry = _group_locks.get(key)
        if entry is None:
            entry = _LockEntry()
            _group_locks[key] = entry
        entry.holders += 1
    entry.lock.acquire()
    return entry


def _release(key: Path, entry: _LockEntry) -> None:
    entry.lock.release()
    with _registry_lock:
        entry.holders -= 1
        if entry.holders == 0 and _group_locks.get(key) is entry:
            del _group_locks[key]


@contextmanager
def group_lock(*paths: Path) -> Iterator[None]:
    """Hold the locks of ``paths`` in the order given.

    Duplicate paths are acquired once.
    """
    held: list[tuple[Path, _LockEntry]] = []
    try:
        for path in paths:
            key = Path(path).resolve()
            if any(key == seen for seen, _ in held):
                continue
            held.append((key, _acquire(key)))
        yield
    finally:
        for key, entry in reversed(held):
            _release(key, entry)

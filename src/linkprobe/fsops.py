"""
Filesystem primitives used by the probe, one call each.

Every wrapper catches OSError and returns an OpResult instead of raising,
so the runner decides per call site whether a failure matters. Nothing
here retries or loops: a read is one read(2), a write is one write(2).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

CREATE_FLAGS = os.O_RDWR | os.O_CREAT | os.O_EXCL | os.O_TRUNC
CREATE_MODE = 0o666


@dataclass
class OpResult:
    """Outcome of a single filesystem call."""
    op: str
    target: str
    ok: bool
    value: Any = None
    error: OSError | None = None

    @property
    def errno(self) -> int | None:
        return self.error.errno if self.error is not None else None

    def describe(self) -> str:
        if self.ok:
            return f"{self.op}({self.target}) -> {self.value!r}"
        return f"{self.op}({self.target}) failed: [errno {self.errno}] {self.error.strerror}"


def _attempt(op: str, target, func: Callable[..., Any], *args) -> OpResult:
    try:
        return OpResult(op, str(target), True, func(*args))
    except OSError as e:
        return OpResult(op, str(target), False, error=e)


def remove(path: Path) -> OpResult:
    return _attempt("unlink", path, os.unlink, path)


def open_read(path: Path) -> OpResult:
    return _attempt("open", path, os.open, path, os.O_RDONLY)


def create_exclusive(path: Path, mode: int = CREATE_MODE) -> OpResult:
    """Open for read/write, failing if the path already exists."""
    return _attempt("open", path, os.open, path, CREATE_FLAGS, mode)


def hard_link(src: Path, dst: Path) -> OpResult:
    return _attempt("link", f"{src} -> {dst}", os.link, src, dst)


def stat_path(path: Path) -> OpResult:
    return _attempt("stat", path, os.stat, path)


def fstat(fd: int) -> OpResult:
    return _attempt("fstat", fd, os.fstat, fd)


def seek_start(fd: int) -> OpResult:
    return _attempt("lseek", fd, os.lseek, fd, 0, os.SEEK_SET)


def read_once(fd: int, size: int) -> OpResult:
    return _attempt("read", fd, os.read, fd, size)


def write_once(fd: int, data: bytes) -> OpResult:
    return _attempt("write", fd, os.write, fd, data)


def close(fd: int) -> OpResult:
    return _attempt("close", fd, os.close, fd)

"""
Probe Runner — the hard-link / lock-stake probe sequence.

Steps, each gated by a toggle and run strictly in this order:

1. Cleanup: unlink the primary path (and the link path when linking).
2. Existence check: if the link path opens for reading, report it and
   skip creation entirely. An existing link is never overwritten.
3. Exclusive create of the primary file.
4. Hard link primary -> link (failure reported, not fatal).
5. Optional stat of the link, write the payload, optional delay.
6. One bounded read through the primary path.
7. Optional second read through the link path.

Filesystem failures never escape: they degrade to a status line or are
discarded on purpose at the call site. run_probe always exits 0.
"""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass, field
from typing import Callable

from . import fsops
from .config import ProbeConfig
from .fsops import OpResult
from .payload import PAYLOAD_BYTES

FAILED_READ = -1


@dataclass
class ReadResult:
    """What a single bounded read observed."""
    path: str
    nbytes: int
    data: bytes = b""
    error: OpResult | None = None

    @property
    def ok(self) -> bool:
        return self.nbytes != FAILED_READ


@dataclass
class ProbeReport:
    lines: list[str] = field(default_factory=list)
    reads: list[ReadResult] = field(default_factory=list)
    link_existed: bool = False
    link_result: OpResult | None = None
    exit_status: int = 0

    def to_json(self) -> dict:
        return {
            "lines": self.lines,
            "reads": [{"path": r.path, "bytes": r.nbytes} for r in self.reads],
            "link_existed": self.link_existed,
            "link_errno": self.link_result.errno if self.link_result else None,
            "exit_status": self.exit_status,
        }


class ProbeRunner:
    def __init__(self, config: ProbeConfig, emit: Callable[[str], None] | None = print,
                 sleep: Callable[[float], None] = time.sleep):
        self.config = config
        self.emit = emit
        self.sleep = sleep
        self.report = ProbeReport()

    # -- output --

    def _say(self, line: str):
        self.report.lines.append(line)
        if self.emit is not None:
            self.emit(line)

    def _trace(self, result: OpResult) -> OpResult:
        if self.config.verbose:
            print(f"  · {result.describe()}", file=sys.stderr)
        return result

    # -- steps --

    def cleanup(self):
        cfg = self.config
        # Missing files are expected here; results are dropped.
        self._trace(fsops.remove(cfg.primary))
        if cfg.create_link:
            self._trace(fsops.remove(cfg.link))

    def link_exists(self) -> bool:
        opened = self._trace(fsops.open_read(self.config.link))
        if not opened.ok:
            return False
        self._trace(fsops.close(opened.value))
        return True

    def create_and_link(self):
        cfg = self.config

        created = None
        if cfg.create_file:
            created = self._trace(fsops.create_exclusive(cfg.primary))

        linked = self._trace(fsops.hard_link(cfg.primary, cfg.link))
        self.report.link_result = linked
        if not linked.ok:
            self._say(f"Linking {cfg.primary_path} to {cfg.link_path} "
                      f"failed with error {linked.errno}!")

        if cfg.probe_metadata:
            self._trace(fsops.stat_path(cfg.link))

        if cfg.create_file:
            # A failed exclusive create leaves nothing to write to.
            if created is not None and created.ok:
                self._trace(fsops.write_once(created.value, PAYLOAD_BYTES))
                self._trace(fsops.close(created.value))
            if cfg.delay_after_write:
                self.sleep(cfg.delay_seconds)

    def read_through(self, path) -> ReadResult:
        cfg = self.config
        opened = self._trace(fsops.open_read(path))
        if not opened.ok:
            result = ReadResult(str(path), FAILED_READ, error=opened)
        else:
            fd = opened.value
            if cfg.probe_metadata:
                self._trace(fsops.fstat(fd))
            self._trace(fsops.seek_start(fd))
            read = self._trace(fsops.read_once(fd, cfg.buffer_size))
            self._trace(fsops.close(fd))
            if read.ok:
                result = ReadResult(str(path), len(read.value), read.value)
            else:
                result = ReadResult(str(path), FAILED_READ, error=read)

        self.report.reads.append(result)
        self._say(f"Read {result.nbytes} bytes of data.")
        return result

    def run(self) -> ProbeReport:
        cfg = self.config

        if cfg.remove_existing:
            self.cleanup()

        if cfg.create_link:
            if self.link_exists():
                self.report.link_existed = True
                self._say(f"{cfg.link_path} already exists!")
            else:
                self.create_and_link()

        self.read_through(cfg.primary)

        if cfg.read_via_link:
            self.read_through(cfg.link)

        return self.report


def run_probe(config: ProbeConfig, emit: Callable[[str], None] | None = print,
              sleep: Callable[[float], None] = time.sleep) -> ProbeReport:
    """Run the probe once. The returned report's exit_status is always 0."""
    return ProbeRunner(config, emit=emit, sleep=sleep).run()

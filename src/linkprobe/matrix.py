"""
Toggle matrix — run the probe under every toggle combination.

Each combination gets a fresh scratch directory and is run `repeat` times
in it, so the rows show both the first-run behaviour and what a stale
link left by the previous run does to the next one.
"""

from __future__ import annotations

import itertools
import tempfile
import time
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, Iterator

from .config import TOGGLES, ProbeConfig
from .runner import run_probe


@dataclass
class MatrixRow:
    toggles: dict[str, bool]
    runs: list[list[str]]

    @property
    def stable(self) -> bool:
        """True if every run printed the same lines."""
        return all(run == self.runs[0] for run in self.runs)

    def label(self) -> str:
        return "".join("1" if self.toggles[name] else "0" for name in TOGGLES)

    def to_json(self) -> dict:
        return {"toggles": self.toggles, "runs": self.runs, "stable": self.stable}


def combinations() -> Iterator[dict[str, bool]]:
    for values in itertools.product((False, True), repeat=len(TOGGLES)):
        yield dict(zip(TOGGLES, values))


def run_matrix(base: ProbeConfig, repeat: int = 2,
               sleep: Callable[[float], None] = time.sleep) -> list[MatrixRow]:
    """Run all 64 combinations; base supplies paths, buffer size and delay."""
    if repeat < 1:
        raise ValueError(f"repeat must be >= 1, got {repeat}")

    rows = []
    for toggles in combinations():
        with tempfile.TemporaryDirectory(prefix="linkprobe-") as scratch:
            cfg = replace(base, workdir=Path(scratch), **toggles)
            runs = [run_probe(cfg, emit=None, sleep=sleep).lines for _ in range(repeat)]
        rows.append(MatrixRow(toggles, runs))
    return rows


def format_matrix(rows: list[MatrixRow]) -> str:
    header = " ".join(name[:6] for name in TOGGLES)
    out = [f"{header}  output"]
    for row in rows:
        flags = " ".join(f"{'x' if row.toggles[n] else '.':^6}" for n in TOGGLES)
        for i, lines in enumerate(row.runs, 1):
            lead = flags if i == 1 else " " * len(flags)
            out.append(f"{lead}  #{i}: {' | '.join(lines)}")
    return "\n".join(out)

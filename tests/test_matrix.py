"""Tests for the toggle matrix."""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
from linkprobe.config import TOGGLES, ProbeConfig
from linkprobe.matrix import combinations, format_matrix, run_matrix
from linkprobe.payload import PAYLOAD_BYTES

READ_FULL = f"Read {len(PAYLOAD_BYTES)} bytes of data."


@pytest.fixture(scope="module")
def rows():
    return run_matrix(ProbeConfig(delay_seconds=0), repeat=2, sleep=lambda s: None)


def find(rows, **toggles):
    for row in rows:
        if all(row.toggles[k] == v for k, v in toggles.items()):
            return row
    raise LookupError(toggles)


class TestMatrix:
    def test_all_combinations(self, rows):
        assert len(list(combinations())) == 2 ** len(TOGGLES)
        assert len(rows) == 64
        assert len({row.label() for row in rows}) == 64
        assert all(len(row.runs) == 2 for row in rows)

    def test_reference_build_is_stable(self, rows):
        row = find(rows, probe_metadata=False, create_file=True, create_link=True,
                   remove_existing=True, delay_after_write=False, read_via_link=False)
        assert row.stable
        assert row.runs[0] == [READ_FULL]

    def test_no_removal_second_run_sees_link(self, rows):
        row = find(rows, probe_metadata=False, create_file=True, create_link=True,
                   remove_existing=False, delay_after_write=False, read_via_link=True)
        assert not row.stable
        assert row.runs[0] == [READ_FULL, READ_FULL]
        assert row.runs[1] == ["link.txt already exists!", READ_FULL, READ_FULL]

    def test_every_combination_reads(self, rows):
        for row in rows:
            for lines in row.runs:
                assert lines[-1].startswith("Read ")

    def test_repeat_validated(self):
        with pytest.raises(ValueError):
            run_matrix(ProbeConfig(), repeat=0)

    def test_format(self, rows):
        text = format_matrix(rows)
        assert text.splitlines()[0].startswith("probe_")
        assert "#2:" in text
        assert text.count("#1:") == 64

    def test_to_json(self, rows):
        data = rows[0].to_json()
        assert set(data) == {"toggles", "runs", "stable"}

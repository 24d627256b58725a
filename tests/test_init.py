"""Tests for linkprobe init."""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest
import yaml
from linkprobe.config import TOGGLES, ProbeConfig, load_config
from linkprobe.init import init_probe_dir


class TestInit:
    def test_creates_config(self, tmp_path):
        actions = init_probe_dir(tmp_path)

        assert (tmp_path / "linkprobe.yaml").exists()
        assert any("linkprobe.yaml" in a for a in actions)

    def test_config_matches_defaults(self, tmp_path):
        init_probe_dir(tmp_path)
        cfg = load_config(tmp_path / "linkprobe.yaml")
        assert cfg.toggles() == ProbeConfig().toggles()
        assert cfg.buffer_size == 4096

    def test_config_lists_every_toggle(self, tmp_path):
        init_probe_dir(tmp_path)
        data = yaml.safe_load((tmp_path / "linkprobe.yaml").read_text())
        assert set(data["toggles"]) == set(TOGGLES)

    def test_idempotent(self, tmp_path):
        init_probe_dir(tmp_path)
        actions2 = init_probe_dir(tmp_path)

        assert any("already exists" in a for a in actions2)

    def test_force_overwrite(self, tmp_path):
        init_probe_dir(tmp_path)
        (tmp_path / "linkprobe.yaml").write_text("old config")

        init_probe_dir(tmp_path, force=True)
        assert "toggles:" in (tmp_path / "linkprobe.yaml").read_text()

    def test_gitignore(self, tmp_path):
        init_probe_dir(tmp_path)
        gitignore = (tmp_path / ".gitignore").read_text()
        assert "file.txt" in gitignore
        assert "link.txt" in gitignore

    def test_gitignore_appends_once(self, tmp_path):
        (tmp_path / ".gitignore").write_text("build/\nlink.txt\n")
        init_probe_dir(tmp_path)
        init_probe_dir(tmp_path)
        lines = (tmp_path / ".gitignore").read_text().splitlines()
        assert lines.count("file.txt") == 1
        assert lines.count("link.txt") == 1

    def test_next_steps(self, tmp_path):
        actions = init_probe_dir(tmp_path)
        assert any("Next steps" in a for a in actions)
        assert any("linkprobe run" in a for a in actions)

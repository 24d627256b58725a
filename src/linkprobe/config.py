"""Configuration management for linkprobe."""

from __future__ import annotations

import math
import os
import sys
import yaml
from dataclasses import dataclass, field, fields, replace
from pathlib import Path


TOGGLES = (
    "probe_metadata",
    "create_file",
    "create_link",
    "remove_existing",
    "delay_after_write",
    "read_via_link",
)

CONFIG_FILENAMES = ("linkprobe.yaml", "linkprobe.yml")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


class ConfigError(ValueError):
    """Raised for unreadable or invalid probe configuration."""


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return _is_int(value) or isinstance(value, float)


@dataclass(frozen=True)
class ProbeConfig:
    # Toggles, defaults as in the reference build
    probe_metadata: bool = False
    create_file: bool = True
    create_link: bool = True
    remove_existing: bool = True
    delay_after_write: bool = False
    read_via_link: bool = False

    primary_path: str = "file.txt"
    link_path: str = "link.txt"
    workdir: Path = field(default_factory=lambda: Path("."))
    buffer_size: int = 4096
    delay_seconds: float = 2.0  # seconds to hold after the write
    verbose: bool = False

    def __post_init__(self):
        for name in TOGGLES + ("verbose",):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"{name} must be a boolean, got {getattr(self, name)!r}")
        if (not _is_int(self.buffer_size) or self.buffer_size <= 0
                or self.buffer_size > sys.maxsize):
            raise ConfigError(f"buffer_size must be a positive integer up to {sys.maxsize}, "
                              f"got {self.buffer_size!r}")
        if (not _is_number(self.delay_seconds) or not math.isfinite(self.delay_seconds)
                or self.delay_seconds < 0):
            raise ConfigError(f"delay_seconds must be a finite number >= 0, got {self.delay_seconds!r}")
        for name in ("primary_path", "link_path"):
            if not isinstance(getattr(self, name), str) or not getattr(self, name):
                raise ConfigError(f"{name} must be a non-empty string, got {getattr(self, name)!r}")
        object.__setattr__(self, "workdir", Path(self.workdir))

    @property
    def primary(self) -> Path:
        return self.workdir / self.primary_path

    @property
    def link(self) -> Path:
        return self.workdir / self.link_path

    def toggles(self) -> dict[str, bool]:
        return {name: getattr(self, name) for name in TOGGLES}

    def with_toggles(self, **toggles) -> "ProbeConfig":
        unknown = set(toggles) - set(TOGGLES)
        if unknown:
            raise ConfigError(f"Unknown toggles: {sorted(unknown)}")
        return replace(self, **toggles)


def parse_bool(value) -> bool:
    """Parse a YAML or env value as a toggle."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"Not a boolean: {value!r}")


def _from_mapping(data: dict) -> dict:
    known = {f.name for f in fields(ProbeConfig)} - set(TOGGLES) - {"verbose"}
    values = {}

    toggles = data.get("toggles") or {}
    if not isinstance(toggles, dict):
        raise ConfigError("'toggles' must be a mapping")
    for name, raw in toggles.items():
        if name not in TOGGLES:
            raise ConfigError(f"Unknown toggle: {name}. Use: {list(TOGGLES)}")
        values[name] = parse_bool(raw)

    for key, raw in data.items():
        if key == "toggles":
            continue
        if key not in known:
            raise ConfigError(f"Unknown config key: {key}")
        # No coercion: 4.9 is not a buffer size and null is not a path
        if key == "buffer_size":
            valid = _is_int(raw)
        elif key == "delay_seconds":
            valid = _is_number(raw)
        else:
            valid = isinstance(raw, str) and raw != ""
        if not valid:
            raise ConfigError(f"Bad value for {key}: {raw!r}")
        values[key] = Path(raw) if key == "workdir" else raw
    return values


def load_config(config_path: str | Path | None = None, **overrides) -> ProbeConfig:
    """Load config from YAML file, env vars, or defaults.

    Keyword overrides (usually from the command line) win over env vars,
    which win over the file. Overrides whose value is None are ignored.
    """
    values: dict = {}

    paths_to_try = []
    if config_path:
        explicit = Path(config_path)
        if not explicit.exists():
            raise ConfigError(f"Config file not found: {explicit}")
        paths_to_try.append(explicit)
    paths_to_try.extend(Path(name) for name in CONFIG_FILENAMES)
    paths_to_try.append(Path.home() / ".linkprobe.yaml")

    for p in paths_to_try:
        if p.exists():
            try:
                with open(p) as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {p}: {e}") from e
            if not isinstance(data, dict):
                raise ConfigError(f"{p} must contain a mapping")
            values.update(_from_mapping(data))
            break

    # Env overrides
    if os.environ.get("LINKPROBE_WORKDIR"):
        values["workdir"] = Path(os.environ["LINKPROBE_WORKDIR"])
    for name in TOGGLES:
        env_value = os.environ.get(f"LINKPROBE_{name.upper()}")
        if env_value is not None:
            values[name] = parse_bool(env_value)

    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ProbeConfig(**values)
    except TypeError as e:
        raise ConfigError(str(e)) from e

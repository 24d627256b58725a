#!/usr/bin/env python3
"""linkprobe CLI — probe hard-link and lock-stake file semantics."""

import argparse
import json
import sys
from pathlib import Path

from . import __version__
from .config import TOGGLES, ConfigError, load_config


def _overrides(args) -> dict:
    keys = TOGGLES + ("primary_path", "link_path", "workdir", "buffer_size", "delay_seconds")
    overrides = {k: getattr(args, k, None) for k in keys}
    if args.verbose:
        overrides["verbose"] = True
    return overrides


def cmd_run(args):
    """Run the probe sequence once."""
    from .runner import run_probe

    cfg = load_config(args.config, **_overrides(args))
    if args.json:
        report = run_probe(cfg, emit=None)
        print(json.dumps(report.to_json(), indent=2))
    else:
        report = run_probe(cfg)
    return report.exit_status


def cmd_matrix(args):
    """Run every toggle combination in scratch directories."""
    from .matrix import run_matrix, format_matrix

    if args.repeat < 1:
        print("❌ --repeat must be at least 1", file=sys.stderr)
        return 2

    cfg = load_config(args.config, **_overrides(args))
    rows = run_matrix(cfg, repeat=args.repeat)

    if args.json:
        print(json.dumps([r.to_json() for r in rows], indent=2))
    else:
        print(format_matrix(rows))
        unstable = [r for r in rows if not r.stable]
        print(f"\n{len(rows)} combinations, {len(unstable)} changed output between runs")
    return 0


def cmd_init(args):
    """Write a starter linkprobe.yaml."""
    from .init import init_probe_dir

    for action in init_probe_dir(Path(args.path) if args.path else None, force=args.force):
        print(action)
    return 0


def cmd_payload(args):
    """Print the lock-stake payload."""
    from .payload import LOCK_STAKE_PAYLOAD, PAYLOAD_BYTES

    sys.stdout.write(LOCK_STAKE_PAYLOAD)
    print(f"--- {len(PAYLOAD_BYTES)} bytes ---")
    return 0


def _add_probe_options(p):
    for name in TOGGLES:
        p.add_argument(f"--{name.replace('_', '-')}", dest=name,
                       action=argparse.BooleanOptionalAction, default=None,
                       help=f"Override the {name} toggle")
    p.add_argument("--primary", dest="primary_path", help="Primary file path (default: file.txt)")
    p.add_argument("--link", dest="link_path", help="Link path (default: link.txt)")
    p.add_argument("--workdir", "-C", type=Path, help="Directory the paths are relative to")
    p.add_argument("--buffer-size", dest="buffer_size", type=int, help="Bytes per read (default: 4096)")
    p.add_argument("--delay", dest="delay_seconds", type=float, help="Seconds to sleep after write")
    p.add_argument("--json", action="store_true", help="Output as JSON")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linkprobe",
        description="🔗 linkprobe — hard-link and lock-stake filesystem probe",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", "-c", help="Path to linkprobe.yaml config file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Trace every filesystem call to stderr")

    sub = parser.add_subparsers(dest="command", help="Available commands")

    # run
    p_run = sub.add_parser("run", help="Run the probe sequence once")
    _add_probe_options(p_run)
    p_run.set_defaults(func=cmd_run)

    # matrix
    p_matrix = sub.add_parser("matrix", help="Run all 64 toggle combinations")
    _add_probe_options(p_matrix)
    p_matrix.add_argument("--repeat", "-n", type=int, default=2, help="Runs per combination (default: 2)")
    p_matrix.set_defaults(func=cmd_matrix)

    # init
    p_init = sub.add_parser("init", help="Write a starter linkprobe.yaml")
    p_init.add_argument("path", nargs="?", help="Probe directory (default: current dir)")
    p_init.add_argument("--force", action="store_true", help="Overwrite an existing linkprobe.yaml")
    p_init.set_defaults(func=cmd_init)

    # payload
    p_payload = sub.add_parser("payload", help="Show the lock-stake payload")
    p_payload.set_defaults(func=cmd_payload)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        return args.func(args)
    except ConfigError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())

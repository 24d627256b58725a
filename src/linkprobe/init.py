"""
linkprobe init — write a starter config into a probe directory.

Creates linkprobe.yaml with the reference-build defaults and keeps the
probe's scratch files out of git.
"""

from __future__ import annotations

from pathlib import Path


DEFAULT_CONFIG = """# linkprobe configuration

# Files the probe creates, relative to workdir
primary_path: file.txt
link_path: link.txt
workdir: .

# Bytes requested by each single read call
buffer_size: 4096

# Pause after the payload write when delay_after_write is on
delay_seconds: 2.0

toggles:
  probe_metadata: false     # stat the link before writing, fstat before reads
  create_file: true         # exclusive-create the primary and write the payload
  create_link: true         # hard link primary -> link
  remove_existing: true     # unlink stale files first (makes runs repeatable)
  delay_after_write: false  # sleep delay_seconds after the write
  read_via_link: false      # read a second time through the link
"""


def init_probe_dir(path: Path | None = None, force: bool = False) -> list[str]:
    """
    Initialize a probe directory.

    Creates linkprobe.yaml and adds the probe files to .gitignore.
    Returns list of actions taken.
    """
    if path is None:
        path = Path.cwd()
    else:
        path = Path(path)
    path.mkdir(parents=True, exist_ok=True)

    actions = []

    config_path = path / "linkprobe.yaml"
    if config_path.exists() and not force:
        actions.append("⏭️  linkprobe.yaml already exists (use --force to overwrite)")
    else:
        config_path.write_text(DEFAULT_CONFIG)
        actions.append("✅ Created linkprobe.yaml")

    gitignore = path / ".gitignore"
    ignore_entries = ["file.txt", "link.txt"]
    if gitignore.exists():
        existing = gitignore.read_text().splitlines()
        new_entries = [e for e in ignore_entries if e not in existing]
        if new_entries:
            with open(gitignore, "a") as f:
                f.write("\n# linkprobe\n")
                for e in new_entries:
                    f.write(f"{e}\n")
            actions.append("✅ Updated .gitignore")
    else:
        gitignore.write_text("# linkprobe\n" + "\n".join(ignore_entries) + "\n")
        actions.append("✅ Created .gitignore")

    actions.append("")
    actions.append("🔗 Ready! Next steps:")
    actions.append("   1. Edit linkprobe.yaml toggles")
    actions.append("   2. Run: linkprobe run")
    actions.append("   Then: linkprobe matrix --delay 0")

    return actions

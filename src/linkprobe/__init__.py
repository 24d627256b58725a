"""linkprobe — probe hard-link and lock-stake file semantics."""

__version__ = "0.1.0"

"""Directory-gated launcher for Claude Code with multi-account support."""

__version__ = "0.1.0"

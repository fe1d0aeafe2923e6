"""Directory allow-list checks."""

from claude_launcher.security.directory import DirectoryGate, is_path_equal, is_subdirectory

__all__ = ["DirectoryGate", "is_path_equal", "is_subdirectory"]

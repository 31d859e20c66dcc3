"""Common utility functions for the convsync package."""

from convsync.utils.file import backup_file, ensure_directory_exists, write_atomic

__all__ = [
    "backup_file",
    "ensure_directory_exists",
    "write_atomic",
]

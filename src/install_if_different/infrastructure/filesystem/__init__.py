"""Filesystem backends the checker reads targets through."""

from src.install_if_different.infrastructure.filesystem.local_fs import LocalFileSystem
from src.install_if_different.infrastructure.filesystem.memory_fs import MemoryFileSystem

__all__ = ["LocalFileSystem", "MemoryFileSystem"]

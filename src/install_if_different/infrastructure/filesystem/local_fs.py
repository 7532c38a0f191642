from pathlib import Path
from typing import BinaryIO

from src.install_if_different.application.ports import FileSystemPort


class LocalFileSystem(FileSystemPort):
    """Reads targets from the host filesystem, optionally confined below a root directory."""

    def __init__(self, root: str | None = None) -> None:
        self.root = Path(root).resolve() if root else None

    def _resolve(self, path: str) -> Path:
        if self.root is None:
            return Path(path)
        resolved = (self.root / path.lstrip("/")).resolve()
        if resolved != self.root and self.root not in resolved.parents:
            raise PermissionError(f"Target outside of root {self.root}: {path}")
        return resolved

    def open_binary(self, path: str) -> BinaryIO:
        return self._resolve(path).open("rb")

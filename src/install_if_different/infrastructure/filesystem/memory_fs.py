import io
from typing import BinaryIO

from src.install_if_different.application.ports import FileSystemPort


class MemoryFileSystem(FileSystemPort):
    def __init__(self, files: dict[str, bytes] | None = None) -> None:
        self._files: dict[str, bytes] = dict(files or {})

    def write_file(self, path: str, content: bytes) -> None:
        self._files[path] = bytes(content)

    def remove(self, path: str) -> None:
        self._files.pop(path, None)

    def open_binary(self, path: str) -> BinaryIO:
        try:
            return io.BytesIO(self._files[path])
        except KeyError:
            raise FileNotFoundError(f"No such file: {path}") from None

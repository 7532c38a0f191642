from typing import BinaryIO, Protocol, runtime_checkable

from src.install_if_different.application.contracts import DecisionReportRecord
from src.install_if_different.domain.entities import UpdatePackage


@runtime_checkable
class FileSystemPort(Protocol):
    def open_binary(self, path: str) -> BinaryIO: ...
    """Open ``path`` for reading bytes; raise ``OSError`` when it cannot be read."""


@runtime_checkable
class MetadataSourcePort(Protocol):
    def load(self) -> UpdatePackage: ...
    """Load and decode the update package metadata."""


@runtime_checkable
class DecisionReportSinkPort(Protocol):
    def write_report(self, report: DecisionReportRecord) -> None: ...
    """Persist the per-object decisions of one run."""

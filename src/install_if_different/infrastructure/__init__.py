"""Infrastructure adapters for install-if-different."""

from src.install_if_different.infrastructure.filesystem import LocalFileSystem, MemoryFileSystem
from src.install_if_different.infrastructure.sinks.report_sink import JsonReportSink
from src.install_if_different.infrastructure.sources.json_metadata_source import JsonMetadataSource

__all__ = ["JsonMetadataSource", "JsonReportSink", "LocalFileSystem", "MemoryFileSystem"]

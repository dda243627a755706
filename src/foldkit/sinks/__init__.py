"""Collectors that own an external resource."""

from foldkit.sinks.file_sink import FileSinkCollector

__all__ = ["FileSinkCollector"]

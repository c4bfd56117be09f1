"""Service layer exports."""

from .builder import ExportBuilder
from .export_store import ExportStore
from .manifest import ManifestFile
from .projection import CC44, LambertConformalConic, project
from .record_source import CsvRecordSource, InMemoryRecordSource, RecordSource
from .staleness import StalenessTracker
from .validator import RecordValidator

__all__ = [
    "ExportBuilder",
    "ExportStore",
    "ManifestFile",
    "CC44",
    "LambertConformalConic",
    "project",
    "CsvRecordSource",
    "InMemoryRecordSource",
    "RecordSource",
    "StalenessTracker",
    "RecordValidator",
]

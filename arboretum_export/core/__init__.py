"""Core domain primitives for the arboretum export."""

from .models import (
    ExportManifestState,
    ExportOutcome,
    ExportRecord,
    ExportResult,
    GeoPoint,
    StalenessStatus,
    TreeRecord,
)
from .exceptions import (
    DirectoryCreateError,
    ExportInProgressError,
    ManifestWriteError,
    NotWritableError,
    ProcessingError,
    ProjectionError,
    RecordSourceError,
    StoreError,
    WriteError,
)

__all__ = [
    "ExportManifestState",
    "ExportOutcome",
    "ExportRecord",
    "ExportResult",
    "GeoPoint",
    "StalenessStatus",
    "TreeRecord",
    "DirectoryCreateError",
    "ExportInProgressError",
    "ManifestWriteError",
    "NotWritableError",
    "ProcessingError",
    "ProjectionError",
    "RecordSourceError",
    "StoreError",
    "WriteError",
]

"""Adapters exposing host tree posts as :class:`TreeRecord` objects."""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable, Protocol, Sequence

from ..core import RecordSourceError, TreeRecord
from ..utils import detect_encoding

logger = logging.getLogger(__name__)

TREE_POST_TYPE = "arbre"
PUBLISHED_STATUS = "publish"


class RecordSource(Protocol):
    """Read-only view of the host's published tree posts."""

    def fetch(self) -> list[TreeRecord]:
        ...

    def modified_since(self, moment: datetime) -> list[TreeRecord]:
        ...


def modified_after(records: Iterable[TreeRecord], moment: datetime) -> list[TreeRecord]:
    """Records whose modification time is strictly after ``moment``."""

    return [
        record
        for record in records
        if record.last_modified is not None and record.last_modified > moment
    ]


@dataclass(slots=True)
class InMemoryRecordSource:
    """Record source backed by a list, mainly for embedding and tests."""

    records: list[TreeRecord] = field(default_factory=list)

    def fetch(self) -> list[TreeRecord]:
        return list(self.records)

    def modified_since(self, moment: datetime) -> list[TreeRecord]:
        return modified_after(self.records, moment)


class CsvRecordSource:
    """Load tree posts from a tabular export of the host content store."""

    REQUIRED_COLUMNS: Sequence[str] = (
        "ID",
        "post_title",
        "post_type",
        "post_status",
        "post_modified_gmt",
        "permalink",
        "id_arbre",
        "easting",
        "northing",
    )

    def __init__(self, path: Path | str, *, encoding: str | None = None):
        self.path = Path(path)
        self.encoding = encoding or "utf-8-sig"

    def fetch(self) -> list[TreeRecord]:
        if not self.path.exists():
            raise RecordSourceError(f"Tree export not found: {self.path}")

        encoding = self.encoding
        if encoding == "auto":
            encoding = detect_encoding(self.path)

        with self.path.open("r", encoding=encoding, errors="replace", newline="") as handle:
            reader = csv.DictReader(handle)
            self._validate_headers(reader.fieldnames or [])
            records = [
                TreeRecord.from_row(row)
                for row in reader
                if row.get("post_type") == TREE_POST_TYPE and row.get("post_status") == PUBLISHED_STATUS
            ]

        logger.debug("Loaded %s published trees from %s", len(records), self.path)
        return records

    def modified_since(self, moment: datetime) -> list[TreeRecord]:
        return modified_after(self.fetch(), moment)

    def _validate_headers(self, headers: Sequence[str]) -> None:
        missing = [column for column in self.REQUIRED_COLUMNS if column not in headers]
        if missing:
            raise RecordSourceError(
                "Tree export is missing required columns",
                details={"path": str(self.path), "missing": missing},
            )

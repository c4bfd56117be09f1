"""Build the map dataset from host tree records."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from ..core import ExportRecord, ExportResult, TreeRecord
from ..utils.urls import relative_url
from .projection import CC44, LambertConformalConic, project
from .validator import RecordValidator

logger = logging.getLogger(__name__)


def format_error(name: str, problems: Sequence[str]) -> str:
    return f'- "{name}" : ' + ", ".join(problems)


@dataclass(slots=True)
class ExportBuilder:
    """Validate, reproject and serialize tree records."""

    base_url: str | None = None
    validator: RecordValidator = field(default_factory=RecordValidator)
    projection: LambertConformalConic = CC44

    def build(self, records: Iterable[TreeRecord]) -> tuple[list[ExportRecord], ExportResult]:
        """Partition ``records`` into exportable markers and error lines.

        Source order is preserved. A record with any problem is skipped and
        reported; it never aborts the run.
        """

        exported: list[ExportRecord] = []
        errors: list[str] = []

        for record in records:
            problems = self.validator.validate(record)
            if problems:
                line = format_error(record.name, problems)
                logger.warning("Skipping tree %s: %s", record.id, ", ".join(problems))
                errors.append(line)
                continue

            point = project(record.easting, record.northing, projection=self.projection)
            exported.append(
                ExportRecord(
                    id=record.id,
                    label=record.label,  # type: ignore[arg-type]
                    name=record.name,
                    lat=point.lat,
                    lng=point.lng,
                    url=relative_url(record.detail_url, self.base_url),
                )
            )

        result = ExportResult(valid_count=len(exported), error_count=len(errors), errors=errors)
        return exported, result

    @staticmethod
    def serialize(records: Iterable[ExportRecord]) -> bytes:
        """Return the UTF-8 JSON document for ``records``.

        Output is byte-stable for identical input: fixed key order, 4-space
        indentation, unescaped non-ASCII characters and slashes.
        """

        payload = [record.as_dict() for record in records]
        text = json.dumps(payload, indent=4, ensure_ascii=False)
        return (text + "\n").encode("utf-8")

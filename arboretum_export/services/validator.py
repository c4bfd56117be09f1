"""Required-field checks for tree records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from ..core import TreeRecord
from ..core.models import is_missing

MISSING_LABEL = "numéro manquant"
MISSING_EASTING = "coordonnée est manquante (easting)"
MISSING_NORTHING = "coordonnée nord manquante (northing)"


@dataclass(slots=True)
class RecordValidator:
    """Report every missing required field of a :class:`TreeRecord`."""

    checks: Sequence[tuple[Callable[[TreeRecord], object], str]] = (
        (lambda record: record.label, MISSING_LABEL),
        (lambda record: record.easting, MISSING_EASTING),
        (lambda record: record.northing, MISSING_NORTHING),
    )

    def validate(self, record: TreeRecord) -> list[str]:
        return [message for getter, message in self.checks if is_missing(getter(record))]

"""Domain models used throughout the arboretum export."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping, Sequence

from .exceptions import RecordSourceError

Coordinate = str | int | float | None


def is_missing(value: object) -> bool:
    """Return ``True`` for ``None`` and blank strings.

    Numeric zero is a present value: a coordinate of ``0`` is not missing.
    """

    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def parse_timestamp(value: object) -> datetime | None:
    """Parse a host timestamp into an aware UTC datetime."""

    if isinstance(value, datetime):
        moment = value
    elif is_missing(value):
        return None
    else:
        try:
            moment = datetime.fromisoformat(str(value).strip())
        except ValueError:
            return None
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


@dataclass(slots=True)
class TreeRecord:
    """A published tree post as exposed by the host content store."""

    id: int
    label: str | int | None
    name: str
    easting: Coordinate
    northing: Coordinate
    detail_url: str | None = None
    last_modified: datetime | None = None

    @classmethod
    def from_row(cls, row: Mapping[str, object]) -> "TreeRecord":
        def optional_text(value: object) -> str | None:
            if is_missing(value):
                return None
            return str(value).strip()

        raw_id = row.get("ID")
        try:
            identifier = int(str(raw_id).strip())
        except (TypeError, ValueError) as exc:
            raise RecordSourceError(
                "Tree export row has an invalid ID",
                details={"id": raw_id, "title": row.get("post_title")},
            ) from exc

        return cls(
            id=identifier,
            label=optional_text(row.get("id_arbre")),
            name=str(row.get("post_title") or "").strip(),
            easting=optional_text(row.get("easting")),
            northing=optional_text(row.get("northing")),
            detail_url=optional_text(row.get("permalink")),
            last_modified=parse_timestamp(row.get("post_modified_gmt")),
        )


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """WGS84 latitude/longitude in decimal degrees."""

    lat: float
    lng: float


@dataclass(slots=True)
class ExportRecord:
    """One marker of the published dataset."""

    id: int
    label: str | int
    name: str
    lat: float
    lng: float
    url: str

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "numero": self.label,
            "nom": self.name,
            "lat": self.lat,
            "lng": self.lng,
            "url": self.url,
        }


@dataclass(slots=True)
class ExportResult:
    """Counts and diagnostics for a single export run."""

    valid_count: int = 0
    error_count: int = 0
    errors: list[str] = field(default_factory=list)

    def as_dict(self) -> dict:
        return {
            "valid_count": self.valid_count,
            "error_count": self.error_count,
            "errors": list(self.errors),
        }


@dataclass(frozen=True, slots=True)
class ExportManifestState:
    """Persisted marker of the last successful export."""

    last_generation: datetime | None = None

    def as_dict(self) -> dict:
        return {
            "last_generation": self.last_generation.isoformat() if self.last_generation else None,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, object]) -> "ExportManifestState":
        return cls(last_generation=parse_timestamp(payload.get("last_generation")))


@dataclass(slots=True)
class StalenessStatus:
    """Whether the published dataset still reflects the host store."""

    up_to_date: bool
    modified_since: Sequence[TreeRecord]
    last_generation: datetime | None

    def as_dict(self) -> dict:
        return {
            "up_to_date": self.up_to_date,
            "last_generation": self.last_generation.isoformat() if self.last_generation else None,
            "modified": [
                {
                    "id": record.id,
                    "nom": record.name,
                    "last_modified": record.last_modified.isoformat() if record.last_modified else None,
                }
                for record in self.modified_since
            ],
        }


@dataclass(slots=True)
class ExportOutcome:
    """Information returned to the operator after a generation request."""

    success: bool
    message: str
    result: ExportResult | None = None
    generated_at: datetime | None = None
    output_path: Path | None = None

    def as_dict(self) -> dict:
        payload: dict[str, object] = {"success": self.success, "message": self.message}
        if self.result is not None:
            payload.update(self.result.as_dict())
        if self.generated_at is not None:
            payload["generated_at"] = self.generated_at.isoformat()
        return payload

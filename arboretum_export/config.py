"""Runtime configuration for the arboretum export."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class StoragePaths:
    """Filesystem locations of the published dataset and its manifest."""

    uploads: Path
    export_dir_name: str = "carte-data"
    filename: str = "arbres.json"

    @property
    def export_dir(self) -> Path:
        return self.uploads / self.export_dir_name

    @property
    def export_file(self) -> Path:
        return self.export_dir / self.filename

    # Internal state lives beside the public export directory, never inside it.
    @property
    def manifest_file(self) -> Path:
        return self.uploads / f".{self.export_dir_name}.manifest.json"

    @property
    def lock_file(self) -> Path:
        return self.uploads / f".{self.export_dir_name}.lock"


@dataclass(frozen=True)
class SiteConfig:
    """Host site values used while building the dataset."""

    base_url: str | None = None
    source_csv: Path | None = None
    source_encoding: str = "utf-8-sig"


STORAGE_PATHS = StoragePaths(
    uploads=Path(os.environ.get("ARBORETUM_EXPORT_UPLOADS", "uploads")),
)
SITE_CONFIG = SiteConfig(
    base_url=os.environ.get("ARBORETUM_EXPORT_BASE_URL") or None,
    source_csv=(
        Path(os.environ["ARBORETUM_EXPORT_SOURCE_CSV"])
        if os.environ.get("ARBORETUM_EXPORT_SOURCE_CSV")
        else None
    ),
    source_encoding=os.environ.get("ARBORETUM_EXPORT_SOURCE_ENCODING", SiteConfig.source_encoding),
)

"""Export pipeline orchestrator."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from filelock import FileLock, Timeout

from ..config import SITE_CONFIG, STORAGE_PATHS, SiteConfig, StoragePaths
from ..core import (
    DirectoryCreateError,
    ExportInProgressError,
    ExportOutcome,
    StalenessStatus,
    StoreError,
)
from ..services import (
    CsvRecordSource,
    ExportBuilder,
    ExportStore,
    ManifestFile,
    RecordSource,
    StalenessTracker,
)
from ..utils import ensure_directory

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "✅ Fichier JSON généré avec succès."


@dataclass(slots=True)
class ExportPipeline:
    """Run the "generate now" action and report staleness."""

    source: RecordSource
    builder: ExportBuilder
    store: ExportStore
    manifest: ManifestFile
    lock_path: Path

    def run(self, *, now: datetime | None = None) -> ExportOutcome:
        """Regenerate the dataset from the current host records.

        Store failures are returned as an unsuccessful outcome. A failure
        before the dataset is written leaves the previous dataset and
        manifest untouched; a manifest failure after the write keeps the
        previous generation time. Only one
        run may hold the generation lock at a time.
        """

        try:
            ensure_directory(self.lock_path.parent)
        except OSError as exc:
            error = DirectoryCreateError(self.lock_path.parent, reason=str(exc))
            return ExportOutcome(success=False, message=str(error))

        lock = FileLock(str(self.lock_path), timeout=0)
        try:
            with lock:
                return self._run_locked(now)
        except Timeout as exc:
            raise ExportInProgressError(
                "Une génération est déjà en cours.",
                details={"lock": str(self.lock_path)},
            ) from exc

    def _run_locked(self, now: datetime | None) -> ExportOutcome:
        started = now or datetime.now(timezone.utc)
        logger.info("Starting export to %s", self.store.target)

        state = self.manifest.load()
        records = self.source.fetch()
        exported, result = self.builder.build(records)
        payload = self.builder.serialize(exported)

        try:
            new_state = self.store.save(payload, state, started)
            self.manifest.save(new_state)
        except StoreError as exc:
            return ExportOutcome(success=False, message=str(exc), result=result)

        logger.info(
            "Export finished: %s valid, %s ignored", result.valid_count, result.error_count
        )
        return ExportOutcome(
            success=True,
            message=SUCCESS_MESSAGE,
            result=result,
            generated_at=new_state.last_generation,
            output_path=self.store.target,
        )

    def status(self) -> StalenessStatus:
        return StalenessTracker(self.source).check_status(self.manifest.load())

    @classmethod
    def default(
        cls,
        *,
        paths: StoragePaths = STORAGE_PATHS,
        site: SiteConfig = SITE_CONFIG,
        source: RecordSource | None = None,
    ) -> "ExportPipeline":
        if source is None:
            if site.source_csv is None:
                raise ValueError("ARBORETUM_EXPORT_SOURCE_CSV is not configured")
            source = CsvRecordSource(site.source_csv, encoding=site.source_encoding)
        return cls(
            source=source,
            builder=ExportBuilder(base_url=site.base_url),
            store=ExportStore(directory=paths.export_dir, filename=paths.filename),
            manifest=ManifestFile(paths.manifest_file),
            lock_path=paths.lock_file,
        )

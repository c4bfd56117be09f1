from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from filelock import FileLock

from arboretum_export.config import SiteConfig, StoragePaths
from arboretum_export.core import ExportInProgressError, ProjectionError, TreeRecord
from arboretum_export.pipelines import ExportPipeline
from arboretum_export.services import InMemoryRecordSource
from arboretum_export.services import manifest as manifest_module

FIRST_RUN = datetime(2025, 4, 2, 10, 0, tzinfo=timezone.utc)


def make_record(record_id: int, **overrides) -> TreeRecord:
    values = dict(
        id=record_id,
        label=str(record_id),
        name=f"Arbre {record_id}",
        easting="1374567.12",
        northing="3170123.45",
        detail_url=f"https://arboretum.fr/arbre/{record_id}/",
        last_modified=FIRST_RUN - timedelta(days=3),
    )
    values.update(overrides)
    return TreeRecord(**values)


@pytest.fixture()
def paths(tmp_path: Path) -> StoragePaths:
    return StoragePaths(uploads=tmp_path / "uploads")


@pytest.fixture()
def source() -> InMemoryRecordSource:
    return InMemoryRecordSource(
        [
            make_record(1),
            make_record(2, easting=None),
            make_record(3, label="", northing=""),
        ]
    )


def build_pipeline(paths: StoragePaths, source: InMemoryRecordSource) -> ExportPipeline:
    return ExportPipeline.default(
        paths=paths,
        site=SiteConfig(base_url="https://arboretum.fr"),
        source=source,
    )


def test_run_writes_dataset_and_reports_errors(paths, source):
    outcome = build_pipeline(paths, source).run(now=FIRST_RUN)

    assert outcome.success is True
    assert outcome.result.valid_count == 1
    assert outcome.result.error_count == 2
    assert outcome.result.errors[1] == '- "Arbre 3" : numéro manquant, coordonnée nord manquante (northing)'
    assert outcome.generated_at == FIRST_RUN
    assert paths.export_file.exists()
    assert '"url": "/arbre/1/"' in paths.export_file.read_text(encoding="utf-8")


def test_repeated_runs_produce_identical_files(paths, source):
    pipeline = build_pipeline(paths, source)

    pipeline.run(now=FIRST_RUN)
    first = paths.export_file.read_bytes()
    pipeline.run(now=FIRST_RUN + timedelta(hours=1))

    assert paths.export_file.read_bytes() == first


def test_status_follows_generation_and_modifications(paths, source):
    pipeline = build_pipeline(paths, source)

    assert pipeline.status().last_generation is None

    pipeline.run(now=FIRST_RUN)
    status = pipeline.status()
    assert status.up_to_date is True
    assert status.modified_since == []
    assert status.last_generation == FIRST_RUN

    source.records[0].last_modified = FIRST_RUN + timedelta(minutes=5)
    status = pipeline.status()
    assert status.up_to_date is False
    assert [record.id for record in status.modified_since] == [1]


def test_store_failure_keeps_manifest_and_reports_message(paths, source):
    paths.uploads.mkdir(parents=True)
    paths.export_dir.write_text("blocking file")
    pipeline = build_pipeline(paths, source)

    outcome = pipeline.run(now=FIRST_RUN)

    assert outcome.success is False
    assert "Impossible de créer le dossier" in outcome.message
    assert pipeline.status().last_generation is None


def test_concurrent_run_is_rejected(paths, source):
    paths.uploads.mkdir(parents=True)
    pipeline = build_pipeline(paths, source)

    with FileLock(str(paths.lock_file)):
        with pytest.raises(ExportInProgressError):
            pipeline.run(now=FIRST_RUN)

    assert not paths.export_file.exists()


def test_default_requires_a_source(paths):
    with pytest.raises(ValueError):
        ExportPipeline.default(paths=paths, site=SiteConfig())


def test_manifest_failure_is_reported_without_moving_generation_time(paths, source, monkeypatch):
    pipeline = build_pipeline(paths, source)
    pipeline.run(now=FIRST_RUN)

    def failing_write(path, data):
        raise OSError("disk full")

    monkeypatch.setattr(manifest_module, "atomic_write_bytes", failing_write)

    outcome = pipeline.run(now=FIRST_RUN + timedelta(hours=1))

    assert outcome.success is False
    assert "Impossible d’enregistrer la date de génération" in outcome.message
    assert outcome.result.valid_count == 1
    assert pipeline.status().last_generation == FIRST_RUN


def test_non_numeric_coordinates_abort_run_without_touching_files(paths, source):
    pipeline = build_pipeline(paths, source)
    pipeline.run(now=FIRST_RUN)
    dataset = paths.export_file.read_bytes()
    manifest = paths.manifest_file.read_bytes()

    source.records.append(make_record(4, easting="12,5"))
    with pytest.raises(ProjectionError):
        pipeline.run(now=FIRST_RUN + timedelta(hours=1))

    assert paths.export_file.read_bytes() == dataset
    assert paths.manifest_file.read_bytes() == manifest

    source.records.pop()
    outcome = pipeline.run(now=FIRST_RUN + timedelta(hours=2))
    assert outcome.success is True
    assert pipeline.status().last_generation == FIRST_RUN + timedelta(hours=2)


def test_manifest_is_kept_out_of_the_public_directory(paths, source):
    build_pipeline(paths, source).run(now=FIRST_RUN)

    assert paths.manifest_file.exists()
    assert paths.manifest_file.parent == paths.uploads
    assert [path.name for path in paths.export_dir.iterdir()] == ["arbres.json"]

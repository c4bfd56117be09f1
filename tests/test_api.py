from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest
from filelock import FileLock

from arboretum_export import create_app
from arboretum_export.config import SiteConfig, StoragePaths
from arboretum_export.core import TreeRecord
from arboretum_export.pipelines import ExportPipeline
from arboretum_export.services import InMemoryRecordSource


@pytest.fixture()
def paths(tmp_path: Path) -> StoragePaths:
    return StoragePaths(uploads=tmp_path / "uploads")


@pytest.fixture()
def client(paths):
    source = InMemoryRecordSource(
        [
            TreeRecord(
                id=5,
                label="5",
                name="Tilleul",
                easting="1374567.12",
                northing="3170123.45",
                detail_url="https://arboretum.fr/arbre/tilleul/",
                last_modified=datetime(2025, 1, 1, tzinfo=timezone.utc),
            ),
            TreeRecord(id=6, label=None, name="Saule", easting="1", northing="2"),
        ]
    )
    pipeline = ExportPipeline.default(
        paths=paths, site=SiteConfig(base_url="https://arboretum.fr"), source=source
    )
    app = create_app(pipeline)
    app.config["TESTING"] = True
    return app.test_client()


def test_health(client):
    assert client.get("/health").get_json() == {"status": "healthy"}


def test_generate_export(client, paths):
    response = client.post("/api/exports")

    assert response.status_code == 200
    payload = response.get_json()
    assert payload["success"] is True
    assert payload["valid_count"] == 1
    assert payload["errors"] == ['- "Saule" : numéro manquant']
    assert "generated_at" in payload
    assert paths.export_file.exists()


def test_status_before_and_after_generation(client):
    before = client.get("/api/exports/status").get_json()
    assert before == {"up_to_date": False, "last_generation": None, "modified": []}

    client.post("/api/exports")
    after = client.get("/api/exports/status").get_json()
    assert after["up_to_date"] is True
    assert after["last_generation"] is not None


def test_store_failure_returns_error(client, paths):
    paths.uploads.mkdir(parents=True)
    paths.export_dir.write_text("blocking file")

    response = client.post("/api/exports")

    assert response.status_code == 500
    assert response.get_json()["success"] is False


def test_concurrent_generation_conflicts(client, paths):
    paths.uploads.mkdir(parents=True)

    with FileLock(str(paths.lock_file)):
        response = client.post("/api/exports")

    assert response.status_code == 409


def test_unreadable_source_returns_json_error(paths, tmp_path):
    pipeline = ExportPipeline.default(
        paths=paths,
        site=SiteConfig(source_csv=tmp_path / "absent.csv"),
    )
    app = create_app(pipeline)
    app.config["TESTING"] = True
    client = app.test_client()

    response = client.post("/api/exports")

    assert response.status_code == 500
    payload = response.get_json()
    assert payload["success"] is False
    assert "Tree export not found" in payload["message"]

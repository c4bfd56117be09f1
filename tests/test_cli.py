from __future__ import annotations

import csv
import io
import json
from pathlib import Path

from arboretum_export.cli import main

COLUMNS = [
    "ID",
    "post_title",
    "post_type",
    "post_status",
    "post_modified_gmt",
    "permalink",
    "id_arbre",
    "easting",
    "northing",
]


def write_export(path: Path) -> Path:
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(COLUMNS)
        writer.writerow(
            ["1", "Cèdre", "arbre", "publish", "2020-01-01 00:00:00",
             "https://arboretum.fr/arbre/cedre/", "21", "1374567.12", "3170123.45"]
        )
        writer.writerow(
            ["2", "Frêne", "arbre", "publish", "2020-01-01 00:00:00",
             "https://arboretum.fr/arbre/frene/", "22", "", "3170123.45"]
        )
    return path


def run_cli(*args: str) -> tuple[int, str]:
    out = io.StringIO()
    code = main(list(args), out=out)
    return code, out.getvalue()


def test_generate_then_status(tmp_path: Path):
    source = write_export(tmp_path / "arbres.csv")
    uploads = tmp_path / "uploads"
    common = ["--source", str(source), "--uploads", str(uploads), "--base-url", "https://arboretum.fr"]

    code, output = run_cli(*common, "status")
    assert code == 0
    assert "Aucun fichier JSON" in output

    code, output = run_cli(*common, "generate")
    assert code == 0
    assert "Arbres valides : 1" in output
    assert '- "Frêne" : coordonnée est manquante (easting)' in output

    dataset = json.loads((uploads / "carte-data" / "arbres.json").read_text(encoding="utf-8"))
    assert dataset[0]["numero"] == "21"
    assert dataset[0]["url"] == "/arbre/cedre/"

    code, output = run_cli(*common, "status")
    assert code == 0
    assert "à jour" in output


def test_generate_reports_store_failure(tmp_path: Path):
    source = write_export(tmp_path / "arbres.csv")
    uploads = tmp_path / "uploads"
    uploads.mkdir()
    (uploads / "carte-data").write_text("blocking file")

    code, output = run_cli("--source", str(source), "--uploads", str(uploads), "generate")

    assert code == 1
    assert "Impossible de créer le dossier" in output


def test_generate_reports_missing_source(tmp_path: Path):
    uploads = tmp_path / "uploads"

    code, output = run_cli("--source", str(tmp_path / "absent.csv"), "--uploads", str(uploads), "generate")

    assert code == 1
    assert "Tree export not found" in output
    assert not (uploads / "carte-data" / "arbres.json").exists()

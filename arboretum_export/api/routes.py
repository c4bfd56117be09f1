"""REST API blueprint."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from ..core import ExportInProgressError, RecordSourceError
from ..pipelines import ExportPipeline

api_bp = Blueprint("api", __name__)


@api_bp.post("/exports")
def generate_export():
    """Regenerate the dataset file from the current host records."""

    try:
        outcome = _pipeline().run()
    except ExportInProgressError as exc:
        return jsonify({"success": False, **exc.as_dict()}), 409
    except RecordSourceError as exc:
        return jsonify({"success": False, **exc.as_dict()}), 500

    status = 200 if outcome.success else 500
    return jsonify(outcome.as_dict()), status


@api_bp.get("/exports/status")
def export_status():
    try:
        status = _pipeline().status()
    except RecordSourceError as exc:
        return jsonify({"success": False, **exc.as_dict()}), 500
    return jsonify(status.as_dict()), 200


def _pipeline() -> ExportPipeline:
    state = current_app.extensions["arboretum_export"]
    if state["pipeline"] is None:
        state["pipeline"] = ExportPipeline.default()
    return state["pipeline"]

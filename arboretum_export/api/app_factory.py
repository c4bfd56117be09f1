"""Flask application factory."""

from __future__ import annotations

import logging
from flask import Flask
from flask_cors import CORS

from ..pipelines import ExportPipeline
from .routes import api_bp

logger = logging.getLogger(__name__)


def create_app(pipeline: ExportPipeline | None = None) -> Flask:
    """Create and configure the Flask application.

    ``pipeline`` defaults to :meth:`ExportPipeline.default`, built lazily on
    the first request so the app can start before the source is configured.
    """

    app = Flask(__name__)

    CORS(app)
    app.register_blueprint(api_bp, url_prefix="/api")
    app.extensions["arboretum_export"] = {"pipeline": pipeline}

    @app.get("/health")
    def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    logger.info("Flask application initialised")
    return app

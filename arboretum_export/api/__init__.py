"""HTTP trigger for the export pipeline."""

from .app_factory import create_app

__all__ = ["create_app"]

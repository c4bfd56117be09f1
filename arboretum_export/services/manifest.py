"""Persistence of the :class:`ExportManifestState`."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from ..core import ExportManifestState, ManifestWriteError
from ..utils.io import atomic_write_bytes

logger = logging.getLogger(__name__)


class ManifestFile:
    """Store the last generation timestamp as a small JSON document."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def load(self) -> ExportManifestState:
        if not self.path.exists():
            return ExportManifestState()
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except ValueError:
            logger.warning("Ignoring unreadable manifest %s", self.path)
            return ExportManifestState()
        if not isinstance(payload, dict):
            return ExportManifestState()
        return ExportManifestState.from_dict(payload)

    def save(self, state: ExportManifestState) -> None:
        data = json.dumps(state.as_dict(), indent=4).encode("utf-8")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            atomic_write_bytes(self.path, data)
        except OSError as exc:
            logger.error("Failed to record generation time in %s: %s", self.path, exc)
            raise ManifestWriteError(self.path, reason=str(exc)) from exc

"""Persist the generated dataset for the map front end."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from ..core import (
    DirectoryCreateError,
    ExportManifestState,
    NotWritableError,
    WriteError,
)
from ..utils.io import atomic_write_bytes, ensure_directory

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ExportStore:
    """Write the dataset file and hand back the new manifest state.

    The steps always run in the order ``ensure_target`` -> ``check_writable``
    -> ``write`` -> ``record_generation_timestamp``; the first failure stops
    the sequence.
    """

    directory: Path
    filename: str = "arbres.json"

    @property
    def target(self) -> Path:
        return Path(self.directory) / self.filename

    def ensure_target(self) -> None:
        try:
            ensure_directory(self.directory)
        except OSError as exc:
            logger.error("Cannot create export directory %s: %s", self.directory, exc)
            raise DirectoryCreateError(self.directory, reason=str(exc)) from exc

    def check_writable(self) -> None:
        if not os.access(self.directory, os.W_OK | os.X_OK):
            logger.error("Export directory %s is not writable", self.directory)
            raise NotWritableError(self.directory)

    def write(self, data: bytes) -> Path:
        try:
            return atomic_write_bytes(self.target, data)
        except OSError as exc:
            logger.error("Failed to write %s: %s", self.target, exc)
            raise WriteError(self.target, reason=str(exc)) from exc

    @staticmethod
    def record_generation_timestamp(
        state: ExportManifestState, now: datetime | None = None
    ) -> ExportManifestState:
        """Return ``state`` with its generation time replaced by ``now``."""

        moment = now or datetime.now(timezone.utc)
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        if state.last_generation and state.last_generation > moment:
            logger.warning("Generation time moves backwards from %s to %s", state.last_generation, moment)
        return ExportManifestState(last_generation=moment)

    def save(
        self, data: bytes, state: ExportManifestState, now: datetime | None = None
    ) -> ExportManifestState:
        self.ensure_target()
        self.check_writable()
        path = self.write(data)
        logger.info("Wrote %s bytes to %s", len(data), path)
        return self.record_generation_timestamp(state, now)

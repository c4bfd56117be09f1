"""Detect host changes made after the last successful export."""

from __future__ import annotations

from dataclasses import dataclass

from ..core import ExportManifestState, StalenessStatus
from .record_source import RecordSource


@dataclass(slots=True)
class StalenessTracker:
    """Compare the manifest timestamp with record modification times.

    The status is advisory: it never triggers or blocks a regeneration.
    """

    source: RecordSource

    def check_status(self, state: ExportManifestState) -> StalenessStatus:
        if state.last_generation is None:
            return StalenessStatus(up_to_date=False, modified_since=[], last_generation=None)

        modified = self.source.modified_since(state.last_generation)
        return StalenessStatus(
            up_to_date=not modified,
            modified_since=modified,
            last_generation=state.last_generation,
        )

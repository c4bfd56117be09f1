"""Custom exception hierarchy for the arboretum export domain."""

from __future__ import annotations

from pathlib import Path


class ProcessingError(RuntimeError):
    """Raised when the export pipeline fails."""

    def __init__(self, message: str, *, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}

    def as_dict(self) -> dict:
        """Return a serializable representation."""
        payload = {"message": str(self)}
        if self.details:
            payload["details"] = self.details
        return payload


class ProjectionError(ProcessingError):
    """Raised when coordinates that passed validation are not numeric."""


class RecordSourceError(ProcessingError):
    """Raised when the host record export cannot be read."""


class ExportInProgressError(ProcessingError):
    """Raised when another export already holds the generation lock."""


class StoreError(ProcessingError):
    """Base class for failures persisting the export artifact."""

    template = "❌ Erreur lors de l’écriture du fichier : {path}"

    def __init__(self, path: Path | str, *, reason: str | None = None):
        details = {"path": str(path)}
        if reason:
            details["reason"] = reason
        super().__init__(self.template.format(path=path), details=details)
        self.path = Path(path)


class DirectoryCreateError(StoreError):
    template = "❌ Impossible de créer le dossier : {path}"


class NotWritableError(StoreError):
    template = "❌ Le dossier n’est pas accessible en écriture : {path}"


class WriteError(StoreError):
    template = "❌ Erreur lors de l’écriture du fichier : {path}"


class ManifestWriteError(StoreError):
    template = "❌ Impossible d’enregistrer la date de génération : {path}"

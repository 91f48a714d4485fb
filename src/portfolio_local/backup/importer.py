"""Backup import functionality."""

import json
import logging
from pathlib import Path

from portfolio_local.backup.document import StateDocument, from_document
from portfolio_local.core.exceptions import MalformedImportError
from portfolio_local.domain.models import PortfolioState

logger = logging.getLogger(__name__)


class BackupImporter:
    """
    Importer for backup files.

    Parsing and validation finish before anything is returned, so a rejected
    file never touches the current state.
    """

    def import_json(self, path: str) -> PortfolioState:
        """
        Read and validate a backup file.

        Raises MalformedImportError if the file is missing, is not JSON, or
        lacks an assets list or settings object.
        """
        file_path = Path(path)
        if not file_path.is_file():
            raise MalformedImportError(f"File not found: {path}")

        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise MalformedImportError(f"Failed to import: cannot read file ({e})") from e

        return self.parse(text)

    def parse(self, text: str) -> PortfolioState:
        """Validate a backup document given as text."""
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            logger.warning("Import rejected: %s", e)
            raise MalformedImportError("Failed to import: invalid JSON file") from e

        if not isinstance(raw, dict) or not isinstance(raw.get("assets"), list):
            logger.warning("Import rejected: missing assets array")
            raise MalformedImportError("Invalid backup file: missing assets array")
        if not isinstance(raw.get("settings"), dict):
            logger.warning("Import rejected: missing settings")
            raise MalformedImportError("Invalid backup file: missing settings")

        try:
            return from_document(StateDocument.model_validate(raw))
        except ValueError as e:
            logger.warning("Import rejected: %s", e)
            raise MalformedImportError(f"Invalid backup file: {_summarise(e)}") from e


def _summarise(error: Exception) -> str:
    lines = str(error).splitlines()
    return " ".join(line.strip() for line in lines[:3]) if lines else type(error).__name__

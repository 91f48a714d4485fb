"""Backup export functionality."""

import logging
from pathlib import Path

from portfolio_local.backup.document import dump_state
from portfolio_local.domain.models import PortfolioState

logger = logging.getLogger(__name__)

DEFAULT_BACKUP_NAME = "portfolio_backup.json"


class BackupExporter:
    """
    Exporter for the full portfolio state.

    Writes the same JSON document the browser tracker downloads, so a backup
    can be restored in either.
    """

    def export_json(self, state: PortfolioState, path: str) -> Path:
        """
        Export state to a JSON file.

        Args:
            state: State to serialise
            path: Output file path; a directory gets the default file name

        Returns:
            Path of the written file
        """
        file_path = Path(path)
        if file_path.is_dir():
            file_path = file_path / DEFAULT_BACKUP_NAME
        file_path.parent.mkdir(parents=True, exist_ok=True)

        file_path.write_text(dump_state(state, indent=2), encoding="utf-8")
        logger.info(
            "Exported %d assets and %d snapshots to %s",
            len(state.assets),
            len(state.snapshots),
            file_path,
        )
        return file_path

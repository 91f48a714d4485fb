"""Backup export/import utilities."""

from portfolio_local.backup.document import StateDocument, dump_state, load_state
from portfolio_local.backup.exporter import BackupExporter
from portfolio_local.backup.importer import BackupImporter

__all__ = [
    "StateDocument",
    "dump_state",
    "load_state",
    "BackupExporter",
    "BackupImporter",
]

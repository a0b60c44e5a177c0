"""
Backup snapshots of the persisted plan store.
Taken before an import replaces everything, so a wrong file can be undone by hand.
"""
from datetime import datetime
from pathlib import Path
import logging

from calplan.infra.KeyValue_Store import KeyValueStore
from calplan.utilities.constants import BACKUPS_TO_KEEP

logger = logging.getLogger(__name__)


class BackupManager:
    """Keeps timestamped copies of the stored plans under one key."""

    def __init__(self, kv: KeyValueStore, key: str, backup_dir: Path, keep: int = BACKUPS_TO_KEEP):
        self.kv = kv
        self.key = key
        self.backup_dir = Path(backup_dir)
        self.keep = keep

    def create_backup(self):
        """Snapshot the currently persisted text. Returns the path, or None."""
        try:
            raw = self.kv.get_item(self.key)
            if raw is None:
                logger.info("Nothing persisted yet; no backup taken")
                return None
            self.backup_dir.mkdir(parents=True, exist_ok=True)
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
            destination = self.backup_dir / f"{self.key}_{timestamp}.json"
            destination.write_text(raw, encoding='utf-8')
            logger.info(f"Backup created: {destination.name}")
            self._cleanup_old_backups()
            return destination
        except Exception as e:
            logger.error(f"Backup of {self.key!r} failed: {e}")
            return None

    def _cleanup_old_backups(self):
        """Remove old backups, keeping only the most recent ones."""
        for backup in self.list_backups()[self.keep:]:
            try:
                backup.unlink()
                logger.info(f"Removed old backup: {backup.name}")
            except OSError as e:
                logger.error(f"Failed to remove old backup {backup.name}: {e}")

    def list_backups(self) -> list:
        """Backups of this key, newest first."""
        if not self.backup_dir.exists():
            return []
        return sorted(self.backup_dir.glob(f"{self.key}_*.json"), key=lambda p: p.name, reverse=True)

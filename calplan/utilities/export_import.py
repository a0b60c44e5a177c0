"""
Export and Import of the whole plan store (portable JSON backups).
"""
import csv
import io
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from calplan.domain.PlanStore import PlanStore
from calplan.events.Event_Bus import EventBus
from calplan.events.event_helpers import publish_notice
from calplan.exceptions import ImportParseError
from calplan.logic.plans.state import PlanState
from calplan.utilities.backup import BackupManager
from calplan.utilities.constants import (
    EXPORT_FILENAME_TEMPLATE, EXPORT_TIMESTAMP_FORMAT, IMPORT_FAILED, IMPORT_SUCCEEDED,
)

logger = logging.getLogger(__name__)

CSV_FIELDS = ['date', 'id', 'time', 'category', 'description', 'outcome']


def export_text(store: PlanStore) -> str:
    """Pretty-printed JSON of the full store."""
    return json.dumps(store.to_dict(), indent=2, ensure_ascii=False)


def export_filename(now: Optional[datetime] = None) -> str:
    stamp = (now or datetime.now()).strftime(EXPORT_TIMESTAMP_FORMAT)
    return EXPORT_FILENAME_TEMPLATE.format(stamp=stamp)


def export_csv_text(store: PlanStore) -> str:
    """Flatten every entry to one CSV row (spreadsheet friendly)."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_FIELDS)
    writer.writeheader()
    for date_key in sorted(store):
        for entry in store[date_key].entries:
            writer.writerow({
                'date': date_key,
                'id': entry.id,
                'time': entry.time,
                'category': entry.category,
                'description': entry.description,
                'outcome': entry.outcome,
            })
    return buffer.getvalue()


def parse_backup(text: Union[str, bytes]) -> PlanStore:
    """Parse backup text. Only JSON syntax and the top-level mapping are checked."""
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ImportParseError(f"Backup is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ImportParseError(f"Backup must hold a JSON object, got {type(data).__name__}")
    return PlanStore.from_dict(data)


class PlanImporter:
    """Replace the plan store wholesale from a backup.

    No merge and no confirmation step. A parse failure leaves the current
    store untouched.
    """

    def __init__(self, state: PlanState, backups: Optional[BackupManager] = None,
                 event_bus: Optional[EventBus] = None):
        self.state = state
        self.backups = backups
        self.event_bus = event_bus

    def import_text(self, text: Union[str, bytes]) -> PlanStore:
        """Parse and install the backup. Raises ImportParseError."""
        try:
            store = parse_backup(text)
        except ImportParseError as e:
            logger.warning(f"Import rejected: {e}")
            publish_notice(IMPORT_FAILED, level='error', bus=self.event_bus)
            raise
        if self.backups is not None:
            # the backup copies what is persisted, so pending edits go first
            if self.state.autosave is not None:
                self.state.autosave.flush()
            self.backups.create_backup()
        new_store = self.state.replace_store(store)
        logger.info(f"Imported {len(new_store)} day plans")
        publish_notice(IMPORT_SUCCEEDED, bus=self.event_bus)
        return new_store

    def import_file(self, input_path: Path) -> PlanStore:
        try:
            with open(input_path, 'r', encoding='utf-8') as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read backup {input_path}: {e}")
            publish_notice(IMPORT_FAILED, level='error', bus=self.event_bus)
            raise ImportParseError(f"Could not read {input_path}: {e}") from e
        return self.import_text(text)

"""Key-value backing stores (the local-storage the planner persists into).

The planner only needs string values under string keys. On disk, every key
lives in one JSON document, rewritten atomically on each set.
"""
import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from threading import Lock
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...


class MemoryKeyValueStore:
    """In-process store, mostly for tests."""

    def __init__(self, items: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(items) if items else {}
        self.writes = 0

    def get_item(self, key: str) -> Optional[str]:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value
        self.writes += 1


class JsonFileKeyValueStore:
    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = Lock()

    def _read_document(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, 'r', encoding='utf-8') as f:
            doc = json.load(f)
        if not isinstance(doc, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return doc

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._read_document().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            try:
                doc = self._read_document()
            except (ValueError, OSError) as e:
                logger.warning(f"Unreadable storage file {self.path}, starting a new one: {e}")
                doc = {}
            doc[key] = value
            self._atomic_write(doc)

    def _atomic_write(self, doc: Dict[str, str]) -> None:
        os.makedirs(self.path.parent, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=".storage_", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                json.dump(doc, tmp, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

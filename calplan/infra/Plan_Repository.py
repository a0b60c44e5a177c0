import json
import logging

from calplan.domain.PlanStore import EMPTY_STORE, PlanStore
from calplan.exceptions import PersistError
from calplan.infra.KeyValue_Store import KeyValueStore

logger = logging.getLogger(__name__)


def serialize(store: PlanStore) -> str:
    """Compact JSON for the backing store; identical stores give identical text."""
    return json.dumps(store.to_dict(), ensure_ascii=False)


class PlanRepository:
    """Loads and saves the whole plan store under one fixed key."""

    def __init__(self, kv: KeyValueStore, key: str):
        self.kv = kv
        self.key = key

    def load(self) -> PlanStore:
        """Return the persisted store, or an empty one if missing or unreadable."""
        try:
            raw = self.kv.get_item(self.key)
        except Exception as e:
            logger.warning(f"Could not read stored plans under {self.key!r}: {e}. Starting empty.")
            return EMPTY_STORE
        if raw is None:
            return EMPTY_STORE
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Stored plans under {self.key!r} are not valid JSON: {e}. Starting empty.")
            return EMPTY_STORE
        if not isinstance(data, dict):
            logger.warning(f"Stored plans under {self.key!r} are not a mapping. Starting empty.")
            return EMPTY_STORE
        store = PlanStore.from_dict(data)
        logger.info(f"Loaded {len(store)} day plans")
        return store

    def save(self, store: PlanStore) -> str:
        """Persist the store; returns the text written. Raises PersistError."""
        payload = serialize(store)
        try:
            self.kv.set_item(self.key, payload)
        except Exception as e:
            raise PersistError(f"Could not write plans under {self.key!r}: {e}", key=self.key) from e
        return payload

"""The single owned state cell holding the current plan store.

All mutations go through PlanState so the entry-count invariant is enforced in
one place (the pure operations) and every change schedules an autosave.
Operations are applied one at a time, in arrival order, under a lock.
"""
import logging
from threading import Lock
from typing import Any, Callable, Optional

from calplan.domain.DayPlan import DayPlan
from calplan.domain.PlanStore import EMPTY_STORE, PlanStore
from calplan.infra.autosave import AutosaveController
from calplan.infra.Plan_Repository import PlanRepository
from calplan.logic.plans import operations as ops

logger = logging.getLogger(__name__)


class PlanState:
    def __init__(self, store: PlanStore = EMPTY_STORE, autosave: Optional[AutosaveController] = None):
        self._store = store
        self.autosave = autosave
        self._lock = Lock()

    @classmethod
    def load(cls, repository: PlanRepository, autosave: Optional[AutosaveController] = None) -> "PlanState":
        return cls(repository.load(), autosave)

    @property
    def store(self) -> PlanStore:
        return self._store

    def day_plan(self, date_key: str) -> DayPlan:
        return ops.get_or_init_day_plan(self._store, date_key)

    def _apply(self, operation: Callable[..., PlanStore], *args: Any) -> PlanStore:
        # notify stays under the lock so autosave sees snapshots in swap order
        with self._lock:
            new_store = operation(self._store, *args)
            changed = new_store is not self._store and new_store != self._store
            self._store = new_store
            if changed and self.autosave is not None:
                self.autosave.notify(new_store)
        return new_store

    def add_entry(self, date_key: str) -> PlanStore:
        return self._apply(ops.add_entry, date_key)

    def set_entry_field(self, date_key: str, entry_id: str, field: str, value: Any) -> PlanStore:
        return self._apply(ops.set_entry_field, date_key, entry_id, field, value)

    def toggle_outcome(self, date_key: str, entry_id: str, outcome: str) -> PlanStore:
        return self._apply(ops.toggle_outcome, date_key, entry_id, outcome)

    def remove_entry(self, date_key: str, entry_id: str) -> PlanStore:
        return self._apply(ops.remove_entry, date_key, entry_id)

    def clear_day(self, date_key: str) -> PlanStore:
        return self._apply(ops.clear_day, date_key)

    def replace_store(self, new_store: Any) -> PlanStore:
        """Wholesale replacement (import). Raises InvalidStoreShape."""
        replacement = ops.replace_store(new_store)
        logger.info(f"Replacing plan store ({len(self._store)} -> {len(replacement)} day plans)")
        return self._apply(lambda _prior: replacement)

    def save_now(self) -> bool:
        if self.autosave is None:
            return False
        return self.autosave.save_now(self._store)

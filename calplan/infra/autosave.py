"""Autosave controller: debounced and manual persistence of the plan store.

Rules:
  - notify(store) cancels the pending write and schedules a new one after
    `delay` seconds (trailing debounce). Only the store passed to the last
    notify is written; intermediate snapshots never reach the backing store.
  - save_now(store) writes immediately, cancels any pending debounced write and
    walks the status idle -> saving -> saved -> idle.
  - Write failures are logged and published as notices. The in-memory store
    is never rolled back.
"""
import logging
from threading import Lock
from typing import Optional

from calplan.domain.PlanStore import PlanStore
from calplan.events.Event_Bus import EventBus, GLOBAL_EVENT_BUS
from calplan.events.event_helpers import publish_notice, publish_save_status
from calplan.exceptions import PersistError
from calplan.infra.Plan_Repository import PlanRepository
from calplan.infra.scheduling import ScheduledCall, Scheduler, ThreadingScheduler
from calplan.utilities.constants import (
    AUTOSAVE_FAILED, SAVE_FAILED, SAVE_IDLE, SAVE_SAVED, SAVE_SAVING,
)

logger = logging.getLogger(__name__)


class AutosaveController:
    def __init__(self, repository: PlanRepository, delay: float = 0.5,
                 scheduler: Optional[Scheduler] = None, saved_display: float = 2.0,
                 event_bus: Optional[EventBus] = None):
        self.repository = repository
        self.delay = delay
        self.saved_display = saved_display
        self.scheduler = scheduler or ThreadingScheduler()
        self.event_bus = event_bus or GLOBAL_EVENT_BUS
        self.status = SAVE_IDLE
        self._lock = Lock()
        self._pending: Optional[ScheduledCall] = None
        self._pending_store: Optional[PlanStore] = None
        self._generation = 0
        self._status_reset: Optional[ScheduledCall] = None

    # --- Debounced path ---------------------------------------------------
    def notify(self, store: PlanStore) -> None:
        """Schedule a write of store, superseding any pending one."""
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
            self._generation += 1
            generation = self._generation
            self._pending_store = store
            self._pending = self.scheduler.call_later(self.delay, lambda: self._fire(generation))

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A cancelled timer that already started must not write stale data
            if generation != self._generation or self._pending_store is None:
                return
            store = self._pending_store
            self._pending = None
            self._pending_store = None
        self._write_quietly(store)

    def _write_quietly(self, store: PlanStore) -> None:
        try:
            self.repository.save(store)
            logger.debug(f"Autosaved {len(store)} day plans")
        except PersistError as e:
            logger.error(f"Autosave failed: {e}")
            publish_notice(AUTOSAVE_FAILED, level='error', bus=self.event_bus)

    @property
    def has_pending(self) -> bool:
        return self._pending_store is not None

    def cancel(self) -> None:
        """Drop the pending debounced write, if any."""
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
            self._pending = None
            self._pending_store = None
            self._generation += 1

    def flush(self) -> None:
        """Write the pending debounced store right away (e.g. on shutdown)."""
        with self._lock:
            store = self._pending_store
            if self._pending is not None:
                self._pending.cancel()
            self._pending = None
            self._pending_store = None
            self._generation += 1
        if store is not None:
            self._write_quietly(store)

    # --- Manual path ------------------------------------------------------
    def _set_status(self, status: str) -> None:
        self.status = status
        publish_save_status(status, bus=self.event_bus)

    def save_now(self, store: PlanStore) -> bool:
        """Write store immediately. Returns False (status idle) on failure."""
        self.cancel()
        if self._status_reset is not None:
            self._status_reset.cancel()
            self._status_reset = None
        self._set_status(SAVE_SAVING)
        try:
            self.repository.save(store)
        except PersistError as e:
            logger.error(f"Manual save failed: {e}")
            self._set_status(SAVE_IDLE)
            publish_notice(SAVE_FAILED, level='error', bus=self.event_bus)
            return False
        logger.info(f"Saved {len(store)} day plans")
        self._set_status(SAVE_SAVED)
        self._status_reset = self.scheduler.call_later(self.saved_display, self._back_to_idle)
        return True

    def _back_to_idle(self) -> None:
        self._status_reset = None
        if self.status == SAVE_SAVED:
            self._set_status(SAVE_IDLE)

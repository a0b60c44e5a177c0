"""Pure update operations on the plan store.

Each function takes the prior PlanStore and returns a new one; the prior value
is never touched. Misuse (unknown entry id, empty date key, unknown field) is a
no-op that returns the same store object. The one side effect: a placeholder id
that gets claimed is retired and never offered again.

Invariant kept by every mutation: a day that was mutated holds at least one
entry. Removing the last entry, or clearing the day, leaves a single blank one.
"""
import logging
from collections.abc import Mapping
from typing import Any, Optional

from calplan.domain.DayPlan import DayPlan, retire_placeholder_id
from calplan.domain.Entry import EDITABLE_FIELDS, Entry, Outcome
from calplan.domain.PlanStore import PlanStore
from calplan.exceptions import InvalidStoreShape

logger = logging.getLogger(__name__)


def get_or_init_day_plan(store: PlanStore, date_key: str) -> DayPlan:
    """Return the stored plan, or a blank one for display.

    Read-only: the synthesized plan is not written back, so visiting a date
    never persists an empty placeholder. A stored day with zero entries (e.g.
    from an imported backup) is shown with one blank entry as well.
    """
    plan = store.get(date_key)
    if plan is None or not plan.entries:
        return DayPlan.placeholder(date_key)
    return plan


def _replace_entry(plan: DayPlan, entry_id: str, new_entry: Entry) -> DayPlan:
    return plan.with_entries(new_entry if e.id == entry_id else e for e in plan.entries)


def _claim_placeholder(store: PlanStore, date_key: str, plan: DayPlan) -> None:
    # once the placeholder is stored (or dropped) its id is never offered again
    if plan is not store.get(date_key):
        retire_placeholder_id(date_key)


def set_entry_field(store: PlanStore, date_key: Optional[str], entry_id: str, field: str, value: Any) -> PlanStore:
    if not date_key:
        return store
    if field not in EDITABLE_FIELDS:
        logger.debug(f"Ignoring update of non-editable field {field!r}")
        return store
    plan = get_or_init_day_plan(store, date_key)
    entry = plan.find(entry_id)
    if entry is None:
        logger.debug(f"Entry {entry_id} not found on {date_key}; update ignored")
        return store
    _claim_placeholder(store, date_key, plan)
    return store.with_day(_replace_entry(plan, entry_id, entry.with_field(field, value)))


def toggle_outcome(store: PlanStore, date_key: Optional[str], entry_id: str, outcome: str) -> PlanStore:
    """Set the outcome, or reset it to pending when it is already set to it."""
    if not date_key:
        return store
    entry = get_or_init_day_plan(store, date_key).find(entry_id)
    if entry is None:
        return store
    target = Outcome.normalize(outcome)
    new_value = Outcome.PENDING if entry.outcome == target else target
    return set_entry_field(store, date_key, entry_id, "outcome", new_value)


def add_entry(store: PlanStore, date_key: Optional[str]) -> PlanStore:
    """Append a blank entry to what is stored for the day.

    The read-time placeholder is not carried over: on an untouched date the
    new entry is the only one.
    """
    if not date_key:
        return store
    plan = store.get(date_key) or DayPlan(date_key)
    return store.with_day(plan.with_entries(plan.entries + (Entry.blank(),)))


def remove_entry(store: PlanStore, date_key: Optional[str], entry_id: str) -> PlanStore:
    if not date_key:
        return store
    plan = get_or_init_day_plan(store, date_key)
    if plan.find(entry_id) is None:
        return store
    _claim_placeholder(store, date_key, plan)
    remaining = [e for e in plan.entries if e.id != entry_id]
    if not remaining:
        remaining = [Entry.blank()]
    return store.with_day(plan.with_entries(remaining))


def clear_day(store: PlanStore, date_key: Optional[str]) -> PlanStore:
    """Discard every entry of the day, leaving one blank entry.

    Destructive and irreversible: callers must get an explicit confirmation first.
    """
    if not date_key:
        return store
    return store.with_day(DayPlan.blank(date_key))


def replace_store(new_store: Any) -> PlanStore:
    """Wholesale replacement used by import.

    Only the mapping shape is checked; day values are read leniently.
    """
    if isinstance(new_store, PlanStore):
        return new_store
    if not isinstance(new_store, Mapping):
        raise InvalidStoreShape(f"Expected a mapping of dates, got {type(new_store).__name__}")
    return PlanStore.from_dict(new_store)


__all__ = [
    'get_or_init_day_plan', 'set_entry_field', 'toggle_outcome', 'add_entry',
    'remove_entry', 'clear_day', 'replace_store',
]

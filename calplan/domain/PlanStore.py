"""PlanStore aggregate: immutable mapping of date key -> DayPlan.

Every change produces a new PlanStore (replace-by-key), so two snapshots can be
compared with == to detect changes.
"""
from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional

from calplan.domain.DayPlan import DayPlan


class PlanStore(Mapping):
    def __init__(self, days: Optional[Dict[str, DayPlan]] = None):
        self._days: Dict[str, DayPlan] = dict(days) if days else {}

    def __getitem__(self, date_key: str) -> DayPlan:
        return self._days[date_key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._days)

    def __len__(self) -> int:
        return len(self._days)

    def __eq__(self, other):
        if isinstance(other, PlanStore):
            return self._days == other._days
        return NotImplemented

    __hash__ = None

    def __repr__(self) -> str:
        return f"PlanStore({sorted(self._days)})"

    def with_day(self, plan: DayPlan) -> "PlanStore":
        """Return a new store with plan stored under its own date key."""
        days = dict(self._days)
        days[plan.date_key] = plan
        return PlanStore(days)

    @staticmethod
    def from_dict(data: Mapping) -> "PlanStore":
        '''Build a store from a parsed backup mapping (lenient, never rejects a day).'''
        return PlanStore({str(key): DayPlan.from_dict(value, str(key)) for key, value in data.items()})

    def to_dict(self) -> Dict[str, Any]:
        return {key: plan.to_dict() for key, plan in self._days.items()}


EMPTY_STORE = PlanStore()

"""Outcome tallies over active entries.

Returns structure:
{
  'days': <int>,             # days with at least one active entry
  'entries': <int>,
  'outcomes': {'pending': n, 'positive': n, 'negative': n, 'voided': n},
  'hit_rate': <float | None> # positive / (positive + negative)
}
"""
from collections import Counter
from typing import Any, Dict, Optional

from calplan.domain.Entry import Outcome
from calplan.domain.PlanStore import PlanStore


def outcome_summary(store: PlanStore, year: Optional[int] = None, month: Optional[int] = None) -> Dict[str, Any]:
    prefix = ""
    if year is not None:
        prefix = f"{year:04d}-" if month is None else f"{year:04d}-{month:02d}-"

    counts = Counter({o: 0 for o in Outcome.ALL})
    days = 0
    for date_key, plan in store.items():
        if not date_key.startswith(prefix):
            continue
        active = plan.active_entries()
        if active:
            days += 1
        # Imported files may carry outcome names we do not know; they are counted too
        counts.update(e.outcome for e in active)

    decided = counts[Outcome.POSITIVE] + counts[Outcome.NEGATIVE]
    return {
        'days': days,
        'entries': sum(counts.values()),
        'outcomes': dict(counts),
        'hit_rate': round(counts[Outcome.POSITIVE] / decided, 4) if decided else None,
    }

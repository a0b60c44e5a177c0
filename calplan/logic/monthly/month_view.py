"""Month overview data: week grid plus the active entries of each date.

The grid starts on Sunday and covers whole weeks, so it includes trailing days
of the previous month and leading days of the next one.
"""
import calendar
from datetime import date
from typing import Any, Dict, List

from calplan.domain.PlanStore import PlanStore
from calplan.utilities.constants import DATE_KEY_FORMAT


def month_grid(year: int, month: int) -> List[List[date]]:
    """Weeks (Sunday first) covering the month."""
    cal = calendar.Calendar(firstweekday=calendar.SUNDAY)
    return cal.monthdatescalendar(year, month)


def month_overview(store: PlanStore, year: int, month: int) -> Dict[str, Any]:
    today = date.today()
    weeks = []
    for week in month_grid(year, month):
        days = []
        for d in week:
            key = d.strftime(DATE_KEY_FORMAT)
            plan = store.get(key)
            active = plan.active_entries() if plan is not None else ()
            days.append({
                'date': key,
                'day': d.day,
                'in_month': d.month == month,
                'is_today': d == today,
                'entries': [e.to_api_dict() for e in active],
                'count': len(active),
            })
        weeks.append(days)
    first = date(year, month, 1)
    last = first.replace(day=calendar.monthrange(year, month)[1])
    return {
        'year': year,
        'month': month,
        'first_day': first.strftime(DATE_KEY_FORMAT),
        'last_day': last.strftime(DATE_KEY_FORMAT),
        'weeks': weeks,
    }

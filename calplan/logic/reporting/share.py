"""Plain-text day summary for copy/paste sharing."""
from datetime import datetime
from typing import Optional

from calplan.domain.DayPlan import DayPlan
from calplan.utilities.constants import DATE_KEY_FORMAT, SHARE_DATE_FORMAT


def build_share_text(day_plan: DayPlan) -> Optional[str]:
    """Return the shareable text, or None when no entry has a description.

    Format:
        Plan - 01/06

        18:00 | League A
        Team A vs Team B

        Good luck!
    """
    active = day_plan.active_entries()
    if not active:
        return None
    try:
        label = datetime.strptime(day_plan.date_key, DATE_KEY_FORMAT).strftime(SHARE_DATE_FORMAT)
    except ValueError:
        label = day_plan.date_key
    blocks = [f"{e.time} | {e.category}\n{e.description}\n" for e in active]
    return f"Plan - {label}\n\n" + "\n".join(blocks) + "\nGood luck!"

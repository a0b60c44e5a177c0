import logging
from typing import Optional

from openai import OpenAI

from calplan.domain.DayPlan import DayPlan
from calplan.utilities import config
from calplan.utilities.constants import (
    ADVISORY_PROMPT_TEMPLATE, ANALYSIS_FAILED, ANALYSIS_UNAVAILABLE, NOTHING_TO_ANALYZE,
)

logger = logging.getLogger(__name__)


# === Helper: Get OpenAI Client ===
def _get_openai_client() -> Optional[OpenAI]:
    """Return an OpenAI client if OPENAI_API_KEY is set, otherwise None."""
    if not config.OPENAI_API_KEY:
        return None
    return OpenAI(api_key=config.OPENAI_API_KEY)


def build_prompt(day_plan: DayPlan) -> Optional[str]:
    """Prompt listing the active entries of the day, or None if there are none."""
    lines = [
        f"- {e.time}: {e.description} ({e.category})"
        for e in day_plan.active_entries()
    ]
    if not lines:
        return None
    return ADVISORY_PROMPT_TEMPLATE.format(date=day_plan.date_key, lines="\n".join(lines))


# === Day analysis ===
def analyze_day_plan(day_plan: DayPlan, client=None) -> str:
    """Short commentary on one day's entries.

    Makes at most one request and never raises: failures map to fixed
    messages. Nothing is cached.
    """
    prompt = build_prompt(day_plan)
    if prompt is None:
        return NOTHING_TO_ANALYZE

    if client is None:
        client = _get_openai_client()
    if client is None:
        logger.warning("OPENAI_API_KEY not set — cannot analyze day plan.")
        return ANALYSIS_FAILED

    try:
        response = client.responses.create(
            model=config.ADVISORY_MODEL,
            input=prompt,
            temperature=config.ADVISORY_TEMPERATURE,
        )
        text = (response.output_text or "").strip()
    except Exception:
        logger.exception(f"Advisory call failed for {day_plan.date_key}")
        return ANALYSIS_FAILED

    if not text:
        logger.warning("AI returned an empty analysis")
        return ANALYSIS_UNAVAILABLE
    return text

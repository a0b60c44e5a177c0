from datetime import date as _date
from typing import Annotated, Optional

from fastapi import APIRouter, HTTPException, Path, Query, Request

from calplan.api.api_ai import analyze_day_plan
from calplan.logic.monthly.month_view import month_overview
from calplan.logic.plans.state import PlanState
from calplan.logic.reporting.outcomes import outcome_summary
from calplan.logic.reporting.share import build_share_text
from calplan.utilities.constants import DATE_KEY_PATTERN, NOTHING_TO_SHARE, SAVE_FAILED
from calplan.utilities.validators import EntryFieldUpdate, OutcomeToggle

router = APIRouter(prefix="/api")

DateKey = Annotated[str, Path(pattern=DATE_KEY_PATTERN, description="Date as YYYY-MM-DD")]


def get_state(request: Request) -> PlanState:
    return request.app.state.plans


def _day_response(state: PlanState, date_key: str):
    plan = state.day_plan(date_key)
    return {
        "date": plan.date_key,
        "stored": date_key in state.store,
        "entries": [e.to_api_dict() for e in plan.entries],
    }


def _check_entry(state: PlanState, date_key: str, entry_id: str):
    if state.day_plan(date_key).find(entry_id) is None:
        raise HTTPException(status_code=404, detail="Entry not found")


# -------------------- Day plans --------------------
@router.get("/plans")
def list_plans(request: Request):
    store = get_state(request).store
    return {
        key: {"date": key, "entries": [e.to_api_dict() for e in store[key].entries]}
        for key in sorted(store)
    }


@router.get("/plans/{date_key}")
def get_day_plan(request: Request, date_key: DateKey):
    return _day_response(get_state(request), date_key)


@router.post("/plans/{date_key}/entries")
def add_entry(request: Request, date_key: DateKey):
    state = get_state(request)
    state.add_entry(date_key)
    return _day_response(state, date_key)


@router.patch("/plans/{date_key}/entries/{entry_id}")
def update_entry(request: Request, payload: EntryFieldUpdate, entry_id: str, date_key: DateKey):
    state = get_state(request)
    _check_entry(state, date_key, entry_id)
    state.set_entry_field(date_key, entry_id, payload.field, payload.value)
    return _day_response(state, date_key)


@router.post("/plans/{date_key}/entries/{entry_id}/toggle")
def toggle_entry_outcome(request: Request, payload: OutcomeToggle, entry_id: str, date_key: DateKey):
    state = get_state(request)
    _check_entry(state, date_key, entry_id)
    state.toggle_outcome(date_key, entry_id, payload.outcome)
    return _day_response(state, date_key)


@router.delete("/plans/{date_key}/entries/{entry_id}")
def remove_entry(request: Request, entry_id: str, date_key: DateKey):
    state = get_state(request)
    _check_entry(state, date_key, entry_id)
    state.remove_entry(date_key, entry_id)
    return _day_response(state, date_key)


@router.delete("/plans/{date_key}")
def clear_day(request: Request, date_key: DateKey, confirm: bool = Query(default=False)):
    """Discard all entries of the day. Requires ?confirm=true."""
    if not confirm:
        raise HTTPException(status_code=400, detail="Clearing a day cannot be undone; repeat with confirm=true")
    state = get_state(request)
    state.clear_day(date_key)
    return _day_response(state, date_key)


# -------------------- Analysis & sharing --------------------
@router.post("/plans/{date_key}/analysis")
def analyze_day(request: Request, date_key: DateKey):
    plan = get_state(request).day_plan(date_key)
    return {"date": date_key, "analysis": analyze_day_plan(plan)}


@router.get("/plans/{date_key}/share")
def share_day(request: Request, date_key: DateKey):
    text = build_share_text(get_state(request).day_plan(date_key))
    if text is None:
        raise HTTPException(status_code=404, detail=NOTHING_TO_SHARE)
    return {"date": date_key, "text": text}


# -------------------- Saving --------------------
@router.post("/save")
def manual_save(request: Request):
    state = get_state(request)
    if not state.save_now():
        raise HTTPException(status_code=500, detail=SAVE_FAILED)
    return {"status": state.autosave.status}


@router.get("/save/status")
def save_status(request: Request):
    autosave = get_state(request).autosave
    return {
        "status": autosave.status if autosave else "idle",
        "pending": bool(autosave and autosave.has_pending),
    }


# -------------------- Calendar & statistics --------------------
@router.get("/calendar/{year}/{month}")
def calendar_month(request: Request, year: int, month: int):
    if not 1 <= month <= 12 or not 1900 <= year <= 9000:
        raise HTTPException(status_code=422, detail="Invalid year or month")
    return month_overview(get_state(request).store, year, month)


@router.get("/stats")
def stats(request: Request, year: Optional[int] = Query(default=None), month: Optional[int] = Query(default=None)):
    if month is not None and year is None:
        year = _date.today().year
    return outcome_summary(get_state(request).store, year, month)

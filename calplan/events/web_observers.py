"""Web-facing observers for planner events.

Subscribes to the GLOBAL_EVENT_BUS for plan.notice and plan.save_status and
keeps a small in-memory ring buffer that the web layer polls
(GET /api/notifications?since=<cursor>).

Each stored event gets an auto-increment id so clients only fetch what is new.
"""
from __future__ import annotations
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import GLOBAL_EVENT_BUS, PLAN_NOTICE, PLAN_SAVE_STATUS

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 100
_started = False


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat(),
        }
        if isinstance(payload, dict):
            for k in ('level', 'message', 'status'):
                if k in payload:
                    evt[k] = payload[k]
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    GLOBAL_EVENT_BUS.subscribe(PLAN_NOTICE, _record)
    GLOBAL_EVENT_BUS.subscribe(PLAN_SAVE_STATUS, _record)
    _started = True


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive), plus next_cursor."""
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events']

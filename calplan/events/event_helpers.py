"""Event helper utilities.

Quick import:
    from calplan.events.event_helpers import publish_save_status, publish_notice
"""
from __future__ import annotations
from typing import Optional

from .Event_Bus import EventBus, GLOBAL_EVENT_BUS, PLAN_SAVE_STATUS, PLAN_NOTICE

__all__ = ['publish_save_status', 'publish_notice', 'PLAN_SAVE_STATUS', 'PLAN_NOTICE']


def publish_save_status(status: str, bus: Optional[EventBus] = None):
    """Publish a plan.save_status event."""
    (bus or GLOBAL_EVENT_BUS).publish(PLAN_SAVE_STATUS, {'status': status})


def publish_notice(message: str, level: str = 'info', bus: Optional[EventBus] = None):
    """Publish a short user-facing message (alert replacement)."""
    (bus or GLOBAL_EVENT_BUS).publish(PLAN_NOTICE, {'level': level, 'message': message})

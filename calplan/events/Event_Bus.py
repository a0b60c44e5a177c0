"""Simple Event Bus / Observer implementation for planner notifications.

Event names:
  plan.save_status -> payload {"status": "idle" | "saving" | "saved"}
  plan.notice      -> payload {"level": "info" | "error", "message": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
PLAN_SAVE_STATUS = "plan.save_status"
PLAN_NOTICE = "plan.notice"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception as e:
				logger.error(f"Error delivering {event_name} to {cb}: {e}")


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


__all__ = ['EventBus', 'GLOBAL_EVENT_BUS', 'PLAN_SAVE_STATUS', 'PLAN_NOTICE']

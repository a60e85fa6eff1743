"""Simple Event Bus / Observer implementation for planner notifications.

Event names used so far:
  image.failed        -> payload {"day": int, "meal_type": str, "name": str}
  meal.saved          -> payload {"day": int, "meal_type": str, "name": str}
  meal.deleted        -> payload {"day": int, "meal_type": str, "name": str}
  meal.regenerated    -> payload {"day": int, "meal_type": str, "name": str, "source": "ai" | "fallback"}
  meal.fill_failed    -> payload {"name": str}
  plan.fallback       -> payload {"days": int, "meals": int}
  shopping.fallback   -> payload {"categories": int}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
IMAGE_FAILED = "image.failed"
MEAL_SAVED = "meal.saved"
MEAL_DELETED = "meal.deleted"
MEAL_REGENERATED = "meal.regenerated"
MEAL_FILL_FAILED = "meal.fill_failed"
PLAN_FALLBACK = "plan.fallback"
SHOPPING_FALLBACK = "shopping.fallback"

ALL_EVENTS = (IMAGE_FAILED, MEAL_SAVED, MEAL_DELETED, MEAL_REGENERATED,
              MEAL_FILL_FAILED, PLAN_FALLBACK, SHOPPING_FALLBACK)


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
            except Exception:  # a broken listener must not break the publisher
                logger.exception("Error delivering %s to %s", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


def create_event(event_name: str, payload: Any = None) -> None:
    """Publish an event on the global bus (sugar function)."""
    GLOBAL_EVENT_BUS.publish(event_name, payload)


__all__ = [
    'EventBus', 'GLOBAL_EVENT_BUS', 'create_event', 'ALL_EVENTS',
    'IMAGE_FAILED', 'MEAL_SAVED', 'MEAL_DELETED', 'MEAL_REGENERATED',
    'MEAL_FILL_FAILED', 'PLAN_FALLBACK', 'SHOPPING_FALLBACK',
]

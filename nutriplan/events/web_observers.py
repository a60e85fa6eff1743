"""Web-facing observers for planner events.

Subscribes to every planner event on GLOBAL_EVENT_BUS and keeps an in-memory ring buffer of
transient notifications (level + message) that the web layer serves from
GET /api/notifications?since=<cursor>.

Design:
  * Each notification carries an auto-increment integer id (cursor) so clients
    only fetch newer ones (since=<last_id_seen>).
  * A Lock guards the buffer; image completions arrive from worker threads.
  * MAX_EVENTS caps memory.
"""
from __future__ import annotations

from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, List

from .Event_Bus import (
    GLOBAL_EVENT_BUS, ALL_EVENTS,
    IMAGE_FAILED, MEAL_SAVED, MEAL_DELETED, MEAL_REGENERATED,
    MEAL_FILL_FAILED, PLAN_FALLBACK, SHOPPING_FALLBACK,
)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300
_started = False


def _describe(event_name: str, payload: Dict[str, Any]) -> tuple[str, str]:
    """Return (level, message) for a planner event."""
    name = payload.get('name', '')
    if event_name == IMAGE_FAILED:
        return 'error', f"Could not generate an image for: {name}"
    if event_name == MEAL_SAVED:
        return 'success', "Meal saved."
    if event_name == MEAL_DELETED:
        return 'success', "Meal deleted."
    if event_name == MEAL_REGENERATED:
        if payload.get('source') == 'fallback':
            return 'info', "Meal regenerated from the local backup."
        return 'success', "Meal regenerated by AI."
    if event_name == MEAL_FILL_FAILED:
        return 'error', "AI error. The meal details could not be filled in."
    if event_name == PLAN_FALLBACK:
        return 'info', "AI plan generation failed; a backup plan was created."
    if event_name == SHOPPING_FALLBACK:
        return 'info', "AI could not generate the shopping list; a backup list was created."
    return 'info', event_name


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    data = payload if isinstance(payload, dict) else {}
    level, message = _describe(event_name, data)
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'level': level,
            'message': message,
            'ts': datetime.now(timezone.utc).isoformat(),
        }
        for k in ('day', 'meal_type', 'name', 'source'):
            if k in data:
                evt[k] = data[k]
        _events.append(evt)
        _next_id += 1
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for event_name in ALL_EVENTS:
        GLOBAL_EVENT_BUS.subscribe(event_name, _record)
    _started = True


def get_events(since: int | None = None) -> Dict[str, Any]:
    """Return notifications newer than 'since' (exclusive), plus next_cursor for polling."""
    with _lock:
        if since is None:
            data = list(_events)
        else:
            data = [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    return {'events': data, 'next_cursor': next_cursor}


def clear():
    """Drop buffered notifications (full reset)."""
    with _lock:
        _events.clear()


__all__ = ['start', 'get_events', 'clear']

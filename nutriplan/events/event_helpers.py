"""Event helper utilities.

Small publish_* wrappers so planner code does not build payload dicts inline.

Quick import:
    from nutriplan.events.event_helpers import publish_image_failed, publish_meal_regenerated
"""
from __future__ import annotations

from .Event_Bus import (
    create_event,
    IMAGE_FAILED, MEAL_SAVED, MEAL_DELETED, MEAL_REGENERATED,
    MEAL_FILL_FAILED, PLAN_FALLBACK, SHOPPING_FALLBACK,
)

__all__ = [
    'publish_image_failed', 'publish_meal_saved', 'publish_meal_deleted',
    'publish_meal_regenerated', 'publish_fill_failed', 'publish_plan_fallback',
    'publish_shopping_fallback',
]


def _slot(day: int, meal_type: str, name: str) -> dict:
    return {'day': day, 'meal_type': meal_type, 'name': name}


def publish_image_failed(day: int, meal_type: str, name: str):
    create_event(IMAGE_FAILED, _slot(day, meal_type, name))


def publish_meal_saved(day: int, meal_type: str, name: str):
    create_event(MEAL_SAVED, _slot(day, meal_type, name))


def publish_meal_deleted(day: int, meal_type: str, name: str):
    create_event(MEAL_DELETED, _slot(day, meal_type, name))


def publish_meal_regenerated(day: int, meal_type: str, name: str, source: str):
    """source is 'ai' or 'fallback'."""
    payload = _slot(day, meal_type, name)
    payload['source'] = source
    create_event(MEAL_REGENERATED, payload)


def publish_fill_failed(name: str):
    create_event(MEAL_FILL_FAILED, {'name': name})


def publish_plan_fallback(days: int, meals: int):
    create_event(PLAN_FALLBACK, {'days': days, 'meals': meals})


def publish_shopping_fallback(categories: int):
    create_event(SHOPPING_FALLBACK, {'categories': categories})

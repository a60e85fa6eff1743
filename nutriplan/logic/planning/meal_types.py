"""Meal-type labels derived from the configured meals per day.

Every view (builder grid, review grid, print output, plan materialization) indexes day plans
with this list, so it is only ever computed here.
"""
from typing import List

from nutriplan.utilities.constants import (
    ALLOWED_MEAL_COUNTS, BASE_MEAL_TYPES, LATE_SNACK, SNACK,
)


def meal_types_for(meals: int) -> List[str]:
    """Breakfast, Lunch, Dinner; 'Snack' before Dinner from 4 meals; 'Late Snack' appended at 5.

    >>> meal_types_for(5)
    ['Breakfast', 'Lunch', 'Snack', 'Dinner', 'Late Snack']
    """
    labels = list(BASE_MEAL_TYPES)
    if meals >= 4:
        labels.insert(labels.index("Dinner"), SNACK)
    if meals >= 5:
        labels.append(LATE_SNACK)
    return labels


def is_valid_meal_count(meals: int) -> bool:
    return meals in ALLOWED_MEAL_COUNTS


def is_breakfast(meal_type: str) -> bool:
    return "breakfast" in (meal_type or "").lower()


__all__ = ['meal_types_for', 'is_valid_meal_count', 'is_breakfast']

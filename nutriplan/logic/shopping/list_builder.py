"""Shopping list builder.

build_fallback_shopping_list(plan, meal_types) produces the local backup list used when the
AI service cannot produce one: a single '(Backup)' category with one
'For <meal>: <ingredients>' line per filled meal, day-major then meal-type order.
"""
from typing import List, Optional

from nutriplan.domain.Plan import Plan
from nutriplan.utilities.constants import BACKUP_CATEGORY


def _line_for(name: str, ingredients: List[str]) -> str:
    return f"For {name}: {', '.join(ingredients)}".rstrip()


def build_fallback_shopping_list(plan: Plan, meal_types: Optional[List[str]] = None) -> str:
    """Return the backup markdown text for plan.

    Args:
        plan: the materialized plan.
        meal_types: label order for each day; when None each day's own key order is used.
    """
    lines = [f"### {BACKUP_CATEGORY}"]
    for _, _, meal in plan.iter_meals(meal_types):
        lines.append(f"- {_line_for(meal.name, meal.ingredients)}")
    return "\n".join(lines) + "\n"


__all__ = ['build_fallback_shopping_list']

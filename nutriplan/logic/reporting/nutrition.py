"""Calorie aggregation over a plan."""
from typing import Dict, List

from nutriplan.domain.Meal import Meal
from nutriplan.domain.Plan import Plan
from nutriplan.domain.PlanConfig import PlanConfig
from nutriplan.logic.planning.meal_types import meal_types_for


def day_calories(day_plan: Dict[str, Meal], meal_types: List[str]) -> int:
    """Sum of calories of the filled slots of one day."""
    total = 0
    for meal_type in meal_types:
        meal = day_plan.get(meal_type)
        if meal is not None and not meal.is_empty:
            total += meal.calories or 0
    return total


def compute_plan_nutrition(plan: Plan, config: PlanConfig):
    """Aggregate calories for the plan.

    Returns structure:
    {
      'days': [ {'day': 0, 'calories': int, 'target': int, 'over': bool, 'filled': int}, ... ],
      'plan_total': int,
      'daily_target': int
    }
    """
    meal_types = meal_types_for(config.meals)
    target = config.calories or 0
    days = []
    plan_total = 0
    for index, day in enumerate(plan):
        cals = day_calories(day, meal_types)
        filled = sum(1 for t in meal_types if day.get(t) is not None and not day[t].is_empty)
        days.append({
            'day': index,
            'calories': cals,
            'target': target,
            'over': cals > target,
            'filled': filled,
        })
        plan_total += cals
    return {'days': days, 'plan_total': plan_total, 'daily_target': target}


__all__ = ["day_calories", "compute_plan_nutrition"]

"""Plan materialization: the one-time construction of the full plan when leaving the config step."""
import logging
import random
from typing import List, Optional

from nutriplan.domain.Meal import Meal
from nutriplan.domain.Plan import Plan
from nutriplan.domain.PlanConfig import PlanConfig
from nutriplan.events.event_helpers import publish_plan_fallback
from nutriplan.logic.fallback.generator import generate_fallback_meal
from nutriplan.logic.planning.meal_types import meal_types_for
from nutriplan.utilities.constants import DEFAULT_DAYS, MODE_MANUAL

logger = logging.getLogger(__name__)


def _day_count(config: PlanConfig) -> int:
    try:
        days = int(config.days)
    except (TypeError, ValueError):
        days = 0
    return days or DEFAULT_DAYS


def empty_plan(days: int, meal_types: List[str]) -> Plan:
    """Every day gets every label mapped to an explicit empty meal."""
    return Plan([{t: Meal() for t in meal_types} for _ in range(days)])


def fallback_plan(config: PlanConfig, meal_types: List[str],
                  rng: Optional[random.Random] = None) -> Plan:
    calories_per_meal = config.calories_per_meal
    return Plan([
        {t: generate_fallback_meal(t, calories_per_meal, config.diet_style, rng=rng) for t in meal_types}
        for _ in range(_day_count(config))
    ])


def materialize_plan(config: PlanConfig, gateway, rng: Optional[random.Random] = None) -> Plan:
    """Build the plan for config.

    manual -> empty slots. Otherwise ask the gateway; an absent or empty answer degrades to a
    fully fallback-generated plan.
    """
    meal_types = meal_types_for(config.meals)
    days = _day_count(config)

    if config.mode == MODE_MANUAL:
        return empty_plan(days, meal_types)

    generated = gateway.generate_plan(config, meal_types)
    if generated and len(generated) == days:
        return generated

    logger.warning("AI plan generation failed, using fallback (%s days x %s meals)", days, len(meal_types))
    publish_plan_fallback(days, len(meal_types))
    return fallback_plan(config, meal_types, rng=rng)


__all__ = ['empty_plan', 'fallback_plan', 'materialize_plan']

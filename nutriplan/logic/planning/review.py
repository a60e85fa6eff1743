"""Read-only review summary and recipe detail, shared by the review endpoints and the print output."""
from typing import List, Optional

from nutriplan.domain.ImageCache import ImageCache
from nutriplan.domain.Meal import Meal
from nutriplan.domain.Plan import Plan
from nutriplan.domain.PlanConfig import PlanConfig
from nutriplan.infra.State_Repository import StateRepository
from nutriplan.logic.planning.errors import SlotNotFound
from nutriplan.logic.planning.meal_types import meal_types_for
from nutriplan.logic.reporting.nutrition import compute_plan_nutrition
from nutriplan.logic.shopping.list_parser import parse_shopping_list


def meal_detail(meal: Meal, meal_type: str, image: Optional[str]) -> dict:
    d = meal.to_dict()
    d["meal_type"] = meal_type
    d["image"] = image
    return d


def plan_days(plan: Plan, meal_types: List[str], cache: ImageCache) -> List[dict]:
    """Filled meals per day, in meal-type order, each with its resolved image."""
    days = []
    for day_index, day in enumerate(plan):
        meals = []
        for meal_type in meal_types:
            meal = day.get(meal_type)
            if meal is None or meal.is_empty:
                continue
            meals.append(meal_detail(meal, meal_type, cache.image_for(day_index, meal_type, meal.name)))
        days.append({"day": day_index, "title": f"Day {day_index + 1}", "meals": meals})
    return days


def build_document(config: PlanConfig, plan: Plan, cache: ImageCache, shopping_text: str) -> dict:
    """Everything the review screen and the printable plan render, from one set of inputs."""
    meal_types = meal_types_for(config.meals)
    return {
        "config": config.to_dict(),
        "restrictions": config.restrictions_text,
        "meal_types": meal_types,
        "days": plan_days(plan, meal_types, cache),
        "nutrition": compute_plan_nutrition(plan, config),
        "shopping_list": parse_shopping_list(shopping_text).to_dict(),
    }


def load_document(repository: StateRepository) -> dict:
    with repository.lock:
        config = repository.load_config()
        plan = repository.load_plan()
        cache = repository.load_image_cache()
        shopping_text = repository.load_shopping_list()
    return build_document(config, plan, cache, shopping_text)


def recipe_detail(repository: StateRepository, day_index: int, meal_type: str) -> dict:
    plan = repository.load_plan()
    config = repository.load_config()
    if not plan.has_day(day_index) or meal_type not in meal_types_for(config.meals):
        raise SlotNotFound(day_index, meal_type)
    meal = plan.get_meal(day_index, meal_type)
    if meal.is_empty:
        raise SlotNotFound(day_index, meal_type)
    cache = repository.load_image_cache()
    return meal_detail(meal, meal_type, cache.image_for(day_index, meal_type, meal.name))


__all__ = ['build_document', 'load_document', 'recipe_detail', 'plan_days']

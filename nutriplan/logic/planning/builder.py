"""Builder operations on the per-day meal grid: view, save, delete, regenerate, AI fill."""
import logging
import random
from typing import Optional

from nutriplan.domain.Meal import Meal
from nutriplan.events.event_helpers import (
    publish_fill_failed, publish_meal_deleted, publish_meal_regenerated, publish_meal_saved,
)
from nutriplan.infra.State_Repository import StateRepository
from nutriplan.logic.fallback.generator import generate_fallback_meal
from nutriplan.logic.planning.errors import ConfirmationRequired, InvalidTransition, SlotNotFound
from nutriplan.logic.planning.meal_types import meal_types_for
from nutriplan.logic.planning.wizard import WizardStep
from nutriplan.logic.reporting.nutrition import day_calories

logger = logging.getLogger(__name__)


class PlanBuilder:
    def __init__(self, repository: StateRepository, gateway):
        self.repository = repository
        self.gateway = gateway

    def _require_builder(self, action: str) -> None:
        """Plan edits are only allowed on the builder step; review works on the finalized plan."""
        step = self.repository.load_step() or WizardStep.INTRO.value
        if step != WizardStep.BUILDER.value:
            raise InvalidTransition(action, step)

    def _check_slot(self, plan, config, day_index: int, meal_type: Optional[str] = None):
        if not plan.has_day(day_index):
            raise SlotNotFound(day_index)
        if meal_type is not None and meal_type not in meal_types_for(config.meals):
            raise SlotNotFound(day_index, meal_type)

    def day_view(self, day_index: int) -> dict:
        """Grid for one day: every slot with its meal (or empty), image state and calorie progress."""
        plan = self.repository.load_plan()
        config = self.repository.load_config()
        self._check_slot(plan, config, day_index)
        cache = self.repository.load_image_cache()
        meal_types = meal_types_for(config.meals)

        slots = []
        for meal_type in meal_types:
            meal = plan.get_meal(day_index, meal_type)
            slot = {"meal_type": meal_type, "meal": meal.to_dict(), "filled": not meal.is_empty}
            if not meal.is_empty:
                slot["image_status"] = cache.status_for(day_index, meal_type, meal.name)
                slot["image"] = cache.image_for(day_index, meal_type, meal.name)
            slots.append(slot)

        current = day_calories(plan[day_index], meal_types)
        target = config.calories or 0
        return {
            "day": day_index,
            "days": len(plan),
            "meal_types": meal_types,
            "slots": slots,
            "calories": {
                "client_name": config.client_name,
                "plan_name": config.plan_name,
                "current": current,
                "target": target,
                "percentage": min(current / target * 100, 100) if target > 0 else 0,
                "over": current > target,
            },
        }

    def save_meal(self, day_index: int, meal_type: str, data: dict) -> Meal:
        """Store an edited meal. A changed name drops the image cached under the old name."""
        self._require_builder("edit a meal")
        with self.repository.lock:
            plan = self.repository.load_plan()
            config = self.repository.load_config()
            self._check_slot(plan, config, day_index, meal_type)
            new_meal = Meal.from_editor(data)
            old_meal = plan.get_meal(day_index, meal_type)
            if old_meal.name != new_meal.name:
                self._purge_image(day_index, meal_type, old_meal.name)
            plan.set_meal(day_index, meal_type, new_meal)
            self.repository.save_plan(plan)
        publish_meal_saved(day_index, meal_type, new_meal.name)
        return new_meal

    def delete_meal(self, day_index: int, meal_type: str, confirm: bool = False) -> Meal:
        """Empty a slot. Destructive, so it needs an explicit confirm. Returns the removed meal."""
        if not confirm:
            raise ConfirmationRequired("Deleting a meal requires confirmation")
        self._require_builder("delete a meal")
        with self.repository.lock:
            plan = self.repository.load_plan()
            config = self.repository.load_config()
            self._check_slot(plan, config, day_index, meal_type)
            old_meal = plan.get_meal(day_index, meal_type)
            if old_meal.is_empty:
                return old_meal
            self._purge_image(day_index, meal_type, old_meal.name)
            plan.set_meal(day_index, meal_type, Meal())
            self.repository.save_plan(plan)
        publish_meal_deleted(day_index, meal_type, old_meal.name)
        return old_meal

    def regenerate_meal(self, day_index: int, meal_type: str,
                        rng: Optional[random.Random] = None) -> tuple[Meal, str]:
        """Replace a slot with a fresh AI meal, or a fallback meal when the AI yields nothing.

        Returns (meal, source) with source 'ai' or 'fallback'.
        """
        self._require_builder("regenerate a meal")
        plan = self.repository.load_plan()
        config = self.repository.load_config()
        self._check_slot(plan, config, day_index, meal_type)
        calories_per_meal = config.calories_per_meal

        new_meal = self.gateway.regenerate_meal(meal_type, config, calories_per_meal)
        source = "ai"
        if new_meal is None or new_meal.is_empty:
            logger.info("Regeneration for day %s %s fell back to local generator", day_index, meal_type)
            new_meal = generate_fallback_meal(meal_type, calories_per_meal, config.diet_style, rng=rng)
            source = "fallback"

        with self.repository.lock:
            plan = self.repository.load_plan()
            self._check_slot(plan, config, day_index, meal_type)
            old_meal = plan.get_meal(day_index, meal_type)
            if old_meal.name != new_meal.name:
                self._purge_image(day_index, meal_type, old_meal.name)
            plan.set_meal(day_index, meal_type, new_meal)
            self.repository.save_plan(plan)
        publish_meal_regenerated(day_index, meal_type, new_meal.name, source)
        return new_meal, source

    def fill_meal(self, meal_name: str) -> Optional[Meal]:
        """AI-complete the details of a named dish for the editor. Nothing is persisted."""
        config = self.repository.load_config()
        meal = self.gateway.fill_meal_details(meal_name, config, config.calories_per_meal)
        if meal is None:
            publish_fill_failed(meal_name)
        return meal

    def _purge_image(self, day_index: int, meal_type: str, meal_name: str) -> None:
        if not meal_name:
            return
        cache = self.repository.load_image_cache()
        if cache.purge(day_index, meal_type, meal_name):
            self.repository.save_image_cache(cache)


__all__ = ['PlanBuilder']

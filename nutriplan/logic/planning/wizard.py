"""Planner wizard: intro -> config -> builder <-> review, with a full reset from anywhere.

The wizard owns every transition side effect: plan materialization on config submit,
shopping-list generation on entering review, and the full reset on going home.
"""
import logging
import random
from enum import Enum
from typing import Optional

from nutriplan.domain.ImageCache import ImageCache
from nutriplan.domain.Plan import Plan
from nutriplan.domain.PlanConfig import PlanConfig
from nutriplan.events import web_observers
from nutriplan.events.event_helpers import publish_shopping_fallback
from nutriplan.infra.State_Repository import StateRepository
from nutriplan.logic.planning.errors import InvalidTransition, WizardError
from nutriplan.logic.planning.materialize import materialize_plan
from nutriplan.logic.planning.meal_types import meal_types_for
from nutriplan.logic.shopping.list_builder import build_fallback_shopping_list
from nutriplan.logic.shopping.list_parser import parse_shopping_list
from nutriplan.utilities.constants import MODE_AI, MODE_MANUAL

logger = logging.getLogger(__name__)


class WizardStep(Enum):
    INTRO = "intro"
    CONFIG = "config"
    BUILDER = "builder"
    REVIEW = "review"


class PlannerWizard:
    def __init__(self, repository: StateRepository, gateway):
        self.repository = repository
        self.gateway = gateway

    # --- step ---
    def current_step(self) -> WizardStep:
        """Persisted step; an unrecognized value is a corrupted state and forces a full reset."""
        raw = self.repository.load_step()
        if raw is None:
            return WizardStep.INTRO
        try:
            return WizardStep(raw)
        except ValueError:
            logger.error("Corrupted wizard step %r; performing full reset", raw)
            self.go_home()
            return WizardStep.INTRO

    def _require(self, action: str, *allowed: WizardStep) -> WizardStep:
        step = self.current_step()
        if step not in allowed:
            raise InvalidTransition(action, step.value)
        return step

    def recover(self) -> None:
        """Startup cleanup after an interrupted run.

        Clears the loading flag and drops image entries still marked loading, since their
        requests died with the previous process; the next scan claims them again.
        """
        if self.repository.load_loading():
            logger.warning("Clearing stale loading flag")
            self.repository.save_loading(False)
        with self.repository.lock:
            cache = self.repository.load_image_cache()
            dropped = cache.drop_pending()
            if dropped:
                logger.warning("Dropping %s stale pending image request(s)", dropped)
                self.repository.save_image_cache(cache)

    # --- transitions ---
    def choose_mode(self, mode: str) -> PlanConfig:
        """intro -> config, recording the chosen mode."""
        self._require("choose a mode", WizardStep.INTRO)
        if mode not in (MODE_AI, MODE_MANUAL):
            raise WizardError(f"Unknown mode: {mode}")
        config = self.repository.load_config().updated(mode=mode)
        self.repository.save_config(config)
        self.repository.save_step(WizardStep.CONFIG.value)
        return config

    def update_config(self, **changes) -> PlanConfig:
        """Edit the configuration; only allowed while on the config step."""
        self._require("edit the configuration", WizardStep.CONFIG)
        config = self.repository.load_config().updated(**changes)
        self.repository.save_config(config)
        return config

    def submit_config(self, rng: Optional[random.Random] = None) -> Plan:
        """config -> builder. Materializes the plan; the loading flag is set for the duration."""
        self._require("submit the configuration", WizardStep.CONFIG)
        self.repository.save_loading(True)
        try:
            config = self.repository.load_config()
            plan = materialize_plan(config, self.gateway, rng=rng)
            with self.repository.lock:
                self.repository.save_plan(plan)
                # a rebuilt plan invalidates everything derived from the previous one
                self.repository.save_image_cache(ImageCache())
                self.repository.save_shopping_list("")
                self.repository.save_step(WizardStep.BUILDER.value)
        finally:
            self.repository.save_loading(False)
        logger.info("Plan materialized: %s", plan)
        return plan

    def go_review(self) -> str:
        """builder -> review, then generate the shopping list for the finalized plan."""
        self._require("open the review", WizardStep.BUILDER)
        self.repository.save_step(WizardStep.REVIEW.value)
        return self.generate_shopping_list()

    def go_back(self) -> WizardStep:
        """review -> builder, builder -> config."""
        step = self._require("go back", WizardStep.REVIEW, WizardStep.BUILDER)
        target = WizardStep.BUILDER if step is WizardStep.REVIEW else WizardStep.CONFIG
        self.repository.save_step(target.value)
        return target

    def go_home(self) -> None:
        """Full reset: every persisted record is removed and the wizard starts over."""
        self.repository.clear()
        web_observers.clear()
        logger.info("Wizard reset to intro")

    # --- review ---
    def generate_shopping_list(self) -> str:
        """AI shopping list for the current plan; the local backup list when the AI has nothing usable."""
        self._require("generate the shopping list", WizardStep.REVIEW)
        plan = self.repository.load_plan()
        if not plan:
            return self.repository.load_shopping_list()
        config = self.repository.load_config()

        text = self.gateway.generate_shopping_list(plan, config)
        if not text or not parse_shopping_list(text).is_available:
            logger.warning("AI shopping list unavailable; building backup list")
            text = build_fallback_shopping_list(plan, meal_types_for(config.meals))
            publish_shopping_fallback(len(parse_shopping_list(text).categories))
        self.repository.save_shopping_list(text)
        return text

    def snapshot(self) -> dict:
        step = self.current_step()
        config = self.repository.load_config()
        return {
            "step": step.value,
            "loading": self.repository.load_loading(),
            "config": config.to_dict(),
            "meal_types": meal_types_for(config.meals),
            "plan": self.repository.load_plan().to_list(),
            "shopping_list": self.repository.load_shopping_list(),
            "image_cache_size": len(self.repository.load_image_cache()),
        }


__all__ = ['WizardStep', 'PlannerWizard']

"""PlanConfig domain entity: who the plan is for and how it should be built."""
from typing import Optional

from nutriplan.domain.Meal import round_half_up
from nutriplan.utilities.constants import (
    DEFAULT_CALORIES, DEFAULT_DAYS, DEFAULT_DIET_STYLE, DEFAULT_MEALS,
)


class PlanConfig:
    FIELDS = ("client_name", "plan_name", "objective", "diet_style", "days",
              "meals", "calories", "restrictions", "mode")

    def __init__(self, client_name: str = "", plan_name: str = "", objective: str = "",
                 diet_style: str = DEFAULT_DIET_STYLE, days: int = DEFAULT_DAYS,
                 meals: int = DEFAULT_MEALS, calories: int = DEFAULT_CALORIES,
                 restrictions: str = "", mode: Optional[str] = None):
        self.client_name = client_name
        self.plan_name = plan_name
        self.objective = objective
        self.diet_style = diet_style
        self.days = days
        self.meals = meals
        self.calories = calories
        self.restrictions = restrictions
        self.mode = mode

    def __str__(self) -> str:
        return (f"{self.plan_name or 'Plan'} for {self.client_name or '-'} - {self.days} days x "
                f"{self.meals} meals - {self.calories} kcal - {self.diet_style} - mode: {self.mode}")

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, PlanConfig):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @property
    def calories_per_meal(self) -> int:
        if not self.meals:
            return 0
        return round_half_up(self.calories / self.meals)

    @property
    def restrictions_text(self) -> str:
        return self.restrictions or "None"

    @staticmethod
    def from_dict(data) -> "PlanConfig":
        '''Creates a PlanConfig from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        filtered = {k: v for k, v in d.items() if k in PlanConfig.FIELDS}
        return PlanConfig(**filtered)

    def to_dict(self) -> dict:
        return {k: getattr(self, k) for k in self.FIELDS}

    def updated(self, **changes) -> "PlanConfig":
        d = self.to_dict()
        d.update({k: v for k, v in changes.items() if k in self.FIELDS})
        return PlanConfig.from_dict(d)

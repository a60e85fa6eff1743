"""Plan domain entity: ordered day plans, each mapping a meal-type label to a Meal (or the empty meal)."""
from typing import Dict, Iterator, List, Optional, Tuple

from nutriplan.domain.Meal import Meal

DayPlan = Dict[str, Meal]


class Plan:
    def __init__(self, days: Optional[List[DayPlan]] = None):
        self.days: List[DayPlan] = [dict(d) for d in days] if days else []

    def __len__(self) -> int:
        return len(self.days)

    def __getitem__(self, index: int) -> DayPlan:
        return self.days[index]

    def __iter__(self) -> Iterator[DayPlan]:
        return iter(self.days)

    def __bool__(self) -> bool:
        return bool(self.days)

    def __str__(self) -> str:
        filled = sum(1 for _, _, m in self.iter_meals())
        return f"Plan - {len(self.days)} days - {filled} filled meals"

    __repr__ = __str__

    def has_day(self, day_index: int) -> bool:
        return 0 <= day_index < len(self.days)

    def get_meal(self, day_index: int, meal_type: str) -> Meal:
        return self.days[day_index].get(meal_type) or Meal()

    def set_meal(self, day_index: int, meal_type: str, meal: Meal) -> None:
        self.days[day_index][meal_type] = meal

    def iter_meals(self, meal_types: Optional[List[str]] = None) -> Iterator[Tuple[int, str, Meal]]:
        """Yield (day_index, meal_type, meal) for filled slots, day-major then meal-type order."""
        for day_index, day in enumerate(self.days):
            keys = meal_types if meal_types is not None else list(day.keys())
            for meal_type in keys:
                meal = day.get(meal_type)
                if meal is not None and not meal.is_empty:
                    yield day_index, meal_type, meal

    @staticmethod
    def from_list(data) -> "Plan":
        '''Build from the persisted/wire shape: a list of {label: meal-dict-or-{}} objects.'''
        days = []
        for raw_day in data or []:
            if not isinstance(raw_day, dict):
                continue
            days.append({str(k): Meal.from_dict(v) for k, v in raw_day.items()})
        return Plan(days)

    def to_list(self) -> List[dict]:
        return [{k: m.to_dict() for k, m in day.items()} for day in self.days]

"""Meal domain entity: name, description, calories, ingredients, instructions, cook time."""
import math
from typing import List, Optional, Union

from nutriplan.utilities.constants import UNTITLED_MEAL, UNKNOWN_COOK_TIME

LinesInput = Union[List[str], str, None]


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (2000/3 -> 667, 2.5 -> 3)."""
    return int(math.floor(float(value) + 0.5))


def normalize_lines(value: LinesInput) -> List[str]:
    """Accept a list of strings or one newline-delimited string; return clean ordered lines.

    A leading '- ' bullet is dropped, blank lines are skipped.
    """
    if value is None:
        return []
    if isinstance(value, str):
        raw = value.split("\n")
    elif isinstance(value, (list, tuple)):
        raw = [str(v) for v in value if v is not None]
    else:
        raw = [str(value)]
    lines = []
    for line in raw:
        text = line.strip()
        if text.startswith("- "):
            text = text[2:].strip()
        elif text == "-":
            text = ""
        if text:
            lines.append(text)
    return lines


def _to_calories(value) -> int:
    try:
        return round_half_up(float(value))
    except (TypeError, ValueError):
        return 0


class Meal:
    def __init__(self, name: str = "", description: str = "", calories: int = 0,
                 ingredients: LinesInput = None, instructions: LinesInput = None,
                 cook_time: Optional[str] = None):
        self.name = (name or "").strip()
        self.description = description or ""
        self.calories = _to_calories(calories)
        self.ingredients = normalize_lines(ingredients)
        self.instructions = normalize_lines(instructions)
        self.cook_time = cook_time

    def __str__(self) -> str:
        return f"{self.name} - {self.calories} kcal - {self.cook_time or UNKNOWN_COOK_TIME}"

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, Meal):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @property
    def is_empty(self) -> bool:
        return not self.name

    @staticmethod
    def from_dict(data) -> "Meal":
        '''Creates a Meal from a wire/persisted dict. Ignores unknown keys; {} gives the empty meal.'''
        d = dict(data) if isinstance(data, dict) else {}
        return Meal(
            name=str(d.get("name") or ""),
            description=str(d.get("description") or ""),
            calories=d.get("calories", 0),
            ingredients=d.get("ingredients"),
            instructions=d.get("instructions"),
            cook_time=d.get("cookTime", d.get("cook_time")),
        )

    @staticmethod
    def from_editor(data) -> "Meal":
        '''Build a meal the way the editor saves it: missing fields get their placeholders.'''
        d = dict(data) if isinstance(data, dict) else {}
        meal = Meal.from_dict(d)
        if not meal.name:
            meal.name = UNTITLED_MEAL
        if not meal.cook_time:
            meal.cook_time = UNKNOWN_COOK_TIME
        return meal

    def to_dict(self) -> dict:
        '''Serialize for JSON persistence; the empty meal is stored as {}.'''
        if self.is_empty:
            return {}
        d = {
            "name": self.name,
            "description": self.description,
            "calories": self.calories,
            "ingredients": list(self.ingredients),
            "instructions": list(self.instructions),
        }
        if self.cook_time is not None:
            d["cookTime"] = self.cook_time
        return d

"""
Input validation schemas using Pydantic for better data integrity.
"""
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nutriplan.logic.planning.meal_types import is_valid_meal_count
from nutriplan.utilities.constants import DIET_STYLES, MAX_DAYS, MIN_DAYS


class ModeInput(BaseModel):
    """Schema for the intro step: how the plan gets built."""
    mode: Literal["ai", "manual"]


class ConfigInput(BaseModel):
    """Schema for configuration edits. Omitted fields keep their current value."""
    client_name: Optional[str] = Field(None, max_length=200)
    plan_name: Optional[str] = Field(None, max_length=200)
    objective: Optional[str] = Field(None, max_length=500)
    diet_style: Optional[str] = None
    days: Optional[int] = Field(None, ge=MIN_DAYS, le=MAX_DAYS)
    meals: Optional[int] = None
    calories: Optional[int] = Field(None, ge=1, le=10000)
    restrictions: Optional[str] = Field(None, max_length=2000)

    @field_validator('client_name', 'plan_name', 'objective', 'restrictions')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('diet_style')
    @classmethod
    def validate_diet_style(cls, v):
        if v is not None and v not in DIET_STYLES:
            raise ValueError(f"diet_style must be one of: {', '.join(DIET_STYLES)}")
        return v

    @field_validator('meals')
    @classmethod
    def validate_meals(cls, v):
        if v is not None and not is_valid_meal_count(v):
            raise ValueError('meals must be 3, 4 or 5')
        return v

    def changes(self) -> dict:
        return self.model_dump(exclude_none=True)


class MealInput(BaseModel):
    """Schema for a meal saved from the editor. Lists may arrive as arrays or newline text."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field("", max_length=200)
    description: str = Field("", max_length=2000)
    calories: float = Field(0, ge=0, le=10000)
    ingredients: Union[List[str], str] = Field(default_factory=list)
    instructions: Union[List[str], str] = Field(default_factory=list)
    cook_time: Optional[str] = Field(None, alias="cookTime", max_length=50)

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        return v.strip()

    def to_meal_dict(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "calories": self.calories,
            "ingredients": self.ingredients,
            "instructions": self.instructions,
            "cookTime": self.cook_time,
        }


class FillInput(BaseModel):
    """Schema for AI-filling a meal from its name."""
    name: str = Field(..., min_length=1, max_length=200)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Meal name cannot be empty')
        return v.strip()


class AIRequest(BaseModel):
    """Schema for the AI proxy: one of the five request kinds plus its payload."""
    type: str
    payload: dict = Field(default_factory=dict)

from typing import Final

# Meal-type labels. Snack goes before Dinner at 4 meals, Late Snack is appended at 5.
BASE_MEAL_TYPES: Final[tuple[str, ...]] = ("Breakfast", "Lunch", "Dinner")
SNACK: Final[str] = "Snack"
LATE_SNACK: Final[str] = "Late Snack"
ALLOWED_MEAL_COUNTS: Final[tuple[int, ...]] = (3, 4, 5)

DIET_STYLES: Final[tuple[str, ...]] = (
    "Omnivore",
    "Vegetarian",
    "Vegan",
    "Pescatarian",
    "Gluten-free",
    "Lactose-free",
    "Low-carb",
    "Ketogenic (Keto)",
    "Mediterranean",
)

DEFAULT_DIET_STYLE: Final[str] = "Omnivore"
DEFAULT_DAYS: Final[int] = 3
DEFAULT_MEALS: Final[int] = 3
DEFAULT_CALORIES: Final[int] = 2000
MIN_DAYS: Final[int] = 1
MAX_DAYS: Final[int] = 7

MODE_AI: Final[str] = "ai"
MODE_MANUAL: Final[str] = "manual"

# Image cache sentinels
IMAGE_LOADING: Final[str] = "loading"
IMAGE_FAILED: Final[str] = "failed"

# Bump when the shape of a persisted record changes; stale records load as defaults.
STATE_SCHEMA_VERSION: Final[int] = 1

UNTITLED_MEAL: Final[str] = "Untitled"
UNKNOWN_COOK_TIME: Final[str] = "N/A"
GENERAL_CATEGORY: Final[str] = "General"
BACKUP_CATEGORY: Final[str] = "Shopping List (Backup)"

MEAL_JSON_FORMAT: Final[str] = (
    """
{
    "name": str,
    "description": str,
    "calories": int,
    "ingredients": [str, str],
    "instructions": [str, str],
    "cookTime": str
}
    """
)

PLAN_PROMPT_TEMPLATE: Final[str] = (
    """
    Create a meal plan as JSON for {days} days. STRICT RULES:
    1. The output MUST be a JSON array.
    2. The array MUST contain exactly {days} objects.
    3. EVERY day object MUST have ALL of these keys: {meal_types}. Do not omit any.
    4. The value for every meal key MUST be a complete meal object with this format:
    {meal_format}
    PLAN DATA:
    - Objective: {objective}
    - Diet style: {diet_style}
    - Restrictions: {restrictions}
    - Daily calories: ~{calories} kcal
    Respond ONLY with the JSON.
    """
)

FILL_PROMPT_TEMPLATE: Final[str] = (
    """
    Fill in the details for the dish: "{name}".
    DATA: Objective: {objective}, Diet: {diet_style}, Restrictions: {restrictions}, Calories: {calories} kcal.
    Respond ONLY with a JSON object in this format:
    {meal_format}
    """
)

REGENERATE_PROMPT_TEMPLATE: Final[str] = (
    """
    Create a '{meal_type}' dish of ~{calories} kcal.
    DATA: Objective: {objective}, Diet: {diet_style}, Restrictions: {restrictions}.
    Respond ONLY with a JSON object in this format:
    {meal_format}
    """
)

IMAGE_PROMPT_TEMPLATE: Final[str] = (
    "Professional, appetizing food photography of the dish: \"{name}\" ({description}). "
    "Bright, clear, centered image. No text, logos or people."
)

SHOPPING_PROMPT_TEMPLATE: Final[str] = (
    """
    Create a shopping list in Markdown for this meal plan: {plan}
    DATA: Diet: {diet_style}, Restrictions: {restrictions}.
    Respond ONLY with the Markdown list, grouped by category (### Category) and using dashes (-).
    No introductory text.
    """
)

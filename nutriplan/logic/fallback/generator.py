"""Local fallback meal generator.

generate_fallback_meal(meal_type, calories_per_meal, diet_style) never fails and performs no I/O.
It is used whenever the AI service yields nothing usable.
"""
import random
from typing import Optional

from nutriplan.domain.Meal import Meal, round_half_up
from nutriplan.logic.planning.meal_types import is_breakfast
from nutriplan.utilities.constants import DEFAULT_DIET_STYLE

FALLBACK_DB = {
    "proteins": ["Grilled chicken", "Baked salmon", "Marinated tofu", "Lean beef", "Scrambled eggs",
                 "Stewed lentils", "Turkey breast", "Cod pil pil", "Cottage cheese"],
    "veg_proteins": ["Marinated tofu", "Stewed lentils", "Spiced chickpeas", "Grilled plant-based strips",
                     "Sauteed tempeh", "Black beans", "Seitan", "Edamame"],
    "carbs": ["with brown rice", "with quinoa", "with roasted sweet potato", "with whole-wheat pasta",
              "with avocado toast", "with mashed potatoes", "with couscous", "with whole-wheat pita"],
    "veggies": ["and steamed broccoli", "and mixed salad", "and green asparagus", "and sauteed spinach",
                "and grilled zucchini", "and roasted peppers", "and sauteed mushrooms"],
    "breakfasts": [
        {"name": "Oatmeal with Berries", "calories": 350,
         "description": "Oats cooked with milk or water, topped with fresh strawberries and blueberries.",
         "ingredients": ["50g Oats", "150ml Milk", "50g Berries"],
         "instructions": ["1. Cook the oats with the milk.", "2. Serve with the berries."]},
        {"name": "Avocado and Egg Toast", "calories": 400,
         "description": "Toasted whole-grain bread with half a mashed avocado and a poached egg on top.",
         "ingredients": ["2 slices Whole-grain bread", "1 Avocado", "2 Eggs"],
         "instructions": ["1. Toast the bread.", "2. Mash the avocado.", "3. Cook the eggs."]},
        {"name": "Greek Yogurt with Granola", "calories": 300,
         "description": "Plain unsweetened Greek yogurt with crunchy granola and a touch of honey.",
         "ingredients": ["150g Greek yogurt", "30g Granola", "1 tbsp Honey"],
         "instructions": ["1. Put the yogurt in a bowl.", "2. Add the granola and honey."]},
    ],
    "veg_breakfasts": [
        {"name": "Oatmeal with Berries (Vegan)", "calories": 350,
         "description": "Oats cooked with almond milk, topped with fresh strawberries and blueberries.",
         "ingredients": ["50g Oats", "150ml Almond milk", "50g Berries"],
         "instructions": ["1. Cook the oats with the milk.", "2. Serve with the berries."]},
        {"name": "Avocado and Tomato Toast", "calories": 300,
         "description": "Toasted whole-grain bread with half a mashed avocado and cherry tomatoes.",
         "ingredients": ["2 slices Whole-grain bread", "1 Avocado", "5 Cherry tomatoes"],
         "instructions": ["1. Toast the bread.", "2. Mash the avocado and top with the tomatoes."]},
        {"name": "Tofu Scramble", "calories": 320,
         "description": "Crumbled firm tofu sauteed with turmeric, spinach and bell pepper.",
         "ingredients": ["150g Firm tofu", "50g Spinach", "1/4 Red bell pepper", "1/2 tsp Turmeric"],
         "instructions": ["1. Crumble the tofu.", "2. Saute with the vegetables and turmeric."]},
    ],
}

BREAKFAST_COOK_TIME = "10 min"
MAIN_COOK_TIME = "20-30 min"
MAIN_DESCRIPTION = "A balanced, nutritious dish put together automatically by the backup generator."
MAIN_INSTRUCTIONS = [
    "1. Cook the protein to taste (grilled or baked).",
    "2. Prepare the carbohydrate side.",
    "3. Serve with the vegetables and dress.",
]


def is_plant_based(diet_style: str) -> bool:
    """Vegetarian and vegan styles both carry the 'veg' marker."""
    return "veg" in (diet_style or "").lower()


def _strip_prefix(phrase: str, prefix: str) -> str:
    return phrase[len(prefix):].strip() if phrase.startswith(prefix) else phrase.strip()


def generate_fallback_meal(meal_type: str, calories_per_meal: float,
                           diet_style: str = DEFAULT_DIET_STYLE,
                           rng: Optional[random.Random] = None) -> Meal:
    """Build a complete meal from the static catalogs.

    Breakfast slots pick a whole catalog breakfast; every other slot combines one protein,
    one carbohydrate side and one vegetable side. Calories are always the rounded target.
    """
    rng = rng or random
    plant_based = is_plant_based(diet_style)
    calories = round_half_up(calories_per_meal)

    if is_breakfast(meal_type):
        catalog = FALLBACK_DB["veg_breakfasts"] if plant_based else FALLBACK_DB["breakfasts"]
        base = rng.choice(catalog)
        return Meal(
            name=base["name"],
            description=base["description"],
            calories=calories,
            ingredients=base["ingredients"],
            instructions=base["instructions"],
            cook_time=BREAKFAST_COOK_TIME,
        )

    proteins = FALLBACK_DB["veg_proteins"] if plant_based else FALLBACK_DB["proteins"]
    protein = rng.choice(proteins)
    carb = rng.choice(FALLBACK_DB["carbs"])
    veggie = rng.choice(FALLBACK_DB["veggies"])

    ingredients = [
        protein,
        _strip_prefix(carb, "with "),
        _strip_prefix(veggie, "and "),
        "Extra virgin olive oil",
        "Salt and pepper to taste",
    ]
    return Meal(
        name=f"{protein} {carb} {veggie}",
        description=MAIN_DESCRIPTION,
        calories=calories,
        ingredients=ingredients,
        instructions=list(MAIN_INSTRUCTIONS),
        cook_time=MAIN_COOK_TIME,
    )


__all__ = ['FALLBACK_DB', 'generate_fallback_meal', 'is_plant_based']

import random
import unittest

from nutriplan.logic.fallback.generator import FALLBACK_DB, generate_fallback_meal, is_plant_based


class TestFallbackGenerator(unittest.TestCase):
    def setUp(self):
        self.rng = random.Random(7)

    def test_breakfast_comes_from_catalog(self):
        meal = generate_fallback_meal("Breakfast", 667, "Omnivore", rng=self.rng)
        names = [b["name"] for b in FALLBACK_DB["breakfasts"]]
        self.assertIn(meal.name, names)
        self.assertEqual(meal.calories, 667)
        self.assertEqual(meal.cook_time, "10 min")

    def test_vegan_breakfast_uses_plant_catalog(self):
        meal = generate_fallback_meal("Breakfast", 400, "Vegan", rng=self.rng)
        self.assertIn(meal.name, [b["name"] for b in FALLBACK_DB["veg_breakfasts"]])

    def test_main_meal_combines_three_parts(self):
        meal = generate_fallback_meal("Dinner", 666.6, "Omnivore", rng=self.rng)
        self.assertEqual(meal.calories, 667)
        self.assertEqual(len(meal.ingredients), 5)
        self.assertEqual(meal.ingredients[-2:], ["Extra virgin olive oil", "Salt and pepper to taste"])
        self.assertEqual(len(meal.instructions), 3)
        self.assertEqual(meal.cook_time, "20-30 min")
        self.assertTrue(any(meal.name.startswith(p) for p in FALLBACK_DB["proteins"]))
        self.assertFalse(meal.ingredients[1].startswith("with "))
        self.assertFalse(meal.ingredients[2].startswith("and "))

    def test_vegetarian_main_uses_plant_proteins(self):
        for _ in range(20):
            meal = generate_fallback_meal("Lunch", 500, "Vegetarian", rng=self.rng)
            self.assertIn(meal.ingredients[0], FALLBACK_DB["veg_proteins"])

    def test_plant_based_marker(self):
        self.assertTrue(is_plant_based("Vegan"))
        self.assertTrue(is_plant_based("Vegetarian"))
        self.assertFalse(is_plant_based("Pescatarian"))

    def test_never_empty(self):
        for meal_type in ("Breakfast", "Lunch", "Snack", "Dinner", "Late Snack"):
            self.assertFalse(generate_fallback_meal(meal_type, 300, rng=self.rng).is_empty)


if __name__ == "__main__":
    unittest.main()

import unittest

from nutriplan.domain.Meal import Meal
from nutriplan.domain.Plan import Plan
from nutriplan.domain.PlanConfig import PlanConfig
from nutriplan.logic.reporting.nutrition import compute_plan_nutrition, day_calories


class TestNutrition(unittest.TestCase):
    def setUp(self):
        self.plan = Plan([
            {"Breakfast": Meal("Oats", calories=400), "Lunch": Meal(), "Dinner": Meal("Stew", calories=900)},
            {"Breakfast": Meal("Toast", calories=300), "Lunch": Meal("Salad", calories=500), "Dinner": Meal()},
        ])
        self.config = PlanConfig(days=2, meals=3, calories=1200)

    def test_day_calories_ignores_empty_slots(self):
        self.assertEqual(day_calories(self.plan[0], ["Breakfast", "Lunch", "Dinner"]), 1300)

    def test_plan_nutrition(self):
        result = compute_plan_nutrition(self.plan, self.config)
        self.assertEqual(result["plan_total"], 2100)
        self.assertEqual(result["daily_target"], 1200)
        self.assertTrue(result["days"][0]["over"])
        self.assertFalse(result["days"][1]["over"])
        self.assertEqual(result["days"][1]["filled"], 2)


if __name__ == "__main__":
    unittest.main()

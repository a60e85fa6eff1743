import unittest

from nutriplan.logic.planning.meal_types import is_breakfast, is_valid_meal_count, meal_types_for


class TestMealTypes(unittest.TestCase):
    def test_three_meals(self):
        self.assertEqual(meal_types_for(3), ["Breakfast", "Lunch", "Dinner"])

    def test_four_meals_inserts_snack_before_dinner(self):
        self.assertEqual(meal_types_for(4), ["Breakfast", "Lunch", "Snack", "Dinner"])

    def test_five_meals_appends_late_snack(self):
        labels = meal_types_for(5)
        self.assertEqual(labels, ["Breakfast", "Lunch", "Snack", "Dinner", "Late Snack"])
        self.assertEqual(len(set(labels)), 5)

    def test_allowed_counts(self):
        self.assertTrue(is_valid_meal_count(4))
        self.assertFalse(is_valid_meal_count(2))
        self.assertFalse(is_valid_meal_count(6))

    def test_breakfast_detection(self):
        self.assertTrue(is_breakfast("Breakfast"))
        self.assertFalse(is_breakfast("Late Snack"))


if __name__ == "__main__":
    unittest.main()

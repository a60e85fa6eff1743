import unittest

from nutriplan.domain.Meal import Meal
from nutriplan.domain.Plan import Plan
from nutriplan.logic.shopping.list_builder import build_fallback_shopping_list
from nutriplan.logic.shopping.list_parser import parse_categories, parse_shopping_list


class TestShoppingListParser(unittest.TestCase):
    def test_headings_split_categories_in_order(self):
        cats = parse_categories("### Fruits\n- Apple\n- Banana\n### Dairy\n- Milk")
        self.assertEqual([c.title for c in cats], ["Fruits", "Dairy"])
        self.assertEqual(cats[0].items, ["Apple", "Banana"])
        self.assertEqual(cats[1].items, ["Milk"])

    def test_bullets_without_headings_become_general(self):
        cats = parse_categories("- Salt\n- Pepper")
        self.assertEqual(len(cats), 1)
        self.assertEqual(cats[0].title, "General")
        self.assertEqual(cats[0].items, ["Salt", "Pepper"])

    def test_empty_and_whitespace(self):
        self.assertEqual(parse_categories(""), [])
        self.assertEqual(parse_categories("   \n\t"), [])
        self.assertFalse(parse_shopping_list("").is_available)

    def test_bold_heading(self):
        cats = parse_categories("Here is your list:\n**Produce**\n- Kale\n**Pantry:**\n- Rice")
        self.assertEqual([(c.title, c.items) for c in cats], [("Produce", ["Kale"]), ("Pantry", ["Rice"])])

    def test_unstructured_text_is_absent(self):
        result = parse_shopping_list("Sorry, I cannot help with that.")
        self.assertFalse(result.is_available)
        self.assertEqual(result.to_dict(), {"available": False, "categories": []})

    def test_horizontal_rules_are_not_items(self):
        cats = parse_categories("### Produce\n- Kale\n---\n- Lemons\n***\n### Dairy\n- Milk")
        self.assertEqual([(c.title, c.items) for c in cats], [("Produce", ["Kale", "Lemons"]), ("Dairy", ["Milk"])])
        self.assertEqual(parse_categories("---\n- Salt"), parse_categories("- Salt"))

    def test_deterministic(self):
        text = "## Meat\n- Beef\n## Fish\n- Cod\n- Tuna"
        first = parse_shopping_list(text).to_dict()
        self.assertEqual(first, parse_shopping_list(text).to_dict())
        self.assertEqual(parse_shopping_list(text).item_count(), 3)


class TestFallbackShoppingList(unittest.TestCase):
    def test_backup_lists_every_meal_in_plan_order(self):
        plan = Plan([
            {"Breakfast": Meal("Oats", ingredients=["Oats", "Milk"]), "Lunch": Meal(), "Dinner": Meal("Stew", ingredients=["Beef"])},
            {"Breakfast": Meal("Toast", ingredients=["Bread"]), "Lunch": Meal("Salad", ingredients=["Lettuce"]), "Dinner": Meal()},
        ])
        text = build_fallback_shopping_list(plan, ["Breakfast", "Lunch", "Dinner"])
        cats = parse_categories(text)
        self.assertEqual(len(cats), 1)
        self.assertIn("(Backup)", cats[0].title)
        self.assertEqual(cats[0].items, [
            "For Oats: Oats, Milk",
            "For Stew: Beef",
            "For Toast: Bread",
            "For Salad: Lettuce",
        ])


if __name__ == "__main__":
    unittest.main()

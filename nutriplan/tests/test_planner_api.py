import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from nutriplan.api.api_run import app
from nutriplan.api.context import get_builder, get_enricher, get_gateway, get_repository
from nutriplan.events import web_observers
from nutriplan.infra.State_Repository import StateRepository
from nutriplan.logic.images.enrichment import ImageEnricher
from nutriplan.tests.fakes import FakeGateway, ImmediateExecutor, sample_meal

PNG = "data:image/png;base64,AAAA"


class PlannerAPITestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.repo = StateRepository(Path(self._tmp.name))
        self.gateway = FakeGateway(image=PNG)
        self.enricher = ImageEnricher(self.repo, self.gateway, executor=ImmediateExecutor())
        app.dependency_overrides[get_repository] = lambda: self.repo
        app.dependency_overrides[get_gateway] = lambda: self.gateway
        app.dependency_overrides[get_enricher] = lambda: self.enricher
        self.client = TestClient(app)
        web_observers.start()
        web_observers.clear()

    def tearDown(self):
        app.dependency_overrides.clear()
        self._tmp.cleanup()

    def _to_builder(self, mode="manual", **config):
        self.assertEqual(self.client.post("/api/wizard/mode", json={"mode": mode}).status_code, 200)
        if config:
            self.assertEqual(self.client.put("/api/wizard/config", json=config).status_code, 200)
        resp = self.client.post("/api/wizard/submit")
        self.assertEqual(resp.status_code, 200)
        return resp.json()


class TestWizardAPI(PlannerAPITestCase):
    def test_initial_state(self):
        data = self.client.get("/api/state").json()
        self.assertEqual(data["step"], "intro")
        self.assertFalse(data["loading"])
        self.assertEqual(data["meal_types"], ["Breakfast", "Lunch", "Dinner"])

    def test_manual_flow_to_builder(self):
        data = self._to_builder(days=2, meals=4, client_name="  Ana  ")
        self.assertEqual(data["step"], "builder")
        self.assertEqual(len(data["plan"]), 2)
        self.assertEqual(data["plan"][0], {"Breakfast": {}, "Lunch": {}, "Snack": {}, "Dinner": {}})
        self.assertEqual(self.repo.load_config().client_name, "Ana")

    def test_ai_flow_falls_back(self):
        data = self._to_builder(mode="ai", days=1, calories=2000)
        self.assertEqual(data["plan"][0]["Lunch"]["calories"], 667)
        events = self.client.get("/api/notifications").json()["events"]
        self.assertEqual(events[-1]["type"], "plan.fallback")

    def test_invalid_transition_is_409(self):
        resp = self.client.post("/api/wizard/review")
        self.assertEqual(resp.status_code, 409)
        self.assertIn("error", resp.json())

    def test_invalid_config_is_422(self):
        self.client.post("/api/wizard/mode", json={"mode": "ai"})
        self.assertEqual(self.client.put("/api/wizard/config", json={"meals": 6}).status_code, 422)
        self.assertEqual(self.client.put("/api/wizard/config", json={"days": 0}).status_code, 422)
        self.assertEqual(self.client.put("/api/wizard/config", json={"diet_style": "Carnivore"}).status_code, 422)

    def test_back_and_home(self):
        self._to_builder()
        self.assertEqual(self.client.post("/api/wizard/back").json()["step"], "config")
        self.assertEqual(self.client.post("/api/wizard/home").json()["step"], "intro")
        self.assertEqual(self.client.get("/api/state").json()["plan"], [])


class TestBuilderAPI(PlannerAPITestCase):
    def setUp(self):
        super().setUp()
        self._to_builder(days=2)

    def test_save_then_view_requests_image(self):
        resp = self.client.put("/api/builder/day/0/meal/Lunch",
                               json={"name": "Lentil Soup", "calories": 450, "ingredients": "Lentils\nCarrot"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["meal"]["cookTime"], "N/A")

        view = self.client.get("/api/builder/day/0").json()
        lunch = view["slots"][1]
        self.assertTrue(lunch["filled"])
        self.assertEqual(lunch["image_status"], "ready")
        self.assertEqual(lunch["image"], PNG)
        self.assertEqual(view["calories"]["current"], 450)
        self.client.get("/api/builder/day/0")
        self.assertEqual(self.gateway.image_calls, ["Lentil Soup"])

    def test_delete_needs_confirm(self):
        self.client.put("/api/builder/day/0/meal/Lunch", json={"name": "Soup"})
        self.assertEqual(self.client.delete("/api/builder/day/0/meal/Lunch").status_code, 400)
        resp = self.client.delete("/api/builder/day/0/meal/Lunch", params={"confirm": "true"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["removed"]["name"], "Soup")

    def test_regenerate(self):
        resp = self.client.post("/api/builder/day/1/meal/Dinner/regenerate")
        self.assertEqual(resp.json()["source"], "fallback")
        self.gateway.regenerated = sample_meal("Tofu Curry")
        resp = self.client.post("/api/builder/day/1/meal/Dinner/regenerate")
        self.assertEqual(resp.json()["source"], "ai")
        self.assertEqual(resp.json()["meal"]["name"], "Tofu Curry")

    def test_fill(self):
        self.assertEqual(self.client.post("/api/builder/fill", json={"name": "Paella"}).status_code, 502)
        self.gateway.filled = sample_meal("Other")
        resp = self.client.post("/api/builder/fill", json={"name": "Paella"})
        self.assertEqual(resp.json()["meal"]["name"], "Paella")
        self.assertEqual(self.client.post("/api/builder/fill", json={"name": "  "}).status_code, 422)

    def test_unknown_slot_is_404(self):
        self.assertEqual(self.client.get("/api/builder/day/7").status_code, 404)
        self.assertEqual(self.client.put("/api/builder/day/0/meal/Brunch", json={"name": "x"}).status_code, 404)

    def test_render_failure_is_contained(self):
        class BrokenBuilder:
            def day_view(self, day):
                raise RuntimeError("template exploded")

        app.dependency_overrides[get_builder] = lambda: BrokenBuilder()
        resp = self.client.get("/api/builder/day/0")
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(resp.json(), {"view": "builder", "failed": True, "error": "template exploded"})
        self.assertEqual(self.client.get("/api/state").status_code, 200)


class TestReviewAPI(PlannerAPITestCase):
    def setUp(self):
        super().setUp()
        self._to_builder(days=1)
        self.client.put("/api/builder/day/0/meal/Dinner",
                        json={"name": "Salmon Bowl", "calories": 700, "ingredients": ["Salmon", "Rice"]})

    def test_review_with_backup_list(self):
        resp = self.client.post("/api/wizard/review")
        self.assertEqual(resp.json()["step"], "review")
        review = self.client.get("/api/review").json()
        self.assertEqual(review["days"][0]["title"], "Day 1")
        self.assertEqual([m["name"] for m in review["days"][0]["meals"]], ["Salmon Bowl"])
        self.assertTrue(review["shopping_list"]["available"])
        self.assertEqual(review["shopping_list"]["categories"][0]["items"], ["For Salmon Bowl: Salmon, Rice"])

    def test_plan_is_read_only_during_review(self):
        self.client.post("/api/wizard/review")
        self.assertEqual(self.client.put("/api/builder/day/0/meal/Lunch", json={"name": "Soup"}).status_code, 409)
        self.assertEqual(self.client.post("/api/builder/day/0/meal/Dinner/regenerate").status_code, 409)
        resp = self.client.delete("/api/builder/day/0/meal/Dinner", params={"confirm": "true"})
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(self.repo.load_plan().get_meal(0, "Dinner").name, "Salmon Bowl")

    def test_regenerate_shopping_list(self):
        self.client.post("/api/wizard/review")
        self.gateway.shopping = "### Fish\n- Salmon"
        data = self.client.post("/api/review/shopping-list").json()
        self.assertEqual(data["categories"], [{"title": "Fish", "items": ["Salmon"]}])

    def test_recipe_detail(self):
        resp = self.client.get("/api/review/recipe/0/Dinner")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["ingredients"], ["Salmon", "Rice"])
        self.assertIsNone(resp.json()["image"])
        self.assertEqual(self.client.get("/api/review/recipe/0/Lunch").status_code, 404)

    def test_print_html(self):
        self.client.post("/api/wizard/review")
        resp = self.client.get("/print")
        self.assertEqual(resp.status_code, 200)
        self.assertIn("text/html", resp.headers["content-type"])
        self.assertIn("Salmon Bowl", resp.text)
        self.assertIn("For Salmon Bowl: Salmon, Rice", resp.text)

    def test_print_without_shopping_list(self):
        resp = self.client.get("/print")
        self.assertIn("has not been generated yet", resp.text)

    def test_export_pdf(self):
        resp = self.client.get("/export_pdf")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.headers["content-type"], "application/pdf")
        self.assertTrue(resp.content.startswith(b"%PDF"))


class TestAIProxyAPI(PlannerAPITestCase):
    def test_unknown_type(self):
        self.assertEqual(self.client.post("/api/ai", json={"type": "summon", "payload": {}}).status_code, 400)

    def test_absent_result_is_502(self):
        self.gateway.image = None
        resp = self.client.post("/api/ai", json={"type": "generateImage",
                                                 "payload": {"mealName": "Soup", "mealDescription": "Hot"}})
        self.assertEqual(resp.status_code, 502)

    def test_generate_image(self):
        resp = self.client.post("/api/ai", json={"type": "generateImage",
                                                 "payload": {"mealName": "Soup", "mealDescription": "Hot"}})
        self.assertEqual(resp.json(), {"result": PNG})

    def test_client_config_is_validated(self):
        self.gateway.regenerated = sample_meal("Soup")
        resp = self.client.post("/api/ai", json={"type": "regenerateMeal",
                                                 "payload": {"type": "Lunch", "config": {"meals": "4"}}})
        self.assertEqual(resp.status_code, 200)

        self.gateway.filled = sample_meal("Other")
        resp = self.client.post("/api/ai", json={"type": "fillMealDetails",
                                                 "payload": {"mealName": "x", "config": {"calories": None}}})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["result"]["name"], "x")

    def test_malformed_payloads_are_422(self):
        bad = [
            ("regenerateMeal", {"type": "Lunch", "config": {"meals": "four"}}),
            ("regenerateMeal", {"type": "Lunch", "config": {"meals": 9}}),
            ("fillMealDetails", {"mealName": "x", "config": "vegan please"}),
            ("fillMealDetails", {"mealName": "x", "calPerMeal": "lots"}),
            ("generatePlan", {"mealTypes": "Lunch"}),
            ("generateShoppingList", {"plan": "three days of soup"}),
            ("generateImage", {"mealName": 42}),
        ]
        for kind, payload in bad:
            resp = self.client.post("/api/ai", json={"type": kind, "payload": payload})
            self.assertEqual(resp.status_code, 422, (kind, payload))
            self.assertIn("error", resp.json())

    def test_fill_meal_details(self):
        self.gateway.filled = sample_meal("Other")
        resp = self.client.post("/api/ai", json={"type": "fillMealDetails",
                                                 "payload": {"mealName": "Ramen", "calPerMeal": 600}})
        self.assertEqual(resp.json()["result"]["name"], "Ramen")


if __name__ == "__main__":
    unittest.main()

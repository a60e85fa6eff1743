"""Scripted stand-ins shared by the planner tests."""
import threading
from concurrent.futures import Future

from nutriplan.domain.Meal import Meal
from nutriplan.domain.Plan import Plan


def sample_meal(name="Chicken Salad", calories=500, ingredients=("Chicken", "Lettuce")):
    return Meal(name=name, description=f"{name} description", calories=calories,
                ingredients=list(ingredients), instructions=["Mix", "Serve"], cook_time="15 min")


class FakeGateway:
    """Returns whatever the test scripted; None (the absent result) by default."""

    def __init__(self, plan=None, filled=None, regenerated=None, image=None, shopping=None):
        self.plan = plan
        self.filled = filled
        self.regenerated = regenerated
        self.image = image
        self.shopping = shopping
        self.image_calls = []
        self.release_images = threading.Event()
        self.release_images.set()
        self._lock = threading.Lock()

    def generate_plan(self, config, meal_types):
        if callable(self.plan):
            return self.plan(config, meal_types)
        return self.plan

    def fill_meal_details(self, meal_name, config, calories_per_meal):
        if self.filled is None:
            return None
        meal = Meal.from_dict(self.filled.to_dict())
        meal.name = meal_name
        return meal

    def regenerate_meal(self, meal_type, config, calories_per_meal):
        return self.regenerated

    def generate_image(self, meal_name, meal_description):
        with self._lock:
            self.image_calls.append(meal_name)
        self.release_images.wait(5)
        return self.image

    def generate_shopping_list(self, plan, config):
        return self.shopping


class ImmediateExecutor:
    """Runs submitted work inline so enrichment results are visible right away."""

    def submit(self, fn, *args, **kwargs):
        future = Future()
        future.set_result(fn(*args, **kwargs))
        return future

    def shutdown(self, wait=True):
        pass


def full_plan(days, meal_types, calories=500):
    return Plan([{t: sample_meal(f"{t} {d + 1}", calories) for t in meal_types} for d in range(days)])

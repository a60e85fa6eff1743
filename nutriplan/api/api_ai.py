import re
import json
import logging
from json import JSONDecodeError
from typing import Any, List, Optional

from openai import OpenAI

from nutriplan.domain.Meal import Meal
from nutriplan.domain.Plan import Plan
from nutriplan.domain.PlanConfig import PlanConfig
from nutriplan.utilities.config import AI_TIMEOUT, IMAGE_MODEL, OPENAI_API_KEY, TEXT_MODEL
from nutriplan.utilities.constants import (
    FILL_PROMPT_TEMPLATE, IMAGE_PROMPT_TEMPLATE, MEAL_JSON_FORMAT, PLAN_PROMPT_TEMPLATE,
    REGENERATE_PROMPT_TEMPLATE, SHOPPING_PROMPT_TEMPLATE,
)

logger = logging.getLogger(__name__)


# === Helper: Get OpenAI Client ===
def _get_openai_client(api_key: str = OPENAI_API_KEY) -> Optional[OpenAI]:
    """Return an OpenAI client if an API key is configured, otherwise None."""
    if not api_key:
        return None
    return OpenAI(api_key=api_key, timeout=AI_TIMEOUT)


class AIGateway:
    """The five remote operations behind one contract.

    Every operation makes a single round trip and returns None on any transport error,
    non-2xx answer, empty body or shape mismatch. Nothing raises past this class and
    nothing is retried here.
    """

    def __init__(self, client: Optional[OpenAI] = None, text_model: str = TEXT_MODEL,
                 image_model: str = IMAGE_MODEL):
        self._client = client
        self.text_model = text_model
        self.image_model = image_model

    @property
    def client(self) -> Optional[OpenAI]:
        if self._client is None:
            self._client = _get_openai_client()
        return self._client

    # === Plan Generation ===
    def generate_plan(self, config: PlanConfig, meal_types: List[str]) -> Optional[Plan]:
        prompt = PLAN_PROMPT_TEMPLATE.format(
            days=config.days,
            meal_types=", ".join(f'"{t}"' for t in meal_types),
            meal_format=MEAL_JSON_FORMAT,
            objective=config.objective,
            diet_style=config.diet_style,
            restrictions=config.restrictions_text,
            calories=config.calories,
        )
        parsed = self._complete_json("generatePlan", prompt)
        if parsed is None:
            return None
        if not isinstance(parsed, list) or len(parsed) != config.days:
            logger.warning("generatePlan: expected %s days, got %r", config.days,
                           len(parsed) if isinstance(parsed, list) else type(parsed).__name__)
            return None
        days = []
        for index, raw_day in enumerate(parsed):
            if not isinstance(raw_day, dict):
                logger.warning("generatePlan: day %s is not an object", index)
                return None
            day = {}
            for meal_type in meal_types:
                meal = Meal.from_dict(raw_day.get(meal_type)) if isinstance(raw_day.get(meal_type), dict) else None
                if meal is None or meal.is_empty:
                    logger.warning("generatePlan: day %s is missing '%s'", index, meal_type)
                    return None
                day[meal_type] = meal
            days.append(day)
        return Plan(days)

    # === Single Meal ===
    def fill_meal_details(self, meal_name: str, config: PlanConfig, calories_per_meal: int) -> Optional[Meal]:
        prompt = FILL_PROMPT_TEMPLATE.format(
            name=meal_name,
            objective=config.objective,
            diet_style=config.diet_style,
            restrictions=config.restrictions_text,
            calories=calories_per_meal,
            meal_format=MEAL_JSON_FORMAT,
        )
        parsed = self._complete_json("fillMealDetails", prompt)
        if not isinstance(parsed, dict):
            return None
        meal = Meal.from_dict(parsed)
        # the service may rename the dish; the user's name wins
        meal.name = meal_name
        return meal

    def regenerate_meal(self, meal_type: str, config: PlanConfig, calories_per_meal: int) -> Optional[Meal]:
        prompt = REGENERATE_PROMPT_TEMPLATE.format(
            meal_type=meal_type,
            calories=calories_per_meal,
            objective=config.objective,
            diet_style=config.diet_style,
            restrictions=config.restrictions_text,
            meal_format=MEAL_JSON_FORMAT,
        )
        parsed = self._complete_json("regenerateMeal", prompt)
        if not isinstance(parsed, dict):
            return None
        meal = Meal.from_dict(parsed)
        if meal.is_empty:
            logger.warning("regenerateMeal: response has no meal name")
            return None
        return meal

    # === Image ===
    def generate_image(self, meal_name: str, meal_description: str) -> Optional[str]:
        client = self.client
        if client is None:
            logger.warning("OPENAI_API_KEY not set: cannot generate image.")
            return None
        prompt = IMAGE_PROMPT_TEMPLATE.format(name=meal_name, description=meal_description)
        try:
            response = client.images.generate(model=self.image_model, prompt=prompt, n=1, size="1024x1024")
        except Exception:
            logger.exception("generateImage request failed for %r", meal_name)
            return None
        data = getattr(response, "data", None) or []
        b64 = getattr(data[0], "b64_json", None) if data else None
        if not b64:
            logger.warning("generateImage returned no image bytes for %r", meal_name)
            return None
        return f"data:image/png;base64,{b64}"

    # === Shopping List ===
    def generate_shopping_list(self, plan: Plan, config: PlanConfig) -> Optional[str]:
        prompt = SHOPPING_PROMPT_TEMPLATE.format(
            plan=json.dumps(plan.to_list(), ensure_ascii=False),
            diet_style=config.diet_style,
            restrictions=config.restrictions_text,
        )
        text = self._complete_text("generateShoppingList", prompt)
        if not text:
            return None
        return _strip_code_fences(text) or None

    # === Transport ===
    def _complete_text(self, kind: str, prompt: str) -> Optional[str]:
        client = self.client
        if client is None:
            logger.warning("OPENAI_API_KEY not set: skipping %s.", kind)
            return None
        try:
            response = client.responses.create(model=self.text_model, input=prompt)
        except Exception:
            logger.exception("%s request failed", kind)
            return None
        text = (getattr(response, "output_text", None) or "").strip()
        if not text:
            logger.warning("%s returned an empty body", kind)
            return None
        return text

    def _complete_json(self, kind: str, prompt: str) -> Any:
        text = self._complete_text(kind, prompt)
        if text is None:
            return None
        parsed = parse_ai_json(text)
        if parsed is None:
            logger.warning("%s output is not valid JSON and no JSON substring found", kind)
        return parsed


# === JSON Parsing ===
def parse_ai_json(text: str) -> Any:
    """Decode model output as JSON, tolerating code fences, trailing commas and surrounding prose."""
    try:
        return json.loads(text)
    except JSONDecodeError:
        pass
    cleaned = _remove_trailing_commas(_strip_code_fences(text))
    try:
        return json.loads(cleaned)
    except JSONDecodeError:
        pass
    candidate = _extract_json_by_balancing(cleaned)
    if candidate:
        try:
            return json.loads(_remove_trailing_commas(candidate))
        except JSONDecodeError:
            logger.debug("Failed to decode extracted JSON from AI output")
    return None


# === Text Cleaning Helpers ===
def _strip_code_fences(text: str) -> str:
    """Remove common markdown code fences and leading/trailing whitespace."""
    text = re.sub(r"```(?:json|markdown|md)?\n(.*?)```", r"\1", text, flags=re.S)
    text = re.sub(r"^```|```$", "", text.strip())
    return text.strip()


def _remove_trailing_commas(text: str) -> str:
    """Remove common trailing commas in JSON-like text to help json.loads succeed."""
    return re.sub(r",\s*(\}|\])", r"\1", text)


def _extract_json_by_balancing(text: str) -> Optional[str]:
    """Extract the first JSON object/array by balancing braces/brackets."""
    start = None
    stack = []
    in_string = False
    escape = False

    for i, ch in enumerate(text):
        if ch == '"' and not escape:
            in_string = not in_string
        if in_string and ch == "\\" and not escape:
            escape = True
            continue
        else:
            escape = False

        if not in_string:
            if ch in "{[":
                if start is None:
                    start = i
                stack.append(ch)
            elif ch in "}]":
                if not stack:
                    continue
                opening = stack.pop()
                if (opening == "{" and ch != "}") or (opening == "[" and ch != "]"):
                    return None
                if not stack and start is not None:
                    return text[start:i + 1]
    return None

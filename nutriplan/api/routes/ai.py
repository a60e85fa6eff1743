"""Generic AI proxy: one endpoint, dispatched on the request kind.

Payload keys follow the client's names (mealTypes, mealName, calPerMeal, mealDescription).
A missing `config` falls back to the persisted configuration; a supplied one is validated
like a configuration edit. Malformed payloads answer 422.
"""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from nutriplan.api.context import get_gateway, get_repository
from nutriplan.domain.Plan import Plan
from nutriplan.domain.PlanConfig import PlanConfig
from nutriplan.infra.State_Repository import StateRepository
from nutriplan.logic.planning.meal_types import meal_types_for
from nutriplan.utilities.validators import AIRequest, ConfigInput

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["ai"])


class InvalidPayload(ValueError):
    pass


def _config(payload: dict, repository: StateRepository) -> PlanConfig:
    raw = payload.get("config")
    if raw is None:
        return repository.load_config()
    if not isinstance(raw, dict):
        raise InvalidPayload("config must be an object")
    try:
        changes = ConfigInput.model_validate(raw).changes()
    except ValidationError as e:
        raise InvalidPayload(f"invalid config: {e}") from e
    return PlanConfig().updated(**changes)


def _calories_per_meal(payload: dict, config: PlanConfig) -> int:
    value = payload.get("calPerMeal")
    if value is None:
        return config.calories_per_meal
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise InvalidPayload("calPerMeal must be a positive number")
    return int(value)


def _text(payload: dict, key: str) -> str:
    value = payload.get(key, "")
    if not isinstance(value, str):
        raise InvalidPayload(f"{key} must be a string")
    return value


def _generate_plan(gateway, payload, repository):
    config = _config(payload, repository)
    meal_types = payload.get("mealTypes")
    if meal_types is None:
        meal_types = meal_types_for(config.meals)
    elif not isinstance(meal_types, list) or not meal_types or not all(isinstance(t, str) for t in meal_types):
        raise InvalidPayload("mealTypes must be a non-empty list of strings")
    plan = gateway.generate_plan(config, list(meal_types))
    return plan.to_list() if plan is not None else None


def _fill_meal_details(gateway, payload, repository):
    config = _config(payload, repository)
    meal = gateway.fill_meal_details(_text(payload, "mealName"), config,
                                     _calories_per_meal(payload, config))
    return meal.to_dict() if meal is not None else None


def _regenerate_meal(gateway, payload, repository):
    config = _config(payload, repository)
    meal = gateway.regenerate_meal(_text(payload, "type"), config,
                                   _calories_per_meal(payload, config))
    return meal.to_dict() if meal is not None else None


def _generate_image(gateway, payload, repository):
    return gateway.generate_image(_text(payload, "mealName"), _text(payload, "mealDescription"))


def _generate_shopping_list(gateway, payload, repository):
    config = _config(payload, repository)
    if "plan" in payload:
        raw_plan = payload["plan"]
        if not isinstance(raw_plan, list) or not all(isinstance(d, dict) for d in raw_plan):
            raise InvalidPayload("plan must be a list of day objects")
        plan = Plan.from_list(raw_plan)
    else:
        plan = repository.load_plan()
    return gateway.generate_shopping_list(plan, config)


HANDLERS = {
    "generatePlan": _generate_plan,
    "fillMealDetails": _fill_meal_details,
    "regenerateMeal": _regenerate_meal,
    "generateImage": _generate_image,
    "generateShoppingList": _generate_shopping_list,
}


@router.post("/ai")
def ai_proxy(body: AIRequest, gateway=Depends(get_gateway),
             repository: StateRepository = Depends(get_repository)):
    handler = HANDLERS.get(body.type)
    if handler is None:
        return JSONResponse(status_code=400, content={"error": "Invalid request type"})
    try:
        result = handler(gateway, body.payload, repository)
    except InvalidPayload as e:
        return JSONResponse(status_code=422, content={"error": str(e)})
    if result is None:
        logger.warning("AI request %s produced no result", body.type)
        return JSONResponse(status_code=502, content={"error": f"{body.type} produced no result"})
    return {"result": result}

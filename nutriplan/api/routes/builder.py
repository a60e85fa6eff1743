from fastapi import APIRouter, Depends, HTTPException, Query

from nutriplan.api.context import get_builder, get_enricher
from nutriplan.api.views import contained
from nutriplan.logic.images.enrichment import ImageEnricher
from nutriplan.logic.planning.builder import PlanBuilder
from nutriplan.utilities.validators import FillInput, MealInput

router = APIRouter(prefix="/api/builder", tags=["builder"])


@router.get("/day/{day}")
def day_view(day: int, builder: PlanBuilder = Depends(get_builder),
             enricher: ImageEnricher = Depends(get_enricher)):
    """Day grid with calorie progress. Starts image requests for uncached meals of that day."""
    def build():
        enricher.enrich_day(day)
        return builder.day_view(day)
    return contained("builder", build)


@router.put("/day/{day}/meal/{meal_type}")
def save_meal(day: int, meal_type: str, body: MealInput, builder: PlanBuilder = Depends(get_builder)):
    meal = builder.save_meal(day, meal_type, body.to_meal_dict())
    return {"status": "ok", "meal": meal.to_dict()}


@router.delete("/day/{day}/meal/{meal_type}")
def delete_meal(day: int, meal_type: str, confirm: bool = Query(default=False),
                builder: PlanBuilder = Depends(get_builder)):
    removed = builder.delete_meal(day, meal_type, confirm=confirm)
    return {"status": "ok", "removed": removed.to_dict()}


@router.post("/day/{day}/meal/{meal_type}/regenerate")
def regenerate_meal(day: int, meal_type: str, builder: PlanBuilder = Depends(get_builder)):
    meal, source = builder.regenerate_meal(day, meal_type)
    return {"status": "ok", "source": source, "meal": meal.to_dict()}


@router.post("/fill")
def fill_meal(body: FillInput, builder: PlanBuilder = Depends(get_builder)):
    """AI details for a named dish, for the editor to review. Nothing is saved."""
    meal = builder.fill_meal(body.name)
    if meal is None:
        raise HTTPException(status_code=502, detail="Could not fill in the meal details")
    return {"meal": meal.to_dict()}

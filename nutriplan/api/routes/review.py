from fastapi import APIRouter, Depends, Request, Response
from fastapi.templating import Jinja2Templates

from nutriplan.api.context import get_repository, get_wizard
from nutriplan.api.views import contained
from nutriplan.infra.State_Repository import StateRepository
from nutriplan.infra.pdf_utils import generate_pdf_for_plan
from nutriplan.logic.planning.review import load_document, recipe_detail
from nutriplan.logic.planning.wizard import PlannerWizard
from nutriplan.logic.shopping.list_parser import parse_shopping_list
from nutriplan.utilities.config import TEMPLATES_DIR

router = APIRouter(tags=["review"])
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


@router.get("/api/review")
def review(repository: StateRepository = Depends(get_repository)):
    return contained("review", lambda: load_document(repository))


@router.post("/api/review/shopping-list")
def regenerate_shopping_list(wizard: PlannerWizard = Depends(get_wizard)):
    text = wizard.generate_shopping_list()
    return {"shopping_list": text, "categories": parse_shopping_list(text).to_dict()["categories"]}


@router.get("/api/review/recipe/{day}/{meal_type}")
def recipe(day: int, meal_type: str, repository: StateRepository = Depends(get_repository)):
    return recipe_detail(repository, day, meal_type)


@router.get("/print")
def print_view(request: Request, repository: StateRepository = Depends(get_repository)):
    def build():
        document = load_document(repository)
        return templates.TemplateResponse(request, "print.html", {"doc": document})
    return contained("print", build)


@router.get("/export_pdf")
def export_pdf(repository: StateRepository = Depends(get_repository)):
    def build():
        document = load_document(repository)
        pdf_bytes = generate_pdf_for_plan(document)
        plan_name = document["config"].get("plan_name") or "nutrition_plan"
        filename = "".join(c if c.isalnum() else "_" for c in plan_name)
        return Response(
            content=pdf_bytes,
            media_type="application/pdf",
            headers={"Content-Disposition": f"attachment; filename={filename}.pdf"},
        )
    return contained("print", build)

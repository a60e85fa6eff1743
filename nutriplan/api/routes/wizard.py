from fastapi import APIRouter, Depends

from nutriplan.api.context import get_wizard
from nutriplan.logic.planning.wizard import PlannerWizard
from nutriplan.utilities.validators import ConfigInput, ModeInput

router = APIRouter(prefix="/api", tags=["wizard"])


@router.get("/state")
def get_state(wizard: PlannerWizard = Depends(get_wizard)):
    """Whole persisted wizard state. A corrupted step is reset before answering."""
    return wizard.snapshot()


@router.post("/wizard/mode")
def choose_mode(body: ModeInput, wizard: PlannerWizard = Depends(get_wizard)):
    config = wizard.choose_mode(body.mode)
    return {"step": wizard.current_step().value, "config": config.to_dict()}


@router.put("/wizard/config")
def update_config(body: ConfigInput, wizard: PlannerWizard = Depends(get_wizard)):
    config = wizard.update_config(**body.changes())
    return {"config": config.to_dict()}


@router.post("/wizard/submit")
def submit_config(wizard: PlannerWizard = Depends(get_wizard)):
    """config -> builder. Blocks until the plan is materialized (AI or fallback)."""
    plan = wizard.submit_config()
    return {"step": wizard.current_step().value, "plan": plan.to_list()}


@router.post("/wizard/review")
def go_review(wizard: PlannerWizard = Depends(get_wizard)):
    text = wizard.go_review()
    return {"step": wizard.current_step().value, "shopping_list": text}


@router.post("/wizard/back")
def go_back(wizard: PlannerWizard = Depends(get_wizard)):
    return {"step": wizard.go_back().value}


@router.post("/wizard/home")
def go_home(wizard: PlannerWizard = Depends(get_wizard)):
    wizard.go_home()
    return {"step": wizard.current_step().value}

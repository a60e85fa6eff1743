from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import logging

from nutriplan.api.context import get_gateway, get_repository, shutdown_enrichers
from nutriplan.events.web_observers import start as start_event_observers
from nutriplan.logic.planning.errors import WizardError
from nutriplan.logic.planning.wizard import PlannerWizard

# Routers
from nutriplan.api.routes import ai, builder, notifications, review, wizard

# Logging
logger = logging.getLogger("nutriplan_app")

# Initialize FastAPI app
app = FastAPI(title="Nutriplan Meal Plan Builder")

# Include routers
app.include_router(wizard.router)
app.include_router(builder.router)
app.include_router(review.router)
app.include_router(ai.router)
app.include_router(notifications.router)


@app.exception_handler(WizardError)
async def _wizard_error(request: Request, exc: WizardError):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})


@app.on_event("startup")
def _startup():
    """Register notification observers and clear a loading flag left by an interrupted run."""
    start_event_observers()
    logger.info("Web observers for planner events started")
    repository = app.dependency_overrides.get(get_repository, get_repository)()
    gateway = app.dependency_overrides.get(get_gateway, get_gateway)()
    PlannerWizard(repository, gateway).recover()


@app.on_event("shutdown")
def _shutdown():
    shutdown_enrichers()
    logger.info("Image enrichment workers stopped")

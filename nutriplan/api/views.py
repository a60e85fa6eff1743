"""Render-failure containment for the builder, review and print views."""
import logging
from typing import Any, Callable

from fastapi.responses import JSONResponse

from nutriplan.logic.planning.errors import WizardError

logger = logging.getLogger(__name__)


def contained(view: str, build: Callable[[], Any]):
    """Run a view builder; an unexpected failure becomes a persistent failure panel.

    WizardError subclasses keep their own status mapping.
    """
    try:
        return build()
    except WizardError:
        raise
    except Exception as e:
        logger.exception("Rendering the %s view failed", view)
        return JSONResponse(status_code=500, content={"view": view, "failed": True, "error": str(e)})


__all__ = ['contained']

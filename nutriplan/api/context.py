"""Process-wide planner services, handed to routes through FastAPI dependencies.

Tests swap get_repository / get_gateway (or get_enricher) with app.dependency_overrides.
"""
from functools import lru_cache
from threading import Lock
from typing import Dict, Tuple

from fastapi import Depends

from nutriplan.api.api_ai import AIGateway
from nutriplan.infra.State_Repository import StateRepository
from nutriplan.logic.images.enrichment import ImageEnricher
from nutriplan.logic.planning.builder import PlanBuilder
from nutriplan.logic.planning.wizard import PlannerWizard
from nutriplan.utilities.config import DATA_DIR


@lru_cache
def get_repository() -> StateRepository:
    return StateRepository(DATA_DIR)


@lru_cache
def get_gateway() -> AIGateway:
    return AIGateway()


_enrichers: Dict[Tuple[int, int], ImageEnricher] = {}
_enrichers_lock = Lock()


def _enricher_for(repository: StateRepository, gateway) -> ImageEnricher:
    """One enricher (and worker pool) per repository/gateway pair."""
    key = (id(repository), id(gateway))
    with _enrichers_lock:
        enricher = _enrichers.get(key)
        if enricher is None:
            enricher = _enrichers[key] = ImageEnricher(repository, gateway)
        return enricher


def get_enricher(repository: StateRepository = Depends(get_repository),
                 gateway=Depends(get_gateway)) -> ImageEnricher:
    return _enricher_for(repository, gateway)


def get_wizard(repository: StateRepository = Depends(get_repository),
               gateway=Depends(get_gateway)) -> PlannerWizard:
    return PlannerWizard(repository, gateway)


def get_builder(repository: StateRepository = Depends(get_repository),
                gateway=Depends(get_gateway)) -> PlanBuilder:
    return PlanBuilder(repository, gateway)


def shutdown_enrichers() -> None:
    """Stop every enricher's worker pool without waiting for in-flight image requests."""
    with _enrichers_lock:
        enrichers = list(_enrichers.values())
        _enrichers.clear()
    for enricher in enrichers:
        enricher.shutdown(wait=False)

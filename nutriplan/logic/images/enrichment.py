"""Image enrichment loop for the builder view.

For every named meal of a day, an image is requested once per cache key
(day, meal type, meal name). The claim (absent -> 'loading') is an atomic check-and-set
under the repository lock and is persisted before any request is submitted, so repeated
scans never issue a second request for a key that is loading or resolved. Requests for
different slots run in parallel on a bounded pool.

A completion only writes while its entry is still 'loading'; entries purged in the meantime
(rename, delete, regenerate, reset) stay purged.
"""
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import List, NamedTuple, Optional

from nutriplan.domain.ImageCache import cache_key
from nutriplan.events.event_helpers import publish_image_failed
from nutriplan.infra.State_Repository import StateRepository
from nutriplan.logic.planning.meal_types import meal_types_for
from nutriplan.utilities.config import IMAGE_WORKERS

logger = logging.getLogger(__name__)


class ImageClaim(NamedTuple):
    key: str
    day_index: int
    meal_type: str
    name: str
    description: str


class ImageEnricher:
    def __init__(self, repository: StateRepository, gateway,
                 executor: Optional[ThreadPoolExecutor] = None, max_workers: int = IMAGE_WORKERS):
        self.repository = repository
        self.gateway = gateway
        self._executor = executor or ThreadPoolExecutor(max_workers=max_workers,
                                                        thread_name_prefix="image-enrichment")

    def claim_day(self, day_index: int) -> List[ImageClaim]:
        """Mark every named, uncached meal of the day as loading and return what was claimed."""
        claims: List[ImageClaim] = []
        with self.repository.lock:
            plan = self.repository.load_plan()
            if not plan.has_day(day_index):
                return claims
            config = self.repository.load_config()
            cache = self.repository.load_image_cache()
            for meal_type in meal_types_for(config.meals):
                meal = plan.get_meal(day_index, meal_type)
                if meal.is_empty:
                    continue
                key = cache_key(day_index, meal_type, meal.name)
                if cache.claim(key):
                    claims.append(ImageClaim(key, day_index, meal_type, meal.name, meal.description))
            if claims:
                self.repository.save_image_cache(cache)
        return claims

    def enrich_day(self, day_index: int) -> List[Future]:
        """Claim, then fan out one image request per claimed slot. Returns the futures."""
        claims = self.claim_day(day_index)
        if claims:
            logger.info("Requesting %s image(s) for day %s", len(claims), day_index)
        return [self._executor.submit(self._fetch, claim) for claim in claims]

    def _fetch(self, claim: ImageClaim) -> Optional[str]:
        try:
            payload = self.gateway.generate_image(claim.name, claim.description)
        except Exception:
            logger.exception("Image request raised for %s", claim.key)
            payload = None
        with self.repository.lock:
            cache = self.repository.load_image_cache()
            written = cache.resolve(claim.key, payload)
            if written:
                self.repository.save_image_cache(cache)
        if not written:
            logger.info("Discarding image for %s: entry no longer pending", claim.key)
        elif not payload:
            logger.warning("Image generation failed for %s", claim.key)
            publish_image_failed(claim.day_index, claim.meal_type, claim.name)
        return payload

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)


__all__ = ['ImageClaim', 'ImageEnricher']

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional

from pydantic import BaseModel

from catalog.core.exceptions import StorageError
from catalog.database.models.records import Feedback
from catalog.database.repositories.feedback_repo import FeedbackRepository
from catalog.database.repositories.rating_repo import RatingRepository

logger = logging.getLogger(__name__)


class ResourceAggregate(BaseModel):
    average_rating: Optional[float] = None
    feedback: List[Feedback] = []


def average_rating(values: Iterable[int]) -> Optional[float]:
    values = list(values)
    if not values:
        return None
    mean = Decimal(sum(values)) / Decimal(len(values))
    return float(mean.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class AggregationService:
    """Computes the read-time aggregates shown with a single resource.

    Both parts are computed from full scans of their collections. A damaged
    ratings or feedback collection only blanks its own part of the result.
    """

    def __init__(self, ratings: RatingRepository, feedback: FeedbackRepository):
        self.ratings = ratings
        self.feedback = feedback

    async def summarize(self, resource_id: str) -> ResourceAggregate:
        aggregate = ResourceAggregate()

        try:
            ratings = await self.ratings.list_for_resource(resource_id)
            aggregate.average_rating = average_rating(r.rating_value for r in ratings)
        except StorageError as e:
            logger.warning(f"Ratings unavailable for resource {resource_id}: {e}")

        try:
            aggregate.feedback = await self.feedback.list_for_resource(resource_id)
        except StorageError as e:
            logger.warning(f"Feedback unavailable for resource {resource_id}: {e}")

        return aggregate

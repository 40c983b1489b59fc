import logging
from typing import Any, List, Optional

from catalog.core.exceptions import NotFoundError
from catalog.core.validation import optional_text, parse_rating_value
from catalog.database.models.enums import CollectionName
from catalog.database.models.records import Rating
from catalog.database.repositories.base import CollectionRepository
from catalog.database.repositories.resource_repo import ResourceRepository
from catalog.database.store import CollectionStore

logger = logging.getLogger(__name__)


class RatingRepository(CollectionRepository[Rating]):
    collection = CollectionName.RATINGS
    record_type = Rating

    def __init__(self, store: CollectionStore, resources: ResourceRepository):
        super().__init__(store)
        self.resources = resources

    async def list_for_resource(self, resource_id: str) -> List[Rating]:
        return [rating for rating in await self._load() if rating.resource_id == resource_id]

    async def create(
        self,
        resource_id: str,
        rating_value: Any,
        user_id: Optional[str] = None
    ) -> Rating:
        value = parse_rating_value(rating_value)
        user_id = optional_text(user_id, "userId")

        async with self.store.writing(CollectionName.RESOURCES, self.collection):
            await self.resources.resolve(resource_id)

            ratings = await self._load()
            rating = Rating(
                id=self._new_id(ratings),
                resource_id=resource_id,
                rating_value=value,
                user_id=user_id
            )
            ratings.append(rating)
            await self._save(ratings)

        logger.info(f"Created rating {rating.id} for resource {resource_id}")
        return rating

    async def delete(self, resource_id: str, rating_id: str) -> None:
        async with self.store.writing(self.collection):
            ratings = await self._load()
            remaining = [
                rating for rating in ratings
                if not (rating.id == rating_id and rating.resource_id == resource_id)
            ]
            if len(remaining) == len(ratings):
                raise NotFoundError("Rating", rating_id)
            await self._save(remaining)

        logger.info(f"Deleted rating {rating_id} of resource {resource_id}")

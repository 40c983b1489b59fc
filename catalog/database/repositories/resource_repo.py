import logging
from typing import Any, List, Mapping, Optional

from catalog.core.exceptions import NotFoundError
from catalog.core.validation import optional_text, require_text
from catalog.database.models.enums import CollectionName
from catalog.database.models.records import Resource
from catalog.database.repositories.base import CollectionRepository

logger = logging.getLogger(__name__)


class ResourceRepository(CollectionRepository[Resource]):
    collection = CollectionName.RESOURCES
    record_type = Resource

    async def list_all(self) -> List[Resource]:
        return await self._load()

    async def search(self, type_filter: Optional[str] = None) -> List[Resource]:
        resources = await self._load()
        if not type_filter:
            return resources
        wanted = type_filter.lower()
        return [resource for resource in resources if resource.type.lower() == wanted]

    async def resolve(self, resource_id: str) -> Resource:
        """Return the resource with this ID or raise ``NotFoundError``.

        Rating and feedback writes call this while holding the resources
        lock, so the answer stays valid until their own save completes.
        """
        for resource in await self._load():
            if resource.id == resource_id:
                return resource
        raise NotFoundError("Resource", resource_id)

    async def get(self, resource_id: str) -> Resource:
        return await self.resolve(resource_id)

    async def create(self, fields: Mapping[str, Any]) -> Resource:
        values = self._validate(fields)

        async with self.store.writing(self.collection):
            resources = await self._load()
            resource = Resource(id=self._new_id(resources), **values)
            resources.append(resource)
            await self._save(resources)

        logger.info(f"Created resource {resource.id}")
        return resource

    async def replace(self, resource_id: str, fields: Mapping[str, Any]) -> Resource:
        values = self._validate(fields)

        async with self.store.writing(self.collection):
            resources = await self._load()
            for index, existing in enumerate(resources):
                if existing.id == resource_id:
                    break
            else:
                raise NotFoundError("Resource", resource_id)

            resource = Resource(id=resource_id, **values)
            resources[index] = resource
            await self._save(resources)

        logger.info(f"Replaced resource {resource_id}")
        return resource

    async def delete(self, resource_id: str) -> None:
        async with self.store.writing(self.collection):
            resources = await self._load()
            remaining = [resource for resource in resources if resource.id != resource_id]
            if len(remaining) == len(resources):
                raise NotFoundError("Resource", resource_id)
            await self._save(remaining)

        # ratings and feedback of the resource are left in place
        logger.info(f"Deleted resource {resource_id}")

    @staticmethod
    def _validate(fields: Mapping[str, Any]) -> dict:
        return {
            "title": require_text(fields.get("title"), "title"),
            "type": require_text(fields.get("type"), "type"),
            "url": require_text(fields.get("url"), "url"),
            "author_id": optional_text(fields.get("authorId"), "authorId"),
        }

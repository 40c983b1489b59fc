import logging
from datetime import datetime, timedelta, timezone
from typing import Any, List, Optional

from catalog.core.exceptions import NotFoundError
from catalog.core.validation import normalize_feedback_text
from catalog.database.models.enums import CollectionName
from catalog.database.models.records import Feedback
from catalog.database.repositories.base import CollectionRepository
from catalog.database.repositories.resource_repo import ResourceRepository
from catalog.database.store import CollectionStore

logger = logging.getLogger(__name__)


def next_timestamp(previous: Optional[str] = None) -> str:
    now = datetime.now(timezone.utc)
    if previous:
        try:
            last = datetime.fromisoformat(previous)
        except ValueError:
            last = None
        if last is not None:
            if last.tzinfo is None:
                last = last.replace(tzinfo=timezone.utc)
            if now <= last:
                now = last + timedelta(microseconds=1)
    return now.isoformat(timespec="microseconds")


class FeedbackRepository(CollectionRepository[Feedback]):
    collection = CollectionName.FEEDBACK
    record_type = Feedback

    def __init__(
        self,
        store: CollectionStore,
        resources: ResourceRepository,
        min_length: int = 10,
        max_length: int = 500
    ):
        super().__init__(store)
        self.resources = resources
        self.min_length = min_length
        self.max_length = max_length

    async def list_for_resource(self, resource_id: str) -> List[Feedback]:
        return [entry for entry in await self._load() if entry.resource_id == resource_id]

    async def create(self, resource_id: str, feedback_text: Any) -> Feedback:
        text = normalize_feedback_text(feedback_text, self.min_length, self.max_length)

        async with self.store.writing(CollectionName.RESOURCES, self.collection):
            await self.resources.resolve(resource_id)

            entries = await self._load()
            entry = Feedback(
                id=self._new_id(entries),
                resource_id=resource_id,
                feedback_text=text,
                timestamp=next_timestamp()
            )
            entries.append(entry)
            await self._save(entries)

        logger.info(f"Created feedback {entry.id} for resource {resource_id}")
        return entry

    async def update(self, resource_id: str, feedback_id: str, feedback_text: Any) -> Feedback:
        text = normalize_feedback_text(feedback_text, self.min_length, self.max_length)

        async with self.store.writing(CollectionName.RESOURCES, self.collection):
            await self.resources.resolve(resource_id)

            entries = await self._load()
            index = self._index_of(entries, resource_id, feedback_id)
            current = entries[index]
            entry = current.model_copy(update={
                "feedback_text": text,
                "timestamp": next_timestamp(current.timestamp),
            })
            entries[index] = entry
            await self._save(entries)

        logger.info(f"Updated feedback {feedback_id} of resource {resource_id}")
        return entry

    async def delete(self, resource_id: str, feedback_id: str) -> None:
        async with self.store.writing(CollectionName.RESOURCES, self.collection):
            await self.resources.resolve(resource_id)

            entries = await self._load()
            index = self._index_of(entries, resource_id, feedback_id)
            del entries[index]
            await self._save(entries)

        logger.info(f"Deleted feedback {feedback_id} of resource {resource_id}")

    @staticmethod
    def _index_of(entries: List[Feedback], resource_id: str, feedback_id: str) -> int:
        for index, entry in enumerate(entries):
            if entry.id == feedback_id and entry.resource_id == resource_id:
                return index
        raise NotFoundError("Feedback", feedback_id)

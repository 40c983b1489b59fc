import logging
import uuid
from typing import Generic, Iterable, List, Type, TypeVar

from pydantic import ValidationError as RecordValidationError

from catalog.core.exceptions import StorageError
from catalog.database.models.enums import CollectionName
from catalog.database.models.records import CatalogRecord
from catalog.database.store import CollectionStore

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=CatalogRecord)


class CollectionRepository(Generic[RecordT]):
    """Typed access to one collection of a ``CollectionStore``.

    Stored dicts are validated into records once, on load. A record that
    does not fit its model makes the whole collection unreadable.
    """

    collection: CollectionName
    record_type: Type[RecordT]

    def __init__(self, store: CollectionStore):
        self.store = store

    async def _load(self) -> List[RecordT]:
        raw = await self.store.load(self.collection)
        try:
            return [self.record_type.model_validate(item) for item in raw]
        except RecordValidationError as e:
            logger.error(f"Collection '{self.collection.value}' holds an invalid record: {e}")
            raise StorageError(
                f"Collection '{self.collection.value}' is malformed",
                self.collection.value
            ) from e

    async def _save(self, records: Iterable[RecordT]) -> None:
        await self.store.save(self.collection, [record.to_record() for record in records])

    @staticmethod
    def _new_id(records: Iterable[RecordT]) -> str:
        taken = {record.id for record in records}
        new_id = str(uuid.uuid4())
        while new_id in taken:
            new_id = str(uuid.uuid4())
        return new_id

import asyncio
import json
import logging
import uuid
from abc import ABC, abstractmethod
from contextlib import AsyncExitStack, asynccontextmanager, suppress
from pathlib import Path
from typing import AsyncIterator, Iterable, List, Union

import aiofiles
import aiofiles.os
from sqlalchemy.exc import SQLAlchemyError

from catalog.core.exceptions import StorageError
from catalog.database.database import create_engine, create_session_factory, init_db
from catalog.database.models.collection import CollectionDocument
from catalog.database.models.enums import CollectionName, StorageBackend

logger = logging.getLogger(__name__)

# Lock acquisition order for multi-collection writes
_LOCK_ORDER = list(CollectionName)


def _dump_collection(records: Iterable[dict]) -> str:
    return json.dumps(list(records), indent=4, ensure_ascii=False)


def _parse_collection(name: CollectionName, content: str) -> List[dict]:
    if not content.strip():
        return []
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        logger.error(f"Collection '{name.value}' is not valid JSON: {e}")
        raise StorageError(f"Collection '{name.value}' is malformed", name.value) from e

    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        logger.error(f"Collection '{name.value}' is not an array of records")
        raise StorageError(f"Collection '{name.value}' is malformed", name.value)
    return data


class CollectionStore(ABC):
    """Loads and saves whole named collections.

    Writers must hold the collection's lock (see ``writing``) for the whole
    load/mutate/save cycle. Readers do not lock and always see the last
    completely saved snapshot.
    """

    def __init__(self):
        self._locks = {name: asyncio.Lock() for name in CollectionName}

    async def open(self):
        pass

    async def close(self):
        pass

    @abstractmethod
    async def load(self, name: CollectionName) -> List[dict]:
        ...

    @abstractmethod
    async def save(self, name: CollectionName, records: Iterable[dict]) -> None:
        ...

    @asynccontextmanager
    async def writing(self, *names: CollectionName) -> AsyncIterator[None]:
        wanted = {CollectionName(name) for name in names}
        async with AsyncExitStack() as stack:
            for name in _LOCK_ORDER:
                if name in wanted:
                    await stack.enter_async_context(self._locks[name])
            yield


class JsonFileCollectionStore(CollectionStore):

    def __init__(self, data_dir: Union[str, Path]):
        super().__init__()
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Using JSON collection store at {self.data_dir}")

    def path_for(self, name: CollectionName) -> Path:
        return self.data_dir / f"{CollectionName(name).value}.json"

    async def load(self, name: CollectionName) -> List[dict]:
        name = CollectionName(name)
        path = self.path_for(name)
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {path}: {e}")
            raise StorageError(f"Failed to read collection '{name.value}'", name.value) from e

        records = _parse_collection(name, content)
        logger.debug(f"Loaded {len(records)} records from {path}")
        return records

    async def save(self, name: CollectionName, records: Iterable[dict]) -> None:
        name = CollectionName(name)
        path = self.path_for(name)
        content = _dump_collection(records)
        tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
        try:
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(content + "\n")
            await aiofiles.os.replace(tmp_path, path)
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            with suppress(OSError):
                await aiofiles.os.remove(tmp_path)
            raise StorageError(f"Failed to write collection '{name.value}'", name.value) from e
        logger.debug(f"Saved collection '{name.value}' to {path}")


class SqlCollectionStore(CollectionStore):

    def __init__(self, database_url: str, echo: bool = False):
        super().__init__()
        self.engine = create_engine(database_url, echo=echo)
        self.session_factory = create_session_factory(self.engine)

    async def open(self):
        try:
            await init_db(self.engine)
        except SQLAlchemyError as e:
            logger.error(f"Failed to initialize collection tables: {e}")
            raise StorageError("Failed to initialize collection tables") from e
        logger.info("Using SQL collection store")

    async def close(self):
        await self.engine.dispose()

    async def load(self, name: CollectionName) -> List[dict]:
        name = CollectionName(name)
        try:
            async with self.session_factory() as session:
                document = await session.get(CollectionDocument, name.value)
                payload = document.payload if document else None
        except SQLAlchemyError as e:
            logger.error(f"Failed to load collection '{name.value}': {e}")
            raise StorageError(f"Failed to read collection '{name.value}'", name.value) from e

        if payload is None:
            return []
        return _parse_collection(name, payload)

    async def save(self, name: CollectionName, records: Iterable[dict]) -> None:
        name = CollectionName(name)
        payload = _dump_collection(records)
        try:
            async with self.session_factory() as session:
                document = await session.get(CollectionDocument, name.value)
                if document is None:
                    session.add(CollectionDocument(name=name.value, payload=payload))
                else:
                    document.payload = payload
                await session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to save collection '{name.value}': {e}")
            raise StorageError(f"Failed to write collection '{name.value}'", name.value) from e


def build_store(settings) -> CollectionStore:
    backend = StorageBackend(settings.STORAGE_BACKEND)
    if backend == StorageBackend.SQL:
        return SqlCollectionStore(settings.DATABASE_URL, echo=settings.DEBUG)
    return JsonFileCollectionStore(settings.DATA_DIR)

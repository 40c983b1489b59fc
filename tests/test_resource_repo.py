"""Tests for ResourceRepository."""

import pytest

from catalog.core.exceptions import NotFoundError, StorageError, ValidationError
from catalog.database.models.enums import CollectionName


def fields(**overrides):
    values = {
        "title": "Intro to asyncio",
        "type": "Video",
        "url": "https://example.com/asyncio",
    }
    values.update(overrides)
    return values


class TestResourceRepository:

    @pytest.mark.asyncio
    async def test_create_assigns_unique_ids(self, resource_repo):
        created = [await resource_repo.create(fields(title=f"Item {i}")) for i in range(10)]

        ids = {resource.id for resource in created}
        assert len(ids) == 10

    @pytest.mark.asyncio
    async def test_get_returns_created_fields(self, resource_repo):
        created = await resource_repo.create(fields(authorId="author-1"))

        fetched = await resource_repo.get(created.id)
        assert fetched == created
        assert fetched.to_record() == {
            "id": created.id,
            "title": "Intro to asyncio",
            "type": "Video",
            "url": "https://example.com/asyncio",
            "authorId": "author-1",
        }

    @pytest.mark.asyncio
    async def test_author_is_omitted_when_absent(self, resource_repo, store):
        await resource_repo.create(fields())
        await resource_repo.create(fields(authorId=""))

        stored = await store.load(CollectionName.RESOURCES)
        assert all("authorId" not in record for record in stored)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("missing", ["title", "type", "url"])
    async def test_create_requires_fields(self, resource_repo, missing):
        with pytest.raises(ValidationError) as exc_info:
            await resource_repo.create(fields(**{missing: None}))
        assert exc_info.value.field == missing

    @pytest.mark.asyncio
    async def test_create_rejects_blank_title(self, resource_repo):
        with pytest.raises(ValidationError):
            await resource_repo.create(fields(title="   "))

        assert await resource_repo.list_all() == []

    @pytest.mark.asyncio
    async def test_list_keeps_insertion_order(self, resource_repo):
        first = await resource_repo.create(fields(title="first"))
        second = await resource_repo.create(fields(title="second"))

        assert [r.id for r in await resource_repo.list_all()] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_search_is_case_insensitive(self, resource_repo):
        video = await resource_repo.create(fields(type="Video"))
        await resource_repo.create(fields(type="article"))
        other_video = await resource_repo.create(fields(type="VIDEO"))

        upper = await resource_repo.search("Video")
        lower = await resource_repo.search("video")

        assert upper == lower
        assert [r.id for r in upper] == [video.id, other_video.id]

    @pytest.mark.asyncio
    async def test_search_without_filter_returns_all(self, resource_repo):
        await resource_repo.create(fields(type="Video"))
        await resource_repo.create(fields(type="article"))

        assert len(await resource_repo.search()) == 2
        assert len(await resource_repo.search("")) == 2

    @pytest.mark.asyncio
    async def test_search_is_exact_match(self, resource_repo):
        await resource_repo.create(fields(type="video"))

        assert await resource_repo.search("vid") == []

    @pytest.mark.asyncio
    async def test_get_unknown_raises_not_found(self, resource_repo):
        with pytest.raises(NotFoundError):
            await resource_repo.get("missing")

    @pytest.mark.asyncio
    async def test_replace_overwrites_all_fields(self, resource_repo):
        created = await resource_repo.create(fields(authorId="author-1"))

        replaced = await resource_repo.replace(
            created.id,
            {"title": "New", "type": "link", "url": "https://example.com/new"}
        )

        assert replaced.id == created.id
        assert replaced.author_id is None
        assert await resource_repo.get(created.id) == replaced

    @pytest.mark.asyncio
    async def test_replace_validates_before_lookup(self, resource_repo):
        with pytest.raises(ValidationError):
            await resource_repo.replace("missing", fields(url=""))

    @pytest.mark.asyncio
    async def test_replace_unknown_raises_not_found(self, resource_repo):
        with pytest.raises(NotFoundError):
            await resource_repo.replace("missing", fields())

    @pytest.mark.asyncio
    async def test_delete_removes_only_target(self, resource_repo):
        keep = await resource_repo.create(fields(title="keep"))
        drop = await resource_repo.create(fields(title="drop"))

        await resource_repo.delete(drop.id)

        assert [r.id for r in await resource_repo.list_all()] == [keep.id]
        with pytest.raises(NotFoundError):
            await resource_repo.get(drop.id)

    @pytest.mark.asyncio
    async def test_delete_unknown_raises_not_found(self, resource_repo):
        with pytest.raises(NotFoundError):
            await resource_repo.delete("missing")

    @pytest.mark.asyncio
    async def test_invalid_stored_record_raises_storage_error(self, resource_repo, store):
        await store.save(CollectionName.RESOURCES, [{"id": "1", "title": "no type or url"}])

        with pytest.raises(StorageError):
            await resource_repo.list_all()

    @pytest.mark.asyncio
    async def test_unknown_stored_keys_survive_other_writes(self, resource_repo, store):
        await store.save(CollectionName.RESOURCES, [{
            "id": "legacy",
            "title": "Imported",
            "type": "link",
            "url": "https://example.com/legacy",
            "createdAt": "2024-01-01",
            "notes": None,
        }])

        created = await resource_repo.create(fields())
        await resource_repo.delete(created.id)

        stored = await store.load(CollectionName.RESOURCES)
        assert stored == [{
            "id": "legacy",
            "title": "Imported",
            "type": "link",
            "url": "https://example.com/legacy",
            "createdAt": "2024-01-01",
            "notes": None,
        }]

    @pytest.mark.asyncio
    async def test_numeric_stored_id_is_read_as_string(self, resource_repo, store):
        await store.save(CollectionName.RESOURCES, [
            {"id": 1, "title": "Numbered", "type": "link", "url": "https://example.com/1"}
        ])

        resource = await resource_repo.get("1")

        assert resource.title == "Numbered"
        await resource_repo.delete("1")
        assert await store.load(CollectionName.RESOURCES) == []

import pytest
from fastapi.testclient import TestClient

from catalog.config import TestSettings
from catalog.database.store import JsonFileCollectionStore
from catalog.database.repositories.resource_repo import ResourceRepository
from catalog.database.repositories.rating_repo import RatingRepository
from catalog.database.repositories.feedback_repo import FeedbackRepository


@pytest.fixture
def settings(tmp_path):
    settings = TestSettings()
    settings.STORAGE_BACKEND = "json"
    settings.DATA_DIR = str(tmp_path / "data")
    settings.DATABASE_URL = f"sqlite:///{tmp_path / 'catalog.sqlite'}"
    settings.SEED_SAMPLE_DATA = False
    settings.FEEDBACK_MIN_LENGTH = 10
    settings.FEEDBACK_MAX_LENGTH = 500
    return settings


@pytest.fixture
def store(tmp_path):
    return JsonFileCollectionStore(tmp_path / "data")


@pytest.fixture
def resource_repo(store):
    return ResourceRepository(store)


@pytest.fixture
def rating_repo(store, resource_repo):
    return RatingRepository(store, resource_repo)


@pytest.fixture
def feedback_repo(store, resource_repo):
    return FeedbackRepository(store, resource_repo, min_length=10, max_length=500)


@pytest.fixture
def client(settings):
    from catalog.main import create_app

    with TestClient(create_app(settings)) as test_client:
        yield test_client


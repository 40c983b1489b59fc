from enum import Enum


class CollectionName(str, Enum):
    RESOURCES = "resources"
    RATINGS = "ratings"
    FEEDBACK = "feedback"


class StorageBackend(str, Enum):
    JSON = "json"
    SQL = "sql"

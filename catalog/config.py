import os
from functools import lru_cache


class Settings:
    STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "json")
    DATA_DIR = os.getenv("DATA_DIR", "./data")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./catalog_prod.sqlite")

    APP_NAME = "Resource Catalog API"
    APP_VERSION = "1.0.0"
    DEBUG = False

    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "5002"))

    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

    FEEDBACK_MIN_LENGTH = int(os.getenv("FEEDBACK_MIN_LENGTH", "10"))
    FEEDBACK_MAX_LENGTH = int(os.getenv("FEEDBACK_MAX_LENGTH", "500"))

    SEED_SAMPLE_DATA = os.getenv("SEED_SAMPLE_DATA", "false").lower() == "true"


class DevSettings(Settings):
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./catalog_dev.sqlite")
    DEBUG = True
    SEED_SAMPLE_DATA = os.getenv("SEED_SAMPLE_DATA", "true").lower() == "true"


class TestSettings(Settings):
    DATA_DIR = os.getenv("DATA_DIR", "./data_test")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./catalog_test.sqlite")
    DEBUG = True


@lru_cache
def get_settings():
    env = os.getenv("ENV", "dev")
    if env == "test":
        return TestSettings()
    if env == "dev":
        return DevSettings()
    return Settings()

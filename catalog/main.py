from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging
import time

from catalog.config import get_settings
from catalog.core.exceptions import ValidationError, NotFoundError, StorageError
from catalog.core.dtos.common import ErrorResponse
from catalog.database.repositories.resource_repo import ResourceRepository
from catalog.database.store import CollectionStore, build_store

from catalog.api import resources

logger = logging.getLogger(__name__)


def configure_logging(settings):
    logging.basicConfig(
        level=logging.INFO if settings.DEBUG else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


async def initialize_default_data(store: CollectionStore):
    repository = ResourceRepository(store)

    samples = [
        {
            "title": "Python asyncio documentation",
            "type": "article",
            "url": "https://docs.python.org/3/library/asyncio.html"
        },
        {
            "title": "FastAPI tutorial",
            "type": "video",
            "url": "https://fastapi.tiangolo.com/tutorial/"
        },
        {
            "title": "The Twelve-Factor App",
            "type": "link",
            "url": "https://12factor.net/",
            "authorId": "editor"
        },
    ]
    for fields in samples:
        await repository.create(fields)

    logger.info("Collections initialized with sample resources")


def create_app(settings=None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):

        logger.info("Starting application...")

        store = build_store(settings)
        await store.open()
        app.state.store = store

        if settings.SEED_SAMPLE_DATA:
            existing = await ResourceRepository(store).list_all()
            if not existing:
                logger.info("Seeding empty catalog with sample data...")
                await initialize_default_data(store)

        logger.info("Application started successfully")

        yield

        logger.info("Shutting down application...")
        await store.close()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        lifespan=lifespan
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        logger.info(f"[Request] {request.method} {request.url.path}")
        response = await call_next(request)
        duration = (time.perf_counter() - start) * 1000
        logger.info(
            f"[Response] {request.method} {request.url.path} - "
            f"Status: {response.status_code} - {duration:.1f}ms"
        )
        return response

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error=exc.message, field=exc.field).model_dump(exclude_none=True)
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error="Malformed request body").model_dump(exclude_none=True)
        )

    @app.exception_handler(NotFoundError)
    async def not_found_error_handler(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=ErrorResponse(error=exc.message).model_dump(exclude_none=True)
        )

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"Storage failure on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="Internal Server Error").model_dump(exclude_none=True)
        )

    app.include_router(resources.router)

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "message": "Welcome to Resource Catalog",
            "version": settings.APP_VERSION,
            "docs": "/docs"
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy"}

    return app


configure_logging(get_settings())

app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "catalog.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )

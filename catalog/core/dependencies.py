from fastapi import Depends, Request

from catalog.core.services.aggregation_service import AggregationService
from catalog.database.repositories.feedback_repo import FeedbackRepository
from catalog.database.repositories.rating_repo import RatingRepository
from catalog.database.repositories.resource_repo import ResourceRepository
from catalog.database.store import CollectionStore


def get_store(request: Request) -> CollectionStore:
    return request.app.state.store


def get_resource_repository(
    store: CollectionStore = Depends(get_store)
) -> ResourceRepository:
    return ResourceRepository(store)


def get_rating_repository(
    store: CollectionStore = Depends(get_store),
    resources: ResourceRepository = Depends(get_resource_repository)
) -> RatingRepository:
    return RatingRepository(store, resources)


def get_feedback_repository(
    request: Request,
    store: CollectionStore = Depends(get_store),
    resources: ResourceRepository = Depends(get_resource_repository)
) -> FeedbackRepository:
    settings = request.app.state.settings
    return FeedbackRepository(
        store,
        resources,
        min_length=settings.FEEDBACK_MIN_LENGTH,
        max_length=settings.FEEDBACK_MAX_LENGTH
    )


def get_aggregation_service(
    ratings: RatingRepository = Depends(get_rating_repository),
    feedback: FeedbackRepository = Depends(get_feedback_repository)
) -> AggregationService:
    return AggregationService(ratings, feedback)

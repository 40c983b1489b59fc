from fastapi import APIRouter, Depends, Body, Response
from typing import List, Optional

from catalog.core.dependencies import (
    get_resource_repository,
    get_rating_repository,
    get_feedback_repository,
    get_aggregation_service
)
from catalog.core.services.aggregation_service import AggregationService
from catalog.core.dtos.resource import ResourcePayload, ResourceResponse
from catalog.core.dtos.rating import RatingCreate, RatingResponse
from catalog.core.dtos.feedback import FeedbackPayload, FeedbackResponse
from catalog.database.repositories.resource_repo import ResourceRepository
from catalog.database.repositories.rating_repo import RatingRepository
from catalog.database.repositories.feedback_repo import FeedbackRepository

router = APIRouter(prefix="/resources", tags=["Resources"])


@router.get(
    "",
    response_model=List[ResourceResponse],
    response_model_exclude_none=True
)
async def list_resources(
    resources: ResourceRepository = Depends(get_resource_repository)
):
    return [resource.to_record() for resource in await resources.list_all()]


@router.get(
    "/search",
    response_model=List[ResourceResponse],
    response_model_exclude_none=True
)
async def search_resources(
    type: Optional[str] = None,
    resources: ResourceRepository = Depends(get_resource_repository)
):
    return [resource.to_record() for resource in await resources.search(type)]


@router.get("/{resource_id}")
async def get_resource(
    resource_id: str,
    resources: ResourceRepository = Depends(get_resource_repository),
    aggregation: AggregationService = Depends(get_aggregation_service)
):
    resource = await resources.get(resource_id)
    aggregate = await aggregation.summarize(resource.id)

    body = ResourceResponse.model_validate(resource.to_record())
    return {
        **body.model_dump(by_alias=True, exclude_none=True),
        "averageRating": aggregate.average_rating,
        "feedback": [
            FeedbackResponse.model_validate(entry.to_record()).model_dump(by_alias=True)
            for entry in aggregate.feedback
        ]
    }


@router.post(
    "",
    response_model=ResourceResponse,
    response_model_exclude_none=True,
    status_code=201
)
async def create_resource(
    resource_data: ResourcePayload = Body(...),
    resources: ResourceRepository = Depends(get_resource_repository)
):
    resource = await resources.create(resource_data.model_dump(by_alias=True))
    return resource.to_record()


@router.put(
    "/{resource_id}",
    response_model=ResourceResponse,
    response_model_exclude_none=True
)
async def replace_resource(
    resource_id: str,
    resource_data: ResourcePayload = Body(...),
    resources: ResourceRepository = Depends(get_resource_repository)
):
    resource = await resources.replace(resource_id, resource_data.model_dump(by_alias=True))
    return resource.to_record()


@router.delete("/{resource_id}", status_code=204)
async def delete_resource(
    resource_id: str,
    resources: ResourceRepository = Depends(get_resource_repository)
):
    await resources.delete(resource_id)
    return Response(status_code=204)


@router.post(
    "/{resource_id}/rating",
    response_model=RatingResponse,
    response_model_exclude_none=True,
    status_code=201
)
async def create_rating(
    resource_id: str,
    rating_data: RatingCreate = Body(...),
    ratings: RatingRepository = Depends(get_rating_repository)
):
    rating = await ratings.create(resource_id, rating_data.rating_value, rating_data.user_id)
    return rating.to_record()


@router.delete("/{resource_id}/rating/{rating_id}", status_code=204)
async def delete_rating(
    resource_id: str,
    rating_id: str,
    ratings: RatingRepository = Depends(get_rating_repository)
):
    await ratings.delete(resource_id, rating_id)
    return Response(status_code=204)


@router.post(
    "/{resource_id}/feedback",
    response_model=FeedbackResponse,
    status_code=201
)
async def create_feedback(
    resource_id: str,
    feedback_data: FeedbackPayload = Body(...),
    feedback: FeedbackRepository = Depends(get_feedback_repository)
):
    entry = await feedback.create(resource_id, feedback_data.feedback_text)
    return entry.to_record()


@router.put(
    "/{resource_id}/feedback/{feedback_id}",
    response_model=FeedbackResponse
)
async def update_feedback(
    resource_id: str,
    feedback_id: str,
    feedback_data: FeedbackPayload = Body(...),
    feedback: FeedbackRepository = Depends(get_feedback_repository)
):
    entry = await feedback.update(resource_id, feedback_id, feedback_data.feedback_text)
    return entry.to_record()


@router.delete("/{resource_id}/feedback/{feedback_id}", status_code=204)
async def delete_feedback(
    resource_id: str,
    feedback_id: str,
    feedback: FeedbackRepository = Depends(get_feedback_repository)
):
    await feedback.delete(resource_id, feedback_id)
    return Response(status_code=204)

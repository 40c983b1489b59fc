from pydantic import BaseModel, Field
from typing import Any, Optional


class RatingCreate(BaseModel):
    # checked by the rating repository, which also accepts "4" or 4.0
    rating_value: Any = Field(default=None, alias="ratingValue")
    user_id: Optional[str] = Field(default=None, alias="userId")

    class Config:
        populate_by_name = True


class RatingResponse(BaseModel):
    id: str
    resource_id: str = Field(alias="resourceId")
    rating_value: int = Field(alias="ratingValue")
    user_id: Optional[str] = Field(default=None, alias="userId")

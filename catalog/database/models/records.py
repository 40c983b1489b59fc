from pydantic import BaseModel, Field
from typing import Optional

from catalog.core.validation import RATING_MIN, RATING_MAX


class CatalogRecord(BaseModel):
    id: str

    class Config:
        populate_by_name = True
        # keys this service does not know about are written back unchanged
        extra = "allow"
        coerce_numbers_to_str = True

    def to_record(self) -> dict:
        record = self.model_dump(by_alias=True)
        # absent optional fields are left out; unknown keys are kept as stored
        for name, field in type(self).model_fields.items():
            if getattr(self, name) is None:
                record.pop(field.alias or name, None)
        return record


class Resource(CatalogRecord):
    title: str
    type: str
    url: str
    author_id: Optional[str] = Field(default=None, alias="authorId")


class Rating(CatalogRecord):
    resource_id: str = Field(alias="resourceId")
    rating_value: int = Field(alias="ratingValue", ge=RATING_MIN, le=RATING_MAX)
    user_id: Optional[str] = Field(default=None, alias="userId")


class Feedback(CatalogRecord):
    resource_id: str = Field(alias="resourceId")
    feedback_text: str = Field(alias="feedbackText")
    timestamp: str

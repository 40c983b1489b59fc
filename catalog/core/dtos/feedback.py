from pydantic import BaseModel, Field
from typing import Any


class FeedbackPayload(BaseModel):
    feedback_text: Any = Field(default=None, alias="feedbackText")

    class Config:
        populate_by_name = True


class FeedbackResponse(BaseModel):
    id: str
    resource_id: str = Field(alias="resourceId")
    feedback_text: str = Field(alias="feedbackText")
    timestamp: str

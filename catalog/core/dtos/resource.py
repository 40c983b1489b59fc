from pydantic import BaseModel, Field
from typing import Optional


class ResourcePayload(BaseModel):
    title: Optional[str] = None
    type: Optional[str] = None
    url: Optional[str] = None
    author_id: Optional[str] = Field(default=None, alias="authorId")

    class Config:
        populate_by_name = True


class ResourceResponse(BaseModel):
    id: str
    title: str
    type: str
    url: str
    author_id: Optional[str] = Field(default=None, alias="authorId")

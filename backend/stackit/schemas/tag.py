import uuid
from typing import List, Optional

from pydantic import BaseModel


class TagResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    color: str
    question_count: int

    model_config = {"from_attributes": True}


class TagListResponse(BaseModel):
    tags: List[TagResponse]

from pydantic import BaseModel, Field
from typing import Optional

class PostOptions(BaseModel):
    backgroundColor: Optional[str] = None

class PostCreate(BaseModel):
    content: str = Field(default="", description="Text of the post")
    options: Optional[PostOptions] = None

class PostUpdate(BaseModel):
    content: Optional[str] = None
    options: Optional[PostOptions] = None

class PostUpdateRequest(BaseModel):
    update: PostUpdate = Field(default_factory=PostUpdate)

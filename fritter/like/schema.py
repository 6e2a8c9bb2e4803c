from pydantic import BaseModel, Field

class LikeCreate(BaseModel):
    type: str = Field(default="", description="Kind of reaction, e.g. like or dislike")

class LikeUpdate(BaseModel):
    type: str = Field(default="", description="New kind of reaction")

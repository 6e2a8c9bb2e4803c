from pydantic import BaseModel, Field

class TagCreate(BaseModel):
    name: str = Field(default="", description="Name of the tag")
    type: str = Field(default="", description="What the target id refers to: post or user")

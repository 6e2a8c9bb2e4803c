from pydantic import BaseModel, Field

class FavoriteCreate(BaseModel):
    target: str = Field(default="", description="Username of the user to favorite")

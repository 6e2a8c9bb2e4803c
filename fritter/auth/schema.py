from pydantic import BaseModel, Field
from typing import Optional

# User Creation Schema
class UserCreateModel(BaseModel):
    username: str = Field(default="", description="Unique username of the user")
    password: str = Field(default="", description="Password of the user")

# User Login Schema
class UserLoginModel(BaseModel):
    username: str = Field(default="", description="Username of the user")
    password: str = Field(default="", description="Password of the user")

class UserUpdateModel(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None

class UserUpdateRequest(BaseModel):
    update: UserUpdateModel = Field(default_factory=UserUpdateModel)

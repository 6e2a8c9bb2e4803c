from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from .service import FriendRequestStatus

class FriendRequestSchema(BaseModel):
    id: str = Field(alias="_id")
    sender: str = Field(alias="from")
    recipient: str = Field(alias="to")
    status: FriendRequestStatus
    dateCreated: datetime
    dateUpdated: datetime

    model_config = ConfigDict(populate_by_name=True)

class MessageSchema(BaseModel):
    msg: str

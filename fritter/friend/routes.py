from fastapi import Depends
from bson import ObjectId
from typing import List
from fritter.auth.dependencies import get_current_user
from fritter.auth.service import user_concept
import fritter.responses as responses
from .schema import FriendRequestSchema, MessageSchema
from .service import friend_concept

# Friend Endpoints

async def get_friends(user: ObjectId = Depends(get_current_user)) -> List[str]:
    return await user_concept.ids_to_usernames(await friend_concept.get_friends(user))

async def remove_friend(friend: str, user: ObjectId = Depends(get_current_user)) -> MessageSchema:
    friend_id = await user_concept.get_user_id(friend)
    return await friend_concept.remove_friend(user, friend_id)

async def get_requests(user: ObjectId = Depends(get_current_user)) -> List[FriendRequestSchema]:
    return await responses.friend_requests(await friend_concept.get_requests(user))

async def send_friend_request(to: str, user: ObjectId = Depends(get_current_user)) -> MessageSchema:
    to_id = await user_concept.get_user_id(to)
    return await friend_concept.send_request(user, to_id)

async def remove_friend_request(to: str, user: ObjectId = Depends(get_current_user)) -> MessageSchema:
    to_id = await user_concept.get_user_id(to)
    return await friend_concept.remove_request(user, to_id)

# The caller is the recipient; the path names the sender by username
async def accept_friend_request(sender: str, user: ObjectId = Depends(get_current_user)) -> MessageSchema:
    from_id = await user_concept.get_user_id(sender)
    return await friend_concept.accept_request(from_id, user)

async def reject_friend_request(sender: str, user: ObjectId = Depends(get_current_user)) -> MessageSchema:
    from_id = await user_concept.get_user_id(sender)
    return await friend_concept.reject_request(from_id, user)


routes = [
    ("GET", "/friends", get_friends),
    ("DELETE", "/friends/{friend}", remove_friend),
    ("GET", "/friend/requests", get_requests),
    ("POST", "/friend/requests/{to}", send_friend_request),
    ("DELETE", "/friend/requests/{to}", remove_friend_request),
    ("PUT", "/friend/accept/{sender}", accept_friend_request),
    ("PUT", "/friend/reject/{sender}", reject_friend_request),
]

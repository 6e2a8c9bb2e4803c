from fastapi import Depends
from bson import ObjectId
from typing import Optional
from fritter.auth.dependencies import get_current_user
from fritter.auth.service import user_concept
from fritter.db.mongo import to_object_id
from fritter.post.service import post_concept
import fritter.responses as responses
from .schema import LikeCreate, LikeUpdate
from .service import like_concept


async def get_user_likes(username: str, type: Optional[str] = None):
    owner = await user_concept.get_user_id(username)
    return await responses.likes(await like_concept.get_by_owner(owner, type))

async def get_post_likes(post_id: str, type: Optional[str] = None):
    post = await post_concept.get_post(to_object_id(post_id))
    return await responses.likes(await like_concept.get_by_post(post["_id"], type))

# Whether the logged in user has reacted to the post with this type
async def did_user_like(post_id: str, type: Optional[str] = None, user: ObjectId = Depends(get_current_user)) -> bool:
    post = await post_concept.get_post(to_object_id(post_id))
    return await like_concept.did_user_like(post["_id"], user, type)

async def create_like(post_id: str, like_data: LikeCreate, user: ObjectId = Depends(get_current_user)):
    post = await post_concept.get_post(to_object_id(post_id))
    created = await like_concept.create(user, post["_id"], like_data.type)
    return {"msg": created["msg"], "like": await responses.like(created["like"])}

async def update_like(like_id: str, like_data: LikeUpdate, user: ObjectId = Depends(get_current_user)):
    _id = to_object_id(like_id)
    await like_concept.is_owner(user, _id)
    return await like_concept.update(_id, like_data.type)

async def delete_like(like_id: str, user: ObjectId = Depends(get_current_user)):
    _id = to_object_id(like_id)
    await like_concept.is_owner(user, _id)
    return await like_concept.delete(_id)


routes = [
    ("GET", "/likes/{username}", get_user_likes),
    ("GET", "/post/likes/{post_id}", get_post_likes),
    ("GET", "/user/liked/{post_id}", did_user_like),
    ("POST", "/likes/{post_id}", create_like),
    ("PATCH", "/likes/{like_id}", update_like),
    ("DELETE", "/likes/{like_id}", delete_like),
]

from fastapi import Depends
from bson import ObjectId
from typing import Optional
from fritter.auth.dependencies import get_current_user
from fritter.auth.service import user_concept
from fritter.db.mongo import to_object_id
from fritter.like.service import like_concept
from fritter.tag.service import tag_concept
import fritter.responses as responses
from .schema import PostCreate, PostUpdateRequest
from .service import post_concept


async def get_posts(author: Optional[str] = None):
    if author:
        author_id = await user_concept.get_user_id(author)
        posts = await post_concept.get_by_author(author_id)
    else:
        posts = await post_concept.get_posts()
    return await responses.posts(posts)

async def create_post(post_data: PostCreate, user: ObjectId = Depends(get_current_user)):
    options = post_data.options.model_dump(exclude_none=True) if post_data.options else None
    created = await post_concept.create(user, post_data.content, options)
    return {"msg": created["msg"], "post": await responses.post(created["post"])}

async def update_post(post_id: str, body: PostUpdateRequest, user: ObjectId = Depends(get_current_user)):
    _id = to_object_id(post_id)
    await post_concept.is_author(user, _id)
    return await post_concept.update(_id, body.update.model_dump(exclude_unset=True))

async def delete_post(post_id: str, user: ObjectId = Depends(get_current_user)):
    _id = to_object_id(post_id)
    await post_concept.is_author(user, _id)
    await like_concept.remove_by_post(_id)
    await tag_concept.remove_by_target(_id)
    return await post_concept.delete(_id)


routes = [
    ("GET", "/posts", get_posts),
    ("POST", "/posts", create_post),
    ("PATCH", "/posts/{post_id}", update_post),
    ("DELETE", "/posts/{post_id}", delete_post),
]

from fastapi import Depends
from bson import ObjectId
from typing import Any, Dict, Optional
from fritter.auth.dependencies import get_current_user
from fritter.auth.service import user_concept
from fritter.db.mongo import to_object_id
from fritter.post.service import post_concept
import fritter.responses as responses
from .schema import TagCreate
from .service import TagType, parse_tag_type, tag_concept


async def get_tags(target: Optional[str] = None, name: Optional[str] = None, type: Optional[str] = None):
    query: Dict[str, Any] = {}
    if target:
        query["target"] = to_object_id(target)
    if name:
        query["name"] = name
    if type:
        query["type"] = parse_tag_type(type).value
    return await responses.tags(await tag_concept.get_tags(query))

async def create_tag(target_id: str, tag_data: TagCreate, user: ObjectId = Depends(get_current_user)):
    target = to_object_id(target_id)
    # The target has to exist as whatever the tag type says it is
    if parse_tag_type(tag_data.type) == TagType.post:
        await post_concept.get_post(target)
    else:
        await user_concept.user_exists(target)
    created = await tag_concept.create(user, target, tag_data.name, tag_data.type)
    return {"msg": created["msg"], "tag": await responses.tag(created["tag"])}

async def delete_tag(tag_id: str, user: ObjectId = Depends(get_current_user)):
    _id = to_object_id(tag_id)
    await tag_concept.is_owner(user, _id)
    return await tag_concept.delete(_id)

async def get_tagged_posts(name: str):
    post_ids = await tag_concept.get_targets_by_tag(name, TagType.post.value)
    return await responses.posts(await post_concept.get_posts({"_id": {"$in": post_ids}}))

async def get_tagged_users(name: str):
    user_ids = await tag_concept.get_targets_by_tag(name, TagType.user.value)
    return await user_concept.ids_to_usernames(user_ids)


routes = [
    ("GET", "/tags", get_tags),
    ("POST", "/tags/{target_id}", create_tag),
    ("DELETE", "/tags/{tag_id}", delete_tag),
    ("GET", "/tags/{name}/posts", get_tagged_posts),
    ("GET", "/tags/{name}/users", get_tagged_users),
]

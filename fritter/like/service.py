from bson import ObjectId
from enum import Enum as PyEnum
from typing import Any, Dict, List, Optional
import pymongo
import pymongo.errors
from fritter.db.mongo import DocCollection
from fritter.db.policy import NaturalKeyPolicy
from fritter.errors import BadValuesError, NotAllowedError, NotFoundError


class LikeType(str, PyEnum):
    like = "like"
    dislike = "dislike"


def parse_like_type(type: Optional[str]) -> LikeType:
    if not type:
        raise BadValuesError("Like type must be non-empty!")
    try:
        return LikeType(type)
    except ValueError:
        allowed = ", ".join(t.value for t in LikeType)
        raise BadValuesError(f"Unknown like type '{type}'. Must be one of: {allowed}")


class LikeConcept:
    """Reactions of a user to a post, at most one per (owner, post, type)."""

    def __init__(self):
        self.likes = DocCollection(
            "likes",
            indexes=[
                ([("owner", pymongo.ASCENDING), ("post", pymongo.ASCENDING), ("type", pymongo.ASCENDING)], {"unique": True}),
                ([("post", pymongo.ASCENDING)], {}),
            ],
        )
        self.policy = NaturalKeyPolicy(
            self.likes, ("owner", "post", "type"), label="like",
            duplicate_error=lambda r: NotAllowedError(f"{r['owner']} already gave a {r['type']} to post {r['post']}!"),
        )

    async def create(self, owner: ObjectId, post: ObjectId, type: Optional[str]):
        record = {"owner": owner, "post": post, "type": parse_like_type(type).value}
        await self.policy.enforce_unique(record)
        try:
            _id = await self.likes.create_one(record)
        except pymongo.errors.DuplicateKeyError:
            raise self.policy.duplicate_error(record)
        return {"msg": "Like successfully created!", "like": await self.likes.read_one({"_id": _id})}

    async def get_likes(self, query: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return await self.likes.read_many(query or {})

    async def get_by_owner(self, owner: ObjectId, type: Optional[str] = None) -> List[Dict[str, Any]]:
        query: Dict[str, Any] = {"owner": owner}
        if type:
            query["type"] = parse_like_type(type).value
        return await self.get_likes(query)

    async def get_by_post(self, post: ObjectId, type: Optional[str] = None) -> List[Dict[str, Any]]:
        query: Dict[str, Any] = {"post": post}
        if type:
            query["type"] = parse_like_type(type).value
        return await self.get_likes(query)

    async def did_user_like(self, post: ObjectId, user: ObjectId, type: Optional[str]) -> bool:
        like = await self.likes.read_one({"owner": user, "post": post, "type": parse_like_type(type).value})
        return like is not None

    async def update(self, _id: ObjectId, type: Optional[str]):
        like = await self.policy.require_exists(_id)
        new_type = parse_like_type(type).value
        await self.policy.enforce_unique({**like, "type": new_type}, exclude=_id)
        if await self.likes.update_one({"_id": _id}, {"type": new_type}) == 0:
            raise NotFoundError(f"Like {_id} does not exist!")
        return {"msg": "Like successfully updated!"}

    async def delete(self, _id: ObjectId):
        await self.likes.delete_one({"_id": _id})
        return {"msg": "Like deleted successfully!"}

    async def is_owner(self, user: ObjectId, _id: ObjectId) -> None:
        await self.policy.require_owner(user, _id)

    async def remove_by_post(self, post: ObjectId) -> int:
        return await self.likes.delete_many({"post": post})

    async def remove_by_owner(self, owner: ObjectId) -> int:
        return await self.likes.delete_many({"owner": owner})


like_concept = LikeConcept()

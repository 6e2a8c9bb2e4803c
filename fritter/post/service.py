from bson import ObjectId
from typing import Any, Dict, List, Optional
import pymongo
from fritter.db.mongo import DocCollection
from fritter.db.policy import NaturalKeyPolicy
from fritter.errors import BadValuesError, NotAllowedError, NotFoundError


class PostConcept:

    def __init__(self):
        self.posts = DocCollection(
            "posts",
            indexes=[([("author", pymongo.ASCENDING)], {})],
        )
        # Posts have no natural key, only an author
        self.policy = NaturalKeyPolicy(self.posts, (), owner_field="author", label="post")

    async def create(self, author: ObjectId, content: str, options: Optional[Dict[str, Any]] = None):
        if not content:
            raise BadValuesError("Post content must be non-empty!")
        _id = await self.posts.create_one({"author": author, "content": content, "options": options})
        return {"msg": "Post successfully created!", "post": await self.posts.read_one({"_id": _id})}

    async def get_posts(self, query: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return await self.posts.read_many(query or {})

    async def get_by_author(self, author: ObjectId) -> List[Dict[str, Any]]:
        return await self.get_posts({"author": author})

    async def get_post(self, _id: ObjectId) -> Dict[str, Any]:
        return await self.policy.require_exists(_id)

    async def update(self, _id: ObjectId, update: Dict[str, Any]):
        self.sanitize_update(update)
        if "content" in update and not update["content"]:
            raise BadValuesError("Post content must be non-empty!")
        if not update:
            raise BadValuesError("Nothing to update!")
        if await self.posts.update_one({"_id": _id}, update) == 0:
            raise NotFoundError(f"Post {_id} does not exist!")
        return {"msg": "Post successfully updated!"}

    async def delete(self, _id: ObjectId):
        await self.posts.delete_one({"_id": _id})
        return {"msg": "Post deleted successfully!"}

    async def is_author(self, user: ObjectId, _id: ObjectId) -> None:
        await self.policy.require_owner(user, _id)

    async def remove_by_author(self, author: ObjectId) -> List[ObjectId]:
        posts = await self.posts.read_many({"author": author}, sort=None)
        await self.posts.delete_many({"author": author})
        return [post["_id"] for post in posts]

    def sanitize_update(self, update: Dict[str, Any]) -> None:
        # Make sure the update cannot change the author.
        allowed_updates = ("content", "options")
        for key in update:
            if key not in allowed_updates:
                raise NotAllowedError(f"Cannot update '{key}' field!")


post_concept = PostConcept()

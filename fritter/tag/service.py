from bson import ObjectId
from enum import Enum as PyEnum
from typing import Any, Dict, List, Optional
import pymongo
import pymongo.errors
from fritter.db.mongo import DocCollection
from fritter.db.policy import NaturalKeyPolicy
from fritter.errors import BadValuesError, NotAllowedError


class TagType(str, PyEnum):
    post = "post"
    user = "user"


def parse_tag_type(type: Optional[str]) -> TagType:
    if not type:
        raise BadValuesError("Tag type must be non-empty!")
    try:
        return TagType(type)
    except ValueError:
        allowed = ", ".join(t.value for t in TagType)
        raise BadValuesError(f"Unknown tag type '{type}'. Must be one of: {allowed}")


class TagConcept:
    """Tags as join records: one document per (target, name, type).

    Looking up everything carrying a tag is a query on `name`, so there is
    no shared array of targets to grow or race on.
    """

    def __init__(self):
        self.tags = DocCollection(
            "tags",
            indexes=[
                ([("target", pymongo.ASCENDING), ("name", pymongo.ASCENDING), ("type", pymongo.ASCENDING)], {"unique": True}),
                ([("name", pymongo.ASCENDING)], {}),
            ],
        )
        self.policy = NaturalKeyPolicy(
            self.tags, ("target", "name", "type"), label="tag",
            duplicate_error=lambda r: NotAllowedError(f"{r['type'].capitalize()} {r['target']} is already tagged '{r['name']}'!"),
        )

    async def create(self, owner: ObjectId, target: ObjectId, name: Optional[str], type: Optional[str]):
        if not name:
            raise BadValuesError("Tag name must be non-empty!")
        record = {"owner": owner, "target": target, "name": name, "type": parse_tag_type(type).value}
        await self.policy.enforce_unique(record)
        try:
            _id = await self.tags.create_one(record)
        except pymongo.errors.DuplicateKeyError:
            raise self.policy.duplicate_error(record)
        return {"msg": "Tag created successfully!", "tag": await self.tags.read_one({"_id": _id})}

    async def get_tags(self, query: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return await self.tags.read_many(query or {})

    async def get_targets_by_tag(self, name: str, type: Optional[str] = None) -> List[ObjectId]:
        query: Dict[str, Any] = {"name": name}
        if type:
            query["type"] = parse_tag_type(type).value
        return [tag["target"] for tag in await self.get_tags(query)]

    async def delete(self, _id: ObjectId):
        await self.tags.delete_one({"_id": _id})
        return {"msg": "Tag deleted!"}

    async def is_owner(self, user: ObjectId, _id: ObjectId) -> None:
        await self.policy.require_owner(user, _id)

    async def remove_by_target(self, target: ObjectId) -> int:
        return await self.tags.delete_many({"target": target})

    async def remove_by_user(self, user: ObjectId) -> int:
        return await self.tags.delete_many({"$or": [{"owner": user}, {"target": user}]})


tag_concept = TagConcept()

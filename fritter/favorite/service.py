from bson import ObjectId
from typing import Any, Dict, List, Optional
import pymongo
import pymongo.errors
from fritter.db.mongo import DocCollection
from fritter.db.policy import NaturalKeyPolicy
from fritter.errors import BadValuesError, NotAllowedError


class FavoriteConcept:
    """A user marking another user as a favorite; one record per (owner, target)."""

    def __init__(self):
        self.favorites = DocCollection(
            "favorites",
            indexes=[([("owner", pymongo.ASCENDING), ("target", pymongo.ASCENDING)], {"unique": True})],
        )
        self.policy = NaturalKeyPolicy(
            self.favorites, ("owner", "target"), label="favorite",
            duplicate_error=lambda r: NotAllowedError(f"{r['target']} is already a favorite of {r['owner']}!"),
        )

    async def create(self, owner: ObjectId, target: Optional[ObjectId]):
        if target is None:
            raise BadValuesError("Favorite target must be non-empty!")
        record = {"owner": owner, "target": target}
        await self.policy.enforce_unique(record)
        try:
            _id = await self.favorites.create_one(record)
        except pymongo.errors.DuplicateKeyError:
            raise self.policy.duplicate_error(record)
        return {"msg": "Favorite successfully created!", "favorite": await self.favorites.read_one({"_id": _id})}

    async def get_favorites(self, query: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        return await self.favorites.read_many(query or {})

    async def get_by_owner(self, owner: ObjectId) -> List[Dict[str, Any]]:
        return await self.get_favorites({"owner": owner})

    async def delete(self, _id: ObjectId):
        await self.favorites.delete_one({"_id": _id})
        return {"msg": "Favorite deleted successfully!"}

    async def is_owner(self, user: ObjectId, _id: ObjectId) -> None:
        await self.policy.require_owner(user, _id)

    async def remove_by_user(self, user: ObjectId) -> int:
        return await self.favorites.delete_many({"$or": [{"owner": user}, {"target": user}]})


favorite_concept = FavoriteConcept()

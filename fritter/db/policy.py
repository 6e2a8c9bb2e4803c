from typing import Any, Callable, Dict, Sequence
from bson import ObjectId
from fritter.db.mongo import DocCollection
from fritter.errors import NotAllowedError, NotFoundError, NotOwnerError


class NaturalKeyPolicy:
    """Uniqueness and ownership rules shared by the concepts.

    `key_fields` is the natural key of a record: creating a second record
    with the same values is refused. `owner_field` names the user id that
    may mutate or delete a record. `duplicate_error` builds the exception
    raised for a duplicate from the record being created.
    """

    def __init__(
        self,
        collection: DocCollection,
        key_fields: Sequence[str],
        owner_field: str = "owner",
        label: str = "item",
        duplicate_error: Callable[[Dict[str, Any]], Exception] | None = None,
    ):
        self.collection = collection
        self.key_fields = tuple(key_fields)
        self.owner_field = owner_field
        self.label = label
        self.duplicate_error = duplicate_error or self._default_duplicate_error

    def key_of(self, record: Dict[str, Any]) -> Dict[str, Any]:
        return {field: record[field] for field in self.key_fields}

    async def enforce_unique(self, record: Dict[str, Any], exclude: ObjectId | None = None) -> None:
        existing = await self.collection.read_one(self.key_of(record))
        if existing is not None and existing["_id"] != exclude:
            raise self.duplicate_error(record)

    async def require_exists(self, _id: ObjectId) -> Dict[str, Any]:
        record = await self.collection.read_one({"_id": _id})
        if record is None:
            raise NotFoundError(f"{self.label.capitalize()} {_id} does not exist!")
        return record

    async def require_owner(self, user: ObjectId, _id: ObjectId) -> Dict[str, Any]:
        record = await self.require_exists(_id)
        if record[self.owner_field] != user:
            raise NotOwnerError(user, _id, self.label)
        return record

    def _default_duplicate_error(self, record: Dict[str, Any]) -> Exception:
        values = ", ".join(str(v) for v in self.key_of(record).values())
        return NotAllowedError(f"{self.label.capitalize()} ({values}) already exists!")

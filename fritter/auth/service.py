from bson import ObjectId
from typing import Any, Dict, List, Optional
import pymongo
import pymongo.errors
from fritter.db.mongo import DocCollection
from fritter.errors import BadValuesError, NotAllowedError, NotFoundError
from .utils import generate_password_hash, verify_password
import logging

DELETED_USER = "DELETED_USER"


def sanitize_user(user: Dict[str, Any]) -> Dict[str, Any]:
    """Drops the password hash before a user document leaves the concept."""
    sanitized = dict(user)
    sanitized.pop("password", None)
    return sanitized


class UserConcept:

    def __init__(self):
        self.users = DocCollection(
            "users",
            indexes=[([("username", pymongo.ASCENDING)], {"unique": True})],
        )

    async def create(self, username: str, password: str):
        self.can_create(username, password)
        await self.is_username_unique(username)
        try:
            _id = await self.users.create_one({
                "username": username,
                "password": generate_password_hash(password),
            })
        except pymongo.errors.DuplicateKeyError:
            raise NotAllowedError(f"User with username {username} already exists!")
        logging.info(f"Created user {username} ({_id})")
        return {"msg": "User created successfully!", "user": await self.get_user_by_id(_id)}

    async def get_user_by_id(self, _id: ObjectId) -> Dict[str, Any]:
        user = await self.users.read_one({"_id": _id})
        if user is None:
            raise NotFoundError("User not found!")
        return sanitize_user(user)

    async def get_user_by_username(self, username: str) -> Dict[str, Any]:
        user = await self.users.read_one({"username": username})
        if user is None:
            raise NotFoundError("User not found!")
        return sanitize_user(user)

    async def get_user_id(self, username: str) -> ObjectId:
        return (await self.get_user_by_username(username))["_id"]

    async def get_users(self, username: Optional[str] = None) -> List[Dict[str, Any]]:
        filter = {"username": username} if username else {}
        users = await self.users.read_many(filter)
        return [sanitize_user(user) for user in users]

    async def ids_to_usernames(self, ids: List[ObjectId]) -> List[str]:
        users = await self.users.read_many({"_id": {"$in": list(ids)}}, sort=None)
        id_to_user = {user["_id"]: user["username"] for user in users}
        return [id_to_user.get(_id, DELETED_USER) for _id in ids]

    async def authenticate(self, username: str, password: str):
        user = await self.users.read_one({"username": username})
        if user is None or not verify_password(password, user["password"]):
            raise NotAllowedError("Username or password is incorrect.")
        return {"msg": "Successfully authenticated.", "_id": user["_id"]}

    async def update(self, _id: ObjectId, update: Dict[str, Any]):
        update = self.sanitize_update(update)
        if "username" in update:
            if not update["username"]:
                raise BadValuesError("Username must be non-empty!")
            await self.is_username_unique(update["username"], exclude=_id)
        if "password" in update:
            if not update["password"]:
                raise BadValuesError("Password must be non-empty!")
            update["password"] = generate_password_hash(update["password"])
        if not update:
            raise BadValuesError("Nothing to update!")
        if await self.users.update_one({"_id": _id}, update) == 0:
            raise NotFoundError("User not found!")
        return {"msg": "User updated successfully!"}

    async def delete(self, _id: ObjectId):
        await self.users.delete_one({"_id": _id})
        logging.info(f"Deleted user {_id}")
        return {"msg": "User deleted!"}

    async def user_exists(self, _id: ObjectId) -> None:
        if await self.users.read_one({"_id": _id}) is None:
            raise NotFoundError(f"User {_id} does not exist!")

    def sanitize_update(self, update: Dict[str, Any]) -> Dict[str, Any]:
        allowed_updates = ("username", "password")
        for key in update:
            if key not in allowed_updates:
                raise NotAllowedError(f"Cannot update '{key}' field!")
        return {key: value for key, value in update.items() if value is not None}

    def can_create(self, username: str, password: str) -> None:
        if not username or not password:
            raise BadValuesError("Username and password must be non-empty!")

    async def is_username_unique(self, username: str, exclude: Optional[ObjectId] = None) -> None:
        existing = await self.users.read_one({"username": username})
        if existing is not None and existing["_id"] != exclude:
            raise NotAllowedError(f"User with username {username} already exists!")


user_concept = UserConcept()

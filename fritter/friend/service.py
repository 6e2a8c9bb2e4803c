from bson import ObjectId
from enum import Enum as PyEnum
from typing import Any, Dict, List
import pymongo
import pymongo.errors
from fritter.db.mongo import DocCollection
from fritter.db.policy import NaturalKeyPolicy
from fritter.errors import (
    AlreadyFriendsError, AlreadyRequestedError, FriendNotFoundError,
    FriendRequestNotFoundError, NotAllowedError,
)
import logging


class FriendRequestStatus(str, PyEnum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"


def pair_key(user1: ObjectId, user2: ObjectId) -> str:
    """Identity of an unordered pair: (a, b) and (b, a) give the same key."""
    return ":".join(sorted((str(user1), str(user2))))


class FriendConcept:
    """Friendships and the friend request lifecycle.

    A request moves from pending to accepted or rejected. The pending
    record is popped and a separate history record is written, so history
    is never updated in place. Only pending requests carry `pair`, and the
    sparse unique index on it keeps one pending request per pair even
    under concurrent senders.
    """

    def __init__(self):
        self.friends = DocCollection(
            "friends",
            indexes=[([("pair", pymongo.ASCENDING)], {"unique": True})],
        )
        self.requests = DocCollection(
            "friendRequests",
            indexes=[
                ([("pair", pymongo.ASCENDING)], {"unique": True, "sparse": True}),
                ([("from", pymongo.ASCENDING), ("to", pymongo.ASCENDING)], {}),
            ],
        )
        self.friendship_policy = NaturalKeyPolicy(
            self.friends, ("pair",), owner_field="user1", label="friendship",
            duplicate_error=lambda r: AlreadyFriendsError(r["user1"], r["user2"]),
        )
        self.pending_policy = NaturalKeyPolicy(
            self.requests, ("pair", "status"), owner_field="from", label="friend request",
            duplicate_error=lambda r: AlreadyRequestedError(r["from"], r["to"]),
        )

    async def send_request(self, from_: ObjectId, to: ObjectId):
        if from_ == to:
            raise NotAllowedError("Cannot send a friend request to yourself!")
        key = pair_key(from_, to)
        await self.friendship_policy.enforce_unique({"user1": from_, "user2": to, "pair": key})
        request = {"from": from_, "to": to, "status": FriendRequestStatus.pending.value, "pair": key}
        await self.pending_policy.enforce_unique(request)
        try:
            request_id = await self.requests.create_one(request)
        except pymongo.errors.DuplicateKeyError:
            # Lost a race with a request sent the other way
            raise AlreadyRequestedError(from_, to)
        # An accept may have finished between the checks above and the insert
        if await self.friends.read_one({"pair": key}) is not None:
            await self.requests.delete_one({"_id": request_id})
            raise AlreadyFriendsError(from_, to)
        logging.info(f"Friend request {from_} -> {to} sent")
        return {"msg": "Sent request!"}

    async def remove_request(self, from_: ObjectId, to: ObjectId):
        await self.remove_pending_request(from_, to)
        return {"msg": "Removed request!"}

    async def accept_request(self, from_: ObjectId, to: ObjectId):
        """Turns the pending request from `from_` to `to` into a friendship.

        The friendship is written before the request is popped, so at every
        point the pair has either a pending request or a friendship and a
        concurrent `send_request` is refused. If the pop loses to a
        concurrent remove or reject, the friendship is taken back.
        """
        await self.require_pending_request(from_, to)
        try:
            friendship_id = await self.friends.create_one({"user1": from_, "user2": to, "pair": pair_key(from_, to)})
        except pymongo.errors.DuplicateKeyError:
            raise AlreadyFriendsError(from_, to)
        try:
            request = await self.remove_pending_request(from_, to)
        except Exception:
            await self.friends.delete_one({"_id": friendship_id})
            raise
        try:
            await self.requests.create_one({"from": from_, "to": to, "status": FriendRequestStatus.accepted.value})
        except Exception:
            logging.error(f"Accepting friend request {from_} -> {to} failed, restoring it")
            await self.friends.delete_one({"_id": friendship_id})
            await self.requests.restore_one(request)
            raise
        logging.info(f"Friend request {from_} -> {to} accepted")
        return {"msg": "Accepted request!"}

    async def reject_request(self, from_: ObjectId, to: ObjectId):
        request = await self.remove_pending_request(from_, to)
        try:
            await self.requests.create_one({"from": from_, "to": to, "status": FriendRequestStatus.rejected.value})
        except Exception:
            logging.error(f"Rejecting friend request {from_} -> {to} failed, restoring it")
            await self.requests.restore_one(request)
            raise
        return {"msg": "Rejected request!"}

    async def remove_friend(self, user: ObjectId, friend: ObjectId):
        friendship = await self.friends.pop_one({"pair": pair_key(user, friend)})
        if friendship is None:
            raise FriendNotFoundError(user, friend)
        return {"msg": "Unfriended!"}

    async def get_requests(self, user: ObjectId) -> List[Dict[str, Any]]:
        return await self.requests.read_many({"$or": [{"from": user}, {"to": user}]})

    async def get_friends(self, user: ObjectId) -> List[ObjectId]:
        friendships = await self.friends.read_many({"$or": [{"user1": user}, {"user2": user}]})
        return [f["user2"] if f["user1"] == user else f["user1"] for f in friendships]

    async def remove_user(self, user: ObjectId) -> None:
        friendships = await self.friends.delete_many({"$or": [{"user1": user}, {"user2": user}]})
        requests = await self.requests.delete_many({"$or": [{"from": user}, {"to": user}]})
        logging.info(f"Removed {friendships} friendships and {requests} friend requests of user {user}")

    async def require_pending_request(self, from_: ObjectId, to: ObjectId) -> Dict[str, Any]:
        request = await self.requests.read_one({"from": from_, "to": to, "status": FriendRequestStatus.pending.value})
        if request is None:
            raise FriendRequestNotFoundError(from_, to)
        return request

    async def remove_pending_request(self, from_: ObjectId, to: ObjectId) -> Dict[str, Any]:
        request = await self.requests.pop_one({"from": from_, "to": to, "status": FriendRequestStatus.pending.value})
        if request is None:
            raise FriendRequestNotFoundError(from_, to)
        return request


friend_concept = FriendConcept()

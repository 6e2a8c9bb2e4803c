from typing import Any, Dict, Optional
from bson import ObjectId


class FritterError(Exception):
    """Base error for everything a concept can raise.

    `message` is safe to return to the client. `HTTP_CODE` is used by the
    exception handlers registered on the app.
    """

    HTTP_CODE = 500

    def __init__(self, message: str = "An unexpected error occurred", context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class BadValuesError(FritterError):
    """Malformed or empty input."""

    HTTP_CODE = 400


class UnauthenticatedError(FritterError):
    """The request needs a logged in user and has none."""

    HTTP_CODE = 401


class NotAllowedError(FritterError):
    """The operation would break an invariant (duplicate, not owner, self reference)."""

    HTTP_CODE = 403


class NotFoundError(FritterError):
    """A referenced record does not exist."""

    HTTP_CODE = 404


class NotOwnerError(NotAllowedError):
    def __init__(self, user: ObjectId, _id: ObjectId, label: str = "item"):
        self.user = user
        self._id = _id
        super().__init__(f"You are not the owner of this {label}!", {"user": str(user), "_id": str(_id)})


class FriendError(FritterError):
    """Base for friend lifecycle errors.

    The message template uses `{0}` and `{1}` for the two users. The app's
    exception handler swaps the raw ids for usernames before responding.
    """

    template = "{0} {1}"

    def __init__(self, user1: ObjectId, user2: ObjectId):
        self.user1 = user1
        self.user2 = user2
        super().__init__(self.format_with(str(user1), str(user2)))

    def format_with(self, name1: str, name2: str) -> str:
        return self.template.format(name1, name2)


class AlreadyFriendsError(FriendError, NotAllowedError):
    template = "{0} and {1} are already friends!"


class AlreadyRequestedError(FriendError, NotAllowedError):
    template = "Friend request between {0} and {1} already exists!"


class FriendNotFoundError(FriendError, NotFoundError):
    template = "Friendship between {0} and {1} does not exist!"


class FriendRequestNotFoundError(FriendError, NotFoundError):
    template = "Friend request from {0} to {1} does not exist!"

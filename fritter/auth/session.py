from dataclasses import dataclass
from typing import Optional
from bson import ObjectId
from fritter.errors import NotAllowedError, UnauthenticatedError
import logging


@dataclass(frozen=True)
class SessionState:
    """What the transport session knows about the caller.

    Values are never mutated: logging in or out returns a new state which
    the route layer writes back to the session cookie.
    """

    user: Optional[str] = None

    def to_dict(self) -> dict:
        return {"user": self.user}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "SessionState":
        if not data:
            return cls()
        return cls(user=data.get("user"))


class WebSessionConcept:

    def start(self, state: SessionState, user: ObjectId) -> SessionState:
        self.is_logged_out(state)
        logging.info(f"Session started for user {user}")
        return SessionState(user=str(user))

    def end(self, state: SessionState) -> SessionState:
        self.is_logged_in(state)
        logging.info(f"Session ended for user {state.user}")
        return SessionState()

    def get_user(self, state: SessionState) -> ObjectId:
        self.is_logged_in(state)
        return ObjectId(state.user)

    def is_logged_in(self, state: SessionState) -> None:
        if state.user is None or not ObjectId.is_valid(state.user):
            raise UnauthenticatedError("Must be logged in!")

    def is_logged_out(self, state: SessionState) -> None:
        if state.user is not None:
            raise NotAllowedError("Must be logged out!")


web_session = WebSessionConcept()

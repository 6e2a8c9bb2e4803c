from fastapi import Depends, Request, Response
from bson import ObjectId
from fritter.config import Config
from fritter.errors import NotFoundError, UnauthenticatedError
from .service import user_concept
from .session import SessionState, web_session
from .utils import create_session_token, decode_session_token


def get_session_state(request: Request) -> SessionState:
    token = request.cookies.get(Config.SESSION_COOKIE_NAME)
    if not token:
        return SessionState()
    return SessionState.from_dict(decode_session_token(token))


async def get_current_user(state: SessionState = Depends(get_session_state)) -> ObjectId:
    user = web_session.get_user(state)
    # A cookie can outlive its account when the user was deleted from another client
    try:
        await user_concept.user_exists(user)
    except NotFoundError:
        raise UnauthenticatedError("Must be logged in!")
    return user


def write_session(response: Response, state: SessionState) -> None:
    """Stores the new session state in the cookie, or clears it on logout."""
    if state.user is None:
        response.delete_cookie(Config.SESSION_COOKIE_NAME)
        return
    response.set_cookie(
        Config.SESSION_COOKIE_NAME,
        create_session_token(state.to_dict()),
        max_age=Config.SESSION_MAX_AGE,
        httponly=True,
        samesite="lax",
        secure=Config.SESSION_COOKIE_SECURE,
    )

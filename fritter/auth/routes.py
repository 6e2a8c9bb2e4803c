from fastapi import Depends, Response
from bson import ObjectId
from fritter.favorite.service import favorite_concept
from fritter.friend.service import friend_concept
from fritter.like.service import like_concept
from fritter.post.service import post_concept
from fritter.tag.service import tag_concept
import fritter.responses as responses
from .dependencies import get_current_user, get_session_state, write_session
from .schema import UserCreateModel, UserLoginModel, UserUpdateRequest
from .service import user_concept
from .session import SessionState, web_session
import logging


async def get_session_user(user: ObjectId = Depends(get_current_user)):
    return responses.user(await user_concept.get_user_by_id(user))

async def get_users():
    return responses.users(await user_concept.get_users())

async def get_user(username: str):
    return responses.user(await user_concept.get_user_by_username(username))

async def create_user(user_data: UserCreateModel, state: SessionState = Depends(get_session_state)):
    web_session.is_logged_out(state)
    created = await user_concept.create(user_data.username, user_data.password)
    return {"msg": created["msg"], "user": responses.user(created["user"])}

async def update_user(body: UserUpdateRequest, user: ObjectId = Depends(get_current_user)):
    return await user_concept.update(user, body.update.model_dump(exclude_unset=True))

async def delete_user(response: Response, user: ObjectId = Depends(get_current_user), state: SessionState = Depends(get_session_state)):
    write_session(response, web_session.end(state))

    # Nothing may keep pointing at the account once it is gone
    await friend_concept.remove_user(user)
    for post_id in await post_concept.remove_by_author(user):
        await like_concept.remove_by_post(post_id)
        await tag_concept.remove_by_target(post_id)
    await like_concept.remove_by_owner(user)
    await favorite_concept.remove_by_user(user)
    await tag_concept.remove_by_user(user)
    logging.info(f"Removed everything referencing user {user}")

    return await user_concept.delete(user)

async def log_in(credentials: UserLoginModel, response: Response, state: SessionState = Depends(get_session_state)):
    authenticated = await user_concept.authenticate(credentials.username, credentials.password)
    write_session(response, web_session.start(state, authenticated["_id"]))
    return {"msg": "Logged in!"}

async def log_out(response: Response, state: SessionState = Depends(get_session_state)):
    write_session(response, web_session.end(state))
    return {"msg": "Logged out!"}


routes = [
    ("GET", "/session", get_session_user),
    ("GET", "/users", get_users),
    ("GET", "/users/{username}", get_user),
    ("POST", "/users", create_user),
    ("PATCH", "/users", update_user),
    ("DELETE", "/users", delete_user),
    ("POST", "/login", log_in),
    ("POST", "/logout", log_out),
]

from fastapi import Depends
from bson import ObjectId
from typing import Optional
from fritter.auth.dependencies import get_current_user
from fritter.auth.service import user_concept
from fritter.db.mongo import to_object_id
from fritter.errors import BadValuesError
import fritter.responses as responses
from .schema import FavoriteCreate
from .service import favorite_concept


async def get_favorites(owner: Optional[str] = None):
    if owner:
        owner_id = await user_concept.get_user_id(owner)
        favorites = await favorite_concept.get_by_owner(owner_id)
    else:
        favorites = await favorite_concept.get_favorites()
    return await responses.favorites(favorites)

async def create_favorite(favorite_data: FavoriteCreate, user: ObjectId = Depends(get_current_user)):
    if not favorite_data.target:
        raise BadValuesError("Favorite target must be non-empty!")
    target_id = await user_concept.get_user_id(favorite_data.target)
    created = await favorite_concept.create(user, target_id)
    return {"msg": created["msg"], "favorite": await responses.favorite(created["favorite"])}

async def delete_favorite(favorite_id: str, user: ObjectId = Depends(get_current_user)):
    _id = to_object_id(favorite_id)
    await favorite_concept.is_owner(user, _id)
    return await favorite_concept.delete(_id)


routes = [
    ("GET", "/favorites", get_favorites),
    ("POST", "/favorites", create_favorite),
    ("DELETE", "/favorites/{favorite_id}", delete_favorite),
]

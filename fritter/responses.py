from bson import ObjectId
from datetime import datetime
from typing import Any, Dict, List, Optional
from fritter.auth.service import user_concept
from fritter.errors import FriendError

# Fields that only exist for the store's own bookkeeping
INTERNAL_FIELDS = ("pair", "password")


def serialize_doc(doc: Any) -> Any:
    """Turns a stored document into something the JSON encoder accepts."""
    if isinstance(doc, ObjectId):
        return str(doc)
    if isinstance(doc, datetime):
        return doc.isoformat()
    if isinstance(doc, list):
        return [serialize_doc(item) for item in doc]
    if isinstance(doc, dict):
        return {key: serialize_doc(value) for key, value in doc.items() if key not in INTERNAL_FIELDS}
    return doc


async def _with_usernames(docs: List[Dict[str, Any]], fields: List[str]) -> List[Dict[str, Any]]:
    ids = [doc[field] for doc in docs for field in fields]
    usernames = iter(await user_concept.ids_to_usernames(ids))
    result = []
    for doc in docs:
        doc = dict(doc)
        for field in fields:
            doc[field] = next(usernames)
        result.append(serialize_doc(doc))
    return result


def user(user: Dict[str, Any]) -> Dict[str, Any]:
    return serialize_doc(user)


def users(users: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [serialize_doc(u) for u in users]


async def post(post: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if post is None:
        return None
    return (await _with_usernames([post], ["author"]))[0]


async def posts(posts: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return await _with_usernames(posts, ["author"])


async def friend_requests(requests: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return await _with_usernames(requests, ["from", "to"])


async def favorite(favorite: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if favorite is None:
        return None
    return (await _with_usernames([favorite], ["owner", "target"]))[0]


async def favorites(favorites: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return await _with_usernames(favorites, ["owner", "target"])


async def like(like: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if like is None:
        return None
    return (await _with_usernames([like], ["owner"]))[0]


async def likes(likes: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return await _with_usernames(likes, ["owner"])


async def tag(tag: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if tag is None:
        return None
    return (await _with_usernames([tag], ["owner"]))[0]


async def tags(tags: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return await _with_usernames(tags, ["owner"])


async def friend_error_message(error: FriendError) -> str:
    name1, name2 = await user_concept.ids_to_usernames([error.user1, error.user2])
    return error.format_with(name1, name2)

from fastapi import APIRouter
from typing import Callable, List, Tuple
from fritter.auth import routes as auth_routes
from fritter.favorite import routes as favorite_routes
from fritter.friend import routes as friend_routes
from fritter.like import routes as like_routes
from fritter.post import routes as post_routes
from fritter.tag import routes as tag_routes

Route = Tuple[str, str, Callable]

# (method, path, handler) for every endpoint, grouped by concept
ROUTES: List[Route] = [
    *auth_routes.routes,
    *post_routes.routes,
    *friend_routes.routes,
    *favorite_routes.routes,
    *like_routes.routes,
    *tag_routes.routes,
]


def build_router(routes: List[Route] = ROUTES) -> APIRouter:
    router = APIRouter()
    for method, path, handler in routes:
        concept = handler.__module__.split(".")[-2]
        router.add_api_route(path, handler, methods=[method], name=handler.__name__, tags=[concept])
    return router

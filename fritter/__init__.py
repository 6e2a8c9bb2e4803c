from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from contextlib import asynccontextmanager
from pathlib import Path
from fritter.config import Config
from fritter.db.mongo import initialize_database, close_database
from fritter.errors import FriendError, FritterError
from fritter.routes import build_router
import fritter.responses as responses
import logging

logging.basicConfig(level=Config.LOG_LEVEL)

@asynccontextmanager
async def life_span(app: FastAPI):
    logging.info("Server is starting...")
    await initialize_database()
    yield
    close_database()
    logging.info("Server has been stopped")

version = "v1"

api_prefix = "/api"

public_dir = Path(__file__).parent / "public"


app = FastAPI(
    title="Fritter Web Service",
    description="Users, posts, friends, favorites, likes and tags",
    version=version,
    lifespan=life_span,
    openapi_url=f"{api_prefix}/openapi.json",
    docs_url=f"{api_prefix}/docs",
    redoc_url=f"{api_prefix}/redoc"
)


@app.exception_handler(FriendError)
async def handle_friend_error(request: Request, exc: FriendError):
    # Report usernames rather than raw ids
    return JSONResponse(status_code=exc.HTTP_CODE, content={"msg": await responses.friend_error_message(exc)})

@app.exception_handler(FritterError)
async def handle_fritter_error(request: Request, exc: FritterError):
    if exc.HTTP_CODE >= 500:
        logging.error(f"{request.method} {request.url.path} failed: {exc.message} {exc.context}")
    return JSONResponse(status_code=exc.HTTP_CODE, content={"msg": exc.message})

@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    return JSONResponse(status_code=400, content={"msg": f"Invalid request: {details}"})

@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logging.exception(f"Unexpected error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"msg": "Internal server error"})


app.include_router(build_router(), prefix=api_prefix)

# Manual API testing page; mounted last so it never shadows the API
app.mount("/", StaticFiles(directory=public_dir, html=True), name="public")

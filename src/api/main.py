"""FastAPI application entry point."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from api.routers import auth, follows, health, messages, relations, tuits, users
from core.config import get_settings
from db.session import engine
from services.exceptions import ActorUnresolvedError, StoreUnavailableError, UserNotFoundError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None]:
    """Manage application lifespan - startup and shutdown."""
    app_settings = get_settings()
    logging.basicConfig(
        level=app_settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger.info("Starting with counter strategy '%s'", app_settings.counter_strategy)

    yield

    await engine.dispose()


app_settings = get_settings()

app = FastAPI(
    title="Tuiter API",
    description="Tuits, follows, messages, and like/dislike/bookmark toggles with counters.",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(ActorUnresolvedError)
async def actor_unresolved_handler(
    _request: Request, exc: ActorUnresolvedError,
) -> JSONResponse:
    """'me' was used without a logged-in session."""
    return JSONResponse(
        status_code=401,
        content={"detail": {"message": str(exc), "error_code": "ACTOR_UNRESOLVED"}},
    )


@app.exception_handler(UserNotFoundError)
async def user_not_found_handler(
    _request: Request, exc: UserNotFoundError,
) -> JSONResponse:
    """A referenced user does not exist (or the id is malformed)."""
    return JSONResponse(
        status_code=404,
        content={"detail": {"message": str(exc), "error_code": "USER_NOT_FOUND"}},
    )


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(
    _request: Request, exc: StoreUnavailableError,
) -> JSONResponse:
    """The database could not be reached."""
    return JSONResponse(
        status_code=503,
        content={"detail": {"message": str(exc), "error_code": "STORE_UNAVAILABLE"}},
    )


app.add_middleware(
    SessionMiddleware,
    secret_key=app_settings.session_secret,
    session_cookie=app_settings.session_cookie,
    max_age=app_settings.session_max_age,
    same_site=app_settings.session_same_site,
    https_only=app_settings.session_https_only,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router, prefix="/api")
app.include_router(users.router, prefix="/api")
app.include_router(tuits.router, prefix="/api")
app.include_router(follows.router, prefix="/api")
app.include_router(messages.router, prefix="/api")
for relation_router in relations.routers:
    app.include_router(relation_router, prefix="/api")

from fastapi import APIRouter, FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from contextlib import asynccontextmanager
from typing import List, Optional
import logging
import re
import uvicorn
from config import Settings, configure_logging, get_settings
from database import create_db_engine, create_session_factory, init_db
from schemas import Message, UserCreate, UserRead, UserUpdate
from store import UserNotFound, UserStore


HOST = "0.0.0.0"
PORT = 3478
SUCCESS = {"message": "Success OK"}

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Users"])
error_responses = {500: {"model": Message, "description": "Operation failed"}}

_ID_PATTERN = re.compile(r"^[+-]?[0-9]+$")


def coerce_id(raw):
    """Turn a path id into an int, or None when it is not an integer literal.

    None never matches a row, so GET answers null and PUT/DELETE fail.
    """
    raw = raw.strip()
    if not _ID_PATTERN.match(raw):
        return None
    return int(raw)


# Dependency to get the storage client
def get_store(request: Request) -> UserStore:
    return request.app.state.store


def write_failed(e: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"message": str(e)})


@router.get("/users", response_model=List[UserRead], summary="Retrieve a list of users")
def list_users(store: UserStore = Depends(get_store)):
    return store.list_users()


@router.get(
    "/users/{user_id}",
    response_model=Optional[UserRead],
    summary="Retrieve a user by id",
    description="Returns the user, or null when no user has this id.",
)
def get_user(user_id: str, store: UserStore = Depends(get_store)):
    return store.get_user(coerce_id(user_id))


@router.post(
    "/users",
    status_code=201,
    response_model=Message,
    responses=error_responses,
    summary="Insert a user",
)
def create_user(data: UserCreate, store: UserStore = Depends(get_store)):
    try:
        user = store.create_user(data.model_dump(exclude_unset=True))
        if not user:
            raise ValueError("error")

        return SUCCESS
    except Exception as e:
        logger.error(f"Failed to create user: {e}")
        return write_failed(e)


@router.put(
    "/users/{user_id}",
    status_code=204,
    response_class=Response,
    responses=error_responses,
    summary="Edit a user by id",
)
def update_user(user_id: str, data: UserUpdate, store: UserStore = Depends(get_store)):
    try:
        matched = store.update_user(coerce_id(user_id), data.model_dump(exclude_unset=True))
        if not matched:
            raise UserNotFound(user_id)

        return Response(status_code=204)
    except Exception as e:
        logger.error(f"Failed to update user {user_id}: {e}")
        return write_failed(e)


@router.delete(
    "/users/{user_id}",
    response_model=Message,
    responses=error_responses,
    summary="Delete a user",
)
def delete_user(user_id: str, store: UserStore = Depends(get_store)):
    try:
        deleted = store.delete_user(coerce_id(user_id))
        if not deleted:
            raise UserNotFound(user_id)

        return SUCCESS
    except Exception as e:
        logger.error(f"Failed to delete user {user_id}: {e}")
        return write_failed(e)


def register_error_handlers(app: FastAPI):
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        # Body errors are write failures and share their {"message"} shape
        details = []
        for err in exc.errors():
            field = ".".join(str(part) for part in err["loc"][1:]) or str(err["loc"][0])
            details.append(f"{field}: {err['msg']}")
        message = "; ".join(details)
        logger.warning(f"Validation error on {request.url.path}: {message}")
        return JSONResponse(status_code=500, content={"message": message})

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
        return JSONResponse(status_code=500, content={"message": "Internal Server Error"})


def create_app(settings: Optional[Settings] = None, store: Optional[UserStore] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        config = settings or get_settings()
        configure_logging(config.log_level)
        if store is not None:
            app.state.store = store
            yield
            return
        engine = create_db_engine(config.sqlalchemy_url)
        init_db(engine)
        app.state.store = UserStore(create_session_factory(engine))
        logger.info("Database ready")
        yield
        engine.dispose()
        logger.info("Database connections closed")

    app = FastAPI(
        title="Test API",
        version="1.0.0",
        description="This is a REST API application made with FastAPI.",
        license_info={"name": "Licensed Under MIT", "url": "https://spdx.org/licenses/MIT.html"},
        contact={"name": "Test", "url": "https://test.test"},
        servers=[{"url": f"http://localhost:{PORT}", "description": "Development server"}],
        lifespan=lifespan,
    )
    app.include_router(router)
    register_error_handlers(app)
    return app


app = create_app()


def run():
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"RUNNING on port {PORT}")
    uvicorn.run(create_app(settings), host=HOST, port=PORT, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()

"""
User endpoints.

Translate HTTP requests into calls on the injected ``UserStore`` and map
the outcome onto status codes.  Error bodies follow the shapes existing
clients expect: ``{"error": ...}`` for rejected writes and
``{"status": ..., "message": ...}`` for unknown users.  Request bodies
are parsed by hand so that malformed payloads produce a 400 instead of
FastAPI's default 422.
"""

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from user_registry_api.app.api.dependencies import get_user_store
from user_registry_api.app.schemas.user import User
from user_registry_api.app.services.user_service import (
    UserNotFoundError,
    UserStore,
    UserStoreError,
)

logger = logging.getLogger(__name__)

router = APIRouter()


class PayloadError(ValueError):
    """Raised when a request body cannot be read as a user."""


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(item) for item in err.get("loc", ())) or "body"
        parts.append(f"{location}: {err.get('msg')}")
    return "; ".join(parts)


async def read_user_payload(request: Request) -> User:
    """Parse the JSON body of ``request`` into a ``User``.

    Raises ``PayloadError`` when the content type is not JSON, the body
    is not valid JSON or it does not match the user schema.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.split(";")[0].strip().lower() != "application/json":
        raise PayloadError("Content-Type must be application/json")
    try:
        body = await request.json()
    except ValueError as exc:
        raise PayloadError("request body is not valid JSON") from exc
    try:
        return User.model_validate(body)
    except ValidationError as exc:
        raise PayloadError(_describe_validation_error(exc)) from exc


def _error(message: str) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


@router.get("/users", response_model=List[User])
async def list_users(store: UserStore = Depends(get_user_store)) -> List[User]:
    """Return every user.  An empty store yields an empty array."""
    return store.list_users()


@router.get("/users/{user_id}", response_model=User)
async def get_user(user_id: str, store: UserStore = Depends(get_user_store)):
    """Return a single user or a 404 payload."""
    user = store.get_user_by_id(user_id)
    if user is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"status": status.HTTP_404_NOT_FOUND, "message": "User not found"},
        )
    return user


@router.post("/user", status_code=status.HTTP_201_CREATED)
async def create_user(request: Request, store: UserStore = Depends(get_user_store)) -> Dict[str, Any]:
    """Create a user.

    Any store error (duplicate name, duplicate id, missing name) becomes a
    400 carrying the error message.
    """
    try:
        user = await read_user_payload(request)
    except PayloadError as exc:
        logger.info("Rejected create payload: %s", exc)
        return _error(str(exc))
    try:
        created = store.create_user(user)
    except UserStoreError as exc:
        logger.info("Create of user %r failed: %s", user.name, exc)
        return _error(str(exc))
    return {"data": created.model_dump()}


@router.put("/user/{user_id}")
async def upsert_user(
    user_id: str,
    request: Request,
    store: UserStore = Depends(get_user_store),
) -> Dict[str, Any]:
    """Create or replace the user stored under ``user_id``.

    The id from the path always wins over an id present in the body.
    """
    try:
        user = await read_user_payload(request)
    except PayloadError as exc:
        logger.info("Rejected upsert payload for %s: %s", user_id, exc)
        return _error("Bad Request")
    user.id = user_id
    try:
        store.upsert_user(user)
    except UserStoreError as exc:
        logger.info("Upsert of user %s failed: %s", user_id, exc)
        return _error(str(exc))
    return {}


@router.delete("/user/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: str, store: UserStore = Depends(get_user_store)) -> Response:
    """Delete a user.  Unknown ids yield 404, other store failures 500."""
    try:
        store.delete_user_by_id(user_id)
    except UserNotFoundError:
        return Response(status_code=status.HTTP_404_NOT_FOUND)
    except UserStoreError as exc:
        logger.error("Delete of user %s failed: %s", user_id, exc)
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: User registration and GM user management.
"""

from fastapi import APIRouter, Depends, HTTPException

from gamenight.core.dependencies import get_current_user, get_user_service, require_gm
from gamenight.models.domain import User
from gamenight.schemas.games import UserCreateRequest, UserResponse
from gamenight.services.user_service import UserService

router = APIRouter(prefix="/api/v1", tags=["Users"])


@router.post("/users", status_code=201, response_model=UserResponse)
def register(
    payload: UserCreateRequest,
    service: UserService = Depends(get_user_service),
):
    try:
        return service.register(payload.username, payload.email, payload.gm_secret)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/me", response_model=UserResponse)
def whoami(user: User = Depends(get_current_user)):
    return user


@router.get("/users", response_model=list[UserResponse])
def list_users(
    _: User = Depends(require_gm),
    service: UserService = Depends(get_user_service),
):
    return service.list_users()


@router.delete("/users/{username}")
def delete_user(
    username: str,
    actor: User = Depends(require_gm),
    service: UserService = Depends(get_user_service),
):
    """Remove a user along with their roster entries and votes."""
    try:
        return service.delete_user(username, actor.username)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=str(e))

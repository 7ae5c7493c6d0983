from fastapi import APIRouter, Depends, Request

from notekeeper.errors import NotFound
from notekeeper.models.auth import PasswordChange, UserOut
from notekeeper.services.user_service import UserService
from notekeeper.storage.users_store import UserRecord
from notekeeper.utils.jwt_auth import get_current_user

router = APIRouter(prefix="/user", tags=["users"])


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def _self(user_id: str, current_user: str) -> str:
    # another account answers exactly like a missing one
    if user_id != current_user:
        raise NotFound("User not found")
    return user_id


def _out(rec: UserRecord) -> UserOut:
    return UserOut(user_id=rec.user_id, role=rec.role, created_at=rec.created_at)


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: str,
    current_user: str = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
) -> UserOut:
    return _out(users.get(_self(user_id, current_user)))


@router.put("/{user_id}", response_model=UserOut)
def change_password(
    user_id: str,
    payload: PasswordChange,
    current_user: str = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
) -> UserOut:
    return _out(users.change_password(_self(user_id, current_user), payload.password))


@router.delete("/{user_id}")
def delete_user(
    user_id: str,
    current_user: str = Depends(get_current_user),
    users: UserService = Depends(get_user_service),
) -> dict:
    return {"deleted": users.delete(_self(user_id, current_user))}

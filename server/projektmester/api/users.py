"""User management API (admin only)."""

import logging

from fastapi import APIRouter, HTTPException, status

from projektmester.api.deps import AdminUser, DataService
from projektmester.schemas.user import User, UserCreate, UserRecord, UserUpdate
from projektmester.services.project_data_service import new_id

logger = logging.getLogger(__name__)

router = APIRouter()


def _check_email_free(data, email: str, user_id: str | None = None):
    existing = data.get_user_by_email(email)
    if existing is not None and existing.id != user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )


@router.get("", response_model=list[User])
def list_users(data: DataService, admin: AdminUser):
    """List all users."""
    return [u.public() for u in data.list_users()]


@router.post("", response_model=User, status_code=status.HTTP_201_CREATED)
def create_user(user_data: UserCreate, data: DataService, admin: AdminUser):
    """Create a user."""
    _check_email_free(data, user_data.email)

    user = UserRecord(
        id=new_id("u"),
        email=user_data.email,
        name=user_data.name,
        role=user_data.role.value,
        password=user_data.password,
    )
    data.save_user(user)
    logger.info(f"User {admin.id} created user {user.id} ({user.email}, {user.role})")
    return user.public()


@router.put("/{user_id}", response_model=User)
def update_user(user_id: str, user_data: UserUpdate, data: DataService, admin: AdminUser):
    """Replace a user's data. Users are never deleted."""
    if data.get_user(user_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    _check_email_free(data, user_data.email, user_id)

    user = UserRecord(
        id=user_id,
        email=user_data.email,
        name=user_data.name,
        role=user_data.role.value,
        password=user_data.password,
    )
    data.save_user(user)
    logger.info(f"User {admin.id} updated user {user_id}")
    return user.public()

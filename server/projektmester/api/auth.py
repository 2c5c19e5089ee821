"""Authentication API."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel

from projektmester.api.deps import CurrentUser, DataService
from projektmester.schemas.user import User
from projektmester.utils.security import create_access_token, verify_password

logger = logging.getLogger(__name__)

router = APIRouter()


class Token(BaseModel):
    """Bearer token response."""

    access_token: str
    token_type: str = "bearer"
    user: User


@router.post("/login", response_model=Token)
def login(
    form_data: Annotated[OAuth2PasswordRequestForm, Depends()],
    data: DataService,
):
    """Log in with email (sent as ``username``) and password."""
    user = data.get_user_by_email(form_data.username)
    if user is None or not verify_password(form_data.password, user.password):
        logger.warning(f"Failed login for '{form_data.username}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return Token(access_token=create_access_token(user.id), user=user.public())


@router.get("/me", response_model=User)
def read_me(current_user: CurrentUser):
    """Return the logged-in user."""
    return current_user.public()

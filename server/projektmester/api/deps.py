"""API dependencies for authentication, storage and project access."""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from projektmester.config import get_settings
from projektmester.database import get_db
from projektmester.records import RecordStore
from projektmester.schemas.project import Project
from projektmester.schemas.user import UserRecord
from projektmester.services.access_service import can_view_project, is_admin
from projektmester.services.file_storage_service import FileStorage
from projektmester.services.project_data_service import ProjectDataService
from projektmester.utils.security import decode_access_token

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


def get_store(db: Annotated[Session, Depends(get_db)]) -> RecordStore:
    """Record store bound to the request's session."""
    return RecordStore(db)


def get_data_service(store: Annotated[RecordStore, Depends(get_store)]) -> ProjectDataService:
    return ProjectDataService(store)


def get_file_storage() -> FileStorage:
    return FileStorage(get_settings().storage_path)


DataService = Annotated[ProjectDataService, Depends(get_data_service)]


def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)],
    data: DataService,
) -> UserRecord:
    """Get current authenticated user from JWT token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_access_token(token)
    if payload is None:
        raise credentials_exception

    user_id = payload.get("user_id")
    if not user_id:
        raise credentials_exception

    user = data.get_user(user_id)
    if user is None:
        raise credentials_exception

    return user


CurrentUser = Annotated[UserRecord, Depends(get_current_user)]


def require_admin(current_user: CurrentUser) -> UserRecord:
    """Reject the request unless the caller is an admin.

    Raises:
        HTTPException 403 if the caller is not an admin
    """
    if not is_admin(current_user):
        logger.warning(f"Rejected admin-only action for user {current_user.id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Requires admin role",
        )
    return current_user


AdminUser = Annotated[UserRecord, Depends(require_admin)]


def get_accessible_project(
    project_id: str,
    data: DataService,
    current_user: CurrentUser,
) -> Project:
    """Load a project the caller may see.

    Raises:
        HTTPException 404 if the project does not exist
        HTTPException 403 if it exists but is not visible to the caller
    """
    project = data.get_project(project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    if not can_view_project(current_user, project):
        logger.warning(f"User {current_user.id} denied access to project {project_id}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not assigned to this project",
        )
    return project


AccessibleProject = Annotated[Project, Depends(get_accessible_project)]

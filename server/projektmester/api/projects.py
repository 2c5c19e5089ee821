"""Projects API."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from projektmester.api.deps import (
    AccessibleProject,
    AdminUser,
    CurrentUser,
    DataService,
    get_file_storage,
)
from projektmester.schemas.project import Project, ProjectCreate, ProjectUpdate
from projektmester.services.access_service import visible_projects
from projektmester.services.file_storage_service import (
    FileStorage,
    InvalidStoredNameError,
    stored_name_from_locator,
)
from projektmester.services.project_data_service import ProjectDataService, new_id, utc_now_iso

logger = logging.getLogger(__name__)

router = APIRouter()


def _validate_project_fields(
    data: ProjectDataService,
    project_data: ProjectCreate,
    current_status: str | None = None,
):
    """Business rules not expressible in the schema.

    A stored status that is no longer registered may be kept as is.
    """
    if project_data.status != current_status and project_data.status not in data.list_statuses():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown project status '{project_data.status}'",
        )
    known_users = {u.id for u in data.list_users()}
    unknown = [u for u in project_data.assigned_users if u not in known_users]
    if unknown:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown assigned users: {unknown}",
        )


@router.get("", response_model=list[Project])
def list_projects(data: DataService, current_user: CurrentUser):
    """List the projects the caller may see."""
    return visible_projects(current_user, data.list_projects())


@router.post("", response_model=Project, status_code=status.HTTP_201_CREATED)
def create_project(project_data: ProjectCreate, data: DataService, admin: AdminUser):
    """Create a new project.

    The creator becomes the owner and is assigned to the project.
    """
    _validate_project_fields(data, project_data)

    assigned = list(dict.fromkeys(project_data.assigned_users))
    if admin.id not in assigned:
        assigned.insert(0, admin.id)

    project = Project(
        **project_data.model_dump(exclude={"assigned_users"}),
        id=new_id("p"),
        assigned_users=assigned,
        created_at=utc_now_iso(),
        created_by=admin.name,
        created_by_id=admin.id,
    )
    data.save_project(project)
    logger.info(f"User {admin.id} created project {project.id} '{project.name}'")
    return project


@router.get("/{project_id}", response_model=Project)
def get_project(project: AccessibleProject):
    """Get project details."""
    return project


@router.put("/{project_id}", response_model=Project)
def update_project(
    project_data: ProjectUpdate,
    project: AccessibleProject,
    data: DataService,
    current_user: CurrentUser,
):
    """Replace a project's editable fields.

    Ownership (created_by, created_by_id) and created_at never change.
    """
    _validate_project_fields(data, project_data, current_status=project.status)

    updated = project.model_copy(update={
        **project_data.model_dump(exclude={"assigned_users"}),
        "assigned_users": list(dict.fromkeys(project_data.assigned_users)),
    })
    data.save_project(updated)
    logger.info(f"User {current_user.id} updated project {project.id}")
    return updated


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_project(
    project_id: str,
    data: DataService,
    admin: AdminUser,
    storage: Annotated[FileStorage, Depends(get_file_storage)],
    cascade: Annotated[bool, Query()] = False,
):
    """Delete a project.

    With ``cascade=true`` its tasks, materials, costs and files (records
    and stored payloads) are removed too; otherwise they are left in place.
    """
    if data.get_project(project_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")

    if cascade:
        for app_file in data.list_files(project_id):
            stored_name = stored_name_from_locator(app_file.file_path)
            if not stored_name:
                continue
            try:
                storage.delete(stored_name)
            except InvalidStoredNameError:
                logger.warning(f"Skipping file {app_file.id} with unusable locator {app_file.file_path!r}")

    data.delete_project(project_id, cascade=cascade)
    logger.info(f"User {admin.id} deleted project {project_id} (cascade={cascade})")

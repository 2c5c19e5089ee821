"""Project file upload, listing, deletion and download."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.responses import FileResponse

from projektmester.api.deps import (
    AccessibleProject,
    CurrentUser,
    DataService,
    get_accessible_project,
    get_file_storage,
)
from projektmester.config import get_settings
from projektmester.schemas.file import AppFile
from projektmester.services.file_storage_service import (
    FileStorage,
    InvalidStoredNameError,
    stored_name_from_locator,
)
from projektmester.services.project_data_service import new_id, utc_now_iso

logger = logging.getLogger(__name__)

router = APIRouter()

# Served without authentication, like the static upload directory it replaces
download_router = APIRouter()

Storage = Annotated[FileStorage, Depends(get_file_storage)]


@router.get("/projects/{project_id}/files", response_model=list[AppFile])
def list_files(project: AccessibleProject, data: DataService, task_id: Optional[str] = None):
    """List a project's files, optionally only those attached to one task."""
    return data.list_files(project.id, task_id=task_id)


@router.post(
    "/projects/{project_id}/files",
    response_model=list[AppFile],
    status_code=status.HTTP_201_CREATED,
)
def upload_files(
    project: AccessibleProject,
    data: DataService,
    current_user: CurrentUser,
    storage: Storage,
    files: Annotated[list[UploadFile], File()],
    task_id: Annotated[Optional[str], Form()] = None,
):
    """Upload one or more files to a project (multipart field ``files``)."""
    if task_id:
        task = data.get_task(task_id)
        if task is None or task.project_id != project.id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Task does not belong to this project",
            )

    max_bytes = get_settings().max_upload_bytes
    payloads = []
    for upload in files:
        content = upload.file.read(max_bytes + 1)
        if len(content) > max_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File '{upload.filename}' exceeds {max_bytes} bytes",
            )
        payloads.append((upload, content))

    created = []
    for upload, content in payloads:
        stored = storage.save(upload.filename or "file", content, upload.content_type)
        app_file = AppFile(
            id=new_id("f"),
            filename=stored.filename,
            file_path=stored.file_path,
            file_type=stored.file_type,
            size=stored.size,
            uploaded_by=current_user.name,
            project_id=project.id,
            task_id=task_id or None,
            created_at=utc_now_iso(),
        )
        data.save_file(app_file)
        created.append(app_file)

    return created


@router.delete("/files/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_file(
    file_id: str,
    data: DataService,
    current_user: CurrentUser,
    storage: Storage,
):
    """Delete a file record and its stored payload."""
    app_file = data.get_file(file_id)
    if app_file is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
    # Same 404/403 rules as the owning project
    get_accessible_project(app_file.project_id, data, current_user)

    stored_name = stored_name_from_locator(app_file.file_path)
    if stored_name:
        try:
            storage.delete(stored_name)
        except InvalidStoredNameError:
            logger.warning(f"File {file_id} has an unusable locator {app_file.file_path!r}")
    data.delete_file(file_id)


@download_router.get("/files/{stored_name}")
def download_file(stored_name: str, storage: Storage):
    """Serve a stored upload by its stored name."""
    try:
        path = storage.open_path(stored_name)
    except InvalidStoredNameError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
    if not path.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
    return FileResponse(path)

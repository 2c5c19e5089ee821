"""Uploaded file schemas."""

from pydantic import BaseModel, ConfigDict


class AppFile(BaseModel):
    """File attached to a project, optionally tied to one task."""

    model_config = ConfigDict(extra="ignore")

    id: str
    filename: str
    file_path: str
    file_type: str = ""
    size: int | None = None
    uploaded_by: str = ""
    project_id: str
    task_id: str | None = None
    created_at: str = ""

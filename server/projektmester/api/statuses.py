"""Custom project status registry API."""

from fastapi import APIRouter, status

from projektmester.api.deps import AdminUser, CurrentUser, DataService
from projektmester.labels import project_status_label
from projektmester.schemas.status import StatusCreate, StatusOption

router = APIRouter()


def _options(values: list[str]) -> list[StatusOption]:
    return [StatusOption(value=v, label=project_status_label(v)) for v in values]


@router.get("", response_model=list[StatusOption])
def list_statuses(data: DataService, current_user: CurrentUser):
    """List registered project statuses with display labels."""
    return _options(data.list_statuses())


@router.post("", response_model=list[StatusOption], status_code=status.HTTP_201_CREATED)
def add_status(status_data: StatusCreate, data: DataService, admin: AdminUser):
    """Register a new status. Adding an existing one is a no-op."""
    return _options(data.add_status(status_data.value))

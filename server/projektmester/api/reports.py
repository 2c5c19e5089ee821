"""Project data sheet (PDF) export."""

import io
import logging
import unicodedata
from urllib.parse import quote

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from projektmester.api.deps import AccessibleProject, CurrentUser, DataService
from projektmester.schemas.report import ReportRequest
from projektmester.services.report_service import compose_report, report_filename

logger = logging.getLogger(__name__)

router = APIRouter()


def content_disposition(filename: str) -> str:
    """Attachment header with an ASCII fallback and the UTF-8 name."""
    ascii_name = (
        unicodedata.normalize("NFKD", filename)
        .encode("ascii", "ignore")
        .decode("ascii")
        .replace('"', "")
    )
    return f"attachment; filename=\"{ascii_name}\"; filename*=UTF-8''{quote(filename)}"


def _pdf_response(pdf: bytes, filename: str) -> StreamingResponse:
    return StreamingResponse(
        io.BytesIO(pdf),
        media_type="application/pdf",
        headers={"Content-Disposition": content_disposition(filename)},
    )


@router.get("/projects/{project_id}/report")
def export_project_report(project: AccessibleProject, data: DataService, current_user: CurrentUser):
    """Render the data sheet of a stored project."""
    pdf = compose_report(
        project,
        data.list_tasks(project.id),
        data.list_materials(project.id),
        data.list_costs(project.id),
    )
    logger.info(f"User {current_user.id} exported data sheet of project {project.id}")
    return _pdf_response(pdf, report_filename(project.name))


@router.post("/export-pdf")
def export_pdf(report_request: ReportRequest, current_user: CurrentUser):
    """Render a data sheet from the posted project data.

    Nothing is read from or written to the store.
    """
    tasks = sorted(report_request.tasks, key=lambda t: t.order)
    pdf = compose_report(
        report_request.project,
        tasks,
        report_request.materials,
        report_request.costs,
    )
    logger.info(f"User {current_user.id} exported a posted data sheet for '{report_request.project.name}'")
    return _pdf_response(pdf, report_filename(report_request.project.name))

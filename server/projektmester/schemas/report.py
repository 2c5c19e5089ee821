"""Project summary and report schemas."""

from pydantic import BaseModel, Field

from projektmester.schemas.project import Project
from projektmester.schemas.task import Task
from projektmester.schemas.finance import Material, Cost


class MaterialLine(BaseModel):
    """Material row with its derived line total."""

    id: str
    name: str
    quantity: int | float
    unit: str
    unit_price: int | float
    line_total: float
    line_total_display: str


class CostLine(BaseModel):
    """Cost row; the line total is the amount."""

    id: str
    description: str
    type: str
    type_label: str
    amount: int | float
    amount_display: str


class TotalsResponse(BaseModel):
    """Material, cost and grand totals."""

    material_total: float
    cost_total: float
    grand_total: float
    material_total_display: str
    cost_total_display: str
    grand_total_display: str


class ProjectSummaryResponse(BaseModel):
    """Financial summary of one project."""

    project_id: str
    materials: list[MaterialLine]
    costs: list[CostLine]
    totals: TotalsResponse


class ReportRequest(BaseModel):
    """Data sheet request carrying the data to render."""

    project: Project
    tasks: list[Task] = Field(default_factory=list)
    materials: list[Material] = Field(default_factory=list)
    costs: list[Cost] = Field(default_factory=list)

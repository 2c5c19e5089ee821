"""Materials, costs and the financial summary of a project."""

from fastapi import APIRouter, HTTPException, status

from projektmester.api.deps import AccessibleProject, DataService
from projektmester.labels import cost_type_label
from projektmester.schemas.finance import (
    Cost,
    CostCreate,
    CostUpdate,
    Material,
    MaterialCreate,
    MaterialUpdate,
)
from projektmester.schemas.report import (
    CostLine,
    MaterialLine,
    ProjectSummaryResponse,
    TotalsResponse,
)
from projektmester.services.aggregation_service import (
    ProjectSummary,
    format_currency,
    summarize_project,
)
from projektmester.services.project_data_service import new_id

router = APIRouter()


# Materials

@router.get("/{project_id}/materials", response_model=list[Material])
def list_materials(project: AccessibleProject, data: DataService):
    return data.list_materials(project.id)


@router.post("/{project_id}/materials", response_model=Material, status_code=status.HTTP_201_CREATED)
def create_material(material_data: MaterialCreate, project: AccessibleProject, data: DataService):
    material = Material(
        **material_data.model_dump(mode="json"),
        id=new_id("m"),
        project_id=project.id,
    )
    return data.save_material(material)


@router.put("/{project_id}/materials/{material_id}", response_model=Material)
def update_material(
    material_id: str,
    material_data: MaterialUpdate,
    project: AccessibleProject,
    data: DataService,
):
    existing = data.get_material(material_id)
    if existing is None or existing.project_id != project.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Material not found")
    return data.save_material(existing.model_copy(update=material_data.model_dump(mode="json")))


@router.delete("/{project_id}/materials/{material_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_material(material_id: str, project: AccessibleProject, data: DataService):
    existing = data.get_material(material_id)
    if existing is None or existing.project_id != project.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Material not found")
    data.delete_material(material_id)


# Costs

@router.get("/{project_id}/costs", response_model=list[Cost])
def list_costs(project: AccessibleProject, data: DataService):
    return data.list_costs(project.id)


@router.post("/{project_id}/costs", response_model=Cost, status_code=status.HTTP_201_CREATED)
def create_cost(cost_data: CostCreate, project: AccessibleProject, data: DataService):
    cost = Cost(
        **cost_data.model_dump(mode="json"),
        id=new_id("c"),
        project_id=project.id,
    )
    return data.save_cost(cost)


@router.put("/{project_id}/costs/{cost_id}", response_model=Cost)
def update_cost(cost_id: str, cost_data: CostUpdate, project: AccessibleProject, data: DataService):
    existing = data.get_cost(cost_id)
    if existing is None or existing.project_id != project.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cost not found")
    return data.save_cost(existing.model_copy(update=cost_data.model_dump(mode="json")))


@router.delete("/{project_id}/costs/{cost_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cost(cost_id: str, project: AccessibleProject, data: DataService):
    existing = data.get_cost(cost_id)
    if existing is None or existing.project_id != project.id:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cost not found")
    data.delete_cost(cost_id)


# Summary

def summary_to_response(project_id: str, summary: ProjectSummary) -> ProjectSummaryResponse:
    """Convert a computed summary into its wire form with display strings."""
    totals = summary.totals
    return ProjectSummaryResponse(
        project_id=project_id,
        materials=[
            MaterialLine(
                id=line.material.id,
                name=line.material.name,
                quantity=line.material.quantity,
                unit=line.material.unit,
                unit_price=line.material.unit_price,
                line_total=float(line.line_total),
                line_total_display=format_currency(line.line_total),
            )
            for line in summary.materials
        ],
        costs=[
            CostLine(
                id=line.cost.id,
                description=line.cost.description,
                type=line.cost.type,
                type_label=cost_type_label(line.cost.type),
                amount=line.cost.amount,
                amount_display=format_currency(line.line_total),
            )
            for line in summary.costs
        ],
        totals=TotalsResponse(
            material_total=float(totals.material_total),
            cost_total=float(totals.cost_total),
            grand_total=float(totals.grand_total),
            material_total_display=format_currency(totals.material_total),
            cost_total_display=format_currency(totals.cost_total),
            grand_total_display=format_currency(totals.grand_total),
        ),
    )


@router.get("/{project_id}/summary", response_model=ProjectSummaryResponse)
def get_summary(project: AccessibleProject, data: DataService):
    """Line totals and project totals for materials and costs."""
    summary = summarize_project(data.list_materials(project.id), data.list_costs(project.id))
    return summary_to_response(project.id, summary)

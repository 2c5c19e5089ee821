"""Human-readable labels for stored codes.

Unknown codes are returned verbatim so that legacy or custom values
always render.
"""

from projektmester.schemas.task import TaskStatus
from projektmester.schemas.finance import CostType, MaterialUnit

# Seed values of the custom status registry, in display order
DEFAULT_PROJECT_STATUSES = ["felmeres", "arajanlat", "kivitelezes", "kesz"]

PROJECT_STATUS_LABELS: dict[str, str] = {
    "felmeres": "Felmérés",
    "arajanlat": "Árajánlat",
    "kivitelezes": "Kivitelezés",
    "kesz": "Kész",
}

TASK_STATUS_LABELS: dict[str, str] = {
    TaskStatus.OPEN.value: "Nyitott",
    TaskStatus.IN_PROGRESS.value: "Folyamatban",
    TaskStatus.DONE.value: "Kész",
}

COST_TYPE_LABELS: dict[str, str] = {
    CostType.MATERIAL.value: "Anyag",
    CostType.LABOR.value: "Munkadíj",
    CostType.OTHER.value: "Egyéb",
}

UNIT_LABELS: dict[str, str] = {
    MaterialUnit.PIECE.value: "db",
    MaterialUnit.METER.value: "m",
    MaterialUnit.SQUARE_METER.value: "m²",
    MaterialUnit.CUBIC_METER.value: "m³",
    MaterialUnit.KILOGRAM.value: "kg",
    MaterialUnit.TONNE.value: "t",
    MaterialUnit.RUNNING_METER.value: "fm",
    MaterialUnit.PACKAGE.value: "csomag",
}


def project_status_label(status: str | None) -> str:
    return PROJECT_STATUS_LABELS.get(status or "", status or "")


def task_status_label(status: str | None) -> str:
    return TASK_STATUS_LABELS.get(status or "", status or "")


def cost_type_label(cost_type: str | None) -> str:
    return COST_TYPE_LABELS.get(cost_type or "", cost_type or "")


def unit_label(unit: str | None) -> str:
    return UNIT_LABELS.get(unit or "", unit or "")

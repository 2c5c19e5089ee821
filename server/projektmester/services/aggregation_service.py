"""Financial aggregation for a project.

All arithmetic is done in ``Decimal``. Quantities arrive as int or float
and are converted through ``str`` so that 0.1 stays 0.1; prices and
amounts are whole forints. The per-line helpers are the only place a
line total is computed, so the value shown on a row is exactly the value
that goes into the sum.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from projektmester.schemas.finance import Material, Cost

ZERO = Decimal(0)

CURRENCY_SUFFIX = "Ft"
# Hungarian grouping separator (no-break space)
GROUP_SEPARATOR = "\u00a0"


@dataclass(frozen=True)
class ProjectTotals:
    material_total: Decimal
    cost_total: Decimal
    grand_total: Decimal


@dataclass
class MaterialLineSummary:
    material: Material
    line_total: Decimal


@dataclass
class CostLineSummary:
    cost: Cost
    line_total: Decimal


@dataclass
class ProjectSummary:
    materials: list[MaterialLineSummary]
    costs: list[CostLineSummary]
    totals: ProjectTotals


def to_decimal(value: int | float | Decimal | None) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def material_line_total(material: Material) -> Decimal:
    """quantity x unit_price."""
    return to_decimal(material.quantity) * to_decimal(material.unit_price)


def cost_line_total(cost: Cost) -> Decimal:
    """A cost line is its flat amount."""
    return to_decimal(cost.amount)


def compute_totals(materials: Iterable[Material], costs: Iterable[Cost]) -> ProjectTotals:
    """Compute material, cost and grand totals. Empty inputs give zeros."""
    material_total = sum((material_line_total(m) for m in materials), ZERO)
    cost_total = sum((cost_line_total(c) for c in costs), ZERO)
    return ProjectTotals(
        material_total=material_total,
        cost_total=cost_total,
        grand_total=material_total + cost_total,
    )


def summarize_project(materials: list[Material], costs: list[Cost]) -> ProjectSummary:
    """Per-line totals plus project totals, computed from the same values."""
    material_lines = [MaterialLineSummary(material=m, line_total=material_line_total(m)) for m in materials]
    cost_lines = [CostLineSummary(cost=c, line_total=cost_line_total(c)) for c in costs]
    material_total = sum((line.line_total for line in material_lines), ZERO)
    cost_total = sum((line.line_total for line in cost_lines), ZERO)
    return ProjectSummary(
        materials=material_lines,
        costs=cost_lines,
        totals=ProjectTotals(
            material_total=material_total,
            cost_total=cost_total,
            grand_total=material_total + cost_total,
        ),
    )


def format_amount(amount: int | float | Decimal) -> str:
    """Round half up to whole units and group thousands: 1234567 -> '1 234 567'."""
    rounded = int(to_decimal(amount).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    sign = "-" if rounded < 0 else ""
    return sign + f"{abs(rounded):,}".replace(",", GROUP_SEPARATOR)


def format_currency(amount: int | float | Decimal) -> str:
    """Hungarian forint with zero decimals, e.g. '6 000 Ft'."""
    return f"{format_amount(amount)}{GROUP_SEPARATOR}{CURRENCY_SUFFIX}"


def format_quantity(quantity: int | float | Decimal | None) -> str:
    """Render a quantity without a trailing '.0' (2.0 -> '2', 2.5 -> '2.5')."""
    value = to_decimal(quantity)
    if value == value.to_integral_value():
        return str(int(value))
    return format(value.normalize(), "f")


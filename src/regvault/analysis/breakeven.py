"""Break-even point from year-1 projections."""

from typing import Optional
import math
from pydantic import BaseModel, Field

from ..core.inputs import ProjectionInputs
from ..projection.costs import CostProjector
from ..projection.revenue import RevenueProjector


class BreakEvenResult(BaseModel):
    """Annual revenue needed to cover fixed costs."""

    revenue: float = Field(ge=0, description="Break-even annual revenue")
    months: Optional[int] = Field(None, description="Months of year-1 revenue to reach it")
    contribution_margin: float = Field(description="Share of revenue left after variable costs")


def calculate_break_even(inputs: ProjectionInputs) -> BreakEvenResult:
    """Break-even revenue = fixed costs / contribution margin, using year 1."""
    revenue = RevenueProjector().project(inputs.assumptions, inputs.revenue_streams)
    costs = CostProjector().project(inputs.assumptions, revenue, inputs.costs)

    total_revenue = revenue[0].total
    fixed_costs = costs[0].fixed_overheads + costs[0].one_time
    variable_costs = costs[0].variable

    contribution_margin = (total_revenue - variable_costs) / total_revenue if total_revenue > 0 else 0.0
    break_even_revenue = fixed_costs / contribution_margin if contribution_margin > 0 else 0.0

    monthly_revenue = total_revenue / 12
    months = math.ceil(break_even_revenue / monthly_revenue) if monthly_revenue > 0 else None

    return BreakEvenResult(
        revenue=break_even_revenue,
        months=months,
        contribution_margin=contribution_margin,
    )

"""Cost projection for fixed and revenue-linked cost items."""

from typing import List
import logging

from ..core.inputs import Assumptions, CostCategory, CostFrequency, CostItem, CostType, value_for_year
from ..core.statements import CostProjection, RevenueProjection

logger = logging.getLogger(__name__)


FREQUENCY_MULTIPLIERS = {
    CostFrequency.MONTHLY: 12.0,
    CostFrequency.ANNUAL: 1.0,
    CostFrequency.ONE_TIME: 1.0,
}


class CostProjector:
    """Expands cost items into per-year totals by category."""

    def project(self, assumptions: Assumptions, revenue: List[RevenueProjection],
                costs: List[CostItem]) -> List[CostProjection]:
        """Project every cost item over the horizon of ``revenue``."""
        projections: List[CostProjection] = []

        for index, year_revenue in enumerate(revenue):
            by_category = {category: 0.0 for category in CostCategory}
            fixed_overheads = 0.0
            one_time = 0.0
            variable = 0.0

            for item in costs:
                amount = self.calculate_item_amount(item, assumptions, index, year_revenue.total)
                by_category[item.category] += amount

                if item.type == CostType.VARIABLE:
                    variable += amount
                elif item.frequency == CostFrequency.ONE_TIME:
                    one_time += amount
                else:
                    fixed_overheads += amount

            projections.append(CostProjection(
                year=year_revenue.year,
                total=sum(by_category.values()),
                by_category=by_category,
                fixed_overheads=fixed_overheads,
                one_time=one_time,
                variable=variable,
            ))

        return projections

    def calculate_item_amount(self, item: CostItem, assumptions: Assumptions,
                              year_index: int, total_revenue: float) -> float:
        """Cost of one item in one year (``year_index`` is zero based)."""
        override = value_for_year(item.yearly_amounts, year_index)
        if override is not None:
            return override

        if item.type == CostType.VARIABLE:
            if item.variable_rate is None:
                logger.debug(f"Variable cost '{item.name}' has no rate, contributing 0")
                return 0.0
            # Already scales with revenue, so no inflation
            return total_revenue * item.variable_rate / 100

        if item.frequency == CostFrequency.ONE_TIME and year_index > 0:
            return 0.0

        annual = item.amount * FREQUENCY_MULTIPLIERS[item.frequency]
        return annual * (1 + assumptions.inflation_rate) ** year_index

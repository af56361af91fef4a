"""Regulatory volume figures: payment volume, stored e-money and safeguarded float."""

from typing import List, Optional

from ..core.config import EngineConfig
from ..core.inputs import ProjectionInputs, value_for_year
from ..core.regulatory import LicenceParameters
from ..core.statements import RevenueProjection


class VolumeEstimator:
    """Supplies volume figures, estimating them from revenue when not given."""

    def __init__(self, config: EngineConfig):
        self.config = config
        self.volume_multiple = float(config.get_estimate("volume_to_revenue_multiple", 10))
        self.emoney_months = float(config.get_estimate("emoney_months_outstanding", 12))
        self.float_ratio = float(config.get_estimate("safeguarding_float_ratio", 0.01))

    def payment_volume(self, inputs: ProjectionInputs, revenue: List[RevenueProjection], year_index: int) -> float:
        """Projected annual payment volume for a year."""
        supplied = value_for_year(inputs.payment_volume, year_index)
        if supplied is not None:
            return supplied
        return self._revenue_total(revenue, year_index) * self.volume_multiple

    def average_emoney(self, inputs: ProjectionInputs, revenue: List[RevenueProjection], year_index: int) -> float:
        """Average outstanding stored value for a year."""
        supplied = value_for_year(inputs.average_emoney_outstanding, year_index)
        if supplied is not None:
            return supplied
        return self.payment_volume(inputs, revenue, year_index) / self.emoney_months

    def safeguarding(self, licence: LicenceParameters, inputs: ProjectionInputs,
                     revenue: List[RevenueProjection], year_index: int) -> float:
        """Customer funds to be safeguarded in a year."""
        if not licence.safeguarding:
            return 0.0
        if licence.e_money:
            return self.average_emoney(inputs, revenue, year_index)
        return self.payment_volume(inputs, revenue, year_index) * self.float_ratio

    def safeguarding_schedule(self, licence: LicenceParameters, inputs: ProjectionInputs,
                              revenue: List[RevenueProjection]) -> List[float]:
        return [self.safeguarding(licence, inputs, revenue, i) for i in range(len(revenue))]

    def _revenue_total(self, revenue: List[RevenueProjection], year_index: int) -> float:
        if year_index >= len(revenue):
            return 0.0
        return revenue[year_index].total

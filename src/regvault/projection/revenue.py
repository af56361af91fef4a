"""Revenue projection from revenue stream definitions."""

from typing import Dict, List, Optional
import logging

from ..core.inputs import Assumptions, RevenueStream, RevenueUnit, value_for_year
from ..core.statements import RevenueProjection, StreamAmount

logger = logging.getLogger(__name__)


# Annualisation factor for units that do not depend on volume
UNIT_MULTIPLIERS = {
    RevenueUnit.MONTHLY: 12.0,
    RevenueUnit.ANNUAL: 1.0,
}


class RevenueProjector:
    """Expands revenue streams into per-year revenue totals."""

    def project(self, assumptions: Assumptions, streams: List[RevenueStream]) -> List[RevenueProjection]:
        """Project every stream over the assumption horizon."""
        projections: List[RevenueProjection] = []
        previous: Dict[str, float] = {}

        for index, year in enumerate(assumptions.years()):
            amounts = []
            for position, stream in enumerate(streams):
                # Position keeps streams with the same name apart
                slot = f"{position}:{stream.key}"
                amount = self.calculate_stream_amount(stream, assumptions, index, previous.get(slot))
                previous[slot] = amount
                amounts.append(StreamAmount(
                    stream_id=stream.key,
                    name=stream.name,
                    type=stream.type,
                    amount=amount,
                ))

            projections.append(RevenueProjection(
                year=year,
                total=sum(a.amount for a in amounts),
                streams=amounts,
            ))

        logger.debug(f"Projected {len(streams)} revenue streams over {assumptions.projection_years} years")
        return projections

    def calculate_stream_amount(self, stream: RevenueStream, assumptions: Assumptions,
                                year_index: int, previous_amount: Optional[float]) -> float:
        """Amount for one stream in one year (``year_index`` is zero based)."""
        if stream.unit.is_volume_driven():
            volume = value_for_year(stream.volume_assumptions, year_index)
            if volume is not None:
                return self._volume_amount(stream, volume)
            if year_index == 0 or previous_amount is None:
                logger.debug(f"No volume for stream '{stream.name}' in year {year_index + 1}, contributing 0")
                return 0.0
            return previous_amount * (1 + self._growth_rate(stream, assumptions, year_index))

        if year_index == 0 or previous_amount is None:
            return stream.base_value * UNIT_MULTIPLIERS[stream.unit]
        return previous_amount * (1 + self._growth_rate(stream, assumptions, year_index))

    def _volume_amount(self, stream: RevenueStream, volume: float) -> float:
        if stream.unit == RevenueUnit.PERCENTAGE:
            return stream.base_value / 100 * volume
        return stream.base_value * volume

    def _growth_rate(self, stream: RevenueStream, assumptions: Assumptions, year_index: int) -> float:
        if stream.growth_rate is not None:
            return stream.growth_rate
        return assumptions.revenue_growth_rate[year_index]

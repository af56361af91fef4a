"""Sensitivity engine: full re-derivation under scenario multipliers."""

from typing import Any, Dict, List, Optional
from concurrent.futures import ThreadPoolExecutor
import logging
import numpy as np
from pydantic import BaseModel, Field

from .scenarios import ScenarioDefinition, ScenarioName, get_scenario, get_scenario_definitions
from ..core.engine import ProjectionEngine
from ..core.inputs import ProjectionInputs
from ..core.statements import FinancialStatements
from ..capital.requirement import CapitalRequirement

logger = logging.getLogger(__name__)


class SensitivityScenario(BaseModel):
    """One fully derived scenario."""

    name: ScenarioName
    revenue_multiplier: float
    cost_multiplier: float
    projections: FinancialStatements
    capital_requirement: CapitalRequirement
    capital_adequacy: List[bool] = Field(description="One verdict per projection year")

    def is_adequate_throughout(self) -> bool:
        return all(self.capital_adequacy)

    def first_inadequate_year(self) -> Optional[int]:
        """Calendar year of the first adequacy failure, if any."""
        for bs, adequate in zip(self.projections.balance_sheet, self.capital_adequacy):
            if not adequate:
                return bs.year
        return None


class SensitivityEngine:
    """Runs every scenario through the projection engine independently."""

    def __init__(self, projection_engine: Optional[ProjectionEngine] = None,
                 max_workers: Optional[int] = None):
        """Initialize sensitivity engine; ``max_workers`` > 1 runs scenarios on threads."""
        self.projection_engine = projection_engine or ProjectionEngine()
        self.max_workers = max_workers

    def run_scenario(self, inputs: ProjectionInputs, scenario: Any) -> SensitivityScenario:
        """Derive one scenario from the unperturbed inputs."""
        if not isinstance(scenario, ScenarioDefinition):
            scenario = get_scenario(scenario, self.projection_engine.config)

        logger.info(
            f"Running sensitivity scenario '{scenario.name.value}' "
            f"(revenue x{scenario.revenue_multiplier}, costs x{scenario.cost_multiplier})"
        )

        scaled_inputs = inputs.scaled(scenario.revenue_multiplier, scenario.cost_multiplier)
        result = self.projection_engine.derive(scaled_inputs)

        return SensitivityScenario(
            name=scenario.name,
            revenue_multiplier=scenario.revenue_multiplier,
            cost_multiplier=scenario.cost_multiplier,
            projections=result.statements,
            capital_requirement=result.capital_requirement,
            capital_adequacy=result.capital_adequacy,
        )

    def run_all(self, inputs: ProjectionInputs) -> List[SensitivityScenario]:
        """Run pessimistic, base and optimistic scenarios, returned in that order."""
        definitions = get_scenario_definitions(self.projection_engine.config)

        if self.max_workers and self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = [executor.submit(self.run_scenario, inputs, d) for d in definitions]
                return [future.result() for future in futures]

        return [self.run_scenario(inputs, d) for d in definitions]

    def compare_to_base(self, scenarios: List[SensitivityScenario]) -> Dict[str, Dict[str, List[float]]]:
        """Per-year deltas of each scenario against the base scenario."""
        base = next((s for s in scenarios if s.name == ScenarioName.BASE), None)
        if base is None:
            raise ValueError("Comparison requires a base scenario")

        base_metrics = base.projections.get_summary_metrics()
        comparison = {}
        for scenario in scenarios:
            if scenario.name == ScenarioName.BASE:
                continue
            metrics = scenario.projections.get_summary_metrics()
            comparison[scenario.name.value] = {
                f"{key}_change": (np.array(metrics[key]) - np.array(base_metrics[key])).tolist()
                for key in ("net_profit", "closing_cash", "total_equity")
            }
            comparison[scenario.name.value]["minimum_capital_change"] = [
                scenario.capital_requirement.minimum_capital - base.capital_requirement.minimum_capital
            ]
        return comparison

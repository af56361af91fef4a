"""Projection engine coordinating revenue, cost, statement and capital derivation."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel
import logging

from .config import EngineConfig
from .inputs import ProjectionInputs
from .statements import FinancialStatements
from ..projection.revenue import RevenueProjector
from ..projection.costs import CostProjector
from ..projection.statements import StatementDeriver
from ..projection.volumes import VolumeEstimator
from ..capital.requirement import CapitalRequirement, CapitalRequirementCalculator


logger = logging.getLogger(__name__)


class DerivationResult(BaseModel):
    """Statements, capital requirement and adequacy for one set of inputs."""

    statements: FinancialStatements
    capital_requirement: CapitalRequirement
    capital_adequacy: List[bool]
    opening_capital: float

    def meets_minimum_requirements(self) -> bool:
        """Equity covers the minimum capital in every projected year."""
        return all(self.capital_adequacy)

    def get_summary_metrics(self) -> Dict[str, Any]:
        """Get summary of key metrics."""
        return {
            "statements": self.statements.get_summary_metrics(),
            "capital": self.capital_requirement.get_summary(),
            "compliance": {
                "capital_adequacy": self.capital_adequacy,
                "meets_minimums": self.meets_minimum_requirements(),
            },
        }


class ProjectionEngine:
    """Runs the full derivation for one set of inputs."""

    def __init__(self, config: Optional[EngineConfig] = None):
        """Initialize projection engine with configuration."""
        self.config = config or EngineConfig.load_default()

        self.revenue_projector = RevenueProjector()
        self.cost_projector = CostProjector()
        self.statement_deriver = StatementDeriver(self.config)
        self.volume_estimator = VolumeEstimator(self.config)
        self.capital_calculator = CapitalRequirementCalculator(self.config)

        logger.info("Projection engine initialized")

    def derive(self, inputs: ProjectionInputs) -> DerivationResult:
        """Derive statements, capital requirement and adequacy."""
        # Unknown licence types fail before any derivation work
        licence = self.config.get_licence(inputs.licence_type)
        assumptions = inputs.assumptions

        logger.info(
            f"Deriving {assumptions.projection_years}-year projections for {licence.licence_type} "
            f"({len(inputs.revenue_streams)} revenue streams, {len(inputs.costs)} cost items)"
        )

        revenue = self.revenue_projector.project(assumptions, inputs.revenue_streams)
        costs = self.cost_projector.project(assumptions, revenue, inputs.costs)

        opening_capital = self.resolve_opening_capital(inputs)
        statements = self.statement_deriver.derive(
            assumptions,
            revenue,
            costs,
            opening_capital,
            capital_injections=inputs.capital_injections,
            asset_purchases=inputs.asset_purchases,
            safeguarded=self.volume_estimator.safeguarding_schedule(licence, inputs, revenue),
        )

        requirement = self.capital_calculator.calculate(licence, inputs, statements)
        adequacy = self.capital_calculator.assess_adequacy(statements, requirement)

        return DerivationResult(
            statements=statements,
            capital_requirement=requirement,
            capital_adequacy=adequacy,
            opening_capital=opening_capital,
        )

    def resolve_opening_capital(self, inputs: ProjectionInputs) -> float:
        """Opening capital, defaulting to the licence initial capital."""
        if inputs.opening_capital is not None:
            return inputs.opening_capital
        initial_capital = self.config.get_licence(inputs.licence_type).initial_capital
        logger.debug(f"No opening capital supplied, using initial capital {initial_capital:,.0f}")
        return initial_capital

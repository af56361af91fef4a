"""Regulatory capital requirement: own funds methods A-D and adequacy."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
import logging

from ..core.config import EngineConfig
from ..core.inputs import ProjectionInputs, RevenueStreamType
from ..core.regulatory import CapitalMethod, LicenceParameters
from ..core.statements import FinancialStatements
from ..projection.volumes import VolumeEstimator

logger = logging.getLogger(__name__)


class OngoingCapital(BaseModel):
    """Figures for each applicable own funds method; None when not applicable."""

    method_a: Optional[float] = Field(None, ge=0, description="Fixed overheads")
    method_b: Optional[float] = Field(None, ge=0, description="Payment volume")
    method_c: Optional[float] = Field(None, ge=0, description="Relevant income")
    method_d: Optional[float] = Field(None, ge=0, description="Average outstanding e-money")

    def get_applicable(self) -> Dict[CapitalMethod, float]:
        """Populated methods in method order."""
        values = {
            CapitalMethod.A: self.method_a,
            CapitalMethod.B: self.method_b,
            CapitalMethod.C: self.method_c,
            CapitalMethod.D: self.method_d,
        }
        return {method: value for method, value in values.items() if value is not None}


class CapitalRequirement(BaseModel):
    """Capital requirement for a licence type and a set of projections."""

    licence_type: str
    initial_capital: float = Field(ge=0)
    ongoing_capital: OngoingCapital
    minimum_capital: float = Field(ge=0, description="Highest applicable method")
    recommended_method: Optional[CapitalMethod] = None
    buffer: float = Field(ge=0)
    total_required: float = Field(ge=0, description="Minimum plus advisory buffer")
    safeguarding_required: float = Field(default=0, ge=0, description="Separate from capital")

    # Figures the methods were applied to
    method_basis: Dict[str, float] = Field(default_factory=dict)
    regulation_version: Optional[str] = None

    def is_adequate(self, total_equity: float) -> bool:
        """Adequacy uses the un-buffered minimum; the buffer is advisory."""
        return total_equity >= self.minimum_capital

    def get_summary(self) -> Dict[str, Any]:
        return {
            "licence_type": self.licence_type,
            "initial_capital": self.initial_capital,
            "methods": {m.value: v for m, v in self.ongoing_capital.get_applicable().items()},
            "minimum_capital": self.minimum_capital,
            "recommended_method": self.recommended_method.value if self.recommended_method else None,
            "total_required": self.total_required,
            "safeguarding_required": self.safeguarding_required,
        }


class CapitalRequirementCalculator:
    """Calculator for own funds requirements under PSR/EMR style methods."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig.load_default()
        self.volumes = VolumeEstimator(self.config)

        self.method_a_rate = self.config.get_capital_parameter("method_a_rate", 0.10)
        self.method_d_rate = self.config.get_capital_parameter("method_d_rate", 0.02)
        self.buffer_ratio = self.config.get_capital_parameter("capital_buffer_ratio", 0.25)

        stream_types = self.config.get_estimate(
            "relevant_income_stream_types",
            ["transaction_fee", "subscription", "fx_margin", "other"],
        )
        self.relevant_income_types = [RevenueStreamType(t) for t in stream_types]

    def calculate_method_a(self, fixed_overheads: float) -> float:
        """Method A: a fixed share of annual fixed overheads."""
        return max(0.0, fixed_overheads) * self.method_a_rate

    def calculate_method_b(self, payment_volume: float) -> float:
        """Method B: sliding scale over payment volume."""
        return self.config.get_bracket_table("method_b").apply(payment_volume)

    def calculate_method_c(self, relevant_income: float) -> float:
        """Method C: sliding scale over relevant income."""
        return self.config.get_bracket_table("method_c").apply(relevant_income)

    def calculate_method_d(self, average_emoney: float) -> float:
        """Method D: a fixed share of average outstanding e-money."""
        return max(0.0, average_emoney) * self.method_d_rate

    def calculate(self, licence: Any, inputs: ProjectionInputs,
                  statements: FinancialStatements) -> CapitalRequirement:
        """Calculate the requirement from year-1 projections."""
        if not isinstance(licence, LicenceParameters):
            licence = self.config.get_licence(licence)

        fixed_overheads = statements.costs[0].fixed_overheads if statements.costs else 0.0
        relevant_income = (
            statements.revenue[0].get_amount_by_type(self.relevant_income_types) if statements.revenue else 0.0
        )
        payment_volume = self.volumes.payment_volume(inputs, statements.revenue, 0)
        average_emoney = self.volumes.average_emoney(inputs, statements.revenue, 0)

        values: Dict[CapitalMethod, float] = {}
        for method in licence.applicable_methods:
            if method == CapitalMethod.A:
                values[method] = self.calculate_method_a(fixed_overheads)
            elif method == CapitalMethod.B:
                values[method] = self.calculate_method_b(payment_volume)
            elif method == CapitalMethod.C:
                values[method] = self.calculate_method_c(relevant_income)
            elif method == CapitalMethod.D:
                values[method] = self.calculate_method_d(average_emoney)

        requirement = self.from_method_values(
            licence,
            values,
            safeguarding_required=self.volumes.safeguarding(licence, inputs, statements.revenue, 0),
            method_basis={
                "fixed_overheads": fixed_overheads,
                "payment_volume": payment_volume,
                "relevant_income": relevant_income,
                "average_emoney": average_emoney,
            },
        )

        logger.info(
            f"Capital requirement for {licence.licence_type}: minimum {requirement.minimum_capital:,.0f} "
            f"(method {requirement.recommended_method.value if requirement.recommended_method else 'none'}), "
            f"total with buffer {requirement.total_required:,.0f}"
        )
        return requirement

    def from_method_values(self, licence: Any, values: Dict[CapitalMethod, float],
                           safeguarding_required: float = 0.0,
                           method_basis: Optional[Dict[str, float]] = None) -> CapitalRequirement:
        """Build a requirement from already computed method figures."""
        if not isinstance(licence, LicenceParameters):
            licence = self.config.get_licence(licence)

        unexpected = [m.value for m in values if m not in licence.applicable_methods]
        if unexpected:
            raise ValueError(f"Methods {unexpected} do not apply to licence {licence.licence_type}")

        minimum_capital = 0.0
        recommended_method: Optional[CapitalMethod] = None
        # Ties go to the earliest method
        for method in CapitalMethod:
            if method in values and (recommended_method is None or values[method] > minimum_capital):
                minimum_capital = values[method]
                recommended_method = method

        total_required = minimum_capital * (1 + self.buffer_ratio)

        return CapitalRequirement(
            licence_type=licence.licence_type,
            initial_capital=licence.initial_capital,
            ongoing_capital=OngoingCapital(
                method_a=values.get(CapitalMethod.A),
                method_b=values.get(CapitalMethod.B),
                method_c=values.get(CapitalMethod.C),
                method_d=values.get(CapitalMethod.D),
            ),
            minimum_capital=minimum_capital,
            recommended_method=recommended_method,
            buffer=total_required - minimum_capital,
            total_required=total_required,
            safeguarding_required=safeguarding_required,
            method_basis=method_basis or {},
            regulation_version=self.config.get_regulation_version(),
        )

    def assess_adequacy(self, statements: FinancialStatements, requirement: CapitalRequirement) -> List[bool]:
        """Per-year verdict: equity at or above the minimum capital."""
        adequacy = [requirement.is_adequate(bs.equity.total_equity) for bs in statements.balance_sheet]

        for bs, adequate in zip(statements.balance_sheet, adequacy):
            if not adequate:
                logger.warning(
                    f"Equity {bs.equity.total_equity:,.0f} below minimum capital "
                    f"{requirement.minimum_capital:,.0f} in {bs.year}"
                )
        return adequacy

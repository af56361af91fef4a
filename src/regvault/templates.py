"""Starter input sets for common licence applications."""

from typing import Callable, Dict, List, Tuple
from enum import Enum

from .core.inputs import (
    Assumptions,
    CostCategory,
    CostFrequency,
    CostItem,
    CostType,
    ProjectionInputs,
    RevenueStream,
    RevenueStreamType,
    RevenueUnit,
    WorkingCapitalDays,
)
from .core.regulatory import LicenceType


class TemplateName(str, Enum):
    """Available starter templates."""

    PAYMENT_INSTITUTION = "payment_institution"  # authorised payment institution
    EMI = "emi"                                  # e-money institution
    RAISP = "raisp"                              # account information only


# Year 1 is the base year
DEFAULT_GROWTH_RATES = {
    3: [0.0, 0.5, 0.3],
    5: [0.0, 0.5, 0.3, 0.2, 0.15],
}


def default_assumptions(start_year: int, projection_years: int = 3) -> Assumptions:
    """Assumptions shared by every template."""
    return Assumptions(
        projection_years=projection_years,
        start_year=start_year,
        revenue_growth_rate=list(DEFAULT_GROWTH_RATES.get(projection_years, [])),
        inflation_rate=0.025,
        tax_rate=0.19,
        working_capital_days=WorkingCapitalDays(receivables=30, payables=45),
    )


def default_costs() -> List[CostItem]:
    """Typical cost base of a small regulated payments firm."""
    return [
        CostItem(cost_id="staff", name="Staff Costs", category=CostCategory.STAFF,
                 amount=25000, frequency=CostFrequency.MONTHLY),
        CostItem(cost_id="technology", name="Technology & Infrastructure", category=CostCategory.TECHNOLOGY,
                 amount=8000, frequency=CostFrequency.MONTHLY),
        CostItem(cost_id="compliance", name="Compliance & Regulatory", category=CostCategory.COMPLIANCE,
                 amount=5000, frequency=CostFrequency.MONTHLY),
        CostItem(cost_id="professional_fees", name="Professional Fees", category=CostCategory.PROFESSIONAL_FEES,
                 amount=3000, frequency=CostFrequency.MONTHLY),
        CostItem(cost_id="premises", name="Office & Premises", category=CostCategory.PREMISES,
                 amount=4000, frequency=CostFrequency.MONTHLY),
        CostItem(cost_id="insurance", name="Insurance", category=CostCategory.INSURANCE,
                 amount=15000, frequency=CostFrequency.ANNUAL),
        CostItem(cost_id="marketing", name="Marketing", category=CostCategory.MARKETING,
                 type=CostType.VARIABLE, variable_rate=5),
    ]


def _payment_institution_streams() -> List[RevenueStream]:
    return [
        RevenueStream(stream_id="transaction_fees", name="Transaction Fees", type=RevenueStreamType.TRANSACTION_FEE,
                      base_value=0.50, unit=RevenueUnit.PER_TRANSACTION,
                      volume_assumptions=[100000, 250000, 500000], growth_rate=0.5),
        RevenueStream(stream_id="fx_margin", name="FX Margin", type=RevenueStreamType.FX_MARGIN,
                      base_value=50000, unit=RevenueUnit.MONTHLY, growth_rate=0.3),
    ]


def _emi_streams() -> List[RevenueStream]:
    return [
        RevenueStream(stream_id="emoney_interest", name="E-money Interest", type=RevenueStreamType.INTEREST,
                      base_value=200000, unit=RevenueUnit.ANNUAL, growth_rate=0.25),
        RevenueStream(stream_id="card_fees", name="Card Fees", type=RevenueStreamType.TRANSACTION_FEE,
                      base_value=1.00, unit=RevenueUnit.PER_TRANSACTION,
                      volume_assumptions=[50000, 150000, 300000], growth_rate=0.4),
    ]


def _raisp_streams() -> List[RevenueStream]:
    return [
        RevenueStream(stream_id="api_subscription", name="API Subscription", type=RevenueStreamType.SUBSCRIPTION,
                      base_value=500, unit=RevenueUnit.MONTHLY, growth_rate=0.6),
    ]


_TEMPLATES: Dict[TemplateName, Tuple[LicenceType, Callable[[], List[RevenueStream]]]] = {
    TemplateName.PAYMENT_INSTITUTION: (LicenceType.API, _payment_institution_streams),
    TemplateName.EMI: (LicenceType.EMI, _emi_streams),
    TemplateName.RAISP: (LicenceType.RAISP, _raisp_streams),
}


def load_template(name: str, start_year: int, projection_years: int = 3) -> ProjectionInputs:
    """Build fresh inputs for a named template starting in `start_year`."""
    key = getattr(name, "value", name)
    try:
        template = TemplateName(key)
    except ValueError:
        raise ValueError(f"Unknown template: {key}. Available: {list_templates()}") from None

    licence_type, streams_factory = _TEMPLATES[template]
    return ProjectionInputs(
        licence_type=licence_type,
        assumptions=default_assumptions(start_year, projection_years),
        revenue_streams=streams_factory(),
        costs=default_costs(),
    )


def list_templates() -> List[str]:
    """List all template names."""
    return [name.value for name in TemplateName]

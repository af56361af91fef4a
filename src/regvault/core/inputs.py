"""Caller-owned inputs for a projection run."""

from enum import Enum
from typing import List, Optional, Sequence
import hashlib
from pydantic import BaseModel, Field, field_validator, model_validator

from .regulatory import LicenceType


SUPPORTED_PROJECTION_YEARS = (3, 5)


class RevenueStreamType(str, Enum):
    """Kinds of revenue a payment business earns."""

    TRANSACTION_FEE = "transaction_fee"
    SUBSCRIPTION = "subscription"
    FX_MARGIN = "fx_margin"
    INTEREST = "interest"
    OTHER = "other"


class RevenueUnit(str, Enum):
    """How a stream's base value is expressed."""

    PER_TRANSACTION = "per_transaction"  # base value x transaction volume
    MONTHLY = "monthly"
    ANNUAL = "annual"
    PERCENTAGE = "percentage"            # base value % of a processed amount

    def is_volume_driven(self) -> bool:
        return self in (RevenueUnit.PER_TRANSACTION, RevenueUnit.PERCENTAGE)


class CostCategory(str, Enum):
    """Fixed set of cost categories."""

    STAFF = "staff"
    TECHNOLOGY = "technology"
    COMPLIANCE = "compliance"
    PROFESSIONAL_FEES = "professional_fees"
    PREMISES = "premises"
    MARKETING = "marketing"
    INSURANCE = "insurance"
    OTHER = "other"


class CostType(str, Enum):
    FIXED = "fixed"
    VARIABLE = "variable"


class CostFrequency(str, Enum):
    MONTHLY = "monthly"
    ANNUAL = "annual"
    ONE_TIME = "one_time"


def value_for_year(values: Optional[Sequence[Optional[float]]], index: int) -> Optional[float]:
    """Return ``values[index]`` or None when the figure was not supplied."""
    if not values or index < 0 or index >= len(values):
        return None
    return values[index]


def _check_non_negative(values: Sequence[Optional[float]], field_name: str) -> None:
    for i, v in enumerate(values):
        if v is not None and v < 0:
            raise ValueError(f"{field_name}[{i}] must be non-negative, got {v}")


class WorkingCapitalDays(BaseModel):
    """Debtor and creditor days."""

    receivables: float = Field(default=30, ge=0)
    payables: float = Field(default=45, ge=0)


class Assumptions(BaseModel):
    """Global projection assumptions."""

    projection_years: int = 3
    start_year: int
    revenue_growth_rate: List[float] = Field(description="Per-year growth; index 0 is the base year")
    tax_rate: float = Field(default=0.19, ge=0, le=1)
    inflation_rate: float = Field(default=0.0, gt=-1)
    working_capital_days: WorkingCapitalDays = Field(default_factory=WorkingCapitalDays)

    @field_validator("projection_years")
    def validate_projection_years(cls, v: int) -> int:
        """Only 3 and 5 year horizons are supported."""
        if v not in SUPPORTED_PROJECTION_YEARS:
            raise ValueError(f"projection_years must be one of {SUPPORTED_PROJECTION_YEARS}, got {v}")
        return v

    @field_validator("revenue_growth_rate")
    def validate_growth_rate_bounds(cls, v: List[float]) -> List[float]:
        """Revenue cannot shrink by 100% or more in a year."""
        for i, rate in enumerate(v):
            if rate <= -1:
                raise ValueError(f"revenue_growth_rate[{i}] must be greater than -1, got {rate}")
        return v

    @model_validator(mode="after")
    def validate_growth_rates(self) -> "Assumptions":
        """One growth rate per projection year."""
        if len(self.revenue_growth_rate) != self.projection_years:
            raise ValueError(
                f"revenue_growth_rate has {len(self.revenue_growth_rate)} entries, "
                f"expected {self.projection_years}"
            )
        return self

    def years(self) -> List[int]:
        """Calendar years covered by the projection."""
        return [self.start_year + i for i in range(self.projection_years)]


class RevenueStream(BaseModel):
    """A single revenue stream definition."""

    stream_id: Optional[str] = None
    name: str
    type: RevenueStreamType
    base_value: float = Field(ge=0)
    unit: RevenueUnit
    volume_assumptions: List[Optional[float]] = Field(default_factory=list)
    growth_rate: Optional[float] = Field(None, gt=-1, description="Overrides the global growth rate")

    @field_validator("volume_assumptions")
    def validate_volumes(cls, v: List[Optional[float]]) -> List[Optional[float]]:
        _check_non_negative(v, "volume_assumptions")
        return v

    @property
    def key(self) -> str:
        return self.stream_id or self.name


class CostItem(BaseModel):
    """A fixed or revenue-linked cost line."""

    cost_id: Optional[str] = None
    name: str
    category: CostCategory
    type: CostType = CostType.FIXED
    amount: float = Field(default=0, ge=0)
    frequency: CostFrequency = CostFrequency.MONTHLY
    variable_rate: Optional[float] = Field(None, ge=0, le=100, description="Percent of total revenue")
    yearly_amounts: List[Optional[float]] = Field(default_factory=list, description="Per-year overrides")

    @field_validator("yearly_amounts")
    def validate_yearly_amounts(cls, v: List[Optional[float]]) -> List[Optional[float]]:
        _check_non_negative(v, "yearly_amounts")
        return v

    def is_recurring_fixed(self) -> bool:
        """Recurring fixed costs make up the fixed overhead base."""
        return self.type == CostType.FIXED and self.frequency != CostFrequency.ONE_TIME


class ProjectionInputs(BaseModel):
    """Everything a derivation run depends on."""

    licence_type: str = LicenceType.API.value
    assumptions: Assumptions
    revenue_streams: List[RevenueStream] = Field(default_factory=list)
    costs: List[CostItem] = Field(default_factory=list)

    opening_capital: Optional[float] = Field(None, ge=0, description="Defaults to the licence initial capital")
    capital_injections: List[float] = Field(default_factory=list, description="Financing inflows per year")
    asset_purchases: List[float] = Field(default_factory=list, description="Investing outflows per year")

    # Regulatory volume figures; estimated from revenue when absent
    payment_volume: List[Optional[float]] = Field(default_factory=list)
    average_emoney_outstanding: List[Optional[float]] = Field(default_factory=list)

    @field_validator("licence_type", mode="before")
    def normalize_licence_type(cls, v):
        return getattr(v, "value", v)

    @field_validator("capital_injections", "asset_purchases", "payment_volume", "average_emoney_outstanding")
    def validate_per_year_amounts(cls, v, info):
        _check_non_negative(v, info.field_name)
        return v

    def fingerprint(self) -> str:
        """SHA-256 over the canonical JSON form of the inputs."""
        return hashlib.sha256(self.model_dump_json().encode("utf-8")).hexdigest()

    def scaled(self, revenue_multiplier: float, cost_multiplier: float) -> "ProjectionInputs":
        """Copy with every stream base value and cost amount scaled."""
        streams = [
            stream.model_copy(update={"base_value": stream.base_value * revenue_multiplier})
            for stream in self.revenue_streams
        ]
        costs = [
            cost.model_copy(update={
                "amount": cost.amount * cost_multiplier,
                "yearly_amounts": [a * cost_multiplier if a is not None else None for a in cost.yearly_amounts],
            })
            for cost in self.costs
        ]
        return self.model_copy(update={"revenue_streams": streams, "costs": costs}, deep=True)

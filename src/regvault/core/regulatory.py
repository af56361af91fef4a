"""Licence parameters and sliding-scale bracket tables."""

from enum import Enum
from typing import List, Optional

import numpy as np
from pydantic import BaseModel, Field, model_validator


class LicenceType(str, Enum):
    """Licence types covered by the default parameter table."""

    SPI = "SPI"      # Small Payment Institution
    API = "API"      # Authorised Payment Institution
    SEMI = "SEMI"    # Small Electronic Money Institution
    EMI = "EMI"      # Electronic Money Institution
    RAISP = "RAISP"  # Registered Account Information Service Provider


class CapitalMethod(str, Enum):
    """Own funds calculation methods."""

    A = "A"  # Fixed overheads
    B = "B"  # Payment volume
    C = "C"  # Relevant income
    D = "D"  # Average outstanding e-money


class LicenceParameters(BaseModel):
    """Regulatory parameters for one licence type."""

    licence_type: str
    full_name: Optional[str] = None
    regulation: Optional[str] = None
    initial_capital: float = Field(default=0, ge=0)
    applicable_methods: List[CapitalMethod] = Field(default_factory=list)
    e_money: bool = False
    safeguarding: bool = True

    @model_validator(mode="after")
    def check_method_d(self) -> "LicenceParameters":
        """Method D only exists for e-money issuers."""
        if CapitalMethod.D in self.applicable_methods and not self.e_money:
            raise ValueError(f"Method D is only applicable to e-money licences, not {self.licence_type}")
        if len(set(self.applicable_methods)) != len(self.applicable_methods):
            raise ValueError(f"Duplicate capital methods for {self.licence_type}")
        return self

    @property
    def method_d_applies(self) -> bool:
        return CapitalMethod.D in self.applicable_methods


class BracketTier(BaseModel):
    """One band of a sliding scale; ``upper=None`` means unbounded."""

    upper: Optional[float] = Field(None, gt=0)
    rate: float = Field(ge=0)


class BracketTable(BaseModel):
    """Marginal (sliding scale) rate table."""

    version: Optional[str] = None
    basis_divisor: float = Field(default=1.0, gt=0)
    scaling_factor: float = Field(default=1.0, ge=0)
    tiers: List[BracketTier] = Field(min_length=1)

    @model_validator(mode="after")
    def check_boundaries(self) -> "BracketTable":
        """Boundaries must increase strictly and only the last tier may be open."""
        previous = 0.0
        for i, tier in enumerate(self.tiers):
            if tier.upper is None:
                if i != len(self.tiers) - 1:
                    raise ValueError("Only the last bracket tier may be unbounded")
                continue
            if tier.upper <= previous:
                raise ValueError(f"Bracket boundaries must be strictly increasing (tier {i + 1})")
            previous = tier.upper
        return self

    def apply(self, amount: float) -> float:
        """Apply the sliding scale to ``amount`` (after the basis divisor)."""
        basis = max(0.0, amount) / self.basis_divisor
        if basis == 0:
            return 0.0

        lowers = np.array([0.0] + [t.upper for t in self.tiers[:-1]], dtype=float)
        uppers = np.array([t.upper if t.upper is not None else np.inf for t in self.tiers], dtype=float)
        rates = np.array([t.rate for t in self.tiers], dtype=float)

        # Portion of the basis falling inside each band
        portions = np.clip(basis - lowers, 0.0, uppers - lowers)
        return float(np.sum(portions * rates)) * self.scaling_factor

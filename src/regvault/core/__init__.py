"""Core components of the RegVault projection engine."""

from .exceptions import AccountingIdentityError, RegVaultError, UnknownLicenceTypeError
from .regulatory import BracketTable, BracketTier, CapitalMethod, LicenceParameters, LicenceType
from .config import EngineConfig
from .inputs import (
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
from .statements import BalanceSheet, CashFlow, FinancialStatements, ProfitAndLoss
from .engine import DerivationResult, ProjectionEngine

__all__ = [
    "AccountingIdentityError",
    "RegVaultError",
    "UnknownLicenceTypeError",
    "BracketTable",
    "BracketTier",
    "CapitalMethod",
    "LicenceParameters",
    "LicenceType",
    "EngineConfig",
    "Assumptions",
    "CostCategory",
    "CostFrequency",
    "CostItem",
    "CostType",
    "ProjectionInputs",
    "RevenueStream",
    "RevenueStreamType",
    "RevenueUnit",
    "WorkingCapitalDays",
    "BalanceSheet",
    "CashFlow",
    "FinancialStatements",
    "ProfitAndLoss",
    "DerivationResult",
    "ProjectionEngine",
]

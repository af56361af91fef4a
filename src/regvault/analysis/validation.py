"""Regulator-facing checks over derived projections."""

from typing import List, Optional
import logging
from pydantic import BaseModel, Field

from ..core.config import EngineConfig
from ..core.statements import FinancialStatements
from ..capital.requirement import CapitalRequirement

logger = logging.getLogger(__name__)


class ProjectionValidation(BaseModel):
    """Outcome of the projection checks."""

    is_valid: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


def average_revenue_growth(statements: FinancialStatements) -> Optional[float]:
    """Simple average annual growth from first to last year; None when undefined."""
    if len(statements.pnl) < 2:
        return 0.0
    first = statements.pnl[0].revenue.total
    last = statements.pnl[-1].revenue.total
    if first <= 0:
        return None
    return (last / first - 1) / (len(statements.pnl) - 1)


def validate_projections(statements: FinancialStatements, requirement: CapitalRequirement,
                         config: Optional[EngineConfig] = None) -> ProjectionValidation:
    """Check capital adequacy, cash position, profitability timeline and growth."""
    config = config or EngineConfig.load_default()
    max_growth = config.get_validation_threshold("max_average_growth", 0.5)
    latest_profitable_year = int(config.get_validation_threshold("latest_profitable_year", 3))

    errors: List[str] = []
    warnings: List[str] = []

    for index, bs in enumerate(statements.balance_sheet, start=1):
        equity = bs.equity.total_equity
        if equity < requirement.minimum_capital:
            errors.append(
                f"Year {index}: Equity ({equity:,.0f}) below minimum capital requirement "
                f"({requirement.minimum_capital:,.0f})"
            )
        elif equity < requirement.total_required:
            warnings.append(f"Year {index}: Equity meets minimum but below recommended buffer")

    for index, cf in enumerate(statements.cash_flow, start=1):
        if cf.closing_balance < 0:
            errors.append(f"Year {index}: Negative cash position projected")

    profitable = [index for index, p in enumerate(statements.pnl, start=1) if p.net_profit > 0]
    if statements.pnl and not profitable:
        warnings.append("Business does not reach profitability within projection period")
    elif profitable and profitable[0] > latest_profitable_year:
        warnings.append(f"Profitability not achieved until Year {profitable[0]}")

    growth = average_revenue_growth(statements)
    if growth is not None and growth > max_growth:
        warnings.append(
            f"High revenue growth assumption ({growth * 100:.0f}% annual) - regulator may require justification"
        )

    if errors:
        logger.warning(f"Projection checks failed with {len(errors)} errors")

    return ProjectionValidation(is_valid=not errors, errors=errors, warnings=warnings)

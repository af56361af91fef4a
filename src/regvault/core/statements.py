"""Projection and financial statement records."""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from .inputs import CostCategory, RevenueStreamType


class StreamAmount(BaseModel):
    """Revenue earned by one stream in one year."""

    stream_id: str
    name: str
    type: RevenueStreamType
    amount: float


class RevenueProjection(BaseModel):
    """Revenue for one projection year."""

    year: int
    total: float = 0.0
    streams: List[StreamAmount] = Field(default_factory=list)

    def get_amount_by_type(self, stream_types: List[RevenueStreamType]) -> float:
        """Sum of revenue from the given stream types."""
        wanted = set(stream_types)
        return sum(s.amount for s in self.streams if s.type in wanted)


class CostProjection(BaseModel):
    """Costs for one projection year."""

    year: int
    total: float = 0.0
    by_category: Dict[CostCategory, float] = Field(
        default_factory=lambda: {category: 0.0 for category in CostCategory}
    )
    fixed_overheads: float = 0.0  # recurring fixed costs
    one_time: float = 0.0
    variable: float = 0.0


class RevenueSummary(BaseModel):
    total: float
    streams: List[StreamAmount] = Field(default_factory=list)


class CostSummary(BaseModel):
    total: float
    by_category: Dict[CostCategory, float]


class ProfitAndLoss(BaseModel):
    """Profit & loss for one year."""

    year: int
    revenue: RevenueSummary
    costs: CostSummary
    gross_profit: float
    tax: float = Field(ge=0)
    net_profit: float
    profit_margin: float = Field(description="Net profit / revenue, 0 when there is no revenue")


class CashFlow(BaseModel):
    """Cash flow statement for one year."""

    year: int
    operating_cash_flow: float
    investing_cash_flow: float
    financing_cash_flow: float
    net_cash_flow: float
    opening_balance: float
    closing_balance: float


class CurrentAssets(BaseModel):
    cash: float
    receivables: float
    safeguarded_funds: float = 0.0
    total: float


class FixedAssets(BaseModel):
    total: float = 0.0


class Assets(BaseModel):
    current_assets: CurrentAssets
    fixed_assets: FixedAssets
    total_assets: float


class CurrentLiabilities(BaseModel):
    payables: float
    safeguarded: float = 0.0
    total: float


class Liabilities(BaseModel):
    current_liabilities: CurrentLiabilities
    total_liabilities: float


class Equity(BaseModel):
    share_capital: float
    retained_earnings: float
    total_equity: float


class BalanceSheet(BaseModel):
    """Balance sheet at the end of one year."""

    year: int
    assets: Assets
    liabilities: Liabilities
    equity: Equity

    def get_imbalance(self) -> float:
        """Assets minus (liabilities + equity); zero when the sheet balances."""
        return self.assets.total_assets - (self.liabilities.total_liabilities + self.equity.total_equity)


class FinancialStatements(BaseModel):
    """Parallel per-year P&L, cash flow and balance sheet sequences."""

    pnl: List[ProfitAndLoss] = Field(default_factory=list)
    cash_flow: List[CashFlow] = Field(default_factory=list)
    balance_sheet: List[BalanceSheet] = Field(default_factory=list)

    # Projections the statements were derived from
    revenue: List[RevenueProjection] = Field(default_factory=list)
    costs: List[CostProjection] = Field(default_factory=list)

    @property
    def years(self) -> List[int]:
        return [p.year for p in self.pnl]

    def get_year(self, year: int) -> Optional[Dict[str, BaseModel]]:
        """Statements for a single calendar year."""
        for pnl, cf, bs in zip(self.pnl, self.cash_flow, self.balance_sheet):
            if pnl.year == year:
                return {"pnl": pnl, "cash_flow": cf, "balance_sheet": bs}
        return None

    def get_summary_metrics(self) -> Dict[str, List[float]]:
        """Headline per-year figures."""
        return {
            "revenue": [p.revenue.total for p in self.pnl],
            "costs": [p.costs.total for p in self.pnl],
            "net_profit": [p.net_profit for p in self.pnl],
            "closing_cash": [c.closing_balance for c in self.cash_flow],
            "total_equity": [b.equity.total_equity for b in self.balance_sheet],
        }

"""Statement derivation: P&L, cash flow and balance sheet with year-to-year roll-forward."""

from typing import List, Optional, Sequence
import logging

from ..core.config import EngineConfig
from ..core.exceptions import AccountingIdentityError
from ..core.inputs import Assumptions, value_for_year
from ..core.statements import (
    Assets, BalanceSheet, CashFlow, CostProjection, CostSummary, CurrentAssets,
    CurrentLiabilities, Equity, FinancialStatements, FixedAssets, Liabilities,
    ProfitAndLoss, RevenueProjection, RevenueSummary,
)

logger = logging.getLogger(__name__)


DAYS_PER_YEAR = 365


class StatementDeriver:
    """
    Derives the three statements for every projection year.

    Years are derived strictly in order because each year's cash and retained
    earnings roll forward from the previous year's closing values. Working
    capital balances depend only on that year's revenue and costs, so they are
    computed before the cash flow that consumes their movement.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig.load_default()
        self.tolerance = self.config.get_validation_threshold("accounting_tolerance", 1e-6)

    def derive(self, assumptions: Assumptions,
               revenue: List[RevenueProjection],
               costs: List[CostProjection],
               opening_capital: float,
               capital_injections: Optional[Sequence[float]] = None,
               asset_purchases: Optional[Sequence[float]] = None,
               safeguarded: Optional[Sequence[float]] = None) -> FinancialStatements:
        """Derive P&L, cash flow and balance sheet sequences."""
        if len(revenue) != len(costs):
            raise ValueError(f"Revenue ({len(revenue)} years) and cost ({len(costs)} years) projections differ in length")

        pnl_statements: List[ProfitAndLoss] = []
        cash_flows: List[CashFlow] = []
        balance_sheets: List[BalanceSheet] = []

        closing_balance = opening_capital
        share_capital = opening_capital
        retained_earnings = 0.0
        fixed_assets = 0.0
        prior_receivables = 0.0
        prior_payables = 0.0

        for index, (year_revenue, year_costs) in enumerate(zip(revenue, costs)):
            pnl = self.derive_profit_and_loss(assumptions, year_revenue, year_costs)

            # Working capital lines first; the cash flow uses their movement
            receivables = year_revenue.total * assumptions.working_capital_days.receivables / DAYS_PER_YEAR
            payables = year_costs.total * assumptions.working_capital_days.payables / DAYS_PER_YEAR
            safeguarded_funds = value_for_year(safeguarded, index) or 0.0

            purchase = value_for_year(asset_purchases, index) or 0.0
            injection = value_for_year(capital_injections, index) or 0.0

            operating = pnl.net_profit - (receivables - prior_receivables) + (payables - prior_payables)
            investing = -purchase
            financing = injection
            net_cash_flow = operating + investing + financing

            opening_balance = closing_balance
            closing_balance = opening_balance + net_cash_flow

            cash_flow = CashFlow(
                year=year_revenue.year,
                operating_cash_flow=operating,
                investing_cash_flow=investing,
                financing_cash_flow=financing,
                net_cash_flow=net_cash_flow,
                opening_balance=opening_balance,
                closing_balance=closing_balance,
            )

            fixed_assets += purchase
            share_capital += injection
            retained_earnings += pnl.net_profit

            balance_sheet = self._build_balance_sheet(
                year_revenue.year, closing_balance, receivables, safeguarded_funds,
                fixed_assets, payables, share_capital, retained_earnings,
            )
            self.check_accounting_identity(balance_sheet)

            pnl_statements.append(pnl)
            cash_flows.append(cash_flow)
            balance_sheets.append(balance_sheet)

            prior_receivables = receivables
            prior_payables = payables

        logger.info(f"Derived statements for {len(pnl_statements)} years from opening capital {opening_capital:,.0f}")
        return FinancialStatements(
            pnl=pnl_statements,
            cash_flow=cash_flows,
            balance_sheet=balance_sheets,
            revenue=revenue,
            costs=costs,
        )

    def derive_profit_and_loss(self, assumptions: Assumptions, revenue: RevenueProjection,
                               costs: CostProjection) -> ProfitAndLoss:
        """P&L for one year; losses attract no tax and no credit."""
        gross_profit = revenue.total - costs.total
        tax = max(0.0, gross_profit) * assumptions.tax_rate
        net_profit = gross_profit - tax

        return ProfitAndLoss(
            year=revenue.year,
            revenue=RevenueSummary(total=revenue.total, streams=revenue.streams),
            costs=CostSummary(total=costs.total, by_category=costs.by_category),
            gross_profit=gross_profit,
            tax=tax,
            net_profit=net_profit,
            profit_margin=net_profit / revenue.total if revenue.total > 0 else 0.0,
        )

    def check_accounting_identity(self, balance_sheet: BalanceSheet) -> None:
        """Raise if assets differ from liabilities plus equity beyond float noise."""
        total_assets = balance_sheet.assets.total_assets
        funding = balance_sheet.liabilities.total_liabilities + balance_sheet.equity.total_equity
        allowed = self.tolerance * max(1.0, abs(total_assets), abs(funding))

        if abs(total_assets - funding) > allowed:
            raise AccountingIdentityError(
                balance_sheet.year,
                total_assets,
                balance_sheet.liabilities.total_liabilities,
                balance_sheet.equity.total_equity,
            )

    def _build_balance_sheet(self, year: int, cash: float, receivables: float,
                             safeguarded_funds: float, fixed_assets: float, payables: float,
                             share_capital: float, retained_earnings: float) -> BalanceSheet:
        current_assets = CurrentAssets(
            cash=cash,
            receivables=receivables,
            safeguarded_funds=safeguarded_funds,
            total=cash + receivables + safeguarded_funds,
        )
        # Safeguarded customer funds are owed back in full
        current_liabilities = CurrentLiabilities(
            payables=payables,
            safeguarded=safeguarded_funds,
            total=payables + safeguarded_funds,
        )

        return BalanceSheet(
            year=year,
            assets=Assets(
                current_assets=current_assets,
                fixed_assets=FixedAssets(total=fixed_assets),
                total_assets=current_assets.total + fixed_assets,
            ),
            liabilities=Liabilities(
                current_liabilities=current_liabilities,
                total_liabilities=current_liabilities.total,
            ),
            equity=Equity(
                share_capital=share_capital,
                retained_earnings=retained_earnings,
                total_equity=share_capital + retained_earnings,
            ),
        )

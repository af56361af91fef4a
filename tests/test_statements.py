"""Tests for statement derivation."""

import pytest

from regvault.core.config import EngineConfig
from regvault.core.exceptions import AccountingIdentityError
from regvault.core.inputs import CostCategory, CostFrequency, CostItem, ProjectionInputs
from regvault.core.statements import Equity
from regvault.projection.costs import CostProjector
from regvault.projection.revenue import RevenueProjector
from regvault.projection.statements import DAYS_PER_YEAR, StatementDeriver

from conftest import assert_accounting_identity, assert_cash_matches_balance_sheet, assert_cash_rolls_forward


def derive(inputs, opening_capital=100000.0, **kwargs):
    revenue = RevenueProjector().project(inputs.assumptions, inputs.revenue_streams)
    costs = CostProjector().project(inputs.assumptions, revenue, inputs.costs)
    return StatementDeriver(EngineConfig.load_default()).derive(
        inputs.assumptions, revenue, costs, opening_capital, **kwargs
    )


class TestProfitAndLoss:
    """Test P&L derivation."""

    def test_single_transaction_stream(self, base_assumptions, transaction_fee_stream):
        inputs = ProjectionInputs(assumptions=base_assumptions, revenue_streams=[transaction_fee_stream])
        statements = derive(inputs)

        year1 = statements.pnl[0]
        assert year1.revenue.total == pytest.approx(50000)
        assert year1.gross_profit == pytest.approx(50000)
        assert year1.tax == pytest.approx(10000)
        assert year1.net_profit == pytest.approx(40000)
        assert year1.profit_margin == pytest.approx(0.8)

    def test_loss_year_pays_no_tax(self, base_assumptions, transaction_fee_stream):
        rent = CostItem(name="Rent", category=CostCategory.PREMISES, amount=10000, frequency=CostFrequency.MONTHLY)
        inputs = ProjectionInputs(
            assumptions=base_assumptions, revenue_streams=[transaction_fee_stream], costs=[rent]
        )

        statements = derive(inputs)

        year1 = statements.pnl[0]
        assert year1.gross_profit == pytest.approx(50000 - 120000)
        assert year1.tax == 0
        assert year1.net_profit == pytest.approx(-70000)

    def test_tax_only_on_positive_gross_profit(self, simple_inputs):
        statements = derive(simple_inputs)

        for pnl in statements.pnl:
            expected_tax = max(0.0, pnl.gross_profit) * simple_inputs.assumptions.tax_rate
            assert pnl.tax == pytest.approx(expected_tax)
            assert pnl.net_profit == pytest.approx(pnl.gross_profit - pnl.tax)

    def test_simple_inputs_year_one(self, simple_inputs):
        statements = derive(simple_inputs)

        year1 = statements.pnl[0]
        assert year1.revenue.total == pytest.approx(74000)
        assert year1.costs.total == pytest.approx(29700)
        assert year1.gross_profit == pytest.approx(44300)
        assert year1.net_profit == pytest.approx(35440)


class TestCashFlowAndBalanceSheet:
    """Test roll-forward and the accounting identity."""

    def test_empty_inputs_keep_cash_flat(self, empty_inputs):
        statements = derive(empty_inputs, opening_capital=125000)

        assert len(statements.pnl) == 3
        for pnl in statements.pnl:
            assert pnl.revenue.total == 0
            assert pnl.costs.total == 0
            assert pnl.tax == 0
            assert pnl.net_profit == 0
            assert pnl.profit_margin == 0
        for cf in statements.cash_flow:
            assert cf.opening_balance == 125000
            assert cf.closing_balance == 125000
        for bs in statements.balance_sheet:
            assert bs.equity.total_equity == 125000
            assert bs.liabilities.total_liabilities == 0

    def test_cash_rolls_forward(self, simple_inputs):
        statements = derive(simple_inputs, opening_capital=150000)

        assert_cash_rolls_forward(statements, 150000)
        assert_cash_matches_balance_sheet(statements)
        assert_accounting_identity(statements)

    def test_working_capital(self, simple_inputs):
        statements = derive(simple_inputs)

        year1_bs = statements.balance_sheet[0]
        assert year1_bs.assets.current_assets.receivables == pytest.approx(74000 * 30 / DAYS_PER_YEAR)
        assert year1_bs.liabilities.current_liabilities.payables == pytest.approx(29700 * 45 / DAYS_PER_YEAR)

        year1_cf = statements.cash_flow[0]
        expected_operating = (
            statements.pnl[0].net_profit
            - year1_bs.assets.current_assets.receivables
            + year1_bs.liabilities.current_liabilities.payables
        )
        assert year1_cf.operating_cash_flow == pytest.approx(expected_operating)

        # Later years only move by the change in working capital
        year2_bs = statements.balance_sheet[1]
        expected_year2 = (
            statements.pnl[1].net_profit
            - (year2_bs.assets.current_assets.receivables - year1_bs.assets.current_assets.receivables)
            + (year2_bs.liabilities.current_liabilities.payables - year1_bs.liabilities.current_liabilities.payables)
        )
        assert statements.cash_flow[1].operating_cash_flow == pytest.approx(expected_year2)

    def test_retained_earnings_accumulate(self, simple_inputs):
        statements = derive(simple_inputs)

        cumulative = 0.0
        for pnl, bs in zip(statements.pnl, statements.balance_sheet):
            cumulative += pnl.net_profit
            assert bs.equity.retained_earnings == pytest.approx(cumulative)

    def test_injections_and_asset_purchases(self, simple_inputs):
        statements = derive(
            simple_inputs,
            opening_capital=150000,
            capital_injections=[0, 50000],
            asset_purchases=[20000],
        )

        assert statements.cash_flow[0].investing_cash_flow == -20000
        assert statements.cash_flow[1].financing_cash_flow == 50000
        assert statements.cash_flow[2].financing_cash_flow == 0
        assert [bs.assets.fixed_assets.total for bs in statements.balance_sheet] == [20000, 20000, 20000]
        assert statements.balance_sheet[0].equity.share_capital == 150000
        assert statements.balance_sheet[1].equity.share_capital == 200000
        assert_accounting_identity(statements)
        assert_cash_rolls_forward(statements, 150000)

    def test_safeguarded_funds_on_both_sides(self, simple_inputs):
        statements = derive(simple_inputs, safeguarded=[7400, 11100, 14680])

        for bs, funds in zip(statements.balance_sheet, [7400, 11100, 14680]):
            assert bs.assets.current_assets.safeguarded_funds == funds
            assert bs.liabilities.current_liabilities.safeguarded == funds
        assert_accounting_identity(statements)

    def test_get_year(self, simple_inputs):
        statements = derive(simple_inputs)

        year = statements.get_year(2026)
        assert year["pnl"].year == 2026
        assert year["balance_sheet"].year == 2026
        assert statements.get_year(1999) is None
        assert statements.years == [2025, 2026, 2027]


class TestAccountingIdentity:
    """Test the identity check."""

    def test_unbalanced_sheet_raises(self, simple_inputs):
        statements = derive(simple_inputs)
        bs = statements.balance_sheet[0]
        broken = bs.model_copy(update={
            "equity": Equity(
                share_capital=bs.equity.share_capital,
                retained_earnings=bs.equity.retained_earnings,
                total_equity=bs.equity.total_equity + 1000,
            )
        })

        with pytest.raises(AccountingIdentityError) as exc_info:
            StatementDeriver().check_accounting_identity(broken)

        assert exc_info.value.year == bs.year
        assert "does not balance" in str(exc_info.value)

    def test_float_noise_tolerated(self, simple_inputs):
        statements = derive(simple_inputs)
        bs = statements.balance_sheet[0]
        noisy = bs.model_copy(update={
            "assets": bs.assets.model_copy(update={"total_assets": bs.assets.total_assets + 1e-9})
        })

        StatementDeriver().check_accounting_identity(noisy)

    def test_identity_error_is_value_error(self):
        assert issubclass(AccountingIdentityError, ValueError)

    def test_mismatched_projection_lengths(self, simple_inputs):
        revenue = RevenueProjector().project(simple_inputs.assumptions, simple_inputs.revenue_streams)
        costs = CostProjector().project(simple_inputs.assumptions, revenue, simple_inputs.costs)

        with pytest.raises(ValueError, match="differ in length"):
            StatementDeriver().derive(simple_inputs.assumptions, revenue, costs[:2], 100000)

"""Pytest configuration and shared fixtures."""

import pytest
import tempfile
from pathlib import Path

from regvault.core.config import EngineConfig
from regvault.core.engine import ProjectionEngine
from regvault.core.inputs import (
    Assumptions, CostCategory, CostFrequency, CostItem, CostType,
    ProjectionInputs, RevenueStream, RevenueStreamType, RevenueUnit,
)
from regvault.core.statements import FinancialStatements


@pytest.fixture(scope="session")
def test_config():
    """Test configuration fixture."""
    return EngineConfig.load_default()


@pytest.fixture
def temp_dir():
    """Temporary directory fixture."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def projection_engine(test_config):
    """Projection engine on the default configuration."""
    return ProjectionEngine(test_config)


@pytest.fixture
def base_assumptions():
    """Three year horizon, 20% tax, no inflation."""
    return Assumptions(
        projection_years=3,
        start_year=2025,
        revenue_growth_rate=[0.0, 0.5, 0.3],
        tax_rate=0.20,
        inflation_rate=0.0,
    )


@pytest.fixture
def transaction_fee_stream():
    """50p per transaction over a growing transaction count."""
    return RevenueStream(
        stream_id="tx_fees",
        name="Transaction Fees",
        type=RevenueStreamType.TRANSACTION_FEE,
        base_value=0.50,
        unit=RevenueUnit.PER_TRANSACTION,
        volume_assumptions=[100000, 150000, 200000],
    )


@pytest.fixture
def subscription_stream():
    return RevenueStream(
        stream_id="subs",
        name="Platform Subscription",
        type=RevenueStreamType.SUBSCRIPTION,
        base_value=2000,
        unit=RevenueUnit.MONTHLY,
    )


@pytest.fixture
def standard_costs():
    """Small fixed cost base plus a revenue-linked marketing line."""
    return [
        CostItem(cost_id="staff", name="Staff", category=CostCategory.STAFF,
                 amount=1500, frequency=CostFrequency.MONTHLY),
        CostItem(cost_id="insurance", name="Insurance", category=CostCategory.INSURANCE,
                 amount=3000, frequency=CostFrequency.ANNUAL),
        CostItem(cost_id="setup", name="Legal Setup", category=CostCategory.PROFESSIONAL_FEES,
                 amount=5000, frequency=CostFrequency.ONE_TIME),
        CostItem(cost_id="marketing", name="Marketing", category=CostCategory.MARKETING,
                 type=CostType.VARIABLE, variable_rate=5),
    ]


@pytest.fixture
def simple_inputs(base_assumptions, transaction_fee_stream, subscription_stream, standard_costs):
    """API inputs with two streams and the standard cost base."""
    return ProjectionInputs(
        licence_type="API",
        assumptions=base_assumptions,
        revenue_streams=[transaction_fee_stream, subscription_stream],
        costs=standard_costs,
        opening_capital=150000,
    )


@pytest.fixture
def empty_inputs(base_assumptions):
    """No revenue streams and no cost items."""
    return ProjectionInputs(
        licence_type="API",
        assumptions=base_assumptions,
        opening_capital=125000,
    )


@pytest.fixture
def custom_config(test_config):
    """Configuration with an extra licence type limited to methods A and B."""
    config = test_config.model_copy(deep=True)
    config.licences["TEST_AB"] = {
        "full_name": "Test licence with methods A and B",
        "regulation": "TEST",
        "initial_capital": 50000,
        "applicable_methods": ["A", "B"],
        "e_money": False,
        "safeguarding": True,
    }
    return config


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "property: marks tests as property-based tests"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers automatically."""
    for item in items:
        # Mark property-based tests
        if "test_properties" in item.nodeid:
            item.add_marker(pytest.mark.property)

        # Mark integration tests
        if "integration" in item.nodeid or "test_pipeline" in item.nodeid:
            item.add_marker(pytest.mark.integration)


# Custom assertion helpers
def assert_accounting_identity(statements: FinancialStatements, rel_tol: float = 1e-6):
    """Assert that every balance sheet balances."""
    for bs in statements.balance_sheet:
        funding = bs.liabilities.total_liabilities + bs.equity.total_equity
        allowed = rel_tol * max(1.0, abs(bs.assets.total_assets), abs(funding))
        assert abs(bs.assets.total_assets - funding) <= allowed, (
            f"Balance sheet {bs.year} does not balance: {bs.assets.total_assets} vs {funding}"
        )


def assert_cash_rolls_forward(statements: FinancialStatements, opening_capital: float):
    """Assert opening cash equals prior closing cash and closing = opening + net."""
    previous_closing = opening_capital
    for cf in statements.cash_flow:
        assert cf.opening_balance == previous_closing, f"Opening cash for {cf.year} does not roll forward"
        assert cf.closing_balance == pytest.approx(cf.opening_balance + cf.net_cash_flow, rel=1e-12, abs=1e-9)
        previous_closing = cf.closing_balance


def assert_cash_matches_balance_sheet(statements: FinancialStatements):
    """Balance sheet cash equals cash flow closing balance."""
    for cf, bs in zip(statements.cash_flow, statements.balance_sheet):
        assert bs.assets.current_assets.cash == cf.closing_balance

"""Exceptions raised by the projection and capital engine."""


class RegVaultError(ValueError):
    """Base class for engine failures that must not be swallowed."""


class AccountingIdentityError(RegVaultError):
    """Derived balance sheet does not satisfy assets = liabilities + equity."""

    def __init__(self, year: int, total_assets: float, total_liabilities: float, total_equity: float):
        self.year = year
        self.total_assets = total_assets
        self.total_liabilities = total_liabilities
        self.total_equity = total_equity
        drift = total_assets - (total_liabilities + total_equity)
        super().__init__(
            f"Balance sheet for {year} does not balance: assets {total_assets:,.2f} vs "
            f"liabilities + equity {total_liabilities + total_equity:,.2f} (drift {drift:,.6f})"
        )


class UnknownLicenceTypeError(RegVaultError):
    """Licence type has no entry in the regulatory parameter table."""

    def __init__(self, licence_type: str, available: list):
        self.licence_type = licence_type
        super().__init__(f"Unknown licence type: {licence_type}. Available: {available}")

"""
Reporting Configuration Schema.

Defines the account classification rules, reconciliation tolerances and
report options.  Classification follows the chart of accounts layout
(15xx fixed assets, 16xx accumulated depreciation, 1301 WIP, 21xx
current liabilities, 22xx long-term liabilities).
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from decimal import Decimal
from typing import Self

from ledger_kernel.domain.records import Account
from ledger_kernel.exceptions import ConfigurationError
from ledger_kernel.logging_config import get_logger

logger = get_logger("modules.reporting.config")


@dataclass
class AccountClassification:
    """
    Rules for placing accounts on the statements.

    Prefix matching: an account matches if its code starts with any of
    the configured prefixes.  Category matching is exact.
    """

    # Carried by the fixed-asset register, not by ledger balances
    fixed_asset_prefixes: tuple[str, ...] = ("15",)

    # Carried by project WIP, not by ledger balances
    wip_account_codes: tuple[str, ...] = ("1301",)

    # Cash flow: Asset accounts whose category or subcategory is one of
    # these are cash and cash equivalents
    cash_categories: tuple[str, ...] = ("Cash", "Bank", "Kas")

    # Liabilities without an explicit current flag
    current_liability_categories: tuple[str, ...] = (
        "Current Liabilities", "Hutang Lancar",
    )
    current_liability_prefixes: tuple[str, ...] = ("21",)

    def matches_prefix(self, code: str, prefixes: tuple[str, ...]) -> bool:
        """Check if an account code matches any of the given prefixes."""
        return any(code.startswith(p) for p in prefixes)

    def is_cash_account(self, account: Account) -> bool:
        return (
            account.category in self.cash_categories
            or account.subcategory in self.cash_categories
        )

    def is_current_asset(self, account: Account) -> bool:
        """Unflagged assets are current."""
        return account.is_current is not False

    def is_current_liability(self, account: Account) -> bool:
        if account.is_current is not None:
            return account.is_current
        if account.category in self.current_liability_categories:
            return True
        return self.matches_prefix(account.code, self.current_liability_prefixes)


@dataclass
class ReportingConfig:
    """
    Configuration schema for the reporting module.

    Controls account classification, reconciliation and report output.
    """

    classification: AccountClassification = field(
        default_factory=AccountClassification,
    )

    # Entity name shown on reports
    entity_name: str = "Company"

    # Single reporting currency
    currency: str = "IDR"

    # Ledger/register drift allowed before a finding is raised
    drift_tolerance: Decimal = Decimal("100")

    # |assets - (liabilities + equity + net income)| below this is balanced
    balance_tolerance: Decimal = Decimal("0.01")

    # Raise ReconciliationDriftError instead of attaching a finding
    strict_reconciliation: bool = False

    # Project statuses that contribute to WIP; None = every status
    wip_project_statuses: tuple[str, ...] | None = None

    # Whether to include accounts with zero balance in itemized sections
    include_zero_balances: bool = True

    def __post_init__(self):
        self.drift_tolerance = _as_decimal("drift_tolerance", self.drift_tolerance)
        self.balance_tolerance = _as_decimal("balance_tolerance", self.balance_tolerance)
        if self.drift_tolerance < 0:
            raise ConfigurationError("drift_tolerance cannot be negative")
        if self.balance_tolerance <= 0:
            raise ConfigurationError("balance_tolerance must be positive")
        if self.wip_project_statuses is not None:
            self.wip_project_statuses = tuple(self.wip_project_statuses)

    @classmethod
    def with_defaults(cls) -> Self:
        """Create config with standard defaults."""
        logger.info("reporting_config_created_with_defaults")
        return cls()

    @classmethod
    def from_dict(cls, data: dict) -> Self:
        """
        Create config from a dictionary (e.g. parsed YAML).

        Raises:
            ConfigurationError: On unknown keys or invalid values.
        """
        data = dict(data)
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(f"unknown reporting config keys: {unknown}")

        if data.get("classification", ...) is None:
            # Empty YAML section
            del data["classification"]
        if "classification" in data:
            if not isinstance(data["classification"], dict):
                raise ConfigurationError(
                    "classification must be a mapping, "
                    f"got {type(data['classification']).__name__}"
                )
            classification = dict(data["classification"])
            allowed = {f.name for f in fields(AccountClassification)}
            bad = sorted(set(classification) - allowed)
            if bad:
                raise ConfigurationError(f"unknown classification keys: {bad}")
            data["classification"] = AccountClassification(
                **{k: _as_tuple(v) for k, v in classification.items()}
            )
        logger.info(
            "reporting_config_loading_from_dict",
            extra={"keys": sorted(data.keys())},
        )
        return cls(**data)


def _as_tuple(value: object) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if isinstance(value, (list, tuple)):
        return tuple(str(v) for v in value)
    raise ConfigurationError(f"expected a list of strings, got {value!r}")


def _as_decimal(name: str, value: object) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ConfigurationError(f"{name} must be numeric, got {value!r}")
    try:
        return Decimal(str(value))
    except ArithmeticError:
        raise ConfigurationError(f"{name} must be numeric, got {value!r}") from None

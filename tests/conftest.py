"""
Pytest fixtures for the services ledger test suite.

Provides:
- Structured logging setup and a JSON log capture fixture
- A deterministic clock
- A standard chart of accounts and record factories
- In-memory SQLite sessions with every ledger table created
"""

import json
import logging
from datetime import date, datetime, timezone
from decimal import Decimal
from io import StringIO
from itertools import count

import pytest

from ledger_kernel.db.engine import (
    create_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from ledger_kernel.domain.clock import DeterministicClock
from ledger_kernel.domain.records import (
    Account,
    AccountType,
    Billing,
    FixedAsset,
    Project,
    ProjectCost,
    Transaction,
    TxType,
)
from ledger_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture ledger_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            ...
            logs = captured_logs()
            assert any(r["message"] == "balance_sheet_generated" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("ledger_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Clock
# =============================================================================


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock(datetime(2024, 6, 30, 17, 0, tzinfo=timezone.utc))


# =============================================================================
# Chart of accounts and record factories
# =============================================================================


STANDARD_CHART = (
    Account("1101", "Kas", AccountType.ASSET, "Cash", "Cash on Hand"),
    Account("1102", "Bank BCA", AccountType.ASSET, "Bank", "Bank Accounts"),
    Account("1201", "Piutang Usaha", AccountType.ASSET, "Receivables"),
    Account("1301", "Pekerjaan Dalam Proses", AccountType.ASSET, "Work In Progress"),
    Account("1501", "Peralatan", AccountType.FIXED_ASSET, "Fixed Assets"),
    Account("1601", "Akumulasi Penyusutan Peralatan", AccountType.CONTRA_ASSET,
            "Accumulated Depreciation"),
    Account("2101", "Hutang Usaha", AccountType.LIABILITY, "Hutang Lancar"),
    Account("2201", "Hutang Bank Jangka Panjang", AccountType.LIABILITY,
            "Hutang Jangka Panjang"),
    Account("3101", "Modal Disetor", AccountType.EQUITY, "Modal"),
    Account("4101", "Pendapatan Jasa", AccountType.REVENUE, "Pendapatan"),
    Account("5101", "Beban Gaji", AccountType.EXPENSE, "Beban Operasional"),
    Account("6101", "Beban Penyusutan", AccountType.EXPENSE, "Beban Operasional"),
)


@pytest.fixture
def chart() -> tuple[Account, ...]:
    return STANDARD_CHART


@pytest.fixture
def make_tx():
    """Factory for transactions with sequential ids."""
    ids = count(1)

    def _make(
        account_code: str,
        tx_type: TxType,
        amount,
        tx_date: date = date(2024, 3, 1),
        description: str = "",
        project_id: str | None = None,
    ) -> Transaction:
        return Transaction(
            id=f"tx-{next(ids)}",
            date=tx_date,
            tx_type=tx_type,
            account_code=account_code,
            amount=amount,
            description=description,
            project_id=project_id,
        )

    return _make


@pytest.fixture
def make_project():
    """Factory for projects with given cost and billing amounts."""
    ids = count(1)

    def _make(
        costs=(),
        billings=(),
        status: str = "ongoing",
        start_date: date | None = date(2024, 1, 1),
        entry_date: date = date(2024, 3, 15),
        name: str | None = None,
    ) -> Project:
        n = next(ids)
        project_id = f"prj-{n}"
        return Project(
            id=project_id,
            project_code=f"PRJ-{n:03d}",
            name=name or f"Project {n}",
            status=status,
            start_date=start_date,
            costs=tuple(
                ProjectCost(f"{project_id}-c{i}", project_id, Decimal(str(a)), entry_date,
                            category="Labor", description=f"cost {i}")
                for i, a in enumerate(costs)
            ),
            billings=tuple(
                Billing(f"{project_id}-b{i}", project_id, Decimal(str(a)), entry_date)
                for i, a in enumerate(billings)
            ),
        )

    return _make


@pytest.fixture
def make_asset():
    ids = count(1)

    def _make(
        value,
        accumulated="0",
        useful_life: int = 5,
        acquisition_date: date = date(2024, 1, 1),
        name: str | None = None,
    ) -> FixedAsset:
        n = next(ids)
        return FixedAsset(
            id=f"fa-{n}",
            asset_name=name or f"Asset {n}",
            acquisition_date=acquisition_date,
            value=Decimal(str(value)),
            useful_life=useful_life,
            accumulated_depreciation=Decimal(str(accumulated)),
        )

    return _make


# =============================================================================
# Database
# =============================================================================


@pytest.fixture
def session():
    """Session on a fresh in-memory SQLite database with all tables."""
    init_engine_from_url("sqlite://")
    create_tables()
    db_session = get_session()
    yield db_session
    db_session.close()
    reset_engine()


ACCOUNT_TYPE_LABELS = {
    AccountType.ASSET: "Aset",
    AccountType.FIXED_ASSET: "Aset Tetap",
    AccountType.CONTRA_ASSET: "Kontra Aset",
    AccountType.LIABILITY: "Kewajiban",
    AccountType.EQUITY: "Modal",
    AccountType.REVENUE: "Pendapatan",
    AccountType.EXPENSE: "Beban",
}

# (date, type label, account code, amount, description)
SEED_TRANSACTIONS = (
    (date(2024, 1, 10), "debit", "1102", "100000", "Setoran modal"),
    (date(2024, 1, 10), "credit", "3101", "100000", "Setoran modal"),
    (date(2024, 3, 1), "debit", "1501", "30000", "Pembelian server"),
    (date(2024, 3, 1), "credit", "1102", "30000", "Pembelian server"),
    (date(2024, 4, 1), "WIP_INCREASE", "1301", "6000", "Biaya proyek"),
    (date(2024, 4, 1), "credit", "1102", "6000", "Biaya proyek"),
    (date(2024, 4, 5), "debit", "1201", "50000", "Jasa konsultasi"),
    (date(2024, 4, 5), "income", "4101", "50000", "Jasa konsultasi"),
    (date(2024, 4, 15), "debit", "1201", "1000", "Tagihan proyek"),
    (date(2024, 4, 15), "WIP_DECREASE", "1301", "1000", "Tagihan proyek"),
    (date(2024, 4, 20), "expense", "5101", "20000", "Gaji April"),
    (date(2024, 4, 20), "credit", "1102", "20000", "Gaji April"),
    (date(2024, 8, 1), "debit", "1201", "999", "Jasa Agustus"),
    (date(2024, 8, 1), "income", "4101", "999", "Jasa Agustus"),
)


def seed_ledger(db_session) -> None:
    """
    Persist a small, consistent services ledger.

    As of 2024-06-30 the balance sheet balances at 130000 total assets,
    the fixed-asset register matches account 1501 and project WIP (5000)
    matches account 1301.
    """
    from ledger_kernel.models import (
        AccountModel,
        BillingModel,
        FixedAssetModel,
        ProjectCostModel,
        ProjectModel,
        TransactionModel,
    )

    for account in STANDARD_CHART:
        db_session.add(
            AccountModel(
                code=account.code,
                name=account.name,
                account_type=ACCOUNT_TYPE_LABELS[account.account_type],
                category=account.category,
                subcategory=account.subcategory,
                is_current=account.is_current,
            )
        )
    for tx_date, label, code, amount, description in SEED_TRANSACTIONS:
        db_session.add(
            TransactionModel(
                date=tx_date,
                transaction_type=label,
                account_code=code,
                amount=Decimal(amount),
                description=description,
            )
        )
    db_session.add(
        FixedAssetModel(
            asset_name="Server Rack",
            acquisition_date=date(2024, 3, 1),
            value=Decimal("30000"),
            useful_life=5,
            accumulated_depreciation=Decimal("0"),
            book_value=Decimal("30000"),
        )
    )
    project = ProjectModel(
        project_code="PRJ-001",
        name="Office Fit-Out",
        status="ongoing",
        start_date=date(2024, 2, 1),
        total_value=Decimal("75000"),
    )
    project.costs.append(
        ProjectCostModel(
            amount=Decimal("6000"),
            date=date(2024, 4, 1),
            category="Labor",
            description="Site crew",
        )
    )
    project.billings.append(
        BillingModel(
            amount=Decimal("1000"),
            date=date(2024, 4, 15),
            percentage=Decimal("10"),
        )
    )
    db_session.add(project)
    db_session.flush()


@pytest.fixture
def seeded_session(session):
    seed_ledger(session)
    return session

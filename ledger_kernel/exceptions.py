"""
Typed Exception Hierarchy for the Ledger Kernel.

Every error has a typed class (catch by type, not by message), a ``code``
class attribute (machine-readable, API-safe) and structured attributes
naming the offending record.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    LedgerEngineError (base)
    |
    +-- AccountError
    |   +-- UnknownAccountError
    |
    +-- RecordError
    |   +-- MalformedAmountError
    |   +-- InvalidRecordError
    |
    +-- ReconciliationError
    |   +-- ReconciliationDriftError
    |
    +-- ConfigurationError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                  | When Raised
----------------|-----------------------|-----------------------------------------
Account         | UNKNOWN_ACCOUNT       | Transaction references a code missing
                |                       | from the chart of accounts (fatal)
----------------|-----------------------|-----------------------------------------
Record          | MALFORMED_AMOUNT      | Negative or non-numeric amount (fatal)
                | INVALID_RECORD        | Record violates a structural invariant
----------------|-----------------------|-----------------------------------------
Reconciliation  | RECONCILIATION_DRIFT  | Ledger vs register mismatch beyond
                |                       | tolerance; raised only in strict mode,
                |                       | otherwise reported as a finding
----------------|-----------------------|-----------------------------------------
Configuration   | INVALID_CONFIGURATION | Config file or value rejected

===============================================================================
HANDLING PATTERNS
===============================================================================

1. STRUCTURAL ERRORS ABORT THE STATEMENT:

    try:
        report = service.balance_sheet(as_of)
    except UnknownAccountError as e:
        api_response(code=e.code, account=e.account_code, record=e.record_id)

2. DRIFT IS DATA QUALITY, NOT FAILURE:

    report = service.balance_sheet(as_of)
    for finding in report.findings:
        notify_operators(finding)

===============================================================================
"""


class LedgerEngineError(Exception):
    """
    Base exception for all ledger engine errors.

    All subclasses carry a ``code`` class attribute for machine-readable
    error identification.
    """

    code: str = "LEDGER_ENGINE_ERROR"


# Account-related exceptions


class AccountError(LedgerEngineError):
    """Base exception for chart-of-accounts errors."""

    code: str = "ACCOUNT_ERROR"


class UnknownAccountError(AccountError):
    """A record references an account code absent from the chart of accounts."""

    code: str = "UNKNOWN_ACCOUNT"

    def __init__(self, account_code: str, record_id: str | None = None):
        self.account_code = account_code
        self.record_id = record_id
        if record_id is None:
            super().__init__(f"Unknown account code: {account_code}")
        else:
            super().__init__(
                f"Unknown account code {account_code} referenced by record {record_id}"
            )


# Record-related exceptions


class RecordError(LedgerEngineError):
    """Base exception for malformed input records."""

    code: str = "RECORD_ERROR"


class MalformedAmountError(RecordError):
    """Amount is negative or not a finite number."""

    code: str = "MALFORMED_AMOUNT"

    def __init__(self, record_type: str, record_id: str | None, amount: object):
        self.record_type = record_type
        self.record_id = record_id
        self.amount = str(amount)
        super().__init__(
            f"Malformed amount {amount!r} on {record_type} {record_id}"
        )


class InvalidRecordError(RecordError):
    """Record violates a structural invariant (e.g. unknown type label)."""

    code: str = "INVALID_RECORD"

    def __init__(self, record_type: str, record_id: str | None, reason: str):
        self.record_type = record_type
        self.record_id = record_id
        self.reason = reason
        super().__init__(f"Invalid {record_type} {record_id}: {reason}")


# Reconciliation-related exceptions


class ReconciliationError(LedgerEngineError):
    """Base exception for ledger/register reconciliation errors."""

    code: str = "RECONCILIATION_ERROR"


class ReconciliationDriftError(ReconciliationError):
    """
    Ledger-implied total differs from its authoritative register.

    Only raised when strict reconciliation is requested; by default the
    same condition is attached to the report as a warning finding.
    """

    code: str = "RECONCILIATION_DRIFT"

    def __init__(self, area: str, drift: str, tolerance: str):
        self.area = area
        self.drift = drift
        self.tolerance = tolerance
        super().__init__(
            f"Reconciliation drift in {area}: {drift} exceeds tolerance {tolerance}"
        )


# Configuration exceptions


class ConfigurationError(LedgerEngineError):
    """Configuration value or file rejected."""

    code: str = "INVALID_CONFIGURATION"

    def __init__(self, reason: str, source: str | None = None):
        self.reason = reason
        self.source = source
        if source is None:
            super().__init__(f"Invalid configuration: {reason}")
        else:
            super().__init__(f"Invalid configuration in {source}: {reason}")

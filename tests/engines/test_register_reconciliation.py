"""
Tests for RegisterReconciliationChecker.

Ledger balances of fixed-asset and WIP accounts are compared with the
register figures; drift beyond tolerance becomes a warning finding, or
an error in strict mode.  Nothing is ever corrected.
"""

from decimal import Decimal

import pytest

from ledger_kernel.exceptions import ReconciliationDriftError
from ledger_engines.reconciliation import (
    CheckSeverity,
    CheckStatus,
    ReconciliationArea,
    RegisterReconciliationChecker,
    reconcile,
)

FA_CODES = frozenset({"1501"})
WIP_CODES = frozenset({"1301"})


class TestReconcile:

    def test_drift_is_ledger_minus_register(self):
        result = reconcile(Decimal("5000"), Decimal("4800"))
        assert result.drift == Decimal("200")
        assert not result.ok

    def test_drift_at_tolerance_is_ok(self):
        result = reconcile(Decimal("4900"), Decimal("4800"), Decimal("100"))
        assert result.ok

    def test_negative_drift_uses_absolute_value(self):
        result = reconcile(Decimal("4600"), Decimal("4800"), Decimal("100"))
        assert result.drift == Decimal("-200")
        assert not result.ok


class TestChecker:

    def test_wip_drift_reported_as_warning(self, captured_logs):
        checker = RegisterReconciliationChecker(tolerance=Decimal("100"))
        balances = {"1301": Decimal("5000"), "1501": Decimal("0")}

        report = checker.run_all_checks(
            balances, FA_CODES, Decimal("0"), WIP_CODES, Decimal("4800"),
        )

        assert report.status is CheckStatus.WARNING
        assert not report.is_clean
        (finding,) = report.findings
        assert finding.area is ReconciliationArea.WIP
        assert finding.drift == Decimal("200")
        assert finding.severity is CheckSeverity.WARNING
        assert finding.code == "RECONCILIATION_DRIFT"
        assert "wip" in finding.message

        warnings = [r for r in captured_logs() if r["message"] == "reconciliation_drift_detected"]
        assert warnings[0]["level"] == "WARNING"
        assert warnings[0]["area"] == "wip"
        assert warnings[0]["drift"] == "200"

    def test_within_tolerance_is_clean(self):
        checker = RegisterReconciliationChecker()
        report = checker.run_all_checks(
            {"1501": Decimal("10000"), "1301": Decimal("4850")},
            FA_CODES, Decimal("9950"), WIP_CODES, Decimal("4800"),
        )
        assert report.status is CheckStatus.PASSED
        assert report.is_clean
        assert len(report.results) == 2

    def test_fixed_asset_sum_over_codes(self):
        checker = RegisterReconciliationChecker()
        result = checker.check_fixed_assets(
            {"1501": Decimal("6000"), "1510": Decimal("4000")},
            frozenset({"1501", "1510"}),
            Decimal("7000"),
        )
        assert result.ledger_balance == Decimal("10000")
        assert result.drift == Decimal("3000")
        assert result.area is ReconciliationArea.FIXED_ASSETS

    def test_missing_codes_count_as_zero(self):
        checker = RegisterReconciliationChecker()
        result = checker.check_wip({}, WIP_CODES, Decimal("0"))
        assert result.ok

    def test_result_for_area(self):
        report = RegisterReconciliationChecker().run_all_checks(
            {"1301": Decimal("5000")}, FA_CODES, Decimal("0"), WIP_CODES, Decimal("4800"),
        )
        assert report.result_for(ReconciliationArea.WIP).drift == Decimal("200")
        assert report.result_for(ReconciliationArea.FIXED_ASSETS).ok

    def test_strict_mode_raises(self):
        checker = RegisterReconciliationChecker(tolerance=Decimal("100"), strict=True)
        with pytest.raises(ReconciliationDriftError) as exc_info:
            checker.check_wip({"1301": Decimal("5000")}, WIP_CODES, Decimal("4800"))
        assert exc_info.value.area == "wip"
        assert exc_info.value.drift == "200"
        assert exc_info.value.code == "RECONCILIATION_DRIFT"

    def test_strict_mode_passes_when_clean(self):
        checker = RegisterReconciliationChecker(strict=True)
        result = checker.check_wip({"1301": Decimal("4800")}, WIP_CODES, Decimal("4800"))
        assert result.ok

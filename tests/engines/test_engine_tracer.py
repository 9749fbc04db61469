"""Tests for the @traced_engine decorator and input fingerprints."""

from datetime import date
from decimal import Decimal

from ledger_kernel.domain.records import TxType
from ledger_engines.accounts import AccountRegistry
from ledger_engines.balances import compute_balances
from ledger_engines.tracer import compute_input_fingerprint, traced_engine


class TestFingerprint:

    def test_deterministic(self):
        kwargs = {"amounts": [Decimal("1.00"), Decimal("2.50")], "as_of": date(2024, 1, 1)}
        fp1 = compute_input_fingerprint(("amounts", "as_of"), kwargs)
        fp2 = compute_input_fingerprint(("amounts", "as_of"), dict(kwargs))
        assert fp1 == fp2
        assert len(fp1) == 16

    def test_differs_on_input_change(self):
        fp1 = compute_input_fingerprint(("x",), {"x": Decimal("1")})
        fp2 = compute_input_fingerprint(("x",), {"x": Decimal("2")})
        assert fp1 != fp2

    def test_dict_key_order_ignored(self):
        fp1 = compute_input_fingerprint(("m",), {"m": {"a": 1, "b": 2}})
        fp2 = compute_input_fingerprint(("m",), {"m": {"b": 2, "a": 1}})
        assert fp1 == fp2

    def test_missing_field_is_null(self):
        assert compute_input_fingerprint(("x",), {}) == compute_input_fingerprint(
            ("x",), {"x": None},
        )


class TestTracedEngine:

    def test_emits_trace_and_returns_result(self, captured_logs):
        @traced_engine("doubler", "2.1", fingerprint_fields=("value",))
        def double(*, value):
            return value * 2

        assert double(value=Decimal("21")) == Decimal("42")

        traces = [r for r in captured_logs() if r["message"] == "LEDGER_ENGINE_TRACE"]
        assert len(traces) == 1
        assert traces[0]["engine_name"] == "doubler"
        assert traces[0]["engine_version"] == "2.1"
        assert len(traces[0]["input_fingerprint"]) == 16
        assert traces[0]["duration_ms"] >= 0

    def test_compute_balances_is_traced(self, captured_logs, chart, make_tx):
        registry = AccountRegistry(chart)
        compute_balances(registry, transactions=[make_tx("1101", TxType.DEBIT, "10")])

        traces = [r for r in captured_logs() if r.get("engine_name") == "balances"]
        assert traces
        assert traces[0]["function"] == "compute_balances"

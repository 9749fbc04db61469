"""Read-only selectors over the ledger tables."""

from ledger_kernel.selectors.base import BaseSelector
from ledger_kernel.selectors.snapshot_selector import SnapshotSelector

__all__ = ["BaseSelector", "SnapshotSelector"]

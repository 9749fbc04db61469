"""
Ledger Configuration.

YAML loading for deployment settings and the reporting configuration.
"""

from ledger_config.loader import (
    LedgerSettings,
    compute_checksum,
    load_reporting_config,
    load_settings,
    load_yaml_file,
)

__all__ = [
    "LedgerSettings",
    "compute_checksum",
    "load_reporting_config",
    "load_settings",
    "load_yaml_file",
]

"""
Configuration Loader (``ledger_config.loader``).

Responsibility
--------------
Loads YAML configuration files and turns them into typed settings: the
database URL, the log level and the ``ReportingConfig`` used by the
statement builders.

Architecture position
---------------------
**Config layer** -- infrastructure tooling.  Reads files; the engines
and builders only ever receive the parsed dataclasses.

Invariants enforced
-------------------
* Parse errors raise ``ConfigurationError`` naming the file; no silent
  defaults for malformed values.
* ``compute_checksum`` produces a deterministic SHA-256 hash so a report
  can be traced to the exact configuration it was built with.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Non-mapping document or bad values  -> ``ConfigurationError``.

Expected layout::

    database_url: postgresql://ledger@localhost/ledger
    log_level: INFO
    reporting:
      entity_name: PT Contoh
      currency: IDR
      drift_tolerance: "100"
      strict_reconciliation: false
      wip_project_statuses: [ongoing]
      classification:
        fixed_asset_prefixes: ["15"]
        wip_account_codes: ["1301"]
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ledger_kernel.exceptions import ConfigurationError
from ledger_kernel.logging_config import get_logger
from ledger_modules.reporting.config import ReportingConfig

logger = get_logger("config.loader")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LedgerSettings:
    """Top-level settings for a deployment of the engine."""

    database_url: str | None = None
    log_level: str = "INFO"
    reporting: ReportingConfig = field(default_factory=ReportingConfig)
    checksum: str = ""


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ConfigurationError: if the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("top-level YAML must be a mapping", str(path))
    return data


def compute_checksum(data: dict[str, Any]) -> str:
    """SHA-256 of the canonical JSON serialization of ``data``."""
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()


def parse_reporting_config(data: dict[str, Any], source: str | None = None) -> ReportingConfig:
    """Build a ``ReportingConfig`` from a parsed mapping."""
    if not isinstance(data, dict):
        raise ConfigurationError("reporting section must be a mapping", source)
    try:
        return ReportingConfig.from_dict(data)
    except ConfigurationError as exc:
        raise ConfigurationError(exc.reason, source) from exc
    except TypeError as exc:
        raise ConfigurationError(str(exc), source) from exc


def load_reporting_config(path: Path | str) -> ReportingConfig:
    """
    Load a ``ReportingConfig`` from YAML.

    Accepts either a file with a ``reporting:`` section or a file whose
    top level is the reporting section itself.
    """
    path = Path(path)
    data = load_yaml_file(path)
    section = data.get("reporting", data)
    config = parse_reporting_config(section, str(path))
    logger.info(
        "reporting_config_loaded",
        extra={"path": str(path), "checksum": compute_checksum(section)},
    )
    return config


def load_settings(path: Path | str) -> LedgerSettings:
    """Load full deployment settings from YAML."""
    path = Path(path)
    data = load_yaml_file(path)

    log_level = str(data.get("log_level", "INFO")).upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigurationError(f"unknown log_level {log_level!r}", str(path))

    database_url = data.get("database_url")
    if database_url is not None and not isinstance(database_url, str):
        raise ConfigurationError("database_url must be a string", str(path))

    settings = LedgerSettings(
        database_url=database_url,
        log_level=log_level,
        reporting=parse_reporting_config(data.get("reporting", {}), str(path)),
        checksum=compute_checksum(data),
    )
    logger.info(
        "settings_loaded",
        extra={"path": str(path), "checksum": settings.checksum},
    )
    return settings

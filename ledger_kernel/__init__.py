"""
Ledger Kernel

Shared foundation of the services ledger:
- Immutable input records and snapshot (pure domain)
- Typed exception hierarchy
- Structured JSON logging
- SQLAlchemy persistence adapters and the read-only snapshot selector
"""

__version__ = "0.1.0"

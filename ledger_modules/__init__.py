"""
Ledger Modules.

- assets: fixed-asset register and straight-line depreciation
- wip: project work-in-progress valuation
- reporting: financial statements
"""

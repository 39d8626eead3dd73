"""
Ledger - Source Package

The aggregation and period-accounting engine behind a personal
finance ledger: accounting periods with a custom month start,
period filters, income/expense aggregates, rollover balances and
per-category budget caps.

DESIGN PRINCIPLES:
1. The engine holds no state - callers own the store
2. Every view is re-derived on every query
3. No hidden "now" - dates are passed in explicitly
4. Batch input is best-effort, never all-or-nothing
5. Storage and AI parsing are swappable collaborators
"""

__version__ = "1.0.0"
__author__ = "Ledger Team"

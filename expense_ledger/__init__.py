"""
Expense Ledger - Source Package

A personal expense ledger that keeps a local list of expenses and
derives the numbers a spending dashboard needs from it.

DESIGN PRINCIPLES:
1. Aggregation is pure: records + selection + "now" in, view out
2. Validate at the boundary, never inside aggregation
3. Records are immutable, the collection is copy-on-write
4. Storage failures degrade, they never crash the session
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Ledger Team"

"""
Trip Ledger

A personal income and expense log for self-employed drivers. Trips
(income) and expenses are recorded as immutable records and rolled up
into daily, weekly and monthly summaries, breakdowns and fuel
efficiency figures.

DESIGN PRINCIPLES:
1. The aggregation engine is pure: same records in, same summaries out
2. Fail early on malformed data, never on empty data
3. No silent corrections
4. Every change to the ledger is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"

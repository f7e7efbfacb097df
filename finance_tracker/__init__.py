"""
Finance Tracker - Core Package

Records income and expense transactions for one local user and derives
the figures a dashboard shows: totals, balance, category breakdown and
monthly trend.

DESIGN PRINCIPLES:
1. The store is the single owner of the data; views are pure derivations
2. In-memory state is authoritative, persistence is best-effort
3. Corrupt stored data never crashes startup
4. Money is Decimal, rounded half-up to cents, and sums are exact
5. Every mutation is auditable
"""

__version__ = "1.0.0"
__author__ = "Finance Tracker Team"

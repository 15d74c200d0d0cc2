"""
Personal Finance Tracker - Source Package

A single-user-at-a-time personal finance tracker: record income and
expense transactions, set per-category budgets, and view summary,
budget and time-series reports.

DESIGN PRINCIPLES:
1. Reports are computed, never stored
2. Bad input is reported, never silently fixed
3. Every mutation is persisted immediately and audited
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Personal Finance Tracker Team"

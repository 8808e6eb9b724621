"""
Bank Ledger - Source Package

A single-user ledger: accounts, deposits, withdrawals and transfers,
kept in two flat text files and driven from a numbered text menu.

PRINCIPLES:
1. Every successful change is written to storage immediately
2. Rejected input changes nothing
3. Storage failures are reported, never hidden
4. Every change is audited
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Bank Ledger Team"

"""
Core Payments Engine

Replays a sequential feed of client transactions (deposits, withdrawals,
disputes, resolves and chargebacks) against per-client accounts and reports
the final balances. All monetary values use exact fixed-point arithmetic.
"""

__version__ = "1.0.0"

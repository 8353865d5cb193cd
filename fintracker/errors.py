"""
Error types raised by the finance tracker.
"""

from decimal import DivisionByZero


class FinanceError(Exception):
    """Base class for all finance tracker errors."""


class MalformedInputError(FinanceError, ValueError):
    """
    Raised when imported or persisted data cannot be turned into records:
    unparseable dates or amounts, unknown transaction types, bad windows.
    """


class InvalidDivisorError(FinanceError, DivisionByZero):
    """Raised when a budget with a zero limit is asked for its utilization."""

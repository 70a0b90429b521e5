"""
Custom exceptions for ledger loading and export boundaries.

The aggregation core never raises for malformed row data; these are only
used where the ledger enters or leaves the system.
"""
from typing import Any, Dict, Optional


class BudgetDashboardException(Exception):
    """Base exception for all budget dashboard errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """
        Initialize exception.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class LedgerLoadError(BudgetDashboardException):
    """Raised when the ledger source cannot be fetched or read."""
    pass


class LedgerFormatError(BudgetDashboardException):
    """Raised when the ledger payload is not a JSON array of objects."""
    pass


class DataNotFoundError(BudgetDashboardException):
    """Raised when the ledger file does not exist."""
    pass


class ExportError(BudgetDashboardException):
    """Raised when Excel export fails."""
    pass


class ConfigurationError(BudgetDashboardException):
    """Raised when configuration is invalid."""
    pass

"""
============================================================================
Amount Engine - Error Codes and Exceptions
============================================================================

Every failure raised by the engine carries a bracketed error code so that
callers (API handlers, workers, the CLI) can map it to a response without
parsing free text.

ERROR CODES:
    - AMT-DEC-001: Invalid decimal format
    - AMT-DEC-002: Division by zero
    - AMT-DEC-003: Ledger amount out of range
    - AMT-CFG-001: Invalid engine configuration

============================================================================
"""

from typing import Optional


class DecimalErrorCode:
    """Engine error codes for audit logging."""
    INVALID_FORMAT = "AMT-DEC-001"
    DIVISION_BY_ZERO = "AMT-DEC-002"
    LEDGER_OUT_OF_RANGE = "AMT-DEC-003"
    CONFIG_INVALID = "AMT-CFG-001"


class AmountEngineError(Exception):
    """
    Base class for all amount engine failures.

    Attributes:
        error_code: Bracketed code from DecimalErrorCode
        message: Human-readable error message
    """

    error_code = "AMT-000"

    def __init__(self, message: str, error_code: Optional[str] = None):
        if error_code is not None:
            self.error_code = error_code
        self.message = message
        super().__init__(f"[{self.error_code}] {message}")


class InvalidDecimalFormat(AmountEngineError, ValueError):
    """Input does not match the decimal grammar."""

    error_code = DecimalErrorCode.INVALID_FORMAT


class DivisionByZero(AmountEngineError, ZeroDivisionError):
    """Divisor magnitude is exactly zero."""

    error_code = DecimalErrorCode.DIVISION_BY_ZERO


class LedgerAmountOutOfRange(AmountEngineError, ValueError):
    """Amount cannot be represented as a 64-bit ledger integer."""

    error_code = DecimalErrorCode.LEDGER_OUT_OF_RANGE


class EngineConfigurationError(AmountEngineError):
    """
    Raised when engine configuration is invalid.

    Raised on load so that a misconfigured process fails at startup rather
    than producing amounts at an unexpected precision.
    """

    error_code = DecimalErrorCode.CONFIG_INVALID

"""
============================================================================
Amount Engine - Ledger Units
============================================================================

The ledger stores every amount as a signed 64-bit integer count of
0.0000001 units. This module converts between canonical decimal strings
and those integers.

    units = amount * 10^7,   0 <= units <= 2^63 - 1
    maximum amount = 922337203685.4775807

ERROR CODES:
    - AMT-DEC-001: Invalid decimal format
    - AMT-DEC-003: Ledger amount out of range

============================================================================
"""

from typing import Optional
import logging
import re

from amount_engine.errors import (
    DecimalErrorCode,
    InvalidDecimalFormat,
    LedgerAmountOutOfRange,
)
from amount_engine.scaled_decimal import (
    MAX_SCALE,
    DecimalInput,
    format_scaled,
    parse,
)

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

LEDGER_UNITS_PER_WHOLE = 10 ** MAX_SCALE

# Largest signed 64-bit integer
MAX_LEDGER_UNITS = 2 ** 63 - 1

MAX_LEDGER_AMOUNT = format_scaled(MAX_LEDGER_UNITS, MAX_SCALE)

# Payment amounts: unsigned, at most 7 fractional digits, no truncation
PAYMENT_AMOUNT_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]{1,7})?")


def _out_of_range(detail: str, correlation_id: Optional[str]) -> LedgerAmountOutOfRange:
    logger.error(
        f"[{DecimalErrorCode.LEDGER_OUT_OF_RANGE}] Ledger amount out of range | "
        f"{detail} | correlation_id={correlation_id}"
    )
    return LedgerAmountOutOfRange(f"Ledger amount out of range: {detail}")


def to_ledger_units(amount: DecimalInput, correlation_id: Optional[str] = None) -> int:
    """
    Convert a decimal amount to integer ledger units.

    Fractional digits past the 7th are truncated, both by parse() and for
    a ScaledDecimal passed in with a larger scale.

    Examples:
        >>> to_ledger_units("1.5")
        15000000

    Raises:
        InvalidDecimalFormat: If the amount is malformed (AMT-DEC-001)
        LedgerAmountOutOfRange: If the amount is negative or above
            MAX_LEDGER_AMOUNT (AMT-DEC-003)
    """
    parsed = parse(amount)
    if parsed.is_negative():
        raise _out_of_range(f"amount={amount}", correlation_id)

    # Non-negative, so floor division truncates a scale above 7
    units = parsed.magnitude * LEDGER_UNITS_PER_WHOLE // 10 ** parsed.scale
    if units > MAX_LEDGER_UNITS:
        raise _out_of_range(f"amount={amount}", correlation_id)
    return units


def from_ledger_units(units: int, correlation_id: Optional[str] = None) -> str:
    """
    Convert integer ledger units to a canonical decimal string.

    Examples:
        >>> from_ledger_units(15000000)
        '1.5'

    Raises:
        LedgerAmountOutOfRange: If units is not an int in
            [0, MAX_LEDGER_UNITS] (AMT-DEC-003)
    """
    if isinstance(units, bool) or not isinstance(units, int):
        raise _out_of_range(f"units type={type(units).__name__}", correlation_id)
    if not 0 <= units <= MAX_LEDGER_UNITS:
        raise _out_of_range(f"units={units}", correlation_id)
    return format_scaled(units, MAX_SCALE)


def validate_ledger_amount(
    amount: str,
    allow_zero: bool = False,
    correlation_id: Optional[str] = None
) -> str:
    """
    Strict check of a payment amount before it is submitted to the ledger.

    Unlike parse(), this rejects a sign and rejects more than 7 fractional
    digits instead of truncating them.

    Args:
        amount: Amount text
        allow_zero: Accept "0" (default: False)
        correlation_id: Audit trail identifier

    Returns:
        Canonical amount string

    Raises:
        InvalidDecimalFormat: If the text is not an unsigned amount with
            at most 7 fractional digits (AMT-DEC-001)
        LedgerAmountOutOfRange: If the amount is zero (and not allowed) or
            above MAX_LEDGER_AMOUNT (AMT-DEC-003)
    """
    text = amount.strip() if isinstance(amount, str) else None
    if text is None or PAYMENT_AMOUNT_PATTERN.fullmatch(text) is None:
        logger.error(
            f"[{DecimalErrorCode.INVALID_FORMAT}] Invalid amount format | "
            f"amount={amount!r} | correlation_id={correlation_id}"
        )
        raise InvalidDecimalFormat(f"Invalid amount format: {amount!r}")

    units = to_ledger_units(text, correlation_id)
    if units == 0 and not allow_zero:
        raise _out_of_range(f"amount={amount} must be positive", correlation_id)

    return format_scaled(units, MAX_SCALE)

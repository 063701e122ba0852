"""
============================================================================
Amount Engine - Decimal Engine
============================================================================

Exact fixed-point arithmetic over canonical decimal strings.

    add / subtract   align to max(scale_a, scale_b), then combine
    multiply         scale = scale_a + scale_b, full product kept
    divide           truncated toward zero at `precision` digits
    compare          -1 / 0 / 1 after alignment

FEE CONTRACTS:
    apply_fee_total   = amount * (1 + fee_percent / 100)
    apply_fee_amount  = amount * fee_percent / 100
Both are computed exactly and then truncated toward zero, never rounded.

ERROR CODES:
    - AMT-DEC-001: Invalid decimal format (raised by parse)
    - AMT-DEC-002: Division by zero

============================================================================
"""

from typing import Optional
import logging

from amount_engine.config import (
    MAX_CONFIG_PRECISION,
    DecimalEngineConfig,
    get_engine_config,
)
from amount_engine.errors import DecimalErrorCode, DivisionByZero
from amount_engine.scaled_decimal import (
    DecimalInput,
    ScaledDecimal,
    align,
    format_scaled,
    parse,
)

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Percent denominator for fee operations
HUNDRED = 100


def _truncated_quotient(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero (Python's // floors)."""
    quotient = abs(numerator) // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        return -quotient
    return quotient


def _check_precision(precision: int) -> None:
    if isinstance(precision, bool) or not isinstance(precision, int):
        raise TypeError(f"precision must be int, got {type(precision).__name__}")
    if not 0 <= precision <= MAX_CONFIG_PRECISION:
        raise ValueError(
            f"precision must be between 0 and {MAX_CONFIG_PRECISION}, got {precision}"
        )


# =============================================================================
# DecimalEngine Class
# =============================================================================

class DecimalEngine:
    """
    Fixed-point decimal engine for ledger amounts.

    Stateless apart from its configuration; one instance can be shared
    across threads.

    Example Usage:
        engine = DecimalEngine()

        engine.add("0.1", "0.2")                 # "0.3"
        engine.divide("10", "3")                 # "3.3333333"
        engine.apply_fee_total("100", "1.5")     # "101.5"
        engine.apply_fee_amount("100", "1.5")    # "1.5"
    """

    def __init__(self, config: Optional[DecimalEngineConfig] = None):
        self.config = config if config is not None else DecimalEngineConfig()

    def _log(self, op: str, result: str, correlation_id: Optional[str], **operands) -> None:
        details = " | ".join(f"{k}={v}" for k, v in operands.items())
        logger.debug(
            f"[DECIMAL-ENGINE] {op} | {details} | result={result} | "
            f"correlation_id={correlation_id}"
        )

    def normalize(
        self,
        value: DecimalInput,
        correlation_id: Optional[str] = None
    ) -> str:
        """
        Canonical string of a decimal input.

        Examples:
            >>> DecimalEngine().normalize("  123.4500 ")
            '123.45'
        """
        result = str(parse(value))
        self._log("normalize", result, correlation_id, value=value)
        return result

    def add(
        self,
        a: DecimalInput,
        b: DecimalInput,
        correlation_id: Optional[str] = None
    ) -> str:
        ma, mb, scale = align(parse(a), parse(b))
        result = format_scaled(ma + mb, scale)
        self._log("add", result, correlation_id, a=a, b=b)
        return result

    def subtract(
        self,
        a: DecimalInput,
        b: DecimalInput,
        correlation_id: Optional[str] = None
    ) -> str:
        ma, mb, scale = align(parse(a), parse(b))
        result = format_scaled(ma - mb, scale)
        self._log("subtract", result, correlation_id, a=a, b=b)
        return result

    def multiply(
        self,
        a: DecimalInput,
        b: DecimalInput,
        correlation_id: Optional[str] = None
    ) -> str:
        """
        Exact product; the result scale is the sum of the operand scales.
        """
        x, y = parse(a), parse(b)
        result = format_scaled(x.magnitude * y.magnitude, x.scale + y.scale)
        self._log("multiply", result, correlation_id, a=a, b=b)
        return result

    def divide(
        self,
        a: DecimalInput,
        b: DecimalInput,
        precision: Optional[int] = None,
        correlation_id: Optional[str] = None
    ) -> str:
        """
        Divide a by b, truncating toward zero at `precision` digits.

        Args:
            a: Dividend
            b: Divisor
            precision: Fractional digits to keep
                (default: config.division_precision, normally 7)
            correlation_id: Audit trail identifier

        Returns:
            Canonical quotient string

        Raises:
            InvalidDecimalFormat: If an operand is malformed (AMT-DEC-001)
            DivisionByZero: If the divisor is zero (AMT-DEC-002)
            ValueError: If precision is outside 0..MAX_CONFIG_PRECISION
        """
        if precision is None:
            precision = self.config.division_precision
        _check_precision(precision)

        dividend, divisor = parse(a), parse(b)
        if divisor.is_zero():
            logger.error(
                f"[{DecimalErrorCode.DIVISION_BY_ZERO}] Division by zero | "
                f"a={a} | b={b} | correlation_id={correlation_id}"
            )
            raise DivisionByZero(f"Division by zero: {a} / {b}")

        # a / b * 10^p  ==  ma * 10^sb * 10^p / (mb * 10^sa)
        magnitude = _truncated_quotient(
            dividend.magnitude * 10 ** (divisor.scale + precision),
            divisor.magnitude * 10 ** dividend.scale,
        )
        result = format_scaled(magnitude, precision)
        self._log("divide", result, correlation_id, a=a, b=b, precision=precision)
        return result

    def compare(
        self,
        a: DecimalInput,
        b: DecimalInput,
        correlation_id: Optional[str] = None
    ) -> int:
        """
        Three-way comparison.

        Returns:
            -1 if a < b, 0 if a == b, 1 if a > b
        """
        ma, mb, _ = align(parse(a), parse(b))
        result = (ma > mb) - (ma < mb)
        self._log("compare", str(result), correlation_id, a=a, b=b)
        return result

    def apply_fee_total(
        self,
        amount: DecimalInput,
        fee_percent: DecimalInput,
        correlation_id: Optional[str] = None
    ) -> str:
        """
        Gross amount owed including a percentage fee.

        total = amount * (1 + fee_percent / 100), truncated toward zero at
        config.fee_precision digits.

        Examples:
            >>> DecimalEngine().apply_fee_total("100", "1.5")
            '101.5'
        """
        base, fee = parse(amount), parse(fee_percent)
        # amount * (100 + fee) / 100, with fee's scale folded into the 100
        factor = HUNDRED * 10 ** fee.scale + fee.magnitude
        result = self._apply_percent(
            ScaledDecimal(base.magnitude * factor, base.scale + fee.scale)
        )
        self._log(
            "apply_fee_total", result, correlation_id,
            amount=amount, fee_percent=fee_percent,
        )
        return result

    def apply_fee_amount(
        self,
        amount: DecimalInput,
        fee_percent: DecimalInput,
        correlation_id: Optional[str] = None
    ) -> str:
        """
        The fee alone: amount * fee_percent / 100, truncated toward zero at
        config.fee_precision digits.

        Examples:
            >>> DecimalEngine().apply_fee_amount("1000", "2.5")
            '25'
        """
        base, fee = parse(amount), parse(fee_percent)
        result = self._apply_percent(
            ScaledDecimal(base.magnitude * fee.magnitude, base.scale + fee.scale)
        )
        self._log(
            "apply_fee_amount", result, correlation_id,
            amount=amount, fee_percent=fee_percent,
        )
        return result

    def _apply_percent(self, product: ScaledDecimal) -> str:
        """Divide an exact product by 100 under the division truncation policy."""
        precision = self.config.fee_precision
        _check_precision(precision)
        magnitude = _truncated_quotient(
            product.magnitude * 10 ** precision,
            HUNDRED * 10 ** product.scale,
        )
        return format_scaled(magnitude, precision)


# =============================================================================
# Module-level convenience functions
# =============================================================================

_engine = DecimalEngine()


def get_decimal_engine() -> DecimalEngine:
    """
    Engine bound to the environment-driven configuration.

    Raises:
        EngineConfigurationError: If configuration is invalid (AMT-CFG-001)
    """
    return DecimalEngine(get_engine_config())


def normalize(value: DecimalInput, correlation_id: Optional[str] = None) -> str:
    """Module-level convenience function for canonical normalization."""
    return _engine.normalize(value, correlation_id)


def add(a: DecimalInput, b: DecimalInput, correlation_id: Optional[str] = None) -> str:
    """Module-level convenience function for addition."""
    return _engine.add(a, b, correlation_id)


def subtract(a: DecimalInput, b: DecimalInput, correlation_id: Optional[str] = None) -> str:
    """Module-level convenience function for subtraction."""
    return _engine.subtract(a, b, correlation_id)


def multiply(a: DecimalInput, b: DecimalInput, correlation_id: Optional[str] = None) -> str:
    """Module-level convenience function for multiplication."""
    return _engine.multiply(a, b, correlation_id)


def divide(
    a: DecimalInput,
    b: DecimalInput,
    precision: int = 7,
    correlation_id: Optional[str] = None
) -> str:
    """Module-level convenience function for truncating division."""
    return _engine.divide(a, b, precision, correlation_id)


def compare(a: DecimalInput, b: DecimalInput, correlation_id: Optional[str] = None) -> int:
    """Module-level convenience function for three-way comparison."""
    return _engine.compare(a, b, correlation_id)


def apply_fee_total(
    amount: DecimalInput,
    fee_percent: DecimalInput,
    correlation_id: Optional[str] = None
) -> str:
    """Module-level convenience function for the fee-inclusive total."""
    return _engine.apply_fee_total(amount, fee_percent, correlation_id)


def apply_fee_amount(
    amount: DecimalInput,
    fee_percent: DecimalInput,
    correlation_id: Optional[str] = None
) -> str:
    """Module-level convenience function for the fee amount alone."""
    return _engine.apply_fee_amount(amount, fee_percent, correlation_id)

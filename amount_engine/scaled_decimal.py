"""
============================================================================
Amount Engine - Scaled Decimal
============================================================================

Fixed-point representation of a ledger amount as an integer magnitude and
a count of implied fractional digits:

    value = magnitude / 10 ** scale

Parsing caps the scale at MAX_SCALE (7, one ledger unit = 0.0000001).
Digits past the 7th fractional position are truncated, never rounded.

All arithmetic on ScaledDecimal is plain Python int arithmetic; the
thread-local decimal context is never consulted.

ERROR CODES:
    - AMT-DEC-001: Invalid decimal format

============================================================================
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple, Union
import logging
import re

from amount_engine.errors import DecimalErrorCode, InvalidDecimalFormat

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Maximum fractional digits kept by parse (ledger convention)
MAX_SCALE = 7

# Optional minus, at least one digit, optional point followed by digits
DECIMAL_PATTERN = re.compile(r"(-?)([0-9]+)(?:\.([0-9]+))?")


# =============================================================================
# ScaledDecimal
# =============================================================================

@dataclass(frozen=True)
class ScaledDecimal:
    """
    Immutable scaled-integer decimal.

    Attributes:
        magnitude: Signed integer value before the scale is applied
        scale: Number of implied fractional digits (non-negative)

    Equality is field by field, so ScaledDecimal(550, 2) != ScaledDecimal(55, 1)
    although both are 5.5. Compare values with align() or
    DecimalEngine.compare().
    """

    magnitude: int
    scale: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.magnitude, bool) or not isinstance(self.magnitude, int):
            raise TypeError(
                f"magnitude must be int, got {type(self.magnitude).__name__}"
            )
        if isinstance(self.scale, bool) or not isinstance(self.scale, int):
            raise TypeError(f"scale must be int, got {type(self.scale).__name__}")
        if self.scale < 0:
            raise ValueError(f"scale must be non-negative, got {self.scale}")

    def is_zero(self) -> bool:
        return self.magnitude == 0

    def is_negative(self) -> bool:
        return self.magnitude < 0

    def rescale(self, scale: int) -> "ScaledDecimal":
        """
        Return the same value at a higher or equal scale.

        Raises:
            ValueError: If scale is lower than the current one, since that
                would drop digits
        """
        if scale < self.scale:
            raise ValueError(
                f"cannot rescale from {self.scale} down to {scale} without truncation"
            )
        return ScaledDecimal(self.magnitude * 10 ** (scale - self.scale), scale)

    def __str__(self) -> str:
        return format_scaled(self.magnitude, self.scale)


DecimalInput = Union[str, int, Decimal, float, ScaledDecimal]


# =============================================================================
# Parsing
# =============================================================================

def _to_text(value: DecimalInput) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        raise TypeError("bool is not a decimal amount")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Decimal):
        # Plain notation; exponent forms like 1E+2 would fail the grammar
        return format(value, "f")
    if isinstance(value, float):
        return str(value)
    raise TypeError(f"unsupported amount type {type(value).__name__}")


def parse(value: DecimalInput) -> ScaledDecimal:
    """
    Parse a decimal amount into a ScaledDecimal.

    The text is trimmed of surrounding whitespace and must match
    ``-?[0-9]+(\\.[0-9]+)?``. Fractional digits beyond MAX_SCALE are
    truncated.

    Args:
        value: Decimal string, int, Decimal, float or ScaledDecimal

    Returns:
        Parsed ScaledDecimal (an existing ScaledDecimal is returned as is)

    Raises:
        InvalidDecimalFormat: If the input is not a valid decimal (AMT-DEC-001)
    """
    if isinstance(value, ScaledDecimal):
        return value

    try:
        text = _to_text(value).strip()
    except TypeError as e:
        logger.error(
            f"[{DecimalErrorCode.INVALID_FORMAT}] Invalid decimal format | "
            f"type={type(value).__name__} | error={e}"
        )
        raise InvalidDecimalFormat(f"Invalid decimal format: {e}") from e

    match = DECIMAL_PATTERN.fullmatch(text)
    if match is None:
        logger.error(
            f"[{DecimalErrorCode.INVALID_FORMAT}] Invalid decimal format | "
            f"value={value!r}"
        )
        raise InvalidDecimalFormat(f"Invalid decimal format: {value!r}")

    sign, whole, fraction = match.groups()
    fraction = (fraction or "")[:MAX_SCALE]

    magnitude = int(whole + fraction)
    if sign:
        magnitude = -magnitude

    return ScaledDecimal(magnitude, len(fraction))


def align(a: ScaledDecimal, b: ScaledDecimal) -> Tuple[int, int, int]:
    """
    Bring two values to a common scale.

    Returns:
        (magnitude_a, magnitude_b, scale) at max(a.scale, b.scale)
    """
    scale = max(a.scale, b.scale)
    return a.rescale(scale).magnitude, b.rescale(scale).magnitude, scale


# =============================================================================
# Canonical Formatting
# =============================================================================

def format_scaled(magnitude: int, scale: int) -> str:
    """
    Render (magnitude, scale) in canonical form.

    Canonical form has no trailing fractional zeros, no trailing point, and
    never a negative zero.

    Examples:
        >>> format_scaled(1230, 3)
        '1.23'
        >>> format_scaled(-5, 1)
        '-0.5'
        >>> format_scaled(1000, 3)
        '1'
    """
    if scale < 0:
        raise ValueError(f"scale must be non-negative, got {scale}")
    if scale == 0:
        return str(magnitude)

    sign = "-" if magnitude < 0 else ""
    whole, fraction = divmod(abs(magnitude), 10 ** scale)

    fraction_text = str(fraction).rjust(scale, "0").rstrip("0")
    if not fraction_text:
        return f"{sign}{whole}" if whole else "0"
    return f"{sign}{whole}.{fraction_text}"

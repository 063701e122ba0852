"""
============================================================================
Amount Engine - Fixed-Point Decimal Arithmetic for Ledger Amounts
============================================================================

Exact, deterministic arithmetic on decimal strings with a maximum of 7
fractional digits (the ledger stores amounts as 64-bit integers of
0.0000001 units).

- Parsing and canonical formatting (ScaledDecimal)
- add / subtract / multiply / divide / compare
- Fee-inclusive totals and bare fee amounts
- Conversion to and from 64-bit ledger units

Every operation is a pure function of its inputs. Division and fees
truncate toward zero; nothing is ever rounded.

============================================================================
"""

from amount_engine.errors import (
    AmountEngineError,
    DecimalErrorCode,
    DivisionByZero,
    EngineConfigurationError,
    InvalidDecimalFormat,
    LedgerAmountOutOfRange,
)

from amount_engine.scaled_decimal import (
    MAX_SCALE,
    ScaledDecimal,
    align,
    format_scaled,
    parse,
)

from amount_engine.config import (
    DecimalEngineConfig,
    get_engine_config,
    reset_engine_config,
)

from amount_engine.decimal_engine import (
    DecimalEngine,
    add,
    apply_fee_amount,
    apply_fee_total,
    compare,
    divide,
    get_decimal_engine,
    multiply,
    normalize,
    subtract,
)

from amount_engine.ledger_units import (
    LEDGER_UNITS_PER_WHOLE,
    MAX_LEDGER_AMOUNT,
    MAX_LEDGER_UNITS,
    from_ledger_units,
    to_ledger_units,
    validate_ledger_amount,
)

__version__ = "1.0.0"

__all__ = [
    # Errors
    "AmountEngineError",
    "DecimalErrorCode",
    "DivisionByZero",
    "EngineConfigurationError",
    "InvalidDecimalFormat",
    "LedgerAmountOutOfRange",
    # Representation
    "MAX_SCALE",
    "ScaledDecimal",
    "align",
    "format_scaled",
    "parse",
    # Configuration
    "DecimalEngineConfig",
    "get_engine_config",
    "reset_engine_config",
    # Engine
    "DecimalEngine",
    "add",
    "apply_fee_amount",
    "apply_fee_total",
    "compare",
    "divide",
    "get_decimal_engine",
    "multiply",
    "normalize",
    "subtract",
    # Ledger units
    "LEDGER_UNITS_PER_WHOLE",
    "MAX_LEDGER_AMOUNT",
    "MAX_LEDGER_UNITS",
    "from_ledger_units",
    "to_ledger_units",
    "validate_ledger_amount",
]

"""
============================================================================
Amount Engine - Configuration
============================================================================

Configuration management for the decimal engine:
- Environment variable parsing with type safety
- Default values matching the 7-digit ledger convention
- Fail-closed validation of out-of-range precision (AMT-CFG-001)

ENVIRONMENT VARIABLES:
    - AMOUNT_ENGINE_DIVISION_PRECISION: Default divide() precision (default: 7)
    - AMOUNT_ENGINE_FEE_PRECISION: Fee truncation precision (default: 7)

ERROR CODES:
    - AMT-CFG-001: Invalid engine configuration

============================================================================
"""

from dataclasses import dataclass
from typing import List, Optional
import logging
import os

from amount_engine.errors import DecimalErrorCode, EngineConfigurationError
from amount_engine.scaled_decimal import MAX_SCALE

# Configure module logger
logger = logging.getLogger(__name__)


# =============================================================================
# Default Values
# =============================================================================

# Default: quotients carry the full ledger precision
DEFAULT_DIVISION_PRECISION = MAX_SCALE

# Default: fees truncate to the full ledger precision
DEFAULT_FEE_PRECISION = MAX_SCALE

# Upper bound accepted for either precision setting
MAX_CONFIG_PRECISION = 18


# =============================================================================
# DecimalEngineConfig Class
# =============================================================================

@dataclass
class DecimalEngineConfig:
    """
    Decimal engine configuration.

    Attributes:
        division_precision: Fractional digits kept by divide() when the
            caller passes no precision
        fee_precision: Fractional digits kept by the fee operations
    """

    division_precision: int = DEFAULT_DIVISION_PRECISION
    fee_precision: int = DEFAULT_FEE_PRECISION

    def validate(self) -> None:
        """
        Validate configuration.

        Raises:
            EngineConfigurationError: If a precision is outside
                [0, MAX_CONFIG_PRECISION] (AMT-CFG-001)
        """
        errors: List[str] = []

        for name, value in (
            ("AMOUNT_ENGINE_DIVISION_PRECISION", self.division_precision),
            ("AMOUNT_ENGINE_FEE_PRECISION", self.fee_precision),
        ):
            if not 0 <= value <= MAX_CONFIG_PRECISION:
                errors.append(
                    f"{name} must be between 0 and {MAX_CONFIG_PRECISION}, got: {value}"
                )

        if errors:
            error_msg = "Engine configuration validation failed: " + "; ".join(errors)
            logger.error(f"[{DecimalErrorCode.CONFIG_INVALID}] {error_msg}")
            raise EngineConfigurationError(error_msg)

        logger.info(
            f"[ENGINE-CONFIG] Configuration validated | "
            f"division_precision={self.division_precision} | "
            f"fee_precision={self.fee_precision}"
        )

    @classmethod
    def from_environment(cls, validate: bool = True) -> "DecimalEngineConfig":
        """
        Load configuration from environment variables.

        Unparseable values fall back to the default with a warning;
        parseable but out-of-range values fail validation.

        Args:
            validate: Whether to validate configuration after loading

        Returns:
            DecimalEngineConfig with values from environment

        Raises:
            EngineConfigurationError: If validation fails (AMT-CFG-001)
        """
        config = cls(
            division_precision=_read_int(
                "AMOUNT_ENGINE_DIVISION_PRECISION", DEFAULT_DIVISION_PRECISION
            ),
            fee_precision=_read_int(
                "AMOUNT_ENGINE_FEE_PRECISION", DEFAULT_FEE_PRECISION
            ),
        )

        logger.info(
            f"[ENGINE-CONFIG] Loading configuration from environment | "
            f"AMOUNT_ENGINE_DIVISION_PRECISION={config.division_precision} | "
            f"AMOUNT_ENGINE_FEE_PRECISION={config.fee_precision}"
        )

        if validate:
            config.validate()

        return config

    def to_dict(self) -> dict:
        return {
            "division_precision": self.division_precision,
            "fee_precision": self.fee_precision,
        }


def _read_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning(
            f"[ENGINE-CONFIG] Invalid {name} value: {raw}, using default: {default}"
        )
        return default


# =============================================================================
# Module-Level Configuration Instance
# =============================================================================

# Global configuration instance (lazy-loaded)
_config_instance: Optional[DecimalEngineConfig] = None


def get_engine_config(validate: bool = True) -> DecimalEngineConfig:
    """
    Get the process-wide engine configuration, loading it from the
    environment on first access.

    Raises:
        EngineConfigurationError: If configuration is invalid (AMT-CFG-001)
    """
    global _config_instance

    if _config_instance is None:
        _config_instance = DecimalEngineConfig.from_environment(validate=validate)

    return _config_instance


def reset_engine_config() -> None:
    """Clear the process-wide configuration (used by tests)."""
    global _config_instance
    _config_instance = None
    logger.debug("[ENGINE-CONFIG] Configuration instance reset")

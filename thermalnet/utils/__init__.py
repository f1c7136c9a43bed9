"""Utility modules."""

from .logging_config import (
    setup_logging,
    ensure_logging,
    ThermalnetFormatter,
    JsonLineFormatter,
)
from .validation import (
    validate_building_id,
    validate_hour,
    is_numeric,
    ValidationError,
    SchemaError,
    MissingFieldError,
)

__all__ = [
    # Logging
    "setup_logging",
    "ensure_logging",
    "ThermalnetFormatter",
    "JsonLineFormatter",
    # Validation
    "validate_building_id",
    "validate_hour",
    "is_numeric",
    "ValidationError",
    "SchemaError",
    "MissingFieldError",
]

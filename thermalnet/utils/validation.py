"""
Input validation utilities for thermalnet.

Provides the validation error types and checks for building ids,
hour numbers and numeric cell values.

Usage:
    from thermalnet.utils.validation import (
        validate_building_id,
        validate_hour,
        ValidationError,
    )

    number = validate_building_id("b_12")
    hour = validate_hour("12")
"""

import math
import re
from typing import Any, List, Optional
import logging

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str = "", suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field = field
        self.suggestions = suggestions or []


class SchemaError(ValidationError):
    """Raised when a source header does not match the expected building schema."""

    def __init__(self, message: str, missing_columns: Optional[List[str]] = None):
        super().__init__(
            message,
            field="columns",
            suggestions=["Check the simulation export includes every per-building column"],
        )
        self.missing_columns = missing_columns or []


class MissingFieldError(ValidationError):
    """Raised in strict mode when a numeric field is absent or non-numeric."""

    def __init__(self, message: str, field: str = "", hour: Any = None):
        super().__init__(message, field=field)
        self.hour = hour


BUILDING_ID_PATTERN = re.compile(r"^b_(?P<number>\d+)$")

# Column prefix used for schema discovery: b_<N>_<suffix>
BUILDING_COLUMN_PATTERN = re.compile(r"^b_(\d+)_")


def validate_building_id(building_id: str) -> int:
    """
    Validate a building identifier of form ``b_<N>``.

    Args:
        building_id: Identifier to validate

    Returns:
        The numeric index N

    Raises:
        ValidationError: If the identifier is malformed
    """
    match = BUILDING_ID_PATTERN.match(building_id or "")
    if not match:
        raise ValidationError(
            f"Invalid building id '{building_id}'",
            field="building_id",
            suggestions=["Building ids look like 'b_1', 'b_12'"],
        )
    return int(match.group("number"))


def validate_hour(hour: Any) -> int:
    """
    Coerce an hour number to int.

    Only the type is checked; range is not, since lookups for hours outside
    the dataset are answered with "not found".

    Raises:
        ValidationError: If hour is not an integer value
    """
    if isinstance(hour, bool):
        raise ValidationError(f"Hour must be an integer: got '{hour}'", field="hour")
    if isinstance(hour, int):
        return hour
    if isinstance(hour, float) and hour.is_integer():
        return int(hour)
    try:
        return int(str(hour).strip())
    except (ValueError, TypeError):
        raise ValidationError(
            f"Hour must be an integer: got '{hour}'",
            field="hour",
            suggestions=["Hours are 1-based, e.g. 1..8760 for a full year"],
        )


def is_numeric(value: Any) -> bool:
    """True for real numbers that are not booleans and not NaN."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)

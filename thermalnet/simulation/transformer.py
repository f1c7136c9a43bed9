"""
Hourly record transformer.

Turns one raw source row into an HourSnapshot: outdoor temperature, one
BuildingSnapshot per roster entry (with its efficiency comparison) and the
hour's SystemMetrics.

Load, COP and electric fields that are absent or non-numeric are handled by
MissingFieldPolicy: DEFAULT_ZERO substitutes 0.0 so a malformed cell does not
abort the rest of the year; FAIL raises MissingFieldError. Temperatures are
copied verbatim.
"""

import logging
from typing import Any, Dict, Sequence

from ..core.models import (
    BuildingSnapshot,
    CandidateSystem,
    HourSnapshot,
    MissingFieldPolicy,
    RawRow,
    Temperature,
)
from ..ingest.schema import column_name
from ..utils.validation import MissingFieldError, is_numeric
from .aggregator import calculate_system_metrics
from .efficiency import calculate_building_efficiency

logger = logging.getLogger(__name__)


class HourlyRecordTransformer:
    """
    Transform raw rows for a fixed roster.

    Usage:
        transformer = HourlyRecordTransformer(roster)
        snapshots = [transformer.transform(row) for row in rows]
        if transformer.defaulted_fields:
            ...
    """

    def __init__(
        self,
        roster: Sequence[str],
        policy: MissingFieldPolicy = MissingFieldPolicy.DEFAULT_ZERO,
    ):
        self.roster = list(roster)
        self.policy = MissingFieldPolicy(policy)
        # column name -> number of hours it was defaulted
        self.defaulted_fields: Dict[str, int] = {}

    def transform(self, row: RawRow) -> HourSnapshot:
        hour = row.get("hour")

        buildings = {}
        for building_id in self.roster:
            buildings[building_id] = self._building(row, building_id, hour)

        return HourSnapshot(
            hour=hour,
            outdoor_temp=Temperature(
                celsius=row.get("outdoor_air_temp_c"),
                fahrenheit=row.get("outdoor_air_temp_f"),
            ),
            buildings=buildings,
            system_metrics=calculate_system_metrics(buildings),
        )

    def _building(self, row: RawRow, building_id: str, hour: Any) -> BuildingSnapshot:
        def number(suffix: str) -> float:
            return self._numeric(row, column_name(building_id, suffix), building_id, hour)

        geo = CandidateSystem(cop=number("geo_cop"), electric_w=number("geo_electric_w"))
        air = CandidateSystem(cop=number("air_cop"), electric_w=number("air_electric_w"))

        return BuildingSnapshot(
            id=building_id,
            inlet_temp=Temperature(
                celsius=row.get(column_name(building_id, "inlet_temp_c")),
                fahrenheit=row.get(column_name(building_id, "inlet_temp_f")),
            ),
            load=number("load_w"),
            geo=geo,
            air=air,
            efficiency=calculate_building_efficiency(geo, air),
        )

    def _numeric(self, row: RawRow, column: str, building_id: str, hour: Any) -> float:
        value = row.get(column)
        if is_numeric(value):
            return value

        if self.policy is MissingFieldPolicy.FAIL:
            state = "missing" if value is None else f"non-numeric ({value!r})"
            raise MissingFieldError(
                f"Hour {hour}: column '{column}' is {state}",
                field=column,
                hour=hour,
            )

        logger.debug(
            f"Defaulting {column} to 0 (got {value!r})",
            extra={"hour": hour, "building_id": building_id},
        )
        self.defaulted_fields[column] = self.defaulted_fields.get(column, 0) + 1
        return 0.0


def transform_row(
    row: RawRow,
    roster: Sequence[str],
    policy: MissingFieldPolicy = MissingFieldPolicy.DEFAULT_ZERO,
) -> HourSnapshot:
    """
    Convenience function to transform a single row.

    Args:
        row: Raw source row
        roster: Building ids in iteration order
        policy: Missing-field handling

    Returns:
        HourSnapshot for the row
    """
    return HourlyRecordTransformer(roster, policy).transform(row)

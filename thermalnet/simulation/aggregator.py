"""
System aggregator - reduce every building in an hour to system-wide totals.

Loads keep their sign: heating (negative) accumulates into heating_load,
cooling (positive) into cooling_load. total_load is the sum of magnitudes
and is what the average COPs are computed from.
"""

from typing import Iterable, Mapping, Union

from ..core.models import BuildingSnapshot, SystemMetrics
from .efficiency import efficiency_gain_percent, ieee_divide


def calculate_system_metrics(
    buildings: Union[Mapping[str, BuildingSnapshot], Iterable[BuildingSnapshot]],
) -> SystemMetrics:
    """
    Aggregate one hour's buildings.

    Args:
        buildings: Mapping of id -> BuildingSnapshot, or the snapshots themselves

    Returns:
        SystemMetrics for the hour
    """
    if isinstance(buildings, Mapping):
        buildings = buildings.values()
    buildings = list(buildings)

    total_geo_electric = sum(b.geo.electric_w for b in buildings)
    total_air_electric = sum(b.air.electric_w for b in buildings)
    total_load = sum(abs(b.load) for b in buildings)

    heating_load = sum(b.load for b in buildings if b.load < 0)
    cooling_load = sum(b.load for b in buildings if b.load > 0)

    avg_geo_cop = ieee_divide(total_load, total_geo_electric)
    avg_air_cop = ieee_divide(total_load, total_air_electric)

    savings = total_air_electric - total_geo_electric

    return SystemMetrics(
        total_geo_electric=total_geo_electric,
        total_air_electric=total_air_electric,
        total_load=total_load,
        heating_load=heating_load,
        cooling_load=cooling_load,
        total_building_load=heating_load + cooling_load,
        avg_geo_cop=avg_geo_cop,
        avg_air_cop=avg_air_cop,
        system_efficiency_gain=efficiency_gain_percent(avg_geo_cop, avg_air_cop),
        total_energy_savings=savings,
        peak_demand_reduction=savings,
    )

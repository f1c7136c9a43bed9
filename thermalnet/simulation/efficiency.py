"""
Building efficiency calculator.

Compares the two candidate systems for one building in one hour:

    efficiency_gain_percent = (geo_cop - air_cop) / air_cop * 100
    energy_savings_w        = air_electric_w - geo_electric_w

Ratios follow IEEE-754 division: a zero denominator yields +/-inf, or nan
for 0/0, and the result is passed on unclamped. Display layers decide how
to show such values.
"""

import math

from ..core.models import BuildingEfficiency, CandidateSystem


def ieee_divide(numerator: float, denominator: float) -> float:
    """Float division that returns inf/nan instead of raising ZeroDivisionError."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        # Sign of a signed zero denominator matters: 1 / -0.0 == -inf
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def efficiency_gain_percent(geo_cop: float, air_cop: float) -> float:
    """Relative COP improvement of the network over the standalone baseline (%)."""
    return ieee_divide(geo_cop - air_cop, air_cop) * 100


def calculate_building_efficiency(geo: CandidateSystem, air: CandidateSystem) -> BuildingEfficiency:
    return BuildingEfficiency(
        geo_efficiency=geo.cop,
        air_efficiency=air.cop,
        efficiency_gain_percent=efficiency_gain_percent(geo.cop, air.cop),
        energy_savings_w=air.electric_w - geo.electric_w,
    )

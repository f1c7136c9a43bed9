"""
Network operating opportunities for a single hour.

- Load balance: when some buildings heat while others cool, the loop moves
  heat between them and pumping work drops.
- Demand response: value of curtailing heating load in enrolled buildings.
"""

from dataclasses import dataclass
from typing import Dict, Iterable

from ..core.models import HourSnapshot

DEFAULT_PUMP_EFFICIENCY = 0.85

# Enrolled in the demand response pilot: Res 1, Res 10, Res 31
DEFAULT_DR_ENROLLED = ("b_6", "b_15", "b_36")

# Share of heating load curtailable during an event, and $/kW per event
DR_CURTAILMENT_FRACTION = 0.1
DR_VALUE_PER_KW = 5.0


@dataclass(frozen=True)
class LoadBalance:
    heating_load_kw: float  # magnitude
    cooling_load_kw: float
    heating_buildings: int
    cooling_buildings: int
    balanced_load_kw: float
    estimated_pumping_savings_kw: float

    @property
    def has_optimization_opportunity(self) -> bool:
        return self.heating_buildings > 0 and self.cooling_buildings > 0

    def to_dict(self) -> Dict:
        return {
            "heatingLoadKW": self.heating_load_kw,
            "coolingLoadKW": self.cooling_load_kw,
            "heatingBuildings": self.heating_buildings,
            "coolingBuildings": self.cooling_buildings,
            "balancedLoadKW": self.balanced_load_kw,
            "estimatedPumpingSavingsKW": self.estimated_pumping_savings_kw,
            "hasOptimizationOpportunity": self.has_optimization_opportunity,
        }


@dataclass(frozen=True)
class DemandResponseValue:
    current_value: float
    potential_value: float
    enrolled_count: int
    total_buildings: int

    @property
    def additional_value(self) -> float:
        return self.potential_value - self.current_value

    @property
    def enrollment_percent(self) -> float:
        if not self.total_buildings:
            return 0.0
        return self.enrolled_count / self.total_buildings * 100

    def to_dict(self) -> Dict:
        return {
            "currentValue": self.current_value,
            "potentialValue": self.potential_value,
            "additionalValue": self.additional_value,
            "enrolledCount": self.enrolled_count,
            "totalBuildings": self.total_buildings,
            "enrollmentPercent": self.enrollment_percent,
        }


def calculate_load_balance(
    snapshot: HourSnapshot,
    pump_efficiency: float = DEFAULT_PUMP_EFFICIENCY,
) -> LoadBalance:
    heating = [b for b in snapshot.buildings.values() if b.load < 0]
    cooling = [b for b in snapshot.buildings.values() if b.load > 0]

    heating_kw = sum(abs(b.load) for b in heating) / 1000
    cooling_kw = sum(b.load for b in cooling) / 1000
    balanced = min(heating_kw, cooling_kw)

    return LoadBalance(
        heating_load_kw=heating_kw,
        cooling_load_kw=cooling_kw,
        heating_buildings=len(heating),
        cooling_buildings=len(cooling),
        balanced_load_kw=balanced,
        # Rough estimate: half of the pump losses on the balanced share
        estimated_pumping_savings_kw=balanced * (1 - pump_efficiency) * 0.5,
    )


def _dr_value(snapshot: HourSnapshot, building_ids: Iterable[str]) -> float:
    value = 0.0
    for building_id in building_ids:
        building = snapshot.buildings.get(building_id)
        if building is not None and building.load < 0:
            value += abs(building.load) / 1000 * DR_CURTAILMENT_FRACTION * DR_VALUE_PER_KW
    return value


def calculate_demand_response_value(
    snapshot: HourSnapshot,
    enrolled: Iterable[str] = DEFAULT_DR_ENROLLED,
) -> DemandResponseValue:
    """Demand response value of heating buildings: enrolled now vs. everyone enrolled."""
    enrolled = tuple(enrolled)
    return DemandResponseValue(
        current_value=_dr_value(snapshot, enrolled),
        potential_value=_dr_value(snapshot, snapshot.buildings.keys()),
        enrolled_count=len(enrolled),
        total_buildings=len(snapshot.buildings),
    )

"""
Data models for the hourly thermal network comparison.

One HourSnapshot per simulated hour holds every building's readings for the
two candidate systems (shared geothermal network "geo" vs. standalone
air-source heat pumps "air") plus the system-wide aggregate. Snapshots are
created once at load time and never mutated.

Load sign convention: negative = heating, positive = cooling.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional


# Raw source row: column name -> auto-typed cell value
RawRow = Dict[str, Any]

# Ordered building ids (b_1, b_2, ..., b_36)
BuildingRoster = List[str]


class MissingFieldPolicy(str, Enum):
    """What to do with absent or non-numeric load / COP / electric fields."""
    DEFAULT_ZERO = "default_zero"   # Substitute 0.0 and keep going
    FAIL = "fail"                   # Raise MissingFieldError


class BuildingType(str, Enum):
    """Role of a building on the network for a given hour."""
    HEAT_SINK = "heat_sink"         # Heating load, draws heat from the loop
    HEAT_SOURCE = "heat_source"     # Cooling (or idle), rejects heat to the loop


@dataclass(frozen=True)
class Temperature:
    celsius: Optional[float]
    fahrenheit: Optional[float]

    def to_dict(self) -> Dict:
        return {"celsius": self.celsius, "fahrenheit": self.fahrenheit}


@dataclass(frozen=True)
class CandidateSystem:
    """Efficiency and electrical draw of one candidate system for one building."""
    cop: float
    electric_w: float

    def to_dict(self) -> Dict:
        return {"cop": self.cop, "electricW": self.electric_w}


@dataclass(frozen=True)
class BuildingEfficiency:
    """Per-building comparison of the two candidates."""
    geo_efficiency: float
    air_efficiency: float
    efficiency_gain_percent: float  # inf/nan when air COP is 0
    energy_savings_w: float         # positive = network draws less

    def to_dict(self) -> Dict:
        return {
            "geoEfficiency": self.geo_efficiency,
            "airEfficiency": self.air_efficiency,
            "efficiencyGainPercent": self.efficiency_gain_percent,
            "energySavingsW": self.energy_savings_w,
        }


@dataclass(frozen=True)
class BuildingSnapshot:
    """One building in one hour."""
    id: str
    inlet_temp: Temperature
    load: float  # W, negative = heating, positive = cooling
    geo: CandidateSystem
    air: CandidateSystem
    efficiency: BuildingEfficiency

    @property
    def is_heating(self) -> bool:
        return self.load < 0

    @property
    def is_cooling(self) -> bool:
        return self.load > 0

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "inletTemp": self.inlet_temp.to_dict(),
            "load": self.load,
            "geo": self.geo.to_dict(),
            "air": self.air.to_dict(),
            "efficiency": self.efficiency.to_dict(),
        }


@dataclass(frozen=True)
class SystemMetrics:
    """System-wide aggregate of every building in an hour."""
    total_geo_electric: float
    total_air_electric: float
    total_load: float           # sum of |load|
    heating_load: float         # sum of negative loads (<= 0)
    cooling_load: float         # sum of positive loads (>= 0)
    total_building_load: float  # heating_load + cooling_load
    avg_geo_cop: float
    avg_air_cop: float
    system_efficiency_gain: float
    total_energy_savings: float
    # Same value as total_energy_savings; consumers address it by this name
    peak_demand_reduction: float

    def to_dict(self) -> Dict:
        return {
            "totalGeoElectric": self.total_geo_electric,
            "totalAirElectric": self.total_air_electric,
            "totalLoad": self.total_load,
            "totalBuildingLoad": self.total_building_load,
            "heatingLoad": self.heating_load,
            "coolingLoad": self.cooling_load,
            "avgGeoCOP": self.avg_geo_cop,
            "avgAirCOP": self.avg_air_cop,
            "systemEfficiencyGain": self.system_efficiency_gain,
            "totalEnergySavings": self.total_energy_savings,
            "peakDemandReduction": self.peak_demand_reduction,
        }


@dataclass(frozen=True)
class HourSnapshot:
    """Complete state of the network for one simulated hour."""
    hour: Any
    outdoor_temp: Temperature
    buildings: Mapping[str, BuildingSnapshot]
    system_metrics: SystemMetrics

    def __post_init__(self):
        # Freeze the mapping; insertion order (roster order) is kept
        if not isinstance(self.buildings, MappingProxyType):
            object.__setattr__(self, "buildings", MappingProxyType(dict(self.buildings)))

    def to_dict(self) -> Dict:
        return {
            "hour": self.hour,
            "outdoorTemp": self.outdoor_temp.to_dict(),
            "buildings": {bid: b.to_dict() for bid, b in self.buildings.items()},
            "systemMetrics": self.system_metrics.to_dict(),
        }


@dataclass(frozen=True)
class TimeSeriesPoint:
    """Per-hour projection of SystemMetrics used for trend charts and reports."""
    hour: Any
    outdoor_temp_c: Optional[float]
    geo_total: float
    air_total: float
    savings: float
    geo_cop: float
    air_cop: float

    def to_dict(self) -> Dict:
        return {
            "hour": self.hour,
            "outdoorTemp": self.outdoor_temp_c,
            "geoTotal": self.geo_total,
            "airTotal": self.air_total,
            "savings": self.savings,
            "geoCOP": self.geo_cop,
            "airCOP": self.air_cop,
        }


@dataclass(frozen=True)
class BuildingSummary:
    """Flattened, presentation-ready view of one building in the current hour."""
    id: str
    name: str
    type: BuildingType
    temperature: Optional[float]
    load: float  # absolute
    geo_efficiency: float
    air_efficiency: float
    energy_savings: float
    efficiency_gain: float

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "temperature": self.temperature,
            "load": self.load,
            "geoEfficiency": self.geo_efficiency,
            "airEfficiency": self.air_efficiency,
            "energySavings": self.energy_savings,
            "efficiencyGain": self.efficiency_gain,
        }


@dataclass(frozen=True)
class AssetRecord:
    """A physical network asset (borefield) with capacity and financial figures."""
    id: str
    name: str
    type: str
    capacity: float           # W
    utilization: float        # %
    efficiency: float         # COP
    annual_savings: float     # $
    network_value: float      # $, annual savings with network effect multiplier
    payback_period: float     # years
    installation_cost: float  # $
    maintenance_cost: float   # $/yr
    ground_temp: float        # °F

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "capacity": self.capacity,
            "utilization": self.utilization,
            "efficiency": self.efficiency,
            "annualSavings": self.annual_savings,
            "networkValue": self.network_value,
            "paybackPeriod": self.payback_period,
            "installationCost": self.installation_cost,
            "maintenanceCost": self.maintenance_cost,
            "groundTemp": self.ground_temp,
        }

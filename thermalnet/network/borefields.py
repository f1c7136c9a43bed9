"""
Borefield assignment and capacity analytics.

Each building is served by one of three borefields. Combining that fixed
assignment with an hour's snapshot gives the signed thermal load each
borefield carries, its utilization against rated capacity and how much room
is left for new connections.

Building groups:
    borefield_1: b_16 .. b_36 (Res 11 - Res 31)
    borefield_2: b_1 .. b_3   (Fire Dept, Gulf, Corner Cabinet)
    borefield_3: b_4 .. b_15  (Public School, Housing Dept, Res 1 - Res 10)
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Tuple, Union

from ..core.config import Settings, settings as default_settings
from ..core.models import HourSnapshot
from ..ingest.schema import building_number
from ..simulation.efficiency import ieee_divide
from ..utils.validation import ValidationError

logger = logging.getLogger(__name__)


BOREFIELD_ASSIGNMENT: Dict[str, Tuple[str, ...]] = {
    "borefield_1": tuple(f"b_{n}" for n in range(16, 37)),
    "borefield_2": ("b_1", "b_2", "b_3"),
    "borefield_3": ("b_4", "b_5") + tuple(f"b_{n}" for n in range(6, 16)),
}

NAMED_BUILDINGS = {
    1: "Fire Dept",
    2: "Gulf",
    3: "Corner Cabinet",
    4: "Public School",
    5: "Housing Dept",
}

# Residential buildings are numbered from b_6 (Res 1)
FIRST_RESIDENTIAL = 6


@dataclass(frozen=True)
class NetworkEconomics:
    """
    Capacity and value assumptions for borefield projections.

    Class defaults match the Settings defaults; use ``from_settings`` to pick
    up a configured Settings instance.
    """
    capacity_kw: float = 440.0
    max_operating_fraction: float = 0.8
    kw_per_additional_building: float = 20.0
    energy_value_per_kw_elec: float = 15.0
    capacity_value_per_kw_elec: float = 250.0

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "NetworkEconomics":
        """Read economics from ``config`` (default: global settings) at call time."""
        config = config or default_settings
        return cls(
            capacity_kw=config.borefield_capacity_kw,
            max_operating_fraction=config.max_operating_fraction,
            kw_per_additional_building=config.kw_per_additional_building,
            energy_value_per_kw_elec=config.energy_value_per_kw_elec,
            capacity_value_per_kw_elec=config.capacity_value_per_kw_elec,
        )

    @property
    def value_per_kw_elec(self) -> float:
        return self.energy_value_per_kw_elec + self.capacity_value_per_kw_elec


@dataclass(frozen=True)
class BorefieldLoad:
    borefield_id: str
    current_load_kw: float  # signed: negative = net heating
    capacity_kw: float
    capacity_percent: float
    buildings_count: int

    def to_dict(self) -> Dict:
        return {
            "borefieldId": self.borefield_id,
            "currentLoadKW": self.current_load_kw,
            "capacityKW": self.capacity_kw,
            "capacityPercent": self.capacity_percent,
            "buildingsCount": self.buildings_count,
        }


@dataclass(frozen=True)
class BorefieldExpansion:
    borefield_id: str
    current_load_kw: float  # magnitude
    available_capacity_kw: float
    utilization_percent: float
    available_to_max_operating_kw: float
    additional_buildings: Union[int, float]  # float (inf/nan) only for degenerate economics
    current_asset_value: float
    potential_asset_value: float

    def to_dict(self) -> Dict:
        return {
            "borefieldId": self.borefield_id,
            "currentLoadKW": self.current_load_kw,
            "availableCapacityKW": self.available_capacity_kw,
            "utilizationPercent": self.utilization_percent,
            "availableToMaxOperatingKW": self.available_to_max_operating_kw,
            "additionalBuildings": self.additional_buildings,
            "currentAssetValue": self.current_asset_value,
            "potentialAssetValue": self.potential_asset_value,
        }


def borefield_for(building_id: str) -> Optional[str]:
    """Borefield serving a building, or None if it is not on the network map."""
    for borefield_id, members in BOREFIELD_ASSIGNMENT.items():
        if building_id in members:
            return borefield_id
    return None


def display_name(building_id: str) -> str:
    """Human-readable building name (``b_1`` -> 'Fire Dept', ``b_6`` -> 'Res 1')."""
    number = building_number(building_id)
    if number in NAMED_BUILDINGS:
        return NAMED_BUILDINGS[number]
    if number >= FIRST_RESIDENTIAL:
        return f"Res {number - FIRST_RESIDENTIAL + 1}"
    return f"Building {number}"


def _members(borefield_id: str) -> Tuple[str, ...]:
    if borefield_id not in BOREFIELD_ASSIGNMENT:
        raise ValidationError(
            f"Unknown borefield '{borefield_id}'",
            field="borefield_id",
            suggestions=[f"Valid borefields are: {', '.join(BOREFIELD_ASSIGNMENT)}"],
        )
    return BOREFIELD_ASSIGNMENT[borefield_id]


def calculate_borefield_load(
    snapshot: HourSnapshot,
    borefield_id: str,
    capacity_kw: Optional[float] = None,
    config: Optional[Settings] = None,
) -> BorefieldLoad:
    """
    Net thermal load on one borefield for an hour.

    Building loads are summed with their sign (heating negative, cooling
    positive); buildings absent from the snapshot contribute nothing.
    ``capacity_kw`` overrides the configured borefield capacity. A zero
    capacity gives an inf/nan capacity_percent.
    """
    members = _members(borefield_id)
    if capacity_kw is None:
        capacity_kw = (config or default_settings).borefield_capacity_kw

    load_w = sum(
        snapshot.buildings[b].load for b in members if b in snapshot.buildings
    )
    load_kw = load_w / 1000

    return BorefieldLoad(
        borefield_id=borefield_id,
        current_load_kw=load_kw,
        capacity_kw=capacity_kw,
        capacity_percent=ieee_divide(abs(load_kw), capacity_kw) * 100,
        buildings_count=len(members),
    )


def project_borefield_expansion(
    load: BorefieldLoad,
    system_efficiency_gain: float,
    economics: Optional[NetworkEconomics] = None,
) -> BorefieldExpansion:
    """
    Headroom and asset value for a borefield.

    Expansion is capped at the max operating fraction of rated capacity; each
    new connection is assumed to add ``kw_per_additional_building``. Asset
    value is the electrical saving implied by the system efficiency gain,
    priced at energy + capacity value per kW-elec.

    Without ``economics`` the configured settings are used, with the
    capacity the load was measured against. A nan efficiency gain
    (degenerate hour) is treated as 0. A zero capacity or zero kW per
    building gives inf/nan ratios; additional_buildings is then that float.
    """
    if economics is None:
        economics = replace(NetworkEconomics.from_settings(), capacity_kw=load.capacity_kw)
    gain = 0.0 if math.isnan(system_efficiency_gain) else system_efficiency_gain

    capacity = economics.capacity_kw
    current = abs(load.current_load_kw)
    max_operating = capacity * economics.max_operating_fraction
    available_to_max = max(0.0, max_operating - current)

    additional = ieee_divide(available_to_max, economics.kw_per_additional_building)
    if math.isfinite(additional):
        additional = math.floor(additional)
    else:
        logger.warning(
            f"Cannot count additional buildings with {economics.kw_per_additional_building} kW per building",
            extra={"borefield_id": load.borefield_id},
        )

    return BorefieldExpansion(
        borefield_id=load.borefield_id,
        current_load_kw=current,
        available_capacity_kw=capacity - current,
        utilization_percent=ieee_divide(current, capacity) * 100,
        available_to_max_operating_kw=available_to_max,
        additional_buildings=additional,
        current_asset_value=current * (gain / 100) * economics.value_per_kw_elec,
        potential_asset_value=max_operating * (gain / 100) * economics.value_per_kw_elec,
    )


def calculate_all_borefields(
    snapshot: HourSnapshot,
    config: Optional[Settings] = None,
) -> List[BorefieldLoad]:
    loads = [calculate_borefield_load(snapshot, b, config=config) for b in BOREFIELD_ASSIGNMENT]
    for load in loads:
        logger.debug(
            f"Borefield load {load.current_load_kw:.1f} kW ({load.capacity_percent:.1f}% of capacity)",
            extra={"hour": snapshot.hour, "borefield_id": load.borefield_id},
        )
    return loads

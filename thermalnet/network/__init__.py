"""
Network Module - Borefield assignment and network-level analytics.
"""

from .borefields import (
    BOREFIELD_ASSIGNMENT,
    NetworkEconomics,
    BorefieldLoad,
    BorefieldExpansion,
    borefield_for,
    display_name,
    calculate_borefield_load,
    calculate_all_borefields,
    project_borefield_expansion,
)
from .opportunities import (
    LoadBalance,
    DemandResponseValue,
    calculate_load_balance,
    calculate_demand_response_value,
)

__all__ = [
    "BOREFIELD_ASSIGNMENT",
    "NetworkEconomics",
    "BorefieldLoad",
    "BorefieldExpansion",
    "borefield_for",
    "display_name",
    "calculate_borefield_load",
    "calculate_all_borefields",
    "project_borefield_expansion",
    "LoadBalance",
    "DemandResponseValue",
    "calculate_load_balance",
    "calculate_demand_response_value",
]

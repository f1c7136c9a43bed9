"""
Asset Valuation - Borefield asset catalogue.

Static reference data for the three geothermal borefields that anchor the
network: capacity, utilization, efficiency and financial figures. Nothing
here is derived from the hourly data; consumers combine the two through the
shared borefield ids (see thermalnet.network.borefields).
"""

import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from ..core.models import AssetRecord
from ..utils.validation import ValidationError


GEOTHERMAL_HEAT_EXCHANGER = "Geothermal Heat Exchanger"

BOREFIELD_ASSETS = (
    AssetRecord(
        id="borefield_1",
        name="Borefield 1",
        type=GEOTHERMAL_HEAT_EXCHANGER,
        capacity=500000,          # 500 kW
        utilization=75,
        efficiency=4.8,
        annual_savings=180000,
        network_value=216000,     # With network effect multiplier
        payback_period=8.3,
        installation_cost=1500000,
        maintenance_cost=25000,
        ground_temp=54,
    ),
    AssetRecord(
        id="borefield_2",
        name="Borefield 2",
        type=GEOTHERMAL_HEAT_EXCHANGER,
        capacity=750000,          # 750 kW
        utilization=82,
        efficiency=4.9,
        annual_savings=275000,
        network_value=330000,
        payback_period=7.8,
        installation_cost=2100000,
        maintenance_cost=35000,
        ground_temp=55,
    ),
    AssetRecord(
        id="borefield_3",
        name="Borefield 3",
        type=GEOTHERMAL_HEAT_EXCHANGER,
        capacity=600000,          # 600 kW
        utilization=68,
        efficiency=4.7,
        annual_savings=195000,
        network_value=234000,
        payback_period=9.1,
        installation_cost=1800000,
        maintenance_cost=30000,
        ground_temp=53,
    ),
)

# sort key -> descending?
SORT_KEYS = {
    "network_value": True,
    "annual_savings": True,
    "efficiency": True,
    "utilization": True,
    "payback_period": False,  # shortest payback first
}


@dataclass
class AssetSummary:
    """Portfolio totals for a set of assets."""
    asset_count: int
    total_network_value: float
    total_annual_savings: float
    total_installation_cost: float
    avg_efficiency: float     # nan for an empty set
    avg_utilization: float    # nan for an empty set
    count_by_type: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict:
        return {
            "assetCount": self.asset_count,
            "totalNetworkValue": self.total_network_value,
            "totalAnnualSavings": self.total_annual_savings,
            "totalInstallationCost": self.total_installation_cost,
            "avgEfficiency": self.avg_efficiency,
            "avgUtilization": self.avg_utilization,
            "countByType": dict(self.count_by_type),
        }


def get_asset_valuation() -> List[AssetRecord]:
    """Borefield catalogue ordered by network value, highest first."""
    return sort_assets(BOREFIELD_ASSETS, by="network_value")


def sort_assets(assets: Iterable[AssetRecord], by: str = "network_value") -> List[AssetRecord]:
    """
    Sort assets for presentation.

    Raises:
        ValidationError: If ``by`` is not a supported sort key
    """
    if by not in SORT_KEYS:
        raise ValidationError(
            f"Unknown sort key '{by}'",
            field="sort_by",
            suggestions=[f"Valid keys are: {', '.join(SORT_KEYS)}"],
        )
    return sorted(assets, key=lambda a: getattr(a, by), reverse=SORT_KEYS[by])


def filter_assets(assets: Iterable[AssetRecord], asset_type: str = "all") -> List[AssetRecord]:
    """Keep assets whose type contains ``asset_type`` (case-insensitive); 'all' keeps everything."""
    if asset_type == "all":
        return list(assets)
    needle = asset_type.lower()
    return [a for a in assets if needle in a.type.lower()]


def summarize_assets(assets: Iterable[AssetRecord]) -> AssetSummary:
    assets = list(assets)
    count = len(assets)

    return AssetSummary(
        asset_count=count,
        total_network_value=sum(a.network_value for a in assets),
        total_annual_savings=sum(a.annual_savings for a in assets),
        total_installation_cost=sum(a.installation_cost for a in assets),
        avg_efficiency=sum(a.efficiency for a in assets) / count if count else math.nan,
        avg_utilization=sum(a.utilization for a in assets) / count if count else math.nan,
        count_by_type=dict(Counter(a.type for a in assets)),
    )

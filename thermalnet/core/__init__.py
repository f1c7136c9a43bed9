"""
Core Module - Configuration and data models.
"""

from .config import Settings, settings
from .models import (
    RawRow,
    BuildingRoster,
    MissingFieldPolicy,
    BuildingType,
    Temperature,
    CandidateSystem,
    BuildingEfficiency,
    BuildingSnapshot,
    SystemMetrics,
    HourSnapshot,
    TimeSeriesPoint,
    BuildingSummary,
    AssetRecord,
)

__all__ = [
    'Settings',
    'settings',
    'RawRow',
    'BuildingRoster',
    'MissingFieldPolicy',
    'BuildingType',
    'Temperature',
    'CandidateSystem',
    'BuildingEfficiency',
    'BuildingSnapshot',
    'SystemMetrics',
    'HourSnapshot',
    'TimeSeriesPoint',
    'BuildingSummary',
    'AssetRecord',
]

"""
Simulation Module - Derive hourly network metrics from comparison records.

Features:
- Per-building efficiency comparison (geo vs. air)
- System-wide hourly aggregation
- Hour-indexed store with time-series projection and query sessions
"""

from .efficiency import calculate_building_efficiency, efficiency_gain_percent, ieee_divide
from .aggregator import calculate_system_metrics
from .transformer import HourlyRecordTransformer, transform_row
from .store import (
    HourlyDataStore,
    QuerySession,
    TimeSeries,
    DataNotLoadedError,
    summarize_buildings,
)

__all__ = [
    'calculate_building_efficiency',
    'efficiency_gain_percent',
    'ieee_divide',
    'calculate_system_metrics',
    'HourlyRecordTransformer',
    'transform_row',
    'HourlyDataStore',
    'QuerySession',
    'TimeSeries',
    'DataNotLoadedError',
    'summarize_buildings',
]

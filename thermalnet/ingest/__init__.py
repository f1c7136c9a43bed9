"""
Ingest Module - Read hourly comparison records and discover their schema.
"""

from .csv_loader import DataLoadError, auto_type, parse_csv_text, read_rows, load_rows
from .schema import (
    BuildingSchema,
    FIELD_SUFFIXES,
    SYSTEM_COLUMNS,
    building_number,
    column_name,
    discover_building_ids,
    extract_building_roster,
)

__all__ = [
    'DataLoadError',
    'auto_type',
    'parse_csv_text',
    'read_rows',
    'load_rows',
    'BuildingSchema',
    'FIELD_SUFFIXES',
    'SYSTEM_COLUMNS',
    'building_number',
    'column_name',
    'discover_building_ids',
    'extract_building_roster',
]

"""
Pytest configuration and fixtures for thermalnet tests.

Provides reusable test fixtures for:
- Raw hourly rows and CSV sources
- Building rosters
- Loaded data stores
"""

import pytest
from pathlib import Path
import tempfile
import shutil

# Add project root to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from thermalnet.simulation.store import HourlyDataStore


# =============================================================================
# ROW BUILDERS
# =============================================================================

def building_columns(
    building_id: str,
    load_w: float,
    geo_electric_w: float,
    air_electric_w: float,
    geo_cop: float = 4.0,
    air_cop: float = 2.5,
    inlet_temp_c: float = 15.0,
) -> dict:
    """Seven per-building columns for one hour."""
    return {
        f"{building_id}_inlet_temp_c": inlet_temp_c,
        f"{building_id}_inlet_temp_f": inlet_temp_c * 9 / 5 + 32,
        f"{building_id}_load_w": load_w,
        f"{building_id}_geo_cop": geo_cop,
        f"{building_id}_geo_electric_w": geo_electric_w,
        f"{building_id}_air_cop": air_cop,
        f"{building_id}_air_electric_w": air_electric_w,
    }


def make_row(hour: int, outdoor_c: float = 0.0, **buildings: dict) -> dict:
    """One raw row; keyword names are building ids mapping to building_columns kwargs."""
    row = {
        "hour": hour,
        "outdoor_air_temp_c": outdoor_c,
        "outdoor_air_temp_f": outdoor_c * 9 / 5 + 32,
    }
    for building_id, values in buildings.items():
        row.update(building_columns(building_id, **values))
    return row


def write_csv(path: Path, rows: list) -> Path:
    """Write rows to CSV using the first row's keys as header."""
    header = list(rows[0].keys())
    lines = [",".join(header)]
    for row in rows:
        lines.append(",".join("" if row.get(c) is None else str(row.get(c)) for c in header))
    path.write_text("\n".join(lines) + "\n")
    return path


# =============================================================================
# PATH FIXTURES
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """Project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def temp_dir():
    """Temporary directory for test outputs, cleaned up after test."""
    tmp = tempfile.mkdtemp(prefix="thermalnet_test_")
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


# =============================================================================
# DATA FIXTURES
# =============================================================================

@pytest.fixture
def sample_rows() -> list:
    """Three hours for three buildings (b_1, b_2, b_10) with mixed heating/cooling."""
    return [
        make_row(
            1, outdoor_c=-5.0,
            b_1=dict(load_w=-5000, geo_electric_w=1000, air_electric_w=2000, geo_cop=5.0, air_cop=2.5),
            b_2=dict(load_w=3000, geo_electric_w=600, air_electric_w=1000, geo_cop=5.0, air_cop=3.0),
            b_10=dict(load_w=-2000, geo_electric_w=500, air_electric_w=800, geo_cop=4.0, air_cop=2.5),
        ),
        make_row(
            2, outdoor_c=-3.0,
            b_1=dict(load_w=-4000, geo_electric_w=800, air_electric_w=1600, geo_cop=5.0, air_cop=2.5),
            b_2=dict(load_w=2000, geo_electric_w=400, air_electric_w=800, geo_cop=5.0, air_cop=2.5),
            b_10=dict(load_w=0, geo_electric_w=0, air_electric_w=0, geo_cop=4.0, air_cop=2.0),
        ),
        make_row(
            3, outdoor_c=20.0,
            b_1=dict(load_w=1000, geo_electric_w=250, air_electric_w=400, geo_cop=4.0, air_cop=2.5),
            b_2=dict(load_w=6000, geo_electric_w=1200, air_electric_w=2000, geo_cop=5.0, air_cop=3.0),
            b_10=dict(load_w=1500, geo_electric_w=300, air_electric_w=500, geo_cop=5.0, air_cop=3.0),
        ),
    ]


@pytest.fixture
def sample_csv_file(temp_dir, sample_rows) -> Path:
    """sample_rows written to a CSV file."""
    return write_csv(temp_dir / "heat_pump_comparison_results.csv", sample_rows)


@pytest.fixture
def two_hour_csv_file(temp_dir) -> Path:
    """Single building, two hours: one heating hour then one cooling hour."""
    rows = [
        make_row(1, b_1=dict(load_w=-2000, geo_electric_w=400, air_electric_w=900)),
        make_row(2, b_1=dict(load_w=1500, geo_electric_w=300, air_electric_w=500)),
    ]
    return write_csv(temp_dir / "two_hours.csv", rows)


@pytest.fixture
def loaded_store(sample_csv_file) -> HourlyDataStore:
    """Store loaded from sample_csv_file."""
    store = HourlyDataStore(sample_csv_file)
    store.load_sync()
    return store

"""
Tests for per-building efficiency, hourly aggregation and row transformation.

Run with: pytest tests/test_transformer.py -v
"""

import logging
import math

import pytest

from thermalnet.core.models import CandidateSystem, MissingFieldPolicy
from thermalnet.simulation.aggregator import calculate_system_metrics
from thermalnet.simulation.efficiency import (
    calculate_building_efficiency,
    efficiency_gain_percent,
    ieee_divide,
)
from thermalnet.simulation.transformer import HourlyRecordTransformer, transform_row
from thermalnet.utils.validation import MissingFieldError

from conftest import make_row


ROSTER = ["b_1", "b_2", "b_10"]


class TestIeeeDivide:
    """Tests for degenerate ratio handling."""

    def test_regular_division(self):
        assert ieee_divide(6.0, 3.0) == 2.0

    def test_positive_over_zero(self):
        assert ieee_divide(5.0, 0) == math.inf

    def test_negative_over_zero(self):
        assert ieee_divide(-5.0, 0) == -math.inf

    def test_zero_over_zero(self):
        assert math.isnan(ieee_divide(0, 0))


class TestBuildingEfficiency:
    """Tests for the per-building comparison."""

    def test_gain_and_savings(self):
        """geo COP 4.0 vs air COP 2.0 is a 100% gain; 1000 W vs 400 W saves 600 W."""
        result = calculate_building_efficiency(
            CandidateSystem(cop=4.0, electric_w=400),
            CandidateSystem(cop=2.0, electric_w=1000),
        )

        assert result.efficiency_gain_percent == 100.0
        assert result.energy_savings_w == 600
        assert result.geo_efficiency == 4.0
        assert result.air_efficiency == 2.0

    def test_negative_savings_kept(self):
        result = calculate_building_efficiency(
            CandidateSystem(cop=2.0, electric_w=900),
            CandidateSystem(cop=3.0, electric_w=600),
        )
        assert result.energy_savings_w == -300
        assert result.efficiency_gain_percent == pytest.approx(-33.333, rel=1e-3)

    def test_zero_air_cop_is_infinite_gain(self):
        assert efficiency_gain_percent(4.0, 0.0) == math.inf

    def test_both_cops_zero_is_nan(self):
        assert math.isnan(efficiency_gain_percent(0.0, 0.0))


class TestSystemMetrics:
    """Tests for hourly aggregation."""

    def test_aggregate_matches_buildings(self, sample_rows):
        snapshot = transform_row(sample_rows[0], ROSTER)
        metrics = snapshot.system_metrics
        buildings = list(snapshot.buildings.values())

        assert metrics.total_geo_electric == sum(b.geo.electric_w for b in buildings)
        assert metrics.total_air_electric == sum(b.air.electric_w for b in buildings)
        assert metrics.total_energy_savings == metrics.total_air_electric - metrics.total_geo_electric
        assert metrics.peak_demand_reduction == metrics.total_energy_savings

    def test_signed_loads(self, sample_rows):
        """Heating stays negative, cooling positive, and they sum to the net load."""
        metrics = transform_row(sample_rows[0], ROSTER).system_metrics

        assert metrics.total_load == 10000
        assert metrics.heating_load == -7000
        assert metrics.cooling_load == 3000
        assert metrics.total_building_load == -4000
        assert metrics.heating_load + metrics.cooling_load == metrics.total_building_load

    def test_average_cops(self, sample_rows):
        metrics = transform_row(sample_rows[1], ROSTER).system_metrics

        assert metrics.avg_geo_cop == 5.0
        assert metrics.avg_air_cop == 2.5
        assert metrics.system_efficiency_gain == 100.0
        assert metrics.total_energy_savings == 1200

    def test_cooling_only_hour(self, sample_rows):
        metrics = transform_row(sample_rows[2], ROSTER).system_metrics

        assert metrics.heating_load == 0
        assert metrics.cooling_load == 8500
        assert metrics.total_energy_savings == 1150

    def test_idle_hour_is_degenerate(self):
        row = make_row(
            1,
            b_1=dict(load_w=0, geo_electric_w=0, air_electric_w=0),
        )
        metrics = transform_row(row, ["b_1"]).system_metrics

        assert math.isnan(metrics.avg_geo_cop)
        assert math.isnan(metrics.avg_air_cop)
        assert math.isnan(metrics.system_efficiency_gain)
        assert metrics.total_energy_savings == 0

    def test_empty_building_set(self):
        metrics = calculate_system_metrics({})
        assert metrics.total_load == 0
        assert math.isnan(metrics.avg_geo_cop)


class TestHourlyRecordTransformer:
    """Tests for raw row -> HourSnapshot."""

    def test_roster_order_kept(self, sample_rows):
        snapshot = transform_row(sample_rows[0], ROSTER)
        assert list(snapshot.buildings) == ROSTER

    def test_fields_copied(self, sample_rows):
        snapshot = transform_row(sample_rows[0], ROSTER)
        b_1 = snapshot.buildings["b_1"]

        assert snapshot.hour == 1
        assert snapshot.outdoor_temp.celsius == -5.0
        assert snapshot.outdoor_temp.fahrenheit == 23.0
        assert b_1.load == -5000
        assert b_1.is_heating
        assert b_1.inlet_temp.celsius == 15.0
        assert b_1.geo.cop == 5.0
        assert b_1.air.electric_w == 2000
        assert b_1.efficiency.energy_savings_w == 1000

    def test_buildings_mapping_is_read_only(self, sample_rows):
        snapshot = transform_row(sample_rows[0], ROSTER)
        with pytest.raises(TypeError):
            snapshot.buildings["b_99"] = snapshot.buildings["b_1"]

    def test_missing_field_defaults_to_zero(self, sample_rows):
        row = dict(sample_rows[0])
        row["b_2_load_w"] = None
        del row["b_2_geo_electric_w"]

        transformer = HourlyRecordTransformer(ROSTER)
        snapshot = transformer.transform(row)

        assert snapshot.buildings["b_2"].load == 0.0
        assert snapshot.buildings["b_2"].geo.electric_w == 0.0
        assert transformer.defaulted_fields == {"b_2_load_w": 1, "b_2_geo_electric_w": 1}

    def test_non_numeric_field_defaults_to_zero(self, sample_rows):
        row = dict(sample_rows[0])
        row["b_1_air_cop"] = "n/a"

        snapshot = transform_row(row, ROSTER)
        assert snapshot.buildings["b_1"].air.cop == 0.0

    def test_missing_temperature_is_copied_as_none(self, sample_rows):
        row = dict(sample_rows[0])
        row["b_1_inlet_temp_c"] = None

        transformer = HourlyRecordTransformer(ROSTER)
        snapshot = transformer.transform(row)

        assert snapshot.buildings["b_1"].inlet_temp.celsius is None
        assert transformer.defaulted_fields == {}

    def test_fail_policy_raises(self, sample_rows):
        row = dict(sample_rows[2])
        row["b_10_load_w"] = "n/a"

        transformer = HourlyRecordTransformer(ROSTER, MissingFieldPolicy.FAIL)
        with pytest.raises(MissingFieldError) as exc_info:
            transformer.transform(row)

        assert exc_info.value.field == "b_10_load_w"
        assert exc_info.value.hour == 3
        assert "Hour 3" in str(exc_info.value)

    def test_fail_policy_accepts_complete_row(self, sample_rows):
        snapshot = transform_row(sample_rows[0], ROSTER, MissingFieldPolicy.FAIL)
        assert snapshot.system_metrics.total_load == 10000

    def test_defaulted_field_logged_with_context(self, sample_rows, caplog):
        row = dict(sample_rows[0])
        row["b_2_load_w"] = None

        with caplog.at_level(logging.DEBUG, logger="thermalnet.simulation.transformer"):
            transform_row(row, ROSTER)

        record = next(r for r in caplog.records if "b_2_load_w" in r.getMessage())
        assert record.building_id == "b_2"
        assert record.hour == 1

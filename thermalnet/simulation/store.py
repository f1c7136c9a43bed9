"""
Hourly Data Store - holds the processed year and answers queries over it.

Loading reads the source, discovers and checks the building schema and
transforms every row; the resulting dataset is published in one step, so a
failed load never exposes partial data. Queries issued before a successful
load raise DataNotLoadedError rather than returning empty placeholders.

The "current hour" is not store state: each consumer owns a QuerySession
with its own cursor, so independent views never interfere.

Usage:
    store = HourlyDataStore("heat_pump_comparison_results.csv")
    await store.load()

    snapshot = store.get_hourly_data(12)
    for point in store.get_time_series_data():
        ...

    session = store.session()
    session.set_current_hour(4000)
    buildings = session.get_building_network_data()
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from ..core.config import Settings, settings as default_settings
from ..core.models import (
    AssetRecord,
    BuildingRoster,
    BuildingSummary,
    BuildingType,
    HourSnapshot,
    MissingFieldPolicy,
    RawRow,
    TimeSeriesPoint,
)
from ..ingest.csv_loader import DataLoadError, Source, load_rows
from ..ingest.schema import BuildingSchema, building_number
from ..roi.assets import get_asset_valuation
from ..utils.validation import ValidationError, validate_hour
from .transformer import HourlyRecordTransformer

logger = logging.getLogger(__name__)

ProcessedDataset = Tuple[HourSnapshot, ...]


class DataNotLoadedError(RuntimeError):
    """Raised when the store is queried before a load has completed."""


class TimeSeries:
    """
    Lazy, restartable projection of every hour's SystemMetrics.

    Each iteration walks the dataset from the first hour again; nothing is
    materialized until iterated.
    """

    def __init__(self, dataset: ProcessedDataset):
        self._dataset = dataset

    def __iter__(self) -> Iterator[TimeSeriesPoint]:
        for snapshot in self._dataset:
            metrics = snapshot.system_metrics
            yield TimeSeriesPoint(
                hour=snapshot.hour,
                outdoor_temp_c=snapshot.outdoor_temp.celsius,
                geo_total=metrics.total_geo_electric,
                air_total=metrics.total_air_electric,
                savings=metrics.total_energy_savings,
                geo_cop=metrics.avg_geo_cop,
                air_cop=metrics.avg_air_cop,
            )

    def __len__(self) -> int:
        return len(self._dataset)

    def to_list(self) -> List[Dict]:
        return [point.to_dict() for point in self]


def summarize_buildings(snapshot: HourSnapshot) -> List[BuildingSummary]:
    """Flatten an hour's buildings into summary records, in roster order."""
    summaries = []
    for building_id, building in snapshot.buildings.items():
        summaries.append(BuildingSummary(
            id=building_id,
            name=f"Building {building_number(building_id)}",
            type=BuildingType.HEAT_SINK if building.load < 0 else BuildingType.HEAT_SOURCE,
            temperature=building.inlet_temp.celsius,
            load=abs(building.load),
            geo_efficiency=building.geo.cop,
            air_efficiency=building.air.cop,
            energy_savings=building.efficiency.energy_savings_w,
            efficiency_gain=building.efficiency.efficiency_gain_percent,
        ))
    return summaries


class HourlyDataStore:
    """
    Processed hourly dataset with hour-indexed lookup.

    Args:
        source: Path or URL of the hourly CSV (default: settings.data_source)
        policy: Missing-field handling (default: settings.missing_field_policy)
        config: Settings instance (default: global settings)
    """

    def __init__(
        self,
        source: Optional[Source] = None,
        policy: Optional[Union[MissingFieldPolicy, str]] = None,
        config: Optional[Settings] = None,
    ):
        self.config = config or default_settings
        self.source = source or self.config.data_source
        self.policy = MissingFieldPolicy(policy or self.config.missing_field_policy)

        self._dataset: Optional[ProcessedDataset] = None
        self._roster: BuildingRoster = []
        self._index: Dict[Any, HourSnapshot] = {}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self, source: Optional[Source] = None) -> ProcessedDataset:
        """
        Read, transform and publish the full dataset.

        A successful load replaces any previous dataset entirely. A failed
        load leaves the previously published dataset (if any) untouched.

        Raises:
            DataLoadError: If the source cannot be read, is empty or does
                not match the building schema under the active policy
        """
        source = source or self.source
        logger.info(f"Loading hourly data from {source}", extra={"source": str(source)})

        try:
            rows = await load_rows(source, timeout=self.config.http_timeout_seconds)
            dataset, roster, index = self._process(rows, source)
        except DataLoadError as e:
            logger.error(f"Hourly data load failed: {e}", exc_info=True)
            raise
        except ValidationError as e:
            logger.error(f"Hourly data load failed: {e}", exc_info=True)
            raise DataLoadError(f"Could not process hourly data from {source}: {e}", source=source) from e

        self._dataset = dataset
        self._roster = roster
        self._index = index
        self.source = source

        logger.info(f"Loaded {len(dataset)} hours for {len(roster)} buildings")
        return dataset

    def load_sync(self, source: Optional[Source] = None) -> ProcessedDataset:
        """Blocking load for scripts and the CLI."""
        return asyncio.run(self.load(source))

    def _process(
        self,
        rows: Sequence[RawRow],
        source: Source,
    ) -> Tuple[ProcessedDataset, BuildingRoster, Dict[Any, HourSnapshot]]:
        if not rows:
            raise DataLoadError(f"Source {source} contains no rows", source=source)

        header = list(rows[0].keys())
        schema = BuildingSchema.from_columns(header)
        missing = schema.missing_columns(header)

        if not schema.building_ids or self.policy is MissingFieldPolicy.FAIL:
            schema.validate(header)
        elif missing:
            logger.warning(
                f"Source header lacks {len(missing)} expected column(s); "
                f"affected fields default to 0: {', '.join(missing[:5])}"
            )

        transformer = HourlyRecordTransformer(schema.roster, self.policy)
        dataset = tuple(transformer.transform(row) for row in rows)

        if transformer.defaulted_fields:
            total = sum(transformer.defaulted_fields.values())
            logger.warning(
                f"Defaulted {total} missing or non-numeric value(s) to 0 "
                f"across {len(transformer.defaulted_fields)} column(s)"
            )

        index: Dict[Any, HourSnapshot] = {}
        for snapshot in dataset:
            if snapshot.hour in index:
                logger.warning(
                    "Duplicate hour in source; keeping first occurrence",
                    extra={"hour": snapshot.hour},
                )
                continue
            index[snapshot.hour] = snapshot

        return dataset, schema.roster, index

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def is_loaded(self) -> bool:
        return self._dataset is not None

    def _require_loaded(self) -> ProcessedDataset:
        if self._dataset is None:
            raise DataNotLoadedError("Hourly data is not loaded; await load() before querying")
        return self._dataset

    @property
    def dataset(self) -> ProcessedDataset:
        return self._require_loaded()

    @property
    def roster(self) -> BuildingRoster:
        self._require_loaded()
        return list(self._roster)

    @property
    def hours(self) -> List[Any]:
        return [snapshot.hour for snapshot in self._require_loaded()]

    def get_hourly_data(self, hour: Any) -> Optional[HourSnapshot]:
        """
        Snapshot whose hour equals ``hour``, or None if the dataset has no such hour.

        String hours ("12") are coerced to int first.

        Raises:
            ValidationError: If a string hour is not an integer
        """
        self._require_loaded()
        if isinstance(hour, str):
            hour = validate_hour(hour)
        return self._index.get(hour)

    def get_time_series_data(self) -> TimeSeries:
        """Per-hour summary over the whole dataset, in source order."""
        return TimeSeries(self._require_loaded())

    def get_building_network_data(self, hour: Any) -> List[BuildingSummary]:
        """Per-building summaries for ``hour``; empty if the hour is not found."""
        snapshot = self.get_hourly_data(hour)
        if snapshot is None:
            return []
        return summarize_buildings(snapshot)

    def get_asset_valuation(self) -> List[AssetRecord]:
        return get_asset_valuation()

    def session(self, hour: Optional[int] = None) -> QuerySession:
        """Create a caller-owned query session with its own current-hour cursor."""
        return QuerySession(self, self.config.default_hour if hour is None else hour)


class QuerySession:
    """
    A consumer's view onto a store, holding its own current hour.

    The cursor must be an integer hour (``"12"`` and ``12.0`` are coerced) but
    is not range-checked; querying an hour outside the dataset answers
    "not found" (None / empty list).
    """

    def __init__(self, store: HourlyDataStore, current_hour: Any = 1):
        self.store = store
        self.current_hour = validate_hour(current_hour)

    def set_current_hour(self, hour: Any) -> None:
        """
        Move the cursor.

        Raises:
            ValidationError: If ``hour`` is not an integer
        """
        self.current_hour = validate_hour(hour)

    def get_current_hour_data(self) -> Optional[HourSnapshot]:
        return self.store.get_hourly_data(self.current_hour)

    def get_hourly_data(self, hour: Any) -> Optional[HourSnapshot]:
        return self.store.get_hourly_data(hour)

    def get_building_network_data(self) -> List[BuildingSummary]:
        return self.store.get_building_network_data(self.current_hour)

    def get_time_series_data(self) -> TimeSeries:
        return self.store.get_time_series_data()

    def get_asset_valuation(self) -> List[AssetRecord]:
        return self.store.get_asset_valuation()

"""
Building schema discovery and validation.

The source is a wide table: a few system columns plus seven columns per
building (``b_<N>_<suffix>``). The building roster is discovered from the
header and sorted numerically, so ``b_2`` comes before ``b_10``.

Usage:
    schema = BuildingSchema.from_columns(header)
    schema.validate(header)          # raises SchemaError on gaps
    roster = schema.building_ids     # ['b_1', 'b_2', ..., 'b_36']
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple

from ..core.models import BuildingRoster, RawRow
from ..utils.validation import BUILDING_COLUMN_PATTERN, SchemaError, validate_building_id


SYSTEM_COLUMNS: Tuple[str, ...] = ("hour", "outdoor_air_temp_c", "outdoor_air_temp_f")

FIELD_SUFFIXES: Tuple[str, ...] = (
    "inlet_temp_c",
    "inlet_temp_f",
    "load_w",
    "geo_cop",
    "geo_electric_w",
    "air_cop",
    "air_electric_w",
)


def building_number(building_id: str) -> int:
    """Numeric suffix of a building id (``b_12`` -> 12)."""
    return validate_building_id(building_id)


def discover_building_ids(columns: Iterable[str]) -> BuildingRoster:
    """
    Collect distinct building ids from column names, sorted by number.

    Ids are kept exactly as written in the header (``b_01`` stays ``b_01``)
    so per-building columns can be addressed again by id; the number is
    only the sort key.
    """
    ids = set()
    for column in columns:
        match = BUILDING_COLUMN_PATTERN.match(str(column))
        if match:
            ids.add(match.group(0)[:-1])
    return sorted(ids, key=lambda building_id: (building_number(building_id), building_id))


def extract_building_roster(rows: Sequence[RawRow]) -> BuildingRoster:
    """
    Discover the building roster from the first row's column names.

    Returns an empty roster for an empty dataset; callers are expected to
    reject empty sources before getting here.
    """
    if not rows:
        return []
    return discover_building_ids(rows[0].keys())


def column_name(building_id: str, suffix: str) -> str:
    return f"{building_id}_{suffix}"


@dataclass(frozen=True)
class BuildingSchema:
    """Explicit description of the columns an hourly source must carry."""
    building_ids: Tuple[str, ...]
    field_suffixes: Tuple[str, ...] = FIELD_SUFFIXES
    system_columns: Tuple[str, ...] = field(default=SYSTEM_COLUMNS)

    @classmethod
    def from_columns(cls, columns: Iterable[str]) -> "BuildingSchema":
        return cls(building_ids=tuple(discover_building_ids(columns)))

    @property
    def roster(self) -> BuildingRoster:
        return list(self.building_ids)

    def expected_columns(self) -> List[str]:
        expected = list(self.system_columns)
        for building_id in self.building_ids:
            expected.extend(column_name(building_id, s) for s in self.field_suffixes)
        return expected

    def missing_columns(self, columns: Iterable[str]) -> List[str]:
        present = set(columns)
        return [c for c in self.expected_columns() if c not in present]

    def validate(self, columns: Iterable[str]) -> None:
        """
        Check a header against the descriptor.

        Raises:
            SchemaError: If no buildings are described or columns are missing
        """
        if not self.building_ids:
            raise SchemaError("No building columns (b_<N>_...) found in source header")

        missing = self.missing_columns(columns)
        if missing:
            preview = ", ".join(missing[:5])
            more = f" (+{len(missing) - 5} more)" if len(missing) > 5 else ""
            raise SchemaError(
                f"Source is missing {len(missing)} expected column(s): {preview}{more}",
                missing_columns=missing,
            )

"""
POI Archive Table Schema

Column contract of the three tables stored in a .poi archive. Columns are
matched by header name, so their order in a file does not matter on read;
on write they are emitted in the order listed here.
"""
from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

import pandas as pd

from .errors import ArchiveFormatError

POI_COLUMNS = [
    "poi_id",
    "poi_type_id",
    "poi_name",
    "poi_lat",
    "poi_lon",
    "poi_weight",
    "poi_visible",
]

POI_TYPE_COLUMNS = [
    "poi_type_id",
    "poi_type_name",
]

POI_PROPERTY_COLUMNS = [
    "poi_id",
    "key",
    "value",
]


def validate_header(
    header: Sequence[str],
    required_columns: Sequence[str],
    source_path: Optional[str] = None,
) -> None:
    """
    Validate that a table header read from an archive has all required columns.

    Args:
        header: Column names found in the first row of the table
        required_columns: Column names that must be present
        source_path: Optional "archive:entry" label for error messages

    Raises:
        ArchiveFormatError: if any required column is missing
    """
    missing = [col for col in required_columns if col not in header]
    if missing:
        source = f" in {source_path}" if source_path else ""
        raise ArchiveFormatError(
            f"Missing required columns{source}: {missing}. "
            f"Found columns: {list(header)}"
        )


def records_to_table(
    records: Iterable[Mapping[str, str]],
    columns: Sequence[str],
) -> pd.DataFrame:
    """Build a table with exactly `columns`, in that order. No records gives a header-only table."""
    return pd.DataFrame(list(records), columns=list(columns), dtype="object")

"""
POI Archive Codec

Reads and writes .poi archives: a zip file holding three ';'-delimited
tables (POIs, POI types, POI properties), each with a header row.

Tables are written through pandas and read back row by row with the csv
module, so that every malformed row can be reported with its line number.
"""
from __future__ import annotations

import csv
import logging
import re
import zipfile
import zlib
from io import StringIO
from numbers import Integral
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional, Sequence, Tuple, Union

import pandas as pd

from . import config
from .errors import ArchiveFormatError, PoiReferenceError, RecordEncodingError
from .objects import Coord, Poi, PoiType
from .schema import (
    POI_COLUMNS,
    POI_PROPERTY_COLUMNS,
    POI_TYPE_COLUMNS,
    records_to_table,
    validate_header,
)

LOGGER = logging.getLogger("poimodel.io")

FLOAT_PATTERN = re.compile(
    r"^[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)\Z",
    re.ASCII | re.IGNORECASE,
)

PathLike = Union[str, Path]


def archive_path_for(path: PathLike) -> Path:
    """Replace the extension of `path` with the archive extension."""
    return Path(path).with_suffix(f".{config.ARCHIVE_EXTENSION}")


# ---------------- Encoding ----------------
def _encode_float(poi_id: str, column: str, value) -> str:
    try:
        return repr(float(value))
    except (TypeError, ValueError) as exc:
        raise RecordEncodingError(f"POI {poi_id}: {column} is not a number: {value!r}") from exc


def _encode_weight(poi_id: str, weight) -> str:
    if isinstance(weight, bool) or not isinstance(weight, Integral):
        raise RecordEncodingError(f"POI {poi_id}: poi_weight must be an integer, got {weight!r}")
    if not 0 <= weight <= config.MAX_WEIGHT:
        raise RecordEncodingError(
            f"POI {poi_id}: poi_weight {weight} outside [0, {config.MAX_WEIGHT}]"
        )
    return str(int(weight))


def _encode_visible(poi_id: str, visible) -> str:
    if not isinstance(visible, bool):
        raise RecordEncodingError(f"POI {poi_id}: poi_visible must be a bool, got {visible!r}")
    return "1" if visible else "0"


def poi_to_record(poi: Poi) -> Dict[str, str]:
    return {
        "poi_id": poi.id,
        "poi_type_id": poi.poi_type_id,
        "poi_name": poi.name,
        "poi_lat": _encode_float(poi.id, "poi_lat", poi.coord.lat),
        "poi_lon": _encode_float(poi.id, "poi_lon", poi.coord.lon),
        "poi_weight": _encode_weight(poi.id, poi.weight),
        "poi_visible": _encode_visible(poi.id, poi.visible),
    }


def poi_type_to_record(poi_type: PoiType) -> Dict[str, str]:
    return {"poi_type_id": poi_type.id, "poi_type_name": poi_type.name}


def table_to_csv(table: pd.DataFrame) -> str:
    return table.to_csv(
        sep=config.CSV_DELIMITER,
        index=False,
        lineterminator=config.CSV_LINE_TERMINATOR,
    )


def write_archive(
    path: PathLike,
    pois: Mapping[str, Poi],
    poi_types: Mapping[str, PoiType],
) -> Path:
    """
    Write POIs and POI types to a .poi archive.

    Args:
        path: Destination; its extension is replaced by the archive extension
        pois: POIs indexed by id, written in ascending id order
        poi_types: POI types indexed by id, written in ascending id order

    Returns:
        The path of the written archive

    Raises:
        RecordEncodingError: if an entity cannot be encoded (nothing is written)
        OSError: if the archive cannot be created or written
    """
    out = archive_path_for(path)
    poi_ids = sorted(pois)

    # Encode everything before touching the filesystem
    tables = [
        (config.POI_ENTRY, records_to_table(
            (poi_to_record(pois[poi_id]) for poi_id in poi_ids),
            POI_COLUMNS,
        )),
        (config.POI_TYPE_ENTRY, records_to_table(
            (poi_type_to_record(poi_types[type_id]) for type_id in sorted(poi_types)),
            POI_TYPE_COLUMNS,
        )),
        (config.POI_PROPERTIES_ENTRY, records_to_table(
            (
                {"poi_id": poi_id, "key": prop.key, "value": prop.value}
                for poi_id in poi_ids
                for prop in pois[poi_id].iter_properties()
            ),
            POI_PROPERTY_COLUMNS,
        )),
    ]

    with zipfile.ZipFile(out, "w", compression=config.ZIP_COMPRESSION) as archive:
        for entry, table in tables:
            LOGGER.debug("Writing %s rows to %s:%s", len(table), out, entry)
            archive.writestr(entry, table_to_csv(table).encode(config.TEXT_ENCODING))

    LOGGER.info("Saved %s POIs and %s POI types to %s", len(pois), len(poi_types), out)
    return out


# ---------------- Decoding ----------------
def _read_entry(archive: zipfile.ZipFile, entry: str, archive_path: Path) -> Optional[bytes]:
    """Return the raw bytes of `entry`, or None when the archive has no such entry."""
    try:
        info = archive.getinfo(entry)
    except KeyError:
        return None
    try:
        return archive.read(info)
    except (zipfile.BadZipFile, zlib.error, EOFError) as exc:
        raise ArchiveFormatError(f"Cannot read {archive_path}:{entry}: {exc}") from exc


def _read_required_entry(archive: zipfile.ZipFile, entry: str, archive_path: Path) -> bytes:
    payload = _read_entry(archive, entry, archive_path)
    if payload is None:
        raise ArchiveFormatError(f"{archive_path} has no '{entry}' entry")
    return payload


def iter_table_records(
    payload: bytes,
    columns: Sequence[str],
    label: str,
) -> Iterator[Tuple[int, Dict[str, str]]]:
    """
    Yield (line number, record) for every row of a delimited table.

    Records hold the `columns` fields only, looked up by header name. Blank
    lines are skipped; an empty payload has no rows. Rows whose field count
    differs from the header raise ArchiveFormatError.
    """
    try:
        text = payload.decode(config.READ_ENCODING)
    except UnicodeDecodeError as exc:
        raise ArchiveFormatError(f"{label} is not valid {config.TEXT_ENCODING}: {exc}") from exc

    reader = csv.reader(StringIO(text, newline=""), delimiter=config.CSV_DELIMITER)
    try:
        header = next(reader, None)
        if header is None:
            return
        validate_header(header, columns, label)
        positions = {name: pos for pos, name in enumerate(header)}
        for row in reader:
            if not row:
                continue
            if len(row) != len(header):
                raise ArchiveFormatError(
                    f"{label}, line {reader.line_num}: expected {len(header)} fields, found {len(row)}"
                )
            yield reader.line_num, {col: row[positions[col]] for col in columns}
    except csv.Error as exc:
        raise ArchiveFormatError(f"{label}, line {reader.line_num}: {exc}") from exc


def _decode_float(record: Mapping[str, str], column: str, label: str, line: int) -> float:
    raw = record[column]
    # float() alone would accept surrounding whitespace and "1_000"
    if not FLOAT_PATTERN.match(raw):
        raise ArchiveFormatError(f"{label}, line {line}: {column} is not a number: {raw!r}")
    return float(raw)


def _decode_weight(raw: str, label: str, line: int) -> int:
    if not (raw.isascii() and raw.isdigit()) or int(raw) > config.MAX_WEIGHT:
        raise ArchiveFormatError(
            f"{label}, line {line}: poi_weight is not an unsigned 32-bit integer: {raw!r}"
        )
    return int(raw)


def _decode_visible(raw: str, label: str, line: int) -> bool:
    if raw == "0":
        return False
    if raw == "1":
        return True
    raise ArchiveFormatError(f"{label}, line {line}: poi_visible must be 0 or 1, got {raw!r}")


def poi_from_record(record: Mapping[str, str], label: str = "poi", line: int = 0) -> Poi:
    """Build a POI, without properties, from a poi.txt record."""
    return Poi(
        id=record["poi_id"],
        name=record["poi_name"],
        coord=Coord(
            lon=_decode_float(record, "poi_lon", label, line),
            lat=_decode_float(record, "poi_lat", label, line),
        ),
        poi_type_id=record["poi_type_id"],
        visible=_decode_visible(record["poi_visible"], label, line),
        weight=_decode_weight(record["poi_weight"], label, line),
    )


def poi_type_from_record(record: Mapping[str, str]) -> PoiType:
    return PoiType(id=record["poi_type_id"], name=record["poi_type_name"])


def read_archive(path: PathLike) -> Tuple[Dict[str, Poi], Dict[str, PoiType]]:
    """
    Read POIs and POI types from a .poi archive.

    poi.txt and poi_type.txt are mandatory. poi_properties.txt is optional:
    without it every POI has an empty property map.

    Returns:
        (pois indexed by id in ascending order, poi types indexed by id)

    Raises:
        OSError: if the file cannot be opened
        ArchiveFormatError: if the file is not a zip archive, a mandatory
            entry is missing or a row is malformed
        PoiReferenceError: if a property row names a POI absent from poi.txt
    """
    path = Path(path)
    try:
        archive = zipfile.ZipFile(path)
    except zipfile.BadZipFile as exc:
        raise ArchiveFormatError(f"{path} is not a valid POI archive: {exc}") from exc

    with archive:
        label = f"{path}:{config.POI_ENTRY}"
        pois: Dict[str, Poi] = {}
        payload = _read_required_entry(archive, config.POI_ENTRY, path)
        for line, record in iter_table_records(payload, POI_COLUMNS, label):
            poi = poi_from_record(record, label, line)
            pois[poi.id] = poi
        pois = dict(sorted(pois.items()))

        label = f"{path}:{config.POI_TYPE_ENTRY}"
        poi_types: Dict[str, PoiType] = {}
        payload = _read_required_entry(archive, config.POI_TYPE_ENTRY, path)
        for _, record in iter_table_records(payload, POI_TYPE_COLUMNS, label):
            poi_type = poi_type_from_record(record)
            # duplicates in the table: last row wins
            poi_types[poi_type.id] = poi_type

        label = f"{path}:{config.POI_PROPERTIES_ENTRY}"
        payload = _read_entry(archive, config.POI_PROPERTIES_ENTRY, path)
        if payload is None:
            LOGGER.debug("%s has no %s entry", path, config.POI_PROPERTIES_ENTRY)
        else:
            for _, record in iter_table_records(payload, POI_PROPERTY_COLUMNS, label):
                poi = pois.get(record["poi_id"])
                if poi is None:
                    raise PoiReferenceError(
                        f"in file '{path}', cannot find poi '{record['poi_id']}' for property insertion"
                    )
                poi.properties[record["key"]] = record["value"]

    LOGGER.info("Loaded %s POIs and %s POI types from %s", len(pois), len(poi_types), path)
    return pois, poi_types

"""
poimodel - Points of Interest catalogs, their .poi archive format and merging.

A catalog (Model) holds POIs and POI types. It is saved to and loaded from a
zip archive of three ';'-delimited tables, and two catalogs can be merged
when their ids do not conflict.
"""

from .errors import (
    ArchiveFormatError,
    MergeConflictError,
    PoiModelError,
    PoiReferenceError,
    RecordEncodingError,
)
from .objects import Coord, Poi, PoiType, Property
from .model import Model, merge_models

__all__ = [
    "ArchiveFormatError",
    "MergeConflictError",
    "PoiModelError",
    "PoiReferenceError",
    "RecordEncodingError",
    "Coord",
    "Poi",
    "PoiType",
    "Property",
    "Model",
    "merge_models",
]

"""
Error kinds raised by the POI model.

I/O failures are not wrapped: callers see the builtin OSError family as-is.
"""
from __future__ import annotations


class PoiModelError(Exception):
    """Base class for every error raised by poimodel."""


class ArchiveFormatError(PoiModelError, ValueError):
    """The archive is not a zip file, misses a mandatory entry, or holds a malformed row."""


class RecordEncodingError(PoiModelError, ValueError):
    """An entity cannot be written as a table row."""


class PoiReferenceError(PoiModelError, LookupError):
    """A row or entity references a POI or POI type that does not exist."""


class MergeConflictError(PoiModelError, ValueError):
    """Two models declare the same id in a way that cannot be reconciled."""

    def __init__(self, message: str, entity: str, id: str):
        super().__init__(message)
        self.entity = entity
        self.id = id

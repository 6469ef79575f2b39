"""
POI Model

The aggregate of a POI catalog: POIs and POI types indexed by id, with
archive load/save and a conflict-aware merge.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import reduce
from pathlib import Path
from typing import Dict, Iterable, Iterator, List

from .errors import MergeConflictError, PoiReferenceError
from .io import PathLike, read_archive, write_archive
from .objects import Poi, PoiType

LOGGER = logging.getLogger("poimodel.model")


@dataclass
class Model:
    """
    A POI catalog.

    `pois` is indexed by POI id and iterated in id order for serialization.
    `poi_types` is indexed by POI type id; POIs only store that id.
    """

    pois: Dict[str, Poi] = field(default_factory=dict)
    poi_types: Dict[str, PoiType] = field(default_factory=dict)

    @classmethod
    def try_from_path(cls, path: PathLike) -> "Model":
        """Create a model from the .poi archive at `path`."""
        pois, poi_types = read_archive(path)
        return cls(pois=pois, poi_types=poi_types)

    def save_to_path(self, path: PathLike) -> Path:
        """Save the model as a .poi archive; the extension of `path` is replaced."""
        return write_archive(path, self.pois, self.poi_types)

    def add_poi(self, poi: Poi) -> None:
        self.pois[poi.id] = poi

    def add_poi_type(self, poi_type: PoiType) -> None:
        self.poi_types[poi_type.id] = poi_type

    def iter_pois(self) -> Iterator[Poi]:
        """Yield POIs in ascending id order."""
        for poi_id in sorted(self.pois):
            yield self.pois[poi_id]

    def try_merge(self, other: "Model") -> "Model":
        """
        Merge `other` into a copy of this model.

        Any POI id present in both models is a conflict, even when both POIs
        are identical. A POI type id present in both is accepted only if the
        two POI types are equal. Neither model is modified.

        Raises:
            MergeConflictError: on the first conflicting id
        """
        pois = {poi_id: poi.copy() for poi_id, poi in self.pois.items()}
        for poi_id, poi in other.pois.items():
            if poi_id in pois:
                raise MergeConflictError(
                    f"POI with id {poi_id} already in the model", entity="poi", id=poi_id
                )
            pois[poi_id] = poi.copy()

        poi_types = dict(self.poi_types)
        for type_id, poi_type in other.poi_types.items():
            existing = poi_types.get(type_id)
            if existing is None:
                poi_types[type_id] = poi_type
            elif existing != poi_type:
                raise MergeConflictError(
                    f"Trying to override POI Type with id {type_id}", entity="poi_type", id=type_id
                )

        LOGGER.info(
            "Merged %s + %s POIs, %s + %s POI types",
            len(self.pois), len(other.pois), len(self.poi_types), len(other.poi_types),
        )
        return Model(pois=dict(sorted(pois.items())), poi_types=poi_types)

    # ---------------- Opt-in checks ----------------
    def dangling_poi_type_ids(self) -> List[str]:
        """Ids of POIs whose poi_type_id matches no POI type of the model."""
        return [poi.id for poi in self.iter_pois() if poi.poi_type_id not in self.poi_types]

    def invalid_coord_ids(self) -> List[str]:
        """Ids of POIs whose coordinate is unset or out of range."""
        return [poi.id for poi in self.iter_pois() if not poi.coord.is_valid()]

    def check_references(self) -> None:
        """
        Raise PoiReferenceError if a POI references an unknown POI type.

        Load, save and merge never call this; it is for callers that want
        referential integrity.
        """
        dangling = self.dangling_poi_type_ids()
        if dangling:
            poi = self.pois[dangling[0]]
            raise PoiReferenceError(
                f"POI {poi.id} references unknown POI type '{poi.poi_type_id}' "
                f"({len(dangling)} dangling references in total)"
            )


def merge_models(models: Iterable[Model]) -> Model:
    """Merge any number of models, left to right, starting from an empty one."""
    return reduce(lambda merged, model: merged.try_merge(model), models, Model())

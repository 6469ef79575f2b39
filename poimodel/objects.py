"""
POI Entities

Coordinates, POI types, properties and POIs. These are plain value objects;
persistence lives in poimodel.io and aggregation in poimodel.model.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Iterator, Mapping, Tuple, Union

from shapely.geometry import Point


@dataclass(frozen=True)
class Coord:
    """A longitude/latitude pair, in degrees. (0, 0) is reserved as "unset"."""

    lon: float = 0.0
    lat: float = 0.0

    @classmethod
    def from_point(cls, point: Point) -> "Coord":
        return cls(lon=float(point.x), lat=float(point.y))

    def to_point(self) -> Point:
        return Point(self.lon, self.lat)

    def is_default(self) -> bool:
        """True when both longitude and latitude are exactly 0."""
        return self.lon == 0.0 and self.lat == 0.0

    def is_valid(self) -> bool:
        """
        True if the coordinate is set and within range:

        - -90 <= lat <= 90
        - -180 <= lon <= 180
        """
        return (
            not self.is_default()
            and -90.0 <= self.lat <= 90.0
            and -180.0 <= self.lon <= 180.0
        )


@dataclass(frozen=True, order=True)
class Property:
    key: str
    value: str


@dataclass(frozen=True, order=True)
class PoiType:
    """A category of POI (e.g. "restaurant"), identified by `id`."""

    id: str
    name: str


PropertiesInput = Union[Mapping[str, str], Iterable[Union[Property, Tuple[str, str]]]]


def _properties_to_dict(properties: PropertiesInput) -> Dict[str, str]:
    if isinstance(properties, Mapping):
        return dict(properties)
    out: Dict[str, str] = {}
    for prop in properties:
        if isinstance(prop, Property):
            key, value = prop.key, prop.value
        else:
            key, value = prop
        # last write wins
        out[key] = value
    return out


@dataclass
class Poi:
    """
    A Point of Interest.

    `poi_type_id` points to a PoiType by id. The reference is not checked
    here; see Model.check_references for an opt-in check.
    """

    id: str
    name: str
    coord: Coord = field(default_factory=Coord)
    poi_type_id: str = ""
    properties: Dict[str, str] = field(default_factory=dict)
    visible: bool = True
    weight: int = 0

    def __post_init__(self) -> None:
        self.properties = _properties_to_dict(self.properties)

    def iter_properties(self) -> Iterator[Property]:
        """Yield properties ordered by key."""
        for key in sorted(self.properties):
            yield Property(key, self.properties[key])

    def copy(self) -> "Poi":
        return replace(self, properties=dict(self.properties))

"""
Pytest configuration and shared fixtures.
"""
import zipfile
from pathlib import Path

import pytest

from poimodel import Coord, Model, Poi, PoiType


@pytest.fixture
def raw_archive(tmp_path):
    """Factory writing a zip archive from {entry name: text} contents."""
    def _write(entries: dict, name: str = "raw.poi") -> Path:
        path = tmp_path / name
        with zipfile.ZipFile(path, "w") as archive:
            for entry, text in entries.items():
                archive.writestr(entry, text)
        return path
    return _write


@pytest.fixture
def paris_model() -> Model:
    """A small catalog with two POI types and three POIs, one with properties."""
    model = Model()
    model.add_poi_type(PoiType(id="t1", name="Cafe"))
    model.add_poi_type(PoiType(id="t2", name="Museum"))
    model.add_poi(Poi(
        id="p2",
        name="Louvre",
        coord=Coord(lon=2.3376, lat=48.8606),
        poi_type_id="t2",
        properties={"wheelchair": "yes", "opening_hours": "Mo-Su 09:00-18:00"},
        visible=True,
        weight=10,
    ))
    model.add_poi(Poi(
        id="p1",
        name="Café de Flore",
        coord=Coord(lon=2.3325, lat=48.8542),
        poi_type_id="t1",
        visible=False,
        weight=3,
    ))
    model.add_poi(Poi(
        id="p3",
        name="Les Deux Magots; terrasse",
        coord=Coord(lon=2.3333, lat=48.854),
        poi_type_id="t1",
        properties={"note": 'says "bonjour"'},
    ))
    return model


@pytest.fixture
def lyon_model() -> Model:
    """A catalog disjoint from paris_model by POI id, sharing POI type t1."""
    model = Model()
    model.add_poi_type(PoiType(id="t1", name="Cafe"))
    model.add_poi_type(PoiType(id="t3", name="Park"))
    model.add_poi(Poi(
        id="l1",
        name="Parc de la Tête d'Or",
        coord=Coord(lon=4.8522, lat=45.7772),
        poi_type_id="t3",
    ))
    model.add_poi(Poi(
        id="l2",
        name="Slake Coffee House",
        coord=Coord(lon=4.8357, lat=45.7640),
        poi_type_id="t1",
        properties={"wifi": "free"},
    ))
    return model

"""
Test POI entities: coordinate validity, ordering and property ownership.
"""
import pytest
from shapely.geometry import Point

from poimodel import Coord, Poi, PoiType, Property


class TestCoord:
    """Coordinate predicates and conversions."""

    def test_default_is_origin(self):
        """The default coordinate is (0, 0) and reported as default."""
        coord = Coord()
        assert (coord.lon, coord.lat) == (0.0, 0.0)
        assert coord.is_default()

    def test_origin_is_not_valid(self):
        assert not Coord(0.0, 0.0).is_valid()

    def test_paris_is_valid(self):
        assert Coord(2.35, 48.85).is_valid()
        assert not Coord(2.35, 48.85).is_default()

    def test_longitude_out_of_range(self):
        assert not Coord(200.0, 48.85).is_valid()

    def test_latitude_out_of_range(self):
        assert not Coord(2.35, 95.0).is_valid()

    def test_bounds_are_inclusive(self):
        """Poles and the antimeridian are valid positions."""
        assert Coord(180.0, 90.0).is_valid()
        assert Coord(-180.0, -90.0).is_valid()

    def test_only_one_axis_zero_is_not_default(self):
        assert Coord(0.0, 51.48).is_valid()
        assert Coord(9.0, 0.0).is_valid()

    def test_values_stored_unvalidated(self):
        """Construction never rejects a coordinate."""
        coord = Coord(lon=500.0, lat=-1000.0)
        assert coord.lon == 500.0
        assert coord.lat == -1000.0

    def test_is_immutable(self):
        coord = Coord(2.35, 48.85)
        with pytest.raises(AttributeError):
            coord.lon = 3.0

    def test_point_conversion(self):
        """x is the longitude and y the latitude."""
        point = Coord(2.35, 48.85).to_point()
        assert (point.x, point.y) == (2.35, 48.85)
        assert Coord.from_point(Point(4.83, 45.76)) == Coord(lon=4.83, lat=45.76)


class TestOrdering:
    """Property and PoiType order lexicographically on their fields."""

    def test_property_order(self):
        props = [Property("b", "1"), Property("a", "2"), Property("a", "1")]
        assert sorted(props) == [Property("a", "1"), Property("a", "2"), Property("b", "1")]

    def test_poi_type_order_and_equality(self):
        assert PoiType("t1", "Cafe") < PoiType("t1", "Coffee Shop") < PoiType("t2", "Bar")
        assert PoiType("t1", "Cafe") == PoiType("t1", "Cafe")
        assert PoiType("t1", "Cafe") != PoiType("t1", "Coffee Shop")


class TestPoi:
    """POI construction and property map ownership."""

    def test_defaults(self):
        poi = Poi(id="p1", name="Somewhere")
        assert poi.coord.is_default()
        assert poi.properties == {}
        assert poi.visible is True
        assert poi.weight == 0

    def test_properties_from_pairs_last_write_wins(self):
        poi = Poi(
            id="p1",
            name="Somewhere",
            properties=[Property("wifi", "no"), ("seats", "12"), Property("wifi", "yes")],
        )
        assert poi.properties == {"wifi": "yes", "seats": "12"}

    def test_properties_mapping_is_copied(self):
        """The POI owns its property map; the caller's dict is not aliased."""
        source = {"wifi": "yes"}
        poi = Poi(id="p1", name="Somewhere", properties=source)
        source["wifi"] = "no"
        assert poi.properties == {"wifi": "yes"}

    def test_iter_properties_sorted_by_key(self):
        poi = Poi(id="p1", name="Somewhere", properties={"z": "1", "a": "2", "m": "3"})
        assert [p.key for p in poi.iter_properties()] == ["a", "m", "z"]

    def test_poi_type_reference_not_enforced(self):
        """A POI may name a POI type that exists nowhere."""
        poi = Poi(id="p1", name="Somewhere", poi_type_id="does-not-exist")
        assert poi.poi_type_id == "does-not-exist"

    def test_copy_has_its_own_properties(self):
        poi = Poi(id="p1", name="Somewhere", properties={"wifi": "yes"})
        clone = poi.copy()
        clone.properties["wifi"] = "no"
        assert poi.properties == {"wifi": "yes"}
        assert clone.id == poi.id
        assert clone.coord == poi.coord

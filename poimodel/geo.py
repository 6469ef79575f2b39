"""
Geometry interop: POI models as GeoDataFrames.
"""
import geopandas as gpd
import pandas as pd

from . import config
from .model import Model

GEO_COLUMNS = [
    "poi_id",
    "poi_type_id",
    "poi_type_name",
    "poi_name",
    "poi_lat",
    "poi_lon",
    "poi_weight",
    "poi_visible",
]


def create_empty_poi_geodataframe() -> gpd.GeoDataFrame:
    """Create an empty GeoDataFrame with the POI export columns."""
    return gpd.GeoDataFrame(
        columns=GEO_COLUMNS + ["geometry"],
        geometry="geometry",
        crs=config.CRS,
    )


def model_to_geodataframe(model: Model) -> gpd.GeoDataFrame:
    """
    Export the POIs of a model as point features.

    Args:
        model: POI model to export

    Returns:
        GeoDataFrame in EPSG:4326, one row per POI in id order. poi_type_name
        is empty for POIs referencing an unknown POI type.
    """
    pois = list(model.iter_pois())
    if not pois:
        return create_empty_poi_geodataframe()

    rows = []
    for poi in pois:
        poi_type = model.poi_types.get(poi.poi_type_id)
        rows.append({
            "poi_id": poi.id,
            "poi_type_id": poi.poi_type_id,
            "poi_type_name": poi_type.name if poi_type else "",
            "poi_name": poi.name,
            "poi_lat": poi.coord.lat,
            "poi_lon": poi.coord.lon,
            "poi_weight": poi.weight,
            "poi_visible": poi.visible,
        })
    df = pd.DataFrame(rows, columns=GEO_COLUMNS)
    return gpd.GeoDataFrame(
        df,
        geometry=[poi.coord.to_point() for poi in pois],
        crs=config.CRS,
    )

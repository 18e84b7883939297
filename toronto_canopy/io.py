"""
I/O module: read the three raw portal extracts and write the cleaned tables.

Readers fail fast on a missing file; CRS handling of the boundaries is left
to spatial.clean_neighbourhood_polygons.
"""

import pandas as pd
import geopandas as gpd
from pathlib import Path

from . import config


def _existing(filepath, kind):
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"{kind} extract not found: {filepath}")
    return filepath


def read_tree_extract(filepath):
    """Street tree inventory CSV (one row per tree, ~100 MB)."""
    return pd.read_csv(_existing(filepath, "Tree"), low_memory=False)


def read_census_extract(filepath):
    """
    Neighbourhood profile CSV, every cell as text.

    Formatted values ("1,234", "12.5%") and blanks reach the reshaper
    untouched; blanks stay '' rather than NaN.
    """
    return pd.read_csv(_existing(filepath, "Census"), dtype=str, keep_default_na=False)


def read_boundary_extract(filepath):
    """Neighbourhood boundaries (GeoJSON or any format GDAL reads)."""
    return gpd.read_file(_existing(filepath, "Boundary"))


def load_raw_extracts(input_files=None):
    """
    Load the three raw extracts (trees, census profile, neighbourhood boundaries).

    Returns:
        dict with keys 'trees', 'census', 'neighbourhoods'
    """
    input_files = input_files or config.INPUT_FILES
    return {
        "trees": read_tree_extract(input_files["trees"]),
        "census": read_census_extract(input_files["census"]),
        "neighbourhoods": read_boundary_extract(input_files["neighbourhoods"]),
    }


def write_table(df, filepath):
    """Write a cleaned attribute table (trees, census) to CSV without the index."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(filepath, index=False)
    return filepath


def write_boundaries(gdf, parquet_path, geojson_path):
    """
    Write cleaned boundaries as GeoParquet (analysis) and GeoJSON (web), both EPSG:4326.

    Args:
        gdf: cleaned neighbourhood GeoDataFrame
        parquet_path: GeoParquet output path
        geojson_path: GeoJSON output path

    Returns:
        (parquet path, geojson path)
    """
    if not isinstance(gdf, gpd.GeoDataFrame):
        raise TypeError(f"Boundaries must be a GeoDataFrame, got {type(gdf).__name__}")

    if gdf.crs != config.CRS_WEB:
        gdf = gdf.to_crs(config.CRS_WEB)

    parquet_path, geojson_path = Path(parquet_path), Path(geojson_path)
    for path in (parquet_path, geojson_path):
        path.parent.mkdir(parents=True, exist_ok=True)

    gdf.to_parquet(parquet_path)
    gdf.to_file(geojson_path, driver="GeoJSON")

    return parquet_path, geojson_path


def file_size_mb(filepath):
    """Get file size in MB."""
    return Path(filepath).stat().st_size / (1024 ** 2)

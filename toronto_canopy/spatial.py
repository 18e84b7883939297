"""
Spatial module: clean neighbourhood boundary polygons and compute their areas.
"""

import re

import pandas as pd
import geopandas as gpd

from . import config
from .cleaning import clean_names, require_columns, valid_code_mask

# Greedy: from the first '(' to the last ')'. A lone '(' or ')' does not match.
PARENTHETICAL = re.compile(r"\(.*\)")


def normalize_neighbourhood_name(name):
    """Remove the parenthetical annotation from a display name and trim it."""
    if not isinstance(name, str):
        return name
    return PARENTHETICAL.sub("", name).strip()


def compute_area_sq_km(gdf, metric_crs=config.CRS_METRIC):
    """
    Compute polygon areas in km² in a metric CRS.

    Args:
        gdf: GeoDataFrame with a CRS set
        metric_crs: projected CRS whose unit is the metre

    Returns:
        pd.Series of areas (km²), same index as gdf
    """
    if gdf.crs is None:
        raise ValueError("CRS required to compute areas")
    return gdf.geometry.to_crs(metric_crs).area / config.SQ_METRES_PER_SQ_KM


def clean_neighbourhood_polygons(gdf_neighbourhoods):
    """
    Validate and clean neighbourhood boundaries.

    Keeps code, name, classification and geometry; any area attribute in the
    source is ignored and recomputed from the geometry.

    Args:
        gdf_neighbourhoods: Raw neighbourhood GeoDataFrame

    Returns:
        Cleaned GeoDataFrame (EPSG:4326) and log info
    """
    log = []
    gdf_clean = gdf_neighbourhoods.copy()

    # 1. Normalize attribute names, leaving the active geometry column alone
    geom_col = gdf_clean.geometry.name
    cleaned = clean_names(gdf_clean.columns)
    gdf_clean = gdf_clean.rename(columns={
        col: new for col, new in zip(gdf_clean.columns, cleaned) if col != geom_col
    })
    require_columns(gdf_clean, config.NEIGHBOURHOOD_COLUMNS.keys(), "neighbourhood boundaries")
    log.append(f"✓ Column names normalized")

    # 2. Check CRS
    if gdf_clean.crs is None:
        log.append(f"⚠️  CRS missing; assuming {config.CRS_WEB}")
        gdf_clean = gdf_clean.set_crs(config.CRS_WEB)
    else:
        log.append(f"✓ CRS: {gdf_clean.crs}")

    # 3. Project and rename
    attrs = gdf_clean[list(config.NEIGHBOURHOOD_COLUMNS)].rename(columns=config.NEIGHBOURHOOD_COLUMNS)
    gdf_clean = gpd.GeoDataFrame(attrs, geometry=gdf_clean.geometry.values, crs=gdf_clean.crs)

    # 4. Code -> integer join key
    gdf_clean["code"] = pd.to_numeric(gdf_clean["code"], errors="coerce")
    valid = valid_code_mask(gdf_clean["code"])
    invalid_codes = (~valid).sum()
    if invalid_codes > 0:
        log.append(f"⚠️  Dropped {invalid_codes} neighbourhoods with a missing or non-integer code")
        gdf_clean = gdf_clean[valid].copy()
    gdf_clean["code"] = gdf_clean["code"].astype("int64")

    # 5. Names without parenthetical annotations
    gdf_clean["neighbourhood"] = gdf_clean["neighbourhood"].map(normalize_neighbourhood_name)
    log.append(f"✓ Neighbourhood names normalized")

    # 6. Validate geometries
    invalid_before = (~gdf_clean.geometry.is_valid).sum()
    if invalid_before > 0:
        log.append(f"⚠️  Found {invalid_before} invalid geometries; repairing...")
        gdf_clean.geometry = gdf_clean.geometry.buffer(0)
        invalid_after = (~gdf_clean.geometry.is_valid).sum()
        log.append(f"   → After repair: {invalid_after} invalid (target: 0)")
        assert invalid_after == 0, "Failed to repair geometries!"
    else:
        log.append(f"✓ All geometries are valid")

    # 7. Area from geometry (metric CRS)
    gdf_clean["area_sq_km"] = compute_area_sq_km(gdf_clean)
    log.append(f"✓ Area calculated (in {config.CRS_METRIC})")
    log.append(f"  - Area range: {gdf_clean['area_sq_km'].min():.2f} - {gdf_clean['area_sq_km'].max():.2f} km²")

    # 8. Ensure EPSG:4326 for final output
    if gdf_clean.crs != config.CRS_WEB:
        gdf_clean = gdf_clean.to_crs(config.CRS_WEB)

    gdf_clean = gdf_clean[["code", "neighbourhood", "area_sq_km", "classification", "geometry"]]
    gdf_clean = gdf_clean.reset_index(drop=True)

    log.append(f"✓ Neighbourhood cleaning complete: {gdf_neighbourhoods.shape} → {gdf_clean.shape}")

    return gdf_clean, log

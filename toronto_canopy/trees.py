"""
Trees module: clean the street tree inventory.

Projects the raw extract to id / trunk diameter / common name / point
geometry, treats zero or negative diameters as unmeasured, parses the point
strings into longitude and latitude, and flags unusually small and large
trunks.
"""

import re
from typing import NamedTuple

import numpy as np
import pandas as pd

from . import config
from .cleaning import clean_column_names, require_columns

POINT_PATTERN = re.compile(
    "^" + re.escape(config.POINT_PREFIX) + r"(?P<body>.*)" + re.escape(config.POINT_SUFFIX) + "$"
)


class SizeThresholds(NamedTuple):
    """Trunk diameter cut-offs for one pipeline run."""

    small: float
    large: float


def parse_point(value):
    """
    Parse one point string into (longitude, latitude).

    Returns (nan, nan) if the literal wrapper is absent or the body is not
    exactly two numbers.
    """
    if not isinstance(value, str):
        return np.nan, np.nan

    match = POINT_PATTERN.match(value.strip())
    if match is None:
        return np.nan, np.nan

    parts = match.group("body").split(",")
    if len(parts) != 2:
        return np.nan, np.nan

    try:
        return float(parts[0]), float(parts[1])
    except ValueError:
        return np.nan, np.nan


def parse_point_coordinates(s: pd.Series) -> pd.DataFrame:
    """
    Parse a series of point strings into a DataFrame with longitude / latitude.

    Args:
        s: pd.Series of strings like "{u'type': u'Point', u'coordinates': (-79.38, 43.65)}"

    Returns:
        pd.DataFrame with float columns 'longitude' and 'latitude', same index as s
    """
    parsed = [parse_point(value) for value in s]
    return pd.DataFrame(parsed, index=s.index, columns=["longitude", "latitude"], dtype="float64")


def compute_size_thresholds(diameters, quantiles=config.TRUNK_QUANTILES):
    """
    Compute the small / large cut-offs from the full diameter distribution.

    Missing diameters are ignored. Must run over every row before any row is
    classified.
    """
    low_q, high_q = quantiles
    measured = pd.Series(diameters, dtype="float64").dropna()
    if measured.empty:
        return SizeThresholds(small=np.nan, large=np.nan)
    low, high = measured.quantile([low_q, high_q])
    return SizeThresholds(small=float(low), large=float(high))


def classify_trunk_sizes(df, thresholds):
    """
    Add size_class, is_large and is_small columns using precomputed thresholds.

    Args:
        df: DataFrame with a 'trunk_diameter' column
        thresholds: SizeThresholds from compute_size_thresholds()

    Returns:
        New DataFrame with the three columns added
    """
    df_out = df.copy()
    diameter = df_out["trunk_diameter"]
    missing = diameter.isna()
    is_large = (diameter > thresholds.large) & ~missing
    is_small = (diameter < thresholds.small) & ~missing

    size_class = np.select(
        [missing, is_large, is_small],
        ["unknown", "large", "small"],
        default="typical",
    )
    df_out["size_class"] = pd.Categorical(size_class, categories=config.SIZE_CLASSES)

    # Flags are unknown (not False) for unmeasured trees
    df_out["is_large"] = is_large.astype("boolean").mask(missing)
    df_out["is_small"] = is_small.astype("boolean").mask(missing)
    return df_out


def clean_trees(df_trees, thresholds=None):
    """
    Clean tree inventory data.

    Args:
        df_trees: Raw tree DataFrame
        thresholds: optional SizeThresholds; computed from this data if None

    Returns:
        Cleaned DataFrame and log info
    """
    log = []

    # 1. Normalize column names and project
    df_clean = clean_column_names(df_trees)
    require_columns(df_clean, config.TREE_COLUMNS.keys(), "tree inventory")
    df_clean = df_clean[list(config.TREE_COLUMNS)].rename(columns=config.TREE_COLUMNS).copy()
    log.append(f"✓ Kept {len(config.TREE_COLUMNS)} of {df_trees.shape[1]} columns")

    # 2. Trunk diameter: numeric, zero or negative means not measured
    raw_diameter = df_clean["trunk_diameter"]
    df_clean["trunk_diameter"] = pd.to_numeric(raw_diameter, errors="coerce")
    unparsed = (df_clean["trunk_diameter"].isna() & raw_diameter.notna()).sum()
    if unparsed > 0:
        log.append(f"⚠️  {unparsed} unparseable trunk diameters (set to NaN)")

    zero_mask = df_clean["trunk_diameter"] == 0
    negative_mask = df_clean["trunk_diameter"] < 0
    df_clean.loc[zero_mask | negative_mask, "trunk_diameter"] = np.nan
    log.append(f"✓ {zero_mask.sum():,} zero trunk diameters recoded as missing")
    if negative_mask.any():
        log.append(f"⚠️  {negative_mask.sum():,} negative trunk diameters recoded as missing")

    # 3. Point strings -> longitude / latitude
    coords = parse_point_coordinates(df_clean["coordinates"])
    df_clean = pd.concat([df_clean.drop(columns="coordinates"), coords], axis=1)
    bad_points = coords["longitude"].isna().sum()
    if bad_points > 0:
        log.append(f"⚠️  {bad_points:,} geometry strings did not match the point format (coordinates set to NaN)")
    log.append(f"✓ Coordinates parsed for {len(df_clean) - bad_points:,} trees")

    # 4. Size classification against the run's quartiles
    if thresholds is None:
        thresholds = compute_size_thresholds(df_clean["trunk_diameter"])
    df_clean = classify_trunk_sizes(df_clean, thresholds)
    counts = df_clean["size_class"].value_counts()
    log.append(
        f"✓ Size classes (small < {thresholds.small:g} in, large > {thresholds.large:g} in): "
        + ", ".join(f"{name}={counts.get(name, 0):,}" for name in config.SIZE_CLASSES)
    )

    log.append(f"✓ Tree cleaning complete: {df_trees.shape} → {df_clean.shape}")

    return df_clean, log

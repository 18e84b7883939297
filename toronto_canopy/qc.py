"""
Quality Control (QC) module: Assertions and data quality checks.
"""

import numpy as np

from . import config
from . import census_variables as cv

def check_unique_ids(df, id_col='code'):
    """Assert IDs are unique (no duplicates)."""
    assert df[id_col].isnull().sum() == 0, f"Null {id_col} values found!"
    assert df[id_col].duplicated().sum() == 0, f"Duplicate {id_col} values found!"
    return f"✓ {id_col} is unique (n={len(df)})"

def check_geometry_validity(gdf):
    """Assert all geometries are valid."""
    assert (~gdf.geometry.is_valid).sum() == 0, "Found invalid geometries!"
    assert gdf.geometry.is_empty.sum() == 0, "Found empty geometries!"
    return f"✓ All {len(gdf)} geometries are valid"

def check_crs(gdf, expected_crs=config.CRS_WEB):
    """Assert CRS matches expected."""
    assert gdf.crs == expected_crs, f"CRS mismatch: {gdf.crs} != {expected_crs}"
    return f"✓ CRS is {expected_crs}"

def check_neighbourhood_count(df, expected=config.EXPECTED_NEIGHBOURHOOD_COUNT, id_col='code'):
    """Assert the table covers the expected number of neighbourhoods."""
    n = df[id_col].nunique()
    assert n == expected, f"Expected {expected} neighbourhoods, found {n}"
    return f"✓ {n} neighbourhoods"

def check_join_integrity(df_census, gdf_neighbourhoods, id_col='code'):
    """Assert census and boundary tables cover exactly the same codes."""
    census_codes = set(df_census[id_col].dropna().tolist())
    polygon_codes = set(gdf_neighbourhoods[id_col].dropna().tolist())

    only_census = sorted(census_codes - polygon_codes)
    only_polygons = sorted(polygon_codes - census_codes)

    assert not only_census and not only_polygons, (
        f"Join key mismatch: {len(only_census)} codes only in census {only_census[:10]}, "
        f"{len(only_polygons)} codes only in boundaries {only_polygons[:10]}"
    )
    return f"✓ {len(census_codes)} codes match between census and boundaries"

def check_trunk_diameters(df, col='trunk_diameter'):
    """Assert every measured trunk diameter is positive."""
    non_positive = (df[col] <= 0).sum()
    assert non_positive == 0, f"{non_positive} zero or negative values left in {col}"
    return f"✓ {col}: {df[col].notna().sum():,} measured, all positive"

def check_proportion_groups(df_prop, variables=cv.CENSUS_VARIABLES, tol=1e-9):
    """Assert every proportion group sums to 1 (or is entirely missing) per row."""
    checked = []
    for group in cv.PROPORTION_GROUPS:
        fields = cv.group_fields(group, variables)
        if not fields:
            continue
        values = df_prop[fields]
        all_missing = values.isna().all(axis=1)
        sums = values.sum(axis=1, skipna=True)
        bad = ~all_missing & ~np.isclose(sums, 1.0, atol=tol)
        assert not bad.any(), f"{group}: {bad.sum()} rows do not sum to 1"
        checked.append(group)
    return f"✓ Proportion groups sum to 1: {', '.join(checked)}"

def print_qc_report(checks):
    """
    Print formatted QC report.

    Args:
        checks: List of (name, check_func, kwargs) tuples

    Returns:
        Number of failed checks
    """
    print("\n" + "=" * 80)
    print("QUALITY CONTROL REPORT")
    print("=" * 80)

    failures = 0
    for name, check_func, kwargs in checks:
        try:
            result = check_func(**kwargs)
            print(f"\n{name}")
            print(f"  {result}")
        except AssertionError as e:
            failures += 1
            print(f"\n❌ {name}")
            print(f"  ERROR: {e}")
        except Exception as e:
            # A check that cannot run counts as failed
            failures += 1
            print(f"\n❌ {name}")
            print(f"  ERROR (check did not run): {type(e).__name__}: {e}")

    print("\n" + "=" * 80)
    return failures

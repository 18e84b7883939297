"""
02_clean.py
- Load raw extracts from data/original/
- Clean trees, reshape census profile, clean neighbourhood boundaries
- Save cleaned data into data/processed/
- Print QC report
"""

from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from toronto_canopy import config, qc
from toronto_canopy.pipeline import run_pipeline


def main():
    config.ensure_directories()
    config.print_config()

    tables, _ = run_pipeline()

    trees = tables["trees_clean"]
    census = tables["census_clean"]
    census_prop = tables["census_proportional"]
    neighbourhoods = tables["neighbourhoods_clean"]

    checks = [
        ("Trees: trunk diameters", qc.check_trunk_diameters, {"df": trees}),
        ("Census: unique codes", qc.check_unique_ids, {"df": census}),
        ("Census: neighbourhood count", qc.check_neighbourhood_count, {"df": census}),
        ("Census: proportion groups", qc.check_proportion_groups, {"df_prop": census_prop}),
        ("Boundaries: unique codes", qc.check_unique_ids, {"df": neighbourhoods}),
        ("Boundaries: neighbourhood count", qc.check_neighbourhood_count, {"df": neighbourhoods}),
        ("Boundaries: geometry validity", qc.check_geometry_validity, {"gdf": neighbourhoods}),
        ("Boundaries: CRS", qc.check_crs, {"gdf": neighbourhoods}),
        ("Join integrity (census ↔ boundaries)", qc.check_join_integrity,
         {"df_census": census, "gdf_neighbourhoods": neighbourhoods}),
    ]
    failures = qc.print_qc_report(checks)
    if failures:
        sys.exit(1)

if __name__ == "__main__":
    main()

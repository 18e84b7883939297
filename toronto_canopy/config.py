"""
Configuration module: paths, CRS constants, column contracts, and global settings.
"""

from pathlib import Path

# ============================================================================
# PROJECT PATHS (all relative to PROJECT_ROOT)
# ============================================================================

# Detect PROJECT_ROOT: either cwd or parent if in notebooks/scripts
def get_project_root():
    """Auto-detect project root by checking for data/ and toronto_canopy/ folders."""
    cwd = Path.cwd()

    # If already in project root
    if (cwd / "data").exists() and (cwd / "toronto_canopy").exists():
        return cwd

    # If in notebooks/ or scripts/
    if cwd.name in ["notebooks", "scripts"] and (cwd.parent / "data").exists():
        return cwd.parent

    # Fallback: the folder that holds this package
    return Path(__file__).resolve().parent.parent

PROJECT_ROOT = get_project_root()

# Core data paths
DATA_DIR = PROJECT_ROOT / "data"
ORIGINAL_DIR = DATA_DIR / "original"
PROCESSED_DIR = DATA_DIR / "processed"

# Input files (raw extracts from the Toronto open data portal)
INPUT_FILES = {
    "trees": ORIGINAL_DIR / "raw_tree_data.csv",
    "census": ORIGINAL_DIR / "raw_neighbourhood_census_data.csv",
    "neighbourhoods": ORIGINAL_DIR / "raw_neighbourhood_map_data.geojson",
}

# Output files (processed)
OUTPUT_FILES = {
    "trees_clean": PROCESSED_DIR / "clean_tree_data.csv",
    "census_clean": PROCESSED_DIR / "clean_neighbourhood_census_data.csv",
    "census_proportional": PROCESSED_DIR / "proportional_neighbourhood_census_data.csv",
    "neighbourhoods_clean": PROCESSED_DIR / "clean_neighbourhood_map_data.parquet",
    "neighbourhoods_clean_geojson": PROCESSED_DIR / "clean_neighbourhood_map_data.geojson",
}


def ensure_directories():
    """Create the data folders used by the pipeline if missing."""
    ORIGINAL_DIR.mkdir(parents=True, exist_ok=True)
    PROCESSED_DIR.mkdir(parents=True, exist_ok=True)

# ============================================================================
# GEOSPATIAL & CRS CONSTANTS
# ============================================================================

# Web mapping CRS (WGS84 - the portal publishes boundaries in it)
CRS_WEB = "EPSG:4326"

# Metric CRS for Toronto (NAD83 / UTM Zone 17N - for area calculations)
CRS_METRIC = "EPSG:26917"

SQ_METRES_PER_SQ_KM = 1000 ** 2

# ============================================================================
# TREE INVENTORY
# ============================================================================

# Raw (normalized) column -> clean column
TREE_COLUMNS = {
    "id": "tree_id",
    "dbh_trunk": "trunk_diameter",  # diameter of trunk in inches at breast height
    "common_name": "common_name",
    "geometry": "coordinates",      # string holding the tree's longitude and latitude
}

# Point geometry strings look like {u'type': u'Point', u'coordinates': (-79.38, 43.65)}
POINT_PREFIX = "{u'type': u'Point', u'coordinates': ("
POINT_SUFFIX = ")}"

# Trunk diameter quartiles used to flag small / large trees
TRUNK_QUANTILES = (0.25, 0.75)

SIZE_CLASSES = ["small", "typical", "large", "unknown"]

# ============================================================================
# NEIGHBOURHOOD CENSUS PROFILE
# ============================================================================

# Row-wise metadata columns, dropped before the transpose
CENSUS_METADATA_COLUMNS = ["id", "category", "topic", "data_source"]

# Column holding the statistic names (becomes the header after the transpose)
CENSUS_HEADER_COLUMN = "characteristic"

# Column that keeps the original neighbourhood column label after the transpose
CENSUS_LABEL_COLUMN = "neighbourhood_label"

# ============================================================================
# NEIGHBOURHOOD BOUNDARIES
# ============================================================================

NEIGHBOURHOOD_COLUMNS = {
    "area_long_code": "code",
    "area_name": "neighbourhood",
    "classification": "classification",
}

# Toronto's census-defined neighbourhoods (2016 boundaries)
EXPECTED_NEIGHBOURHOOD_COUNT = 140

# ============================================================================
# LOGGING & VERBOSITY
# ============================================================================

VERBOSE = True

def print_config():
    """Print all configuration settings."""
    print("\n" + "=" * 80)
    print("PIPELINE CONFIGURATION")
    print("=" * 80)
    print(f"\n📁 PROJECT ROOT: {PROJECT_ROOT}")
    print(f"📂 ORIGINAL DIR: {ORIGINAL_DIR}")
    print(f"📂 PROCESSED DIR: {PROCESSED_DIR}")
    print(f"\n🗺️  CRS Settings:")
    print(f"   Web (output): {CRS_WEB}")
    print(f"   Metric (area): {CRS_METRIC}")
    print(f"\n🌳 Trunk quantiles: {TRUNK_QUANTILES}")
    print(f"🏘️  Expected neighbourhoods: {EXPECTED_NEIGHBOURHOOD_COUNT}")
    print(f"\n✓ Configuration loaded successfully")
    print("=" * 80 + "\n")

"""
Pipeline module: run the three cleaning branches and write their outputs.

Trees, census and boundaries are cleaned independently; none reads another's
output.
"""

from . import config, io
from .census import reshape_census
from .spatial import clean_neighbourhood_polygons
from .trees import clean_trees


def clean_all(raw):
    """
    Clean the three raw extracts.

    Args:
        raw: dict with 'trees', 'census', 'neighbourhoods' (see io.load_raw_extracts)

    Returns:
        dict of cleaned tables and dict of per-step logs
    """
    logs = {}

    trees_clean, logs["trees"] = clean_trees(raw["trees"])
    census_clean, census_prop, logs["census"] = reshape_census(raw["census"])
    neighbourhoods_clean, logs["neighbourhoods"] = clean_neighbourhood_polygons(raw["neighbourhoods"])

    tables = {
        "trees_clean": trees_clean,
        "census_clean": census_clean,
        "census_proportional": census_prop,
        "neighbourhoods_clean": neighbourhoods_clean,
    }
    return tables, logs


def write_outputs(tables, output_files=None):
    """
    Write the cleaned tables.

    Returns:
        dict of output name -> written path
    """
    output_files = output_files or config.OUTPUT_FILES
    paths = {
        name: io.write_table(tables[name], output_files[name])
        for name in ("trees_clean", "census_clean", "census_proportional")
    }
    paths["neighbourhoods_clean"], paths["neighbourhoods_clean_geojson"] = io.write_boundaries(
        tables["neighbourhoods_clean"],
        output_files["neighbourhoods_clean"],
        output_files["neighbourhoods_clean_geojson"],
    )
    return paths


def print_logs(logs):
    for step, lines in logs.items():
        print(f"\n[{step.upper()}]")
        for line in lines:
            print(f"  {line}")


def run_pipeline(input_files=None, output_files=None, verbose=config.VERBOSE):
    """
    Load, clean, and write everything.

    Stops at the first structural failure (cleaning.MissingColumnError) or
    missing input file; nothing is written in that case.

    Returns:
        (cleaned tables, written paths)
    """
    raw = io.load_raw_extracts(input_files)
    tables, logs = clean_all(raw)
    if verbose:
        print_logs(logs)

    paths = write_outputs(tables, output_files)
    if verbose:
        print("\n✓ Outputs written:")
        for name, path in paths.items():
            print(f"  {name:32s} {io.file_size_mb(path):8.2f} MB  {path}")

    return tables, paths

"""
tests/conftest.py — Shared pytest fixtures for the cleaning pipeline tests.

Provides:
  raw_trees_df          — raw street tree extract (portal column names)
  raw_census_df         — raw wide census profile covering every allowlisted statistic
  raw_neighbourhoods_gdf — raw neighbourhood boundaries (1 km² squares)
  raw_input_files       — the three raw extracts written to tmp_path
"""

from __future__ import annotations

import geopandas as gpd
import pandas as pd
import pytest
from shapely.geometry import box

from toronto_canopy import census_variables as cv

POINT = "{{u'type': u'Point', u'coordinates': ({lon}, {lat})}}"

# Source label -> how the statistic is spelled in the portal extract
RAW_LABELS = {
    "neighbourhood_number": "Neighbourhood Number",
    "population_2016": "Population, 2016",
    "population_density_per_square_kilometre": "Population density per square kilometre",
    "land_area_in_square_kilometres": "Land area in square kilometres",
    "occupied_private_dwellings_by_structural_type_of_dwelling":
        "Occupied private dwellings by structural type of dwelling",
    "apartment_in_a_building_that_has_five_or_more_storeys":
        "Apartment in a building that has five or more storeys",
    "apartment_in_a_building_that_has_fewer_than_five_storeys":
        "Apartment in a building that has fewer than five storeys",
    "apartment_or_flat_in_a_duplex": "Apartment or flat in a duplex",
    "semi_detached_house": "Semi-detached house",
    "other_single_attached_house": "Other single-attached house",
    "single_detached_house": "Single-detached house",
    "row_house": "Row house",
    "movable_dwelling": "Movable dwelling",
    "total_occupied_private_dwellings_by_period_of_construction_25_percent_sample_data":
        "Total - Occupied private dwellings by period of construction - 25% sample data",
    "x1960_or_before": "1960 or before",
    "x1961_to_1980": "1961 to 1980",
    "x1981_to_1990_2": "1981 to 1990",
    "x1991_to_2000_2": "1991 to 2000",
    "x2001_to_2005_2": "2001 to 2005",
    "x2006_to_2010_2": "2006 to 2010",
    "x2011_to_2016_2": "2011 to 2016",
    "average_household_size": "Average household size",
    "persons_living_alone_per_cent": "Persons living alone (per cent)",
    "prevalence_of_low_income_based_on_the_low_income_measure_after_tax_lim_at_percent":
        "Prevalence of low income based on the Low-income measure, after tax (LIM-AT) (%)",
    "total_economic_family_income_decile_group_for_the_population_in_private_households_100_percent_data":
        "Total - Economic family income decile group for the population in private households - 100% data",
    "in_the_bottom_decile": "In the bottom decile",
    "in_the_second_decile": "In the second decile",
    "in_the_third_decile": "In the third decile",
    "in_the_fourth_decile": "In the fourth decile",
    "in_the_fifth_decile": "In the fifth decile",
    "in_the_sixth_decile": "In the sixth decile",
    "in_the_seventh_decile": "In the seventh decile",
    "in_the_eighth_decile": "In the eighth decile",
    "in_the_ninth_decile": "In the ninth decile",
    "in_the_top_decile": "In the top decile",
    "total_visible_minority_for_the_population_in_private_households_25_percent_sample_data":
        "Total - Visible minority for the population in private households - 25% sample data",
    "total_visible_minority_population": "Total visible minority population",
    "chinese": "Chinese",
    "south_asian": "South Asian",
    "black": "Black",
    "latin_american": "Latin American",
    "filipino": "Filipino",
    "arab": "Arab",
    "southeast_asian": "Southeast Asian",
    "west_asian": "West Asian",
    "korean_4": "Korean",
    "japanese_4": "Japanese",
    "visible_minority_n_i_e": "Visible minority, n.i.e.",
    "multiple_visible_minorities": "Multiple visible minorities",
    "not_a_visible_minority": "Not a visible minority",
}

# Earlier occurrences of repeated labels (e.g. the ethnic origin table)
REPEATS = {"korean_4": 3, "japanese_4": 3, "x1981_to_1990_2": 1, "x1991_to_2000_2": 1,
           "x2001_to_2005_2": 1, "x2006_to_2010_2": 1, "x2011_to_2016_2": 1}

NEIGHBOURHOODS = {"Agincourt North": 129, "Agincourt South-Malvern West": 128}


def census_value(source: str, column: int) -> str:
    """Deterministic formatted value for one statistic / neighbourhood column."""
    position = cv.source_names().index(source) + 1
    value = position * 100 * (column + 1)
    if source.endswith("percent") or source.endswith("per_cent"):
        return f"{value / 1000:.1f}%"
    return f"{value:,}"


def build_raw_census() -> pd.DataFrame:
    rows = []
    for source in cv.source_names():
        label = RAW_LABELS[source]
        for _ in range(REPEATS.get(source, 0)):
            rows.append({"Characteristic": label, "City of Toronto": "1",
                         **{name: "999" for name in NEIGHBOURHOODS}})
        if source == "neighbourhood_number":
            values = {name: str(code) for name, code in NEIGHBOURHOODS.items()}
            city = ""
        else:
            values = {name: census_value(source, i) for i, name in enumerate(NEIGHBOURHOODS)}
            city = "2,731,571"
        rows.append({"Characteristic": label, "City of Toronto": city, **values})

    df = pd.DataFrame(rows)
    df.insert(0, "_id", [str(i + 1) for i in range(len(df))])
    df.insert(1, "Category", "Population")
    df.insert(2, "Topic", "Demo")
    df.insert(3, "Data Source", "Census Profile 98-316-X2016001")
    return df


@pytest.fixture
def raw_census_df() -> pd.DataFrame:
    return build_raw_census()


@pytest.fixture
def raw_trees_df() -> pd.DataFrame:
    return pd.DataFrame({
        "_id": [1, 2, 3, 4, 5],
        "OBJECTID": [10, 20, 30, 40, 50],
        "ADDRESS": ["1 Bay St", "2 Bay St", "3 Bay St", "4 Bay St", "5 Bay St"],
        "DBH_TRUNK": [0, 12, 30, 5, 18],
        "COMMON_NAME": ["Maple, Norway", "Honeylocust", "Oak, red", "Linden", "Maple, silver"],
        "geometry": [
            POINT.format(lon=-79.38, lat=43.65),
            POINT.format(lon=-79.4, lat=43.7),
            "POINT (-79.5 43.7)",
            POINT.format(lon=-79.41, lat=43.66),
            None,
        ],
    })


@pytest.fixture
def raw_neighbourhoods_gdf() -> gpd.GeoDataFrame:
    squares = gpd.GeoSeries(
        [box(630000, 4840000, 631000, 4841000), box(631000, 4840000, 633000, 4841000)],
        crs="EPSG:26917",
    ).to_crs("EPSG:4326")
    return gpd.GeoDataFrame(
        {
            "_id": [1, 2],
            "AREA_LONG_CODE": ["129", "128"],
            "AREA_NAME": ["Agincourt North (129)", "Agincourt South-Malvern West (128)"],
            "Shape__Area": [123.0, 456.0],
            "CLASSIFICATION": ["Not an NIA or Emerging Neighbourhood", "Neighbourhood Improvement Area"],
        },
        geometry=squares,
        crs="EPSG:4326",
    )


@pytest.fixture
def raw_input_files(tmp_path, raw_trees_df, raw_census_df, raw_neighbourhoods_gdf) -> dict:
    original = tmp_path / "original"
    original.mkdir()
    files = {
        "trees": original / "raw_tree_data.csv",
        "census": original / "raw_neighbourhood_census_data.csv",
        "neighbourhoods": original / "raw_neighbourhood_map_data.geojson",
    }
    raw_trees_df.to_csv(files["trees"], index=False)
    raw_census_df.to_csv(files["census"], index=False)
    raw_neighbourhoods_gdf.to_file(files["neighbourhoods"], driver="GeoJSON")
    return files

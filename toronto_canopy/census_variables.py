"""
Census variable allowlist for the 2016 Toronto Neighbourhood Profiles.

Each record maps a normalized source label (as produced by
cleaning.clean_names, duplicate suffixes included) to the name used in the
cleaned tables, and names the group it is proportionalized within. Update
this list when the census product changes; nothing else in the pipeline
hard-codes statistic names.
"""

from typing import NamedTuple, Optional


class CensusVariable(NamedTuple):
    source: str
    target: str
    group: Optional[str] = None
    is_total: bool = False


# Groups proportionalized row-wise
VISIBLE_MINORITY = "visible_minority"
HOUSING_TYPE = "housing_type"
HOUSING_AGE = "housing_age"
INCOME_DECILE = "income_decile"

PROPORTION_GROUPS = [VISIBLE_MINORITY, HOUSING_TYPE, HOUSING_AGE, INCOME_DECILE]

CODE_FIELD = "code"

CENSUS_VARIABLES = [
    CensusVariable("neighbourhood_number", CODE_FIELD),
    CensusVariable("population_2016", "population_2016"),
    CensusVariable("population_density_per_square_kilometre", "population_density"),
    CensusVariable("land_area_in_square_kilometres", "land_area_sq_km"),

    # Housing controls: structural type of dwelling
    CensusVariable("occupied_private_dwellings_by_structural_type_of_dwelling",
                   "dwellings_by_type_total", is_total=True),
    CensusVariable("apartment_in_a_building_that_has_five_or_more_storeys",
                   "housing_apartment_five_or_more_storeys", HOUSING_TYPE),
    CensusVariable("apartment_in_a_building_that_has_fewer_than_five_storeys",
                   "housing_apartment_fewer_than_five_storeys", HOUSING_TYPE),
    CensusVariable("apartment_or_flat_in_a_duplex", "housing_apartment_or_flat_in_a_duplex", HOUSING_TYPE),
    CensusVariable("semi_detached_house", "housing_semi_detached_house", HOUSING_TYPE),
    CensusVariable("other_single_attached_house", "housing_other_single_attached_house", HOUSING_TYPE),
    CensusVariable("single_detached_house", "housing_single_detached_house", HOUSING_TYPE),
    CensusVariable("row_house", "housing_row_house", HOUSING_TYPE),
    CensusVariable("movable_dwelling", "housing_movable_dwelling", HOUSING_TYPE),

    # Neighbourhood age proxy: period of construction
    CensusVariable("total_occupied_private_dwellings_by_period_of_construction_25_percent_sample_data",
                   "dwellings_by_period_total", is_total=True),
    CensusVariable("x1960_or_before", "built_1960_or_before", HOUSING_AGE),
    CensusVariable("x1961_to_1980", "built_1961_to_1980", HOUSING_AGE),
    CensusVariable("x1981_to_1990_2", "built_1981_to_1990", HOUSING_AGE),
    CensusVariable("x1991_to_2000_2", "built_1991_to_2000", HOUSING_AGE),
    CensusVariable("x2001_to_2005_2", "built_2001_to_2005", HOUSING_AGE),
    CensusVariable("x2006_to_2010_2", "built_2006_to_2010", HOUSING_AGE),
    CensusVariable("x2011_to_2016_2", "built_2011_to_2016", HOUSING_AGE),

    # Household composition
    CensusVariable("average_household_size", "average_household_size"),
    CensusVariable("persons_living_alone_per_cent", "persons_living_alone_pct"),

    # Income
    CensusVariable("prevalence_of_low_income_based_on_the_low_income_measure_after_tax_lim_at_percent",
                   "low_income_prevalence_pct"),
    CensusVariable("total_economic_family_income_decile_group_for_the_population_in_private_households_100_percent_data",
                   "income_decile_total", is_total=True),
    CensusVariable("in_the_bottom_decile", "income_decile_1", INCOME_DECILE),
    CensusVariable("in_the_second_decile", "income_decile_2", INCOME_DECILE),
    CensusVariable("in_the_third_decile", "income_decile_3", INCOME_DECILE),
    CensusVariable("in_the_fourth_decile", "income_decile_4", INCOME_DECILE),
    CensusVariable("in_the_fifth_decile", "income_decile_5", INCOME_DECILE),
    CensusVariable("in_the_sixth_decile", "income_decile_6", INCOME_DECILE),
    CensusVariable("in_the_seventh_decile", "income_decile_7", INCOME_DECILE),
    CensusVariable("in_the_eighth_decile", "income_decile_8", INCOME_DECILE),
    CensusVariable("in_the_ninth_decile", "income_decile_9", INCOME_DECILE),
    CensusVariable("in_the_top_decile", "income_decile_10", INCOME_DECILE),

    # Visible minority status
    CensusVariable("total_visible_minority_for_the_population_in_private_households_25_percent_sample_data",
                   "visible_minority_universe_total", is_total=True),
    CensusVariable("total_visible_minority_population", "visible_minority_population_total", is_total=True),
    CensusVariable("chinese", "vm_chinese", VISIBLE_MINORITY),
    CensusVariable("south_asian", "vm_south_asian", VISIBLE_MINORITY),
    CensusVariable("black", "vm_black", VISIBLE_MINORITY),
    CensusVariable("latin_american", "vm_latin_american", VISIBLE_MINORITY),
    CensusVariable("filipino", "vm_filipino", VISIBLE_MINORITY),
    CensusVariable("arab", "vm_arab", VISIBLE_MINORITY),
    CensusVariable("southeast_asian", "vm_southeast_asian", VISIBLE_MINORITY),
    CensusVariable("west_asian", "vm_west_asian", VISIBLE_MINORITY),
    CensusVariable("korean_4", "vm_korean", VISIBLE_MINORITY),
    CensusVariable("japanese_4", "vm_japanese", VISIBLE_MINORITY),
    CensusVariable("visible_minority_n_i_e", "vm_visible_minority_n_i_e", VISIBLE_MINORITY),
    CensusVariable("multiple_visible_minorities", "vm_multiple_visible_minorities", VISIBLE_MINORITY),
    CensusVariable("not_a_visible_minority", "vm_not_a_visible_minority", VISIBLE_MINORITY),
]

# Subtracted from the visible minority group total to get minority_total
NOT_VISIBLE_MINORITY = "vm_not_a_visible_minority"


def source_names(variables=CENSUS_VARIABLES):
    return [var.source for var in variables]


def rename_map(variables=CENSUS_VARIABLES):
    return {var.source: var.target for var in variables}


def group_fields(group, variables=CENSUS_VARIABLES):
    """Target names of the fields in one proportion group, in allowlist order."""
    return [var.target for var in variables if var.group == group]


def total_fields(variables=CENSUS_VARIABLES):
    return [var.target for var in variables if var.is_total]

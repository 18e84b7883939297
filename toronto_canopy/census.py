"""
Census module: reshape the wide neighbourhood profile table.

The raw profile has one row per statistic and one column per neighbourhood.
It is pivoted to one row per neighbourhood, reduced to the allowlist in
census_variables, coerced to numbers, renamed, and finally turned into
within-group proportions.
"""

import pandas as pd

from . import config
from . import census_variables as cv
from .cleaning import (
    clean_column_names,
    clean_names,
    parse_count_series,
    require_columns,
    valid_code_mask,
)


def pivot_statistics(df, header_col, label_col=config.CENSUS_LABEL_COLUMN):
    """
    Turn a statistics-as-rows table into a statistics-as-columns table.

    The values of header_col (normalized with clean_names, so duplicates get
    numeric suffixes) become the field names; every other column becomes one
    output row, with its column label kept in label_col.

    Args:
        df: DataFrame with one row per statistic
        header_col: column holding the statistic names
        label_col: name of the output column holding the original column labels

    Returns:
        pd.DataFrame with one row per non-header column of df
    """
    require_columns(df, [header_col], "census profile")

    field_names = clean_names(df[header_col].tolist())
    if label_col in field_names:
        raise ValueError(f"Statistic name collides with label column '{label_col}'")

    records = []
    for col in df.columns:
        if col == header_col:
            continue
        record = {label_col: col}
        record.update(zip(field_names, df[col].tolist()))
        records.append(record)

    return pd.DataFrame.from_records(records, columns=[label_col] + field_names)


def clean_census(df_census, variables=cv.CENSUS_VARIABLES):
    """
    Clean census profile data: drop metadata, transpose, select, coerce, rename.

    Args:
        df_census: Raw census DataFrame (statistics as rows)
        variables: allowlist of CensusVariable records

    Returns:
        Cleaned DataFrame (one row per neighbourhood, keyed by 'code') and log info
    """
    log = []

    # 1. Normalize column names and drop row-wise metadata
    df_clean = clean_column_names(df_census)
    require_columns(
        df_clean,
        config.CENSUS_METADATA_COLUMNS + [config.CENSUS_HEADER_COLUMN],
        "census profile",
    )
    df_clean = df_clean.drop(columns=config.CENSUS_METADATA_COLUMNS)
    log.append(f"✓ Dropped metadata columns: {', '.join(config.CENSUS_METADATA_COLUMNS)}")

    # 2. Transpose: statistics become columns
    df_clean = pivot_statistics(df_clean, config.CENSUS_HEADER_COLUMN)
    log.append(f"✓ Transposed {len(df_census):,} statistics × {len(df_clean)} areas")

    # 3. Keep the allowlisted statistics
    sources = cv.source_names(variables)
    require_columns(df_clean, sources, "census profile")
    df_clean = df_clean[sources].copy()
    log.append(f"✓ Selected {len(sources)} census variables")

    # 4. Formatted text -> numbers
    unparsed = 0
    for col in sources:
        raw = df_clean[col]
        df_clean[col] = parse_count_series(raw)
        blank = raw.isna() | (raw.astype(str).str.strip() == "")
        unparsed += int((df_clean[col].isna() & ~blank).sum())
    if unparsed > 0:
        log.append(f"⚠️  {unparsed} census values could not be parsed (set to NaN)")

    # 5. Rename to short names
    df_clean = df_clean.rename(columns=cv.rename_map(variables))

    # 6. Drop transpose artifacts (e.g. the city-wide column) and fractional codes
    before = len(df_clean)
    df_clean = df_clean[valid_code_mask(df_clean[cv.CODE_FIELD])].copy()
    dropped = before - len(df_clean)
    if dropped > 0:
        log.append(f"⚠️  Dropped {dropped} rows without a valid neighbourhood code")
    df_clean[cv.CODE_FIELD] = df_clean[cv.CODE_FIELD].astype("int64")
    df_clean = df_clean.reset_index(drop=True)

    log.append(f"✓ Census cleaning complete: {df_census.shape} → {df_clean.shape}")

    return df_clean, log


def proportionalize_census(df_clean, variables=cv.CENSUS_VARIABLES, keep_intermediates=False):
    """
    Replace each grouped count by its share of the row-wise group total.

    Missing counts are treated as 0 in the totals. A zero total gives NaN
    proportions for the whole group in that row. Source totals are dropped.

    Args:
        df_clean: output of clean_census()
        variables: allowlist of CensusVariable records
        keep_intermediates: keep the computed group sums and minority_total

    Returns:
        Proportional DataFrame and log info
    """
    log = []
    df_prop = df_clean.copy()
    intermediates = {}

    for group in cv.PROPORTION_GROUPS:
        fields = cv.group_fields(group, variables)
        if not fields:
            continue
        require_columns(df_prop, fields, "cleaned census")

        total = df_prop[fields].sum(axis=1, skipna=True)
        intermediates[f"{group}_sum"] = total
        if group == cv.VISIBLE_MINORITY and cv.NOT_VISIBLE_MINORITY in fields:
            intermediates["minority_total"] = total - df_prop[cv.NOT_VISIBLE_MINORITY].fillna(0)

        zero = total == 0
        df_prop[fields] = df_prop[fields].div(total.where(~zero), axis=0)

        if zero.any():
            log.append(f"⚠️  {group}: {zero.sum()} rows with zero total (proportions set to NaN)")
        log.append(f"✓ {group}: {len(fields)} fields proportionalized")

    drop = [col for col in cv.total_fields(variables) if col in df_prop.columns]
    df_prop = df_prop.drop(columns=drop)

    if keep_intermediates:
        df_prop = df_prop.assign(**intermediates)

    log.append(f"✓ Proportional census complete: {df_clean.shape} → {df_prop.shape}")

    return df_prop, log


def reshape_census(df_census, variables=cv.CENSUS_VARIABLES):
    """
    Produce both census outputs from one raw table.

    Returns:
        (clean counts DataFrame, proportional DataFrame, log info)
    """
    df_clean, log = clean_census(df_census, variables)
    df_prop, prop_log = proportionalize_census(df_clean, variables)
    return df_clean, df_prop, log + prop_log

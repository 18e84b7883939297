"""
Cleaning module: shared helpers for column-name normalization, structural
checks, and parsing of formatted numeric text.
"""

import re
import unicodedata

import numpy as np
import pandas as pd


class MissingColumnError(ValueError):
    """Raised when a raw extract lacks a column the pipeline depends on."""

    def __init__(self, dataset, missing):
        self.dataset = dataset
        self.missing = list(missing)
        super().__init__(
            f"{dataset}: expected column(s) not found: {', '.join(self.missing)} "
            f"(upstream schema change?)"
        )


def clean_name(name):
    """
    Normalize a single column / statistic label to snake_case.

    '%' becomes 'percent', '#' becomes 'number', accents are transliterated,
    every run of other characters becomes '_'. Labels starting with a digit
    get an 'x' prefix ('1960 or before' -> 'x1960_or_before').
    """
    text = unicodedata.normalize("NFKD", str(name)).encode("ascii", "ignore").decode("ascii")
    text = text.replace("%", " percent ").replace("#", " number ")
    text = re.sub(r"[^0-9a-zA-Z]+", "_", text).strip("_").lower()

    if not text:
        return "x"
    if text[0].isdigit():
        text = "x" + text
    return text


def clean_names(names):
    """
    Normalize a sequence of labels and make them unique.

    Repeated labels get a numeric suffix in order of appearance: the second
    occurrence of 'korean' becomes 'korean_2', the fourth 'korean_4'.

    Args:
        names: iterable of raw labels

    Returns:
        list of unique snake_case names, same order as the input
    """
    seen = {}
    cleaned = []
    taken = set()
    for name in names:
        base = clean_name(name)
        count = seen.get(base, 0) + 1
        seen[base] = count
        candidate = base if count == 1 else f"{base}_{count}"
        # A raw label may already look like a suffixed duplicate
        while candidate in taken:
            count += 1
            seen[base] = count
            candidate = f"{base}_{count}"
        taken.add(candidate)
        cleaned.append(candidate)
    return cleaned


def clean_column_names(df):
    """Return a copy of df with clean_names() applied to its columns."""
    df_clean = df.copy()
    df_clean.columns = clean_names(df_clean.columns)
    return df_clean


def require_columns(df, columns, dataset):
    """
    Fail loudly if any expected column is absent.

    Raises:
        MissingColumnError naming every missing column
    """
    missing = [col for col in columns if col not in df.columns]
    if missing:
        raise MissingColumnError(dataset, missing)


def parse_count_series(s: pd.Series) -> pd.Series:
    """
    Parse formatted census text ('1,234', '12.5%', '2.4') to floats.

    Thousands separators and percent signs are removed before parsing;
    anything that still fails to parse becomes NaN.

    Args:
        s: pd.Series of strings (numbers pass through unchanged)

    Returns:
        pd.Series of float values (NaN for unparseable)
    """
    def parse_single(val):
        if val is None or (isinstance(val, float) and np.isnan(val)):
            return np.nan
        if isinstance(val, (int, float, np.integer, np.floating)):
            return float(val)

        val_str = re.sub(r"[,%]", "", str(val)).strip()
        if not val_str:
            return np.nan

        try:
            return float(val_str)
        except ValueError:
            return np.nan

    return s.apply(parse_single).astype("float64")


def valid_code_mask(codes: pd.Series) -> pd.Series:
    """
    True where a numeric neighbourhood code is a whole number.

    Missing and fractional codes ('128.6') are not valid join keys; casting
    them to int would truncate them onto a real neighbourhood's code.
    """
    return codes.notna() & (codes % 1 == 0)

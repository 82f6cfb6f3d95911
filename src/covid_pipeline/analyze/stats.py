"""Report statistics computed with pandas.

Every function here is pure: it takes frames read from the `covid_data`
collection (text values, as stored) and returns plain numbers or result
models. Numeric columns are converted with `pandas.to_numeric`; a value that
is present but not numeric raises ``ValueError``.

The recurring building block is `latest_per_location`: sort by location
ascending and date descending, then keep the first row per location.
"""
from __future__ import annotations

from typing import Any, Sequence
import numpy as np
import pandas as pd

from covid_pipeline.analyze.regions import is_excluded
from covid_pipeline.models import (
    LocationValue,
    PeakNewCases,
    PerMillionExtremes,
    SmokingStats,
)

TOTAL_CASES = "total_cases"
PER_MILLION = "total_cases_per_million"
NEW_CASES = "new_cases"
MALE_SMOKERS = "male_smokers"
FEMALE_SMOKERS = "female_smokers"
POPULATION = "population"


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(np.sign(value) * np.floor(np.abs(value) + 0.5))


def _present(series: pd.Series) -> pd.Series:
    """Boolean mask of values that are neither missing nor blank."""
    return series.notna() & (series.astype(str).str.strip() != "")


def _country_rows(pdf: pd.DataFrame, fields: Sequence[str]) -> pd.DataFrame:
    """Rows of real countries where every one of `fields` is present, as numbers."""
    mask = pdf["location"].notna() & ~pdf["location"].map(is_excluded).astype(bool)
    for f in fields:
        mask &= _present(pdf[f])

    x = pdf.loc[mask, ["location", "date", *fields]].copy()
    for f in fields:
        x[f] = pd.to_numeric(x[f], errors="raise").astype(float)
    return x


def latest_per_location(pdf: pd.DataFrame, fields: Sequence[str]) -> pd.DataFrame:
    """Return the most recent row per location that has all `fields` present.

    Args:
        pdf: Frame with `location`, `date` and every column in `fields`.
        fields: Columns that must be non-null on the selected row.

    Returns:
        DataFrame with columns `location`, `date` and `fields` (as floats),
        one row per location, ordered by location.
    """
    cols = ["location", "date", *fields]
    if pdf.empty:
        return pd.DataFrame(columns=cols)

    x = _country_rows(pdf, fields)
    x = x.sort_values(
        ["location", "date"],
        ascending=[True, False],
        kind="mergesort",
        na_position="last",
    )
    return x.drop_duplicates(subset="location", keep="first").reset_index(drop=True)


def _ranked(latest: pd.DataFrame, field: str) -> pd.DataFrame:
    """Stable sort by `field` descending; equal values keep location order."""
    return latest.sort_values(field, ascending=False, kind="mergesort").reset_index(drop=True)


def _location_value(row: Any, field: str) -> LocationValue:
    return LocationValue(location=str(row["location"]), value=float(row[field]))


def _max_location(latest: pd.DataFrame, field: str) -> LocationValue | None:
    if latest.empty:
        return None
    return _location_value(_ranked(latest, field).iloc[0], field)


def cumulative_cases_total(pdf: pd.DataFrame) -> float | None:
    """Sum the latest `total_cases` of every country.

    Returns:
        The total as float, or None when no country has a value.
    """
    latest = latest_per_location(pdf, [TOTAL_CASES])
    if latest.empty:
        return None
    return float(latest[TOTAL_CASES].sum())


def per_million_extremes(pdf: pd.DataFrame) -> PerMillionExtremes:
    """Compute highest/lowest latest `total_cases_per_million` across countries.

    Ties between equal values are resolved by the stable sort: the location
    order of `latest_per_location` survives, so the outcome is arbitrary but
    repeatable.
    """
    latest = latest_per_location(pdf, [PER_MILLION])
    if latest.empty:
        return PerMillionExtremes()

    ranked = _ranked(latest, PER_MILLION)
    positive = ranked[ranked[PER_MILLION] > 0]

    return PerMillionExtremes(
        highest=_location_value(ranked.iloc[0], PER_MILLION),
        lowest_non_zero=(
            _location_value(positive.iloc[-1], PER_MILLION) if not positive.empty else None
        ),
        lowest_including_zero=_location_value(ranked.iloc[-1], PER_MILLION),
        zero_locations=ranked.loc[ranked[PER_MILLION] == 0, "location"].tolist(),
    )


def peak_new_cases(pdf: pd.DataFrame) -> PeakNewCases | None:
    """Return the country record with the largest single-day `new_cases`."""
    if pdf.empty:
        return None

    x = _country_rows(pdf, [NEW_CASES])
    if x.empty:
        return None

    top = x.sort_values(NEW_CASES, ascending=False, kind="mergesort").iloc[0]
    return PeakNewCases(
        location=str(top["location"]),
        date=None if pd.isna(top["date"]) else str(top["date"]),
        new_cases=float(top[NEW_CASES]),
    )


def estimate_smokers(population: Any, male_pct: Any, female_pct: Any) -> Any:
    """Estimate absolute smokers assuming a 50/50 gender split.

    Works on scalars and on aligned pandas Series alike.
    """
    return population / 2 * male_pct / 100 + population / 2 * female_pct / 100


def smoking_stats(
    male: pd.DataFrame,
    female: pd.DataFrame,
    combined: pd.DataFrame,
) -> SmokingStats:
    """Compute smoking maxima from three independently filtered frames.

    Args:
        male: Rows with `male_smokers`.
        female: Rows with `female_smokers`.
        combined: Rows with `population`, `male_smokers` and `female_smokers`;
            the estimate uses the latest row where all three are present.
    """
    latest_male = latest_per_location(male, [MALE_SMOKERS])
    latest_female = latest_per_location(female, [FEMALE_SMOKERS])
    latest_all = latest_per_location(combined, [POPULATION, MALE_SMOKERS, FEMALE_SMOKERS])

    if not latest_all.empty:
        latest_all["estimated_smokers"] = estimate_smokers(
            latest_all[POPULATION],
            latest_all[MALE_SMOKERS],
            latest_all[FEMALE_SMOKERS],
        )

    return SmokingStats(
        highest_male=_max_location(latest_male, MALE_SMOKERS),
        highest_female=_max_location(latest_female, FEMALE_SMOKERS),
        most_smokers=_max_location(latest_all, "estimated_smokers"),
    )

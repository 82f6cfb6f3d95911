"""Parsing helpers for the OWID COVID-19 CSV.

`read_covid_csv` reads the file into pandas keeping every value as text and
only the columns stored in MongoDB; `parse_covid_csv` wraps the result into a
Dask DataFrame for the partition-wise clean step.
"""

from __future__ import annotations

from typing import Any, cast
import logging
from pathlib import Path
import pandas as pd
import dask.dataframe as dd

log = logging.getLogger(__name__)

KEEP_FIELDS = (
    "location",
    "continent",
    "date",
    "new_cases",
    "total_cases",
    "total_cases_per_million",
    "female_smokers",
    "male_smokers",
    "population",
)

PARTITION_ROWS = 200_000


def read_covid_csv(path: Path) -> pd.DataFrame:
    """Read a header-bearing CSV into a text-only pandas DataFrame.

    Values are not type-inferred and empty cells stay empty strings; kept
    columns missing from the file are simply absent from the result.

    Args:
        path: Path to the CSV file.

    Returns:
        pandas.DataFrame restricted to `KEEP_FIELDS`.
    """
    pdf = pd.read_csv(
        path,
        dtype=str,
        keep_default_na=False,
        usecols=lambda c: c in KEEP_FIELDS,
    )
    log.info("Total rows (excluding header): %d", len(pdf))
    return pdf


def parse_covid_csv(path: Path) -> Any:
    """Parse the CSV into a Dask DataFrame with ~200k rows per partition."""
    pdf = read_covid_csv(path)
    dd_mod = cast(Any, dd)
    return dd_mod.from_pandas(pdf, npartitions=max(1, len(pdf) // PARTITION_ROWS))

"""Blank-value normalization applied partition-wise with Dask."""
from __future__ import annotations

import pandas as pd
import logging
from typing import Any

log = logging.getLogger(__name__)


def _blank_to_none(value: Any) -> str | None:
    """Return the stripped text of `value`, or None when it is blank or missing."""
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def clean_records_ddf(ddf: Any) -> Any:
    """Normalize every column so that blank cells become ``None``.

    Surrounding whitespace is stripped from the remaining values; nothing
    else is altered (numbers stay text).

    Returns:
        Dask DataFrame with the same columns, object dtype throughout.
    """
    log.info("Cleaning and filtering fields...")

    def _clean_partition(pdf: pd.DataFrame) -> pd.DataFrame:
        pdf = pdf.copy()
        for col in pdf.columns:
            pdf[col] = pdf[col].astype(object).map(_blank_to_none).astype(object)
        return pdf

    meta = ddf._meta.astype(object)
    return ddf.map_partitions(_clean_partition, meta=meta)

"""Validation utilities for loader records.

Cleaned rows are converted to plain dictionaries and checked against the
Pydantic `CovidRecord` model. Any invalid row aborts the load.
"""
from __future__ import annotations

from typing import Any, Iterable
import pandas as pd

from covid_pipeline.models import CovidRecord


def frame_to_documents(pdf: pd.DataFrame) -> list[dict[str, Any]]:
    """Convert a cleaned frame to dicts, mapping any missing marker to None."""
    return [
        {k: (None if pd.isna(v) else v) for k, v in rec.items()}
        for rec in pdf.to_dict(orient="records")
    ]


def validate_records(records: Iterable[dict[str, Any]]) -> list[dict[str, Any]]:
    """Validate records with `CovidRecord` and return them as dicts.

    Fields absent from the source file are not added to the documents.

    Raises:
        pydantic.ValidationError: on the first record that does not match.
    """
    return [
        CovidRecord.model_validate(rec).model_dump(mode="python", exclude_unset=True)
        for rec in records
    ]

"""Filtered reads from the `covid_data` collection into pandas."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import pandas as pd
from pymongo.collection import Collection

from covid_pipeline.analyze.regions import EXCLUDED_LOCATIONS

log = logging.getLogger(__name__)

READ_BATCH_SIZE = 50_000


def present_filter(*fields: str) -> dict[str, Any]:
    """Return a query for country rows whose `fields` are neither null nor empty."""
    query: dict[str, Any] = {f: {"$nin": [None, ""]} for f in fields}
    query["location"] = {"$nin": list(EXCLUDED_LOCATIONS)}
    return query


def load_frame(
    collection: Collection[dict[str, Any]],
    query: dict[str, Any],
    columns: Sequence[str],
    batch_size: int = READ_BATCH_SIZE,
) -> pd.DataFrame:
    """Load matching documents into a pandas DataFrame using batched reads.

    Args:
        collection: Source PyMongo collection.
        query: MongoDB filter document.
        columns: Fields to project; the frame always has exactly these columns.
        batch_size: Cursor batch size.

    Returns:
        pandas.DataFrame with one row per matching document.
    """
    projection = {"_id": False, **{c: True for c in columns}}
    cursor = collection.find(query, projection).batch_size(batch_size)

    pdf_batches: list[pd.DataFrame] = []
    buffer: list[dict[str, Any]] = []

    for doc in cursor:
        buffer.append(doc)
        if len(buffer) >= batch_size:
            pdf_batches.append(pd.DataFrame(buffer, columns=list(columns)))
            buffer.clear()

    if buffer:
        pdf_batches.append(pd.DataFrame(buffer, columns=list(columns)))

    if not pdf_batches:
        return pd.DataFrame(columns=list(columns), dtype=object)

    pdf = pd.concat(pdf_batches, ignore_index=True)
    log.info("Loaded %d documents for %s", len(pdf), ", ".join(columns))
    return pdf

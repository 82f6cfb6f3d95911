"""Replace the contents of the `covid_data` collection.

The collection is dropped unconditionally and the new records are inserted in
fixed-size batches. There is no merge with earlier loads.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

from pymongo.collection import Collection

from covid_pipeline.config import DEFAULT_BATCH_SIZE
from covid_pipeline.db import insert_batches

log = logging.getLogger(__name__)


def load_records_to_mongo(
    collection: Collection[dict[str, Any]],
    records: Sequence[dict[str, Any]],
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> int:
    """Drop `collection` and insert `records` batch by batch.

    A failed batch aborts the load; batches inserted before it remain.

    Args:
        collection: Target PyMongo collection.
        records: Validated documents to insert.
        batch_size: Documents per `insert_many` call.

    Returns:
        Number of documents inserted.
    """
    collection.drop()
    log.info("Dropped collection %s", collection.name)

    total = 0
    for total in insert_batches(collection, records, batch_size):
        log.info("Inserted %d/%d records...", total, len(records))

    log.info("All data inserted successfully. Total: %d", total)
    return total

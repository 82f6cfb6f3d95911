"""MongoDB helpers and batched insert utility.

Centralizes creation of Mongo clients and the plain `insert_many` batching used
by the loader.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Sequence
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

import certifi


def get_client(uri: str, tls: bool = False) -> MongoClient:
    """Return a configured PyMongo MongoClient for the provided URI.

    Args:
        uri: MongoDB connection URI.
        tls: When true, connect over TLS validated against the certifi bundle.

    Returns:
        Configured MongoClient instance.
    """
    if tls:
        return MongoClient(uri, tls=True, tlsCAFile=certifi.where())
    return MongoClient(uri)


def get_db(
    client: MongoClient[dict[str, Any]],
    db_name: str,
) -> Database[dict[str, Any]]:
    """Return the named Database instance from a MongoClient."""
    return client[db_name]


def chunks(docs: Sequence[dict[str, Any]], size: int) -> Iterator[Sequence[dict[str, Any]]]:
    """Yield consecutive slices of `docs` holding at most `size` documents."""
    for i in range(0, len(docs), size):
        yield docs[i : i + size]


def insert_batches(
    collection: Collection[dict[str, Any]],
    docs: Sequence[dict[str, Any]],
    batch_size: int,
) -> Iterable[int]:
    """Insert `docs` with one `insert_many` call per batch.

    Batches are not atomic as a group: if a call fails, the error propagates
    and the batches already written stay in the collection.

    Args:
        collection: Target PyMongo collection.
        docs: Documents to insert, in order.
        batch_size: Number of documents per `insert_many` call.

    Yields:
        The running total of inserted documents after each batch.
    """
    total = 0
    for batch in chunks(docs, batch_size):
        collection.insert_many(list(batch), ordered=True)
        total += len(batch)
        yield total

"""Configuration helpers and Settings container.

This module provides a frozen `Settings` dataclass and `get_settings`, which
reads the MongoDB target, the dataset URL and local paths from the environment
(a project-level `.env` is honoured).
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_CSV_URL = "https://covid.ourworldindata.org/data/owid-covid-data.csv"
DEFAULT_BATCH_SIZE = 5000

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Container for pipeline configuration read from the environment.

    Attributes:
        mongo_uri: MongoDB connection URI.
        mongo_db: Target MongoDB database name.
        mongo_collection: Collection holding the loaded records.
        mongo_tls: Whether to connect with TLS using the certifi CA bundle.
        csv_url: Source URL of the OWID COVID-19 CSV.
        data_dir: Local directory where the downloaded CSV is stored.
        report_path: File the analysis report is written to.
        batch_size: Number of documents per `insert_many` call.
    """
    mongo_uri: str
    mongo_db: str
    mongo_collection: str
    mongo_tls: bool
    csv_url: str
    data_dir: Path
    report_path: Path
    batch_size: int


def _parse_batch_size(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value <= 0:
        raise RuntimeError(f"LOAD_BATCH_SIZE must be a positive integer, got {raw!r}.")
    return value


def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if `LOAD_BATCH_SIZE` is not a positive integer.
    """
    return Settings(
        mongo_uri=os.getenv("MONGO_URI", "mongodb://127.0.0.1:27017"),
        mongo_db=os.getenv("MONGO_DB", "covid_db"),
        mongo_collection=os.getenv("MONGO_COLLECTION", "covid_data"),
        mongo_tls=os.getenv("MONGO_TLS", "false").strip().lower() in _TRUTHY,
        csv_url=os.getenv("COVID_CSV_URL", DEFAULT_CSV_URL),
        data_dir=Path(os.getenv("COVID_DATA_DIR", "data/owid_cache")),
        report_path=Path(os.getenv("REPORT_PATH", "output.txt")),
        batch_size=_parse_batch_size(os.getenv("LOAD_BATCH_SIZE", str(DEFAULT_BATCH_SIZE))),
    )

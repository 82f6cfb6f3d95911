"""Download the Our World in Data COVID-19 CSV."""

from __future__ import annotations

import logging
from pathlib import Path

import requests

log = logging.getLogger(__name__)

CSV_FILENAME = "owid-covid-data.csv"


def download_csv(url: str, out_dir: Path, use_cache: bool = False, timeout: float = 60.0) -> Path:
    """Download the dataset to `out_dir` and return the local path.

    Args:
        url: Location of the CSV file.
        out_dir: Directory the file is written to (created if missing).
        use_cache: Reuse an existing non-empty download instead of fetching.
        timeout: Seconds to wait for the server between bytes.

    Returns:
        Path to the downloaded (or cached) CSV.

    Raises:
        requests.HTTPError if the remote request fails (non-2xx status).
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / CSV_FILENAME

    if use_cache and out_path.exists() and out_path.stat().st_size > 0:
        log.info("Cache hit: %s", out_path)
        return out_path

    log.info("Downloading CSV from %s", url)
    r = requests.get(url, timeout=timeout)
    r.raise_for_status()
    out_path.write_bytes(r.content)
    log.info("Saved: %s (%d bytes)", out_path, out_path.stat().st_size)
    return out_path

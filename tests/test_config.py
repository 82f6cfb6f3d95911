from __future__ import annotations

from pathlib import Path

import pytest

from covid_pipeline.config import get_settings

ENV_VARS = (
    "MONGO_URI", "MONGO_DB", "MONGO_COLLECTION", "MONGO_TLS",
    "COVID_CSV_URL", "COVID_DATA_DIR", "REPORT_PATH", "LOAD_BATCH_SIZE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = get_settings()
    assert s.mongo_uri == "mongodb://127.0.0.1:27017"
    assert (s.mongo_db, s.mongo_collection) == ("covid_db", "covid_data")
    assert s.mongo_tls is False
    assert s.report_path == Path("output.txt")
    assert s.batch_size == 5000


def test_overrides(monkeypatch) -> None:
    monkeypatch.setenv("MONGO_TLS", "true")
    monkeypatch.setenv("LOAD_BATCH_SIZE", "250")
    s = get_settings()
    assert s.mongo_tls is True
    assert s.batch_size == 250


@pytest.mark.parametrize("raw", ["0", "-5", "many"])
def test_invalid_batch_size(monkeypatch, raw) -> None:
    monkeypatch.setenv("LOAD_BATCH_SIZE", raw)
    with pytest.raises(RuntimeError):
        get_settings()

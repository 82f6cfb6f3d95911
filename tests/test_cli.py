from __future__ import annotations

import mongomock
import pytest

from covid_pipeline import cli
from covid_pipeline.ingest import fetch_csv

CSV = (
    "iso_code,continent,location,date,new_cases,total_cases,total_cases_per_million,"
    "female_smokers,male_smokers,population\n"
    "AAA,Asia,A,2021-01-01,100,100,0,20,50,1000000\n"
    "BBB,Europe,B,2021-01-01,500,500,5.5,2.0,60.5,100000\n"
    "OWID_WRL,,World,2021-01-01,600,600,1000,,,\n"
)


class _KeepOpenClient(mongomock.MongoClient):
    def close(self) -> None:
        pass


class _Response:
    content = CSV.encode("utf-8")

    def raise_for_status(self) -> None:
        pass


@pytest.fixture
def env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ("MONGO_DB", "MONGO_COLLECTION", "REPORT_PATH", "LOAD_BATCH_SIZE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("COVID_DATA_DIR", str(tmp_path / "cache"))
    client = _KeepOpenClient()
    monkeypatch.setattr(cli, "get_client", lambda uri, tls=False: client)
    monkeypatch.setattr(fetch_csv.requests, "get", lambda url, timeout: _Response())
    return client


def test_no_command_prints_usage(capsys) -> None:
    cli.main([])
    assert capsys.readouterr().out.strip() == cli.USAGE


def test_unknown_command_prints_message(capsys) -> None:
    cli.main(["export"])
    assert capsys.readouterr().out.strip() == cli.INVALID


def test_load_data_then_analyze(env, tmp_path, capsys) -> None:
    collection = env["covid_db"]["covid_data"]
    collection.insert_one({"location": "stale"})

    cli.main(["load_data"])
    assert collection.count_documents({}) == 3
    assert collection.count_documents({"location": "stale"}) == 0
    assert collection.find_one({"location": "World"})["continent"] is None

    capsys.readouterr()
    cli.main(["analyze", "--output", str(tmp_path / "report.txt")])
    out = capsys.readouterr().out
    text = (tmp_path / "report.txt").read_text(encoding="utf-8")

    assert "Highest: B (6)" in text
    assert "B on 2021-01-01 with 500 cases" in text
    assert "Countries: 3" in text
    for line in text.splitlines():
        assert line in out.splitlines()


def test_words_after_command_are_ignored(env, tmp_path) -> None:
    env["covid_db"]["covid_data"].insert_one({"location": "A", "date": "2021-01-01"})
    report = tmp_path / "extra.txt"
    cli.main(["analyze", "extra", "--output", str(report)])
    assert report.read_text(encoding="utf-8").startswith("\n1. Total records in collection:\n1\n")


def test_unknown_command_with_extra_words(capsys) -> None:
    cli.main(["export", "now"])
    assert capsys.readouterr().out.strip() == cli.INVALID

from __future__ import annotations

import pandas as pd
import dask.dataframe as dd

from covid_pipeline.clean.transform import clean_records_ddf
from covid_pipeline.clean.validate import frame_to_documents, validate_records
from covid_pipeline.ingest.parse_csv import KEEP_FIELDS, parse_covid_csv, read_covid_csv

CSV = (
    "iso_code,continent,location,date,total_cases,new_cases,total_cases_per_million,"
    "population,female_smokers,male_smokers,gdp_per_capita\n"
    "AFG,Asia,Afghanistan,2020-02-24,5,5,0.126,39835428,,,1803.987\n"
    ",,,,,,,,,,\n"
)


def test_read_covid_csv_keeps_only_stored_fields(tmp_path) -> None:
    path = tmp_path / "owid.csv"
    path.write_text(CSV, encoding="utf-8")
    pdf = read_covid_csv(path)
    assert set(pdf.columns) == set(KEEP_FIELDS)
    assert len(pdf) == 2
    assert pdf.loc[0, "female_smokers"] == ""
    assert pdf.loc[0, "total_cases"] == "5"


def test_cleaning_turns_blanks_into_none(tmp_path) -> None:
    path = tmp_path / "owid.csv"
    path.write_text(CSV, encoding="utf-8")
    out = clean_records_ddf(parse_covid_csv(path)).compute()
    docs = frame_to_documents(out)
    assert docs[0]["location"] == "Afghanistan"
    assert docs[0]["male_smokers"] is None
    assert all(v is None for v in docs[1].values())


def test_cleaning_strips_whitespace() -> None:
    pdf = pd.DataFrame([{"location": "  Chile ", "date": " ", "new_cases": "12"}])
    out = clean_records_ddf(dd.from_pandas(pdf, npartitions=1)).compute()
    doc = frame_to_documents(out)[0]
    assert doc == {"location": "Chile", "date": None, "new_cases": "12"}


def test_validate_records_preserves_null_fields() -> None:
    rec = {f: None for f in KEEP_FIELDS}
    assert validate_records([rec]) == [rec]

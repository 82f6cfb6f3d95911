"""covid_pipeline package.

Contains modules for downloading the Our World in Data COVID-19 CSV, loading a
projected subset of its fields into MongoDB, and producing a fixed analysis
report over the stored records.

Architecture:
- Loader: fetch → parse → clean → validate → batched insert into MongoDB
- Analyzer: filtered MongoDB reads → pandas reductions → text report
- Dask is used for the partition-wise clean transform
- Pydantic models validate stored records and report results
"""

__all__ = ["__version__"]
__version__ = "0.1.0"

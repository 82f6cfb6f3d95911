"""Pydantic models for stored records and analysis results.

`CovidRecord` describes one document in the `covid_data` collection. The
remaining models hold the outcome of each report item so that rendering is
independent from querying.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, ConfigDict

ISO_DATE = r"^\d{4}-\d{2}-\d{2}$"


class CovidRecord(BaseModel):
    """Schema for one location/date row as stored in MongoDB.

    Numeric columns are kept as text exactly as they appear in the source CSV;
    blank values are stored as ``None``. A present `date` must be zero-padded
    `YYYY-MM-DD`; anything else (e.g. `2020-1-5`) fails validation and aborts
    the load.
    """
    model_config = ConfigDict(extra="forbid")
    location: str | None = None
    continent: str | None = None
    date: str | None = Field(default=None, pattern=ISO_DATE)
    new_cases: str | None = None
    total_cases: str | None = None
    total_cases_per_million: str | None = None
    female_smokers: str | None = None
    male_smokers: str | None = None
    population: str | None = None


class LocationValue(BaseModel):
    """A location paired with one numeric statistic."""
    location: str
    value: float


class PerMillionExtremes(BaseModel):
    """Extremes of the latest `total_cases_per_million` per location.

    Attributes:
        highest: Location with the largest latest value.
        lowest_non_zero: Location with the smallest strictly positive value.
        lowest_including_zero: Location with the smallest value overall.
        zero_locations: Every location whose latest value is exactly zero.
    """
    highest: LocationValue | None = None
    lowest_non_zero: LocationValue | None = None
    lowest_including_zero: LocationValue | None = None
    zero_locations: list[str] = Field(default_factory=list)


class PeakNewCases(BaseModel):
    """The single record with the most new cases."""
    location: str
    date: str | None
    new_cases: float


class SmokingStats(BaseModel):
    """Smoking prevalence maxima and the largest estimated smoker count."""
    highest_male: LocationValue | None = None
    highest_female: LocationValue | None = None
    most_smokers: LocationValue | None = None


class AnalysisReport(BaseModel):
    """All report items computed from the current collection contents."""
    record_count: int = Field(..., ge=0)
    cumulative_cases: float | None
    location_count: int = Field(..., ge=0)
    continent_count: int = Field(..., ge=0)
    per_million: PerMillionExtremes
    peak_new_cases: PeakNewCases | None
    smoking: SmokingStats

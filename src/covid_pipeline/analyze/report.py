"""Build, render and publish the analysis report.

Each report item issues its own read against the collection; no item depends
on the result of another. The rendered lines are printed to stdout and
written, unchanged, to the report file.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Sequence, TextIO

from pymongo.collection import Collection

from covid_pipeline.analyze.source import READ_BATCH_SIZE, load_frame, present_filter
from covid_pipeline.analyze.stats import (
    FEMALE_SMOKERS,
    MALE_SMOKERS,
    NEW_CASES,
    PER_MILLION,
    POPULATION,
    TOTAL_CASES,
    cumulative_cases_total,
    peak_new_cases,
    per_million_extremes,
    round_half_away,
    smoking_stats,
)
from covid_pipeline.models import AnalysisReport, LocationValue

log = logging.getLogger(__name__)

NA = "N/A"


def _read(collection: Collection[dict[str, Any]], fields: Sequence[str], batch_size: int) -> Any:
    return load_frame(
        collection,
        present_filter(*fields),
        ["location", "date", *fields],
        batch_size,
    )


def _distinct_count(
    collection: Collection[dict[str, Any]], field: str, skip_null: bool = False
) -> int:
    values = collection.distinct(field)
    if skip_null:
        values = [v for v in values if v is not None]
    return len(values)


def build_report(
    collection: Collection[dict[str, Any]],
    batch_size: int = READ_BATCH_SIZE,
) -> AnalysisReport:
    """Run every report query against `collection`.

    Args:
        collection: The loaded `covid_data` collection.
        batch_size: Cursor batch size for the filtered reads.

    Returns:
        AnalysisReport with one field per report item.
    """
    log.info("Counting records in %s", collection.name)
    record_count = collection.count_documents({})

    log.info("Computing cumulative cases from latest totals")
    cumulative = cumulative_cases_total(_read(collection, [TOTAL_CASES], batch_size))

    log.info("Counting distinct locations and continents")
    location_count = _distinct_count(collection, "location")
    continent_count = _distinct_count(collection, "continent", skip_null=True)

    log.info("Ranking latest cases per million")
    per_million = per_million_extremes(_read(collection, [PER_MILLION], batch_size))

    log.info("Finding peak single-day new cases")
    peak = peak_new_cases(_read(collection, [NEW_CASES], batch_size))

    log.info("Computing smoking statistics")
    smoking = smoking_stats(
        _read(collection, [MALE_SMOKERS], batch_size),
        _read(collection, [FEMALE_SMOKERS], batch_size),
        _read(collection, [POPULATION, MALE_SMOKERS, FEMALE_SMOKERS], batch_size),
    )

    return AnalysisReport(
        record_count=record_count,
        cumulative_cases=cumulative,
        location_count=location_count,
        continent_count=continent_count,
        per_million=per_million,
        peak_new_cases=peak,
        smoking=smoking,
    )


def _rounded(item: LocationValue | None) -> str:
    if item is None:
        return NA
    return f"{item.location} ({round_half_away(item.value)})"


def _percent(item: LocationValue | None) -> str:
    if item is None:
        return NA
    return f"{item.location} – {item.value}%"


def render_report(report: AnalysisReport) -> list[str]:
    """Render `report` as the list of text lines shown to the user."""
    pm = report.per_million
    peak = report.peak_new_cases
    smoking = report.smoking

    lines = [
        "",
        "1. Total records in collection:",
        str(report.record_count),
        "",
        "2. Total cumulative COVID-19 cases (latest available per country):",
        NA if report.cumulative_cases is None else str(round_half_away(report.cumulative_cases)),
        "",
        "3. Countries and continents in dataset:",
        f"Countries: {report.location_count}",
        f"Continents: {report.continent_count}",
        "",
        "4. Country with highest and lowest total COVID-19 cases per million (latest data only):",
        f"Highest: {_rounded(pm.highest)}",
        f"Lowest (non-zero): {_rounded(pm.lowest_non_zero)}",
        f"Lowest (including zero): {_rounded(pm.lowest_including_zero)}",
        "",
        "Countries with total_cases_per_million = 0:",
        *(f"- {location}" for location in pm.zero_locations),
        "",
        "5. Day with highest number of new cases:",
        NA
        if peak is None
        else f"{peak.location} on {peak.date} with {round_half_away(peak.new_cases)} cases",
        "",
        "6. Smoking stats (latest available):",
        f"Highest % of male smokers: {_percent(smoking.highest_male)}",
        f"Highest % of female smokers: {_percent(smoking.highest_female)}",
    ]

    most = smoking.most_smokers
    lines.append(
        "Estimated country with highest number of smokers (assuming 50/50 gender split): "
        + (NA if most is None else f"{most.location} – {round_half_away(most.value)} smokers")
    )
    return lines


def publish_report(lines: Sequence[str], path: Path, stream: TextIO | None = None) -> Path:
    """Print `lines` and write the same lines to `path` (overwritten).

    Args:
        lines: Rendered report lines.
        path: Report file; parent directories are created when missing.
        stream: Console stream, stdout by default.

    Returns:
        The path written to.
    """
    out = stream if stream is not None else sys.stdout
    for line in lines:
        print(line, file=out)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    log.info("Analysis complete. Results saved to %s", path)
    return path

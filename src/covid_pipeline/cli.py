"""Command-line interface for the loader and the analyzer.

Takes one positional command, `load_data` or `analyze`. Each command is
implemented as a `cmd_*` function that accepts an argparse namespace and opens
its own MongoDB connection.
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Callable, Sequence

from dotenv import load_dotenv

from covid_pipeline.config import get_settings
from covid_pipeline.logging_config import configure_logging
from covid_pipeline.db import get_client, get_db

# LOAD
from covid_pipeline.ingest.fetch_csv import download_csv
from covid_pipeline.ingest.parse_csv import parse_covid_csv
from covid_pipeline.ingest.load_raw import load_records_to_mongo
from covid_pipeline.clean.transform import clean_records_ddf
from covid_pipeline.clean.validate import frame_to_documents, validate_records

# ANALYZE
from covid_pipeline.analyze.report import build_report, publish_report, render_report

log = logging.getLogger(__name__)

USAGE = "Usage: covid-pipeline [load_data|analyze]"
INVALID = "Invalid command. Use 'load_data' or 'analyze'."


# --------------------------------------------------
# LOAD
# --------------------------------------------------
def cmd_load_data(args: argparse.Namespace) -> None:
    """Download the CSV and replace the collection with its projected rows.

    Args:
        args: argparse namespace with `use_cache`.
    """
    s = get_settings()

    path = download_csv(s.csv_url, s.data_dir, use_cache=args.use_cache)
    ddf = clean_records_ddf(parse_covid_csv(path))
    records = validate_records(frame_to_documents(ddf.compute()))

    log.info("Connecting to MongoDB...")
    client = get_client(s.mongo_uri, s.mongo_tls)
    try:
        db = get_db(client, s.mongo_db)
        load_records_to_mongo(db[s.mongo_collection], records, s.batch_size)
    finally:
        client.close()


# --------------------------------------------------
# ANALYZE
# --------------------------------------------------
def cmd_analyze(args: argparse.Namespace) -> None:
    """Run the report queries, print the report and save it to a file.

    Args:
        args: argparse namespace with an optional `output` path.
    """
    s = get_settings()
    client = get_client(s.mongo_uri, s.mongo_tls)
    try:
        db = get_db(client, s.mongo_db)
        report = build_report(db[s.mongo_collection])
    finally:
        client.close()

    publish_report(render_report(report), args.output or s.report_path)


COMMANDS: dict[str, Callable[[argparse.Namespace], None]] = {
    "load_data": cmd_load_data,
    "analyze": cmd_analyze,
}


# --------------------------------------------------
# CLI
# --------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    """Build and return the top-level argument parser for the CLI.

    The command is parsed as a free positional so that a missing or unknown
    command can be answered with a message instead of an argparse error.
    Words after the command are ignored by `main`.
    """
    p = argparse.ArgumentParser(prog="covid-pipeline")
    p.add_argument("command", nargs="?", help="load_data or analyze")
    p.add_argument("--use-cache", action="store_true", help="reuse a previously downloaded CSV")
    p.add_argument("--output", type=Path, default=None, help="report file (analyze)")
    return p


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point: parse args, configure logging and dispatch commands."""
    load_dotenv()
    args, _ = build_parser().parse_known_args(argv)

    if args.command is None:
        print(USAGE)
        return

    handler = COMMANDS.get(args.command)
    if handler is None:
        print(INVALID)
        return

    configure_logging(Path("logs/pipeline.log"))
    handler(args)


if __name__ == "__main__":
    main()

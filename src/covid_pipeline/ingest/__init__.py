"""Loader stages: download the OWID CSV, parse it, and insert it into MongoDB."""

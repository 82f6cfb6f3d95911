"""Analysis helpers.

This package turns the loaded `covid_data` collection into the fixed text
report: `source` performs the filtered MongoDB reads, `stats` reduces them with
pandas, and `report` assembles, renders and publishes the result.
"""

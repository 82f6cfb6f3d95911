"""Static denylist of aggregate pseudo-locations.

OWID publishes rows for the world, continents and income groups next to the
country rows. They are not countries and are left out of every per-country
statistic.
"""

EXCLUDED_LOCATIONS = (
    "World",
    "Africa",
    "Asia",
    "Europe",
    "European Union",
    "High-income countries",
    "International",
    "Low-income countries",
    "Lower-middle-income countries",
    "North America",
    "Oceania",
    "South America",
    "Upper-middle-income countries",
)


def is_excluded(location: str | None) -> bool:
    """Return True when `location` is an aggregate region rather than a country."""
    return location in EXCLUDED_LOCATIONS

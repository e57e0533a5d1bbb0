"""Country-tag table for Hearts of Iron IV.

Only the majors and the commonly played minors are listed; anything else is
shown as its raw three-letter tag.
"""

from __future__ import annotations

COUNTRY_NAMES: dict[str, str] = {
    "GER": "German Reich",
    "SOV": "Soviet Union",
    "USA": "United States",
    "ENG": "United Kingdom",
    "FRA": "France",
    "ITA": "Italy",
    "JAP": "Japan",
    "CHI": "China",
    "POL": "Poland",
    "CAN": "Canada",
    "AST": "Australia",
    "NZL": "New Zealand",
    "SAF": "South Africa",
    "RAJ": "British Raj",
    "HUN": "Hungary",
    "ROM": "Romania",
    "YUG": "Yugoslavia",
    "SWE": "Sweden",
    "NOR": "Norway",
    "FIN": "Finland",
    "SPR": "Republican Spain",
    "SPA": "Nationalist Spain",
    "POR": "Portugal",
    "BEL": "Belgium",
    "HOL": "Netherlands",
    "LUX": "Luxembourg",
    "DEN": "Denmark",
    "GRE": "Greece",
    "TUR": "Turkey",
    "BUL": "Bulgaria",
    "MEX": "Mexico",
    "BRA": "Brazil",
    "ARG": "Argentina",
}


def get_country_name(tag: str) -> str:
    """Return the display name for *tag*, or the tag itself if unknown."""
    return COUNTRY_NAMES.get(tag, tag)

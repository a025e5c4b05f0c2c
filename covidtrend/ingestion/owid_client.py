from __future__ import annotations
from typing import Any, Dict, List, Tuple
from datetime import date
import io
import logging

import pandas as pd

from covidtrend.config.env import get_source_config

"""
Our World in Data COVID-19 CSV (long layout): one row per location and day,
daily metrics such as new_cases / new_deaths in named columns.
"""

log = logging.getLogger(__name__)


def build_owid_csv_url() -> str:
    return get_source_config().owid_url


def parse_owid_csv(csv_text: str, column: str = "new_cases") -> Dict[str, List[Tuple[date, Any]]]:
    """Parse OWID CSV text into {location: [(date, value), ...]} for one metric column.
    Rows with a blank value or unparseable date are dropped (not zero-filled).
    """
    frame = pd.read_csv(io.StringIO(csv_text))
    missing = {"location", "date", column} - set(frame.columns)
    if missing:
        raise ValueError(f"OWID csv is missing columns: {sorted(missing)}")
    frame = frame[["location", "date", column]].copy()
    frame["date"] = pd.to_datetime(frame["date"], format="%Y-%m-%d", errors="coerce")
    frame[column] = pd.to_numeric(frame[column], errors="coerce")
    frame = frame.dropna(subset=["date", column])

    out: Dict[str, List[Tuple[date, Any]]] = {}
    for location, day, value in zip(frame["location"], frame["date"], frame[column]):
        out.setdefault(str(location), []).append((day.date(), float(value)))
    log.debug("parsed %d rows for %d OWID locations", len(frame), len(out))
    return out

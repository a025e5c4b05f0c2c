from __future__ import annotations
from typing import Any, Dict, List, Tuple
from datetime import date
import io
import logging

import pandas as pd

from covidtrend.config.env import get_source_config

"""
JHU CSSE global time series (wide layout): one row per province/country,
one m/d/yy column per day holding cumulative counts. We only build URLs and
parse already-downloaded CSV text; fetching is the caller's job.
"""

log = logging.getLogger(__name__)

JHU_FILES = {
    "confirmed": "time_series_covid19_confirmed_global.csv",
    "deaths": "time_series_covid19_deaths_global.csv",
    "recovered": "time_series_covid19_recovered_global.csv",
}

ID_COLUMNS = ("Province/State", "Country/Region", "Lat", "Long")


def build_jhu_time_series_url(metric: str) -> str:
    cfg = get_source_config()
    try:
        filename = JHU_FILES[metric.lower()]
    except KeyError:
        raise ValueError(f"unknown JHU metric {metric!r}; expected one of {sorted(JHU_FILES)}") from None
    return f"{cfg.jhu_base_url}/{filename}"


def _native(v: Any) -> Any:
    return v.item() if hasattr(v, "item") else v


def parse_jhu_time_series(csv_text: str) -> Dict[str, List[Tuple[date, Any]]]:
    """Parse a JHU wide CSV into {country: [(date, cumulative_value), ...]}.

    One pair per source row and day, so countries reported per province carry
    several pairs per date; ``fill_daily_gaps`` sums them. Blank or
    non-numeric cells are skipped, as are columns that are not m/d/yy dates.
    """
    frame = pd.read_csv(io.StringIO(csv_text))
    if "Country/Region" not in frame.columns:
        raise ValueError("JHU time series is missing the 'Country/Region' column")
    id_vars = [c for c in ID_COLUMNS if c in frame.columns]
    date_cols = [c for c in frame.columns if c not in ID_COLUMNS]

    long = frame.melt(id_vars=id_vars, value_vars=date_cols, var_name="date", value_name="value")
    long["date"] = pd.to_datetime(long["date"], format="%m/%d/%y", errors="coerce")
    long["value"] = pd.to_numeric(long["value"], errors="coerce")
    bad = long["date"].isna() | long["value"].isna()
    if bad.any():
        log.debug("skipping %d JHU cells without a date or numeric value", int(bad.sum()))
    long = long[~bad]

    out: Dict[str, List[Tuple[date, Any]]] = {}
    for country, day, value in zip(long["Country/Region"], long["date"], long["value"]):
        out.setdefault(str(country).strip(), []).append((day.date(), _native(value)))
    return out

from __future__ import annotations
from typing import List, Dict, Any, Iterable
from datetime import date
import csv
import io

from covidtrend.historical.errors import INCOMPLETE
from covidtrend.historical.rolling import RollingResult
from covidtrend.historical.timeseries import DailySeries

SCHEMAS = {
    "series": ["date", "value"],
    "rolling": ["date", "mean", "stdev", "upper_bound", "lower_bound", "periods"],
}


def _cell(v: Any) -> Any:
    # INCOMPLETE becomes an empty cell; NaN is written as 'nan' so the two stay distinct
    if v is INCOMPLETE or v is None:
        return ""
    if isinstance(v, date):
        return v.isoformat()
    return v


def write_csv(rows: Iterable[Dict[str, Any]], columns: List[str]) -> str:
    buf = io.StringIO()
    w = csv.DictWriter(buf, fieldnames=columns, extrasaction="ignore", lineterminator="\n")
    w.writeheader()
    for r in rows:
        w.writerow({k: _cell(r.get(k)) for k in columns})
    return buf.getvalue()


def write_series_csv(series: DailySeries) -> str:
    return write_csv(({"date": o.date, "value": o.value} for o in series), SCHEMAS["series"])


def write_rolling_csv(results: Iterable[RollingResult]) -> str:
    return write_csv((r.as_dict() for r in results), SCHEMAS["rolling"])

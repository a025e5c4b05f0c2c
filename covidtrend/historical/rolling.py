from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Union
from datetime import date
import logging
import math
import numbers

import pandas as pd
from pandas.api.indexers import FixedForwardWindowIndexer

from covidtrend.historical.errors import INCOMPLETE, IncompleteWindowMarker, InvalidWindowError
from covidtrend.historical.timeseries import DailySeries, as_daily_series

log = logging.getLogger(__name__)

ALIGNMENTS = ("left", "right")

Stat = Union[float, IncompleteWindowMarker]


@dataclass(frozen=True)
class RollingResult:
    date: date
    mean: Stat
    stdev: Stat  # NaN when a relaxed window holds a single observation
    upper_bound: Stat
    lower_bound: Stat
    periods: int  # observations available to the window at this date

    @property
    def has_value(self) -> bool:
        return self.mean is not INCOMPLETE

    def as_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "mean": self.mean,
            "stdev": self.stdev,
            "upper_bound": self.upper_bound,
            "lower_bound": self.lower_bound,
            "periods": self.periods,
        }


def _validate_width(width: Any) -> int:
    if isinstance(width, bool) or not isinstance(width, numbers.Integral) or width < 1:
        raise InvalidWindowError(width)
    return int(width)


def rolling_window_stats(
    series: Union[DailySeries, Iterable[Any]],
    width: int,
    align: str,
    min_periods: bool = False,
    k: float = 2.0,
) -> List[RollingResult]:
    """Rolling mean, sample stdev and mean +/- k*stdev bounds over a daily series.

    - align='right': window ends at the date and covers the previous ``width`` days
    - align='left': window starts at the date and covers the next ``width`` days
    - Dates whose window would cross the series edge are INCOMPLETE, unless
      ``min_periods`` is set, in which case the truncated window is used
    Output is aligned 1:1 with the series dates.
    """
    w = _validate_width(width)
    if align not in ALIGNMENTS:
        raise ValueError(f"align must be one of {ALIGNMENTS}, got {align!r}")
    daily = as_daily_series(series)

    values = pd.Series(daily.values, dtype="float64")
    required = 1 if min_periods else w
    if align == "right":
        window = values.rolling(window=w, min_periods=required)
    else:
        window = values.rolling(window=FixedForwardWindowIndexer(window_size=w), min_periods=required)
    means = window.mean().tolist()
    stdevs = window.std(ddof=1).tolist()

    n = len(daily)
    out: List[RollingResult] = []
    for i, obs in enumerate(daily):
        periods = min(i + 1, w) if align == "right" else min(n - i, w)
        if periods < required:
            out.append(RollingResult(obs.date, INCOMPLETE, INCOMPLETE, INCOMPLETE, INCOMPLETE, periods))
            continue
        mean, stdev = means[i], stdevs[i]
        out.append(RollingResult(obs.date, mean, stdev, mean + k * stdev, mean - k * stdev, periods))

    log.debug(
        "rolling %s window of %d days over %d dates: %d computable",
        align, w, n, sum(1 for r in out if r.has_value),
    )
    return out


def validate_band_symmetry(results: Iterable[RollingResult], eps: float = 1e-9) -> bool:
    """Check upper - mean == mean - lower for every computed record.
    Records that are INCOMPLETE or carry a NaN stdev are ignored.
    """
    for r in results:
        if not r.has_value or math.isnan(r.stdev):
            continue
        if abs((r.upper_bound - r.mean) - (r.mean - r.lower_bound)) > eps * max(1.0, abs(r.mean)):
            return False
    return True

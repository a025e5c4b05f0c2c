from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Sequence, Tuple, Union
from datetime import date, datetime
import logging
import math

import pandas as pd

from covidtrend.historical.errors import EmptyInputError, NonContiguousSeriesError

log = logging.getLogger(__name__)

DateLike = Union[date, datetime, str]


@dataclass(frozen=True)
class Observation:
    date: date
    value: Any  # case or death count; sign and type are the caller's concern


def _parse_date(d: DateLike) -> date:
    # pd.Timestamp is a datetime subclass, so it takes the first branch
    if isinstance(d, datetime):
        return d.date()
    if isinstance(d, date):
        return d
    return pd.Timestamp(str(d)).date()


def _as_pair(item: Any) -> Tuple[date, Any]:
    if isinstance(item, Observation):
        return item.date, item.value
    d, v = item
    return _parse_date(d), v


def _is_missing(v: Any) -> bool:
    return v is None or (isinstance(v, float) and math.isnan(v))


def _check_contiguous(observations: Sequence[Observation]) -> None:
    for prev, cur in zip(observations, observations[1:]):
        step = (cur.date - prev.date).days
        if step != 1:
            raise NonContiguousSeriesError(
                f"expected {cur.date} to follow {prev.date} by one day, got a step of {step}"
            )


@dataclass(frozen=True)
class DailySeries:
    """One observation per calendar day between ``start`` and ``end`` inclusive.

    Construction validates the invariant; nothing mutates a series afterwards.
    Use ``fill_daily_gaps`` to build one from sparse observations.
    """

    observations: Tuple[Observation, ...]

    def __post_init__(self):
        if not self.observations:
            raise EmptyInputError("daily observations")
        _check_contiguous(self.observations)

    def __len__(self) -> int:
        return len(self.observations)

    def __iter__(self) -> Iterator[Observation]:
        return iter(self.observations)

    def __getitem__(self, idx: int) -> Observation:
        return self.observations[idx]

    @property
    def start(self) -> date:
        return self.observations[0].date

    @property
    def end(self) -> date:
        return self.observations[-1].date

    @property
    def dates(self) -> List[date]:
        return [o.date for o in self.observations]

    @property
    def values(self) -> List[Any]:
        return [o.value for o in self.observations]

    def to_pandas(self) -> pd.Series:
        index = pd.DatetimeIndex(pd.to_datetime(self.dates), name="date")
        return pd.Series(self.values, index=index, name="value")


def as_daily_series(obj: Union[DailySeries, Iterable[Any]]) -> DailySeries:
    """Accept a DailySeries as-is; otherwise validate a raw sorted sequence."""
    if isinstance(obj, DailySeries):
        return obj
    return DailySeries(tuple(Observation(*_as_pair(o)) for o in obj))


def _observed_totals(observations: Iterable[Any]) -> pd.Series:
    totals: Dict[date, Any] = {}
    for item in observations:
        d, v = _as_pair(item)
        if d not in totals or _is_missing(totals[d]):
            totals[d] = v
        elif not _is_missing(v):
            totals[d] = totals[d] + v
    if not totals:
        raise EmptyInputError()
    return pd.Series(
        list(totals.values()), index=pd.DatetimeIndex(pd.to_datetime(list(totals.keys()))), dtype=object
    ).sort_index()


def fill_daily_gaps(
    observations: Iterable[Union[Observation, Tuple[DateLike, Any]]], fill_value: Any = 0
) -> DailySeries:
    """Turn sparse (date, value) pairs into a contiguous daily series.

    - Input order does not matter; dates are reduced to calendar days
    - Pairs sharing a date are summed (e.g. per-province rows of one country);
      a date whose values are all missing stays missing
    - Every day in [min_date, max_date] absent from the input gets ``fill_value``
    - Values are otherwise passed through untouched
    """
    observed = _observed_totals(observations)
    full_range = pd.date_range(observed.index[0], observed.index[-1], freq="D")
    filled = observed.reindex(full_range, fill_value=fill_value)
    log.debug(
        "filled %d of %d days between %s and %s",
        len(full_range) - len(observed), len(full_range), full_range[0].date(), full_range[-1].date(),
    )
    return DailySeries(tuple(Observation(ts.date(), v) for ts, v in zip(filled.index, filled.tolist())))


def carry_forward_gaps(observations: Iterable[Union[Observation, Tuple[DateLike, Any]]]) -> DailySeries:
    """Contiguous daily series for running totals: a missing day repeats the last reported total.

    Same date handling and duplicate summing as ``fill_daily_gaps``. Differencing
    the result puts the whole catch-up on the next reported day instead of
    turning the gap into a drop to zero followed by a spike.
    """
    observed = _observed_totals(observations)
    full_range = pd.date_range(observed.index[0], observed.index[-1], freq="D")
    carried = observed.reindex(full_range, method="ffill")
    log.debug("carried totals forward over %d of %d days", len(full_range) - len(observed), len(full_range))
    return DailySeries(tuple(Observation(ts.date(), v) for ts, v in zip(carried.index, carried.tolist())))


def cumulative_to_daily(series: Union[DailySeries, Iterable[Any]], clip_negative: bool = False) -> DailySeries:
    """Convert running totals into daily new counts.

    The first day keeps its cumulative value (everything reported up to then).
    Downward revisions show up as negative days unless ``clip_negative`` is set.
    """
    daily_series = as_daily_series(series)
    cumulative = pd.to_numeric(pd.Series(daily_series.values))
    daily = cumulative.diff()
    daily.iloc[0] = cumulative.iloc[0]
    if clip_negative:
        negatives = int((daily < 0).sum())
        if negatives:
            log.debug("clipping %d negative daily corrections", negatives)
        daily = daily.clip(lower=0)
    if pd.api.types.is_integer_dtype(cumulative.dtype):
        daily = daily.astype(cumulative.dtype)
    return DailySeries(
        tuple(Observation(o.date, v) for o, v in zip(daily_series, daily.tolist()))
    )

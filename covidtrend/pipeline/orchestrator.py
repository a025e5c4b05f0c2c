from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
import logging
import math
import time

from covidtrend.config.env import RollingConfig, get_rolling_config
from covidtrend.historical.errors import EmptyInputError
from covidtrend.historical.rolling import RollingResult, rolling_window_stats, validate_band_symmetry
from covidtrend.historical.timeseries import DailySeries, carry_forward_gaps, cumulative_to_daily, fill_daily_gaps

log = logging.getLogger(__name__)

ObservationsByCountry = Mapping[str, Sequence[Tuple[Any, Any]]]


@dataclass
class CountryReport:
    country: str
    metric: str
    status: str = "queued"  # queued|running|completed|failed
    events: List[Dict[str, Any]] = field(default_factory=list)
    series: Optional[DailySeries] = None
    results: List[RollingResult] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)
    checks: Dict[str, bool] = field(default_factory=dict)
    error: Optional[str] = None


def _event(report: CountryReport, stage: str, message: str):
    report.events.append({"stage": stage, "message": message, "ts": time.time()})
    log.debug("[%s/%s] %s: %s", report.country, report.metric, stage, message)


def analyze_country(
    observations: ObservationsByCountry,
    country: str,
    metric: str = "confirmed",
    cumulative: bool = True,
    config: RollingConfig | None = None,
) -> CountryReport:
    """Select one country, build its daily series and rolling statistics.

    Stages: Select -> Normalize -> Daily (cumulative input only) -> Rolling -> Validate.
    Validation errors stop the run; the report ends 'failed' with the message
    in ``error`` and no partial results.
    """
    cfg = config or get_rolling_config()
    report = CountryReport(country=country, metric=metric)
    try:
        report.status = "running"
        _event(report, "Select", f"Selecting {metric} observations for '{country}'")
        pairs = observations.get(country)
        if not pairs:
            raise EmptyInputError(f"{metric} observations for '{country}'")

        if cumulative:
            _event(report, "Normalize", "Carrying running totals forward over missing days")
            series = carry_forward_gaps(pairs)
            _event(report, "Daily", "Converting cumulative counts to daily counts")
            series = cumulative_to_daily(series, clip_negative=cfg.clip_negative)
        else:
            _event(report, "Normalize", f"Filling missing days with {cfg.fill_value!r}")
            series = fill_daily_gaps(pairs, fill_value=cfg.fill_value)

        _event(report, "Rolling", f"Computing {cfg.window}-day {cfg.align}-aligned window")
        results = rolling_window_stats(
            series, cfg.window, cfg.align, min_periods=cfg.min_periods, k=cfg.band_k
        )

        _event(report, "Validate", "Checking band symmetry and count signs")
        computed = [r for r in results if r.has_value]
        report.series = series
        report.results = results
        report.checks = {
            "band_symmetry": validate_band_symmetry(results),
            "non_negative_counts": all(not (isinstance(v, (int, float)) and v < 0) for v in series.values),
        }
        report.summary = {
            "start": series.start.isoformat(),
            "end": series.end.isoformat(),
            "days": len(series),
            "window": cfg.window,
            "align": cfg.align,
            "band_k": cfg.band_k,
            "computable": len(computed),
            "last_mean": computed[-1].mean if computed else None,
            "peak_mean": max((r.mean for r in computed if not math.isnan(r.mean)), default=None),
        }
        report.status = "completed"
        _event(report, "Done", "Analysis completed")
    except ValueError as e:
        report.status = "failed"
        report.error = str(e)
        report.series = None
        report.results = []
        _event(report, "Error", str(e))
        log.warning("analysis of %s failed: %s", country, e)
    return report


def analyze_countries(
    observations: ObservationsByCountry,
    countries: Iterable[str],
    metric: str = "confirmed",
    cumulative: bool = True,
    config: RollingConfig | None = None,
) -> Dict[str, CountryReport]:
    """Run the same analysis per country for side-by-side (faceted) comparison."""
    cfg = config or get_rolling_config()
    return {c: analyze_country(observations, c, metric, cumulative, cfg) for c in countries}


def rank_countries(
    observations: ObservationsByCountry, limit: int = 10, cumulative: bool = True
) -> List[Tuple[str, Any]]:
    """Rank countries by total count, largest first.

    For cumulative input the total is the value on the latest date; for daily
    input it is the sum over all days. Ties break on country name.
    """
    totals: List[Tuple[str, Any]] = []
    for country, pairs in observations.items():
        if not pairs:
            continue
        values = fill_daily_gaps(pairs, fill_value=0).values
        totals.append((country, values[-1] if cumulative else sum(values)))
    totals.sort(key=lambda t: (-t[1], t[0]))
    return totals[:limit]

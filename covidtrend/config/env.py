from __future__ import annotations
import os
from dataclasses import dataclass


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_number(name: str, default: str) -> int | float:
    raw = os.getenv(name, default).strip()
    try:
        return int(raw)
    except ValueError:
        return float(raw)


@dataclass(frozen=True)
class RollingConfig:
    window: int = 7  # 30 and 90 are the other widths used in the charts
    align: str = "right"  # 'left' | 'right'
    min_periods: bool = False  # compute over truncated windows at the series edge
    band_k: float = 2.0  # bounds = mean +/- k * stdev
    fill_value: int | float = 0
    clip_negative: bool = False  # clamp negative daily corrections to 0


def get_rolling_config() -> RollingConfig:
    return RollingConfig(
        window=int(os.getenv("COVIDTREND_WINDOW", "7")),
        align=os.getenv("COVIDTREND_ALIGN", "right").strip().lower(),
        min_periods=_env_flag("COVIDTREND_MIN_PERIODS"),
        band_k=float(os.getenv("COVIDTREND_BAND_K", "2.0")),
        fill_value=_env_number("COVIDTREND_FILL_VALUE", "0"),
        clip_negative=_env_flag("COVIDTREND_CLIP_NEGATIVE"),
    )


@dataclass(frozen=True)
class SourceConfig:
    jhu_base_url: str = (
        "https://raw.githubusercontent.com/CSSEGISandData/COVID-19/master/"
        "csse_covid_19_data/csse_covid_19_time_series"
    )
    owid_url: str = "https://covid.ourworldindata.org/data/owid-covid-data.csv"


def get_source_config() -> SourceConfig:
    defaults = SourceConfig()
    return SourceConfig(
        jhu_base_url=os.getenv("COVIDTREND_JHU_BASE_URL", defaults.jhu_base_url).rstrip("/"),
        owid_url=os.getenv("COVIDTREND_OWID_URL", defaults.owid_url),
    )


@dataclass(frozen=True)
class LogConfig:
    level: str = "WARNING"


def get_log_config() -> LogConfig:
    return LogConfig(level=os.getenv("COVIDTREND_LOG_LEVEL", "WARNING").upper())

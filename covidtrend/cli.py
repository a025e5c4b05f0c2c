import json
import logging
import math
import sys
from dataclasses import replace
from pathlib import Path

from covidtrend.config.env import get_log_config, get_rolling_config
from covidtrend.historical.errors import INCOMPLETE
from covidtrend.ingestion.jhu_client import parse_jhu_time_series
from covidtrend.pipeline.orchestrator import analyze_country

USAGE = "Usage: python -m covidtrend.cli <jhu_csv_path> <country> [window] [left|right]"


def _json_value(v):
    if v is INCOMPLETE or (isinstance(v, float) and math.isnan(v)):
        return None
    return v


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 2:
        print(USAGE)
        sys.exit(2)
    logging.basicConfig(level=get_log_config().level)

    path, country = args[0], args[1]
    cfg = get_rolling_config()
    if len(args) > 2:
        try:
            cfg = replace(cfg, window=int(args[2]))
        except ValueError:
            print(f"error: window must be an integer, got {args[2]!r}", file=sys.stderr)
            print(USAGE, file=sys.stderr)
            sys.exit(1)
    if len(args) > 3:
        cfg = replace(cfg, align=args[3].lower())

    observations = parse_jhu_time_series(Path(path).read_text())
    report = analyze_country(observations, country, config=cfg)
    if report.status != "completed":
        print(f"error: {report.error}", file=sys.stderr)
        sys.exit(1)
    print(json.dumps([
        {
            "date": r.date.isoformat(),
            "mean": _json_value(r.mean),
            "stdev": _json_value(r.stdev),
            "upper_bound": _json_value(r.upper_bound),
            "lower_bound": _json_value(r.lower_bound),
            "periods": r.periods,
        }
        for r in report.results
    ], indent=2))


if __name__ == "__main__":
    main()

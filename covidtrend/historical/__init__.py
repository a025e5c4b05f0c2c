"""Historical series: gap filling and rolling-window statistics.

- timeseries.py: Observation/DailySeries, gap filling, cumulative -> daily
- rolling.py: rolling mean, sample stdev and band bounds
- errors.py: validation errors and the incomplete-window marker
"""

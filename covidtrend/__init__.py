"""covidtrend: gap-filled daily COVID-19 series and rolling-window statistics.

- historical/: daily series normalisation and rolling aggregation
- ingestion/: JHU CSSE and OWID CSV parsers
- pipeline/: per-country analysis runs
- exports/: CSV writers and Markdown reports
"""

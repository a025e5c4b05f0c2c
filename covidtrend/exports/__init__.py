"""Exports & reporting: CSV writers and Markdown reports.

- writers.py: CSV emitters for daily series and rolling results
- reports.py: per-country Markdown summary with validation checks
"""

from __future__ import annotations

from covidtrend.pipeline.orchestrator import CountryReport


def summary_md(report: CountryReport) -> str:
    """Markdown summary of one country run: status, summary fields, checks, stages."""
    lines = [f"# {report.country} ({report.metric})", "", f"- status: {report.status}"]
    if report.error:
        lines.append(f"- error: {report.error}")
    for k, v in report.summary.items():
        lines.append(f"- {k}: {v}")
    if report.checks:
        lines.append("\n## Checks")
        for k, ok in report.checks.items():
            lines.append(f"- {k}: {'PASS' if ok else 'FAIL'}")
    if report.events:
        lines.append("\n## Stages")
        for e in report.events:
            lines.append(f"- {e['stage']}: {e['message']}")
    return "\n".join(lines) + "\n"

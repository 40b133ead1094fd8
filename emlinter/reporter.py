"""Report generation: JSON and Markdown output."""

from __future__ import annotations

import json
from pathlib import Path

from emlinter.models import ContrastReport


def report_to_dict(report: ContrastReport) -> dict[str, object]:
    return {
        "source": report.source_name,
        "failing_light": report.failing_light_count,
        "failing_dark": report.failing_dark_count,
        "results": [r.to_dict() for r in report.results],
    }


def write_json_report(report: ContrastReport, output: Path) -> None:
    """Write contrast findings as a JSON report."""
    output.write_text(json.dumps(report_to_dict(report), indent=2), encoding="utf-8")


def write_markdown_report(report: ContrastReport, output: Path) -> None:
    """Write contrast findings as a Markdown report."""
    lines: list[str] = [
        f"# Dark Mode Contrast Report: {report.source_name}",
        "",
        f"- **Failing colour pairs:** {len(report.results)}",
        f"- **Fail in light mode:** {report.failing_light_count}",
        f"- **Fail in dark mode:** {report.failing_dark_count}",
        "",
    ]

    if report.results:
        lines += [
            "| Element | Text | Background | Light | Dark | Suggestion |",
            "| --- | --- | --- | --- | --- | --- |",
        ]
        for r in report.results:
            light = f"{r.light_mode_contrast:.2f}" + ("" if r.passes_light else " FAIL")
            dark = f"{r.dark_mode_contrast:.2f}" + ("" if r.passes_dark else " FAIL")
            text = r.element_text.replace("|", "\\|")
            lines.append(
                f"| `<{r.element_tag}>` {text} | `{r.original_text_color}` "
                f"| `{r.original_bg_color}` | {light} | {dark} | `{r.suggestion}` |"
            )
    else:
        lines.append("All text colour pairs pass in both light and dark mode.")

    lines.append("")
    output.write_text("\n".join(lines), encoding="utf-8")


def write_report(report: ContrastReport, output: Path, report_format: str) -> None:
    if report_format == "json":
        write_json_report(report, output)
    else:
        write_markdown_report(report, output)

"""Render an analysis report as plain text for the terminal."""

from __future__ import annotations

from propwise.analyzer.models import AnalysisReport
from propwise.render._helpers import (
    candidate_labels,
    coverage,
    listed_candidates,
    location,
    pair_label,
)

_RULE = "=" * 80


def render_text(report: AnalysisReport) -> str:
    lines: list[str] = [_RULE, "PropWise Analysis Report", _RULE, ""]

    lines += [
        "Summary:",
        f"  Total functions analyzed: {report.total_functions}",
        f"  Property test candidates: {report.candidates_count}",
        f"  Coverage: {coverage(report)}%",
        "",
    ]

    if report.inverse_pairs:
        lines.append("Inverse Function Pairs Detected:")
        for pair in report.inverse_pairs:
            lines.append(f"  {pair_label(pair)}")
            lines.append(f"    Suggestion: {pair.suggestion}")
        lines.append("")

    if not report.candidates:
        lines.append("No strong candidates found. Consider lowering the min_score threshold.")
        return "\n".join(lines) + "\n"

    shown = listed_candidates(report)
    lines.append(f"Top {len(shown)} Candidates:")
    lines.append("")
    for c in shown:
        lines.append(f"{c.qualified_name}")
        lines.append(f"  Score: {c.score}")
        lines.append(f"  Location: {location(c)}")
        lines.append(f"  Type: {c.visibility} function")
        lines.append(f"  Patterns: {candidate_labels(c)}")
        lines.append("  Testing suggestions:")
        for s in c.suggestions:
            first, *rest = s.rstrip("\n").split("\n")
            lines.append(f"    - {first}")
            lines.extend(f"      {line}" for line in rest)
        lines.append("")

    return "\n".join(lines)

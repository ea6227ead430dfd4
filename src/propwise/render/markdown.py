"""Render scan results as a Markdown report."""

from __future__ import annotations

from propwise.render._helpers import (
    candidate_labels,
    coverage,
    listed_candidates,
    location,
    pair_label,
    pattern_label,
    score_tier,
    summary_bullets,
)
from propwise.scanner import ScanResult


def render_markdown(result: ScanResult) -> str:
    """Produce a full Markdown report from a ScanResult."""
    sections: list[str] = []
    r = result.report
    name = result.project_path.name

    # ── Title ────────────────────────────────────────────────────────────
    sections.append(f"# PropWise Report: {name}\n")

    # ── Summary box ──────────────────────────────────────────────────────
    summary_lines = [
        f"- **Project**: `{result.project_path}`",
        f"- **Analyzed paths**: {', '.join(f'`{p}`' for p in result.analyze_paths)}",
        f"- **Functions analyzed**: {r.total_functions}",
        f"- **Property test candidates**: {r.candidates_count} (min score {r.min_score})",
        f"- **Coverage**: {coverage(r)}%",
        f"- **Inverse pairs**: {len(r.inverse_pairs)}",
    ]
    sections.append("\n".join(summary_lines) + "\n")

    sections.append("\n".join(f"> {b}" for b in summary_bullets(r)) + "\n")

    # ── Inverse pairs ────────────────────────────────────────────────────
    if r.inverse_pairs:
        sections.append("## Inverse Function Pairs\n")
        sections.append("| Pair | Convention | Suggestion |")
        sections.append("|---|---|---|")
        for pair in r.inverse_pairs:
            conv = " / ".join(pair.convention)
            sections.append(f"| `{pair_label(pair)}` | {conv} | {pair.suggestion} |")
        sections.append("")

    if not r.candidates:
        return "\n".join(sections)

    # ── Candidate table ──────────────────────────────────────────────────
    shown = listed_candidates(r)
    sections.append("## Candidates\n")
    sections.append("| Function | Score | Tier | Patterns | Location |")
    sections.append("|---|---|---|---|---|")
    for c in shown:
        sections.append(
            f"| `{c.qualified_name}` | {c.score} | {score_tier(c.score)} "
            f"| {candidate_labels(c)} | `{location(c)}` |"
        )
    sections.append("")
    if len(r.candidates) > len(shown):
        sections.append(f"... and {len(r.candidates) - len(shown)} more\n")

    # ── Per-candidate detail ─────────────────────────────────────────────
    sections.append("## Suggested Properties\n")
    for c in shown:
        sections.append(f"### `{c.qualified_name}`\n")
        b = c.breakdown
        sections.append(
            f"Score {c.score} = base {b.base} + patterns {b.patterns} "
            f"+ multi-pattern {b.multi_pattern_bonus} + complexity {b.complexity_bonus} "
            f"+ public {b.visibility_bonus}\n"
        )
        for p in c.patterns:
            sections.append(f"- **{pattern_label(p.kind)}**: {p.reason}")
        sections.append("")
        for s in c.suggestions:
            if "\n" in s:
                sections.append(f"```python\n{s.rstrip()}\n```\n")
            else:
                sections.append(f"- {s}")
        sections.append("")

    return "\n".join(sections)

"""Render scan results as a styled PDF report.

Uses fpdf2 drawing primitives (no markdown-to-HTML conversion).
Install via: pip install propwise[pdf]
"""

from __future__ import annotations

from datetime import date
from pathlib import Path

from propwise.render._helpers import (
    candidate_labels,
    coverage,
    latin1,
    listed_candidates,
    location,
    pair_label,
    score_tier,
    summary_bullets,
)
from propwise.scanner import ScanResult


# ── Color palette ──────────────────────────────────────────────────────────

_TIER_COLORS: dict[str, tuple[tuple[int, int, int], tuple[int, int, int]]] = {
    # tier -> (text_rgb, bg_rgb)
    "strong": ((22, 101, 52), (220, 252, 231)),
    "good":   ((30, 64, 175), (219, 234, 254)),
    "fair":   ((161, 120, 0), (254, 249, 195)),
    "none":   ((75, 85, 99), (229, 231, 235)),
}

_CHARCOAL = (31, 41, 55)
_WHITE = (255, 255, 255)
_ALT_ROW = (248, 249, 250)
_BODY = (30, 30, 30)
_MUTED = (100, 100, 100)
_DIVIDER = (200, 200, 200)
_CODE_BG = (243, 244, 246)

# Column widths for standard tables
_CANDIDATE_COLS = (70, 14, 18, 68)   # total = 170 < 180
_PAIR_COLS = (85, 30, 55)            # total = 170 < 180


def render_pdf(result: ScanResult, output_path: Path) -> None:
    """Render the scan result to a PDF file."""
    try:
        from fpdf import FPDF
        from fpdf.enums import XPos, YPos
    except ImportError:
        raise ImportError(
            "PDF output requires 'fpdf2'. "
            "Install it with: pip install propwise[pdf]"
        )

    pdf = _PropertyReportPDF(result, FPDF, XPos, YPos)
    pdf.render()
    pdf.output(str(output_path))


class _PropertyReportPDF:
    """Builds a multi-page PDF from a ScanResult using fpdf2 drawing primitives."""

    def __init__(self, result: ScanResult, fpdf_cls, xpos_enum, ypos_enum):
        self._result = result
        self._report = result.report
        self._XPos = xpos_enum
        self._YPos = ypos_enum
        self._name = result.project_path.name
        self._date = date.today().isoformat()

        self._pdf = fpdf_cls()
        self._pdf.set_auto_page_break(auto=True, margin=20)
        self._pdf.set_margins(15, 20, 15)
        self._content_w = 180  # 210 - 15 - 15

    # ── Delegation ─────────────────────────────────────────────────────

    def output(self, path: str) -> None:
        self._pdf.output(path)

    # ── Header / Footer ───────────────────────────────────────────────

    def _add_page(self) -> None:
        self._pdf.add_page()
        if self._pdf.page_no() > 1:
            self._pdf.set_font("Helvetica", "B", 8)
            self._pdf.set_text_color(*_MUTED)
            self._pdf.set_y(10)
            self._pdf.cell(self._content_w / 2, 5, self._safe(f"{self._name} -- PropWise Report"), new_x=self._XPos.RIGHT, new_y=self._YPos.TOP)
            self._pdf.set_font("Helvetica", "", 8)
            self._pdf.cell(self._content_w / 2, 5, self._date, align="R", new_x=self._XPos.LMARGIN, new_y=self._YPos.NEXT)
            self._pdf.set_draw_color(*_DIVIDER)
            self._pdf.line(15, 16, 195, 16)
            self._pdf.set_y(20)

    def _footer(self) -> None:
        """Draw footer on current page (called before adding next page).

        Auto page break is off while drawing so fpdf2 does not insert a blank
        page below the break threshold.
        """
        self._pdf.set_auto_page_break(auto=False)
        self._pdf.set_draw_color(*_DIVIDER)
        self._pdf.line(15, 282, 195, 282)
        self._pdf.set_y(283)
        self._pdf.set_font("Helvetica", "", 7.5)
        self._pdf.set_text_color(*_MUTED)
        self._pdf.cell(self._content_w, 5, f"Page {self._pdf.page_no()}", align="R")
        self._pdf.set_auto_page_break(auto=True, margin=20)

    # ── Drawing helpers ────────────────────────────────────────────────

    def _safe(self, text: str) -> str:
        return latin1(str(text))

    def _set_body_text(self) -> None:
        self._pdf.set_font("Helvetica", "", 9)
        self._pdf.set_text_color(*_BODY)

    def _divider(self) -> None:
        y = self._pdf.get_y() + 2
        self._pdf.set_draw_color(*_DIVIDER)
        self._pdf.line(15, y, 195, y)
        self._pdf.set_y(y + 4)

    def _ensure_space(self, needed: float = 20) -> None:
        """Add a new page if less than `needed` mm remain."""
        if self._pdf.get_y() + needed > 275:
            self._footer()
            self._add_page()

    def _heading(self, text: str, level: int = 2) -> None:
        sizes = {2: 14, 3: 11, 4: 9.5}
        sz = sizes.get(level, 11)
        spacing = {2: 8, 3: 5, 4: 3}
        self._ensure_space(sz + spacing.get(level, 5) + 5)
        self._pdf.ln(spacing.get(level, 5))
        self._pdf.set_font("Helvetica", "B", sz)
        self._pdf.set_text_color(*_BODY)
        self._pdf.cell(self._content_w, sz * 0.5, self._safe(text), new_x=self._XPos.LMARGIN, new_y=self._YPos.NEXT)
        self._pdf.ln(2)

    def _bullet(self, text: str, indent: float = 4) -> None:
        self._set_body_text()
        x0 = self._pdf.get_x()
        self._pdf.set_x(x0 + indent)
        cy = self._pdf.get_y() + 1.5
        self._pdf.set_fill_color(*_BODY)
        self._pdf.ellipse(self._pdf.get_x(), cy, 1.2, 1.2, style="F")
        self._pdf.set_x(self._pdf.get_x() + 3)
        self._pdf.multi_cell(self._content_w - indent - 7, 4, self._safe(text), new_x=self._XPos.LMARGIN, new_y=self._YPos.NEXT)

    def _kv(self, key: str, value: str) -> None:
        self._pdf.set_font("Helvetica", "B", 9)
        self._pdf.set_text_color(*_BODY)
        kw = self._pdf.get_string_width(key + ": ") + 2
        self._pdf.cell(kw, 4.5, self._safe(key + ":"), new_x=self._XPos.RIGHT, new_y=self._YPos.TOP)
        self._pdf.set_font("Helvetica", "", 9)
        self._pdf.multi_cell(self._content_w - kw, 4.5, self._safe(value), new_x=self._XPos.LMARGIN, new_y=self._YPos.NEXT)

    def _tier_badge(self, tier: str) -> None:
        """Draw a colored pill with the score tier."""
        text_c, bg_c = _TIER_COLORS.get(tier, _TIER_COLORS["none"])
        label = tier.upper()
        self._pdf.set_font("Helvetica", "B", 7)
        w = self._pdf.get_string_width(label) + 4
        h = 4.5
        x = self._pdf.get_x()
        y = self._pdf.get_y()
        self._pdf.set_fill_color(*bg_c)
        self._pdf.set_draw_color(*bg_c)
        self._pdf.rect(x, y, w, h, style="FD")
        self._pdf.set_text_color(*text_c)
        self._pdf.set_xy(x, y)
        self._pdf.cell(w, h, label, align="C", new_x=self._XPos.RIGHT, new_y=self._YPos.TOP)
        self._pdf.set_x(x + w + 2)

    def _code_block(self, code: str) -> None:
        lines = code.rstrip("\n").split("\n")
        h = 3.8 * len(lines) + 3
        self._ensure_space(h + 2)
        y = self._pdf.get_y()
        self._pdf.set_fill_color(*_CODE_BG)
        self._pdf.rect(15, y, self._content_w, h, style="F")
        self._pdf.set_xy(17, y + 1.5)
        self._pdf.set_font("Courier", "", 7.5)
        self._pdf.set_text_color(*_BODY)
        for line in lines:
            self._pdf.set_x(17)
            self._pdf.cell(self._content_w - 4, 3.8, self._safe(line), new_x=self._XPos.LMARGIN, new_y=self._YPos.NEXT)
        self._pdf.set_y(y + h + 2)

    def _table_header(self, cols: tuple[float, ...], headers: list[str]) -> None:
        """Draw a charcoal header row."""
        self._ensure_space(12)
        self._pdf.set_fill_color(*_CHARCOAL)
        self._pdf.set_text_color(*_WHITE)
        self._pdf.set_font("Helvetica", "B", 7.5)
        for i, hdr in enumerate(headers):
            last = i == len(headers) - 1
            self._pdf.cell(
                cols[i], 6, self._safe(hdr), border=0, fill=True,
                align="L",
                new_x=self._XPos.LMARGIN if last else self._XPos.RIGHT,
                new_y=self._YPos.NEXT if last else self._YPos.TOP,
            )

    def _table_row(self, cols: tuple[float, ...], values: list[str], row_idx: int) -> None:
        """Draw a data row, alternating background."""
        self._ensure_space(8)
        fill = row_idx % 2 == 1
        if fill:
            self._pdf.set_fill_color(*_ALT_ROW)
        self._pdf.set_text_color(*_BODY)
        self._pdf.set_font("Helvetica", "", 7.5)
        for i, val in enumerate(values):
            last = i == len(values) - 1
            self._pdf.cell(
                cols[i], 5.5, self._safe(val), border=0, fill=fill,
                align="L",
                new_x=self._XPos.LMARGIN if last else self._XPos.RIGHT,
                new_y=self._YPos.NEXT if last else self._YPos.TOP,
            )

    # ── Main render ────────────────────────────────────────────────────

    def render(self) -> None:
        self._add_page()
        self._render_title()
        self._render_summary()
        self._render_inverse_pairs()
        self._render_candidate_table()
        self._render_candidate_details()
        self._footer()

    # ── 1. Title block ─────────────────────────────────────────────────

    def _render_title(self) -> None:
        self._pdf.ln(15)
        self._pdf.set_font("Helvetica", "B", 20)
        self._pdf.set_text_color(*_BODY)
        self._pdf.cell(self._content_w, 10, self._safe(self._name), new_x=self._XPos.LMARGIN, new_y=self._YPos.NEXT)
        self._pdf.set_font("Helvetica", "", 10)
        self._pdf.set_text_color(*_MUTED)
        self._pdf.cell(self._content_w, 6, "Property-Based Testing Candidates", new_x=self._XPos.LMARGIN, new_y=self._YPos.NEXT)
        self._pdf.cell(self._content_w, 6, self._date, new_x=self._XPos.LMARGIN, new_y=self._YPos.NEXT)
        self._pdf.ln(6)
        self._divider()

    # ── 2. Summary ─────────────────────────────────────────────────────

    def _render_summary(self) -> None:
        r = self._report
        self._heading("Summary")
        self._kv("Functions analyzed", str(r.total_functions))
        self._kv("Candidates", f"{r.candidates_count} (min score {r.min_score})")
        self._kv("Coverage", f"{coverage(r)}%")
        self._kv("Inverse pairs", str(len(r.inverse_pairs)))
        self._pdf.ln(2)
        for b in summary_bullets(r):
            self._bullet(b)
        self._pdf.ln(2)
        self._divider()

    # ── 3. Inverse pairs ───────────────────────────────────────────────

    def _render_inverse_pairs(self) -> None:
        pairs = self._report.inverse_pairs
        if not pairs:
            return
        self._heading("Inverse Function Pairs")
        self._table_header(_PAIR_COLS, ["Pair", "Convention", "Property"])
        for i, pair in enumerate(pairs):
            self._table_row(
                _PAIR_COLS,
                [pair_label(pair), " / ".join(pair.convention), pair.suggestion.removeprefix("Test round-trip property: ")],
                i,
            )
        self._pdf.ln(4)

    # ── 4. Candidate table ─────────────────────────────────────────────

    def _render_candidate_table(self) -> None:
        shown = listed_candidates(self._report)
        if not shown:
            return
        self._heading("Top Candidates")
        self._table_header(_CANDIDATE_COLS, ["Function", "Score", "Tier", "Patterns"])
        for i, c in enumerate(shown):
            self._table_row(
                _CANDIDATE_COLS,
                [c.qualified_name, str(c.score), score_tier(c.score), candidate_labels(c)],
                i,
            )
        self._pdf.ln(4)

    # ── 5. Per-candidate suggestions ───────────────────────────────────

    def _render_candidate_details(self) -> None:
        shown = listed_candidates(self._report)
        if not shown:
            return
        self._footer()
        self._add_page()
        self._heading("Suggested Properties")
        for c in shown:
            self._heading(c.qualified_name, 3)
            self._tier_badge(score_tier(c.score))
            self._pdf.ln(6)
            self._kv("Location", location(c))
            self._kv("Patterns", "; ".join(f"{p.reason}" for p in c.patterns) or "none")
            self._pdf.ln(1)
            for s in c.suggestions:
                if "\n" in s:
                    self._code_block(s)
                else:
                    self._bullet(s)

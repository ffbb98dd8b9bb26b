from __future__ import annotations  # Styled PDF rendering for interview feedback reports

import os
import re
from datetime import datetime
from typing import Any, List, Tuple

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from .models import FeedbackExchange, FeedbackReport


DEJAVU_SANS = "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"  # System font
DEJAVU_SANS_BOLD = "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf"  # System font

ACCENT = (45, 115, 245)  # Palette accent
TEXT = (34, 34, 34)  # Primary text color
MUTED = (100, 100, 100)  # Secondary text color
RULE = (230, 230, 230)  # Divider color

_HEADING = re.compile(r"^\s{0,3}#{1,6}\s+")
_BULLET = re.compile(r"^\s*[-*+]\s+")
_EMPHASIS = re.compile(r"(\*\*|__|\*|`)")


def _format_datetime(value: datetime | None) -> str:  # Format timestamp for display
    if not value:
        return "-"
    return value.strftime("%d %b %Y, %I:%M %p").lstrip("0").replace(" 0", " ")


def _format_duration(seconds: int) -> str:  # Render seconds as "Xm Ys"
    minutes, secs = divmod(max(0, seconds), 60)
    if minutes:
        return f"{minutes}m {secs:02d}s"
    return f"{secs}s"


def _effective_width(pdf: FPDF) -> float:  # Compute effective page width
    return float(pdf.w) - float(pdf.l_margin) - float(pdf.r_margin)


class ReportPDF(FPDF):  # PDF with custom header/footer styling
    def __init__(self, *args, accent: Tuple[int, int, int] = ACCENT, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.accent = accent
        self.header_title = "Interview Feedback"
        self._font_regular = "Helvetica"
        self._font_bold = "Helvetica"
        self._supports_unicode = False

    def use_unicode_font(self) -> None:  # Switch to DejaVu when installed on the host
        if not (os.path.exists(DEJAVU_SANS) and os.path.exists(DEJAVU_SANS_BOLD)):
            return
        self.add_font("DejaVu", "", DEJAVU_SANS)
        self.add_font("DejaVu", "B", DEJAVU_SANS_BOLD)
        self._font_regular = "DejaVu"
        self._font_bold = "DejaVu"
        self._supports_unicode = True

    def prepare_text(self, text: Any) -> str:  # Sanitize text for non-unicode fonts
        value = "" if text is None else str(text)
        if self._supports_unicode:
            return value
        cleaned = value.replace("•", "-").replace("–", "-").replace("—", "-").replace("’", "'")
        return cleaned.encode("latin-1", "ignore").decode("latin-1")

    def paragraph(self, text: str, *, size: int = 11, bold: bool = False, color: Tuple[int, int, int] = TEXT, line: float = 6) -> None:
        self.set_x(self.l_margin)
        self.set_text_color(*color)
        if bold:
            self.set_font(self._font_bold, "B", size)
        else:
            self.set_font(self._font_regular, "", size)
        self.multi_cell(_effective_width(self), line, self.prepare_text(text), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    def header(self) -> None:  # Render header banner
        usable = _effective_width(self)
        if self.page_no() == 1:
            self.set_fill_color(*self.accent)
            self.rect(0, 0, self.w, 20, style="F")
            self.set_text_color(255, 255, 255)
            self.set_font(self._font_bold, "B", 16)
            self.set_xy(self.l_margin, 6)
            self.cell(usable, 8, self.prepare_text(self.header_title), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            self.set_text_color(*TEXT)
            self.set_y(26)
        else:
            self.set_text_color(80, 80, 80)
            self.set_font(self._font_bold, "B", 12)
            self.set_xy(self.l_margin, 8)
            self.cell(usable, 6, self.prepare_text(self.header_title), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            mark = self.get_y()
            self.set_draw_color(*self.accent)
            self.set_line_width(0.4)
            self.line(self.l_margin, mark + 1, self.w - self.r_margin, mark + 1)
            self.set_text_color(*TEXT)
            self.ln(4)

    def footer(self) -> None:  # Render footer with pagination
        self.set_y(-12)
        self.set_draw_color(*RULE)
        self.set_line_width(0.2)
        self.line(self.l_margin, self.get_y(), self.w - self.r_margin, self.get_y())
        self.set_text_color(120, 120, 120)
        self.set_font(self._font_regular, "", 9)
        self.cell(0, 10, f"Page {self.page_no()}/{{nb}}", align="R")


def _section_title(pdf: ReportPDF, title: str) -> None:  # Render styled section title
    pdf.ln(2)
    pdf.paragraph(title, size=13, bold=True, line=9)
    pdf.set_draw_color(*RULE)
    pdf.set_line_width(0.2)
    y = pdf.get_y()
    pdf.line(pdf.l_margin, y, pdf.l_margin + _effective_width(pdf), y)
    pdf.ln(2)


def _meta_block(pdf: ReportPDF, rows: List[Tuple[str, str]]) -> None:  # Draw two-column metadata
    col = _effective_width(pdf) / 2.0
    for idx in range(0, len(rows), 2):
        left = rows[idx]
        right = rows[idx + 1] if idx + 1 < len(rows) else ("", "")
        pdf.set_x(pdf.l_margin)
        pdf.set_text_color(*MUTED)
        pdf.set_font(pdf._font_regular, "", 10)
        pdf.cell(col, 6, pdf.prepare_text(left[0]), new_x=XPos.RIGHT, new_y=YPos.TOP)
        pdf.cell(col, 6, pdf.prepare_text(right[0]), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.set_text_color(*TEXT)
        pdf.set_font(pdf._font_bold, "B", 11)
        pdf.cell(col, 6, pdf.prepare_text(left[1]), new_x=XPos.RIGHT, new_y=YPos.TOP)
        pdf.cell(col, 6, pdf.prepare_text(right[1]), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(2)


def markdown_lines(text: str) -> List[Tuple[str, str]]:  # Flatten markdown into (kind, text) rows
    rows: List[Tuple[str, str]] = []
    for raw in text.splitlines():
        if not raw.strip():
            continue
        if _HEADING.match(raw):
            rows.append(("heading", _EMPHASIS.sub("", _HEADING.sub("", raw)).strip()))
        elif _BULLET.match(raw):
            rows.append(("bullet", "• " + _EMPHASIS.sub("", _BULLET.sub("", raw)).strip()))
        else:
            rows.append(("text", _EMPHASIS.sub("", raw).strip()))
    return rows


def _render_feedback(pdf: ReportPDF, feedback: str) -> None:  # Render the provider's markdown feedback
    for kind, line in markdown_lines(feedback):
        if kind == "heading":
            pdf.ln(1)
            pdf.paragraph(line, size=12, bold=True, color=ACCENT, line=7)
        else:
            pdf.paragraph(line)


def _render_transcript(pdf: ReportPDF, exchanges: List[FeedbackExchange]) -> None:  # Render Q&A pairs
    if not exchanges:
        pdf.paragraph("No questions were recorded.", color=MUTED)
        return
    for entry in exchanges:
        pdf.paragraph(f"Q{entry.sequence}. {entry.question}", bold=True, size=11)
        pdf.paragraph(entry.answer or "(no answer recorded)", color=MUTED if not entry.answer else TEXT)
        pdf.ln(2)


def generate_feedback_pdf(report: FeedbackReport) -> bytes:  # Build PDF payload for a feedback report
    pdf = ReportPDF()
    pdf.use_unicode_font()
    pdf.alias_nb_pages()
    pdf.set_margins(15, 22, 15)
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.add_page()

    _section_title(pdf, "Session Overview")
    _meta_block(
        pdf,
        [
            ("Session ID", report.session_id),
            ("Questions", str(report.questions)),
            ("Started", _format_datetime(report.started_at)),
            ("Ended", _format_datetime(report.ended_at)),
            ("Duration", _format_duration(report.duration)),
        ],
    )

    _section_title(pdf, "Feedback")
    _render_feedback(pdf, report.feedback)

    _section_title(pdf, "Question & Answer Transcript")
    _render_transcript(pdf, report.exchanges)

    return bytes(pdf.output())


__all__ = ["generate_feedback_pdf", "markdown_lines"]

"""
Eligibility report: payload formatting and PDF rendering.
"""
import logging
from dataclasses import dataclass
from datetime import date
from io import BytesIO
from typing import List, Optional, Tuple

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from .eligibility import ApplicantProfile, Verdict

logger = logging.getLogger(__name__)

REPORT_TITLE = "Study Abroad Eligibility Report"
CRITERIA_HEADING = "Eligibility Criteria Details:"
INSTITUTIONS_HEADING = "Recommended Universities:"

# Glyphs the base-14 PDF fonts cannot encode
PDF_SUBSTITUTIONS = {"✓": "[x]", "✗": "[ ]", "≥": ">="}


@dataclass(frozen=True)
class ReportLine:
    text: str
    link: Optional[str] = None


@dataclass(frozen=True)
class Report:
    title: str
    inputs: Tuple[str, ...]
    status: str
    criteria: Tuple[str, ...]
    institutions: Tuple[ReportLine, ...]
    footer: str

    def lines(self) -> List[str]:
        """All text lines in reading order, as they appear in the document."""
        out = [self.title, *self.inputs, self.status, CRITERIA_HEADING, *self.criteria]
        if self.institutions:
            out.append(INSTITUTIONS_HEADING)
            out.extend(line.text for line in self.institutions)
        out.append(self.footer)
        return out


def _fmt(value: float) -> str:
    # Shortest round-tripping form; whole numbers drop the trailing ".0"
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def build_report(profile: ApplicantProfile, verdict: Verdict, generated_on: Optional[date] = None) -> Report:
    """Format a profile and its verdict into a report payload.

    ``verdict`` must come from evaluating ``profile``; the formatter does not
    re-evaluate anything. Institutions are listed only for eligible verdicts.
    """
    generated_on = generated_on or date.today()

    inputs = (
        f"CGPA: {_fmt(profile.cgpa)}",
        f"Work Experience: {_fmt(profile.work_experience_years)} years",
        f"{profile.score_type} Score: {_fmt(profile.english_score)}",
        f"Preferred Country: {profile.target_country}",
    )
    status = f"Eligibility Status: {'ELIGIBLE' if verdict.eligible else 'NOT ELIGIBLE'}"
    criteria = tuple(
        f"{'✓' if c.satisfied else '✗'} {c.description}" for c in verdict.criteria
    )

    institutions: Tuple[ReportLine, ...] = ()
    if verdict.eligible and verdict.recommended_institutions:
        institutions = tuple(
            ReportLine(text=f"{i}. {inst.name}", link=inst.website_url)
            for i, inst in enumerate(verdict.recommended_institutions, start=1)
        )

    return Report(
        title=REPORT_TITLE,
        inputs=inputs,
        status=status,
        criteria=criteria,
        institutions=institutions,
        footer=f"Report generated on {generated_on.strftime('%x')}",
    )


def _pdf_text(text: str) -> str:
    for glyph, replacement in PDF_SUBSTITUTIONS.items():
        text = text.replace(glyph, replacement)
    return text


def render_pdf(report: Report) -> bytes:
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.setTitle(report.title)
    width, height = A4
    left = 56
    bottom = 72

    y = height - 56
    c.setFont("Helvetica-Bold", 20)
    c.drawString(left, y, _pdf_text(report.title))
    y -= 36

    def footer() -> None:
        c.setFont("Helvetica", 10)
        c.drawString(left, 40, _pdf_text(report.footer))

    def line(text: str, gap: float = 16, indent: float = 0, size: int = 12, link: Optional[str] = None) -> None:
        nonlocal y
        if y < bottom:
            footer()
            c.showPage()
            y = height - 56
        c.setFont("Helvetica", size)
        c.drawString(left + indent, y, _pdf_text(text))
        if link:
            x = left + indent
            c.linkURL(link, (x, y - 2, x + c.stringWidth(text, "Helvetica", size), y + size), relative=0)
        y -= gap

    c.setFont("Helvetica", 12)
    for text in report.inputs:
        line(text)
    y -= 8
    line(report.status, gap=28)

    line(CRITERIA_HEADING, gap=20)
    for text in report.criteria:
        line(text)

    if report.institutions:
        y -= 12
        line(INSTITUTIONS_HEADING, gap=20)
        for entry in report.institutions:
            line(entry.text, gap=14 if entry.link else 16)
            if entry.link:
                line(entry.link, indent=16, size=10, link=entry.link)

    footer()
    c.showPage()
    c.save()
    data = buf.getvalue()
    logger.info("Rendered eligibility report (%d bytes)", len(data))
    return data

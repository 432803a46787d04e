from datetime import date

import pytest
from reportlab.pdfgen import canvas

from studyabroad.eligibility import evaluate
from studyabroad.report import (
    CRITERIA_HEADING,
    INSTITUTIONS_HEADING,
    REPORT_TITLE,
    build_report,
    render_pdf,
)
from studyabroad.session import EligibilitySession

GENERATED = date(2026, 3, 14)


def test_report_lines_for_eligible_applicant(profile_factory):
    profile = profile_factory()
    report = build_report(profile, evaluate(profile), generated_on=GENERATED)

    assert report.lines() == [
        REPORT_TITLE,
        "CGPA: 3.2",
        "Work Experience: 2 years",
        "IELTS Score: 7",
        "Preferred Country: USA",
        "Eligibility Status: ELIGIBLE",
        CRITERIA_HEADING,
        "✓ CGPA requirement (≥3.0)",
        "✓ English proficiency requirement (≥6.5 IELTS)",
        "✓ Work experience requirement (≥1 year)",
        INSTITUTIONS_HEADING,
        "1. Massachusetts Institute of Technology",
        "2. Stanford University",
        "3. Harvard University",
        f"Report generated on {GENERATED.strftime('%x')}",
    ]
    assert [line.link for line in report.institutions] == [
        "https://www.mit.edu", "https://www.stanford.edu", "https://www.harvard.edu",
    ]


def test_report_omits_institutions_when_not_eligible(profile_factory):
    profile = profile_factory(
        cgpa=2.5, work_experience_years=0, english_score=90, score_type="TOEFL", target_country="Canada",
    )
    report = build_report(profile, evaluate(profile), generated_on=GENERATED)

    assert report.status == "Eligibility Status: NOT ELIGIBLE"
    assert report.inputs[2] == "TOEFL Score: 90"
    assert report.criteria == ("✗ CGPA requirement (≥2.8)", "✗ English proficiency requirement (≥6.0 IELTS)")
    assert report.institutions == ()
    assert INSTITUTIONS_HEADING not in report.lines()


def test_report_for_unselected_country(profile_factory):
    profile = profile_factory(target_country="")
    report = build_report(profile, evaluate(profile), generated_on=GENERATED)
    assert report.inputs[-1] == "Preferred Country: "
    assert report.criteria == ()
    assert report.lines()[-2] == CRITERIA_HEADING


def test_footer_defaults_to_today(profile_factory):
    profile = profile_factory()
    report = build_report(profile, evaluate(profile))
    assert report.footer == f"Report generated on {date.today().strftime('%x')}"


def test_report_requires_a_verdict(profile_factory):
    with pytest.raises(AttributeError):
        build_report(profile_factory(), None)


def test_render_pdf_produces_document(profile_factory):
    profile = profile_factory()
    pdf = render_pdf(build_report(profile, evaluate(profile), generated_on=GENERATED))
    assert pdf.startswith(b"%PDF")
    assert b"%%EOF" in pdf[-64:]


def test_render_pdf_handles_long_institution_lists(profile_factory):
    from studyabroad.eligibility import catalog_frame

    frame = catalog_frame({"USA": [{"name": f"College {n}", "website_url": f"https://c{n}.edu"} for n in range(60)]})
    profile = profile_factory()
    pdf = render_pdf(build_report(profile, evaluate(profile, institutions=frame)))
    assert pdf.startswith(b"%PDF")


# ---------- Session ----------
def test_session_report_before_submit_is_an_error():
    with pytest.raises(RuntimeError):
        EligibilitySession().report()


def test_session_replaces_profile_and_verdict(profile_factory):
    session = EligibilitySession()
    first = session.submit(profile_factory())
    assert first.eligible

    second_profile = profile_factory(target_country="Canada", cgpa=2.0)
    second = session.submit(second_profile)
    assert session.profile is second_profile
    assert session.verdict is second
    assert session.report(GENERATED).inputs[-1] == "Preferred Country: Canada"


class RecordingCanvas(canvas.Canvas):
    # Records every string drawn with the page it landed on
    drawn = []

    def drawString(self, x, y, text, *args, **kwargs):
        RecordingCanvas.drawn.append((self.getPageNumber(), y, text))
        return super().drawString(x, y, text, *args, **kwargs)


def test_long_reports_keep_links_above_margin_and_footer_on_every_page(profile_factory, monkeypatch):
    from studyabroad.eligibility import catalog_frame

    RecordingCanvas.drawn = []
    monkeypatch.setattr(canvas, "Canvas", RecordingCanvas)
    frame = catalog_frame({"USA": [{"name": f"College {n}", "website_url": f"https://c{n}.edu"} for n in range(60)]})
    profile = profile_factory()
    report = build_report(profile, evaluate(profile, institutions=frame), generated_on=GENERATED)
    render_pdf(report)

    pages = {page for page, _, _ in RecordingCanvas.drawn}
    assert len(pages) > 1
    footers = [page for page, _, text in RecordingCanvas.drawn if text == report.footer]
    assert sorted(footers) == sorted(pages)
    body = [(y, text) for _, y, text in RecordingCanvas.drawn if text != report.footer]
    assert all(y >= 60 for y, _ in body)
    assert ("https://c59.edu" in [text for _, text in body])


@pytest.mark.parametrize("value, expected", [(1234567, "1234567"), (3.25, "3.25"), (2.0, "2"), (0.1, "0.1")])
def test_inputs_are_echoed_without_precision_loss(profile_factory, value, expected):
    profile = profile_factory(work_experience_years=value)
    report = build_report(profile, evaluate(profile), generated_on=GENERATED)
    assert report.inputs[1] == f"Work Experience: {expected} years"

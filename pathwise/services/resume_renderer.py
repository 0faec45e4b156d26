import html
import io
from typing import Any, Dict, List

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.pdfgen import canvas
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer

from pathwise.schemas.advisor import EnhancedResume

TEXT_COLOR = colors.Color(0.1, 0.1, 0.1)
MUTED_COLOR = colors.Color(0.4, 0.4, 0.4)


def build_pdf_styles() -> Dict[str, ParagraphStyle]:
    sample = getSampleStyleSheet()
    return {
        "name": ParagraphStyle(
            "name",
            parent=sample["Title"],
            fontName="Helvetica-Bold",
            fontSize=20,
            leading=25,
            textColor=TEXT_COLOR,
            alignment=0,
            spaceAfter=2,
        ),
        "contact": ParagraphStyle(
            "contact",
            parent=sample["Normal"],
            fontName="Helvetica",
            fontSize=12,
            leading=16,
            textColor=MUTED_COLOR,
            spaceAfter=8,
        ),
        "section": ParagraphStyle(
            "section",
            parent=sample["Heading3"],
            fontName="Helvetica-Bold",
            fontSize=14,
            leading=18,
            textColor=TEXT_COLOR,
            spaceBefore=10,
            spaceAfter=4,
        ),
        "body": ParagraphStyle(
            "body",
            parent=sample["Normal"],
            fontName="Helvetica",
            fontSize=12,
            leading=16,
            textColor=TEXT_COLOR,
        ),
    }


def _paragraph_text(text: str) -> str:
    return html.escape(text or "").replace("\n", "<br/>")


def _draw_page_number(pdf: canvas.Canvas, doc: SimpleDocTemplate) -> None:
    pdf.saveState()
    pdf.setFont("Helvetica", 8)
    pdf.setFillColor(MUTED_COLOR)
    pdf.drawRightString(doc.leftMargin + doc.width, 20, f"Page {pdf.getPageNumber()}")
    pdf.restoreState()


def render_resume_pdf(name: str, email: str, resume: EnhancedResume) -> bytes:
    """Lay out an enhanced resume as a PDF; long sections continue on new pages."""
    styles = build_pdf_styles()
    output = io.BytesIO()
    doc = SimpleDocTemplate(
        output,
        pagesize=A4,
        leftMargin=50,
        rightMargin=50,
        topMargin=50,
        bottomMargin=40,
        title=f"{name} Resume",
        author=name,
    )

    sections = [
        ("Professional Summary", resume.summary),
        ("Education", resume.education),
        ("Experience", resume.experience),
        ("Skills", ", ".join(resume.skills)),
    ]
    if resume.highlights:
        sections.append(("Career Highlights", resume.highlights))

    story: List[Any] = [
        Paragraph(_paragraph_text(name), styles["name"]),
        Paragraph(_paragraph_text(email), styles["contact"]),
        HRFlowable(width="100%", thickness=0.6, color=MUTED_COLOR, spaceAfter=4),
    ]
    for title, text in sections:
        story.append(Paragraph(_paragraph_text(title), styles["section"]))
        story.append(Paragraph(_paragraph_text(text), styles["body"]))
        story.append(Spacer(1, 6))

    doc.build(story, onFirstPage=_draw_page_number, onLaterPages=_draw_page_number)
    return output.getvalue()

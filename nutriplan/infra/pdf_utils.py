import io
import base64
import binascii
import logging
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.platypus import (
    SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer, PageBreak, Image, ListFlowable,
    ListItem, KeepTogether,
)

logger = logging.getLogger(__name__)

ACCENT = colors.HexColor("#EA580C")
NOT_GENERATED = "The shopping list has not been generated yet."


def _decode_data_uri(uri: str) -> Optional[bytes]:
    if not uri or not uri.startswith("data:") or "," not in uri:
        return None
    try:
        return base64.b64decode(uri.split(",", 1)[1], validate=True)
    except (binascii.Error, ValueError):
        return None


def _image_flowable(uri: Optional[str], max_width: float):
    raw = _decode_data_uri(uri) if uri else None
    if not raw:
        return None
    try:
        img = Image(io.BytesIO(raw))
        ratio = max_width / float(img.imageWidth)
        img.drawWidth = max_width
        img.drawHeight = img.imageHeight * ratio
        return img
    except Exception:
        logger.warning("Skipping unreadable meal image in PDF", exc_info=True)
        return None


def _bullets(items, style):
    if not items:
        return Paragraph("-", style)
    return ListFlowable(
        [ListItem(Paragraph(escape(i), style)) for i in items],
        bulletType="bullet",
        leftIndent=12,
    )


def generate_pdf_for_plan(document: dict) -> bytes:
    """Printable plan: cover with the configuration summary, one page per day, then the shopping list.

    `document` is the dict produced by nutriplan.logic.planning.review.build_document, so the
    PDF renders from exactly the data shown on screen.
    """
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=A4,
        rightMargin=2 * cm, leftMargin=2 * cm, topMargin=2 * cm, bottomMargin=2 * cm
    )
    styles = getSampleStyleSheet()
    title = ParagraphStyle("PlanTitle", parent=styles["Title"], textColor=ACCENT)
    heading = ParagraphStyle("DayHeading", parent=styles["Heading1"], textColor=colors.black)
    meal_heading = ParagraphStyle("MealHeading", parent=styles["Heading2"], textColor=ACCENT)
    body = styles["BodyText"]
    muted = ParagraphStyle("Muted", parent=body, textColor=colors.grey)

    config = document["config"]
    elements = [
        Paragraph(escape(config.get("plan_name") or "Nutrition Plan"), title),
        Paragraph(f"Prepared for: {escape(config.get('client_name') or '-')}", styles["Heading2"]),
        Spacer(1, 24),
    ]

    summary = [
        ["Objective", config.get("objective") or "-"],
        ["Diet style", config.get("diet_style") or "-"],
        ["Duration", f"{config.get('days')} days"],
        ["Calories", f"~{config.get('calories')} kcal/day"],
        ["Meals", f"{config.get('meals')} per day"],
        ["Restrictions", document.get("restrictions") or "None"],
    ]
    table = Table([[Paragraph(f"<b>{escape(k)}</b>", body), Paragraph(escape(str(v)), body)]
                   for k, v in summary], colWidths=[4 * cm, 11 * cm])
    table.setStyle(TableStyle([
        ("BOX", (0, 0), (-1, -1), 0.5, colors.grey),
        ("LINEBELOW", (0, 0), (-1, -2), 0.25, colors.lightgrey),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
    ]))
    elements.append(table)

    for day in document["days"]:
        elements.append(PageBreak())
        elements.append(Paragraph(escape(day["title"]), heading))
        for meal in day["meals"]:
            block = [
                Paragraph(f"{escape(meal['meal_type'])}: {escape(meal['name'])}", meal_heading),
                Paragraph(f"{meal.get('calories', 0)} kcal | {escape(meal.get('cookTime') or 'N/A')}", muted),
            ]
            img = _image_flowable(meal.get("image"), max_width=8 * cm)
            if img is not None:
                block.extend([Spacer(1, 6), img])
            block.extend([
                Spacer(1, 6),
                Paragraph(escape(meal.get("description") or ""), body),
                Spacer(1, 6),
                Paragraph("<b>Ingredients</b>", body),
                _bullets(meal.get("ingredients"), body),
                Paragraph("<b>Instructions</b>", body),
                _bullets(meal.get("instructions"), body),
                Spacer(1, 12),
            ])
            elements.append(KeepTogether(block))

    elements.append(PageBreak())
    elements.append(Paragraph("Shopping List", heading))
    shopping = document["shopping_list"]
    if not shopping["available"]:
        elements.append(Paragraph(NOT_GENERATED, muted))
    for category in shopping["categories"]:
        elements.append(Paragraph(escape(category["title"]), styles["Heading3"]))
        elements.append(_bullets(category["items"], body))

    doc.build(elements)
    return buf.getvalue()

import io
from xml.sax.saxutils import escape
from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from lumpsum.domain.MonthlyResult import Activity
from lumpsum.logic.formatting.labels import DEFAULT_FORMATTER, format_currency
from lumpsum.utilities.export import MONTHLY_HEADER, WORK_PLAN_HEADER, milestone_label

HEADER_COLOR = colors.HexColor("#C8102E")
# Landscape A4 minus margins is ~800pt wide
MONTHLY_WIDTHS = [120, 80, 80, 110, 410]
WORK_PLAN_WIDTHS = [140, 160, 250, 250]


def _table(data, col_widths, total_row: bool = False) -> Table:
    table = Table(data, colWidths=col_widths, repeatRows=1)
    style = [
        ("BACKGROUND", (0,0), (-1,0), HEADER_COLOR),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("ALIGN", (0,0), (-1,-1), "LEFT"),
        ("VALIGN", (0,0), (-1,-1), "TOP"),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 11),
        ("BOTTOMPADDING", (0,0), (-1,0), 8),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ]
    if total_row:
        style.append(("FONTNAME", (0,-1), (-1,-1), "Helvetica-Bold"))
    table.setStyle(TableStyle(style))
    return table


def _text(value, style) -> Paragraph:
    """User text as a wrapping cell; newlines kept as line breaks."""
    if not value:
        return Paragraph("-", style)
    return Paragraph(escape(value).replace("\n", "<br/>"), style)


def generate_pdf_for_schedule(schedule, formatter=DEFAULT_FORMATTER):
    """Generate a PDF with the monthly breakdown and the work plan of the schedule."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=landscape(A4),
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    cell = styles["BodyText"]
    first = schedule.results[0].month_label if schedule.results else ""
    elements = [
        Paragraph(f"Lump-Sum Schedule – {first}, {schedule.duration} months", styles["Title"]),
        Paragraph(f"Daily rate: {format_currency(schedule.rate)}", styles["Normal"]),
        Spacer(1, 16),
    ]

    data = [MONTHLY_HEADER[:]]
    for result in schedule.results:
        data.append([
            result.month_label,
            formatter.date_label(result.milestone_date),
            str(result.working_days),
            format_currency(result.lump_sum),
            _text(result.deliverables, cell),
        ])
    data.append(["TOTAL", "", str(schedule.total_working_days), format_currency(schedule.total_lump_sum), ""])
    elements.append(_table(data, MONTHLY_WIDTHS, total_row=True))

    elements.append(Spacer(1, 20))
    elements.append(Paragraph("Work Plan", styles["Heading2"]))
    plan_rows = [WORK_PLAN_HEADER[:]]
    for position, result in enumerate(schedule.results, start=1):
        for week in result.weeks:
            entries = result.work_plan.get(week.index, {})
            plan_rows.append([
                milestone_label(position, result.month_label),
                formatter.week_label(week),
                _text(entries.get(Activity.SUPPLIER.value), cell),
                _text(entries.get(Activity.CLIENT.value), cell),
            ])
    elements.append(_table(plan_rows, WORK_PLAN_WIDTHS))

    doc.build(elements)
    return buf.getvalue()

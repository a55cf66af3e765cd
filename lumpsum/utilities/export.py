"""
CSV export of a lump-sum schedule.

The CSV has two sections separated by a blank line:
  - "Monthly Breakdown": Month, Milestone, Working Days, Lump Sum, Deliverables + TOTAL row
  - "Work Plan Breakdown": Milestone, Week, Supplier Activities, Client Obligations
Free text is sanitized (commas -> semicolons, newlines collapsed) so every
row keeps its column count even in naive spreadsheet imports.
"""
import csv
import io
import logging
import re
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional

from lumpsum.domain.MonthlyResult import Activity
from lumpsum.domain.Schedule import Schedule
from lumpsum.logic.formatting.labels import DEFAULT_FORMATTER, DateFormatter
from lumpsum.utilities.config import EXPORT_DIR

logger = logging.getLogger(__name__)

MONTHLY_SECTION = "Monthly Breakdown"
WORK_PLAN_SECTION = "Work Plan Breakdown"
MONTHLY_HEADER = ["Month", "Milestone", "Working Days", "Lump Sum", "Deliverables"]
WORK_PLAN_HEADER = ["Milestone", "Week", "Supplier Activities", "Client Obligations"]

_NEWLINES = re.compile(r"[\r\n]+")
_SPACES = re.compile(r"[ \t]{2,}")


def sanitize_field(text: Optional[str]) -> str:
    """Make free text safe for a single CSV cell."""
    if not text:
        return ""
    cleaned = _NEWLINES.sub(" ", text).replace(",", ";")
    return _SPACES.sub(" ", cleaned).strip()


def _amount(value: Decimal) -> str:
    return f"{value:.2f}"


def milestone_label(position: int, month_label: str) -> str:
    return f"M{position} - {month_label}"


def schedule_to_csv(schedule: Schedule, formatter: DateFormatter = DEFAULT_FORMATTER) -> str:
    """Render the full schedule as two-section CSV text."""
    output = io.StringIO()
    writer = csv.writer(output, lineterminator="\n")

    writer.writerow([MONTHLY_SECTION])
    writer.writerow(MONTHLY_HEADER)
    for result in schedule.results:
        writer.writerow([
            sanitize_field(result.month_label),
            formatter.date_label(result.milestone_date),
            result.working_days,
            _amount(result.lump_sum),
            sanitize_field(result.deliverables),
        ])
    writer.writerow(["TOTAL", "", schedule.total_working_days, _amount(schedule.total_lump_sum), ""])

    writer.writerow([])
    writer.writerow([WORK_PLAN_SECTION])
    writer.writerow(WORK_PLAN_HEADER)
    for position, result in enumerate(schedule.results, start=1):
        label = sanitize_field(milestone_label(position, result.month_label))
        for week in result.weeks:
            entries = result.work_plan.get(week.index, {})
            writer.writerow([
                label,
                sanitize_field(formatter.week_label(week)),
                sanitize_field(entries.get(Activity.SUPPLIER.value)),
                sanitize_field(entries.get(Activity.CLIENT.value)),
            ])

    return output.getvalue()


def csv_filename(schedule: Schedule) -> str:
    return f"lump_sum_schedule_{schedule.start_year}-{int(schedule.start_month):02d}_{schedule.duration}m.csv"


class ScheduleExporter:
    """Write schedules to disk."""

    def __init__(self, export_dir: Path = EXPORT_DIR, formatter: DateFormatter = DEFAULT_FORMATTER):
        self.export_dir = Path(export_dir)
        self.formatter = formatter

    def export_to_csv(self, schedule: Schedule, output_path: Path = None) -> Optional[Path]:
        """Export a schedule to a CSV file; returns the path or None on failure."""
        if output_path is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            output_path = self.export_dir / f"{Path(csv_filename(schedule)).stem}_{timestamp}.csv"

        try:
            with open(output_path, 'w', newline='', encoding='utf-8') as f:
                f.write(schedule_to_csv(schedule, self.formatter))
            logger.info(f"Exported {schedule.duration} months to CSV: {output_path}")
            return Path(output_path)
        except OSError as e:
            logger.error(f"CSV export failed: {e}")
            return None


# CLI interface
if __name__ == "__main__":
    import argparse
    from lumpsum.logic.scheduling.builder import build_schedule
    from lumpsum.utilities.constants import MONTH_INPUT_FORMAT

    parser = argparse.ArgumentParser(description='Export a lump-sum schedule as CSV')
    parser.add_argument('rate', type=float, help='Daily rate')
    parser.add_argument('start', help='Start month as YYYY-MM')
    parser.add_argument('duration', type=int, help='Number of months')
    parser.add_argument('--file', help='Output file path')

    args = parser.parse_args()
    start = datetime.strptime(args.start, MONTH_INPUT_FORMAT)
    schedule = build_schedule(args.rate, start.year, start.month, args.duration)
    result = ScheduleExporter().export_to_csv(schedule, Path(args.file) if args.file else None)
    if result is None:
        print("✗ Export failed")
        raise SystemExit(1)
    print(f"✓ Exported to: {result}")

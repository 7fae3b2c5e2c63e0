#!/usr/bin/env python3
"""
Create a period report from the training sheet.

Loads the feed once, keeps the records overlapping the chosen period and
writes them as an Excel workbook (summary + detail sheets) or a CSV dump.

Usage:
    python src/scripts/create_period_report.py --period quarterly --year 2025 --index 2
    python src/scripts/create_period_report.py --period monthly --format csv
"""

import argparse
import sys
import traceback
from datetime import date
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import FEED_SCHEMA, OUTPUT_DIR
from core.log import setup_logging
from core.sheets import FeedError, get_sheet_client
from services.records import FeedLoader
from services.reports import (
    PeriodKind,
    build_period_report,
    create_period_excel_report,
    export_filename,
    records_to_csv,
)


# =============================================================================
# PERIOD DEFAULTS
# =============================================================================


def default_index(kind: PeriodKind, today: date) -> int:
    """Period index containing today."""
    months = {
        PeriodKind.MONTHLY: 1,
        PeriodKind.BIMONTHLY: 2,
        PeriodKind.QUARTERLY: 3,
        PeriodKind.SEMIANNUAL: 6,
        PeriodKind.ANNUAL: 12,
    }[kind]
    return (today.month - 1) // months + 1


# =============================================================================
# MAIN
# =============================================================================


def main(
    period: str,
    year: int | None = None,
    index: int | None = None,
    output_format: str = "xlsx",
    schema: str = FEED_SCHEMA,
) -> Path:
    """Main entry point for period reports."""
    today = date.today()
    kind = PeriodKind(period)
    if year is None:
        year = today.year
    if index is None:
        index = default_index(kind, today)

    try:
        # 1. Load the feed
        snapshot = FeedLoader(get_sheet_client(), schema=schema)()
        print(f"Loaded {len(snapshot.records)} records")

        if not snapshot.has_data:
            print("The sheet has no records.")

        # 2. Filter and summarize
        report = build_period_report(list(snapshot.records), kind, year, index)
        print(
            f"Report {report.period.label}: {report.period.start} to {report.period.end}, "
            f"{report.total} records in {report.campaign_count} campaign(s)"
        )

        # 3. Write the file
        output_dir = OUTPUT_DIR / "reports" / kind.value
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path = output_dir / export_filename(report.period, output_format, today)

        if output_format == "xlsx":
            create_period_excel_report(report, output_path)
        else:
            output_path.write_text(
                records_to_csv(report.records, title=report.period.label), encoding="utf-8"
            )
        print(f"Saved report to: {output_path}")
        return output_path

    except FeedError as e:
        print(f"\nCould not load the sheet: {e}")
        raise
    except Exception as e:
        print(f"\nError: {e}")
        traceback.print_exc()
        raise


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Generate a period report")
    parser.add_argument(
        "--period",
        choices=[k.value for k in PeriodKind],
        default=PeriodKind.MONTHLY.value,
        help="Report granularity. Defaults to monthly.",
    )
    parser.add_argument("--year", type=int, help="Report year. Defaults to the current year.")
    parser.add_argument(
        "--index",
        type=int,
        help="Month, bimonth, quarter or half (1-based). Defaults to the one containing today.",
    )
    parser.add_argument("--format", dest="output_format", choices=["xlsx", "csv"], default="xlsx")
    parser.add_argument("--schema", choices=["training", "process"], default=FEED_SCHEMA)
    args = parser.parse_args()

    setup_logging()
    try:
        main(args.period, args.year, args.index, args.output_format, args.schema)
    except (FeedError, ValueError):
        sys.exit(1)

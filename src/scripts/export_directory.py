#!/usr/bin/env python3
"""
Export the approved member directory to an Excel workbook.

Usage:
    uv run python src/scripts/export_directory.py --date 2025-11-07
"""

import argparse
import sys
from datetime import date, datetime
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import OUTPUT_DIR, STATUS_APPROVED
from core.database import get_connection, list_members
from services.calendar import today_local
from services.reports import save_directory_workbook


def get_as_of_date(as_of_date_str: str | None) -> date:
    """Parse the --date argument, defaulting to today."""
    if as_of_date_str:
        return datetime.strptime(as_of_date_str, "%Y-%m-%d").date()
    return today_local()


def main():
    parser = argparse.ArgumentParser(description="Export the member directory to Excel")
    parser.add_argument("--date", help="As-of date for the file name (YYYY-MM-DD)")
    parser.add_argument("--output-dir", type=Path, default=OUTPUT_DIR, help="Output directory")
    args = parser.parse_args()

    as_of = get_as_of_date(args.date)

    conn = get_connection()
    try:
        members = list_members(conn, STATUS_APPROVED)
    finally:
        conn.close()

    print(f"Exporting {len(members)} approved members...")
    output_path = args.output_dir / f"member_directory_{as_of.strftime('%Y_%m_%d')}.xlsx"
    save_directory_workbook(members, output_path)


if __name__ == "__main__":
    main()

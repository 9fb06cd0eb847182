#!/usr/bin/env python3
"""
Render a saved photographic report (JSON) to PDF.

Usage:
    python scripts/render_report.py report.json
    python scripts/render_report.py report.json -o out.pdf
    python scripts/render_report.py report.json --save --store
"""
import os
import sys
import json
import argparse
import logging

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import LOG_LEVEL
from services.reporting.errors import ReportGenerationError, ReportLoadError
from services.reports import generate_and_save
from utils.logger import configure_logging

logger = logging.getLogger("render_report")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Render a photographic report JSON file to PDF.")
    parser.add_argument("report", help="Path to the report JSON file")
    parser.add_argument("-o", "--output", help="Output PDF path (default: named after the case number)")
    parser.add_argument("--save", action="store_true", help="Submit the report to the saved-reports API first")
    parser.add_argument("--store", action="store_true", help="Also write the PDF to the storage backend")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    configure_logging(LOG_LEVEL)

    try:
        with open(args.report, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Cannot read {args.report}: {e}")
        return 2

    try:
        result = generate_and_save(payload, save_remote=args.save, store=args.store)
    except ReportLoadError as e:
        logger.error(f"Invalid report: {e}")
        return 2
    except ReportGenerationError as e:
        logger.error(f"PDF generation failed: {e}")
        return 1

    output = args.output or result.filename
    with open(output, "wb") as f:
        f.write(result.pdf_bytes)

    logger.info(f"Wrote {output}")
    if result.report_id is not None:
        logger.info(f"Saved as report {result.report_id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

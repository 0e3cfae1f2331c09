#!/usr/bin/env python3
"""
Run one stealth-accumulation scan from the command line and print the JSON payload.
"""
import argparse
import json
import sys
from datetime import date

import logging_manager  # noqa: F401  attaches the scanner log handler
from app.settings import Settings
from services.errors import NoSessionsError
from services.scanner import run_scan
from services.serialization import make_json_serializable


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Scan recent NSE sessions for stealth accumulation")
    parser.add_argument("--date", type=date.fromisoformat, default=None,
                        help="Search backward from this day (YYYY-MM-DD), default today")
    parser.add_argument("--top", type=int, default=None, help="Number of ranked symbols to print")
    args = parser.parse_args(argv)

    settings = Settings()
    if args.top is not None:
        settings.top_n = args.top

    try:
        result = run_scan(settings=settings, today=args.date)
    except NoSessionsError as e:
        print(json.dumps({"error": str(e)}), file=sys.stderr)
        return 2
    except Exception as e:
        print(json.dumps({"error": str(e) or "Unexpected error"}), file=sys.stderr)
        return 1

    print(json.dumps(make_json_serializable(result), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""
Fetch RSS feeds and write a combined plain-text report.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

from truthsense.config import get_settings  # noqa: E402
from truthsense.feeds import scrape_feeds  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Scrape RSS feeds into a text report.")
    parser.add_argument("urls", nargs="*", help="Feed URLs (default: configured feeds)")
    parser.add_argument(
        "--output",
        default=settings.feed_report_path,
        help=f"Report path (default: {settings.feed_report_path})",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    outcomes = asyncio.run(
        scrape_feeds(args.urls or settings.feed_urls, args.output, timeout=settings.feed_timeout)
    )

    failed = [outcome for outcome in outcomes if outcome.status != "ok"]
    print("Scraping complete!")
    for outcome in failed:
        print(f" - {outcome.url}: {outcome.status}{f' ({outcome.error})' if outcome.error else ''}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

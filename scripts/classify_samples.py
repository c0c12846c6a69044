#!/usr/bin/env python3
"""
Classify sample headlines and print label, confidence and explanation.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT / "src") not in sys.path:
    sys.path.insert(0, str(ROOT / "src"))

from truthsense.harness import SAMPLE_HEADLINES, run_samples  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Classify headlines with the TruthSense rule engine.")
    parser.add_argument("headlines", nargs="*", help="Headlines to classify (default: built-in samples)")
    parser.add_argument("--file", help="Read headlines from a file, one per line")
    args = parser.parse_args(argv)

    headlines = list(args.headlines)
    if args.file:
        lines = Path(args.file).read_text(encoding="utf-8").splitlines()
        headlines.extend(line for line in lines if line.strip())
    if not headlines:
        headlines = list(SAMPLE_HEADLINES)

    run_samples(headlines)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

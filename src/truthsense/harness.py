"""
Batch harness: classify a fixed list of headlines and print the results.
"""

from __future__ import annotations

import sys
from typing import Iterable, TextIO

from .detector import classify
from .models import ClassificationResult

BANNER = "=== TruthSense AI Testing Output ==="

SAMPLE_HEADLINES = (
    "Scientists discover a new mineral that grants immortality to humans",
    "Coffee proven to let people live forever in shocking new report",
    "New study claims humans can now breathe underwater without equipment",
    "Scientists confirm teleportation technology is ready for public use",
    "New evidence proves birds are actually government drones",
    "Secret island discovered where dinosaurs still live",
    "This viral method instantly doubles your income!",
    "BREAKING: New miracle drink discovered!!!",
    "Doctors guarantee this breathing technique cures anxiety instantly",
    # trustworthy examples
    "Researchers at the University of Oxford publish new findings on sleep patterns",
    "Study published in a peer-reviewed journal shows moderate exercise improves memory",
    "Government report outlines improvements in national cybersecurity readiness",
)


def format_result(headline: str, result: ClassificationResult) -> str:
    return (
        f"Headline: {headline}\n"
        f" → Label: {result.label}\n"
        f" → Confidence: {result.confidence}%\n"
        f" → Explanation: {result.explanation}\n"
    )


def run_samples(headlines: Iterable[str] = SAMPLE_HEADLINES, out: TextIO | None = None) -> list[ClassificationResult]:
    out = out or sys.stdout
    results = []
    out.write(f"{BANNER}\n\n")
    for headline in headlines:
        result = classify(headline)
        results.append(result)
        out.write(format_result(headline, result) + "\n")
    return results

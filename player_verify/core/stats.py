"""
Numeric statistic extraction from raw OCR text.

Screens usually show several numbers (rank, level, score); the headline
statistic is taken to be the largest one.
"""

from __future__ import annotations

import re

# Runs of three or more ASCII digits; shorter numbers are UI noise
STATISTIC_PATTERN = re.compile(r"[0-9]{3,}")


def extract_statistics(text: str) -> list[int]:
    """
    Return every run of 3+ consecutive digits in the raw text as an integer.

    Examples:
        "Aeris 998 10306" → [998, 10306]
        "score 99" → []
    """
    if not text:
        return []
    return [int(run) for run in STATISTIC_PATTERN.findall(text)]


def extract_max_statistic(text: str) -> int:
    """Return the largest 3+ digit number in the text, or 0 when there is none."""
    values = extract_statistics(text)
    return max(values) if values else 0


def meets_threshold(value: int, threshold: int) -> bool:
    return value >= threshold

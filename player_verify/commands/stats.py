from __future__ import annotations

from typing import Optional

from ..config import Settings
from ..core.stats import extract_max_statistic, extract_statistics, meets_threshold
from .output import verdict


def run(settings: Settings, transcript: str, *, threshold: Optional[int] = None) -> bool:
    limit = settings.verification.kill_threshold if threshold is None else threshold
    values = extract_statistics(transcript)
    best = extract_max_statistic(transcript)
    passed = meets_threshold(best, limit)
    found = ", ".join(str(v) for v in values) if values else "none"
    print(f"Numbers found: {found}")
    print(verdict("Kill count", passed, f"{best} vs threshold {limit}"))
    return passed

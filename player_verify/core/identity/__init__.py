"""
Player identity matching domain logic.

This module handles:
- Script classification of claimed names (Latin vs CJK)
- Transcript and name normalization
- Name matching strategies (direct, segmented, fuzzy window, fuzzy word)

All logic is pure business logic with no I/O dependencies.
"""

from __future__ import annotations

from .matching import NameMatcher, edit_distance, is_name_present, similarity
from .models import MatchResult, MatchThresholds, ScriptClass
from .normalization import detect_script_class, normalize

__all__ = [
    "MatchResult",
    "MatchThresholds",
    "NameMatcher",
    "ScriptClass",
    "detect_script_class",
    "edit_distance",
    "is_name_present",
    "normalize",
    "similarity",
]

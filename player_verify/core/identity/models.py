"""
Domain models for player identity matching.

These are pure data models with no dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ScriptClass(Enum):
    """
    Coarse script classification of a claimed name.

    Decides which normalization rules and similarity thresholds apply to both
    sides of a comparison.
    """

    LATIN = "latin"
    CJK = "cjk"


@dataclass(frozen=True, slots=True)
class MatchThresholds:
    """
    Similarity thresholds for the fuzzy matching strategies.

    CJK thresholds are stricter because a single substituted ideograph
    changes the name far more than a single substituted Latin letter.
    """

    latin_window: float = 0.75
    """Sliding-window threshold for Latin names"""

    cjk_window: float = 0.85
    """Sliding-window threshold for CJK names"""

    latin_word: float = 0.8
    """Per-word threshold for Latin names"""

    cjk_word: float = 0.9
    """Per-word threshold for CJK names"""

    def window_for(self, script: ScriptClass) -> float:
        return self.cjk_window if script is ScriptClass.CJK else self.latin_window

    def word_for(self, script: ScriptClass) -> float:
        return self.cjk_word if script is ScriptClass.CJK else self.latin_word


@dataclass
class MatchResult:
    """
    Result of looking for a claimed name in an OCR transcript.

    Contains information about whether the name was found and how.
    """

    matches: bool
    """Whether the name was found"""

    strategy: Optional[str] = None
    """The matching strategy that succeeded (direct, segment_exact, fuzzy_window, fuzzy_word)"""

    confidence: float = 1.0
    """Confidence score (0.0 to 1.0)"""

    details: Optional[str] = None
    """Human-readable explanation of the match"""

    def __bool__(self) -> bool:
        return self.matches

"""
Name matching algorithms for OCR screenshot verification.

This module decides whether a claimed player name appears in an OCR
transcript. Strategies are tried in order of cost and tolerance:
- Direct containment (normalized name is a substring of normalized text)
- Segmented exact match (CJK only, raw text split on punctuation)
- Fuzzy window scan (Levenshtein similarity over a sliding window)
- Segmented fuzzy match (Levenshtein similarity per word)

All functions are pure and have no I/O dependencies.
"""

from __future__ import annotations

import logging
from typing import Optional

from .models import MatchResult, MatchThresholds, ScriptClass
from .normalization import (
    detect_script_class,
    normalize,
    split_segments,
    split_words,
)

logger = logging.getLogger(__name__)


def edit_distance(a: str, b: str) -> int:
    """
    Classic Levenshtein distance; insertion, deletion and substitution cost 1.

    Examples:
        edit_distance("aeris", "aeris") → 0
        edit_distance("張三", "張彡") → 1
        edit_distance("", "abc") → 3
    """
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(
                    min(
                        previous[j] + 1,  # deletion
                        current[j - 1] + 1,  # insertion
                        previous[j - 1] + 1,  # substitution
                    )
                )
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> float:
    """
    Normalized similarity: 1 - distance / max(len(a), len(b)).

    Symmetric in its arguments. Two empty strings are identical (1.0).
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1 - edit_distance(a, b) / longest


def fuzzy_match(candidate: str, target: str, threshold: float = 0.75) -> bool:
    """Check whether candidate is at least `threshold` similar to a non-empty target."""
    if not target:
        return False
    return similarity(candidate, target) >= threshold


def match_direct(text: str, name: str) -> MatchResult:
    """
    Check if the normalized name is contained in the normalized text.

    An empty name is never considered contained.

    Examples:
        match_direct("aeris99bio3o6", "aeris") → matches
    """
    if name and name in text:
        return MatchResult(
            matches=True,
            strategy="direct",
            confidence=1.0,
            details=f"'{name}' is contained in the transcript",
        )
    return MatchResult(matches=False)


def match_segments(raw_text: str, name: str, script: ScriptClass) -> MatchResult:
    """
    Check if any punctuation-delimited segment of the raw text equals the name.

    Each raw segment is normalized under `script` before comparison, so a
    segment like "Player－One" still equals "Player_One".
    """
    if not name:
        return MatchResult(matches=False)
    for segment in split_segments(raw_text):
        normalized = normalize(segment, script)
        if normalized == name:
            return MatchResult(
                matches=True,
                strategy="segment_exact",
                confidence=1.0,
                details=f"Segment '{segment}' normalizes to '{name}'",
            )
    return MatchResult(matches=False)


def match_fuzzy_window(text: str, name: str, threshold: float) -> MatchResult:
    """
    Slide a window of len(name) over the text looking for a similar substring.

    Returns no match when the name is longer than the text (no windows exist).
    """
    if not name:
        return MatchResult(matches=False)
    size = len(name)
    for start in range(len(text) - size + 1):
        window = text[start:start + size]
        score = similarity(window, name)
        if score >= threshold:
            return MatchResult(
                matches=True,
                strategy="fuzzy_window",
                confidence=score,
                details=f"Window '{window}' ~ '{name}' ({score:.2f} >= {threshold:.2f})",
            )
    return MatchResult(matches=False)


def match_fuzzy_words(text: str, name: str, threshold: float) -> MatchResult:
    """
    Split the text into words and compare each one against the name.

    A word matches when it equals the name or reaches `threshold` similarity.
    """
    if not name:
        return MatchResult(matches=False)
    for word in split_words(text):
        if word == name:
            return MatchResult(
                matches=True,
                strategy="fuzzy_word",
                confidence=1.0,
                details=f"Word '{word}' equals '{name}'",
            )
        score = similarity(word, name)
        if score >= threshold:
            return MatchResult(
                matches=True,
                strategy="fuzzy_word",
                confidence=score,
                details=f"Word '{word}' ~ '{name}' ({score:.2f} >= {threshold:.2f})",
            )
    return MatchResult(matches=False)


class NameMatcher:
    """
    Looks for a claimed player name inside an OCR transcript.

    Usage:
        matcher = NameMatcher()
        result = matcher.match("Aer1s 998 10306", "Aeris")
        if result.matches:
            print(f"Found via {result.strategy}")
    """

    def __init__(self, thresholds: Optional[MatchThresholds] = None) -> None:
        self.thresholds = thresholds or MatchThresholds()

    def match(self, transcript: str, claimed_name: str) -> MatchResult:
        """
        Determine whether the claimed name appears in the transcript.

        The script class is derived once from the claimed name and both
        strings are normalized under it. Strategies short-circuit on the
        first success:
        1. Direct containment
        2. Segmented exact match (CJK names only)
        3. Fuzzy window scan
        4. Segmented fuzzy match

        Args:
            transcript: Raw OCR text, possibly concatenated from several passes
            claimed_name: Name the player claims to have

        Returns:
            MatchResult with match status and details
        """
        transcript = transcript or ""
        script = detect_script_class(claimed_name or "")
        name = normalize(claimed_name or "", script)
        if not name:
            logger.debug("Claimed name %r normalizes to nothing; no match", claimed_name)
            return MatchResult(matches=False, details="Empty claimed name")

        text = normalize(transcript, script)
        logger.debug(
            "Matching %r (%s) against %d normalized chars",
            name,
            script.value,
            len(text),
        )

        result = match_direct(text, name)
        if result.matches:
            return self._found(result)

        if script is ScriptClass.CJK:
            result = match_segments(transcript, name, script)
            if result.matches:
                return self._found(result)

        result = match_fuzzy_window(text, name, self.thresholds.window_for(script))
        if result.matches:
            return self._found(result)

        result = match_fuzzy_words(text, name, self.thresholds.word_for(script))
        if result.matches:
            return self._found(result)

        logger.debug("No strategy found %r in transcript", name)
        return MatchResult(matches=False, details="No matching strategy succeeded")

    @staticmethod
    def _found(result: MatchResult) -> MatchResult:
        logger.debug("Matched via %s: %s", result.strategy, result.details)
        return result


def is_name_present(
    transcript: str,
    claimed_name: str,
    thresholds: Optional[MatchThresholds] = None,
) -> bool:
    """Return True when the claimed name is found in the transcript."""
    return NameMatcher(thresholds).match(transcript, claimed_name).matches

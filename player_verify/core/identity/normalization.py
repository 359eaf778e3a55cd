"""
Text normalization for OCR identity matching.

Two canonical forms are supported:
- Latin: lowercase, confusable glyphs folded (1/l/| -> i, 0 -> o, ...)
- CJK: case preserved, full-width digits and letters folded to half-width

The mode is always chosen from the claimed name, never from the transcript,
so both sides of a comparison go through the same rules.

All functions are pure and have no I/O dependencies.
"""

from __future__ import annotations

import re

from .models import ScriptClass


# Han ideographs, Hiragana, Katakana, Hangul syllables
CJK_RANGES = "\u4e00-\u9fff\u3040-\u309f\u30a0-\u30ff\uac00-\ud7af"

_CJK_CHAR = re.compile(f"[{CJK_RANGES}]")
_WHITESPACE = re.compile(r"\s+")

# OCR confusable glyph classes, applied in order after lowercasing
LATIN_CONFUSABLES = [
    (re.compile(r"[|l1]"), "i"),
    (re.compile(r"[0o]"), "o"),
    (re.compile(r"[5s]"), "s"),
    (re.compile(r"[8b]"), "b"),
    (re.compile(r"[6g]"), "g"),
]

_LATIN_DASHES = re.compile("[-_—–]")
_CJK_DASHES = re.compile("[－＿—–_-]")

# Anything that is not a word character or a CJK code point is noise
_PUNCTUATION = re.compile(f"[^\\w{CJK_RANGES}]")

_FULLWIDTH_ALNUM = re.compile("[０-９Ａ-Ｚａ-ｚ]")
FULLWIDTH_OFFSET = 0xFEE0

SEGMENT_DELIMITERS = re.compile(
    r"[\s\-_.,;:|()\[\]{}"
    "「」『』【】〈〉《》〔〕（）［］｛｝、。，；：！？～…—–"
    "]+"
)
WORD_DELIMITERS = re.compile(r"[\s\-_.,;:|]+")


def detect_script_class(name: str) -> ScriptClass:
    """
    Classify a claimed name as Latin or CJK.

    A single Han, Kana or Hangul code point is enough to make the whole name
    CJK.

    Examples:
        "Aeris" → ScriptClass.LATIN
        "張三" → ScriptClass.CJK
        "Player_張" → ScriptClass.CJK
    """
    if name and _CJK_CHAR.search(name):
        return ScriptClass.CJK
    return ScriptClass.LATIN


def normalize_latin(value: str) -> str:
    """
    Canonicalize text for comparison against a Latin-script name.

    Process:
    1. Lowercase
    2. Remove all whitespace
    3. Fold OCR confusables ({|, l, 1} → i, 0 → o, 5 → s, 8 → b, 6 → g)
    4. Unify hyphen, dash and underscore variants to "_"
    5. Strip everything except word characters and CJK code points

    Examples:
        "Aer1s" → "aeris"
        "Player-One" → "piayer_one"
        "B0b 5mith!" → "bobsmith"
    """
    if not value:
        return ""
    cleaned = _WHITESPACE.sub("", value.lower())
    for pattern, replacement in LATIN_CONFUSABLES:
        cleaned = pattern.sub(replacement, cleaned)
    cleaned = _LATIN_DASHES.sub("_", cleaned)
    return _PUNCTUATION.sub("", cleaned)


def _to_halfwidth(match: re.Match[str]) -> str:
    return chr(ord(match.group(0)) - FULLWIDTH_OFFSET)


def normalize_cjk(value: str) -> str:
    """
    Canonicalize text for comparison against a CJK name.

    Case is preserved and no confusable folding happens; logographic text has
    no equivalent of the Latin 1/l/i confusion.

    Examples:
        "張 三" → "張三"
        "Ｐｌａｙｅｒ１" → "Player1"
        "山田－太郎" → "山田_太郎"
    """
    if not value:
        return ""
    cleaned = _WHITESPACE.sub("", value)
    cleaned = _FULLWIDTH_ALNUM.sub(_to_halfwidth, cleaned)
    cleaned = _CJK_DASHES.sub("_", cleaned)
    return _PUNCTUATION.sub("", cleaned)


def normalize(value: str, script: ScriptClass) -> str:
    """Normalize text under the rules of the given script class."""
    if script is ScriptClass.CJK:
        return normalize_cjk(value)
    return normalize_latin(value)


def split_segments(raw: str) -> list[str]:
    """
    Split a raw transcript on Latin and full-width punctuation and spaces.

    Segments are returned unnormalized; empty pieces are dropped.
    """
    if not raw:
        return []
    return [segment for segment in SEGMENT_DELIMITERS.split(raw) if segment]


def split_words(normalized: str) -> list[str]:
    """Split already-normalized text into non-empty words."""
    if not normalized:
        return []
    return [word for word in WORD_DELIMITERS.split(normalized) if word]

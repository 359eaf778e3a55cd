from __future__ import annotations

from pathlib import Path
from typing import Optional


def read_text(text: Optional[str], text_file: Optional[Path]) -> str:
    """Return inline text, or the contents of a transcript file, or an empty string."""
    if text is not None:
        return text
    if text_file is not None:
        return text_file.read_text(encoding="utf-8", errors="replace")
    return ""

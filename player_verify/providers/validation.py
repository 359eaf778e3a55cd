from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from typing import List, Optional

from ..config import OcrSettings

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class OcrRuntimeStatus:
    tesseract_cmd: Optional[str] = None
    version: Optional[str] = None
    languages: List[str] = field(default_factory=list)
    missing_languages: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def inspect_ocr_runtime(settings: OcrSettings) -> OcrRuntimeStatus:
    status = OcrRuntimeStatus()
    try:
        import pytesseract
    except ImportError as exc:
        status.errors.append(f"pytesseract unavailable: {exc}")
        return status

    if settings.tesseract_cmd:
        cmd = str(settings.tesseract_cmd)
        pytesseract.pytesseract.tesseract_cmd = cmd
    else:
        cmd = shutil.which("tesseract")
    status.tesseract_cmd = cmd
    if not cmd:
        status.errors.append("tesseract binary not found in PATH")
        return status

    try:
        status.version = str(pytesseract.get_tesseract_version())
        status.languages = sorted(pytesseract.get_languages(config=""))
    except (pytesseract.TesseractNotFoundError, pytesseract.TesseractError, OSError) as exc:
        status.errors.append(f"unable to query tesseract: {exc}")
        return status

    if settings.primary_language not in status.languages:
        status.errors.append(f"{settings.primary_language} language pack missing")
    status.missing_languages = [
        lang for lang in settings.fallback_languages if lang not in status.languages
    ]
    if status.missing_languages:
        logger.debug("Optional OCR language packs missing: %s", status.missing_languages)
    return status

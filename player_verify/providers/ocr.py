from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Protocol

from ..config import OcrSettings

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")


class OcrError(RuntimeError):
    """A single OCR pass could not produce text."""


class OcrEngine(Protocol):
    """Anything that turns an image into raw text for one language hint."""

    def recognize(self, image_path: Path, language: str) -> str:
        ...


class TesseractOcrEngine:
    def __init__(self, settings: OcrSettings) -> None:
        self.settings = settings

    def _config(self) -> str:
        parts = [f"--psm {self.settings.page_segmentation_mode}"]
        if self.settings.preserve_interword_spaces:
            parts.append("-c preserve_interword_spaces=1")
        return " ".join(parts)

    def recognize(self, image_path: Path, language: str) -> str:
        import pytesseract
        from PIL import Image, UnidentifiedImageError

        if self.settings.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = str(self.settings.tesseract_cmd)
        try:
            with Image.open(image_path) as image:
                text = pytesseract.image_to_string(
                    image,
                    lang=language,
                    config=self._config(),
                    timeout=self.settings.timeout_seconds,
                )
        except pytesseract.TesseractNotFoundError as exc:
            raise OcrError("tesseract is not installed or not in PATH") from exc
        except (pytesseract.TesseractError, RuntimeError) as exc:
            raise OcrError(f"tesseract {language} pass failed: {exc}") from exc
        except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as exc:
            raise OcrError(f"unable to read image {image_path}: {exc}") from exc
        except ValueError as exc:
            raise OcrError(f"tesseract {language} pass rejected the image: {exc}") from exc
        logger.debug("OCR %s pass on %s: %d chars", language, image_path, len(text))
        return text


def clean_transcript(text: str) -> str:
    """Collapse whitespace runs to a single space and trim the ends."""
    return _WHITESPACE.sub(" ", text).strip()


def collect_transcript(
    engine: OcrEngine,
    image_path: Path,
    primary: str = "eng",
    fallbacks: Iterable[str] = ("chi_tra", "chi_sim"),
) -> str:
    """
    Run every language pass over the image and join the results.

    The primary pass must succeed; a failing fallback pass is logged and
    skipped so that a missing language pack does not sink the whole
    screenshot.
    """
    primary_text = engine.recognize(image_path, primary)
    extra: list[str] = []
    for language in fallbacks:
        try:
            extra.append(engine.recognize(image_path, language))
        except OcrError as exc:
            logger.warning("OCR %s pass failed for %s, skipping: %s", language, image_path, exc)
    combined = " ".join([primary_text, *extra])
    return clean_transcript(combined)

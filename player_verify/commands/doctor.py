from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import Settings
from ..providers.validation import inspect_ocr_runtime
from .output import error, ok as ok_line, warning


@dataclass(slots=True)
class DoctorReport:
    ok: bool
    checks: list[str]


def run(settings: Settings, *, config_path: Optional[Path] = None) -> DoctorReport:
    checks: list[str] = []
    ok = True

    if config_path:
        checks.append(ok_line("Config", str(config_path)))
    else:
        checks.append(warning("Config", "no config.yaml found, using defaults"))

    thresholds = settings.matching.thresholds()
    checks.append(
        ok_line(
            "Matching thresholds",
            f"latin {thresholds.latin_window}/{thresholds.latin_word}, "
            f"cjk {thresholds.cjk_window}/{thresholds.cjk_word}",
        )
    )
    checks.append(ok_line("Kill threshold", str(settings.verification.kill_threshold)))

    status = inspect_ocr_runtime(settings.ocr)
    if status.errors:
        ok = False
        checks.append(error("Tesseract", "; ".join(status.errors)))
    else:
        checks.append(ok_line("Tesseract", f"{status.tesseract_cmd} ({status.version})"))
        if status.missing_languages:
            checks.append(
                warning("OCR languages", f"missing: {', '.join(status.missing_languages)}")
            )
        else:
            checks.append(ok_line("OCR languages", ", ".join(settings.ocr.languages())))

    if settings.identity.client_id:
        checks.append(ok_line("Identity provider", settings.identity.authorize_url))
    else:
        checks.append(warning("Identity provider", "client_id not configured"))

    return DoctorReport(ok=ok, checks=checks)

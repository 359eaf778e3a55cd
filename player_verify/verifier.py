from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .config import Settings
from .core.identity import NameMatcher
from .core.stats import extract_max_statistic, meets_threshold
from .models import ScreenshotReport, VerificationResult
from .providers.ocr import OcrEngine, OcrError, TesseractOcrEngine, collect_transcript
from .providers.roblox import IdentityClaim, usernames_match

logger = logging.getLogger(__name__)


class ScreenshotVerifier:
    """
    Runs the verification steps for one claimed player.

    Step 1 checks the claimed name, step 2 reads the screenshot and looks for
    the name and the kill count, step 3 compares the name with the identity
    the provider confirmed.
    """

    def __init__(
        self,
        settings: Settings,
        engine: OcrEngine,
        matcher: Optional[NameMatcher] = None,
    ) -> None:
        self.settings = settings
        self.engine = engine
        self.matcher = matcher or NameMatcher(settings.matching.thresholds())

    @classmethod
    def create(cls, settings: Settings) -> "ScreenshotVerifier":
        return cls(settings, TesseractOcrEngine(settings.ocr))

    @staticmethod
    def check_name(claimed_name: Optional[str]) -> bool:
        return bool(claimed_name and claimed_name.strip())

    def analyze_transcript(self, transcript: str, claimed_name: str) -> ScreenshotReport:
        result = self.matcher.match(transcript, claimed_name)
        kill_count = extract_max_statistic(transcript)
        logger.debug(
            "Transcript analysis: kill_count=%d player_found=%s strategy=%s",
            kill_count,
            result.matches,
            result.strategy,
        )
        return ScreenshotReport(kill_count=kill_count, player_found=result.matches)

    def process_screenshot(self, image_path: Path, claimed_name: str) -> ScreenshotReport:
        ocr = self.settings.ocr
        try:
            transcript = collect_transcript(
                self.engine,
                image_path,
                primary=ocr.primary_language,
                fallbacks=ocr.fallback_languages,
            )
        except OcrError:
            logger.exception("OCR failed for %s; treating screenshot as unverified", image_path)
            return ScreenshotReport()
        return self.analyze_transcript(transcript, claimed_name)

    def screenshot_passes(self, report: ScreenshotReport) -> bool:
        return report.player_found and meets_threshold(
            report.kill_count, self.settings.verification.kill_threshold
        )

    def verify(
        self,
        claimed_name: str,
        image_path: Path,
        identity: Optional[IdentityClaim] = None,
    ) -> VerificationResult:
        step1 = self.check_name(claimed_name)
        report = self.process_screenshot(image_path, claimed_name) if step1 else ScreenshotReport()
        step2 = self.screenshot_passes(report)
        username_match = usernames_match(claimed_name, identity.username if identity else None)
        result = VerificationResult(
            step1_valid=step1,
            step2_valid=step2,
            step2_kill_count=report.kill_count,
            step2_player_found=report.player_found,
            step3_valid=username_match,
            step3_username_match=username_match,
            step3_user_id=identity.user_id if identity else None,
        )
        log = logger.info if result.overall_valid else logger.warning
        log(
            "Verification for %r: name=%s screenshot=%s (kills=%d found=%s) identity=%s",
            claimed_name,
            step1,
            step2,
            report.kill_count,
            report.player_found,
            username_match,
        )
        return result

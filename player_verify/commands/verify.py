from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..models import VerificationResult
from ..providers.roblox import IdentityClaim
from ..verifier import ScreenshotVerifier
from .output import emit_json, verdict


def run(
    verifier: ScreenshotVerifier,
    name: str,
    image: Path,
    *,
    identity: Optional[IdentityClaim] = None,
    json_output: bool = False,
) -> VerificationResult:
    result = verifier.verify(name, image, identity)
    if json_output:
        emit_json(result.to_record())
        return result
    threshold = verifier.settings.verification.kill_threshold
    print(verdict("Step 1 player name", result.step1_valid))
    print(
        verdict(
            "Step 2 screenshot",
            result.step2_valid,
            f"kills {result.step2_kill_count}/{threshold}, "
            f"name {'found' if result.step2_player_found else 'not found'}",
        )
    )
    print(
        verdict(
            "Step 3 identity",
            result.step3_valid,
            f"user {result.step3_user_id}" if result.step3_user_id else "no provider identity",
        )
    )
    print(verdict("Overall", result.overall_valid))
    return result

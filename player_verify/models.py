from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Optional


@dataclass(frozen=True, slots=True)
class ScreenshotReport:
    kill_count: int = 0
    player_found: bool = False


@dataclass(frozen=True, slots=True)
class VerificationResult:
    step1_valid: bool
    step2_valid: bool
    step2_kill_count: int
    step2_player_found: bool
    step3_valid: bool
    step3_username_match: bool
    step3_user_id: Optional[str] = None

    @property
    def overall_valid(self) -> bool:
        return self.step1_valid and self.step2_valid and self.step3_valid

    def to_record(self) -> Dict[str, object]:
        payload: Dict[str, object] = asdict(self)
        payload["overall_valid"] = self.overall_valid
        return payload

from __future__ import annotations

from dataclasses import dataclass

from ..config import Settings
from ..core.identity import NameMatcher, detect_script_class
from ..core.identity.models import MatchResult, ScriptClass
from .output import emit_json, verdict


@dataclass(slots=True)
class MatchReport:
    name: str
    script: ScriptClass
    result: MatchResult

    def to_record(self) -> dict[str, object]:
        return {
            "name": self.name,
            "script": self.script.value,
            "matches": self.result.matches,
            "strategy": self.result.strategy,
            "confidence": round(self.result.confidence, 4) if self.result.matches else 0.0,
            "details": self.result.details,
        }


def run(settings: Settings, name: str, transcript: str, *, json_output: bool = False) -> MatchReport:
    matcher = NameMatcher(settings.matching.thresholds())
    report = MatchReport(
        name=name,
        script=detect_script_class(name),
        result=matcher.match(transcript, name),
    )
    if json_output:
        emit_json(report.to_record())
    else:
        detail = f"{report.script.value}"
        if report.result.matches:
            detail += f", {report.result.strategy}, {report.result.confidence:.2f}"
        print(verdict(f"Name '{name}'", report.result.matches, detail))
    return report

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .core.identity.models import MatchThresholds


class MatchingSettings(BaseModel):
    latin_window_threshold: float = Field(default=0.75, ge=0.0, le=1.0)
    cjk_window_threshold: float = Field(default=0.85, ge=0.0, le=1.0)
    latin_word_threshold: float = Field(default=0.8, ge=0.0, le=1.0)
    cjk_word_threshold: float = Field(default=0.9, ge=0.0, le=1.0)

    def thresholds(self) -> MatchThresholds:
        return MatchThresholds(
            latin_window=self.latin_window_threshold,
            cjk_window=self.cjk_window_threshold,
            latin_word=self.latin_word_threshold,
            cjk_word=self.cjk_word_threshold,
        )


class OcrSettings(BaseModel):
    primary_language: str = "eng"
    fallback_languages: List[str] = Field(default_factory=lambda: ["chi_tra", "chi_sim"])
    page_segmentation_mode: int = 6
    preserve_interword_spaces: bool = True
    tesseract_cmd: Optional[Path] = None
    timeout_seconds: int = 60

    @field_validator("tesseract_cmd", mode="before")
    @classmethod
    def _expand_cmd(cls, value: Optional[str | Path]) -> Optional[Path]:
        if value is None:
            return None
        return Path(value).expanduser()

    def languages(self) -> List[str]:
        return [self.primary_language, *self.fallback_languages]


class VerificationSettings(BaseModel):
    kill_threshold: int = Field(default=3000, ge=0)


class IdentitySettings(BaseModel):
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    redirect_uri: str = "http://localhost:8080/auth/callback"
    scope: str = "openid profile"
    authorize_url: str = "https://apis.roblox.com/oauth/v1/authorize"
    token_url: str = "https://apis.roblox.com/oauth/v1/token"
    userinfo_url: str = "https://apis.roblox.com/oauth/v1/userinfo"
    useragent: str = "player-verify/0.1"
    timeout_seconds: int = 10


class Settings(BaseModel):
    matching: MatchingSettings = MatchingSettings()
    ocr: OcrSettings = OcrSettings()
    verification: VerificationSettings = VerificationSettings()
    identity: IdentitySettings = IdentitySettings()

    @classmethod
    def load(cls, path: Path) -> "Settings":
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
        return cls.model_validate(raw or {})


def find_config(explicit_path: Optional[Path]) -> Path:
    if explicit_path:
        return explicit_path
    cwd = Path.cwd()
    for candidate in (cwd / "config.yaml", cwd / "config.yml"):
        if candidate.exists():
            return candidate
    raise FileNotFoundError("Could not find config.yaml - pass --config explicitly.")


def load_settings(explicit_path: Optional[Path] = None) -> tuple[Settings, Optional[Path]]:
    """
    Load settings from disk, falling back to defaults when no config exists.

    Returns the settings together with the path they were read from, or None
    when the defaults were used.
    """
    try:
        path = find_config(explicit_path)
    except FileNotFoundError:
        return Settings(), None
    return Settings.load(path), path

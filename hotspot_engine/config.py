"""
Scoring constants and runtime settings for the hotspot engine.

Settings are read once from the environment; tests and callers can swap
them with ``set_settings``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

# Heuristic scoring weights
FOLD_TOP_THIRD_BONUS = 0.5
FOLD_VISIBLE_BONUS = 0.2
CENTER_BIAS_BONUS = 0.2
CENTER_BIAS_RADIUS_PX = 250
LARGE_AREA_PX2 = 50000
LARGE_AREA_BONUS = 0.4
HEADLINE_BONUS = 0.6
CTA_BONUS = 0.5
LOGO_BONUS = 0.4
HERO_BONUS = 0.45
HERO_MIN_WIDTH = 300
HERO_MIN_HEIGHT = 200
HERO_MAX_Y_RATIO = 0.75
BOLD_BONUS = 0.15
BOLD_MIN_WEIGHT = 700
LARGE_FONT_PX = 32
LARGE_FONT_BONUS = 0.25
MIN_CONFIDENCE = 0.3

CTA_CLASS_MARKERS = ('btn', 'cta')
LOGO_CLASS_MARKERS = ('logo',)

# Shared by both strategies
MAX_HOTSPOTS = 8

# Inference-backed scorer
INFERENCE_FOLD_RATIO = 1.5
TEXT_EXCERPT_CHARS = 80
SUPPRESSION_IOU_THRESHOLD = 0.6

PLACEHOLDER_API_KEYS = frozenset({'your-openai-api-key-here'})

DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TEMPERATURE = 0.2
DEFAULT_MAX_TOKENS = 400
DEFAULT_TIMEOUT = 15.0


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default


@dataclass(frozen=True)
class EngineSettings:
    """Inference credential and request knobs."""
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    max_tokens: int = DEFAULT_MAX_TOKENS
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"

    @property
    def has_credential(self) -> bool:
        """True when the inference-backed scorer should be attempted."""
        if not self.api_key:
            return False
        key = self.api_key.strip()
        return bool(key) and key not in PLACEHOLDER_API_KEYS

    @classmethod
    def from_env(cls) -> "EngineSettings":
        return cls(
            api_key=os.environ.get("OPENAI_API_KEY"),
            base_url=os.environ.get("OPENAI_BASE_URL") or None,
            model=os.environ.get("HOTSPOT_MODEL", DEFAULT_MODEL),
            temperature=_env_float("HOTSPOT_TEMPERATURE", DEFAULT_TEMPERATURE),
            max_tokens=_env_int("HOTSPOT_MAX_TOKENS", DEFAULT_MAX_TOKENS),
            timeout=_env_float("HOTSPOT_INFERENCE_TIMEOUT", DEFAULT_TIMEOUT),
            log_level=os.environ.get("HOTSPOT_LOG_LEVEL", "INFO").upper(),
        )


_settings: Optional[EngineSettings] = None


def get_settings() -> EngineSettings:
    """Get the process-wide settings, reading the environment on first use."""
    global _settings
    if _settings is None:
        _settings = EngineSettings.from_env()
    return _settings


def set_settings(settings: Optional[EngineSettings]) -> None:
    """Replace the process-wide settings. ``None`` forces a re-read."""
    global _settings
    _settings = settings
